"""
Verifier configuration.

Settings live in a small YAML file (``config/verifier.yaml`` by default, or
the path named by ARIS_VERIFIER_CONFIG). Missing or unreadable files fall
back to the built-in defaults.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple

import yaml

from .registry import RuleId, resolve_rule_id

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "ARIS_VERIFIER_CONFIG"
DEFAULT_CONFIG_PATH = "config/verifier.yaml"


@dataclass(frozen=True, slots=True)
class VerifierConfig:
    """
    Tunables for the verification driver.

    Attributes:
        max_suggestions: Upper bound on auto-fill suggestions handed out per call
        log_rejections: Log premise-shape mismatches at INFO instead of DEBUG
        hidden_rules: Rules left out of the UI catalogue (still verifiable)
    """
    max_suggestions: int = 32
    log_rejections: bool = True
    hidden_rules: Tuple[RuleId, ...] = ()

    @classmethod
    def from_file(cls, path: Path | str) -> "VerifierConfig":
        data = yaml.safe_load(Path(path).read_text(encoding="utf-8")) or {}
        if not isinstance(data, dict):
            raise ValueError(f"verifier config must be a mapping, got {type(data).__name__}")
        autofill = _section(data, "autofill")
        logging_cfg = _section(data, "logging")
        catalogue = _section(data, "catalogue")

        max_suggestions = autofill.get("max_suggestions")
        max_suggestions = 32 if max_suggestions is None else int(max_suggestions)
        if max_suggestions < 0:
            raise ValueError(f"autofill.max_suggestions must be >= 0, got {max_suggestions}")

        log_rejections = logging_cfg.get("log_rejections")
        if log_rejections is None:
            log_rejections = True
        elif not isinstance(log_rejections, bool):
            raise ValueError(f"logging.log_rejections must be true or false, got {log_rejections!r}")

        return cls(
            max_suggestions=max_suggestions,
            log_rejections=log_rejections,
            hidden_rules=tuple(resolve_rule_id(r) for r in catalogue.get("hidden_rules") or []),
        )


def _section(data: dict, key: str) -> dict:
    # An empty section (``autofill:``) loads as None.
    section = data.get(key) or {}
    if not isinstance(section, dict):
        raise ValueError(f"{key} must be a mapping, got {type(section).__name__}")
    return section


def load_config_from_env() -> Optional[VerifierConfig]:
    """Load config when the configured YAML exists."""
    path = Path(os.getenv(CONFIG_ENV_VAR, DEFAULT_CONFIG_PATH))
    if not path.exists():
        return None
    try:
        return VerifierConfig.from_file(path)
    except (OSError, TypeError, ValueError, yaml.YAMLError) as exc:
        logger.warning("[CONFIG] Ignoring unreadable verifier config %s: %s", path, exc)
        return None


__all__ = [
    "CONFIG_ENV_VAR",
    "DEFAULT_CONFIG_PATH",
    "VerifierConfig",
    "load_config_from_env",
]
