"""
Proof-step verification driver.

The driver is shared by every rule:
    1. Resolve the rule (unknown identifiers raise UnknownRule).
    2. Check the premise count and plain/subproof mix; a mismatch is
       reported as PREMISE_SHAPE_MISMATCH without running the rule.
    3. Run the rule's check and surface its diagnostic verbatim.

Verification is pure: the same claim always yields the same result, and
nothing is mutated. ``verify_step`` and ``suggest_auto_fill`` are the two
entry points used by the surrounding UI and submission layers.
"""

from __future__ import annotations

import itertools
import logging
from typing import Iterator, Optional, Sequence

from logic.expr import Expr

from .base import VerdictKind, VerificationResult, premise_shape_diagnostic
from .claim import Claim, Premise
from .config import VerifierConfig, load_config_from_env
from .registry import RuleRef, get_rule, resolve_rule_id

logger = logging.getLogger(__name__)


class RuleVerifier:
    """Verifies claims against the rule registry."""

    def __init__(self, config: Optional[VerifierConfig] = None) -> None:
        self._config = config or VerifierConfig()

    @property
    def config(self) -> VerifierConfig:
        return self._config

    def verify(self, claim: Claim) -> VerificationResult:
        rule_id = resolve_rule_id(claim.rule_id)
        rule = rule_id.rule

        mismatch = premise_shape_diagnostic(rule, claim)
        if mismatch is not None:
            log = logger.info if self._config.log_rejections else logger.debug
            log("[VERIFY] %s premise shape mismatch: %s", rule_id.value, mismatch)
            return VerificationResult(VerdictKind.PREMISE_SHAPE_MISMATCH, rule.name, mismatch)

        diagnostic = rule.check(claim.conclusion, claim.premises)
        if diagnostic is None:
            logger.debug("[VERIFY] %s accepted %s", rule_id.value, claim.conclusion.render())
            return VerificationResult(VerdictKind.VALID, rule.name)

        logger.debug(
            "[VERIFY] %s rejected %s: %s",
            rule_id.value,
            claim.conclusion.render(),
            diagnostic,
        )
        return VerificationResult(VerdictKind.RULE_VIOLATION, rule.name, diagnostic)

    def verify_step(
        self,
        rule_id: RuleRef,
        conclusion: Expr,
        premises: Sequence[Premise],
    ) -> VerificationResult:
        return self.verify(Claim(conclusion, tuple(premises), resolve_rule_id(rule_id)))

    def suggest(self, rule_id: RuleRef, premises: Sequence[Premise]) -> Optional[Iterator[str]]:
        """
        Auto-fill suggestions for a rule.

        Returns None when the rule has no auto-fill or the premises do not
        fit its pattern; otherwise a lazy iterator capped at
        ``config.max_suggestions``.
        """
        rule = get_rule(rule_id)
        suggestions = rule.propose_auto_fill(premises)
        if suggestions is None:
            logger.debug("[AUTOFILL] %s: no suggestion for %d premise(s)", rule.short_name, len(premises))
            return None
        return itertools.islice(suggestions, self._config.max_suggestions)


_default_verifier: Optional[RuleVerifier] = None


def default_verifier() -> RuleVerifier:
    """Process-wide verifier built from environment configuration."""
    global _default_verifier
    if _default_verifier is None:
        _default_verifier = RuleVerifier(load_config_from_env())
    return _default_verifier


def verify_step(
    rule_id: RuleRef,
    conclusion: Expr,
    premises: Sequence[Premise],
) -> VerificationResult:
    """Check one proof step; the result is valid or carries a diagnostic."""
    return default_verifier().verify_step(rule_id, conclusion, premises)


def suggest_auto_fill(rule_id: RuleRef, premises: Sequence[Premise]) -> Optional[Iterator[str]]:
    """Suggested conclusions, or None when auto-fill does not apply."""
    return default_verifier().suggest(rule_id, premises)


__all__ = [
    "RuleVerifier",
    "default_verifier",
    "verify_step",
    "suggest_auto_fill",
]
