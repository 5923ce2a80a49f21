"""Natural-deduction proof-step verification."""

from .base import Rule, RuleType, VerdictKind, VerificationResult
from .claim import Claim, Premise
from .config import VerifierConfig, load_config_from_env
from .registry import RuleEntry, RuleId, get_rule, rule_catalogue
from .verifier import RuleVerifier, suggest_auto_fill, verify_step

__all__: list[str] = [
    # Data model
    "Claim",
    "Premise",

    # Rule contract and registry
    "Rule",
    "RuleEntry",
    "RuleId",
    "RuleType",
    "get_rule",
    "rule_catalogue",

    # Verification
    "RuleVerifier",
    "VerdictKind",
    "VerificationResult",
    "suggest_auto_fill",
    "verify_step",

    # Configuration
    "VerifierConfig",
    "load_config_from_env",
]
