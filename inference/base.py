"""
Rule contract and shared verification plumbing.

Provides:
- RuleType tags for UI grouping
- VerdictKind / VerificationResult for structured verification outcomes
- Rule: metadata plus the pure check and auto-fill functions of one rule
- any_order: try a symmetric check against every ordering of the premises
- Diagnostic builders so every rule phrases failures the same way
"""

from __future__ import annotations

import itertools
from dataclasses import dataclass
from enum import Enum
from typing import Callable, FrozenSet, Iterator, Optional, Sequence, Union

from logic.errors import ContractViolation
from logic.expr import Expr

from .claim import Claim, Premise


class RuleType(Enum):
    """Classification used to group rules in rule-selection menus."""
    INFERENCE = "inference"
    INTRO = "intro"
    ELIM = "elim"


class VerdictKind(Enum):
    """Outcome of verifying one claim."""
    VALID = "valid"
    PREMISE_SHAPE_MISMATCH = "premise_shape_mismatch"
    RULE_VIOLATION = "rule_violation"


@dataclass(frozen=True, slots=True)
class VerificationResult:
    """
    Structured result of a proof-step verification.

    Attributes:
        kind: VALID, PREMISE_SHAPE_MISMATCH or RULE_VIOLATION
        rule: Display name of the rule that was checked
        diagnostic: Human-readable reason when the step is rejected
    """
    kind: VerdictKind
    rule: str
    diagnostic: Optional[str] = None

    @property
    def is_valid(self) -> bool:
        """True if the rule licenses the step."""
        return self.kind is VerdictKind.VALID

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "kind": self.kind.value,
            "rule": self.rule,
            "diagnostic": self.diagnostic,
            "is_valid": self.is_valid,
        }


# ---------------------------------------------------------------------------
# Diagnostics
# ---------------------------------------------------------------------------

IMPLICATION_SHAPE = "_ → _"
CONJUNCTION_SHAPE = "_ ∧ _"
DISJUNCTION_SHAPE = "_ ∨ _"
BICONDITIONAL_SHAPE = "_ ↔ _"


def premise_missing(shape: str, approximate: bool = True) -> str:
    prefix = "Something of the shape " if approximate else ""
    return f"{prefix}{shape} is required as a premise, but it does not exist."


def conclusion_of_wrong_form(shape: str) -> str:
    return f"The conclusion is of the wrong form, expected {shape}."


def one_of(diagnostics: Sequence[str]) -> str:
    lines = "\n".join(sorted(set(diagnostics)))
    return f"One of the following requirements was not met:\n{lines}"


# ---------------------------------------------------------------------------
# Premise ordering
# ---------------------------------------------------------------------------

class Ordering(Enum):
    """Returned by an order-sensitive check when the premises are swapped."""
    WRONG_ORDER = "wrong_order"


WRONG_ORDER = Ordering.WRONG_ORDER

CheckOutcome = Union[None, str, Ordering]


def any_order(
    exprs: Sequence[Expr],
    check: Callable[..., CheckOutcome],
    fallthrough: str,
) -> Optional[str]:
    """
    Run ``check`` against every permutation of ``exprs``.

    Any permutation returning None makes the step valid. Otherwise the
    distinct diagnostics are reported (one verbatim, several as a list); if
    every permutation was the wrong order, ``fallthrough`` is returned.
    """
    errors = []
    for ordering in itertools.permutations(exprs):
        outcome = check(*ordering)
        if outcome is WRONG_ORDER:
            continue
        if outcome is None:
            return None
        errors.append(outcome)
    if not errors:
        return fallthrough
    if len(set(errors)) == 1:
        return errors[0]
    return one_of(errors)


# ---------------------------------------------------------------------------
# Rule contract
# ---------------------------------------------------------------------------

CheckFn = Callable[[Expr, Sequence[Premise]], Optional[str]]
AutoFillFn = Callable[[Sequence[Premise]], Optional[Iterator[str]]]
PremiseCount = Union[int, Callable[[Claim], int]]


@dataclass(frozen=True, eq=False)
class Rule:
    """
    A stateless inference rule.

    ``check`` receives the conclusion and a premise tuple whose length and
    plain/subproof mix already satisfy the rule, and returns None when the
    step is valid or a diagnostic otherwise. ``premises`` and ``subproofs``
    are either fixed counts or functions of the claim being checked;
    subproof slots are always the trailing positions.
    """
    name: str
    short_name: str
    rule_types: FrozenSet[RuleType]
    check: CheckFn
    premises: PremiseCount
    subproofs: PremiseCount = 0
    reorderable: bool = False
    auto_fill: Optional[AutoFillFn] = None

    def required_premise_count(self, claim: Claim) -> int:
        return _resolve(self.premises, claim)

    def subproof_premise_count(self, claim: Claim) -> int:
        return _resolve(self.subproofs, claim)

    @property
    def allows_premise_reordering(self) -> bool:
        return self.reorderable

    @property
    def supports_auto_fill(self) -> bool:
        return self.auto_fill is not None

    def propose_auto_fill(self, premises: Sequence[Premise]) -> Optional[Iterator[str]]:
        """
        Suggest conclusions for the given premises.

        Returns None when the rule has no auto-fill or the premises do not
        fit its pattern, otherwise a lazy, single-use iterator of strings.
        """
        if self.auto_fill is None:
            return None
        return self.auto_fill(tuple(premises))

    def verify(self, conclusion: Expr, premises: Sequence[Premise]) -> Optional[str]:
        """Return None if the step is valid, else a diagnostic."""
        claim = Claim(conclusion, tuple(premises))
        expected = self.required_premise_count(claim)
        if len(claim.premises) != expected:
            raise ContractViolation(
                f"{self.name} requires {expected} premise(s), "
                f"called with {len(claim.premises)}"
            )
        mismatch = premise_shape_diagnostic(self, claim)
        if mismatch is not None:
            return mismatch
        return self.check(claim.conclusion, claim.premises)

    def __repr__(self) -> str:
        return f"Rule({self.name!r})"


def _resolve(count: PremiseCount, claim: Claim) -> int:
    if callable(count):
        return count(claim)
    return count


def premise_shape_diagnostic(rule: Rule, claim: Claim) -> Optional[str]:
    """Check premise count and the plain/subproof mix for ``rule``."""
    expected = rule.required_premise_count(claim)
    provided = len(claim.premises)
    if provided != expected:
        amount = "many" if provided > expected else "few"
        return (
            f"Too {amount} premises for {rule.name} "
            f"(expected: {expected}, provided: {provided})."
        )
    first_subproof = expected - rule.subproof_premise_count(claim)
    for index, premise in enumerate(claim.premises):
        wants_subproof = index >= first_subproof
        if premise.is_subproof and not wants_subproof:
            return f"Premise {index + 1} must be a plain expression, not a subproof."
        if wants_subproof and not premise.is_subproof:
            return f"Premise {index + 1} must be a subproof."
    return None


__all__ = [
    "RuleType",
    "VerdictKind",
    "VerificationResult",
    "Rule",
    "WRONG_ORDER",
    "CheckOutcome",
    "any_order",
    "premise_missing",
    "conclusion_of_wrong_form",
    "one_of",
    "premise_shape_diagnostic",
    "IMPLICATION_SHAPE",
    "CONJUNCTION_SHAPE",
    "DISJUNCTION_SHAPE",
    "BICONDITIONAL_SHAPE",
]
