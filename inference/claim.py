"""
Premises and claims: the inputs to a single proof-step verification.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional, Tuple

from logic.expr import Expr, render_all


@dataclass(frozen=True, slots=True)
class Premise:
    """
    One input to a claim.

    Attributes:
        expression: The premise expression; for a subproof, its conclusion.
        assumptions: None for a plain premise, otherwise the ordered
            assumptions of the discharged subproof.
    """
    expression: Expr
    assumptions: Optional[Tuple[Expr, ...]] = None

    def __post_init__(self) -> None:
        if self.assumptions is not None:
            object.__setattr__(self, "assumptions", tuple(self.assumptions))

    @classmethod
    def plain(cls, expression: Expr) -> "Premise":
        return cls(expression)

    @classmethod
    def subproof(cls, assumptions: Iterable[Expr], conclusion: Expr) -> "Premise":
        return cls(conclusion, tuple(assumptions))

    @property
    def is_subproof(self) -> bool:
        return self.assumptions is not None

    def render(self) -> str:
        if not self.is_subproof:
            return self.expression.render()
        assumed = render_all(self.assumptions)
        return f"[{assumed} ⊢ {self.expression.render()}]"


@dataclass(frozen=True, slots=True)
class Claim:
    """A proof line asserted to follow from its premises by one rule."""
    conclusion: Expr
    premises: Tuple[Premise, ...]
    rule_id: object = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "premises", tuple(_as_premise(p) for p in self.premises))

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        rule = getattr(self.rule_id, "name", self.rule_id)
        return {
            "rule": rule,
            "conclusion": self.conclusion.render(),
            "premises": [p.render() for p in self.premises],
        }


def _as_premise(item: object) -> Premise:
    # Bare expressions are accepted as plain premises.
    if isinstance(item, Premise):
        return item
    if isinstance(item, Expr):
        return Premise.plain(item)
    raise TypeError(f"Expected Premise or Expr, got {type(item).__name__}")


__all__ = ["Premise", "Claim"]
