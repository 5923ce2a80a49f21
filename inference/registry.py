"""
Fixed, ordered catalogue of inference rules.

The order of RuleId members is the order rules are offered in rule-selection
menus. New rules are appended; identifiers are never reused or reordered.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, List, Optional, Tuple, Union, TYPE_CHECKING

from logic.errors import UnknownRule

from . import rules
from .base import Rule

if TYPE_CHECKING:  # pragma: no cover
    from .config import VerifierConfig


class RuleId(Enum):
    """Stable rule identifiers."""
    CONJUNCTION = "conjunction"
    SIMPLIFICATION = "simplification"
    HYPOTHETICAL_SYLLOGISM = "hypothetical_syllogism"
    MODUS_PONENS = "modus_ponens"
    MODUS_TOLLENS = "modus_tollens"
    ADDITION = "addition"
    DISJUNCTIVE_SYLLOGISM = "disjunctive_syllogism"
    DOUBLE_NEGATION = "double_negation"
    REITERATION = "reiteration"
    CONDITIONAL_PROOF = "conditional_proof"
    BICONDITIONAL_INTRODUCTION = "biconditional_introduction"
    BICONDITIONAL_ELIMINATION = "biconditional_elimination"
    DISJUNCTION_ELIMINATION = "disjunction_elimination"

    @property
    def rule(self) -> Rule:
        return _RULES[self]


_RULES: Dict[RuleId, Rule] = {
    RuleId.CONJUNCTION: rules.CONJUNCTION,
    RuleId.SIMPLIFICATION: rules.SIMPLIFICATION,
    RuleId.HYPOTHETICAL_SYLLOGISM: rules.HYPOTHETICAL_SYLLOGISM,
    RuleId.MODUS_PONENS: rules.MODUS_PONENS,
    RuleId.MODUS_TOLLENS: rules.MODUS_TOLLENS,
    RuleId.ADDITION: rules.ADDITION,
    RuleId.DISJUNCTIVE_SYLLOGISM: rules.DISJUNCTIVE_SYLLOGISM,
    RuleId.DOUBLE_NEGATION: rules.DOUBLE_NEGATION,
    RuleId.REITERATION: rules.REITERATION,
    RuleId.CONDITIONAL_PROOF: rules.CONDITIONAL_PROOF,
    RuleId.BICONDITIONAL_INTRODUCTION: rules.BICONDITIONAL_INTRODUCTION,
    RuleId.BICONDITIONAL_ELIMINATION: rules.BICONDITIONAL_ELIMINATION,
    RuleId.DISJUNCTION_ELIMINATION: rules.DISJUNCTION_ELIMINATION,
}

_BY_KEY: Dict[str, RuleId] = {rule_id.value: rule_id for rule_id in RuleId}

RuleRef = Union[RuleId, str]


def resolve_rule_id(identifier: RuleRef) -> RuleId:
    """
    Resolve a RuleId or its name string (case-insensitive).

    Raises:
        UnknownRule: If the identifier names no registered rule
    """
    if isinstance(identifier, RuleId):
        return identifier
    if isinstance(identifier, str):
        rule_id = _BY_KEY.get(identifier.strip().lower())
        if rule_id is not None:
            return rule_id
    raise UnknownRule(identifier)


def get_rule(identifier: RuleRef) -> Rule:
    """Look up a rule singleton; unknown identifiers raise UnknownRule."""
    return _RULES[resolve_rule_id(identifier)]


def all_rules() -> Tuple[Tuple[RuleId, Rule], ...]:
    return tuple(_RULES.items())


@dataclass(frozen=True, slots=True)
class RuleEntry:
    """One row of the rule-selection list shown by the UI."""
    identifier: RuleId
    name: str
    short_name: str
    types: Tuple[str, ...]
    premise_reordering: bool
    auto_fill: bool

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "identifier": self.identifier.value,
            "name": self.name,
            "short_name": self.short_name,
            "types": list(self.types),
            "premise_reordering": self.premise_reordering,
            "auto_fill": self.auto_fill,
        }


def rule_catalogue(config: Optional["VerifierConfig"] = None) -> List[RuleEntry]:
    """Ordered catalogue for rule menus, minus rules hidden by configuration."""
    hidden: Iterable[RuleId] = config.hidden_rules if config is not None else ()
    hidden = frozenset(hidden)
    entries: List[RuleEntry] = []
    for rule_id, rule in _RULES.items():
        if rule_id in hidden:
            continue
        entries.append(
            RuleEntry(
                identifier=rule_id,
                name=rule.name,
                short_name=rule.short_name,
                types=tuple(sorted(t.value for t in rule.rule_types)),
                premise_reordering=rule.allows_premise_reordering,
                auto_fill=rule.supports_auto_fill,
            )
        )
    return entries


__all__ = [
    "RuleId",
    "RuleEntry",
    "resolve_rule_id",
    "get_rule",
    "all_rules",
    "rule_catalogue",
]
