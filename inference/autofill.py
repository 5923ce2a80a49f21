"""
Auto-fill advisors.

Each advisor inspects the premises a user has cited and proposes conclusion
strings for its rule. An advisor returns None when the premises do not fit
the rule's pattern, and otherwise a lazy generator: the pattern test runs
eagerly, rendering only happens as the caller consumes suggestions.
"""

from __future__ import annotations

import itertools
from typing import Iterable, Iterator, List, Optional, Sequence

from logic.expr import Expr, Operator, conj, disj, iff, implies, neg

from .claim import Premise


def _plain_expressions(premises: Sequence[Premise], count: int) -> Optional[List[Expr]]:
    if len(premises) != count or any(p.is_subproof for p in premises):
        return None
    return [p.expression for p in premises]


def _rendered(exprs: Iterable[Expr]) -> Iterator[str]:
    seen = set()
    for expr in exprs:
        text = expr.render()
        if text not in seen:
            seen.add(text)
            yield text


def conjunction_suggestions(premises: Sequence[Premise]) -> Optional[Iterator[str]]:
    if len(premises) < 2 or any(p.is_subproof for p in premises):
        return None
    exprs = tuple(p.expression for p in premises)
    return _rendered([conj(*exprs)])


def simplification_suggestions(premises: Sequence[Premise]) -> Optional[Iterator[str]]:
    exprs = _plain_expressions(premises, 1)
    if exprs is None or exprs[0].op is not Operator.AND:
        return None
    return _rendered(exprs[0].flatten().children)


def hypothetical_syllogism_suggestions(premises: Sequence[Premise]) -> Optional[Iterator[str]]:
    exprs = _plain_expressions(premises, 2)
    if exprs is None or any(e.op is not Operator.CONDITIONAL for e in exprs):
        return None
    chains = [
        (first, second)
        for first, second in itertools.permutations(exprs)
        if first.consequent == second.antecedent
    ]
    if not chains:
        return None
    return _rendered(implies(first.antecedent, second.consequent) for first, second in chains)


def modus_ponens_suggestions(premises: Sequence[Premise]) -> Optional[Iterator[str]]:
    exprs = _plain_expressions(premises, 2)
    if exprs is None:
        return None
    matches = [
        implication
        for implication, other in itertools.permutations(exprs)
        if implication.op is Operator.CONDITIONAL and implication.antecedent == other
    ]
    if not matches:
        return None
    return _rendered(m.consequent for m in matches)


def modus_tollens_suggestions(premises: Sequence[Premise]) -> Optional[Iterator[str]]:
    exprs = _plain_expressions(premises, 2)
    if exprs is None:
        return None
    matches = [
        implication
        for implication, other in itertools.permutations(exprs)
        if implication.op is Operator.CONDITIONAL
        and neg(implication.consequent).equals_ignoring_double_negation(other)
    ]
    if not matches:
        return None
    return _rendered(neg(m.antecedent) for m in matches)


def disjunctive_syllogism_suggestions(premises: Sequence[Premise]) -> Optional[Iterator[str]]:
    exprs = _plain_expressions(premises, 2)
    if exprs is None:
        return None
    remainders: List[Expr] = []
    for disjunction, negation in itertools.permutations(exprs):
        if disjunction.op is not Operator.OR:
            continue
        disjuncts = disjunction.flatten().children
        for index, disjunct in enumerate(disjuncts):
            if neg(disjunct).equals_ignoring_double_negation(negation):
                rest = disjuncts[:index] + disjuncts[index + 1:]
                remainders.append(rest[0] if len(rest) == 1 else disj(*rest))
    if not remainders:
        return None
    return _rendered(remainders)


def double_negation_suggestions(premises: Sequence[Premise]) -> Optional[Iterator[str]]:
    exprs = _plain_expressions(premises, 1)
    if exprs is None:
        return None
    premise = exprs[0]
    if premise.op is not Operator.NOT or premise.operand.op is not Operator.NOT:
        return None
    return _rendered([premise.operand.operand])


def reiteration_suggestions(premises: Sequence[Premise]) -> Optional[Iterator[str]]:
    exprs = _plain_expressions(premises, 1)
    if exprs is None:
        return None
    return _rendered(exprs)


def conditional_proof_suggestions(premises: Sequence[Premise]) -> Optional[Iterator[str]]:
    if len(premises) != 1 or not premises[0].is_subproof:
        return None
    subproof = premises[0]
    if len(subproof.assumptions) != 1:
        return None
    return _rendered([implies(subproof.assumptions[0], subproof.expression)])


def biconditional_introduction_suggestions(premises: Sequence[Premise]) -> Optional[Iterator[str]]:
    exprs = _plain_expressions(premises, 2)
    if exprs is None or any(e.op is not Operator.CONDITIONAL for e in exprs):
        return None
    forward, backward = exprs
    if forward.antecedent != backward.consequent or forward.consequent != backward.antecedent:
        return None
    return _rendered([
        iff(forward.antecedent, forward.consequent),
        iff(forward.consequent, forward.antecedent),
    ])


def biconditional_elimination_suggestions(premises: Sequence[Premise]) -> Optional[Iterator[str]]:
    exprs = _plain_expressions(premises, 2)
    if exprs is None:
        return None
    sides: List[Expr] = []
    for biconditional, other in itertools.permutations(exprs):
        if biconditional.op is not Operator.BICONDITIONAL:
            continue
        left, right = biconditional.children
        if other == left:
            sides.append(right)
        elif other == right:
            sides.append(left)
    if not sides:
        return None
    return _rendered(sides)


def disjunction_elimination_suggestions(premises: Sequence[Premise]) -> Optional[Iterator[str]]:
    if len(premises) < 3:
        return None
    disjunction, cases = premises[0], premises[1:]
    if disjunction.is_subproof or disjunction.expression.op is not Operator.OR:
        return None
    if any(not case.is_subproof for case in cases):
        return None
    conclusions = {case.expression for case in cases}
    if len(conclusions) != 1:
        return None
    return _rendered(conclusions)


__all__ = [
    "conjunction_suggestions",
    "simplification_suggestions",
    "hypothetical_syllogism_suggestions",
    "modus_ponens_suggestions",
    "modus_tollens_suggestions",
    "disjunctive_syllogism_suggestions",
    "double_negation_suggestions",
    "reiteration_suggestions",
    "conditional_proof_suggestions",
    "biconditional_introduction_suggestions",
    "biconditional_elimination_suggestions",
    "disjunction_elimination_suggestions",
]
