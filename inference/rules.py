"""
Concrete natural-deduction rules.

Each rule is a pure check function plus a Rule singleton carrying its
metadata. Check functions receive premises whose count and plain/subproof
mix have already been validated, and return None for a valid step or a
diagnostic naming the offending expression.

Adding a rule: write its check (and optional auto-fill advisor), build the
Rule singleton here, then register it in ``inference.registry``.
"""

from __future__ import annotations

from typing import Optional, Sequence

from logic.expr import Expr, Operator, disj, implies, neg

from . import autofill
from .base import (
    BICONDITIONAL_SHAPE,
    CONJUNCTION_SHAPE,
    DISJUNCTION_SHAPE,
    IMPLICATION_SHAPE,
    WRONG_ORDER,
    CheckOutcome,
    Rule,
    RuleType,
    any_order,
    conclusion_of_wrong_form,
    premise_missing,
)
from .claim import Claim, Premise

INFERENCE_ONLY = frozenset({RuleType.INFERENCE})
INTRODUCTION = frozenset({RuleType.INFERENCE, RuleType.INTRO})
ELIMINATION = frozenset({RuleType.INFERENCE, RuleType.ELIM})


# ---------------------------------------------------------------------------
# Conjunction (∧ Intro)
# ---------------------------------------------------------------------------

def _conjunction_premise_count(claim: Claim) -> int:
    # One premise per operand of the asserted conjunction.
    if claim.conclusion.op is Operator.AND:
        return len(claim.conclusion.children)
    return 2


def check_conjunction(conclusion: Expr, premises: Sequence[Premise]) -> Optional[str]:
    """
    A ∧ B from A and B.

    Matching is order-insensitive: every premise must be an operand of the
    conclusion and every operand must be supplied by some premise.
    """
    if conclusion.op is not Operator.AND:
        return conclusion_of_wrong_form(CONJUNCTION_SHAPE)
    operands = conclusion.children
    for premise in premises:
        if premise.expression not in operands:
            return (
                f"The premise {premise.expression.render()} is not a conjunct "
                f"of the conclusion {conclusion.render()}."
            )
    for operand in operands:
        if not any(p.expression == operand for p in premises):
            return premise_missing(operand.render(), approximate=False)
    return None


# ---------------------------------------------------------------------------
# Simplification (∧ Elim)
# ---------------------------------------------------------------------------

def _is_conjunct(conjuncts: Sequence[Expr], expr: Expr) -> bool:
    return any(c.equals_ignoring_double_negation(expr) for c in conjuncts)


def check_simplification(conclusion: Expr, premises: Sequence[Premise]) -> Optional[str]:
    """
    A from A ∧ B, tolerant of double negations.

    A conjunctive conclusion is accepted when each of its conjuncts occurs in
    the premise. A conclusion equal to the whole premise is also accepted.
    """
    premise = premises[0].expression
    if premise.op is not Operator.AND:
        return f"The premise {premise.render()} is not a conjunction."

    conjuncts = premise.flatten().children
    if conclusion.equals_ignoring_double_negation(premise) or _is_conjunct(conjuncts, conclusion):
        return None

    if conclusion.op is not Operator.AND:
        return (
            f"The conclusion {conclusion.render()} is not a conjunct "
            f"in the premise {premise.render()}."
        )
    for part in conclusion.flatten().children:
        if not _is_conjunct(conjuncts, part):
            return (
                "The conclusion is not a conjunct in the premise and contains "
                f'"{part.render()}" which is not present in the premise.'
            )
    return None


# ---------------------------------------------------------------------------
# Hypothetical Syllogism
# ---------------------------------------------------------------------------

_HS_INVALID = "Invalid application of Hypothetical Syllogism"


def check_hypothetical_syllogism(conclusion: Expr, premises: Sequence[Premise]) -> Optional[str]:
    """
    A → C from A → B and B → C, premises in either order.

    The as-given order is tried first; the premises are swapped only when
    that order does not chain and the swapped order does.
    """
    first, second = premises[0].expression, premises[1].expression
    if first.op is not Operator.CONDITIONAL or second.op is not Operator.CONDITIONAL:
        return "Both premises must be implications."
    if conclusion.op is not Operator.CONDITIONAL:
        return "The conclusion must be an implication."

    if first.consequent != second.antecedent and second.consequent == first.antecedent:
        first, second = second, first

    if first.consequent != second.antecedent:
        return (
            f"{_HS_INVALID}: the consequent of neither {first.render()} nor "
            f"{second.render()} is the antecedent of the other."
        )
    if conclusion.antecedent != first.antecedent:
        return (
            f"{_HS_INVALID}: the antecedent of the conclusion should be "
            f"{first.antecedent.render()}, not {conclusion.antecedent.render()}."
        )
    if conclusion.consequent != second.consequent:
        return (
            f"{_HS_INVALID}: the consequent of the conclusion should be "
            f"{second.consequent.render()}, not {conclusion.consequent.render()}."
        )
    return None


# ---------------------------------------------------------------------------
# Modus Ponens (→ Elim)
# ---------------------------------------------------------------------------

def check_modus_ponens(conclusion: Expr, premises: Sequence[Premise]) -> Optional[str]:
    """B from A → B and A, premises in either order."""

    def ponens(implication: Expr, other: Expr) -> CheckOutcome:
        if implication.op is not Operator.CONDITIONAL:
            return WRONG_ORDER
        if implication.antecedent != other:
            return (
                f"The premise {other.render()} does not match the antecedent "
                f"of {implication.render()}."
            )
        if implication.consequent != conclusion:
            return (
                f"The conclusion {conclusion.render()} does not match the consequent "
                f"of {implication.render()}."
            )
        return None

    exprs = [p.expression for p in premises]
    return any_order(exprs, ponens, premise_missing(IMPLICATION_SHAPE))


# ---------------------------------------------------------------------------
# Modus Tollens
# ---------------------------------------------------------------------------

def check_modus_tollens(conclusion: Expr, premises: Sequence[Premise]) -> Optional[str]:
    """¬A from A → B and ¬B, premises in either order, tolerant of double negations."""

    def tollens(implication: Expr, other: Expr) -> CheckOutcome:
        if implication.op is not Operator.CONDITIONAL:
            return WRONG_ORDER
        negated_consequent = neg(implication.consequent)
        if not negated_consequent.equals_ignoring_double_negation(other):
            return (
                f"The premise {other.render()} is not the negation of the consequent "
                f"of {implication.render()}."
            )
        negated_antecedent = neg(implication.antecedent)
        if not negated_antecedent.equals_ignoring_double_negation(conclusion):
            return (
                f"The conclusion {conclusion.render()} is not the negation of the "
                f"antecedent of {implication.render()}."
            )
        return None

    exprs = [p.expression for p in premises]
    return any_order(exprs, tollens, premise_missing(IMPLICATION_SHAPE))


# ---------------------------------------------------------------------------
# Addition (∨ Intro)
# ---------------------------------------------------------------------------

def check_addition(conclusion: Expr, premises: Sequence[Premise]) -> Optional[str]:
    """A ∨ B from A."""
    if conclusion.op is not Operator.OR:
        return conclusion_of_wrong_form(DISJUNCTION_SHAPE)
    premise = premises[0].expression
    if premise in conclusion.children or premise in conclusion.flatten().children:
        return None
    return (
        f"The premise {premise.render()} is not a disjunct "
        f"of the conclusion {conclusion.render()}."
    )


# ---------------------------------------------------------------------------
# Disjunctive Syllogism
# ---------------------------------------------------------------------------

def check_disjunctive_syllogism(conclusion: Expr, premises: Sequence[Premise]) -> Optional[str]:
    """B from A ∨ B and ¬A, premises in either order, tolerant of double negations."""

    def syllogism(disjunction: Expr, negation: Expr) -> CheckOutcome:
        if disjunction.op is not Operator.OR:
            return WRONG_ORDER
        disjuncts = disjunction.flatten().children
        remainders = []
        for index, disjunct in enumerate(disjuncts):
            if not neg(disjunct).equals_ignoring_double_negation(negation):
                continue
            rest = disjuncts[:index] + disjuncts[index + 1:]
            expected = rest[0] if len(rest) == 1 else disj(*rest)
            if expected.equals_ignoring_double_negation(conclusion.flatten()):
                return None
            remainders.append(expected)
        if not remainders:
            return (
                f"The premise {negation.render()} is not the negation of any disjunct "
                f"of {disjunction.render()}."
            )
        return (
            f"The conclusion {conclusion.render()} does not match the remaining "
            f"disjuncts {' or '.join(r.render() for r in remainders)}."
        )

    exprs = [p.expression for p in premises]
    return any_order(exprs, syllogism, premise_missing(DISJUNCTION_SHAPE))


# ---------------------------------------------------------------------------
# Double Negation (¬¬ Elim)
# ---------------------------------------------------------------------------

def check_double_negation(conclusion: Expr, premises: Sequence[Premise]) -> Optional[str]:
    """A from ¬¬A."""
    premise = premises[0].expression
    if premise.op is not Operator.NOT or premise.operand.op is not Operator.NOT:
        return f"The premise {premise.render()} is not a double negation."
    inner = premise.operand.operand
    if inner != conclusion:
        return (
            f"The conclusion should be {inner.render()}, "
            f"not {conclusion.render()}."
        )
    return None


# ---------------------------------------------------------------------------
# Reiteration
# ---------------------------------------------------------------------------

def check_reiteration(conclusion: Expr, premises: Sequence[Premise]) -> Optional[str]:
    premise = premises[0].expression
    if premise != conclusion:
        return f"{conclusion.render()} is not the same as the premise {premise.render()}."
    return None


# ---------------------------------------------------------------------------
# Conditional Proof (→ Intro)
# ---------------------------------------------------------------------------

def check_conditional_proof(conclusion: Expr, premises: Sequence[Premise]) -> Optional[str]:
    """A → B from a subproof assuming A and concluding B."""
    subproof = premises[0]
    if len(subproof.assumptions) != 1:
        return (
            "The subproof must have exactly one assumption "
            f"(found {len(subproof.assumptions)})."
        )
    if conclusion.op is not Operator.CONDITIONAL:
        return conclusion_of_wrong_form(IMPLICATION_SHAPE)
    assumption = subproof.assumptions[0]
    if conclusion.antecedent != assumption:
        return (
            f"The antecedent {conclusion.antecedent.render()} is not the "
            f"assumption of the subproof, {assumption.render()}."
        )
    if conclusion.consequent != subproof.expression:
        return (
            f"The consequent {conclusion.consequent.render()} is not the "
            f"conclusion of the subproof, {subproof.expression.render()}."
        )
    return None


# ---------------------------------------------------------------------------
# Biconditional (↔ Intro / ↔ Elim)
# ---------------------------------------------------------------------------

def check_biconditional_introduction(conclusion: Expr, premises: Sequence[Premise]) -> Optional[str]:
    """A ↔ B from A → B and B → A, premises in either order."""
    if conclusion.op is not Operator.BICONDITIONAL:
        return conclusion_of_wrong_form(BICONDITIONAL_SHAPE)
    left, right = conclusion.children
    wanted = (implies(left, right), implies(right, left))
    exprs = [p.expression for p in premises]
    for expr in exprs:
        if expr.op is not Operator.CONDITIONAL:
            return f"The premise {expr.render()} is not an implication."
        if expr not in wanted:
            return (
                f"The premise {expr.render()} is neither {wanted[0].render()} "
                f"nor {wanted[1].render()}."
            )
    for implication in wanted:
        if implication not in exprs:
            return premise_missing(implication.render(), approximate=False)
    return None


def check_biconditional_elimination(conclusion: Expr, premises: Sequence[Premise]) -> Optional[str]:
    """B from A ↔ B and A (or A from A ↔ B and B), premises in either order."""

    def eliminate(biconditional: Expr, other: Expr) -> CheckOutcome:
        if biconditional.op is not Operator.BICONDITIONAL:
            return WRONG_ORDER
        left, right = biconditional.children
        if other == left:
            expected = right
        elif other == right:
            expected = left
        else:
            return (
                f"The premise {other.render()} is not a side of "
                f"{biconditional.render()}."
            )
        if conclusion != expected:
            return f"The conclusion should be {expected.render()}, not {conclusion.render()}."
        return None

    exprs = [p.expression for p in premises]
    return any_order(exprs, eliminate, premise_missing(BICONDITIONAL_SHAPE))


# ---------------------------------------------------------------------------
# Disjunction Elimination (∨ Elim, proof by cases)
# ---------------------------------------------------------------------------

def _case_count(claim: Claim) -> int:
    # One case subproof per disjunct of the cited disjunction.
    if claim.premises:
        first = claim.premises[0]
        if not first.is_subproof and first.expression.op is Operator.OR:
            return len(first.expression.flatten().children)
    return 2


def _disjunction_elimination_premise_count(claim: Claim) -> int:
    return 1 + _case_count(claim)


def check_disjunction_elimination(conclusion: Expr, premises: Sequence[Premise]) -> Optional[str]:
    """
    C from A ∨ B, a subproof [A ⊢ C] and a subproof [B ⊢ C].

    The disjunction comes first; the case subproofs may follow in any order.
    """
    disjunction = premises[0].expression
    if disjunction.op is not Operator.OR:
        return premise_missing(DISJUNCTION_SHAPE)
    disjuncts = disjunction.flatten().children
    cases = premises[1:]
    for case in cases:
        if len(case.assumptions) != 1:
            return (
                f"The subproof {case.render()} must have exactly one assumption "
                f"(found {len(case.assumptions)})."
            )
        if case.assumptions[0] not in disjuncts:
            return (
                f"The assumption {case.assumptions[0].render()} is not a disjunct "
                f"of {disjunction.render()}."
            )
        if case.expression != conclusion:
            return (
                f"The subproof {case.render()} concludes {case.expression.render()}, "
                f"not {conclusion.render()}."
            )
    for disjunct in disjuncts:
        if not any(case.assumptions[0] == disjunct for case in cases):
            return f"The case {disjunct.render()} is not covered by any subproof."
    return None


# ---------------------------------------------------------------------------
# Rule singletons
# ---------------------------------------------------------------------------

CONJUNCTION = Rule(
    name="Conjunction (∧ Intro)",
    short_name="∧ Intro",
    rule_types=INTRODUCTION,
    check=check_conjunction,
    premises=_conjunction_premise_count,
    reorderable=True,
    auto_fill=autofill.conjunction_suggestions,
)

SIMPLIFICATION = Rule(
    name="Simplification (∧ Elim)",
    short_name="∧ Elim",
    rule_types=ELIMINATION,
    check=check_simplification,
    premises=1,
    auto_fill=autofill.simplification_suggestions,
)

HYPOTHETICAL_SYLLOGISM = Rule(
    name="Hypothetical Syllogism",
    short_name="HS",
    rule_types=INFERENCE_ONLY,
    check=check_hypothetical_syllogism,
    premises=2,
    reorderable=True,
    auto_fill=autofill.hypothetical_syllogism_suggestions,
)

MODUS_PONENS = Rule(
    name="Modus Ponens (→ Elim)",
    short_name="MP",
    rule_types=ELIMINATION,
    check=check_modus_ponens,
    premises=2,
    reorderable=True,
    auto_fill=autofill.modus_ponens_suggestions,
)

MODUS_TOLLENS = Rule(
    name="Modus Tollens",
    short_name="MT",
    rule_types=INFERENCE_ONLY,
    check=check_modus_tollens,
    premises=2,
    reorderable=True,
    auto_fill=autofill.modus_tollens_suggestions,
)

ADDITION = Rule(
    name="Addition (∨ Intro)",
    short_name="∨ Intro",
    rule_types=INTRODUCTION,
    check=check_addition,
    premises=1,
)

DISJUNCTIVE_SYLLOGISM = Rule(
    name="Disjunctive Syllogism",
    short_name="DS",
    rule_types=INFERENCE_ONLY,
    check=check_disjunctive_syllogism,
    premises=2,
    reorderable=True,
    auto_fill=autofill.disjunctive_syllogism_suggestions,
)

DOUBLE_NEGATION = Rule(
    name="Double Negation (¬¬ Elim)",
    short_name="¬¬ Elim",
    rule_types=ELIMINATION,
    check=check_double_negation,
    premises=1,
    auto_fill=autofill.double_negation_suggestions,
)

REITERATION = Rule(
    name="Reiteration",
    short_name="Reit",
    rule_types=INFERENCE_ONLY,
    check=check_reiteration,
    premises=1,
    auto_fill=autofill.reiteration_suggestions,
)

CONDITIONAL_PROOF = Rule(
    name="Conditional Proof (→ Intro)",
    short_name="→ Intro",
    rule_types=INTRODUCTION,
    check=check_conditional_proof,
    premises=1,
    subproofs=1,
    auto_fill=autofill.conditional_proof_suggestions,
)

BICONDITIONAL_INTRODUCTION = Rule(
    name="Biconditional Introduction (↔ Intro)",
    short_name="↔ Intro",
    rule_types=INTRODUCTION,
    check=check_biconditional_introduction,
    premises=2,
    reorderable=True,
    auto_fill=autofill.biconditional_introduction_suggestions,
)

BICONDITIONAL_ELIMINATION = Rule(
    name="Biconditional Elimination (↔ Elim)",
    short_name="↔ Elim",
    rule_types=ELIMINATION,
    check=check_biconditional_elimination,
    premises=2,
    reorderable=True,
    auto_fill=autofill.biconditional_elimination_suggestions,
)

DISJUNCTION_ELIMINATION = Rule(
    name="Disjunction Elimination (∨ Elim)",
    short_name="∨ Elim",
    rule_types=ELIMINATION,
    check=check_disjunction_elimination,
    premises=_disjunction_elimination_premise_count,
    subproofs=_case_count,
    auto_fill=autofill.disjunction_elimination_suggestions,
)


__all__ = [
    "CONJUNCTION",
    "SIMPLIFICATION",
    "HYPOTHETICAL_SYLLOGISM",
    "MODUS_PONENS",
    "MODUS_TOLLENS",
    "ADDITION",
    "DISJUNCTIVE_SYLLOGISM",
    "DOUBLE_NEGATION",
    "REITERATION",
    "CONDITIONAL_PROOF",
    "BICONDITIONAL_INTRODUCTION",
    "BICONDITIONAL_ELIMINATION",
    "DISJUNCTION_ELIMINATION",
]
