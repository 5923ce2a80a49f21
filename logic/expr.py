"""
Immutable expression trees for propositional natural deduction.

Every node is tagged by an Operator. Atoms carry a symbol name and no
children; compound nodes own an ordered tuple of child expressions whose
length is checked against the operator when the node is built.

Two notions of equality are provided and deliberately kept apart:
- strict structural equality (``==`` / ``equals``), order-sensitive everywhere
- equality ignoring double negations, where ``~~X`` matches ``X``

Usage:
    from logic.expr import atom, conj, implies, neg

    p, q = atom("P"), atom("Q")
    step = implies(conj(p, q), neg(neg(q)))
    step.render()                # '(P ∧ Q) → ¬¬Q'
    step.strip_double_negations()  # (P ∧ Q) → Q
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Optional, Tuple

from .errors import InvalidArity


# ---------------------------------------------------------------------------
# Operator taxonomy
# ---------------------------------------------------------------------------

class Operator(Enum):
    """Logical connectives with rendering, arity and display precedence."""

    # (symbol, ascii symbol, arity, variadic, precedence)
    ATOM = ("", "", 0, False, 6)
    NOT = ("¬", "~", 1, False, 5)
    AND = ("∧", "/\\", 2, True, 4)
    OR = ("∨", "\\/", 2, True, 3)
    CONDITIONAL = ("→", "->", 2, False, 2)
    BICONDITIONAL = ("↔", "<->", 2, False, 1)

    def __init__(
        self,
        symbol: str,
        ascii_symbol: str,
        arity: int,
        variadic: bool,
        precedence: int,
    ) -> None:
        self.symbol = symbol
        self.ascii_symbol = ascii_symbol
        self.arity = arity
        self.variadic = variadic
        self.precedence = precedence

    def accepts(self, count: int) -> bool:
        """True if a node of this operator may own ``count`` children."""
        if self.variadic:
            return count >= self.arity
        return count == self.arity


# ---------------------------------------------------------------------------
# Expression node
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Expr:
    """A node in a propositional formula tree."""

    op: Operator
    children: Tuple["Expr", ...] = ()
    name: Optional[str] = None

    def __post_init__(self) -> None:
        children = tuple(self.children)
        object.__setattr__(self, "children", children)

        if self.op is Operator.ATOM:
            if children:
                raise InvalidArity(f"Atom {self.name!r} cannot have operands")
            if not self.name:
                raise InvalidArity("Atom requires a non-empty symbol name")
            return

        if self.name is not None:
            raise InvalidArity(f"{self.op.name} node cannot carry a symbol name")
        if not self.op.accepts(len(children)):
            expected = f"at least {self.op.arity}" if self.op.variadic else str(self.op.arity)
            raise InvalidArity(
                f"{self.op.name} expects {expected} operand(s), got {len(children)}"
            )
        for child in children:
            if not isinstance(child, Expr):
                raise InvalidArity(
                    f"{self.op.name} operand must be an Expr, got {type(child).__name__}"
                )

    # -- accessors ---------------------------------------------------------

    @property
    def operator(self) -> Operator:
        return self.op

    @property
    def is_atom(self) -> bool:
        return self.op is Operator.ATOM

    @property
    def operand(self) -> "Expr":
        """Sole operand of a negation."""
        if self.op is not Operator.NOT:
            raise AttributeError(f"{self.op.name} node has no single operand")
        return self.children[0]

    @property
    def antecedent(self) -> "Expr":
        if self.op is not Operator.CONDITIONAL:
            raise AttributeError(f"{self.op.name} node has no antecedent")
        return self.children[0]

    @property
    def consequent(self) -> "Expr":
        if self.op is not Operator.CONDITIONAL:
            raise AttributeError(f"{self.op.name} node has no consequent")
        return self.children[1]

    # -- equality ----------------------------------------------------------

    def equals(self, other: "Expr") -> bool:
        """Strict structural equality."""
        return self == other

    def strip_double_negations(self) -> "Expr":
        """Return a new tree with every ``~~X`` collapsed to ``X``."""
        if self.is_atom:
            return self
        if self.op is Operator.NOT and self.children[0].op is Operator.NOT:
            return self.children[0].children[0].strip_double_negations()
        return Expr(self.op, tuple(c.strip_double_negations() for c in self.children))

    def equals_ignoring_double_negation(self, other: "Expr") -> bool:
        """Equality in which ``~~X`` and ``X`` are interchangeable."""
        return self.strip_double_negations() == other.strip_double_negations()

    def contains_subexpression(self, expr: "Expr") -> bool:
        """True if ``expr`` is this node or occurs anywhere beneath it."""
        if self == expr:
            return True
        return any(child.contains_subexpression(expr) for child in self.children)

    def contains_subexpression_ignoring_double_negation(self, expr: "Expr") -> bool:
        return self.strip_double_negations().contains_subexpression(
            expr.strip_double_negations()
        )

    # -- transformations ---------------------------------------------------

    def flatten(self) -> "Expr":
        """
        Merge nested conjunctions and disjunctions into n-ary nodes.

        ``(A ∧ B) ∧ C`` becomes ``A ∧ B ∧ C``. Operand order is preserved and
        nothing is deduplicated or sorted.
        """
        if self.is_atom:
            return self
        flat_children = [child.flatten() for child in self.children]
        if not self.op.variadic:
            return Expr(self.op, tuple(flat_children))
        merged: List[Expr] = []
        for child in flat_children:
            if child.op is self.op:
                merged.extend(child.children)
            else:
                merged.append(child)
        return Expr(self.op, tuple(merged))

    # -- rendering ---------------------------------------------------------

    def render(self, use_ascii: bool = False) -> str:
        """Canonical text form used for display and diagnostics."""
        if self.is_atom:
            return self.name
        symbol = self.op.ascii_symbol if use_ascii else self.op.symbol
        if self.op is Operator.NOT:
            return f"{symbol}{_render_operand(self.children[0], use_ascii)}"
        return f" {symbol} ".join(_render_operand(c, use_ascii) for c in self.children)

    def __str__(self) -> str:
        return self.render()

    def __repr__(self) -> str:
        return f"Expr({self.render()!r})"


def _render_operand(child: Expr, use_ascii: bool) -> str:
    # Atoms and negations bind tighter than every binary connective.
    text = child.render(use_ascii)
    if child.op.precedence < Operator.NOT.precedence:
        return f"({text})"
    return text


# ---------------------------------------------------------------------------
# Constructors
# ---------------------------------------------------------------------------

def atom(name: str) -> Expr:
    return Expr(Operator.ATOM, (), name)


def neg(operand: Expr) -> Expr:
    return Expr(Operator.NOT, (operand,))


def conj(*operands: Expr) -> Expr:
    return Expr(Operator.AND, operands)


def disj(*operands: Expr) -> Expr:
    return Expr(Operator.OR, operands)


def implies(antecedent: Expr, consequent: Expr) -> Expr:
    return Expr(Operator.CONDITIONAL, (antecedent, consequent))


def iff(left: Expr, right: Expr) -> Expr:
    return Expr(Operator.BICONDITIONAL, (left, right))


def render_all(exprs: Iterable[Expr]) -> str:
    """Comma-separated rendering of several expressions."""
    return ", ".join(e.render() for e in exprs)


# ---------------------------------------------------------------------------
# Exports
# ---------------------------------------------------------------------------

__all__ = [
    "Operator",
    "Expr",
    "atom",
    "neg",
    "conj",
    "disj",
    "implies",
    "iff",
    "render_all",
]
