"""Propositional expression model shared by the inference rules."""

from .errors import ContractViolation, InvalidArity, ProofCoreError, UnknownRule
from .expr import Expr, Operator, atom, conj, disj, iff, implies, neg, render_all

__all__ = [
    "ContractViolation",
    "Expr",
    "InvalidArity",
    "Operator",
    "ProofCoreError",
    "UnknownRule",
    "atom",
    "conj",
    "disj",
    "iff",
    "implies",
    "neg",
    "render_all",
]
