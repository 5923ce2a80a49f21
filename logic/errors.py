"""
Fatal error taxonomy for the proof-step verification core.

Only collaborator contract violations are raised. Logically wrong proof steps
are never exceptions: they come back as diagnostics on a VerificationResult.
"""

from __future__ import annotations


class ProofCoreError(Exception):
    """Base class for contract violations raised by the verification core."""


class InvalidArity(ProofCoreError, ValueError):
    """An expression was built with the wrong number of operands for its operator."""


class UnknownRule(ProofCoreError, KeyError):
    """A rule identifier was not found in the registry."""

    def __init__(self, identifier: object) -> None:
        super().__init__(identifier)
        self.identifier = identifier

    def __str__(self) -> str:
        return f"Unknown rule identifier: {self.identifier!r}"


class ContractViolation(ProofCoreError, RuntimeError):
    """A rule was invoked with a premise count its contract does not allow."""


__all__ = [
    "ProofCoreError",
    "InvalidArity",
    "UnknownRule",
    "ContractViolation",
]
