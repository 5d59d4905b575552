"""Domain exceptions for point-ledger.

Exception hierarchy:
    DomainException (base)
    └── Validation Errors
        ├── ValidationError (base for caller-input and business-rule failures)
        ├── InvalidAmountError
        ├── BalanceCeilingExceededError
        └── InsufficientBalanceError

All validation errors are detected before any storage write. Errors raised by
storage adapters are not domain exceptions and propagate unchanged.
"""

from __future__ import annotations


class DomainException(Exception):
    """Base exception for all domain-level errors.

    All domain exceptions inherit from this class to enable
    catching domain errors distinctly from infrastructure errors.
    """


# =============================================================================
# Validation Errors
# =============================================================================


class ValidationError(DomainException):
    """Raised when a charge or use request is rejected.

    The surrounding API layer maps this family to a client error
    (HTTP 400/422). No retry is attempted by the core.
    """


class InvalidAmountError(ValidationError):
    """Raised when a charge or use amount is not strictly positive.

    Checked before the per-user lock is taken; nothing is read or written.
    """


class BalanceCeilingExceededError(ValidationError):
    """Raised when a charge would push the balance above the ceiling.

    The stored balance is left exactly as read and no history is appended.
    """


class InsufficientBalanceError(ValidationError):
    """Raised when a use amount exceeds the current balance."""
