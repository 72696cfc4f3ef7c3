"""
Custom exceptions for DayTally operations.

Operator-facing errors subclass ValueError so the CLI and HTTP layers can
map every use-case failure with a single ``except ValueError`` clause.
"""


class DayTallyError(Exception):
    """Base exception for all DayTally errors."""

    pass


class ValidationError(DayTallyError, ValueError):
    """Raised when operator input fails validation."""

    pass


class NotFoundError(DayTallyError, ValueError):
    """Raised when a referenced tag or schedule does not exist."""

    pass


class StoreError(DayTallyError):
    """Raised when the backing store cannot be read or written."""

    pass
