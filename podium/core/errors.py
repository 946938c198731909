"""
Domain errors for the betting ledger.

Each error carries an HTTP status and a stable machine-readable code so
routers can let them propagate and the app-level handler renders them as
``{"detail": ..., "code": ...}``.
"""

from fastapi import status

# Error codes
VALIDATION_ERROR = "validation_error"
INSUFFICIENT_FUNDS = "insufficient_funds"
NOT_FOUND = "not_found"
INVALID_OUTCOME = "invalid_outcome"
INTERNAL_ERROR = "internal_error"


class PodiumError(Exception):
    """Base class for errors surfaced to API clients."""

    status_code = status.HTTP_400_BAD_REQUEST
    code = VALIDATION_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict:
        return {"detail": self.message, "code": self.code}


class ValidationError(PodiumError):
    """Missing, malformed or out-of-range input."""


class InsufficientFundsError(PodiumError):
    code = INSUFFICIENT_FUNDS

    def __init__(self, message: str = "Insufficient betting funds"):
        super().__init__(message)


class NotFoundError(PodiumError):
    status_code = status.HTTP_404_NOT_FOUND
    code = NOT_FOUND


class InvalidOutcomeError(PodiumError):
    """Predicted outcome is not one of the event's participants."""

    code = INVALID_OUTCOME


class InternalError(PodiumError):
    """Store failure. The message is fixed so no detail leaks to clients."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    code = INTERNAL_ERROR

    def __init__(self, message: str = "Internal server error"):
        super().__init__(message)
