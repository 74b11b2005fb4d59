"""Custom exception hierarchy for estate-sim."""

from estate_sim.models.enums import ErrorTag


class EstateSimError(Exception):
    """Base exception for all estate-sim errors."""

    tag: ErrorTag | None = None


class PropertyNotFoundError(EstateSimError):
    """Raised when a referenced listing or portfolio property does not exist."""

    tag = ErrorTag.PROPERTY_NOT_FOUND


class InsufficientFundsError(EstateSimError):
    """Raised when the cash balance cannot cover a purchase, deposit or repair."""

    tag = ErrorTag.INSUFFICIENT_FUNDS


class InvalidSelectionError(EstateSimError):
    """Raised when a requested option is not one of the allowed values."""

    tag = ErrorTag.INVALID_SELECTION


class IneligibleOperationError(EstateSimError):
    """Raised when a property is in an invalid state for the operation."""

    tag = ErrorTag.INELIGIBLE_OPERATION


class ConfigurationError(EstateSimError):
    """Raised when configuration is invalid or missing."""
