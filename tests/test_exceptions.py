"""Tests for custom exception hierarchy."""

from estate_sim.exceptions import (
    ConfigurationError,
    EstateSimError,
    IneligibleOperationError,
    InsufficientFundsError,
    InvalidSelectionError,
    PropertyNotFoundError,
)
from estate_sim.models import ErrorTag


class TestExceptionHierarchy:
    """Test exception inheritance chain."""

    def test_estate_sim_error_is_exception(self) -> None:
        assert isinstance(EstateSimError("test"), Exception)

    def test_domain_errors_are_estate_sim_errors(self) -> None:
        for cls in (
            PropertyNotFoundError,
            InsufficientFundsError,
            InvalidSelectionError,
            IneligibleOperationError,
            ConfigurationError,
        ):
            assert isinstance(cls("test"), EstateSimError)

    def test_error_tags(self) -> None:
        assert InsufficientFundsError.tag is ErrorTag.INSUFFICIENT_FUNDS
        assert InvalidSelectionError.tag is ErrorTag.INVALID_SELECTION
        assert IneligibleOperationError.tag is ErrorTag.INELIGIBLE_OPERATION
        assert PropertyNotFoundError.tag is ErrorTag.PROPERTY_NOT_FOUND
        assert ConfigurationError.tag is None

    def test_exception_message(self) -> None:
        err = PropertyNotFoundError("Property prop-001 is not in your portfolio.")
        assert str(err) == "Property prop-001 is not in your portfolio."
