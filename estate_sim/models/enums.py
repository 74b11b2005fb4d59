"""Enumeration types for simulation entities."""

from enum import Enum


class PropertyType(str, Enum):
    APARTMENT = "apartment"
    TOWNHOUSE = "townhouse"
    SINGLE_FAMILY = "single_family"
    LUXURY = "luxury"


class ErrorTag(str, Enum):
    INSUFFICIENT_FUNDS = "INSUFFICIENT_FUNDS"
    INVALID_SELECTION = "INVALID_SELECTION"
    INELIGIBLE_OPERATION = "INELIGIBLE_OPERATION"
    PROPERTY_NOT_FOUND = "PROPERTY_NOT_FOUND"


class RateDecision(str, Enum):
    INCREASE = "increased"
    DECREASE = "reduced"
    HOLD = "held"
