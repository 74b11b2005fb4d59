"""Domain models for the simulation."""

from estate_sim.models.base import HistoryEntry, Location
from estate_sim.models.enums import ErrorTag, PropertyType, RateDecision
from estate_sim.models.mortgage import Mortgage, RateProfile
from estate_sim.models.property import (
    ListingDefinition,
    MaintenanceWorkOrder,
    PropertyRecord,
    RentPlan,
    RentTerms,
    Tenant,
)
from estate_sim.models.state import ActionOutcome, ActionResult, GameState

__all__ = [
    "ActionOutcome",
    "ActionResult",
    "ErrorTag",
    "GameState",
    "HistoryEntry",
    "ListingDefinition",
    "Location",
    "MaintenanceWorkOrder",
    "Mortgage",
    "PropertyRecord",
    "PropertyType",
    "RateDecision",
    "RateProfile",
    "RentPlan",
    "RentTerms",
    "Tenant",
]
