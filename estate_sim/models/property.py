"""Property, tenancy and maintenance models."""

from dataclasses import dataclass

from estate_sim.models.base import Location
from estate_sim.models.enums import PropertyType
from estate_sim.models.mortgage import Mortgage


@dataclass(frozen=True)
class RentTerms:
    """Selected rent plan: lease length and premium over the base rate."""

    lease_months: int
    rate_offset: float


@dataclass(frozen=True)
class RentPlan:
    """Rent plan derived from a property's cost and the base rate."""

    terms: RentTerms
    monthly_rent: float
    probability: float  # Chance of placing a tenant in a month

    @property
    def lease_months(self) -> int:
        return self.terms.lease_months

    @property
    def rate_offset(self) -> float:
        return self.terms.rate_offset


@dataclass(frozen=True)
class Tenant:
    """Tenant occupying a property."""

    monthly_rent: float  # Locked at placement
    lease_months_remaining: int


@dataclass(frozen=True)
class MaintenanceWorkOrder:
    """Scheduled refurbishment that restores a property to full condition."""

    months_remaining: int
    start_delay_months: int  # Waits for the current lease to end
    cost: float  # Locked when scheduled
    scheduled_on_day: int = 0

    @property
    def is_active(self) -> bool:
        return self.start_delay_months <= 0


@dataclass(frozen=True)
class ListingDefinition:
    """Descriptive attributes of a listing before it is valued."""

    property_id: str
    name: str
    description: str
    property_type: PropertyType
    bedrooms: int
    bathrooms: int
    features: tuple[str, ...]
    location_descriptor: str
    demand_score: int
    location: Location
    maintenance_percent: float | None = None


@dataclass(frozen=True)
class PropertyRecord:
    """Property on the market or in the player's portfolio.

    ``cost`` always equals the maintenance-adjusted ``base_value``; use
    ``estate_sim.engine.valuation.with_maintenance`` to change either.
    """

    property_id: str
    name: str
    description: str
    property_type: PropertyType
    bedrooms: int
    bathrooms: int
    features: tuple[str, ...]
    location_descriptor: str
    demand_score: int
    location: Location
    base_value: int
    maintenance_percent: float
    cost: int
    rent_terms: RentTerms
    introduced_on_day: int = 1
    market_age: int = 0
    tenant: Tenant | None = None
    mortgage: Mortgage | None = None
    maintenance_work: MaintenanceWorkOrder | None = None
    auto_relist: bool = True
    rental_marketing_active: bool = False
    marketing_paused_for_maintenance: bool = False
    vacancy_months: int = 0
    maintenance_remainder: float = 0.0  # Sub-decimal decay not yet reflected

    @property
    def has_active_maintenance(self) -> bool:
        return self.maintenance_work is not None and self.maintenance_work.is_active

    @property
    def is_occupied(self) -> bool:
        return self.tenant is not None
