"""Property valuation and condition decay."""

from __future__ import annotations

import math
from dataclasses import dataclass, replace

from estate_sim.config import SimulationConfig
from estate_sim.engine.rounding import clamp
from estate_sim.models import ListingDefinition, PropertyRecord, PropertyType

VALUE_WEIGHTS = {
    "base": 220,
    "bedrooms": 95,
    "bathrooms": 80,
    "proximity": 160,
    "school_rating": 22,
    "safety": 18,  # Applied to 10 - crime_score
}

FEATURE_ADD_ONS = {
    "City View": 60,
    "Shared Rooftop": 40,
    "In-Unit Laundry": 55,
    "Private Patio": 65,
    "Finished Basement": 75,
    "Smart Thermostat": 30,
    "Two-Car Garage": 90,
    "Backyard Deck": 70,
    "Home Office": 50,
    "Private Elevator": 120,
    "Wraparound Terrace": 110,
    "Floor-to-Ceiling Windows": 85,
    "Concierge Service": 95,
}

DEFAULT_FEATURE_ADD_ON = 35

PROPERTY_TYPE_MULTIPLIERS = {
    PropertyType.APARTMENT: 0.9,
    PropertyType.TOWNHOUSE: 1.05,
    PropertyType.SINGLE_FAMILY: 1.15,
    PropertyType.LUXURY: 1.35,
}


@dataclass(frozen=True)
class MaintenanceEstimate:
    """Projected refurbishment cost for a property."""

    delay_months: int
    projected_percent: float
    deficiency_ratio: float
    projected_cost: int


def calculate_base_value(definition: ListingDefinition | PropertyRecord) -> int:
    """Value a property from its attributes, ignoring condition.

    Parameters
    ----------
    definition : ListingDefinition | PropertyRecord
        Anything carrying the descriptive attributes of a property.

    Returns
    -------
    int
        Weighted attribute score times the property type multiplier.
    """
    location = definition.location
    crime = location.crime_score if location.crime_score is not None else 5
    score = (
        VALUE_WEIGHTS["base"]
        + definition.bedrooms * VALUE_WEIGHTS["bedrooms"]
        + definition.bathrooms * VALUE_WEIGHTS["bathrooms"]
        + location.proximity * VALUE_WEIGHTS["proximity"]
        + location.school_rating * VALUE_WEIGHTS["school_rating"]
        + (10 - crime) * VALUE_WEIGHTS["safety"]
    )
    score += sum(FEATURE_ADD_ONS.get(feature, DEFAULT_FEATURE_ADD_ON) for feature in definition.features)
    multiplier = PROPERTY_TYPE_MULTIPLIERS.get(definition.property_type, 1.0)
    return round(score * multiplier)


def clamp_maintenance_percent(value: float | None) -> float:
    """Clamp to 0-100 with one decimal of precision."""
    if value is None or not math.isfinite(value):
        return 0.0
    return round(clamp(value, 0.0, 100.0), 1)


def adjusted_value(base_value: float, maintenance_percent: float) -> int:
    """Market value of a property at the given condition."""
    percent = clamp_maintenance_percent(maintenance_percent)
    return max(round(base_value * percent / 100), 0)


def with_maintenance(
    prop: PropertyRecord,
    maintenance_percent: float,
    remainder: float = 0.0,
) -> PropertyRecord:
    """Set the condition and recompute ``cost`` in the same step."""
    percent = clamp_maintenance_percent(maintenance_percent)
    return replace(
        prop,
        maintenance_percent=percent,
        cost=adjusted_value(prop.base_value, percent),
        maintenance_remainder=remainder,
    )


def decay_rate_per_month(prop: PropertyRecord, config: SimulationConfig, vacant: bool = False) -> float:
    """Occupied properties wear slower than vacant ones or those under works.

    ``vacant`` forces the vacant rate regardless of any sitting tenant.
    """
    if not vacant and prop.tenant is not None and not prop.has_active_maintenance:
        return config.maintenance.occupied_decay_per_month
    return config.maintenance.vacant_decay_per_month


def decay_maintenance(
    prop: PropertyRecord,
    days: int,
    config: SimulationConfig,
    vacant: bool = False,
) -> PropertyRecord:
    """Apply ``days`` of condition decay.

    The stored percent keeps one decimal; the rounding residual is carried in
    ``maintenance_remainder`` so a fraction of a tenth per day still
    accumulates.
    """
    if days <= 0:
        return prop
    per_day = decay_rate_per_month(prop, config, vacant) / config.days_per_month
    raw = prop.maintenance_percent + prop.maintenance_remainder - per_day * days
    if raw <= 0:
        return with_maintenance(prop, 0.0)
    percent = clamp_maintenance_percent(raw)
    return with_maintenance(prop, percent, remainder=raw - percent)


def forecast_maintenance_percent(
    prop: PropertyRecord,
    delay_months: int,
    config: SimulationConfig,
) -> float:
    """Condition expected after ``delay_months`` of occupied wear."""
    decay = config.maintenance.occupied_decay_per_month * max(delay_months, 0)
    return clamp_maintenance_percent(prop.maintenance_percent - decay)


def estimate_maintenance_cost(
    prop: PropertyRecord,
    config: SimulationConfig,
    delay_months: int | None = None,
) -> MaintenanceEstimate:
    """Project the refurbishment cost at the time work would start.

    Parameters
    ----------
    prop : PropertyRecord
        Property to refurbish.
    config : SimulationConfig
        Supplies decay rate and cost ratio.
    delay_months : int | None
        Months until work can start; defaults to the tenant's remaining lease.

    Returns
    -------
    MaintenanceEstimate
        Forecast condition and rounded cost.
    """
    if delay_months is None:
        delay_months = prop.tenant.lease_months_remaining if prop.tenant else 0
    projected = forecast_maintenance_percent(prop, delay_months, config)
    deficiency = (100 - projected) / 100
    cost = round(prop.base_value * config.maintenance.refurbishment_cost_ratio * deficiency)
    return MaintenanceEstimate(
        delay_months=delay_months,
        projected_percent=projected,
        deficiency_ratio=deficiency,
        projected_cost=max(cost, 0),
    )
