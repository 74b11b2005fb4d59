"""Shared serialization utilities for sinks."""

from dataclasses import fields, is_dataclass
from enum import Enum
from typing import Any

from estate_sim.models import GameState, PropertyRecord, RentTerms
from estate_sim.store import monthly_cash_flow


def rent_plan_id(terms: RentTerms) -> str:
    """Stable identifier for a rent plan, e.g. ``lease-12-rate-20``."""
    return f"lease-{terms.lease_months}-rate-{round(terms.rate_offset * 1000)}"


def to_dict(obj: Any) -> dict:
    """Convert object to dictionary."""
    if is_dataclass(obj):
        return {f.name: serialize_value(getattr(obj, f.name)) for f in fields(obj)}
    elif isinstance(obj, dict):
        return obj
    else:
        return {"value": str(obj)}


def serialize_value(value: Any) -> Any:
    """Serialize a value for JSON output."""
    if isinstance(value, Enum):
        return value.value
    elif is_dataclass(value):
        return to_dict(value)
    elif isinstance(value, dict):
        return {k: serialize_value(v) for k, v in value.items()}
    elif isinstance(value, (list, tuple)):
        return [serialize_value(v) for v in value]
    return value


def property_to_dict(prop: PropertyRecord) -> dict:
    data = to_dict(prop)
    data["rent_plan_id"] = rent_plan_id(prop.rent_terms)
    return data


def state_to_dict(state: GameState) -> dict:
    """Plain-dict snapshot for a UI or persistence layer."""
    data = to_dict(state)
    data["market"] = [property_to_dict(p) for p in state.market]
    data["portfolio"] = [property_to_dict(p) for p in state.portfolio]
    data["monthly_cash_flow"] = monthly_cash_flow(state)
    return data
