"""Pytest configuration and fixtures."""

from dataclasses import replace
from typing import Callable

import pytest

from estate_sim.config import SimulationConfig
from estate_sim.engine.valuation import adjusted_value
from estate_sim.models import (
    GameState,
    Location,
    Mortgage,
    PropertyRecord,
    PropertyType,
    RentTerms,
)


def constant_rand(value: float) -> Callable[[], float]:
    """Randomness source that always returns ``value``."""
    return lambda: value


def sequence_rand(*values: float) -> Callable[[], float]:
    """Randomness source that replays ``values`` and then repeats the last one."""
    remaining = list(values)

    def rand() -> float:
        if len(remaining) > 1:
            return remaining.pop(0)
        return remaining[0]

    return rand


def make_property(
    property_id: str = "prop-001",
    base_value: int = 200000,
    maintenance_percent: float = 80.0,
    demand_score: int = 5,
    **overrides,
) -> PropertyRecord:
    """Build a portfolio-style property with a consistent cost."""
    prop = PropertyRecord(
        property_id=property_id,
        name=f"Test Home {property_id}",
        description="Test property",
        property_type=PropertyType.TOWNHOUSE,
        bedrooms=3,
        bathrooms=2,
        features=("Private Patio",),
        location_descriptor="Test street",
        demand_score=demand_score,
        location=Location(proximity=0.8, school_rating=8, crime_score=3),
        base_value=base_value,
        maintenance_percent=maintenance_percent,
        cost=adjusted_value(base_value, maintenance_percent),
        rent_terms=RentTerms(lease_months=12, rate_offset=0.02),
    )
    return replace(prop, **overrides)


def make_mortgage(
    remaining_balance: float = 100000.0,
    remaining_term_months: int = 120,
    interest_only: bool = False,
    **overrides,
) -> Mortgage:
    mortgage = Mortgage(
        deposit_ratio=0.2,
        deposit=25000,
        principal=remaining_balance,
        term_months=remaining_term_months,
        fixed_period_months=60,
        interest_only=interest_only,
        annual_interest_rate=0.04,
        reversion_rate=0.045,
        variable_margin=0.0075,
        monthly_payment=1000.0,
        remaining_balance=remaining_balance,
        remaining_term_months=remaining_term_months,
    )
    return replace(mortgage, **overrides)


def make_state(**overrides) -> GameState:
    state = GameState(balance=10000.0, day=1, central_bank_rate=0.0375)
    return replace(state, **overrides)


@pytest.fixture
def seed() -> int:
    """Fixed seed for reproducible tests."""
    return 42


@pytest.fixture
def config() -> SimulationConfig:
    """Default simulation configuration."""
    return SimulationConfig()


@pytest.fixture
def sample_property() -> PropertyRecord:
    return make_property()
