"""Rent plan grid and tenant placement probability."""

from __future__ import annotations

import math
from typing import Sequence

from estate_sim.config import SimulationConfig
from estate_sim.engine.rounding import clamp, round_currency
from estate_sim.models import PropertyRecord, RentPlan, RentTerms

# Probability model constants
BASE_PROBABILITY_FLOOR = 0.2
DEMAND_WEIGHT = 0.6
BASE_PROBABILITY_CAP = 0.95
PREMIUM_PENALTY = 0.5
PREMIUM_FACTOR_FLOOR = 0.35
LEASE_WEIGHT = 0.4
LEASE_FACTOR_FLOOR = 0.6
PLAN_PROBABILITY_RANGE = (0.05, 0.95)

NEUTRAL_DEMAND = 5


def clamp_demand_score(score: float | None) -> float:
    if score is None or not math.isfinite(score):
        return NEUTRAL_DEMAND
    return clamp(score, 1, 10)


def snap_to_option(value: float, options: Sequence[float]) -> float:
    """Return the option nearest to ``value`` (the lower one on ties)."""
    if not options:
        raise ValueError("No options to snap to")
    return min(options, key=lambda option: (abs(option - value), option))


def default_rent_terms(config: SimulationConfig) -> RentTerms:
    return RentTerms(
        lease_months=config.rent.default_lease_months,
        rate_offset=config.rent.default_rate_offset,
    )


def snap_rent_terms(lease_months: float, rate_offset: float, config: SimulationConfig) -> RentTerms:
    """Coerce an arbitrary request onto the rent grid."""
    return RentTerms(
        lease_months=int(snap_to_option(lease_months, config.rent.lease_month_options)),
        rate_offset=snap_to_option(rate_offset, config.rent.rate_offset_options),
    )


def _neutral_band(offsets: Sequence[float]) -> tuple[float, float]:
    ordered = sorted(offsets)
    return ordered[(len(ordered) - 1) // 2], ordered[len(ordered) // 2]


def calculate_tenant_probability(
    demand_score: float,
    terms: RentTerms,
    config: SimulationConfig,
) -> float:
    """Monthly chance that a plan attracts a tenant.

    Demand sets the base chance; higher premiums reduce it. Below the
    neutral premium band longer leases are favoured, above it shorter ones.

    Parameters
    ----------
    demand_score : float
        Property demand, 1-10.
    terms : RentTerms
        Plan on the rent grid.
    config : SimulationConfig
        Supplies the lease and offset options.

    Returns
    -------
    float
        Probability in [0.05, 0.95], rounded to three decimals.
    """
    leases = config.rent.lease_month_options
    offsets = config.rent.rate_offset_options
    demand = clamp_demand_score(demand_score)

    base = min(BASE_PROBABILITY_FLOOR + demand / 10 * DEMAND_WEIGHT, BASE_PROBABILITY_CAP)

    offset = snap_to_option(terms.rate_offset, offsets)
    offset_index = list(offsets).index(offset)
    offset_ratio = offset_index / (len(offsets) - 1) if len(offsets) > 1 else 0.0
    premium_factor = max(1 - offset_ratio * PREMIUM_PENALTY, PREMIUM_FACTOR_FLOOR)

    lease_index = list(leases).index(int(snap_to_option(terms.lease_months, leases)))
    lease_ratio = lease_index / (len(leases) - 1) if len(leases) > 1 else 0.5
    band_low, band_high = _neutral_band(offsets)
    if offset < band_low:
        lease_factor = 1 + (lease_ratio - 0.5) * LEASE_WEIGHT
    elif offset > band_high:
        lease_factor = 1 + (0.5 - lease_ratio) * LEASE_WEIGHT
    else:
        lease_factor = 1.0

    probability = base * premium_factor * max(lease_factor, LEASE_FACTOR_FLOOR)
    return round(clamp(probability, *PLAN_PROBABILITY_RANGE), 3)


def calculate_monthly_rent(cost: float, central_bank_rate: float, rate_offset: float, config: SimulationConfig) -> float:
    annual_rate = max(max(central_bank_rate, 0.0) + rate_offset, config.rent.minimum_annual_rate)
    return round_currency(cost * annual_rate / 12)


def get_rent_plans(
    prop: PropertyRecord,
    central_bank_rate: float,
    config: SimulationConfig,
) -> list[RentPlan]:
    """Full lease-by-offset grid for a property, ordered by lease then offset."""
    plans = []
    for lease_months in config.rent.lease_month_options:
        for rate_offset in config.rent.rate_offset_options:
            terms = RentTerms(lease_months=lease_months, rate_offset=rate_offset)
            plans.append(
                RentPlan(
                    terms=terms,
                    monthly_rent=calculate_monthly_rent(prop.cost, central_bank_rate, rate_offset, config),
                    probability=calculate_tenant_probability(prop.demand_score, terms, config),
                )
            )
    return plans


def find_rent_plan(
    prop: PropertyRecord,
    terms: RentTerms | None,
    central_bank_rate: float,
    config: SimulationConfig,
) -> RentPlan:
    """Current plan for the given terms, snapped onto the grid."""
    if terms is None:
        terms = default_rent_terms(config)
    snapped = snap_rent_terms(terms.lease_months, terms.rate_offset, config)
    for plan in get_rent_plans(prop, central_bank_rate, config):
        if plan.terms == snapped:
            return plan
    return get_rent_plans(prop, central_bank_rate, config)[0]


def placement_probability(plan: RentPlan, prop: PropertyRecord, config: SimulationConfig) -> float:
    """Effective chance this month, including the vacancy boost.

    Each consecutive vacant month adds a capped bonus and demand adds a
    small linear adjustment around the neutral score.
    """
    rent = config.rent
    vacancy_bonus = min(max(prop.vacancy_months, 0) * rent.vacancy_bonus_per_month, rent.vacancy_bonus_cap)
    demand_adjustment = (clamp_demand_score(prop.demand_score) - NEUTRAL_DEMAND) * rent.demand_adjustment_per_point
    return clamp(
        plan.probability + vacancy_bonus + demand_adjustment,
        rent.minimum_placement_probability,
        rent.maximum_placement_probability,
    )
