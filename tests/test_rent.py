"""Tests for the rent plan grid and tenant placement."""

import pytest

from conftest import make_property
from estate_sim.engine.rent import (
    calculate_tenant_probability,
    clamp_demand_score,
    find_rent_plan,
    get_rent_plans,
    placement_probability,
    snap_rent_terms,
    snap_to_option,
)
from estate_sim.models import RentTerms


@pytest.fixture
def prime_property():
    return make_property(base_value=300000, maintenance_percent=100.0, demand_score=8)


def _plan(plans, lease_months, rate_offset):
    return next(p for p in plans if p.terms == RentTerms(lease_months, rate_offset))


class TestRentPlanGrid:
    """Tests for get_rent_plans."""

    def test_grid_has_fifty_plans(self, config, prime_property) -> None:
        plans = get_rent_plans(prime_property, 0.03, config)

        assert len(plans) == 50
        assert len({p.terms for p in plans}) == 50

    def test_monthly_rent_values(self, config, prime_property) -> None:
        plans = get_rent_plans(prime_property, 0.03, config)

        assert _plan(plans, 6, 0.01).monthly_rent == pytest.approx(1000)
        assert _plan(plans, 12, 0.05).monthly_rent == pytest.approx(2000)
        assert _plan(plans, 36, 0.10).monthly_rent == pytest.approx(3250)

    def test_probability_reference_values(self, config, prime_property) -> None:
        plans = get_rent_plans(prime_property, 0.03, config)

        assert _plan(plans, 6, 0.01).probability == pytest.approx(0.544)
        assert _plan(plans, 24, 0.05).probability == pytest.approx(0.529)
        assert _plan(plans, 36, 0.10).probability == pytest.approx(0.272)

    def test_probabilities_within_bounds(self, config) -> None:
        for demand in (1, 5, 10):
            prop = make_property(demand_score=demand)
            for plan in get_rent_plans(prop, 0.0375, config):
                assert 0.05 <= plan.probability <= 0.95

    def test_negative_base_rate_treated_as_zero(self, config, prime_property) -> None:
        plans = get_rent_plans(prime_property, -0.02, config)

        assert _plan(plans, 6, 0.01).monthly_rent == pytest.approx(250)

    def test_higher_premium_lowers_probability(self, config) -> None:
        cheap = calculate_tenant_probability(7, RentTerms(12, 0.01), config)
        dear = calculate_tenant_probability(7, RentTerms(12, 0.10), config)

        assert dear < cheap

    def test_lease_preference_flips_across_band(self, config) -> None:
        low_short = calculate_tenant_probability(7, RentTerms(6, 0.01), config)
        low_long = calculate_tenant_probability(7, RentTerms(36, 0.01), config)
        high_short = calculate_tenant_probability(7, RentTerms(6, 0.10), config)
        high_long = calculate_tenant_probability(7, RentTerms(36, 0.10), config)

        assert low_long > low_short
        assert high_short > high_long


class TestSnapping:
    """Tests for option snapping."""

    def test_snap_to_nearest(self) -> None:
        assert snap_to_option(13, (6, 12, 18)) == 12
        assert snap_to_option(15, (6, 12, 18)) == 12
        assert snap_to_option(100, (6, 12, 18)) == 18

    def test_snap_rent_terms(self, config) -> None:
        assert snap_rent_terms(20, 0.047, config) == RentTerms(18, 0.05)

    def test_find_rent_plan_snaps(self, config, prime_property) -> None:
        plan = find_rent_plan(prime_property, RentTerms(11, 0.021), 0.03, config)

        assert plan.terms == RentTerms(12, 0.02)

    def test_find_rent_plan_defaults(self, config, prime_property) -> None:
        assert find_rent_plan(prime_property, None, 0.03, config).terms == RentTerms(12, 0.02)

    def test_clamp_demand(self) -> None:
        assert clamp_demand_score(15) == 10
        assert clamp_demand_score(0) == 1
        assert clamp_demand_score(float("inf")) == 5


class TestPlacementProbability:
    """Tests for vacancy boost and demand adjustment."""

    def test_no_adjustment_at_neutral_demand(self, config) -> None:
        prop = make_property(demand_score=5)
        plan = find_rent_plan(prop, RentTerms(36, 0.10), 0.0375, config)

        assert plan.probability == pytest.approx(0.2)
        assert placement_probability(plan, prop, config) == pytest.approx(0.2)

    def test_vacancy_boost_is_capped(self, config) -> None:
        prop = make_property(demand_score=5)
        plan = find_rent_plan(prop, RentTerms(36, 0.10), 0.0375, config)

        one_month = placement_probability(plan, make_property(demand_score=5, vacancy_months=1), config)
        many_months = placement_probability(plan, make_property(demand_score=5, vacancy_months=50), config)

        assert one_month == pytest.approx(0.26)
        assert many_months == pytest.approx(0.5)

    def test_demand_adjustment(self, config) -> None:
        prop = make_property(demand_score=9)
        plan = find_rent_plan(prop, RentTerms(12, 0.02), 0.0375, config)

        assert placement_probability(plan, prop, config) == pytest.approx(plan.probability + 0.04)

    def test_final_clamp(self, config) -> None:
        prop = make_property(demand_score=10, vacancy_months=10)
        plan = find_rent_plan(prop, RentTerms(36, 0.01), 0.0375, config)

        assert placement_probability(plan, prop, config) == 0.98
