"""Tests for mortgage pricing, amortization and settlement."""

from dataclasses import replace

import pytest

from conftest import make_mortgage, make_property
from estate_sim.engine.mortgage import (
    amortize_month,
    calculate_monthly_payment,
    create_mortgage,
    derive_rate_profile,
    refinance_mortgage_terms,
    service_mortgage,
    validate_finance_selection,
)
from estate_sim.exceptions import IneligibleOperationError, InvalidSelectionError


class TestRateProfile:
    """Tests for derive_rate_profile."""

    def test_large_deposit_gets_minimum_margin(self, config) -> None:
        profile = derive_rate_profile(0.2, 25, 5, 0.0375, config)

        assert profile.variable_margin == 0.004
        assert profile.reversion_rate == pytest.approx(0.0415)
        assert profile.fixed_rate == pytest.approx(0.039)

    def test_small_deposit_pays_wider_margin(self, config) -> None:
        small = derive_rate_profile(0.05, 25, 5, 0.0375, config)
        large = derive_rate_profile(0.3, 25, 5, 0.0375, config)

        assert small.variable_margin == pytest.approx(0.011)
        assert small.reversion_rate > large.reversion_rate

    def test_shorter_fix_is_cheaper(self, config) -> None:
        two = derive_rate_profile(0.1, 25, 2, 0.04, config)
        ten = derive_rate_profile(0.1, 25, 10, 0.04, config)

        assert two.fixed_rate < ten.fixed_rate

    def test_fixed_rate_never_below_base(self, config) -> None:
        profile = derive_rate_profile(0.5, 25, 2, 0.084, config)

        assert profile.reversion_rate == 0.085
        assert profile.fixed_rate == pytest.approx(0.084)

    def test_fixed_period_bounded_by_term(self, config) -> None:
        assert derive_rate_profile(0.2, 2, 10, 0.0375, config).fixed_period_years == 2


class TestMonthlyPayment:
    """Tests for calculate_monthly_payment."""

    def test_annuity(self) -> None:
        assert calculate_monthly_payment(100000, 0.06, 360) == pytest.approx(599.55)

    def test_interest_only(self) -> None:
        assert calculate_monthly_payment(240000, 0.039, 300, interest_only=True) == pytest.approx(780.0)

    def test_zero_rate(self) -> None:
        assert calculate_monthly_payment(1200, 0.0, 12) == 100.0

    def test_nothing_borrowed(self) -> None:
        assert calculate_monthly_payment(0, 0.05, 120) == 0.0


class TestCreateMortgage:
    """Tests for create_mortgage and finance validation."""

    def test_repayment_mortgage(self, config) -> None:
        mortgage = create_mortgage(300000, 0.2, 25, 5, False, 0.0375, config)

        assert mortgage.deposit == 60000
        assert mortgage.principal == 240000
        assert mortgage.term_months == 300
        assert mortgage.fixed_period_months == 60
        assert mortgage.annual_interest_rate == pytest.approx(0.039)
        assert mortgage.variable_rate_active is False

    def test_zero_fixed_period_starts_variable(self, config) -> None:
        mortgage = create_mortgage(300000, 0.2, 25, 0, False, 0.0375, config)

        assert mortgage.variable_rate_active is True
        assert mortgage.annual_interest_rate == mortgage.reversion_rate

    def test_validation_rejects_unknown_options(self, config) -> None:
        validate_finance_selection(0.2, 25, 5, config)

        with pytest.raises(InvalidSelectionError):
            validate_finance_selection(0.22, 25, 5, config)
        with pytest.raises(InvalidSelectionError):
            validate_finance_selection(0.2, 30, 5, config)
        with pytest.raises(InvalidSelectionError):
            validate_finance_selection(0.2, 25, 3, config)


class TestAmortization:
    """Tests for amortize_month."""

    def test_reverts_after_fixed_period(self, config) -> None:
        mortgage = create_mortgage(300000, 0.2, 25, 5, False, 0.0375, config)
        balances = [mortgage.remaining_balance]

        for month in range(60):
            assert mortgage.variable_rate_active is False, month
            mortgage = amortize_month(mortgage, 0.0375, config).mortgage
            balances.append(mortgage.remaining_balance)

        assert mortgage.variable_rate_active is True
        assert mortgage.annual_interest_rate == mortgage.reversion_rate
        assert mortgage.remaining_term_months == 240
        assert all(later <= earlier for earlier, later in zip(balances, balances[1:]))

    def test_reversion_tracks_current_base_rate(self, config) -> None:
        mortgage = create_mortgage(300000, 0.2, 25, 2, False, 0.0375, config)
        mortgage = replace(mortgage, remaining_term_months=mortgage.term_months - 23)

        reverted = amortize_month(mortgage, 0.05, config).mortgage

        assert reverted.variable_rate_active is True
        assert reverted.annual_interest_rate == pytest.approx(0.054)

    def test_interest_only_balance_constant(self, config) -> None:
        mortgage = create_mortgage(300000, 0.2, 25, 5, True, 0.0375, config)

        payment = amortize_month(mortgage, 0.0375, config)

        assert payment.mortgage.remaining_balance == 240000
        assert payment.principal == 0
        assert payment.total == pytest.approx(780.0)

    def test_mature_mortgage_takes_no_payment(self, config) -> None:
        mortgage = make_mortgage(remaining_term_months=0)

        payment = amortize_month(mortgage, 0.0375, config)

        assert payment.total == 0
        assert payment.mortgage is mortgage


class TestServiceMortgage:
    """Tests for monthly servicing and balloon settlement."""

    def test_unmortgaged_property(self, config, sample_property) -> None:
        result = service_mortgage(sample_property, 1000, 0.0375, config)

        assert result.property is sample_property
        assert result.cash_flow == 0

    def test_regular_payment(self, config) -> None:
        mortgage = create_mortgage(160000, 0.2, 25, 5, False, 0.0375, config)
        prop = make_property(mortgage=mortgage)

        result = service_mortgage(prop, 1000, 0.0375, config)

        assert result.cash_flow == pytest.approx(-mortgage.monthly_payment)
        assert result.property.mortgage.remaining_term_months == 299

    def test_balloon_paid_from_cash(self, config) -> None:
        prop = make_property(mortgage=make_mortgage(50000, 0, interest_only=True))

        result = service_mortgage(prop, 60000, 0.0375, config)

        assert result.cash_flow == -50000
        assert result.property.mortgage is None

    def test_forced_sale_when_cash_short(self, config) -> None:
        prop = make_property(
            base_value=200000,
            maintenance_percent=80.0,
            mortgage=make_mortgage(50000, 0, interest_only=True),
        )

        result = service_mortgage(prop, 5000, 0.0375, config)

        assert result.property is None
        assert result.cash_flow == 160000 - 50000
        assert any("Forced sale" in m for m in result.messages)

    def test_repayment_settles_final_residual(self, config) -> None:
        prop = make_property(mortgage=make_mortgage(0.4, 3))

        result = service_mortgage(prop, 1000, 0.0375, config)

        assert result.property.mortgage is None
        assert any("fully repaid" in m for m in result.messages)


class TestRefinance:
    """Tests for refinance_mortgage_terms."""

    def test_requires_variable_rate(self, config) -> None:
        with pytest.raises(IneligibleOperationError):
            refinance_mortgage_terms(make_mortgage(), 320000, 5, 0.04, config)

    def test_requires_balance(self, config) -> None:
        mortgage = make_mortgage(remaining_balance=0.2, variable_rate_active=True)

        with pytest.raises(IneligibleOperationError):
            refinance_mortgage_terms(mortgage, 320000, 5, 0.04, config)

    def test_locks_new_fixed_rate(self, config) -> None:
        mortgage = make_mortgage(
            remaining_balance=200000,
            remaining_term_months=180,
            variable_rate_active=True,
            annual_interest_rate=0.06,
        )

        refinanced = refinance_mortgage_terms(mortgage, 320000, 5, 0.04, config)

        assert refinanced.variable_rate_active is False
        assert refinanced.annual_interest_rate == pytest.approx(0.0415)
        assert refinanced.annual_interest_rate < 0.05
        assert refinanced.fixed_period_months == 60
        assert refinanced.term_months == 180
        assert refinanced.principal == 200000
        assert refinanced.monthly_payment == calculate_monthly_payment(200000, 0.0415, 180)

    def test_fixed_period_bounded_by_remaining_term(self, config) -> None:
        mortgage = make_mortgage(remaining_term_months=30, variable_rate_active=True)

        refinanced = refinance_mortgage_terms(mortgage, 320000, 10, 0.04, config)

        assert refinanced.fixed_period_months == 30
