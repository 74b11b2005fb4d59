"""Mortgage pricing, amortization, balloon settlement and refinancing."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field, replace

from estate_sim.config import SimulationConfig
from estate_sim.engine.rent import snap_to_option
from estate_sim.engine.rounding import clamp, round_currency, round_rate
from estate_sim.engine.valuation import adjusted_value
from estate_sim.exceptions import IneligibleOperationError, InvalidSelectionError
from estate_sim.formatting import format_currency, format_interest_rate
from estate_sim.models import Mortgage, PropertyRecord, RateProfile

logger = logging.getLogger(__name__)


def clamp_lending_rate(rate: float, config: SimulationConfig) -> float:
    return round_rate(clamp(rate, config.finance.minimum_rate, config.finance.maximum_rate))


def derive_rate_profile(
    deposit_ratio: float,
    term_years: int,
    fixed_period_years: int,
    base_rate: float,
    config: SimulationConfig,
) -> RateProfile:
    """Quote fixed and reversion rates.

    The variable margin shrinks with a larger deposit; shorter fixes carry a
    larger incentive. The fixed rate never drops below the base rate.

    Parameters
    ----------
    deposit_ratio : float
        Deposit (or equity) as a fraction of value.
    term_years : int
        Mortgage term; bounds the fixed period.
    fixed_period_years : int
        Requested fixed-rate period.
    base_rate : float
        Current central bank rate.
    config : SimulationConfig
        Supplies the rate model and lending limits.

    Returns
    -------
    RateProfile
        Quoted rates.
    """
    model = config.finance.rate_model
    fixed_years = max(min(fixed_period_years, term_years), 0)
    margin = max(
        model.minimum_margin,
        model.variable_margin_base - deposit_ratio * model.variable_margin_deposit_factor,
    )
    reversion = clamp_lending_rate(base_rate + margin, config)
    incentive = model.fixed_rate_incentives.get(fixed_years, 0.0)
    fixed = max(clamp_lending_rate(reversion + incentive, config), round_rate(base_rate))
    return RateProfile(
        base_rate=base_rate,
        variable_margin=round_rate(margin),
        reversion_rate=reversion,
        fixed_rate=fixed,
        fixed_period_years=fixed_years,
    )


def calculate_monthly_payment(
    principal: float,
    annual_rate: float,
    term_months: int,
    interest_only: bool = False,
) -> float:
    """Annuity payment, or interest only, rounded to cents."""
    if principal <= 0:
        return 0.0
    monthly_rate = annual_rate / 12
    if interest_only:
        return round_currency(principal * monthly_rate)
    if term_months <= 0:
        return round_currency(principal)
    if monthly_rate == 0:
        return round_currency(principal / term_months)
    factor = (1 + monthly_rate) ** term_months
    return round_currency(principal * monthly_rate * factor / (factor - 1))


def validate_finance_selection(
    deposit_ratio: float,
    term_years: int,
    fixed_period_years: int,
    config: SimulationConfig,
) -> None:
    """Raise ``InvalidSelectionError`` unless every choice is a listed option."""
    finance = config.finance
    if not any(math.isclose(deposit_ratio, option) for option in finance.deposit_options):
        raise InvalidSelectionError(f"Deposit of {deposit_ratio:.0%} is not an available option.")
    if term_years not in finance.term_options:
        raise InvalidSelectionError(f"A {term_years}-year term is not an available option.")
    if fixed_period_years not in finance.fixed_period_options:
        raise InvalidSelectionError(f"A {fixed_period_years}-year fixed period is not an available option.")


def create_mortgage(
    cost: float,
    deposit_ratio: float,
    term_years: int,
    fixed_period_years: int,
    interest_only: bool,
    central_bank_rate: float,
    config: SimulationConfig,
) -> Mortgage:
    """Originate a mortgage against a purchase price."""
    deposit = round(cost * deposit_ratio)
    principal = max(cost - deposit, 0)
    profile = derive_rate_profile(deposit_ratio, term_years, fixed_period_years, central_bank_rate, config)
    term_months = term_years * 12
    fixed_months = min(profile.fixed_period_years * 12, term_months)
    variable = fixed_months == 0
    rate = profile.reversion_rate if variable else profile.fixed_rate
    return Mortgage(
        deposit_ratio=deposit_ratio,
        deposit=deposit,
        principal=principal,
        term_months=term_months,
        fixed_period_months=fixed_months,
        interest_only=interest_only,
        annual_interest_rate=rate,
        reversion_rate=profile.reversion_rate,
        variable_margin=profile.variable_margin,
        monthly_payment=calculate_monthly_payment(principal, rate, term_months, interest_only),
        remaining_balance=principal,
        remaining_term_months=term_months,
        variable_rate_active=variable,
    )


def activate_variable_rate(mortgage: Mortgage, central_bank_rate: float, config: SimulationConfig) -> Mortgage:
    """Move onto the reversion rate, tracking the current base rate."""
    reversion = clamp_lending_rate(central_bank_rate + mortgage.variable_margin, config)
    return replace(
        mortgage,
        variable_rate_active=True,
        annual_interest_rate=reversion,
        reversion_rate=reversion,
        monthly_payment=calculate_monthly_payment(
            mortgage.remaining_balance, reversion, mortgage.remaining_term_months, mortgage.interest_only
        ),
    )


@dataclass(frozen=True)
class MortgagePayment:
    mortgage: Mortgage
    interest: float
    principal: float

    @property
    def total(self) -> float:
        return round_currency(self.interest + self.principal)


def amortize_month(mortgage: Mortgage, central_bank_rate: float, config: SimulationConfig) -> MortgagePayment:
    """Apply one monthly payment and reversion check."""
    if mortgage.is_mature:
        return MortgagePayment(mortgage, 0.0, 0.0)

    interest = round_currency(mortgage.remaining_balance * mortgage.monthly_interest_rate)
    if mortgage.interest_only:
        principal_paid = 0.0
    else:
        principal_paid = min(max(mortgage.monthly_payment - interest, 0.0), mortgage.remaining_balance)
    updated = replace(
        mortgage,
        remaining_balance=round_currency(mortgage.remaining_balance - principal_paid),
        remaining_term_months=mortgage.remaining_term_months - 1,
    )
    if not updated.variable_rate_active and updated.months_elapsed >= updated.fixed_period_months:
        updated = activate_variable_rate(updated, central_bank_rate, config)
    return MortgagePayment(updated, interest, round_currency(principal_paid))


@dataclass(frozen=True)
class MortgageServicing:
    property: PropertyRecord | None  # None once force-sold
    cash_flow: float = 0.0
    messages: list[str] = field(default_factory=list)


def service_mortgage(
    prop: PropertyRecord,
    balance: float,
    central_bank_rate: float,
    config: SimulationConfig,
) -> MortgageServicing:
    """Take the month's payment and settle a mortgage at maturity.

    Parameters
    ----------
    prop : PropertyRecord
        Portfolio property, possibly unmortgaged.
    balance : float
        Cash available before this property's mortgage step, including
        proceeds already realised in the same monthly batch.
    central_bank_rate : float
        Current base rate, used if the fixed period ends.
    config : SimulationConfig
        Finance settings.

    Returns
    -------
    MortgageServicing
        Updated property (or None after a forced sale), signed cash flow and
        history messages.
    """
    mortgage = prop.mortgage
    if mortgage is None:
        return MortgageServicing(prop)

    messages: list[str] = []
    cash_flow = 0.0
    if not mortgage.is_mature:
        payment = amortize_month(mortgage, central_bank_rate, config)
        cash_flow -= payment.total
        if payment.mortgage.variable_rate_active and not mortgage.variable_rate_active:
            messages.append(
                f"{prop.name} mortgage reverted to variable rate at "
                f"{format_interest_rate(payment.mortgage.annual_interest_rate)}. "
                f"New monthly payment {format_currency(payment.mortgage.monthly_payment)}."
            )
        mortgage = payment.mortgage

    negligible = config.finance.negligible_balance
    if not mortgage.interest_only:
        if mortgage.remaining_balance <= negligible or mortgage.is_mature:
            cash_flow -= mortgage.remaining_balance
            messages.append(f"Mortgage on {prop.name} fully repaid.")
            return MortgageServicing(replace(prop, mortgage=None), round_currency(cash_flow), messages)
        return MortgageServicing(replace(prop, mortgage=mortgage), round_currency(cash_flow), messages)

    if not mortgage.is_mature:
        return MortgageServicing(replace(prop, mortgage=mortgage), round_currency(cash_flow), messages)

    outstanding = mortgage.remaining_balance
    if outstanding <= negligible or balance + cash_flow >= outstanding:
        cash_flow -= outstanding
        messages.append(
            f"Repaid the {format_currency(outstanding)} interest-only balance on {prop.name}."
        )
        return MortgageServicing(replace(prop, mortgage=None), round_currency(cash_flow), messages)

    sale_price = adjusted_value(prop.base_value, prop.maintenance_percent)
    cash_flow += sale_price - outstanding
    logger.warning("Forced sale of %s: balloon %.2f exceeds available cash", prop.property_id, outstanding)
    messages.append(
        f"Forced sale of {prop.name}: the {format_currency(outstanding)} interest-only balance "
        f"could not be covered. Sold for {format_currency(sale_price)}, "
        f"net {format_currency(sale_price - outstanding)}."
    )
    return MortgageServicing(None, round_currency(cash_flow), messages)


def refinance_mortgage_terms(
    mortgage: Mortgage,
    cost: float,
    fixed_period_years: int,
    central_bank_rate: float,
    config: SimulationConfig,
) -> Mortgage:
    """Lock a new fixed rate on a mortgage that has reverted to variable.

    Raises
    ------
    IneligibleOperationError
        If the mortgage is still fixed or already repaid.
    """
    if not mortgage.variable_rate_active:
        raise IneligibleOperationError("The mortgage is still within its fixed-rate period.")
    if mortgage.remaining_balance <= config.finance.negligible_balance or mortgage.is_mature:
        raise IneligibleOperationError("The mortgage has no balance left to refinance.")

    positive_options = [o for o in config.finance.fixed_period_options if o > 0]
    fixed_years = int(snap_to_option(fixed_period_years, positive_options))
    fixed_months = min(fixed_years * 12, mortgage.remaining_term_months)
    equity_ratio = clamp(1 - mortgage.remaining_balance / cost, 0.0, 1.0) if cost > 0 else 0.0
    term_years = math.ceil(mortgage.remaining_term_months / 12)
    profile = derive_rate_profile(equity_ratio, term_years, fixed_years, central_bank_rate, config)

    return replace(
        mortgage,
        principal=mortgage.remaining_balance,
        term_months=mortgage.remaining_term_months,
        fixed_period_months=fixed_months,
        annual_interest_rate=profile.fixed_rate,
        reversion_rate=profile.reversion_rate,
        variable_margin=profile.variable_margin,
        monthly_payment=calculate_monthly_payment(
            mortgage.remaining_balance,
            profile.fixed_rate,
            mortgage.remaining_term_months,
            mortgage.interest_only,
        ),
        variable_rate_active=False,
    )
