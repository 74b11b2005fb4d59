"""Mortgage models."""

from dataclasses import dataclass


@dataclass(frozen=True)
class RateProfile:
    """Rates quoted for a deposit, term and fixed period at a given base rate."""

    base_rate: float
    variable_margin: float
    reversion_rate: float
    fixed_rate: float
    fixed_period_years: int


@dataclass(frozen=True)
class Mortgage:
    """Mortgage attached to a portfolio property."""

    deposit_ratio: float
    deposit: int
    principal: float
    term_months: int
    fixed_period_months: int
    interest_only: bool
    annual_interest_rate: float  # Fixed rate until reversion, variable after
    reversion_rate: float
    variable_margin: float
    monthly_payment: float
    remaining_balance: float
    remaining_term_months: int
    variable_rate_active: bool = False

    @property
    def monthly_interest_rate(self) -> float:
        return self.annual_interest_rate / 12

    @property
    def months_elapsed(self) -> int:
        return self.term_months - self.remaining_term_months

    @property
    def is_mature(self) -> bool:
        return self.remaining_term_months <= 0
