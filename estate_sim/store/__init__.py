"""In-memory snapshot helpers."""

from estate_sim.store.game_state import (
    add_history,
    add_history_entries,
    find_market_property,
    find_portfolio_property,
    monthly_cash_flow,
    monthly_mortgage_payments,
    monthly_rent_income,
    remove_market_property,
    remove_portfolio_property,
    replace_portfolio_property,
)

__all__ = [
    "add_history",
    "add_history_entries",
    "find_market_property",
    "find_portfolio_property",
    "monthly_cash_flow",
    "monthly_mortgage_payments",
    "monthly_rent_income",
    "remove_market_property",
    "remove_portfolio_property",
    "replace_portfolio_property",
]
