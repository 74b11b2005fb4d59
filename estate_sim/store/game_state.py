"""Snapshot helpers: history ring buffer and property lookup."""

import logging
from dataclasses import replace
from typing import Iterable

from estate_sim.exceptions import PropertyNotFoundError
from estate_sim.models import GameState, HistoryEntry, PropertyRecord

logger = logging.getLogger(__name__)

DEFAULT_HISTORY_LIMIT = 80


def add_history(state: GameState, message: str, limit: int = DEFAULT_HISTORY_LIMIT) -> GameState:
    """Append a message to the history, keeping only the newest ``limit`` entries."""
    return add_history_entries(state, [message], limit)


def add_history_entries(
    state: GameState,
    messages: Iterable[str],
    limit: int = DEFAULT_HISTORY_LIMIT,
) -> GameState:
    """Append several messages in order.

    Parameters
    ----------
    state : GameState
        Snapshot to extend.
    messages : Iterable[str]
        Messages to record against the current day.
    limit : int
        Ring buffer capacity.

    Returns
    -------
    GameState
        New snapshot, or ``state`` itself when there was nothing to add.
    """
    entries = list(state.history)
    next_id = state.next_history_id
    for message in messages:
        logger.debug("Day %d: %s", state.day, message)
        entries.append(HistoryEntry(entry_id=next_id, day=state.day, message=message))
        next_id += 1

    if next_id == state.next_history_id:
        return state

    return replace(state, history=tuple(entries[-limit:]), next_history_id=next_id)


def find_market_property(state: GameState, property_id: str) -> PropertyRecord:
    """Look up a listing by id.

    Raises
    ------
    PropertyNotFoundError
        If the listing is not on the market.
    """
    for prop in state.market:
        if prop.property_id == property_id:
            return prop
    raise PropertyNotFoundError(f"Listing {property_id} is no longer on the market.")


def find_portfolio_property(state: GameState, property_id: str) -> PropertyRecord:
    """Look up an owned property by id.

    Raises
    ------
    PropertyNotFoundError
        If the player does not own the property.
    """
    for prop in state.portfolio:
        if prop.property_id == property_id:
            return prop
    raise PropertyNotFoundError(f"Property {property_id} is not in your portfolio.")


def replace_portfolio_property(state: GameState, updated: PropertyRecord) -> GameState:
    """Swap in a new version of an owned property, preserving order."""
    find_portfolio_property(state, updated.property_id)
    portfolio = tuple(
        updated if prop.property_id == updated.property_id else prop
        for prop in state.portfolio
    )
    return replace(state, portfolio=portfolio)


def remove_portfolio_property(state: GameState, property_id: str) -> GameState:
    find_portfolio_property(state, property_id)
    portfolio = tuple(p for p in state.portfolio if p.property_id != property_id)
    return replace(state, portfolio=portfolio)


def remove_market_property(state: GameState, property_id: str) -> GameState:
    find_market_property(state, property_id)
    market = tuple(p for p in state.market if p.property_id != property_id)
    return replace(state, market=market)


def monthly_rent_income(state: GameState) -> float:
    """Rent currently owed each month by sitting tenants."""
    return round(sum(p.tenant.monthly_rent for p in state.portfolio if p.tenant), 2)


def monthly_mortgage_payments(state: GameState) -> float:
    return round(sum(p.mortgage.monthly_payment for p in state.portfolio if p.mortgage), 2)


def monthly_cash_flow(state: GameState) -> float:
    """Projected net monthly cash flow: tenant rent less mortgage payments."""
    return round(monthly_rent_income(state) - monthly_mortgage_payments(state), 2)
