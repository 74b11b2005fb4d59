"""Daily tick orchestrator and monthly portfolio batch."""

from __future__ import annotations

import logging
from dataclasses import replace

from estate_sim.config import SimulationConfig
from estate_sim.engine.central_bank import adjust_central_bank_rate
from estate_sim.engine.maintenance import advance_work_order
from estate_sim.engine.market import rotate_market
from estate_sim.engine.mortgage import service_mortgage
from estate_sim.engine.rounding import round_currency
from estate_sim.engine.tenancy import progress_tenancy
from estate_sim.engine.valuation import decay_maintenance
from estate_sim.generators.base import RandomFn
from estate_sim.generators.listing import ListingGenerator
from estate_sim.models import GameState, PropertyRecord
from estate_sim.store import add_history_entries

logger = logging.getLogger(__name__)


def decay_all_properties(state: GameState, config: SimulationConfig, days: int = 1) -> GameState:
    """Apply daily condition decay to listings and owned properties.

    Listings wear at the vacant rate even when they carry an inherited tenant.
    """
    return replace(
        state,
        market=tuple(decay_maintenance(prop, days, config, vacant=True) for prop in state.market),
        portfolio=tuple(decay_maintenance(prop, days, config) for prop in state.portfolio),
    )


def process_property_month(
    prop: PropertyRecord,
    balance: float,
    central_bank_rate: float,
    config: SimulationConfig,
    rand: RandomFn,
) -> tuple[PropertyRecord | None, float, list[str]]:
    """Run tenancy, mortgage and maintenance steps for one property.

    Returns the updated property (None if force-sold), the signed cash
    flow and the history messages, in that order.
    """
    tenancy = progress_tenancy(prop, central_bank_rate, config, rand)
    cash_flow = tenancy.rent_collected
    messages = list(tenancy.messages)

    servicing = service_mortgage(tenancy.property, balance + cash_flow, central_bank_rate, config)
    cash_flow += servicing.cash_flow
    messages.extend(servicing.messages)
    if servicing.property is None:
        return None, round_currency(cash_flow), messages

    work = advance_work_order(servicing.property)
    cash_flow -= work.cost_paid
    messages.extend(work.messages)
    return work.property, round_currency(cash_flow), messages


def run_monthly_batch(state: GameState, config: SimulationConfig, rand: RandomFn) -> GameState:
    """Process one month for every owned property in portfolio order.

    The running balance carries from one property to the next so a later
    balloon payment can use cash realised earlier in the same batch.
    """
    balance = state.balance
    portfolio = []
    messages: list[str] = []
    for prop in state.portfolio:
        updated, cash_flow, property_messages = process_property_month(
            prop, balance, state.central_bank_rate, config, rand
        )
        balance = round_currency(balance + cash_flow)
        messages.extend(property_messages)
        if updated is not None:
            portfolio.append(updated)

    updated_state = replace(state, balance=balance, portfolio=tuple(portfolio))
    return add_history_entries(updated_state, messages, config.history_limit)


def collect_due_months(state: GameState, config: SimulationConfig, rand: RandomFn) -> GameState:
    """Run one batch per whole month elapsed since the last collection."""
    months = (state.day - state.last_rent_collection_day) // config.days_per_month
    if months <= 0:
        return state
    for _ in range(months):
        state = run_monthly_batch(state, config, rand)
    logger.debug("Processed %d monthly batch(es) on day %d", months, state.day)
    return replace(
        state,
        last_rent_collection_day=state.last_rent_collection_day + months * config.days_per_month,
    )


def advance_day(
    state: GameState,
    config: SimulationConfig,
    generator: ListingGenerator,
    rand: RandomFn,
) -> GameState:
    """Advance the simulation by one day.

    Parameters
    ----------
    state : GameState
        Committed snapshot; never modified.
    config : SimulationConfig
        Simulation settings.
    generator : ListingGenerator
        Source of new listings.
    rand : RandomFn
        Randomness source shared by every stochastic step.

    Returns
    -------
    GameState
        Snapshot after market rotation, condition decay, any due monthly
        batches and any due central bank adjustments.
    """
    state = replace(state, day=state.day + 1)
    state = rotate_market(state, config, generator, rand)
    state = decay_all_properties(state, config)
    state = collect_due_months(state, config, rand)
    return adjust_central_bank_rate(state, config, rand)
