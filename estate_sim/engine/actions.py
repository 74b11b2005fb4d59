"""Player actions as pure reducers over ``GameState``.

Each reducer takes ``(state, config, ...)`` and either returns a new
snapshot or raises an ``EstateSimError``. ``apply_action`` turns a raised
error into a rejected outcome with a history entry.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any, Callable

from estate_sim.config import SimulationConfig
from estate_sim.engine.maintenance import schedule_work_order
from estate_sim.engine.mortgage import (
    create_mortgage,
    refinance_mortgage_terms,
    validate_finance_selection,
)
from estate_sim.engine.rent import find_rent_plan, snap_rent_terms
from estate_sim.engine.rounding import round_currency
from estate_sim.engine.valuation import adjusted_value
from estate_sim.exceptions import (
    EstateSimError,
    IneligibleOperationError,
    InsufficientFundsError,
)
from estate_sim.formatting import (
    format_currency,
    format_interest_rate,
    format_percentage,
    format_rate_offset,
)
from estate_sim.models import ActionOutcome, ActionResult, GameState
from estate_sim.store import (
    add_history,
    find_market_property,
    find_portfolio_property,
    remove_market_property,
    remove_portfolio_property,
    replace_portfolio_property,
)

logger = logging.getLogger(__name__)

Reducer = Callable[..., GameState]


def purchase_with_cash(state: GameState, config: SimulationConfig, property_id: str) -> GameState:
    listing = find_market_property(state, property_id)
    if listing.cost > state.balance:
        raise InsufficientFundsError(
            f"Cannot afford {listing.name}: it costs {format_currency(listing.cost)} "
            f"and you have {format_currency(state.balance)}."
        )
    state = remove_market_property(state, property_id)
    state = replace(
        state,
        balance=round_currency(state.balance - listing.cost),
        portfolio=state.portfolio + (listing,),
    )
    return add_history(
        state,
        f"Purchased {listing.name} outright for {format_currency(listing.cost)}.",
        config.history_limit,
    )


def finance_purchase(
    state: GameState,
    config: SimulationConfig,
    property_id: str,
    deposit_ratio: float,
    term_years: int,
    fixed_period_years: int,
    interest_only: bool = False,
) -> GameState:
    listing = find_market_property(state, property_id)
    validate_finance_selection(deposit_ratio, term_years, fixed_period_years, config)
    mortgage = create_mortgage(
        listing.cost,
        deposit_ratio,
        term_years,
        fixed_period_years,
        interest_only,
        state.central_bank_rate,
        config,
    )
    if mortgage.deposit > state.balance:
        raise InsufficientFundsError(
            f"Cannot finance {listing.name}: the {format_currency(mortgage.deposit)} deposit "
            f"exceeds your {format_currency(state.balance)} balance."
        )
    state = remove_market_property(state, property_id)
    state = replace(
        state,
        balance=round_currency(state.balance - mortgage.deposit),
        portfolio=state.portfolio + (replace(listing, mortgage=mortgage),),
    )
    kind = "interest-only" if interest_only else "repayment"
    return add_history(
        state,
        f"Financed {listing.name} with a {format_currency(mortgage.deposit)} deposit and a "
        f"{term_years}-year {kind} mortgage at {format_interest_rate(mortgage.annual_interest_rate)} "
        f"({format_currency(mortgage.monthly_payment)} per month).",
        config.history_limit,
    )


def sell_property(state: GameState, config: SimulationConfig, property_id: str) -> GameState:
    prop = find_portfolio_property(state, property_id)
    if prop.has_active_maintenance:
        raise IneligibleOperationError(
            f"Sale attempt blocked: Maintenance work must be complete before selling {prop.name}."
        )
    threshold = config.maintenance.critical_threshold
    if prop.maintenance_percent < threshold:
        raise IneligibleOperationError(
            f"Sale attempt blocked: {prop.name} maintenance is at {format_percentage(prop.maintenance_percent)}, "
            f"below the {format_percentage(threshold, 0)} minimum."
        )

    sale_price = adjusted_value(prop.base_value, prop.maintenance_percent)
    outstanding = prop.mortgage.remaining_balance if prop.mortgage else 0.0
    proceeds = round_currency(sale_price - outstanding)
    state = remove_portfolio_property(state, property_id)
    state = replace(state, balance=round_currency(state.balance + proceeds))

    message = f"Sold {prop.name} for {format_currency(sale_price)}"
    if outstanding > 0:
        message += f". Repaid {format_currency(outstanding)} outstanding and netted {format_currency(proceeds)}."
    else:
        message += f" and netted {format_currency(proceeds)}."
    return add_history(state, message, config.history_limit)


def schedule_maintenance(state: GameState, config: SimulationConfig, property_id: str) -> GameState:
    prop = find_portfolio_property(state, property_id)
    updated, message = schedule_work_order(prop, state.day, state.balance, config)
    return add_history(replace_portfolio_property(state, updated), message, config.history_limit)


def set_auto_relist(state: GameState, config: SimulationConfig, property_id: str, enabled: bool) -> GameState:
    prop = find_portfolio_property(state, property_id)
    if prop.auto_relist == enabled:
        return state
    state = replace_portfolio_property(state, replace(prop, auto_relist=enabled))
    verb = "Enabled" if enabled else "Disabled"
    return add_history(state, f"{verb} auto-relisting for {prop.name}.", config.history_limit)


def set_rental_marketing_active(
    state: GameState,
    config: SimulationConfig,
    property_id: str,
    active: bool,
) -> GameState:
    """Start or stop a one-off advertising campaign for a vacant property."""
    prop = find_portfolio_property(state, property_id)
    if active and prop.tenant is not None:
        raise IneligibleOperationError(f"{prop.name} already has a tenant.")
    if active and (prop.has_active_maintenance or prop.marketing_paused_for_maintenance):
        raise IneligibleOperationError(f"{prop.name} cannot be marketed while maintenance is underway.")
    if prop.rental_marketing_active == active:
        return state
    state = replace_portfolio_property(state, replace(prop, rental_marketing_active=active))
    message = (
        f"Started marketing {prop.name} to prospective tenants."
        if active
        else f"Stopped marketing {prop.name}."
    )
    return add_history(state, message, config.history_limit)


def set_rent_plan(
    state: GameState,
    config: SimulationConfig,
    property_id: str,
    lease_months: int,
    rate_offset: float,
) -> GameState:
    prop = find_portfolio_property(state, property_id)
    terms = snap_rent_terms(lease_months, rate_offset, config)
    if terms == prop.rent_terms:
        return state
    updated = replace(prop, rent_terms=terms)
    plan = find_rent_plan(updated, terms, state.central_bank_rate, config)
    state = replace_portfolio_property(state, updated)
    return add_history(
        state,
        f"Updated {prop.name} to a {terms.lease_months}-month lease with a "
        f"{format_rate_offset(terms.rate_offset)} rent premium "
        f"({format_currency(plan.monthly_rent)} per month).",
        config.history_limit,
    )


def refinance_mortgage(
    state: GameState,
    config: SimulationConfig,
    property_id: str,
    fixed_period_years: int,
) -> GameState:
    prop = find_portfolio_property(state, property_id)
    if prop.mortgage is None:
        raise IneligibleOperationError(f"{prop.name} has no mortgage to refinance.")
    mortgage = refinance_mortgage_terms(
        prop.mortgage, prop.cost, fixed_period_years, state.central_bank_rate, config
    )
    state = replace_portfolio_property(state, replace(prop, mortgage=mortgage))
    return add_history(
        state,
        f"Locked a new fixed rate on {prop.name} at {format_interest_rate(mortgage.annual_interest_rate)} "
        f"for {mortgage.fixed_period_months} months. New monthly payment "
        f"{format_currency(mortgage.monthly_payment)}.",
        config.history_limit,
    )


def apply_action(
    state: GameState,
    config: SimulationConfig,
    reducer: Reducer,
    *args: Any,
    **kwargs: Any,
) -> ActionResult:
    """Run a reducer, recording a rejection instead of raising.

    On failure the prior snapshot is kept and only a history entry with the
    reason is added.
    """
    try:
        updated = reducer(state, config, *args, **kwargs)
    except EstateSimError as exc:
        logger.warning("%s rejected: %s", reducer.__name__, exc, extra={"day": state.day})
        rejected = add_history(state, str(exc), config.history_limit)
        return ActionResult(rejected, ActionOutcome.failed(str(exc), exc.tag))

    message = updated.history[-1].message if updated.next_history_id != state.next_history_id else ""
    return ActionResult(updated, ActionOutcome.ok(message))
