"""Central bank base rate random walk."""

import logging
from dataclasses import replace

from estate_sim.config import SimulationConfig
from estate_sim.engine.rounding import clamp, round_rate
from estate_sim.formatting import format_interest_rate
from estate_sim.generators.base import RandomFn
from estate_sim.models import GameState, RateDecision
from estate_sim.store import add_history_entries

logger = logging.getLogger(__name__)


def next_base_rate(rate: float, config: SimulationConfig, rand: RandomFn) -> tuple[float, RateDecision]:
    """Draw one uniform step in ``[-max_step, +max_step]`` and clamp."""
    bank = config.central_bank
    step = (rand() * 2 - 1) * bank.max_step_per_adjustment
    new_rate = round_rate(clamp(rate + step, bank.minimum_rate, bank.maximum_rate))
    if new_rate > rate:
        return new_rate, RateDecision.INCREASE
    if new_rate < rate:
        return new_rate, RateDecision.DECREASE
    return new_rate, RateDecision.HOLD


def adjust_central_bank_rate(state: GameState, config: SimulationConfig, rand: RandomFn) -> GameState:
    """Run one adjustment per whole interval elapsed since the last one."""
    interval = config.central_bank.adjustment_interval_days
    if interval <= 0:
        return state
    adjustments = (state.day - state.last_central_bank_adjustment_day) // interval
    if adjustments <= 0:
        return state

    rate = state.central_bank_rate
    messages = []
    for _ in range(adjustments):
        rate, decision = next_base_rate(rate, config, rand)
        if decision is RateDecision.HOLD:
            messages.append(f"Central bank held the base rate at {format_interest_rate(rate)}.")
        else:
            messages.append(f"Central bank {decision.value} the base rate to {format_interest_rate(rate)}.")
        logger.info("Base rate %s to %.4f", decision.value, rate, extra={"day": state.day})

    updated = replace(
        state,
        central_bank_rate=rate,
        last_central_bank_adjustment_day=state.last_central_bank_adjustment_day + adjustments * interval,
    )
    return add_history_entries(updated, messages, config.history_limit)
