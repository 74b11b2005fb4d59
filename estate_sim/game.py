"""Game facade holding the committed snapshot, randomness and clock."""

from __future__ import annotations

import logging

from estate_sim.config import SimulationConfig
from estate_sim.engine import actions
from estate_sim.engine.clock import GameClock
from estate_sim.engine.tick import advance_day
from estate_sim.exceptions import InvalidSelectionError
from estate_sim.formatting import format_currency, format_interest_rate
from estate_sim.generators.base import RandomFn, seeded_random
from estate_sim.generators.listing import ListingGenerator
from estate_sim.models import ActionOutcome, GameState
from estate_sim.store import add_history, add_history_entries

logger = logging.getLogger(__name__)


def create_initial_state(config: SimulationConfig, generator: ListingGenerator) -> GameState:
    """Opening snapshot: starting cash, base rate and the default listings."""
    state = GameState(
        balance=config.starting_balance,
        day=config.starting_day,
        central_bank_rate=config.central_bank.initial_rate,
        market=tuple(generator.initial_market(config.starting_day)),
    )
    return add_history_entries(
        state,
        [
            f"New game started with {format_currency(config.starting_balance)}.",
            f"Central bank base rate set at {format_interest_rate(config.central_bank.initial_rate)}.",
        ],
        config.history_limit,
    )


class PropertyGame:
    """Single-player game session.

    Every mutating call computes a new snapshot from the committed one and
    commits it only when the computation finishes, so an exception during a
    tick leaves the previous snapshot in place.

    Parameters
    ----------
    config : SimulationConfig | None
        Simulation settings (defaults when omitted).
    seed : int | None
        Seed for the default randomness source and for Faker.
    rand : RandomFn | None
        Injected randomness source; overrides ``seed`` for behaviour.
    """

    def __init__(
        self,
        config: SimulationConfig | None = None,
        seed: int | None = None,
        rand: RandomFn | None = None,
    ) -> None:
        self.config = config or SimulationConfig()
        self.config.validate()
        self.seed = seed if seed is not None else self.config.seed
        self._rand = rand or seeded_random(self.seed)
        self._generator = ListingGenerator(config=self.config, seed=self.seed)
        self.clock = GameClock(self.config.default_speed_ms)
        self._state = create_initial_state(self.config, self._generator)

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def is_paused(self) -> bool:
        return self.clock.is_paused

    def restore(self, state: GameState) -> None:
        """Replace the committed snapshot, e.g. from a UI-side save."""
        self._state = state

    def advance_day(self) -> GameState:
        self._state = advance_day(self._state, self.config, self._generator, self._rand)
        return self._state

    def run(self, days: int) -> GameState:
        """Advance ``days`` days unless paused."""
        for _ in range(days):
            if self.clock.is_paused:
                break
            self.advance_day()
        return self._state

    def set_game_speed(self, interval_ms: int) -> ActionOutcome:
        try:
            self.clock.set_interval(interval_ms)
        except InvalidSelectionError as exc:
            self._state = add_history(self._state, str(exc), self.config.history_limit)
            return ActionOutcome.failed(str(exc), exc.tag)
        message = f"Game speed set to {self.clock.speed_multiplier:.1f}x."
        self._state = add_history(self._state, message, self.config.history_limit)
        return ActionOutcome.ok(message)

    def pause_game(self) -> None:
        self.clock.pause()

    def resume_game(self) -> None:
        self.clock.resume()

    def set_paused(self, paused: bool) -> None:
        self.clock.set_paused(paused)

    def reset_game(self) -> GameState:
        """Start over with a fresh snapshot and clock."""
        self.clock.reset(self.config.default_speed_ms)
        state = create_initial_state(self.config, self._generator)
        self._state = add_history(state, "Game reset.", self.config.history_limit)
        logger.info("Game reset", extra={"day": self._state.day})
        return self._state

    def purchase_with_cash(self, property_id: str) -> ActionOutcome:
        return self._apply(actions.purchase_with_cash, property_id)

    def finance_purchase(
        self,
        property_id: str,
        deposit_ratio: float | None = None,
        term_years: int | None = None,
        fixed_period_years: int | None = None,
        interest_only: bool = False,
    ) -> ActionOutcome:
        finance = self.config.finance
        return self._apply(
            actions.finance_purchase,
            property_id,
            finance.default_deposit_ratio if deposit_ratio is None else deposit_ratio,
            finance.default_term_years if term_years is None else term_years,
            finance.default_fixed_period_years if fixed_period_years is None else fixed_period_years,
            interest_only,
        )

    def sell_property(self, property_id: str) -> ActionOutcome:
        return self._apply(actions.sell_property, property_id)

    def schedule_maintenance(self, property_id: str) -> ActionOutcome:
        return self._apply(actions.schedule_maintenance, property_id)

    def set_auto_relist(self, property_id: str, enabled: bool) -> ActionOutcome:
        return self._apply(actions.set_auto_relist, property_id, enabled)

    def set_rental_marketing_active(self, property_id: str, active: bool) -> ActionOutcome:
        return self._apply(actions.set_rental_marketing_active, property_id, active)

    def set_rent_plan(self, property_id: str, lease_months: int, rate_offset: float) -> ActionOutcome:
        return self._apply(actions.set_rent_plan, property_id, lease_months, rate_offset)

    def refinance_mortgage(self, property_id: str, fixed_period_years: int | None = None) -> ActionOutcome:
        if fixed_period_years is None:
            fixed_period_years = self.config.finance.default_fixed_period_years
        return self._apply(actions.refinance_mortgage, property_id, fixed_period_years)

    def _apply(self, reducer: actions.Reducer, *args) -> ActionOutcome:
        result = actions.apply_action(self._state, self.config, reducer, *args)
        self._state = result.state
        if result.outcome.success:
            logger.info("%s succeeded", reducer.__name__, extra={"day": self._state.day})
        return result.outcome
