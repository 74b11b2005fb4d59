"""Market rotation: listing aging, expiry and replenishment."""

import logging
from dataclasses import replace

from estate_sim.config import SimulationConfig
from estate_sim.generators.base import RandomFn, random_int
from estate_sim.generators.listing import ListingGenerator
from estate_sim.models import GameState, PropertyRecord
from estate_sim.store import add_history_entries

logger = logging.getLogger(__name__)


def _join_names(listings: list[PropertyRecord]) -> str:
    return ", ".join(listing.name for listing in listings)


def rotate_market(
    state: GameState,
    config: SimulationConfig,
    generator: ListingGenerator,
    rand: RandomFn,
    elapsed_days: int = 1,
) -> GameState:
    """Age listings, drop expired ones and add new ones when due.

    New listings fill the market up to ``min_size`` when it is short,
    otherwise a random batch of 1 to ``batch_size`` is added, never beyond
    ``max_size``. The generation day only moves when listings are added.

    Parameters
    ----------
    state : GameState
        Current snapshot.
    config : SimulationConfig
        Market limits.
    generator : ListingGenerator
        Source of procedural listings.
    rand : RandomFn
        Randomness source.
    elapsed_days : int
        Days to age listings by.

    Returns
    -------
    GameState
        Updated snapshot; ``state`` itself when nothing changed.
    """
    market_config = config.market
    market = list(state.market)
    messages = []

    if elapsed_days > 0:
        aged = [replace(listing, market_age=listing.market_age + elapsed_days) for listing in market]
        expired = [listing for listing in aged if listing.market_age > market_config.max_age]
        market = [listing for listing in aged if listing.market_age <= market_config.max_age]
        if expired:
            noun = "Listing" if len(expired) == 1 else "Listings"
            messages.append(f"{noun} expired and left the market: {_join_names(expired)}.")

    last_generation = state.last_market_generation_day
    ready = state.day - last_generation >= market_config.generation_interval
    if ready and len(market) < market_config.max_size:
        if len(market) < market_config.min_size:
            count = market_config.min_size - len(market)
        else:
            count = random_int(rand, 1, max(market_config.batch_size, 1))
        count = min(count, market_config.max_size - len(market))
        if count > 0:
            new_listings = generator.generate_batch(count, state.day, state.central_bank_rate, rand)
            market.extend(new_listings)
            last_generation = state.day
            verb = "has" if len(new_listings) == 1 else "have"
            noun = "New listing" if len(new_listings) == 1 else "New listings"
            messages.append(f"{noun} {verb} entered the market: {_join_names(new_listings)}.")
            logger.info("Generated %d listings", len(new_listings), extra={"day": state.day})

    if elapsed_days <= 0 and last_generation == state.last_market_generation_day:
        return state

    updated = replace(state, market=tuple(market), last_market_generation_day=last_generation)
    return add_history_entries(updated, messages, config.history_limit)
