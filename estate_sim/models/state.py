"""Game snapshot and action outcome models."""

from __future__ import annotations

from dataclasses import dataclass

from estate_sim.models.base import HistoryEntry
from estate_sim.models.enums import ErrorTag
from estate_sim.models.property import PropertyRecord


@dataclass(frozen=True)
class GameState:
    """Immutable snapshot of a running game.

    Every reducer returns a new snapshot; collections are tuples so a
    snapshot can be shared with a UI layer as is.
    """

    balance: float
    day: int
    central_bank_rate: float
    market: tuple[PropertyRecord, ...] = ()
    portfolio: tuple[PropertyRecord, ...] = ()
    history: tuple[HistoryEntry, ...] = ()
    last_central_bank_adjustment_day: int = 0
    last_market_generation_day: int = 0
    last_rent_collection_day: int = 0
    next_history_id: int = 1


@dataclass(frozen=True)
class ActionOutcome:
    """Result of a player action."""

    success: bool
    message: str = ""
    error: ErrorTag | None = None

    @classmethod
    def ok(cls, message: str = "") -> ActionOutcome:
        return cls(success=True, message=message)

    @classmethod
    def failed(cls, message: str, error: ErrorTag | None) -> ActionOutcome:
        return cls(success=False, message=message, error=error)


@dataclass(frozen=True)
class ActionResult:
    """Snapshot produced by an action paired with its outcome."""

    state: GameState
    outcome: ActionOutcome
