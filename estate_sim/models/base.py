"""Base models shared across the simulation."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Location:
    """Neighbourhood attributes that drive valuation."""

    proximity: float  # 0-1, closeness to the city centre
    school_rating: int  # 1-10
    crime_score: int = 5  # 1-10, higher is worse


@dataclass(frozen=True)
class HistoryEntry:
    """Single line of the player-facing activity log."""

    entry_id: int
    day: int
    message: str
