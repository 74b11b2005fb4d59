"""Tick interval and pause gate for an external scheduler."""

from estate_sim.exceptions import InvalidSelectionError


class GameClock:
    """Advisory clock state read by whatever drives ``advance_day``.

    Pauses nest: the first ``pause`` remembers whether the game was already
    paused and the matching last ``resume`` restores that state.
    """

    def __init__(self, interval_ms: int = 1000, paused: bool = False) -> None:
        if interval_ms <= 0:
            raise InvalidSelectionError("Tick interval must be positive.")
        self.interval_ms = interval_ms
        self._paused = paused
        self._pause_depth = 0
        self._paused_before = paused

    @property
    def is_paused(self) -> bool:
        return self._paused

    @property
    def pause_depth(self) -> int:
        return self._pause_depth

    @property
    def speed_multiplier(self) -> float:
        return 1000 / self.interval_ms

    def set_interval(self, interval_ms: int) -> None:
        if interval_ms <= 0:
            raise InvalidSelectionError(f"Tick interval of {interval_ms}ms is not valid.")
        self.interval_ms = interval_ms

    def set_paused(self, paused: bool) -> None:
        """User toggle; outside any nested pause it takes effect directly."""
        if self._pause_depth > 0:
            self._paused_before = paused
        else:
            self._paused = paused

    def pause(self) -> None:
        if self._pause_depth == 0:
            self._paused_before = self._paused
        self._pause_depth += 1
        self._paused = True

    def resume(self) -> None:
        if self._pause_depth == 0:
            return
        self._pause_depth -= 1
        if self._pause_depth == 0:
            self._paused = self._paused_before

    def reset(self, interval_ms: int | None = None) -> None:
        self._pause_depth = 0
        self._paused = False
        self._paused_before = False
        if interval_ms is not None:
            self.set_interval(interval_ms)
