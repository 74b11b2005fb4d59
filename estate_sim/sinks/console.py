"""Console sink for headless runs and debugging."""

import json
from typing import Iterable

from estate_sim.formatting import (
    format_currency,
    format_interest_rate,
    format_lease_countdown,
    format_percentage,
    format_property_type,
)
from estate_sim.models import GameState, HistoryEntry
from estate_sim.sinks.serialization import state_to_dict
from estate_sim.store import monthly_cash_flow, monthly_mortgage_payments, monthly_rent_income


class ConsoleSink:
    """Print history and portfolio summaries to stdout."""

    def __init__(self, pretty: bool = True, max_entries: int | None = None) -> None:
        """Initialize console sink.

        Parameters
        ----------
        pretty : bool
            Pretty-print JSON snapshots.
        max_entries : int | None
            Maximum history entries to print per call (None for all).
        """
        self.pretty = pretty
        self.max_entries = max_entries
        self._printed = 0

    def write_history(self, entries: Iterable[HistoryEntry]) -> None:
        entries = list(entries)
        shown = entries[-self.max_entries:] if self.max_entries else entries
        for entry in shown:
            print(f"[day {entry.day:>4}] {entry.message}")
        if self.max_entries and len(entries) > self.max_entries:
            print(f"... {len(entries) - self.max_entries} earlier entries omitted")
        self._printed += len(shown)

    def write_summary(self, state: GameState) -> None:
        print(f"\n{'='*60}")
        print(
            f"Day {state.day} | Balance {format_currency(state.balance)} | "
            f"Base rate {format_interest_rate(state.central_bank_rate)}"
        )
        print(
            f"Monthly cash flow {format_currency(monthly_cash_flow(state))} "
            f"(rent {format_currency(monthly_rent_income(state))} - "
            f"mortgages {format_currency(monthly_mortgage_payments(state))})"
        )
        print("=" * 60)
        for prop in state.portfolio:
            occupancy = (
                f"let, {format_lease_countdown(prop.tenant.lease_months_remaining)}"
                if prop.tenant
                else "vacant"
            )
            debt = (
                f", owes {format_currency(prop.mortgage.remaining_balance)}"
                if prop.mortgage
                else ""
            )
            print(
                f"  {prop.name} ({format_property_type(prop.property_type)}): "
                f"{format_currency(prop.cost)} at {format_percentage(prop.maintenance_percent)}, "
                f"{occupancy}{debt}"
            )
        print(f"  {len(state.market)} listings on the market")

    def write_snapshot(self, state: GameState) -> None:
        data = state_to_dict(state)
        print(json.dumps(data, indent=2 if self.pretty else None, ensure_ascii=False, default=str))

    def close(self) -> None:
        """Print summary and close."""
        print(f"\nPrinted {self._printed} history entries")
