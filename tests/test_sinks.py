"""Tests for the console sink."""

import json

import pytest

from conftest import make_mortgage, make_property, make_state
from estate_sim.models import Tenant
from estate_sim.sinks import ConsoleSink
from estate_sim.store import add_history_entries


class TestConsoleSink:
    """Tests for ConsoleSink."""

    def test_init_default(self) -> None:
        sink = ConsoleSink()

        assert sink.pretty is True
        assert sink.max_entries is None

    def test_write_history_truncates(self, capsys: pytest.CaptureFixture) -> None:
        state = add_history_entries(make_state(day=3), ["one", "two", "three"])
        sink = ConsoleSink(max_entries=2)

        sink.write_history(state.history)
        captured = capsys.readouterr()

        assert "one" not in captured.out
        assert "[day    3] three" in captured.out
        assert "1 earlier entries omitted" in captured.out

    def test_write_summary(self, capsys: pytest.CaptureFixture) -> None:
        let = make_property(
            "let",
            tenant=Tenant(monthly_rent=900, lease_months_remaining=4),
            mortgage=make_mortgage(50000),
        )
        state = make_state(balance=1250, portfolio=(let, make_property("vacant")))

        ConsoleSink().write_summary(state)
        captured = capsys.readouterr()

        assert "Balance $1,250" in captured.out
        assert "Base rate 3.75%" in captured.out
        assert "owes $50,000" in captured.out
        assert "Monthly cash flow -$100 (rent $900 - mortgages $1,000)" in captured.out
        assert "vacant" in captured.out
        assert "0 listings on the market" in captured.out

    def test_write_snapshot(self, capsys: pytest.CaptureFixture) -> None:
        sink = ConsoleSink(pretty=False)

        sink.write_snapshot(make_state(portfolio=(make_property(),)))
        data = json.loads(capsys.readouterr().out)

        assert data["portfolio"][0]["property_id"] == "prop-001"

    def test_close_reports_count(self, capsys: pytest.CaptureFixture) -> None:
        sink = ConsoleSink()
        sink.write_history(add_history_entries(make_state(), ["a", "b"]).history)
        sink.close()

        assert "Printed 2 history entries" in capsys.readouterr().out
