"""Tests for snapshot helpers in estate_sim.store."""

import pytest

from conftest import make_mortgage, make_property, make_state
from estate_sim.models import Tenant
from estate_sim.exceptions import PropertyNotFoundError
from estate_sim.store import (
    add_history,
    add_history_entries,
    find_market_property,
    find_portfolio_property,
    monthly_cash_flow,
    monthly_mortgage_payments,
    monthly_rent_income,
    remove_market_property,
    remove_portfolio_property,
    replace_portfolio_property,
)


class TestHistory:
    """Tests for the history ring buffer."""

    def test_add_history_stamps_day_and_id(self) -> None:
        state = add_history(make_state(day=12), "Hello")

        entry = state.history[0]
        assert entry.entry_id == 1
        assert entry.day == 12
        assert entry.message == "Hello"
        assert state.next_history_id == 2

    def test_ring_buffer_keeps_newest(self) -> None:
        state = add_history_entries(make_state(), [f"event {i}" for i in range(100)])

        assert len(state.history) == 80
        assert state.history[0].message == "event 20"
        assert state.history[-1].entry_id == 100
        assert state.next_history_id == 101

    def test_custom_limit(self) -> None:
        state = add_history_entries(make_state(), ["a", "b", "c"], limit=2)

        assert [e.message for e in state.history] == ["b", "c"]

    def test_no_messages_returns_same_state(self) -> None:
        state = make_state()

        assert add_history_entries(state, []) is state


class TestPropertyLookup:
    """Tests for market and portfolio lookups."""

    def test_find_and_remove_market_property(self) -> None:
        listing = make_property("listing-1")
        state = make_state(market=(listing, make_property("listing-2")))

        assert find_market_property(state, "listing-1") is listing
        updated = remove_market_property(state, "listing-1")
        assert [p.property_id for p in updated.market] == ["listing-2"]

    def test_missing_market_property(self) -> None:
        with pytest.raises(PropertyNotFoundError):
            find_market_property(make_state(), "missing")

    def test_replace_preserves_order(self) -> None:
        first, second = make_property("a"), make_property("b")
        state = make_state(portfolio=(first, second))

        updated = replace_portfolio_property(state, make_property("a", maintenance_percent=50.0))

        assert [p.property_id for p in updated.portfolio] == ["a", "b"]
        assert updated.portfolio[0].maintenance_percent == 50.0
        assert state.portfolio[0] is first

    def test_remove_missing_portfolio_property(self) -> None:
        with pytest.raises(PropertyNotFoundError):
            remove_portfolio_property(make_state(), "missing")

    def test_find_portfolio_property(self) -> None:
        prop = make_property("owned")

        assert find_portfolio_property(make_state(portfolio=(prop,)), "owned") is prop


class TestMonthlyCashFlow:
    """Tests for projected monthly cash flow."""

    def test_rent_less_mortgage_payments(self) -> None:
        let = make_property("let", tenant=Tenant(monthly_rent=1250.5, lease_months_remaining=6))
        mortgaged = make_property("mortgaged", mortgage=make_mortgage(monthly_payment=400.25))
        both = make_property(
            "both",
            tenant=Tenant(monthly_rent=900, lease_months_remaining=3),
            mortgage=make_mortgage(monthly_payment=700),
        )
        state = make_state(portfolio=(let, mortgaged, both), market=(make_property("listing"),))

        assert monthly_rent_income(state) == 2150.5
        assert monthly_mortgage_payments(state) == 1100.25
        assert monthly_cash_flow(state) == 1050.25

    def test_empty_portfolio(self) -> None:
        assert monthly_cash_flow(make_state()) == 0
