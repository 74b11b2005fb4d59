"""Maintenance work orders: scheduling and monthly progression."""

from __future__ import annotations

from dataclasses import dataclass, field, replace

from estate_sim.config import SimulationConfig
from estate_sim.engine.valuation import estimate_maintenance_cost, with_maintenance
from estate_sim.exceptions import IneligibleOperationError, InsufficientFundsError
from estate_sim.formatting import format_currency, format_percentage
from estate_sim.models import MaintenanceWorkOrder, PropertyRecord


@dataclass(frozen=True)
class WorkOrderProgress:
    property: PropertyRecord
    cost_paid: float = 0.0
    messages: list[str] = field(default_factory=list)


def schedule_work_order(
    prop: PropertyRecord,
    day: int,
    balance: float,
    config: SimulationConfig,
) -> tuple[PropertyRecord, str]:
    """Attach a work order to a property.

    Work waits for the current tenant to leave; with no tenant it starts
    immediately and marketing is paused.

    Raises
    ------
    IneligibleOperationError
        If work is already scheduled or the property is in full condition.
    InsufficientFundsError
        If the projected cost exceeds ``balance``.
    """
    if prop.maintenance_work is not None:
        raise IneligibleOperationError(f"Maintenance is already scheduled for {prop.name}.")
    if prop.maintenance_percent >= 100:
        raise IneligibleOperationError(f"{prop.name} is already in full condition.")

    estimate = estimate_maintenance_cost(prop, config)
    if estimate.projected_cost > balance:
        raise InsufficientFundsError(
            f"Maintenance for {prop.name} costs {format_currency(estimate.projected_cost)}, "
            f"but only {format_currency(balance)} is available."
        )

    order = MaintenanceWorkOrder(
        months_remaining=config.maintenance.work_duration_months,
        start_delay_months=estimate.delay_months,
        cost=estimate.projected_cost,
        scheduled_on_day=day,
    )
    if estimate.delay_months > 0:
        updated = replace(prop, maintenance_work=order)
        message = (
            f"Scheduled maintenance for {prop.name} once the current lease ends in "
            f"{estimate.delay_months} months. Estimated cost {format_currency(order.cost)}."
        )
    else:
        updated = replace(
            prop,
            maintenance_work=order,
            marketing_paused_for_maintenance=True,
            rental_marketing_active=False,
        )
        message = (
            f"Maintenance started at {prop.name}. Marketing is paused until work completes. "
            f"Estimated cost {format_currency(order.cost)}."
        )
    return updated, message


def advance_work_order(prop: PropertyRecord) -> WorkOrderProgress:
    """Advance a work order by one month.

    The start delay counts down first; the month work begins does not count
    towards its duration. On completion the locked cost is charged and
    condition snaps to 100%.
    """
    work = prop.maintenance_work
    if work is None:
        return WorkOrderProgress(prop)

    if work.start_delay_months > 0:
        delay = work.start_delay_months - 1
        if delay > 0:
            return WorkOrderProgress(
                replace(prop, maintenance_work=replace(work, start_delay_months=delay))
            )
        started = replace(
            prop,
            maintenance_work=replace(work, start_delay_months=0),
            tenant=None,
            marketing_paused_for_maintenance=True,
            rental_marketing_active=False,
        )
        return WorkOrderProgress(
            started,
            messages=[f"Maintenance work began at {prop.name}. The property is off the rental market."],
        )

    months = work.months_remaining - 1
    if months > 0:
        return WorkOrderProgress(replace(prop, maintenance_work=replace(work, months_remaining=months)))

    previous = prop.maintenance_percent
    completed = replace(
        with_maintenance(prop, 100.0),
        maintenance_work=None,
        marketing_paused_for_maintenance=False,
        vacancy_months=0,
    )
    cost = max(round(work.cost), 0)
    return WorkOrderProgress(
        completed,
        cost_paid=cost,
        messages=[
            f"Maintenance completed at {prop.name} for {format_currency(cost)}. "
            f"Condition restored from {format_percentage(previous)} to 100%."
        ],
    )
