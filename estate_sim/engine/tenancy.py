"""Monthly tenancy progression: rent collection, lease expiry and marketing."""

from __future__ import annotations

from dataclasses import dataclass, field, replace

from estate_sim.config import SimulationConfig
from estate_sim.engine.rent import find_rent_plan, placement_probability
from estate_sim.formatting import format_currency
from estate_sim.generators.base import RandomFn
from estate_sim.models import PropertyRecord, Tenant


@dataclass(frozen=True)
class TenancyProgress:
    property: PropertyRecord
    rent_collected: float = 0.0
    messages: list[str] = field(default_factory=list)


def progress_tenancy(
    prop: PropertyRecord,
    central_bank_rate: float,
    config: SimulationConfig,
    rand: RandomFn,
) -> TenancyProgress:
    """Advance one month of tenancy for a portfolio property.

    An occupied property pays rent and counts down its lease. A vacant one
    is marketed on its selected plan unless maintenance has paused
    marketing or auto-relisting is off with no campaign running. ``rand`` is
    drawn only when a placement roll happens.
    """
    tenant = prop.tenant
    if tenant is not None:
        rent = tenant.monthly_rent
        messages = [f"Received {format_currency(rent)} rent from {prop.name}."]
        remaining = max(tenant.lease_months_remaining - 1, 0)
        if remaining == 0:
            updated = replace(prop, tenant=None)
            messages.append(f"Lease completed at {prop.name}. Property is now vacant.")
        else:
            updated = replace(prop, tenant=replace(tenant, lease_months_remaining=remaining))
        return TenancyProgress(updated, rent, messages)

    if prop.has_active_maintenance or prop.marketing_paused_for_maintenance:
        return TenancyProgress(
            prop, messages=[f"Marketing paused at {prop.name} while maintenance is underway."]
        )

    if not prop.auto_relist and not prop.rental_marketing_active:
        return TenancyProgress(
            prop,
            messages=[f"Marketing paused at {prop.name}: auto-relisting is off and no campaign is running."],
        )

    plan = find_rent_plan(prop, prop.rent_terms, central_bank_rate, config)
    if rand() < placement_probability(plan, prop, config):
        placed = replace(
            prop,
            tenant=Tenant(monthly_rent=plan.monthly_rent, lease_months_remaining=plan.lease_months),
            vacancy_months=0,
            rental_marketing_active=False,
        )
        return TenancyProgress(
            placed,
            messages=[
                f"Placed a tenant at {prop.name} on a {plan.lease_months}-month lease "
                f"at {format_currency(plan.monthly_rent)} per month."
            ],
        )

    return TenancyProgress(
        replace(prop, vacancy_months=prop.vacancy_months + 1),
        messages=[f"No tenant found for {prop.name} this month."],
    )
