"""Output sinks for simulation snapshots."""

from estate_sim.sinks.console import ConsoleSink
from estate_sim.sinks.serialization import rent_plan_id, state_to_dict, to_dict

__all__ = ["ConsoleSink", "rent_plan_id", "state_to_dict", "to_dict"]
