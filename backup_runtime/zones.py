"""
Zone cycle calculator.

One cycle = every zone runs for 5 min in sequence, then the system pauses for
the break looked up from the zone count. The average flow is time-weighted
over the whole cycle (break included), which is what the reservoir sees.
"""
import logging
from dataclasses import dataclass
from typing import Sequence, Tuple

from .constants import BREAK_MINUTES, MAX_ZONES, RUN_MINUTES_PER_ZONE
from .helpers import clamp_count, safe_div, sanitize

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ZoneCycleStats:
    zone_count: int
    break_minutes: float
    run_minutes_per_zone: float
    total_run_minutes: float
    total_volume_per_cycle: float   # gal
    cycle_minutes: float
    duty_cycle: float               # -
    average_flow: float             # GPM
    active_flows: Tuple[float, ...]


def break_minutes(zone_count: int) -> float:
    """Break after a full cycle (min). Only defined for 1..MAX_ZONES."""
    try:
        return BREAK_MINUTES[zone_count]
    except KeyError:
        raise ValueError(f"zone count must be 1..{MAX_ZONES}, got {zone_count!r}") from None


def active_flows(zone_count: int, flows: Sequence) -> Tuple[float, ...]:
    flows = (list(flows) if flows is not None else [])[:zone_count]
    flows += [0.0] * (zone_count - len(flows))
    return tuple(sanitize(g) for g in flows)


def compute_zone_cycle(zone_count, flows: Sequence) -> ZoneCycleStats:
    z = clamp_count(zone_count, MAX_ZONES)
    brk = break_minutes(z)
    gpm = active_flows(z, flows)

    total_run = RUN_MINUTES_PER_ZONE * z
    total_volume = RUN_MINUTES_PER_ZONE * sum(gpm)
    cycle = total_run + brk

    stats = ZoneCycleStats(
        zone_count=z,
        break_minutes=brk,
        run_minutes_per_zone=RUN_MINUTES_PER_ZONE,
        total_run_minutes=total_run,
        total_volume_per_cycle=total_volume,
        cycle_minutes=cycle,
        duty_cycle=safe_div(total_run, cycle),
        average_flow=safe_div(total_volume, cycle),
        active_flows=gpm,
    )
    logger.debug("zone cycle z=%d cycle=%.1f min avg=%.3f GPM", z, cycle, stats.average_flow)
    return stats
