"""
Backup water source drawdown.

All active systems are assumed to draw from the same source. Net draw is the
summed average demand minus the refill rate; a non-positive net draw means
the source never runs dry.
"""
import logging
import math
from dataclasses import dataclass
from typing import Sequence

from .constants import MAX_SYSTEMS
from .helpers import clamp_count, sanitize
from .runtime import Runtime
from .zones import ZoneCycleStats

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BackupSourceRuntime:
    net_draw_rate: float    # GPM, negative when refill exceeds demand
    runtime: Runtime


def total_average_flow(stats: Sequence[ZoneCycleStats], active_count) -> float:
    """Combined average demand (GPM) of the first `active_count` systems."""
    n = clamp_count(active_count, MAX_SYSTEMS)
    return sum(s.average_flow for s in stats[:n])


def compute_backup_runtime(total_average_flow, source_volume, refill_rate) -> BackupSourceRuntime:
    avg_use = sanitize(total_average_flow)
    vol = sanitize(source_volume)
    refill = sanitize(refill_rate)
    net_draw = avg_use - refill

    if not vol or not avg_use:
        return BackupSourceRuntime(net_draw, Runtime.not_applicable())
    if net_draw <= 0:
        return BackupSourceRuntime(net_draw, Runtime.unlimited())

    minutes = vol / net_draw
    if not math.isfinite(minutes):
        return BackupSourceRuntime(net_draw, Runtime.unlimited())
    logger.debug("source %.0f gal, net draw %.3f GPM -> %.1f min", vol, net_draw, minutes)
    return BackupSourceRuntime(net_draw, Runtime.numeric(minutes))
