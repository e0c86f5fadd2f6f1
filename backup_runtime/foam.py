# ------------------------------- Foam runtime ----------------------------
# Foam concentrate is injected at a fixed 0.25 % of each system's average
# solution flow. Each tank is independent of the backup water volume.
import logging
import math
from dataclasses import dataclass

from .constants import FOAM_MIX_RATIO
from .helpers import sanitize
from .runtime import Runtime

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FoamRuntime:
    foam_use_rate: float    # GPM of concentrate
    runtime: Runtime


def compute_foam_runtime(average_flow, tank_volume) -> FoamRuntime:
    avg_use = sanitize(average_flow)
    tank = sanitize(tank_volume)

    if not tank or not avg_use:
        return FoamRuntime(0.0, Runtime.not_applicable())

    foam_use = avg_use * FOAM_MIX_RATIO
    if foam_use <= 0:
        return FoamRuntime(foam_use, Runtime.not_applicable())

    minutes = tank / foam_use
    if not math.isfinite(minutes):
        return FoamRuntime(foam_use, Runtime.unlimited())
    logger.debug("foam %.0f gal at %.4f GPM -> %.1f min", tank, foam_use, minutes)
    return FoamRuntime(foam_use, Runtime.numeric(minutes))
