# ------------------------------- Pool / tank volume ----------------------
# Average-depth method: V = plan area x (shallow + deep) / 2 x 7.48 gal/ft3.
# The estimate is advisory; it only replaces the backup source volume when
# the user applies it.
import logging
import math
from dataclasses import dataclass
from typing import Mapping

from .constants import GAL_PER_FT3, POOL_SHAPES
from .helpers import round_half_up, sanitize

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PoolVolumeEstimate:
    shape: str
    dimensions: Mapping[str, float]     # ft
    average_depth: float                # ft
    estimated_volume: int               # gal


def average_depth(shallow_depth, deep_depth) -> float:
    avg = (sanitize(shallow_depth) + sanitize(deep_depth)) / 2
    return avg if math.isfinite(avg) and avg > 0 else 0.0


def estimate_volume(shape: str, dims: Mapping, shallow_depth, deep_depth) -> int:
    """
    Estimated gallons for a rectangular (length, width) or circular
    (diameter) pool or tank. Missing or zero dimensions give 0.
    """
    if shape not in POOL_SHAPES:
        raise ValueError(f"shape must be one of {POOL_SHAPES}, got {shape!r}")
    avg = average_depth(shallow_depth, deep_depth)
    if avg <= 0:
        return 0

    if shape == "rect":
        L = sanitize(dims.get("length"))
        W = sanitize(dims.get("width"))
        if not L or not W:
            return 0
        return round_half_up(L * W * avg * GAL_PER_FT3)

    D = sanitize(dims.get("diameter"))
    if not D:
        return 0
    r = D / 2
    return round_half_up(math.pi * r * r * avg * GAL_PER_FT3)


def estimate_pool(pool) -> PoolVolumeEstimate:
    """Full estimate record for a PoolDimensions value."""
    if pool.shape == "rect":
        dims = {"length": pool.length, "width": pool.width}
    else:
        dims = {"diameter": pool.diameter}
    gallons = estimate_volume(pool.shape, dims, pool.shallow_depth, pool.deep_depth)
    logger.debug("pool %s %s -> %d gal", pool.shape, dims, gallons)
    return PoolVolumeEstimate(
        shape=pool.shape,
        dimensions=dims,
        average_depth=average_depth(pool.shallow_depth, pool.deep_depth),
        estimated_volume=gallons,
    )
