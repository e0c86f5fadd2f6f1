"""
Calculator configuration.

The page keeps one ``CalculatorConfig`` as its source of truth and swaps it
for a new one on every change; nothing here is mutated in place. Five systems
always exist so that switching the system count back and forth keeps the
per-zone entries of hidden systems.
"""
import logging
from dataclasses import dataclass, field, fields, replace
from typing import Tuple

from .constants import (
    DEFAULT_POOL,
    DEFAULT_REFILL_GPM,
    DEFAULT_SOURCE_GALLONS,
    DEFAULT_SYSTEM_COUNT,
    DEFAULT_ZONE_GPM,
    DEFAULT_ZONES,
    FOAM_DEFAULT,
    MAX_SYSTEMS,
    MAX_ZONES,
    POOL_SHAPES,
)
from .helpers import clamp_count, sanitize
from .volume import estimate_pool

logger = logging.getLogger(__name__)


def _default_flows():
    return tuple(DEFAULT_ZONE_GPM for _ in range(MAX_ZONES))


@dataclass(frozen=True)
class SystemConfig:
    zone_count: int = DEFAULT_ZONES
    zone_flows: Tuple[float, ...] = field(default_factory=_default_flows)
    foam_tank_volume: float = FOAM_DEFAULT


@dataclass(frozen=True)
class PoolDimensions:
    shape: str = DEFAULT_POOL["shape"]
    length: float = DEFAULT_POOL["length"]
    width: float = DEFAULT_POOL["width"]
    diameter: float = DEFAULT_POOL["diameter"]
    shallow_depth: float = DEFAULT_POOL["shallow_depth"]
    deep_depth: float = DEFAULT_POOL["deep_depth"]


def _default_systems():
    return tuple(SystemConfig() for _ in range(MAX_SYSTEMS))


@dataclass(frozen=True)
class CalculatorConfig:
    systems: Tuple[SystemConfig, ...] = field(default_factory=_default_systems)
    active_count: int = DEFAULT_SYSTEM_COUNT
    source_volume: float = DEFAULT_SOURCE_GALLONS   # gal
    refill_rate: float = DEFAULT_REFILL_GPM         # GPM
    pool: PoolDimensions = field(default_factory=PoolDimensions)

    @property
    def active_systems(self) -> Tuple[SystemConfig, ...]:
        return self.systems[:clamp_count(self.active_count, MAX_SYSTEMS)]


# ------------------------------- Update operations -----------------------

def _check_system_index(config, index):
    if not 0 <= index < len(config.systems):
        raise IndexError(f"system index must be 0..{len(config.systems) - 1}, got {index}")


def _with_system(config, index, system):
    systems = list(config.systems)
    systems[index] = system
    return replace(config, systems=tuple(systems))


def update_system(config: CalculatorConfig, index: int, **changes) -> CalculatorConfig:
    """Replace fields of one system. Zone count is clamped, volumes sanitized."""
    _check_system_index(config, index)
    known = {f.name for f in fields(SystemConfig)}
    unknown = set(changes) - known
    if unknown:
        raise ValueError(f"unknown system field(s): {sorted(unknown)}")

    if "zone_count" in changes:
        changes["zone_count"] = clamp_count(changes["zone_count"], MAX_ZONES)
    if "foam_tank_volume" in changes:
        changes["foam_tank_volume"] = sanitize(changes["foam_tank_volume"])
    if "zone_flows" in changes:
        flows = [sanitize(g) for g in changes["zone_flows"]][:MAX_ZONES]
        changes["zone_flows"] = tuple(flows + [0.0] * (MAX_ZONES - len(flows)))

    return _with_system(config, index, replace(config.systems[index], **changes))


def update_zone_flow(config: CalculatorConfig, system_index: int, zone_index: int, value) -> CalculatorConfig:
    _check_system_index(config, system_index)
    if not 0 <= zone_index < MAX_ZONES:
        raise IndexError(f"zone index must be 0..{MAX_ZONES - 1}, got {zone_index}")
    system = config.systems[system_index]
    flows = list(system.zone_flows)
    flows[zone_index] = sanitize(value)
    return _with_system(config, system_index, replace(system, zone_flows=tuple(flows)))


def set_all_zone_flows(config: CalculatorConfig, system_index: int, value) -> CalculatorConfig:
    """
    Set every zone slot of one system to the same flow.

    All MAX_ZONES slots are filled regardless of the current zone count; only
    the first ``zone_count`` of them are used by the cycle calculation.
    """
    _check_system_index(config, system_index)
    gpm = sanitize(value)
    logger.info("System %d: all zones set to %.2f GPM", system_index + 1, gpm)
    system = replace(config.systems[system_index], zone_flows=tuple(gpm for _ in range(MAX_ZONES)))
    return _with_system(config, system_index, system)


def uses_uniform_flow(system: SystemConfig, value=DEFAULT_ZONE_GPM) -> bool:
    return all(g == value for g in system.zone_flows[:system.zone_count])


def set_active_count(config: CalculatorConfig, count) -> CalculatorConfig:
    return replace(config, active_count=clamp_count(count, MAX_SYSTEMS))


def update_source(config: CalculatorConfig, volume=None, refill_rate=None) -> CalculatorConfig:
    changes = {}
    if volume is not None:
        changes["source_volume"] = sanitize(volume)
    if refill_rate is not None:
        changes["refill_rate"] = sanitize(refill_rate)
    return replace(config, **changes)


def update_pool(config: CalculatorConfig, **changes) -> CalculatorConfig:
    known = {f.name for f in fields(PoolDimensions)}
    unknown = set(changes) - known
    if unknown:
        raise ValueError(f"unknown pool field(s): {sorted(unknown)}")
    if "shape" in changes and changes["shape"] not in POOL_SHAPES:
        raise ValueError(f"shape must be one of {POOL_SHAPES}, got {changes['shape']!r}")
    for name in known - {"shape"}:
        if name in changes:
            changes[name] = sanitize(changes[name])
    return replace(config, pool=replace(config.pool, **changes))


def apply_pool_to_source(config: CalculatorConfig) -> CalculatorConfig:
    """Use the pool/tank estimate as the backup source volume (if non-zero)."""
    gallons = estimate_pool(config.pool).estimated_volume
    if not gallons:
        logger.info("Pool estimate is 0 gal; backup source left at %.0f gal", config.source_volume)
        return config
    logger.info("Backup source volume set from pool estimate: %d gal", gallons)
    return replace(config, source_volume=float(gallons))
