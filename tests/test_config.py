import dataclasses

import pytest

from backup_runtime.config import (
    CalculatorConfig,
    SystemConfig,
    apply_pool_to_source,
    set_active_count,
    set_all_zone_flows,
    update_pool,
    update_source,
    update_system,
    update_zone_flow,
    uses_uniform_flow,
)


def test_defaults(default_config):
    assert len(default_config.systems) == 5
    assert default_config.active_count == 1
    assert default_config.source_volume == 20000
    assert default_config.refill_rate == 0
    s = default_config.systems[0]
    assert s.zone_count == 6
    assert s.zone_flows == (20.0,) * 9
    assert s.foam_tank_volume == 50
    assert default_config.pool.shape == "rect"
    assert (default_config.pool.length, default_config.pool.width) == (30, 15)
    assert (default_config.pool.shallow_depth, default_config.pool.deep_depth) == (3.5, 6)


def test_config_is_immutable(default_config):
    with pytest.raises(dataclasses.FrozenInstanceError):
        default_config.active_count = 3


def test_update_system_clamps_and_sanitizes(default_config):
    cfg = update_system(default_config, 2, zone_count=42, foam_tank_volume=-5)
    assert cfg.systems[2].zone_count == 9
    assert cfg.systems[2].foam_tank_volume == 0
    assert default_config.systems[2].zone_count == 6
    assert cfg.systems[0] == default_config.systems[0]


def test_update_system_pads_zone_flows(default_config):
    cfg = update_system(default_config, 0, zone_flows=[5, "x", -1])
    assert cfg.systems[0].zone_flows == (5.0, 0.0, 0.0) + (0.0,) * 6


def test_update_system_rejects_unknown_field(default_config):
    with pytest.raises(ValueError):
        update_system(default_config, 0, zones=3)


def test_update_system_rejects_bad_index(default_config):
    with pytest.raises(IndexError):
        update_system(default_config, 5, zone_count=3)


def test_update_zone_flow(default_config):
    cfg = update_zone_flow(default_config, 1, 3, 12.5)
    assert cfg.systems[1].zone_flows[3] == 12.5
    cfg = update_zone_flow(cfg, 1, 3, float("nan"))
    assert cfg.systems[1].zone_flows[3] == 0.0
    with pytest.raises(IndexError):
        update_zone_flow(default_config, 0, 9, 1)


def test_set_all_zone_flows_fills_every_slot(default_config):
    cfg = update_system(default_config, 0, zone_count=3)
    cfg = set_all_zone_flows(cfg, 0, 15)
    assert cfg.systems[0].zone_flows == (15.0,) * 9
    assert cfg.systems[0].zone_count == 3


def test_uses_uniform_flow_checks_active_zones_only():
    s = SystemConfig(zone_count=2, zone_flows=(20, 20, 5, 5, 5, 5, 5, 5, 5))
    assert uses_uniform_flow(s)
    assert not uses_uniform_flow(SystemConfig(zone_count=3, zone_flows=s.zone_flows))
    assert uses_uniform_flow(SystemConfig(zone_flows=(15.0,) * 9), 15)


@pytest.mark.parametrize("raw,expected", [(3, 3), (0, 1), (9, 5), ("2", 2), (None, 1)])
def test_set_active_count(default_config, raw, expected):
    assert set_active_count(default_config, raw).active_count == expected


def test_update_source(default_config):
    cfg = update_source(default_config, volume="abc", refill_rate=7.5)
    assert cfg.source_volume == 0
    assert cfg.refill_rate == 7.5
    assert update_source(cfg, refill_rate=1).source_volume == 0


def test_update_pool(default_config):
    cfg = update_pool(default_config, shape="circle", diameter=24, deep_depth=-3)
    assert cfg.pool.shape == "circle"
    assert cfg.pool.diameter == 24
    assert cfg.pool.deep_depth == 0
    with pytest.raises(ValueError):
        update_pool(default_config, shape="kidney")
    with pytest.raises(ValueError):
        update_pool(default_config, radius=3)


def test_apply_pool_to_source(default_config):
    cfg = apply_pool_to_source(default_config)
    assert cfg.source_volume == 15989


def test_apply_empty_pool_keeps_source(default_config):
    cfg = update_pool(default_config, length=0)
    assert apply_pool_to_source(cfg) is cfg
    assert apply_pool_to_source(cfg).source_volume == 20000


def test_active_systems_follow_active_count(default_config):
    cfg = update_system(set_active_count(default_config, 2), 1, zone_count=3)
    assert cfg.active_systems == cfg.systems[:2]
    assert cfg.active_systems[1].zone_count == 3
    assert len(dataclasses.replace(default_config, active_count=0).active_systems) == 1
