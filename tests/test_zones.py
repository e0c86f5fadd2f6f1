"""
Zone cycle calculator tests.

Covers the break table, the time-weighted average flow and the permissive
coercion of zone counts and flows.
"""
import math

import numpy as np
import pytest

from backup_runtime.constants import BREAK_MINUTES
from backup_runtime.zones import break_minutes, compute_zone_cycle

EXPECTED_BREAKS = {1: 30, 2: 25, 3: 20, 4: 15, 5: 10, 6: 5, 7: 2, 8: 2, 9: 2}


@pytest.mark.parametrize("zones,expected", sorted(EXPECTED_BREAKS.items()))
def test_break_table_matches_protocol(zones, expected):
    assert break_minutes(zones) == expected
    assert compute_zone_cycle(zones, [20] * 9).break_minutes == expected


def test_break_table_is_read_only():
    with pytest.raises(TypeError):
        BREAK_MINUTES[10] = 1


@pytest.mark.parametrize("zones", [0, 10, -1])
def test_break_lookup_outside_domain_raises(zones):
    with pytest.raises(ValueError):
        break_minutes(zones)


def test_six_zones_at_20_gpm():
    s = compute_zone_cycle(6, [20] * 9)
    assert s.zone_count == 6
    assert s.break_minutes == 5
    assert s.run_minutes_per_zone == 5
    assert s.total_run_minutes == 30
    assert s.cycle_minutes == 35
    assert s.total_volume_per_cycle == 600
    assert s.average_flow == pytest.approx(17.142857, abs=1e-6)
    assert s.duty_cycle == pytest.approx(0.857143, abs=1e-6)


@pytest.mark.parametrize("zones", range(1, 10))
@pytest.mark.parametrize("gpm", [0.0, 7.5, 20.0])
def test_uniform_flow_scales_linearly(zones, gpm):
    s = compute_zone_cycle(zones, [gpm] * 9)
    assert s.average_flow == pytest.approx(gpm * zones * 5 / s.cycle_minutes)
    assert 0.0 <= s.duty_cycle <= 1.0
    assert s.cycle_minutes > 0


def test_average_flow_is_time_weighted_not_arithmetic_mean():
    s = compute_zone_cycle(2, [10, 30])
    # (5*10 + 5*30) / (10 + 25)
    assert s.average_flow == pytest.approx(200 / 35)
    assert s.average_flow != pytest.approx(20.0)


def test_only_first_zone_count_flows_are_used():
    s = compute_zone_cycle(3, [10, 10, 10, 999, 999])
    assert s.active_flows == (10.0, 10.0, 10.0)
    assert s.total_volume_per_cycle == 150


@pytest.mark.parametrize("raw", [0, -4, None, "abc", float("nan")])
def test_bad_zone_count_becomes_one(raw):
    s = compute_zone_cycle(raw, [12] * 9)
    assert s.zone_count == 1
    assert s.break_minutes == 30


def test_zone_count_above_max_is_clamped():
    assert compute_zone_cycle(25, [1] * 9).zone_count == 9


def test_invalid_flows_count_as_zero():
    s = compute_zone_cycle(4, [-5, float("nan"), float("inf"), 8])
    assert s.active_flows == (0.0, 0.0, 0.0, 8.0)
    assert s.total_volume_per_cycle == 40


def test_short_flow_list_pads_with_zero():
    s = compute_zone_cycle(4, [10])
    assert s.active_flows == (10.0, 0.0, 0.0, 0.0)
    assert math.isfinite(s.average_flow)


def test_recompute_is_identical():
    assert compute_zone_cycle(7, [3.3] * 9) == compute_zone_cycle(7, [3.3] * 9)


def test_numpy_flows_are_accepted():
    s = compute_zone_cycle(3, np.array([10.0, 10.0, 10.0]))
    assert s.active_flows == (10.0, 10.0, 10.0)
    assert s.average_flow == pytest.approx(150 / 35)


def test_missing_flows_count_as_zero():
    s = compute_zone_cycle(2, None)
    assert s.active_flows == (0.0, 0.0)
    assert s.average_flow == 0.0
