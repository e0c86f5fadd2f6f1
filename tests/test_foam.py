import pytest

from backup_runtime.foam import compute_foam_runtime
from backup_runtime.runtime import RuntimeStatus


@pytest.mark.parametrize("flow,tank", [(0, 50), (0, 0), (17.1, 0), (-3, 50), (20, -1), (float("nan"), 50)])
def test_foam_not_applicable_without_flow_or_tank(flow, tank):
    foam = compute_foam_runtime(flow, tank)
    assert foam.runtime.status is RuntimeStatus.NOT_APPLICABLE
    assert foam.runtime.minutes is None
    assert foam.runtime.label == "N/A"
    assert foam.foam_use_rate == 0.0


def test_foam_400_gpm_50_gal():
    foam = compute_foam_runtime(400, 50)
    assert foam.foam_use_rate == pytest.approx(1.0)
    assert foam.runtime.is_numeric
    assert foam.runtime.minutes == pytest.approx(50.0)
    assert foam.runtime.label == "0h 50m"


def test_foam_default_system():
    # 6 zones at 20 GPM -> 600/35 GPM average
    foam = compute_foam_runtime(600 / 35, 50)
    assert foam.foam_use_rate == pytest.approx(600 / 35 * 0.0025)
    assert foam.runtime.minutes == pytest.approx(50 / (600 / 35 * 0.0025))
    assert foam.runtime.label == "19h 27m"


def test_vanishing_flow_does_not_overflow_label():
    foam = compute_foam_runtime(1e-310, 150)
    assert foam.runtime.status is RuntimeStatus.UNLIMITED
    assert foam.runtime.minutes is None
    assert foam.runtime.label.startswith("Unlimited")
