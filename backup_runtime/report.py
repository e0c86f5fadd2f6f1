"""
Summary and downloads.

``summarize`` derives every result shown on the page from one configuration.
It is recomputed from scratch on each call; two calls with the same config
give identical summaries.
"""
import io
import json
import logging
from dataclasses import asdict, dataclass
from typing import Tuple

import pandas as pd

from .config import CalculatorConfig
from .constants import FOAM_MIX_RATIO, MAX_SYSTEMS
from .foam import FoamRuntime, compute_foam_runtime
from .helpers import clamp_count
from .source import BackupSourceRuntime, compute_backup_runtime, total_average_flow
from .volume import PoolVolumeEstimate, estimate_pool
from .zones import ZoneCycleStats, compute_zone_cycle

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CalculatorSummary:
    system_stats: Tuple[ZoneCycleStats, ...]    # all systems, active or not
    active_count: int
    foam: Tuple[FoamRuntime, ...]               # active systems only
    total_average_flow: float                   # GPM
    backup: BackupSourceRuntime
    pool: PoolVolumeEstimate

    @property
    def active_stats(self) -> Tuple[ZoneCycleStats, ...]:
        return self.system_stats[:self.active_count]


def summarize(config: CalculatorConfig) -> CalculatorSummary:
    stats = tuple(compute_zone_cycle(s.zone_count, s.zone_flows) for s in config.systems)
    n = clamp_count(config.active_count, MAX_SYSTEMS)
    total = total_average_flow(stats, n)
    foam = tuple(
        compute_foam_runtime(st_.average_flow, sys_.foam_tank_volume)
        for st_, sys_ in zip(stats[:n], config.active_systems)
    )
    backup = compute_backup_runtime(total, config.source_volume, config.refill_rate)
    logger.debug("summary: %d active, total %.3f GPM, backup %s", n, total, backup.runtime.label)
    return CalculatorSummary(
        system_stats=stats,
        active_count=n,
        foam=foam,
        total_average_flow=total,
        backup=backup,
        pool=estimate_pool(config.pool),
    )


def systems_table(summary: CalculatorSummary, config: CalculatorConfig) -> pd.DataFrame:
    """One row per active system."""
    rows = []
    for i, (s, foam) in enumerate(zip(summary.active_stats, summary.foam)):
        rows.append({
            "System": i + 1,
            "Zones": s.zone_count,
            "Run (min)": s.total_run_minutes,
            "Break (min)": s.break_minutes,
            "Cycle (min)": s.cycle_minutes,
            "Duty cycle": s.duty_cycle,
            "Gal / cycle": s.total_volume_per_cycle,
            "Avg flow (GPM)": s.average_flow,
            "Foam tank (gal)": config.systems[i].foam_tank_volume,
            "Foam use (GPM)": foam.foam_use_rate,
            "Foam runtime": foam.runtime.label,
        })
    return pd.DataFrame(rows)


def backup_table(summary: CalculatorSummary, config: CalculatorConfig) -> pd.DataFrame:
    b = summary.backup
    return pd.DataFrame([
        {"Parameter": "Total avg demand (GPM)", "Value": summary.total_average_flow},
        {"Parameter": "Refill (GPM)", "Value": config.refill_rate},
        {"Parameter": "Net draw (GPM)", "Value": b.net_draw_rate},
        {"Parameter": "Source volume (gal)", "Value": config.source_volume},
        {"Parameter": "Backup runtime (min)", "Value": b.runtime.minutes},
        {"Parameter": "Backup runtime", "Value": b.runtime.label},
    ])


def results_json(config: CalculatorConfig, summary: CalculatorSummary) -> str:
    return json.dumps({
        "inputs": {
            "active_count": summary.active_count,
            "systems": [
                {
                    "zone_count": s.zone_count,
                    "zone_flows_gpm": list(s.zone_flows),
                    "foam_tank_gal": s.foam_tank_volume,
                }
                for s in config.active_systems
            ],
            "source": {"volume_gal": config.source_volume, "refill_gpm": config.refill_rate},
            "pool": asdict(config.pool),
            "foam_mix_ratio": FOAM_MIX_RATIO,
        },
        "results": {
            "systems": [
                {
                    "break_min": s.break_minutes,
                    "cycle_min": s.cycle_minutes,
                    "duty_cycle": s.duty_cycle,
                    "avg_gpm": s.average_flow,
                    "gal_per_cycle": s.total_volume_per_cycle,
                    "foam_use_gpm": f.foam_use_rate,
                    "foam_runtime": f.runtime.to_dict(),
                }
                for s, f in zip(summary.active_stats, summary.foam)
            ],
            "total_avg_gpm": summary.total_average_flow,
            "backup": {
                "net_draw_gpm": summary.backup.net_draw_rate,
                "runtime": summary.backup.runtime.to_dict(),
            },
            "pool_estimate_gal": summary.pool.estimated_volume,
        },
    }, indent=2)


def results_excel(config: CalculatorConfig, summary: CalculatorSummary) -> bytes:
    excel_buffer = io.BytesIO()
    with pd.ExcelWriter(excel_buffer, engine="openpyxl") as writer:
        systems_table(summary, config).to_excel(writer, sheet_name="Systems", index=False)
        backup_table(summary, config).to_excel(writer, sheet_name="BackupSource", index=False)
    return excel_buffer.getvalue()
