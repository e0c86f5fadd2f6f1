"""Back-up water & foam runtime calculator."""
from .config import (
    CalculatorConfig,
    PoolDimensions,
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
from .foam import FoamRuntime, compute_foam_runtime
from .report import CalculatorSummary, summarize
from .runtime import Runtime, RuntimeStatus
from .source import BackupSourceRuntime, compute_backup_runtime, total_average_flow
from .volume import PoolVolumeEstimate, estimate_pool, estimate_volume
from .zones import ZoneCycleStats, break_minutes, compute_zone_cycle

__version__ = "0.1.0"
