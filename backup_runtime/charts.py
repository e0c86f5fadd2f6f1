# ------------------------------- Figures ---------------------------------
import matplotlib.pyplot as plt
import numpy as np
import plotly.graph_objects as go

from .helpers import sanitize

HORIZON_MINUTES = 24 * 60   # shown when the source never runs dry


def drawdown_curve(source_volume, net_draw, runtime, n=200):
    """Remaining source volume (gal) against time (min), clipped at empty."""
    vol = sanitize(source_volume)
    t_end = runtime.minutes if runtime.is_numeric else HORIZON_MINUTES
    t = np.linspace(0.0, max(t_end, 1.0), n)
    draw = net_draw if runtime.is_numeric else 0.0
    remaining = np.clip(vol - draw * t, 0.0, None)
    return t, remaining


def drawdown_figure(summary, source_volume):
    t, remaining = drawdown_curve(source_volume, summary.backup.net_draw_rate, summary.backup.runtime)
    fig = go.Figure()
    fig.add_trace(go.Scatter(x=t / 60.0, y=remaining, mode="lines",
                             name="Remaining volume", line=dict(width=3)))
    fig.update_layout(
        title=f"Backup source drawdown · {summary.backup.runtime.label}",
        xaxis_title="Time (h)", yaxis_title="Remaining (gal)",
        hovermode="x unified",
    )
    return fig


def cycle_timeline_figure(stats, title=None):
    """Gantt-style bar of one cycle: each zone's 5 min run, then the break."""
    fig, ax = plt.subplots(figsize=(10, 2.2))
    start = 0.0
    for i, gpm in enumerate(stats.active_flows):
        ax.barh(0, stats.run_minutes_per_zone, left=start, color='#3498DB', alpha=0.8, edgecolor='white')
        ax.text(start + stats.run_minutes_per_zone / 2, 0, f"Z{i + 1}\n{gpm:g}", ha='center', va='center', fontsize=8)
        start += stats.run_minutes_per_zone
    ax.barh(0, stats.break_minutes, left=start, color='#BDC3C7', alpha=0.8, edgecolor='white')
    ax.text(start + stats.break_minutes / 2, 0, f"Break\n{stats.break_minutes:g} min", ha='center', va='center', fontsize=8)
    ax.set_xlim(0, stats.cycle_minutes)
    ax.set_yticks([])
    ax.set_xlabel("Time in cycle (min)")
    ax.set_title(title or f"Cycle {stats.cycle_minutes:g} min · duty {stats.duty_cycle * 100:.0f}%")
    ax.grid(True, axis='x', linestyle='--', alpha=0.4)
    fig.tight_layout()
    return fig
