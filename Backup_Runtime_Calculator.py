# Back-up Water & Foam Runtime Calculator
# Up to 5 zoned systems drawing from one backup source, each with its own foam tank.
# Run with:  streamlit run Backup_Runtime_Calculator.py

import logging
import os

import matplotlib as mpl
import matplotlib.pyplot as plt
import streamlit as st

from backup_runtime.charts import cycle_timeline_figure, drawdown_figure
from backup_runtime.config import (
    CalculatorConfig,
    PoolDimensions,
    SystemConfig,
    apply_pool_to_source,
    set_all_zone_flows,
    uses_uniform_flow,
)
from backup_runtime.constants import (
    DEFAULT_POOL,
    DEFAULT_REFILL_GPM,
    DEFAULT_SOURCE_GALLONS,
    DEFAULT_SYSTEM_COUNT,
    DEFAULT_ZONE_GPM,
    DEFAULT_ZONES,
    FOAM_DEFAULT,
    FOAM_MIX_RATIO,
    FOAM_TANK_OPTIONS,
    MAX_SYSTEMS,
    MAX_ZONES,
    POOL_SHAPES,
)
from backup_runtime.logging_config import setup_logging
from backup_runtime.report import results_excel, results_json, summarize, systems_table
from backup_runtime.runtime import RuntimeStatus

st.set_page_config(page_title="Back-up Water & Foam Runtime", layout="wide")

# Configure plotting style
plt.style.use('default')
mpl.rcParams.update({
    "axes.grid": True,
    "grid.linestyle": "--",
    "grid.alpha": 0.4,
    "axes.edgecolor": "0.15",
    "axes.linewidth": 1.25,
})

setup_logging(getattr(logging, os.environ.get("BACKUP_RUNTIME_LOG_LEVEL", "INFO").upper(), logging.INFO))

# --------------------------------- Session state ---------------------------------
POOL_KEYS = {
    "pool_shape": "shape", "pool_length": "length", "pool_width": "width",
    "pool_diameter": "diameter", "pool_shallow": "shallow_depth", "pool_deep": "deep_depth",
}


def _defaults():
    d = {
        "system_count": DEFAULT_SYSTEM_COUNT,
        "source_volume": DEFAULT_SOURCE_GALLONS,
        "refill_rate": DEFAULT_REFILL_GPM,
    }
    for key, name in POOL_KEYS.items():
        d[key] = DEFAULT_POOL[name]
    for s in range(MAX_SYSTEMS):
        d[f"zones_{s}"] = DEFAULT_ZONES
        d[f"foam_{s}"] = FOAM_DEFAULT
        for z in range(MAX_ZONES):
            d[f"gpm_{s}_{z}"] = DEFAULT_ZONE_GPM
    return d


# Widgets of hidden systems are not rendered; re-assigning keeps their values.
for key, value in _defaults().items():
    st.session_state[key] = st.session_state.get(key, value)


def _config_from_state():
    ss = st.session_state
    systems = tuple(
        SystemConfig(
            zone_count=ss[f"zones_{s}"],
            zone_flows=tuple(ss[f"gpm_{s}_{z}"] for z in range(MAX_ZONES)),
            foam_tank_volume=ss[f"foam_{s}"],
        )
        for s in range(MAX_SYSTEMS)
    )
    pool = PoolDimensions(**{name: ss[key] for key, name in POOL_KEYS.items()})
    return CalculatorConfig(
        systems=systems,
        active_count=ss["system_count"],
        source_volume=ss["source_volume"],
        refill_rate=ss["refill_rate"],
        pool=pool,
    )


def _store_flows(config, s):
    for z, gpm in enumerate(config.systems[s].zone_flows):
        st.session_state[f"gpm_{s}_{z}"] = gpm


def _set_all_zones(s):
    value = st.session_state.get(f"setall_{s}")
    if value is not None and value > 0:
        _store_flows(set_all_zone_flows(_config_from_state(), s, value), s)


def _all_20(s):
    _store_flows(set_all_zone_flows(_config_from_state(), s, DEFAULT_ZONE_GPM), s)


def _apply_pool():
    config = apply_pool_to_source(_config_from_state())
    st.session_state["source_volume"] = config.source_volume


# --------------------------------- UI ---------------------------------
st.title("Back-up Water & Foam Runtime Calculator")
st.markdown("Configure up to 5 systems, a backup water source, and individual foam tanks "
            "to understand continuous runtime capacity.")

with st.sidebar:
    st.header("Systems & Backup Source")
    st.selectbox("Number of systems", list(range(1, MAX_SYSTEMS + 1)), key="system_count")
    st.number_input("Volume (gal)", min_value=0.0, step=1.0, key="source_volume")
    st.number_input("Refill (GPM)", min_value=0.0, step=0.1, key="refill_rate")
    st.caption("If multiple systems are configured, this assumes they all draw from "
               "this same backup source.")

active_count = st.session_state["system_count"]

# ---------------------------- System configuration ----------------------------
st.subheader("System Configuration")
st.caption("Run time is 5 min per zone, sequentially, followed by a break that depends on the "
           "number of zones. Foam tank size is set per system.")

cols = st.columns(active_count)
for s, col in enumerate(cols):
    with col:
        st.markdown(f"**System {s + 1}**")
        st.slider("# of Zones", 1, MAX_ZONES, key=f"zones_{s}")
        st.number_input("Set all zones to (GPM)", min_value=0.0, step=0.1, value=None,
                        placeholder="e.g. 20", key=f"setall_{s}",
                        on_change=_set_all_zones, args=(s,))
        preview = SystemConfig(zone_count=st.session_state[f"zones_{s}"],
                               zone_flows=tuple(st.session_state[f"gpm_{s}_{z}"] for z in range(MAX_ZONES)))
        st.button("All 20 GPM", key=f"all20_{s}", on_click=_all_20, args=(s,),
                  type="primary" if uses_uniform_flow(preview) else "secondary")
        st.selectbox("Foam tank", FOAM_TANK_OPTIONS, key=f"foam_{s}",
                     format_func=lambda v: "No foam" if v == 0 else f"{v} gal" + (" (std)" if v == FOAM_DEFAULT else ""))
        st.caption("0.25% mix when foam is on")

with st.expander("Per-zone flow rates (GPM)"):
    for s in range(active_count):
        st.markdown(f"**System {s + 1}**")
        zcols = st.columns(MAX_ZONES)
        for z, zc in enumerate(zcols):
            with zc:
                st.number_input(f"Zone {z + 1}", min_value=0.0, step=0.5, key=f"gpm_{s}_{z}",
                                disabled=z >= st.session_state[f"zones_{s}"])

config = _config_from_state()
summary = summarize(config)

# ---------------------------- Key runtime summary ----------------------------
st.subheader("Key Runtime Summary")
st.caption("How long the backup water lasts, and how long foam lasts for each system "
           "based on its tank setting.")

backup = summary.backup
c1, c2, c3 = st.columns(3)
c1.metric("Backup water runtime", backup.runtime.label)
c2.metric("Total avg demand", f"{summary.total_average_flow:.2f} GPM")
c3.metric("Net draw", f"{backup.net_draw_rate:.2f} GPM")
if backup.runtime.status is RuntimeStatus.UNLIMITED:
    st.success("Refill keeps pace with total demand: the backup source never runs dry.")
elif backup.runtime.status is RuntimeStatus.NOT_APPLICABLE:
    st.info("Backup runtime needs a source volume and at least one flowing zone.")

foam_cols = st.columns(active_count)
for s, (fc, foam) in enumerate(zip(foam_cols, summary.foam)):
    subtitle = "No foam" if config.systems[s].foam_tank_volume <= 0 else f"{config.systems[s].foam_tank_volume:g} gal tank"
    fc.metric(f"System {s + 1} foam runtime", foam.runtime.label, subtitle, delta_color="off")

st.dataframe(
    systems_table(summary, config).style.format({
        "Duty cycle": "{:.1%}", "Avg flow (GPM)": "{:.2f}", "Foam use (GPM)": "{:.3f}",
    }),
    use_container_width=True,
)

for s, stats in enumerate(summary.active_stats):
    fig_cycle = cycle_timeline_figure(stats, title=f"System {s + 1} · cycle {stats.cycle_minutes:g} min "
                                                   f"· duty {stats.duty_cycle * 100:.0f}% "
                                                   f"· avg {stats.average_flow:.2f} GPM")
    st.pyplot(fig_cycle)
    plt.close(fig_cycle)

st.plotly_chart(drawdown_figure(summary, config.source_volume), use_container_width=True)

# ---------------------------- Pool / tank helper ----------------------------
with st.expander("Pool / Tank Volume Helper & Water Math"):
    left, right = st.columns(2)
    with left:
        st.markdown("**Water source math (all active systems)**")
        st.write("Total avg demand = sum of each system's avg GPM. Net draw = total demand − refill. "
                 "Runtime = source gallons ÷ net draw when net draw > 0.")
        st.markdown(
            f"- Total avg demand: {summary.total_average_flow:.2f} GPM\n"
            f"- Refill: {config.refill_rate:.2f} GPM\n"
            f"- Net draw: {backup.net_draw_rate:.2f} GPM\n"
            f"- Backup runtime: {backup.runtime.label}"
        )
    with right:
        st.markdown("**Pool / tank volume**")
        st.radio("Shape", POOL_SHAPES, key="pool_shape", horizontal=True,
                 format_func=lambda v: "Rectangular" if v == "rect" else "Circular")
        if st.session_state["pool_shape"] == "rect":
            p1, p2 = st.columns(2)
            p1.number_input("Length (ft)", min_value=0.0, step=0.5, key="pool_length")
            p2.number_input("Width (ft)", min_value=0.0, step=0.5, key="pool_width")
        else:
            st.number_input("Diameter (ft)", min_value=0.0, step=0.5, key="pool_diameter")
            st.caption("Uses πr² × avg depth")
        d1, d2 = st.columns(2)
        d1.number_input("Shallow depth (ft)", min_value=0.0, step=0.5, key="pool_shallow")
        d2.number_input("Deep depth (ft)", min_value=0.0, step=0.5, key="pool_deep")

        pool_gal = summary.pool.estimated_volume
        st.metric("Estimated volume", f"{pool_gal:,} gal")
        st.button("Use as backup source", key="apply_pool", on_click=_apply_pool, disabled=not pool_gal)

# ---------------------------- Foam math ----------------------------
with st.expander("Foam Math & Assumptions"):
    st.write(f"Foam concentrate is injected at {FOAM_MIX_RATIO * 100:.2f}% of each system's average "
             "solution flow. Each foam runtime is calculated independently from its own tank and "
             "does not depend on the backup water volume.")
    lines = []
    for s, (stats, foam) in enumerate(zip(summary.active_stats, summary.foam)):
        if config.systems[s].foam_tank_volume <= 0:
            lines.append(f"- System {s + 1}: No foam configured.")
        else:
            lines.append(f"- System {s + 1}: Qavg = {stats.average_flow:.2f} GPM → foam use = "
                         f"{foam.foam_use_rate:.3f} GPM → runtime = {foam.runtime.label}.")
    st.markdown("\n".join(lines))
    st.latex(r"Q_{avg} = \frac{5 \sum_{i=1}^{z} Q_i}{5z + t_{break}(z)}")
    st.latex(r"t_{foam} = \frac{V_{tank}}{0.0025\,Q_{avg}}, \qquad t_{source} = \frac{V_{source}}{\sum Q_{avg} - Q_{refill}}")

# ---------------------------- Downloads ----------------------------
st.subheader("Download Results")
d1, d2 = st.columns(2)
d1.download_button("Download JSON", data=results_json(config, summary), file_name="backup_runtime.json")
d2.download_button("Download Excel", data=results_excel(config, summary), file_name="backup_runtime.xlsx")

st.caption(f"For more than {MAX_SYSTEMS} systems, extend the same pattern: sum all average flows for "
           "backup water runtime; compute each foam runtime from its own tank.")
