# app.py
import logging
from datetime import datetime, timezone

import streamlit as st
import pandas as pd

from bioreactor_monitor.alerts import build_alerts, summarize_status
from bioreactor_monitor.config import (
    BATCH_COMPARISON, CRITICAL_PROCESS_PARAMETERS, CRITICAL_QUALITY_ATTRIBUTES,
    GAUGES, PROCESS_CHART, QUALITY_CHART, TOLERANCE_BANDS,
)
from bioreactor_monitor.dashboard import (
    ALERT_ICONS, critical_figure, format_value, gauge_card, gauge_figure, kpi_card, series_figure,
)
from bioreactor_monitor.errors import MonitorError
from bioreactor_monitor.quality import compute_quality_metrics, evaluate_latest
from bioreactor_monitor.readings import build_gauge_readings, build_kpi_readings, readings_from_series
from bioreactor_monitor.sampling import resolve_sampling
from bioreactor_monitor.settings import get_settings
from bioreactor_monitor.synthetic import generate_batch_comparison, generate_series

settings = get_settings()
logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger("bioreactor_monitor.app")

BADGE_COLORS = {"normal": "green", "high": "orange", "low": "blue", "critical": "red"}

# ------------------------
# Streamlit UI setup
# ------------------------
st.set_page_config(page_title="Real Time Process Monitoring", layout="wide")
st.title("Real Time Process Monitoring")

# batch id is a label only
batch = st.query_params.get("batch", settings.default_batch)

st.sidebar.header("Batch")
batch = st.sidebar.text_input("Batch", value=batch)
day = st.sidebar.selectbox("Culture day", [f"Day {d}" for d in range(1, 22)], index=7)

st.sidebar.header("Chart Controls")
process_hours = st.sidebar.slider("Process parameters window (hours)", 3, 24, settings.default_window_hours)
quality_hours = st.sidebar.slider("Quality attributes window (hours)", 3, 24, settings.default_window_hours)
use_seed = st.sidebar.checkbox("Reproducible noise", value=False)
seed = int(st.sidebar.number_input("Random seed", value=42, step=1)) if use_seed else None

st.markdown(f"**Batch:** {batch} &nbsp;|&nbsp; **{day}**")
st.caption("Live monitoring of critical process parameters")

try:
    process_df = generate_series(process_hours, seed=seed, settings=settings)
    quality_df = generate_series(quality_hours, seed=None if seed is None else seed + 1, settings=settings)
    kpis = build_kpi_readings()
    gauges = build_gauge_readings()
except MonitorError as e:
    logger.error("Could not build dashboard data: %s", e)
    st.error(f"No data: {e}")
    st.stop()

# ------------------------
# KPI strip
# ------------------------
st.header("Key Process Indicators")
for col, reading in zip(st.columns(len(kpis)), kpis):
    card = kpi_card(reading)
    col.metric(card["label"], card["value"], card["delta"])
    badge = f":{BADGE_COLORS[card['status']]}[{card['status']}]"
    if card["highlight"]:
        badge = f"**{badge}**"
    col.markdown(f"{badge} · target {card['target']}")

# ------------------------
# Gauges
# ------------------------
for col, gauge in zip(st.columns(len(gauges)), gauges):
    card = gauge_card(gauge)
    col.plotly_chart(gauge_figure(gauge), use_container_width=True)
    col.progress(int(card["fill"]))
    col.caption(f"{card['target']} · {card['badge']}")

# ------------------------
# Critical parameter panels (latest generated sample)
# ------------------------
left, right = st.columns(2)
with left:
    st.subheader("Critical Process Parameters")
    st.selectbox("Parameter", ["Ammonium", "Sodium", "Potassium", "Osmolality", "pH BGA", "pCO2"], key="cpp")
    for r in readings_from_series(process_df, CRITICAL_PROCESS_PARAMETERS):
        st.metric(r.label, format_value(r.current, r.unit), f"{r.deviation:+.2f} vs target")
        st.caption(r.status)
with right:
    st.subheader("Critical Quality Attributes")
    st.selectbox("Attribute", ["pH Level", "HMW_Out", "HMW_In", "CF_HMW", "T Shift", "Pressure", "Flow Rate"], key="cqa")
    for r in readings_from_series(quality_df, CRITICAL_QUALITY_ATTRIBUTES):
        st.metric(r.label, format_value(r.current, r.unit), f"{r.deviation:+.2f} vs target")
        st.caption(r.status)

# ------------------------
# Trend charts
# ------------------------
sampling = resolve_sampling(process_hours)
st.header("Process Parameters")
st.caption(f"{len(process_df)} samples every {sampling.interval_minutes} min")
st.plotly_chart(series_figure(process_df, PROCESS_CHART, "Lactate, Glucose & Sodium"), use_container_width=True)
st.download_button("Download process parameters", process_df.to_csv(index=False).encode("utf-8"),
                   file_name=f"{batch}_process_{process_hours}h.csv")

st.header("Quality Attributes")
st.plotly_chart(series_figure(quality_df, QUALITY_CHART, "pH Level & Biomass", shadows=BATCH_COMPARISON),
                use_container_width=True)

# ------------------------
# Critical pH deviation
# ------------------------
st.header("Critical pH Deviation Alert")
ph = evaluate_latest(quality_df, "pH")
c1, c2 = st.columns([3, 1])
c1.plotly_chart(critical_figure(quality_df, "pH"), use_container_width=True)
c2.metric("Current pH", format_value(quality_df["pH"].iloc[-1]))
c2.metric("Target pH", format_value(TOLERANCE_BANDS["pH"].target))
c2.metric("Deviation", f"{ph.deviation:+.2f}")
c2.caption(f"Status: {ph.status}")

st.header("Biomass Target")
b1, b2 = st.columns([3, 1])
b1.plotly_chart(series_figure(quality_df, ["biomass"], "Biomass vs target",
                                 bands={"biomass": GAUGES["biomass_target"]}), use_container_width=True)
biomass_gauge = GAUGES["biomass_target"]
b2.metric("Target Biomass", format_value(biomass_gauge.target, biomass_gauge.unit))

# ------------------------
# Batch comparison
# ------------------------
st.header("Batch Comparison - pH & Biomass")
comparison = generate_batch_comparison(quality_hours, seed=seed, settings=settings)
st.dataframe(comparison.pivot_table(index="time", columns=["parameter", "batch"], values="value"))

# ------------------------
# Alerts and status
# ------------------------
st.header("Process Alerts")
for alert in build_alerts(kpis):
    text = f"{ALERT_ICONS[alert.severity]} **{alert.title}**: {alert.message}"
    if alert.severity == "critical":
        st.error(text)
    elif alert.severity == "warning":
        st.warning(text)
    elif alert.severity == "info":
        st.info(text)
    else:
        st.success(text)

summary = summarize_status(kpis)
s1, s2, s3, s4 = st.columns(4)
s1.metric("System Status", "Online")
s2.metric("Data Streaming", "Active")
s3.metric("Alerts", f"{summary['critical']} Critical")
s4.metric("Monitoring", f"{summary['monitored']} Parameters")

with st.expander("Data quality summary"):
    st.json(compute_quality_metrics(pd.concat([process_df, quality_df], ignore_index=True)))

st.markdown("---")
st.write("Generated on:", datetime.now(timezone.utc).isoformat())
