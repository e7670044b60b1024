# bioreactor_monitor/dashboard.py
import plotly.graph_objects as go

from bioreactor_monitor.config import TOLERANCE_BANDS

STATUS_COLORS = {
    "normal": "#16a34a",
    "high": "#ea580c",
    "low": "#2563eb",
    "critical": "#dc2626",
}

PARAMETER_COLORS = {
    "temperature": "#2563eb",
    "pressure": "#ea580c",
    "flow_rate": "#0891b2",
    "pH": "#16a34a",
    "biomass": "#9333ea",
    "lactate": "#16a34a",
    "glucose": "#ea580c",
    "sodium": "#0891b2",
}

ALERT_ICONS = {"critical": "🚨", "warning": "⚠️", "info": "ℹ️", "success": "✅"}


def status_color(status):
    return STATUS_COLORS.get(status, "#6b7280")


def format_value(value, unit="", digits=2):
    text = f"{value:.{digits}f}".rstrip("0").rstrip(".")
    return f"{text} {unit}".strip()


def kpi_card(reading):
    """Display record for one KPI tile."""
    delta = None
    if reading.trend is not None:
        delta = format_value(reading.trend, digits=2)
        if reading.trend > 0:
            delta = "+" + delta
    return {
        "label": reading.label,
        "value": format_value(reading.current, reading.unit),
        "target": format_value(reading.target, reading.unit),
        "delta": delta,
        "status": reading.status,
        "color": status_color(reading.status),
        "highlight": reading.highlight,
    }


def gauge_card(gauge):
    reading = gauge.reading
    return {
        "label": reading.label,
        "value": format_value(reading.current),
        "target": f"Target: {format_value(reading.target, reading.unit).replace(' %', '%')}",
        "fill": gauge.fill,
        # badge shows the unclamped percent, the ring is clamped
        "badge": f"{reading.percent_of_target:.0f}%",
        "color": status_color(reading.status),
    }


def gauge_figure(gauge):
    reading = gauge.reading
    fig = go.Figure(go.Indicator(
        mode="gauge+number",
        value=reading.current,
        title={"text": reading.label},
        gauge={
            "axis": {"range": [0, gauge.max_scale]},
            "bar": {"color": status_color(reading.status)},
            "threshold": {"line": {"color": "#111827", "width": 2}, "value": reading.target},
        },
    ))
    fig.update_layout(height=220, margin=dict(l=20, r=20, t=50, b=10))
    return fig


def add_band(fig, band, color, critical_zone=False):
    """Shade the tolerance band and draw the dashed target line."""
    fig.add_hrect(y0=band.lower, y1=band.upper, fillcolor=color, opacity=0.1, line_width=0)
    fig.add_hline(y=band.target, line_dash="dash", line_color=color,
                  annotation_text=f"Target ({band.target:g})")
    if critical_zone:
        fig.add_hrect(y0=band.critical_lower, y1=band.lower, fillcolor=STATUS_COLORS["critical"],
                      opacity=0.2, line_width=0)
        fig.add_hline(y=band.lower, line_dash="dot", line_color="#f59e0b",
                      annotation_text="Lower set point")
    return fig


def series_figure(df, parameters, title, bands=None, shadows=None):
    """Line chart of `parameters` with their bands; shadows maps param -> previous-batch column."""
    if bands is None:
        bands = TOLERANCE_BANDS
    shadows = shadows or {}
    fig = go.Figure()
    for name in parameters:
        band = bands[name]
        color = PARAMETER_COLORS.get(name, "#6b7280")
        unit = f" ({band.unit})" if band.unit else ""
        fig.add_trace(go.Scatter(x=df["time"], y=df[name], mode="lines+markers",
                                 name=f"{band.label}{unit}", line=dict(color=color)))
        if name in shadows:
            fig.add_trace(go.Scatter(x=df["time"], y=df[shadows[name]], mode="lines",
                                     name=f"{band.label} (Prev Batch)",
                                     line=dict(color=color, dash="dot")))
        add_band(fig, band, color)
    fig.update_layout(title=title, xaxis_title="Elapsed time", yaxis_title="Value")
    return fig


def critical_figure(df, parameter, title=None, bands=None):
    """Single-parameter chart with the critical zone shaded."""
    if bands is None:
        bands = TOLERANCE_BANDS
    band = bands[parameter]
    color = PARAMETER_COLORS.get(parameter, "#6b7280")
    fig = go.Figure(go.Scatter(x=df["time"], y=df[parameter], mode="lines+markers",
                               name=f"Actual {band.label}", line=dict(color=STATUS_COLORS["critical"])))
    add_band(fig, band, color, critical_zone=True)
    fig.update_layout(title=title or f"Critical {band.label} Deviation", xaxis_title="Elapsed time")
    return fig
