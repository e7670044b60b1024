# bioreactor_monitor/alerts.py
from dataclasses import dataclass

from bioreactor_monitor.config import TOLERANCE_BANDS
from bioreactor_monitor.quality import CRITICAL, HIGH, LOW, NORMAL, STATUSES

# percent-of-target drift that still gets an informational note while in band
VARIANCE_PERCENT = 1.0

_SEVERITY = {"critical": 0, "warning": 1, "info": 2, "success": 3}


@dataclass(frozen=True)
class Alert:
    severity: str
    title: str
    message: str
    parameter: str = ""


def _fmt(value, unit):
    return f"{value:g} {unit}".strip()


def alert_for(reading, bands=None):
    """Alert for a single reading, or None when nothing is worth reporting."""
    if bands is None:
        bands = TOLERANCE_BANDS
    if reading.status == CRITICAL:
        band = bands[reading.name]
        half_width = (band.critical_upper - band.critical_lower) / 2
        return Alert(
            severity="critical",
            title="Critical Deviation Detected",
            message=f"{reading.label}: Set Point = {reading.target:g} +/- {half_width:g} "
                    f"| Current Value = {reading.current:g}",
            parameter=reading.name,
        )
    if reading.status in (HIGH, LOW):
        direction = "Above" if reading.status == HIGH else "Below"
        return Alert(
            severity="warning",
            title=f"{reading.label} {direction} Target",
            message=f"{reading.label} at {_fmt(reading.current, reading.unit)} "
                    f"(target: {_fmt(reading.target, reading.unit)})",
            parameter=reading.name,
        )
    variance = reading.percent_of_target - 100
    if abs(variance) >= VARIANCE_PERCENT:
        direction = "above" if variance > 0 else "below"
        return Alert(
            severity="info",
            title=f"{reading.label} Variance",
            message=f"{reading.label} {abs(variance):.1f}% {direction} target "
                    f"({_fmt(reading.current, reading.unit)} vs {_fmt(reading.target, reading.unit)})",
            parameter=reading.name,
        )
    return None


def build_alerts(readings, bands=None):
    alerts = [a for a in (alert_for(r, bands) for r in readings) if a is not None]
    if not any(r.status != NORMAL for r in readings):
        alerts.append(Alert(
            severity="success",
            title="All Parameters Stable",
            message="Monitored parameters within acceptable range",
        ))
    return sorted(alerts, key=lambda a: _SEVERITY[a.severity])


def summarize_status(readings):
    counts = {status: 0 for status in STATUSES}
    for r in readings:
        counts[r.status] += 1
    counts["monitored"] = len(readings)
    return counts
