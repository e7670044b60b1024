# bioreactor_monitor/quality.py
import logging
import math
from dataclasses import dataclass

from bioreactor_monitor.config import TOLERANCE_BANDS
from bioreactor_monitor.errors import DomainError

logger = logging.getLogger(__name__)

NORMAL = "normal"
HIGH = "high"
LOW = "low"
CRITICAL = "critical"
STATUSES = (NORMAL, HIGH, LOW, CRITICAL)


@dataclass(frozen=True)
class Evaluation:
    status: str
    deviation: float
    percent_of_target: float


def _check_band(target, lower, upper, critical_lower, critical_upper):
    values = (target, lower, upper, critical_lower, critical_upper)
    if not all(math.isfinite(v) for v in values):
        raise DomainError(f"non-finite tolerance configuration: {values}")
    if target == 0:
        raise DomainError("target of 0 has no percent-of-target")
    if lower > upper:
        raise DomainError(f"tolerance band inverted: lower={lower} > upper={upper}")
    if critical_lower > critical_upper:
        raise DomainError(
            f"critical band inverted: critical_lower={critical_lower} > critical_upper={critical_upper}"
        )
    if critical_lower > lower or critical_upper < upper:
        raise DomainError(
            f"critical band [{critical_lower}, {critical_upper}] must contain "
            f"tolerance band [{lower}, {upper}]"
        )


def classify(current, target, lower, upper, critical_lower, critical_upper):
    """Classify a reading against its tolerance and critical bands.

    Bounds are inclusive: a value sitting exactly on `upper` is still normal.
    """
    _check_band(target, lower, upper, critical_lower, critical_upper)
    if not math.isfinite(current):
        raise DomainError(f"non-finite reading: {current}")

    if current < critical_lower or current > critical_upper:
        status = CRITICAL
    elif current > upper:
        status = HIGH
    elif current < lower:
        status = LOW
    else:
        status = NORMAL

    result = Evaluation(
        status=status,
        deviation=current - target,
        percent_of_target=current / target * 100,
    )
    logger.debug("classify current=%s target=%s -> %s", current, target, status)
    return result


def evaluate_tolerance(band, current):
    return classify(
        float(current), band.target, band.lower, band.upper,
        band.critical_lower, band.critical_upper,
    )


def gauge_fill(current, max_scale):
    """Percent of full scale for gauge rendering, clamped to [0, 100]."""
    if not max_scale or max_scale <= 0 or not math.isfinite(max_scale):
        raise DomainError(f"gauge scale must be positive, got {max_scale}")
    if not math.isfinite(current):
        raise DomainError(f"non-finite reading: {current}")
    return max(0.0, min(current / max_scale * 100, 100.0))


def evaluate_latest(df, parameter, bands=None):
    """Evaluate the most recent sample of `parameter` in a synthesized frame."""
    if bands is None:
        bands = TOLERANCE_BANDS
    if df.empty:
        raise DomainError("cannot evaluate an empty series")
    return evaluate_tolerance(bands[parameter], df[parameter].iloc[-1])


def check_nulls(df, column):
    return int(df[column].isnull().sum())


def check_range(df, column, min_val, max_val):
    s = df[column]
    return int((~s.between(min_val, max_val)).sum())


def compute_quality_metrics(df, bands=None):
    if bands is None:
        bands = TOLERANCE_BANDS
    metrics = {"rows": int(len(df)), "parameters": {}}
    for name, band in bands.items():
        if name not in df.columns:
            continue
        entry = {
            "nulls": check_nulls(df, name),
            "out_of_tolerance": check_range(df, name, band.lower, band.upper),
            "out_of_critical": check_range(df, name, band.critical_lower, band.critical_upper),
        }
        if len(df):
            entry["latest_status"] = evaluate_latest(df, name, bands).status
        metrics["parameters"][name] = entry
    metrics["critical_parameters"] = sorted(
        name for name, entry in metrics["parameters"].items()
        if entry.get("latest_status") == CRITICAL
    )
    return metrics
