# bioreactor_monitor/readings.py
from dataclasses import dataclass, replace
from typing import Optional

from bioreactor_monitor.config import GAUGE_SNAPSHOT, GAUGES, KPI_SNAPSHOT, TOLERANCE_BANDS
from bioreactor_monitor.quality import NORMAL, evaluate_tolerance, gauge_fill


@dataclass(frozen=True)
class ParameterReading:
    name: str
    label: str
    unit: str
    current: float
    target: float
    status: str
    deviation: float
    percent_of_target: float
    previous: Optional[float] = None
    highlight: bool = False

    @property
    def trend(self):
        if self.previous is None:
            return None
        return self.current - self.previous


@dataclass(frozen=True)
class GaugeReading:
    reading: ParameterReading
    fill: float
    max_scale: float


def build_reading(name, current, previous=None, highlight=False, bands=None):
    """Reading for `name`; status always comes from the evaluator."""
    if bands is None:
        bands = TOLERANCE_BANDS
    band = bands[name]
    result = evaluate_tolerance(band, current)
    return ParameterReading(
        name=name,
        label=band.label or name,
        unit=band.unit,
        current=float(current),
        target=band.target,
        status=result.status,
        deviation=result.deviation,
        percent_of_target=result.percent_of_target,
        previous=previous,
        highlight=highlight,
    )


def build_kpi_readings(snapshot=None):
    if snapshot is None:
        snapshot = KPI_SNAPSHOT
    return [
        build_reading(name, current, previous=previous, highlight=highlight)
        for name, (current, previous, highlight) in snapshot.items()
    ]


def build_gauge_readings(snapshot=None):
    if snapshot is None:
        snapshot = GAUGE_SNAPSHOT
    gauges = []
    for name, current in snapshot.items():
        band = GAUGES[name]
        reading = build_reading(name, current, bands=GAUGES)
        gauges.append(GaugeReading(reading=reading, fill=gauge_fill(current, band.max_scale),
                                   max_scale=band.max_scale))
    return gauges


def readings_from_series(df, names, bands=None):
    """Latest-sample readings; previous is the sample before it."""
    readings = []
    for name in names:
        series = df[name]
        previous = float(series.iloc[-2]) if len(series) > 1 else None
        reading = build_reading(name, series.iloc[-1], previous=previous, bands=bands)
        readings.append(replace(reading, highlight=reading.status != NORMAL))
    return readings
