# bioreactor_monitor/config.py
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Waveform:
    """Synthesis recipe for one parameter.

    value(i) = base + amplitude * sin(i * frequency) + drift * i
               + window_drift * i / point_count + uniform noise
    """
    base: float
    amplitude: float = 0.0
    frequency: float = 0.0
    drift: float = 0.0          # per sample step
    window_drift: float = 0.0   # total change spread across the whole window
    noise_half_width: float = 0.0


@dataclass(frozen=True)
class ToleranceBand:
    """Narrow tolerance band (chart shading) and wide critical band (status)."""
    target: float
    lower: float
    upper: float
    critical_lower: float
    critical_upper: float
    unit: str = ""
    label: str = ""
    max_scale: Optional[float] = None  # gauges only


# Column order of a synthesized frame
PARAMETERS = [
    "temperature", "pressure", "flow_rate", "pH", "biomass",
    "prev_pH", "prev_biomass", "lactate", "glucose", "sodium",
]

WAVEFORMS = {
    "temperature": Waveform(base=37.0, amplitude=0.3, frequency=0.3, noise_half_width=0.1),
    "pressure": Waveform(base=2.0, amplitude=0.1, frequency=0.2, noise_half_width=0.025),
    "flow_rate": Waveform(base=45.0, amplitude=1.0, frequency=0.4, noise_half_width=0.25),
    "pH": Waveform(base=6.7, window_drift=-0.9, noise_half_width=0.025),
    "biomass": Waveform(base=12.0, drift=0.02, noise_half_width=0.15),
    "prev_pH": Waveform(base=6.8, noise_half_width=0.1),
    "prev_biomass": Waveform(base=11.0, drift=0.015, noise_half_width=0.1),
    "lactate": Waveform(base=1.2, amplitude=0.3, frequency=0.25, noise_half_width=0.1),
    "glucose": Waveform(base=8.5, amplitude=2.0, frequency=0.35, noise_half_width=0.5),
    "sodium": Waveform(base=95.0, amplitude=3.0, frequency=0.15, noise_half_width=1.0),
}

TOLERANCE_BANDS = {
    "temperature": ToleranceBand(37.0, 36.5, 37.5, 36.0, 38.0, unit="°C", label="Reactor Temperature"),
    "pressure": ToleranceBand(2.0, 1.95, 2.05, 1.5, 2.5, unit="bar", label="Pressure"),
    "flow_rate": ToleranceBand(45.0, 44.0, 46.0, 40.0, 50.0, unit="L/min", label="Flow Rate"),
    # Set point 7.0 +/- 1.0 for alerting, +/- 0.5 shaded
    "pH": ToleranceBand(7.0, 6.5, 7.5, 6.0, 8.0, unit="", label="pH Level"),
    "biomass": ToleranceBand(12.0, 11.5, 12.5, 11.0, 13.0, unit="g/L", label="Biomass"),
    "lactate": ToleranceBand(1.0, 0.8, 1.2, 0.5, 2.0, unit="g/L", label="Lactate"),
    "glucose": ToleranceBand(9.0, 8.0, 10.0, 5.0, 13.0, unit="g/L", label="Glucose"),
    "sodium": ToleranceBand(95.0, 94.0, 98.0, 85.0, 105.0, unit="mmol/L", label="Sodium"),
}

# Previous-batch shadow series are judged against the current batch bands
TOLERANCE_BANDS["prev_pH"] = TOLERANCE_BANDS["pH"]
TOLERANCE_BANDS["prev_biomass"] = TOLERANCE_BANDS["biomass"]

GAUGES = {
    "biomass_target": ToleranceBand(13.0, 12.5, 13.5, 11.5, 14.5, unit="%", label="Biomass Target", max_scale=13.0),
    "vvd_target": ToleranceBand(1.65, 1.60, 1.70, 1.40, 1.90, unit="", label="VVD Target", max_scale=1.65),
    "t_shift": ToleranceBand(34.8, 34.6, 35.0, 34.4, 35.1, unit="", label="T Shift Condition", max_scale=34.8),
}

# key -> (current, previous, highlight)
KPI_SNAPSHOT = {
    "temperature": (37.2, 37.1, False),
    "pressure": (2.1, 1.9, False),
    "flow_rate": (45.8, 44.5, False),
    "pH": (5.8, 6.8, True),
    "biomass": (12.4, 11.2, True),
}

GAUGE_SNAPSHOT = {
    "biomass_target": 12.4,
    "vvd_target": 1.58,
    "t_shift": 35.2,
}

CRITICAL_PROCESS_PARAMETERS = ["lactate", "glucose", "sodium"]
CRITICAL_QUALITY_ATTRIBUTES = ["temperature", "pH", "biomass"]

# Chart groupings: title -> parameters drawn on it
PROCESS_CHART = ["lactate", "glucose", "sodium"]
QUALITY_CHART = ["pH", "biomass"]
BATCH_COMPARISON = {"pH": "prev_pH", "biomass": "prev_biomass"}
