# bioreactor_monitor/sampling.py
import logging
import math
import numbers
from dataclasses import dataclass

from bioreactor_monitor.errors import InvalidWindowError
from bioreactor_monitor.settings import get_settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Sampling:
    interval_minutes: int
    point_count: int


def resolve_sampling(window_hours):
    """Map a window length to (interval, point count).

    30 min up to 6h, 1h up to 12h, 2h beyond, so a 3-24h window
    renders between 6 and 12 intervals.
    """
    if window_hours <= 6:
        interval = 30
    elif window_hours <= 12:
        interval = 60
    else:
        interval = 120
    point_count = int(window_hours * 60 // interval)
    return Sampling(interval_minutes=interval, point_count=point_count)


def validate_window(window_hours, settings=None):
    settings = settings or get_settings()
    if isinstance(window_hours, bool) or not isinstance(window_hours, numbers.Real):
        raise InvalidWindowError(window_hours, settings.min_window_hours, settings.max_window_hours)
    if not math.isfinite(window_hours) or not (
        settings.min_window_hours <= window_hours <= settings.max_window_hours
    ):
        logger.warning("Rejected window of %r hours", window_hours)
        raise InvalidWindowError(window_hours, settings.min_window_hours, settings.max_window_hours)
    return window_hours


def format_elapsed(elapsed_minutes):
    # elapsed time since window start, hours are not wrapped at 24
    hours, minutes = divmod(int(elapsed_minutes), 60)
    return f"{hours:02d}:{minutes:02d}"
