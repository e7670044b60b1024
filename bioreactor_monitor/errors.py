# bioreactor_monitor/errors.py


class MonitorError(ValueError):
    """Base class for errors raised by the monitoring core."""


class InvalidWindowError(MonitorError):
    """Requested observation window is outside the supported range."""

    def __init__(self, window_hours, min_hours, max_hours):
        self.window_hours = window_hours
        self.min_hours = min_hours
        self.max_hours = max_hours
        super().__init__(
            f"window_hours={window_hours!r} outside supported range [{min_hours}, {max_hours}]"
        )


class DomainError(MonitorError):
    """Degenerate tolerance configuration (zero target, inverted band, ...)."""
