# bioreactor_monitor/settings.py
import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv


@dataclass(frozen=True)
class Settings:
    default_window_hours: int
    min_window_hours: float
    max_window_hours: float
    max_points: int
    default_batch: str
    log_level: str


def get_settings() -> Settings:
    # .env is optional; real environment variables win over it
    env_file = os.getenv("MONITOR_ENV_FILE", ".env")
    if env_file and Path(env_file).exists():
        load_dotenv(env_file, override=False)

    min_window = float(os.getenv("MONITOR_MIN_WINDOW_HOURS", "1"))
    max_window = float(os.getenv("MONITOR_MAX_WINDOW_HOURS", "168"))
    if min_window <= 0 or min_window > max_window:
        raise ValueError(
            f"invalid window bounds: MONITOR_MIN_WINDOW_HOURS={min_window}, "
            f"MONITOR_MAX_WINDOW_HOURS={max_window}"
        )

    max_points = int(os.getenv("MONITOR_MAX_POINTS", "1000"))
    if max_points < 1:
        raise ValueError(f"MONITOR_MAX_POINTS must be positive, got {max_points}")

    return Settings(
        default_window_hours=int(os.getenv("MONITOR_DEFAULT_WINDOW_HOURS", "12")),
        min_window_hours=min_window,
        max_window_hours=max_window,
        max_points=max_points,
        default_batch=os.getenv("MONITOR_DEFAULT_BATCH", "BATCH-2024-315"),
        log_level=os.getenv("MONITOR_LOG_LEVEL", "INFO").upper(),
    )
