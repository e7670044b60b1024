import pytest

from bioreactor_monitor.settings import Settings


@pytest.fixture
def settings():
    return Settings(
        default_window_hours=12,
        min_window_hours=1,
        max_window_hours=168,
        max_points=1000,
        default_batch="BATCH-TEST",
        log_level="INFO",
    )


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    """Keep a developer's .env and MONITOR_* variables out of the tests."""
    for key in (
        "MONITOR_DEFAULT_WINDOW_HOURS", "MONITOR_MIN_WINDOW_HOURS", "MONITOR_MAX_WINDOW_HOURS",
        "MONITOR_MAX_POINTS", "MONITOR_DEFAULT_BATCH", "MONITOR_LOG_LEVEL",
    ):
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("MONITOR_ENV_FILE", str(tmp_path / "missing.env"))
