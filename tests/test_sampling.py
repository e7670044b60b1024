import math

import pytest

from bioreactor_monitor.errors import InvalidWindowError
from bioreactor_monitor.sampling import format_elapsed, resolve_sampling, validate_window


class TestResolveSampling:

    @pytest.mark.parametrize("hours,interval,points", [
        (3, 30, 6),
        (6, 30, 12),
        (7, 60, 7),
        (12, 60, 12),
        (13, 120, 6),
        (24, 120, 12),
    ])
    def test_interval_boundaries(self, hours, interval, points):
        sampling = resolve_sampling(hours)
        assert sampling.interval_minutes == interval
        assert sampling.point_count == points

    def test_supported_windows_render_bounded_points(self):
        for hours in range(3, 25):
            sampling = resolve_sampling(hours)
            if hours <= 12:
                assert sampling.interval_minutes in (30, 60)
            else:
                assert sampling.interval_minutes == 120
            assert 6 <= sampling.point_count <= 12

    def test_point_count_truncates(self):
        # 15h -> 900 / 120 = 7.5
        assert resolve_sampling(15).point_count == 7


class TestValidateWindow:

    def test_accepts_window_in_range(self, settings):
        assert validate_window(12, settings) == 12
        assert validate_window(1, settings) == 1
        assert validate_window(168, settings) == 168

    @pytest.mark.parametrize("hours", [0, -3, 169, 1000, math.nan, math.inf])
    def test_rejects_out_of_range(self, settings, hours):
        with pytest.raises(InvalidWindowError):
            validate_window(hours, settings)

    @pytest.mark.parametrize("hours", ["12", None, True])
    def test_rejects_non_numbers(self, settings, hours):
        with pytest.raises(InvalidWindowError):
            validate_window(hours, settings)

    def test_error_carries_bounds(self, settings):
        with pytest.raises(InvalidWindowError) as exc:
            validate_window(500, settings)
        assert exc.value.window_hours == 500
        assert exc.value.max_hours == 168
        assert isinstance(exc.value, ValueError)


class TestFormatElapsed:

    def test_zero_padded(self):
        assert format_elapsed(0) == "00:00"
        assert format_elapsed(90) == "01:30"

    def test_hours_are_not_wrapped(self):
        assert format_elapsed(24 * 60) == "24:00"
        assert format_elapsed(100 * 60 + 30) == "100:30"
