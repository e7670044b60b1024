import math

import pytest

from bioreactor_monitor.config import TOLERANCE_BANDS, ToleranceBand
from bioreactor_monitor.errors import DomainError
from bioreactor_monitor.quality import (
    CRITICAL, HIGH, LOW, NORMAL,
    classify, compute_quality_metrics, evaluate_latest, evaluate_tolerance, gauge_fill,
)
from bioreactor_monitor.synthetic import generate_series


class TestClassify:

    def test_at_target_is_normal(self):
        result = classify(7.0, 7.0, 6.5, 7.5, 6.0, 8.0)
        assert result.status == NORMAL
        assert result.deviation == 0
        assert result.percent_of_target == pytest.approx(100.0)

    def test_below_critical_floor(self):
        result = classify(5.8, 7.0, 6.5, 7.5, 6.0, 8.0)
        assert result.status == CRITICAL
        assert result.deviation == pytest.approx(-1.2)

    def test_upper_bound_is_inclusive(self):
        assert classify(2.1, 2.0, 1.9, 2.1, 1.5, 2.5).status == NORMAL
        assert classify(1.9, 2.0, 1.9, 2.1, 1.5, 2.5).status == NORMAL

    @pytest.mark.parametrize("current,status", [
        (2.2, HIGH),
        (2.5, HIGH),
        (2.51, CRITICAL),
        (1.8, LOW),
        (1.5, LOW),
        (1.4, CRITICAL),
    ])
    def test_bands(self, current, status):
        assert classify(current, 2.0, 1.9, 2.1, 1.5, 2.5).status == status

    def test_percent_of_target_unclamped(self):
        result = classify(35.2, 34.8, 34.6, 35.0, 34.0, 36.0)
        assert result.percent_of_target == pytest.approx(101.15, abs=0.01)

    def test_zero_target(self):
        with pytest.raises(DomainError):
            classify(0.5, 0.0, -1.0, 1.0, -2.0, 2.0)

    @pytest.mark.parametrize("band", [
        (7.0, 7.5, 6.5, 6.0, 8.0),   # tolerance inverted
        (7.0, 6.5, 7.5, 8.0, 6.0),   # critical inverted
        (7.0, 6.5, 7.5, 6.8, 8.0),   # critical narrower than tolerance
        (7.0, 6.5, math.nan, 6.0, 8.0),
    ])
    def test_degenerate_bands(self, band):
        with pytest.raises(DomainError):
            classify(7.0, *band)

    def test_non_finite_reading(self):
        with pytest.raises(DomainError):
            classify(math.nan, 7.0, 6.5, 7.5, 6.0, 8.0)

    def test_domain_error_is_value_error(self):
        with pytest.raises(ValueError):
            classify(1.0, 0.0, -1.0, 1.0, -2.0, 2.0)


class TestEvaluateTolerance:

    def test_uses_configured_bands(self):
        result = evaluate_tolerance(TOLERANCE_BANDS["pH"], 5.8)
        assert result.status == CRITICAL
        assert result.deviation == pytest.approx(-1.2)

    def test_bands_are_independent(self):
        # inside the wide band, outside the narrow one
        band = ToleranceBand(7.0, 6.9, 7.1, 5.0, 9.0)
        assert evaluate_tolerance(band, 8.5).status == HIGH
        assert evaluate_tolerance(band, 9.5).status == CRITICAL

    def test_pressure_snapshot_is_high(self):
        assert evaluate_tolerance(TOLERANCE_BANDS["pressure"], 2.1).status == HIGH


class TestGaugeFill:

    def test_clamped_to_full_scale(self):
        assert gauge_fill(35.2, 34.8) == 100.0

    def test_partial(self):
        assert gauge_fill(12.4, 13.0) == pytest.approx(95.38, abs=0.01)

    def test_never_negative(self):
        assert gauge_fill(-1.0, 10.0) == 0.0

    @pytest.mark.parametrize("scale", [0, -1.0, None])
    def test_invalid_scale(self, scale):
        with pytest.raises(DomainError):
            gauge_fill(1.0, scale)


class TestQualityMetrics:

    def test_metrics_for_generated_series(self, settings):
        df = generate_series(12, seed=9, settings=settings)
        metrics = compute_quality_metrics(df)
        assert metrics["rows"] == 13
        assert set(metrics["parameters"]) == set(TOLERANCE_BANDS)
        ph = metrics["parameters"]["pH"]
        assert ph["nulls"] == 0
        assert ph["latest_status"] == CRITICAL
        assert ph["out_of_tolerance"] >= ph["out_of_critical"] >= 1
        assert "pH" in metrics["critical_parameters"]

    def test_skips_missing_columns(self, settings):
        df = generate_series(12, seed=9, settings=settings)[["time", "temperature"]]
        metrics = compute_quality_metrics(df)
        assert list(metrics["parameters"]) == ["temperature"]


class TestExplicitBandTables:

    def test_empty_table_is_not_replaced_by_defaults(self, settings):
        df = generate_series(12, seed=9, settings=settings)
        metrics = compute_quality_metrics(df, bands={})
        assert metrics["parameters"] == {}
        assert metrics["critical_parameters"] == []

    def test_latest_with_empty_table(self, settings):
        df = generate_series(12, seed=9, settings=settings)
        with pytest.raises(KeyError):
            evaluate_latest(df, "pH", bands={})


@pytest.mark.parametrize("current", [math.nan, math.inf, -math.inf])
def test_gauge_fill_rejects_non_finite_reading(current):
    with pytest.raises(DomainError):
        gauge_fill(current, 13.0)
