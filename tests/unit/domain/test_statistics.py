"""Tests for summary statistics and chart series preparation."""

import pytest

from pressocheck.domain.models import PressureRecord
from pressocheck.domain.statistics import chart_series, normalized, summarize


def _record(systolic: int, diastolic: int, timestamp: int = 0) -> PressureRecord:
    return PressureRecord(
        systolic=systolic, diastolic=diastolic, timestamp=timestamp, time_label="08:00"
    )


class TestSummarize:
    def test_example_readings(self) -> None:
        stats = summarize([_record(120, 80), _record(140, 90), _record(100, 70)])

        assert stats.count == 3
        assert stats.average_systolic == 120
        assert stats.average_diastolic == 80
        assert stats.max_systolic == 140
        assert stats.min_systolic == 100
        assert stats.max_diastolic == 90
        assert stats.min_diastolic == 70

    def test_averages_are_truncated(self) -> None:
        stats = summarize([_record(121, 80), _record(122, 81)])

        assert stats.average_systolic == 121
        assert stats.average_diastolic == 80

    def test_single_reading(self) -> None:
        stats = summarize([_record(118, 76)])
        assert stats.max_systolic == stats.min_systolic == stats.average_systolic == 118

    def test_empty_input_is_rejected(self) -> None:
        with pytest.raises(ValueError, match="empty"):
            summarize([])


class TestChartSeries:
    def test_values_are_oldest_first(self) -> None:
        records = [_record(150, 95, timestamp=3), _record(120, 80, timestamp=1), _record(130, 85, 2)]

        series = chart_series(records, "systolic")

        assert series.values == [120, 130, 150]
        assert series.title == "Pressão Sistólica (máxima)"

    def test_default_bounds_with_margin(self) -> None:
        series = chart_series([_record(120, 80)], "systolic")
        assert (series.lower_bound, series.upper_bound) == (50, 220)

        series = chart_series([_record(120, 80)], "diastolic")
        assert (series.lower_bound, series.upper_bound) == (20, 140)

    def test_bounds_widen_for_outliers(self) -> None:
        series = chart_series([_record(230, 130), _record(75, 45)], "diastolic")
        assert (series.lower_bound, series.upper_bound) == (20, 150)

        series = chart_series([_record(230, 130)], "systolic")
        assert series.upper_bound == 250

    def test_normalized_values_fall_in_unit_interval(self) -> None:
        series = chart_series([_record(70, 40), _record(200, 120), _record(135, 80)], "systolic")

        points = normalized(series)

        assert len(points) == 3
        assert all(0.0 <= point <= 1.0 for point in points)
        assert points[0] == pytest.approx(20 / 170)

    def test_empty_input_is_rejected(self) -> None:
        with pytest.raises(ValueError):
            chart_series([], "systolic")
