"""
Summary statistics and trend series over recorded readings.

Both helpers are defined for non-empty input only. Callers render nothing
when no readings exist.
"""

from collections.abc import Sequence
from statistics import mean
from typing import Literal

from pressocheck.domain.models import CategoryColor, ChartSeries, PressureRecord, PressureStatistics

Metric = Literal["systolic", "diastolic"]

CHART_MARGIN = 20

# title, default lower bound, default upper bound, line color
_CHART_DEFAULTS: dict[Metric, tuple[str, int, int, CategoryColor]] = {
    "systolic": (
        "Pressão Sistólica (máxima)",
        70,
        200,
        CategoryColor(red=0xE5, green=0x39, blue=0x35),
    ),
    "diastolic": (
        "Pressão Diastólica (mínima)",
        40,
        120,
        CategoryColor(red=0x19, green=0x76, blue=0xD2),
    ),
}


def summarize(records: Sequence[PressureRecord]) -> PressureStatistics:
    """
    Aggregate readings into averages and extremes.

    Averages are truncated to integers.

    Raises:
        ValueError: If ``records`` is empty.
    """
    if not records:
        raise ValueError("Cannot summarize an empty set of readings")

    systolic = [record.systolic for record in records]
    diastolic = [record.diastolic for record in records]

    return PressureStatistics(
        count=len(records),
        average_systolic=int(mean(systolic)),
        average_diastolic=int(mean(diastolic)),
        max_systolic=max(systolic),
        min_systolic=min(systolic),
        max_diastolic=max(diastolic),
        min_diastolic=min(diastolic),
    )


def chart_series(records: Sequence[PressureRecord], metric: Metric) -> ChartSeries:
    """
    Prepare one metric for a trend chart.

    Values are ordered oldest first. Bounds widen past the default range when
    a reading falls outside it, then get a fixed margin on both ends.
    """
    if not records:
        raise ValueError("Cannot chart an empty set of readings")

    title, default_min, default_max, color = _CHART_DEFAULTS[metric]
    ordered = sorted(records, key=lambda record: record.timestamp)
    values = [getattr(record, metric) for record in ordered]

    return ChartSeries(
        title=title,
        values=values,
        lower_bound=min(default_min, min(values)) - CHART_MARGIN,
        upper_bound=max(default_max, max(values)) + CHART_MARGIN,
        color=color,
    )


def normalized(series: ChartSeries) -> list[float]:
    """Map each value into ``[0, 1]`` relative to the series bounds."""
    span = series.upper_bound - series.lower_bound
    return [(value - series.lower_bound) / span for value in series.values]
