"""Tests for per-file metrics and directory folding."""

from __future__ import annotations

import pytest

from jsloc.analyzers.metrics import (
    MetricsAggregator,
    comment_coverage,
    count_blank_lines,
    count_physical_lines,
)
from jsloc.models import LineMetrics


@pytest.mark.parametrize(
    ("total", "blank", "expected"),
    [
        (0, 0, 0),
        (4, 0, 4),
        (4, 4, 1),
        (2, 1, 2),
        # 10 * 0.25 rounds half up to 3 allowed blank lines.
        (10, 5, 8),
        (10, 3, 10),
    ],
)
def test_physical_lines_cap_blank_lines_at_a_quarter(total: int, blank: int, expected: int) -> None:
    assert count_physical_lines(total, blank) == expected


@pytest.mark.parametrize("total", [0, 1, 3, 7, 10, 25, 101])
def test_physical_lines_plus_excess_is_total(total: int) -> None:
    for blank in range(total + 1):
        excess = max(0, blank - int(total * 0.25 + 0.5))
        assert count_physical_lines(total, blank) + excess == total


def test_comment_coverage_rounds_half_up_to_two_places() -> None:
    assert comment_coverage(0, 5) == 0.0
    assert comment_coverage(3, 1) == 33.33
    assert comment_coverage(6, 1) == 16.67
    assert comment_coverage(8, 1) == 12.5
    assert comment_coverage(32, 1) == 3.13


def test_count_blank_lines_treats_whitespace_as_blank() -> None:
    assert count_blank_lines(["", "  ", "\t", "x"]) == 3


def test_measure_block_comment_example() -> None:
    lines = ["a();", "b();", "c();", "/* start", "", "end */"]
    metrics = MetricsAggregator().measure(lines, file_path="demo.js")

    assert metrics == LineMetrics(
        total_lines=6,
        blank_lines=1,
        physical_lines=6,
        logical_lines=3,
        unique_comment_lines=3,
        comment_coverage=50.0,
        file_path="demo.js",
    )


def test_measure_inline_comment_example() -> None:
    metrics = MetricsAggregator().measure(["let x = 1; // set x"])
    assert metrics.unique_comment_lines == 1
    assert metrics.logical_lines == 1
    assert metrics.comment_coverage == 100.0


def test_measure_empty_input() -> None:
    metrics = MetricsAggregator().measure([])
    assert metrics.total_lines == 0
    assert metrics.physical_lines == 0
    assert metrics.logical_lines == 0
    assert metrics.comment_coverage == 0.0


def test_measure_single_blank_line_has_no_physical_lines() -> None:
    metrics = MetricsAggregator().measure([""])
    assert metrics.total_lines == 1
    assert metrics.blank_lines == 1
    assert metrics.physical_lines == 0
    assert metrics.comment_coverage == 0.0


def test_summarize_sums_and_derives_from_totals() -> None:
    first = LineMetrics(1200, 100, 1150, 600, 50, 4.35, "a.js")
    second = LineMetrics(10, 0, 10, 5, 10, 100.0, "b.js")

    summary = MetricsAggregator.summarize([first, second])

    assert summary.total_lines == 1210
    assert summary.blank_lines == 100
    assert summary.physical_lines == 1160
    assert summary.logical_lines == 605
    assert summary.unique_comment_lines == 60
    assert summary.kilo_lines == 1210 / 1000
    # Derived from the sums, not the mean of 4.35 and 100.0.
    assert summary.average_comment_coverage == pytest.approx(60 / 1160 * 100)


def test_summarize_nothing() -> None:
    summary = MetricsAggregator.summarize([])
    assert summary.total_lines == 0
    assert summary.kilo_lines == 0
    assert summary.average_comment_coverage == 0.0
