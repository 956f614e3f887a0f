"""Per-file metric assembly and directory folding."""

from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Optional, Sequence

from ..models import CommentSpan, DirectorySummary, LineMetrics, LogicalCounts
from .comments import CommentScanner, count_unique_comment_lines
from .logical import KeywordRules, LogicalLineCounter
from .stripper import LineStripper

BLANK_LINE_ALLOWANCE = 0.25


def count_blank_lines(lines: Sequence[str]) -> int:
    return sum(1 for line in lines if not line.strip())


def count_physical_lines(total_lines: int, blank_lines: int) -> int:
    """Subtract only the blank lines beyond a quarter of the file."""
    allowed = math.floor(total_lines * BLANK_LINE_ALLOWANCE + 0.5)
    excess = max(0, blank_lines - allowed)
    return total_lines - excess


def comment_coverage(physical_lines: int, comment_lines: int) -> float:
    if physical_lines <= 0:
        return 0.0
    ratio = Decimal(comment_lines / physical_lines * 100)
    return float(ratio.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


class MetricsAggregator:
    """Runs the comment, stripping and logical passes for one file at a time."""

    def __init__(self, rules: KeywordRules | None = None) -> None:
        self.scanner = CommentScanner()
        self.stripper = LineStripper()
        self.counter = LogicalLineCounter(rules)

    def measure(self, lines: Sequence[str], file_path: Optional[str] = None) -> LineMetrics:
        total_lines = len(lines)
        blank_lines = count_blank_lines(lines)
        physical_lines = count_physical_lines(total_lines, blank_lines)

        spans = self.scanner.scan(lines)
        unique_comment_lines = count_unique_comment_lines(spans)
        logical = self.logical_counts(lines, spans).total

        return LineMetrics(
            total_lines=total_lines,
            blank_lines=blank_lines,
            physical_lines=physical_lines,
            logical_lines=logical,
            unique_comment_lines=unique_comment_lines,
            comment_coverage=comment_coverage(physical_lines, unique_comment_lines),
            file_path=file_path,
        )

    def logical_counts(self, lines: Sequence[str], spans: Sequence[CommentSpan]) -> LogicalCounts:
        return self.counter.count(self.stripper.strip(lines, spans))

    @staticmethod
    def summarize(results: Iterable[LineMetrics]) -> DirectorySummary:
        """Fold per-file records; callers pass only files that were read."""
        total = blank = physical = logical = comments = 0
        for metrics in results:
            total += metrics.total_lines
            blank += metrics.blank_lines
            physical += metrics.physical_lines
            logical += metrics.logical_lines
            comments += metrics.unique_comment_lines
        return DirectorySummary(
            total_lines=total,
            blank_lines=blank,
            physical_lines=physical,
            logical_lines=logical,
            unique_comment_lines=comments,
        )


__all__ = [
    "MetricsAggregator",
    "comment_coverage",
    "count_blank_lines",
    "count_physical_lines",
]
