"""Line classification pipeline: comments, stripping, logical counts, metrics."""

from .comments import CommentScanner, count_unique_comment_lines
from .logical import DEFAULT_RULES, KeywordRules, LogicalLineCounter
from .metrics import MetricsAggregator
from .stripper import LineStripper

__all__ = [
    "CommentScanner",
    "DEFAULT_RULES",
    "KeywordRules",
    "LineStripper",
    "LogicalLineCounter",
    "MetricsAggregator",
    "count_unique_comment_lines",
]
