"""Line, logical statement and comment metrics for JavaScript sources."""

from .models import CommentShape, CommentSpan, DirectoryReport, DirectorySummary, LineMetrics, LogicalCounts
from .orchestrator import Orchestrator, TargetError, analyze_source, split_lines

__version__ = "0.1.0"

__all__ = [
    "CommentShape",
    "CommentSpan",
    "DirectoryReport",
    "DirectorySummary",
    "LineMetrics",
    "LogicalCounts",
    "Orchestrator",
    "TargetError",
    "analyze_source",
    "split_lines",
]
