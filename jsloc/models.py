"""Core data models shared across jsloc components."""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple


class CommentShape(Enum):
    """The five comment layouts recognised by the comment scanner."""

    SINGLE_LINE_FULL = "single"
    SINGLE_LINE_INLINE = "inline-single"
    BLOCK_SINGLE_LINE = "block-single"
    BLOCK_INLINE = "inline-block"
    BLOCK_MULTI_LINE = "block-multiline"

    @property
    def is_inline(self) -> bool:
        """True when the comment shares its line with code that must survive."""
        return self in (CommentShape.SINGLE_LINE_INLINE, CommentShape.BLOCK_INLINE)


@dataclass(frozen=True)
class CommentSpan:
    """A comment occurrence covering an inclusive, 0-based range of lines."""

    shape: CommentShape
    line_start: int
    line_end: int

    def lines(self) -> range:
        return range(self.line_start, self.line_end + 1)


@dataclass(frozen=True)
class LogicalCounts:
    """Per-category tallies produced by the logical line counter."""

    logical: int = 0
    iteration: int = 0
    jump: int = 0
    data_declaration: int = 0
    block_delimiter: int = 0
    function_calls: int = 0

    @property
    def total(self) -> int:
        return (
            self.logical
            + self.iteration
            + self.jump
            + self.data_declaration
            + self.block_delimiter
            + self.function_calls
        )


@dataclass(frozen=True)
class LineMetrics:
    """Size metrics for a single source file."""

    total_lines: int
    blank_lines: int
    physical_lines: int
    logical_lines: int
    unique_comment_lines: int
    comment_coverage: float
    file_path: Optional[str] = None


@dataclass(frozen=True)
class DirectorySummary:
    """Additive totals across every successfully analysed file."""

    total_lines: int = 0
    blank_lines: int = 0
    physical_lines: int = 0
    logical_lines: int = 0
    unique_comment_lines: int = 0

    @property
    def kilo_lines(self) -> float:
        return self.total_lines / 1000

    @property
    def average_comment_coverage(self) -> float:
        if self.physical_lines <= 0:
            return 0.0
        return self.unique_comment_lines / self.physical_lines * 100


@dataclass(frozen=True)
class DirectoryReport:
    """Summary plus ordered per-file metrics for a directory run."""

    root: str
    summary: DirectorySummary
    files: List[LineMetrics] = field(default_factory=list)
    failures: List[Tuple[str, str]] = field(default_factory=list)
