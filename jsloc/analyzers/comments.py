"""Comment detection for JavaScript source lines."""

from __future__ import annotations

import re
from typing import List, Sequence

from ..models import CommentShape, CommentSpan

_BLOCK_RE = re.compile(r"/\*[\s\S]*?\*/")
_FULL_LINE_RE = re.compile(r"^\s*//")
_BLOCK_OPEN = "/*"
_BLOCK_CLOSE = "*/"
_LINE_MARKER = "//"


class CommentScanner:
    """Finds comment spans in an ordered sequence of source lines.

    The scan is purely textual: string and template literals are not
    recognised, so a ``"//"`` inside a string counts as a comment, and a
    block comment always ends at the first ``*/`` even when ``/*`` appears
    again inside it. A block comment that is still open at the end of the
    input produces no span.
    """

    def scan(self, lines: Sequence[str]) -> List[CommentSpan]:
        spans: List[CommentSpan] = []
        inside_block = False
        block_start = -1

        for index, line in enumerate(lines):
            if inside_block:
                if _BLOCK_CLOSE in line:
                    spans.append(
                        CommentSpan(CommentShape.BLOCK_MULTI_LINE, block_start, index)
                    )
                    inside_block = False
                    block_start = -1
                continue

            spans.extend(_same_line_blocks(line, index))
            remainder = _BLOCK_RE.sub("", line)

            if _FULL_LINE_RE.match(remainder):
                spans.append(CommentSpan(CommentShape.SINGLE_LINE_FULL, index, index))
            elif _LINE_MARKER in remainder:
                spans.append(CommentSpan(CommentShape.SINGLE_LINE_INLINE, index, index))

            if line.strip().startswith(_BLOCK_OPEN) and _BLOCK_CLOSE not in line:
                inside_block = True
                block_start = index

        return spans


def _same_line_blocks(line: str, index: int) -> List[CommentSpan]:
    spans: List[CommentSpan] = []
    for match in _BLOCK_RE.finditer(line):
        before = line[: match.start()].strip()
        shape = CommentShape.BLOCK_SINGLE_LINE if not before else CommentShape.BLOCK_INLINE
        spans.append(CommentSpan(shape, index, index))
    return spans


def count_unique_comment_lines(spans: Sequence[CommentSpan]) -> int:
    """Return how many distinct lines are touched by at least one span."""
    covered = set()
    for span in spans:
        covered.update(span.lines())
    return len(covered)


__all__ = ["CommentScanner", "count_unique_comment_lines"]
