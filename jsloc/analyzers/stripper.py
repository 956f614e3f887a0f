"""Removes comments and blank lines ahead of logical line counting."""

from __future__ import annotations

import re
from typing import Dict, List, Sequence

from ..models import CommentShape, CommentSpan

_INLINE_PATTERNS: Dict[CommentShape, re.Pattern[str]] = {
    CommentShape.SINGLE_LINE_INLINE: re.compile(r"//.*"),
    CommentShape.BLOCK_INLINE: re.compile(r"/\*.*\*/"),
}


class LineStripper:
    """Produces the code-only lines left after removing comment spans."""

    def strip(self, lines: Sequence[str], spans: Sequence[CommentSpan]) -> List[str]:
        cleaned = list(lines)

        for span in spans:
            if span.shape.is_inline:
                pattern = _INLINE_PATTERNS[span.shape]
                # Only the comment text goes; the code before it stays.
                cleaned[span.line_start] = pattern.sub("", cleaned[span.line_start], count=1).strip()
                continue
            for index in span.lines():
                cleaned[index] = ""

        return [line for line in cleaned if line.strip()]


__all__ = ["LineStripper"]
