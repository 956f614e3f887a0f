"""Approximate logical line counting for JavaScript."""

from __future__ import annotations

import re
from dataclasses import dataclass, field, replace
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from ..models import LogicalCounts
from .constants import BRACE_KEYWORDS, CALL_KEYWORDS, CALL_PLACEHOLDER, DEFAULT_KEYWORDS

_ELSE_IF_RE = re.compile(r"\b(else\s+if)\s*\([^)]*\)", re.ASCII)
_CALL_RE = re.compile(r"([a-zA-Z_$][\w$]*)\s*\([^)]*\)", re.ASCII)
_WORD_CHAR_RE = re.compile(r"[a-zA-Z0-9]")
_OPEN_BRACE = "{"


def _default_keywords() -> Dict[str, Tuple[str, ...]]:
    return dict(DEFAULT_KEYWORDS)


@dataclass(frozen=True)
class KeywordRules:
    """Keyword table driving the logical line counter.

    ``keywords`` maps each keyword category to the words or symbols counted
    for it. ``call_keywords`` keep their own name when their argument list is
    collapsed, and ``brace_keywords`` suppress block delimiter counting on
    the line they appear in.
    """

    keywords: Mapping[str, Tuple[str, ...]] = field(default_factory=_default_keywords)
    call_keywords: Tuple[str, ...] = CALL_KEYWORDS
    brace_keywords: Tuple[str, ...] = BRACE_KEYWORDS

    def with_keywords(self, overrides: Mapping[str, Sequence[str]]) -> "KeywordRules":
        unknown = sorted(set(overrides) - set(self.keywords))
        if unknown:
            raise ValueError(f"Unknown keyword categories: {', '.join(unknown)}")
        merged = dict(self.keywords)
        for category, words in overrides.items():
            merged[category] = tuple(words)
        return replace(self, keywords=merged)


DEFAULT_RULES = KeywordRules()


class LogicalLineCounter:
    """Tallies statement-like constructs on comment-free lines."""

    def __init__(self, rules: KeywordRules | None = None) -> None:
        self.rules = rules or DEFAULT_RULES
        self._category_patterns: Dict[str, Optional[re.Pattern[str]]] = {
            category: compile_keyword_pattern(words)
            for category, words in self.rules.keywords.items()
        }
        self._brace_guard = compile_keyword_pattern(self.rules.brace_keywords)
        self._call_keywords = frozenset(self.rules.call_keywords)

    def count(self, lines: Iterable[str]) -> LogicalCounts:
        tallies: Dict[str, int] = {category: 0 for category in self._category_patterns}
        block_delimiter = 0
        function_calls = 0

        for line in lines:
            normalized = self.normalize(line)
            for category, pattern in self._category_patterns.items():
                tallies[category] += _count_matches(pattern, normalized)
            block_delimiter += self._count_block_delimiters(normalized)
            function_calls += normalized.count(CALL_PLACEHOLDER)

        return LogicalCounts(
            logical=tallies.get("logical", 0),
            iteration=tallies.get("iteration", 0),
            jump=tallies.get("jump", 0),
            data_declaration=tallies.get("data_declaration", 0),
            block_delimiter=block_delimiter,
            function_calls=function_calls,
        )

    def normalize(self, line: str) -> str:
        """Collapse call and condition argument lists into placeholders."""
        line = _ELSE_IF_RE.sub("else if()", line)
        return _CALL_RE.sub(self._call_replacement, line)

    def _call_replacement(self, match: re.Match[str]) -> str:
        name = match.group(1)
        if name in self._call_keywords:
            return f"{name}()"
        return CALL_PLACEHOLDER

    def _count_block_delimiters(self, line: str) -> int:
        braces = line.count(_OPEN_BRACE)
        if not braces:
            return 0
        if self._brace_guard is not None and self._brace_guard.search(line):
            return 0
        return braces


def compile_keyword_pattern(patterns: Sequence[str]) -> Optional[re.Pattern[str]]:
    """Build one alternation for words (word-bounded) and symbols (escaped)."""
    words: List[str] = []
    symbols: List[str] = []
    for pattern in patterns:
        if not pattern:
            continue
        if _WORD_CHAR_RE.search(pattern):
            words.append(r"\s+".join(re.escape(part) for part in pattern.split()))
        else:
            symbols.append(re.escape(pattern))

    parts: List[str] = []
    if words:
        parts.append(rf"\b(?:{'|'.join(words)})\b")
    if symbols:
        parts.append("|".join(symbols))
    if not parts:
        return None
    return re.compile("|".join(parts), re.ASCII)


def _count_matches(pattern: Optional[re.Pattern[str]], line: str) -> int:
    if pattern is None:
        return 0
    return sum(1 for _ in pattern.finditer(line))


__all__ = ["DEFAULT_RULES", "KeywordRules", "LogicalLineCounter", "compile_keyword_pattern"]
