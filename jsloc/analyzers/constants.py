"""Default keyword tables for logical line counting."""

from __future__ import annotations

from typing import Dict, Tuple

DEFAULT_KEYWORDS: Dict[str, Tuple[str, ...]] = {
    "logical": ("if", "else", "else if", "try", "catch", "switch", "?"),
    "iteration": ("for", "while", "do"),
    "jump": ("return", "break", "continue", "throw"),
    "data_declaration": ("let", "const", "var", "function", "import", "export", "require"),
}

# Keywords whose argument list is kept as `name()` instead of `func()`.
CALL_KEYWORDS: Tuple[str, ...] = ("if", "for", "while", "switch", "catch", "require")

# A `{` on a line containing one of these belongs to the control construct.
BRACE_KEYWORDS: Tuple[str, ...] = ("if", "for", "while", "switch", "try", "catch", "do")

CALL_PLACEHOLDER = "func()"

KEYWORD_CATEGORIES: Tuple[str, ...] = tuple(DEFAULT_KEYWORDS)
