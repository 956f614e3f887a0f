"""Source tree walking and file selection."""

from __future__ import annotations

import os
from dataclasses import dataclass
from fnmatch import fnmatchcase
from pathlib import Path
from typing import Iterator, List, Sequence

from .config import JslocConfig
from .logging import get_logger

_DEPENDENCY_DIRS = {"node_modules"}
_MINIFIED_SUFFIX = ".min.js"


@dataclass
class IgnoreRule:
    """A gitignore-style pattern taken from ``exclude_paths`` in .jsloc.yml."""

    pattern: str
    directory_only: bool
    anchored: bool
    negate: bool
    has_slash: bool

    def matches(self, rel_path: str, is_dir: bool) -> bool:
        if not self.pattern:
            return False
        if self.directory_only and not is_dir:
            return False

        if self.anchored or self.has_slash:
            if fnmatchcase(rel_path, self.pattern):
                return True
            return self.directory_only and rel_path.startswith(f"{self.pattern}/")

        return any(fnmatchcase(part, self.pattern) for part in rel_path.split("/"))


def build_ignore_rule(pattern: str) -> IgnoreRule | None:
    pattern = pattern.strip()
    if not pattern or pattern.startswith("#"):
        return None

    negate = pattern.startswith("!")
    if negate:
        pattern = pattern[1:]

    directory_only = pattern.endswith("/")
    if directory_only:
        pattern = pattern[:-1]

    anchored = pattern.startswith("/")
    if anchored:
        pattern = pattern[1:]

    return IgnoreRule(
        pattern=pattern,
        directory_only=directory_only,
        anchored=anchored,
        negate=negate,
        has_slash="/" in pattern,
    )


def _should_ignore(rel_path: str, is_dir: bool, rules: Sequence[IgnoreRule]) -> bool:
    ignored = False
    for rule in rules:
        if rule.matches(rel_path, is_dir):
            ignored = not rule.negate
    return ignored


def is_skipped_directory(name: str) -> bool:
    """Hidden directories and dependency caches are never walked."""
    return name.startswith(".") or name in _DEPENDENCY_DIRS


class SourceScanner:
    """Yields the source files of a tree that the metrics pipeline should see."""

    def __init__(self, config: JslocConfig) -> None:
        self.config = config
        self.extensions = {ext.lower() for ext in config.extensions}
        self.rules: List[IgnoreRule] = [
            rule
            for rule in (build_ignore_rule(pattern) for pattern in config.exclude_paths)
            if rule is not None
        ]
        self.logger = get_logger("scanner")

    def is_source_file(self, path: Path) -> bool:
        name = path.name.lower()
        if self.config.skip_minified and name.endswith(_MINIFIED_SUFFIX):
            return False
        return path.suffix.lower() in self.extensions

    def iter_files(self, root: Path) -> Iterator[Path]:
        """Walk ``root`` depth-first in name order."""

        def _on_error(exc: OSError) -> None:
            self.logger.warning("Unable to access %s, skipping: %s", exc.filename, exc.strerror or exc)

        for dirpath, dirnames, filenames in os.walk(root, onerror=_on_error):
            current_dir = Path(dirpath)
            rel_dir = current_dir.relative_to(root).as_posix() if current_dir != root else ""

            kept_dirs = []
            for name in sorted(dirnames):
                if is_skipped_directory(name):
                    continue
                rel_path = f"{rel_dir}/{name}" if rel_dir else name
                if _should_ignore(rel_path, True, self.rules):
                    self.logger.debug("Excluded directory %s", rel_path)
                    continue
                kept_dirs.append(name)
            dirnames[:] = kept_dirs

            for filename in sorted(filenames):
                path = current_dir / filename
                if not self.is_source_file(path):
                    continue
                rel_path = f"{rel_dir}/{filename}" if rel_dir else filename
                if _should_ignore(rel_path, False, self.rules):
                    self.logger.debug("Excluded file %s", rel_path)
                    continue
                yield path


__all__ = ["IgnoreRule", "SourceScanner", "build_ignore_rule", "is_skipped_directory"]
