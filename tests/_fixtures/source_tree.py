"""Helper utilities for constructing temporary JavaScript trees in tests."""

from __future__ import annotations

import textwrap
from pathlib import Path
from typing import Mapping, Union

from jsloc.config import JslocConfig
from jsloc.models import DirectoryReport
from jsloc.orchestrator import Orchestrator


class SourceTreeBuilder:
    """Writes files into a throwaway source tree and analyses it."""

    def __init__(self, tmp_path: Path) -> None:
        self.root = tmp_path / "project"
        self.root.mkdir()

    def write(self, files: Mapping[str, Union[str, bytes]]) -> None:
        """Write `path -> contents` entries; str contents are dedented."""
        for relative, content in files.items():
            path = self.root / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            if isinstance(content, bytes):
                path.write_bytes(content)
                continue
            normalised = textwrap.dedent(content).lstrip("\n")
            path.write_text(normalised, encoding="utf-8")

    def config(self, **overrides: object) -> JslocConfig:
        return JslocConfig(root=self.root, **overrides)  # type: ignore[arg-type]

    def analyze(self, **overrides: object) -> DirectoryReport:
        """Analyse the whole tree with an in-memory configuration."""
        result = Orchestrator(self.config(**overrides)).run(self.root)
        assert isinstance(result, DirectoryReport)
        return result

    def path(self, relative: str = "") -> Path:
        return self.root / relative if relative else self.root


__all__ = ["SourceTreeBuilder"]
