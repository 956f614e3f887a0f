"""High-level orchestration for file and directory metrics runs."""

from __future__ import annotations

import re
import time
from collections import deque
from concurrent.futures import FIRST_COMPLETED, Future, ThreadPoolExecutor, wait
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple, Union

from .analyzers import KeywordRules, MetricsAggregator
from .config import JslocConfig, load_config
from .logging import get_logger
from .models import DirectoryReport, LineMetrics
from .scanner import SourceScanner

_LINE_BREAK_RE = re.compile(r"\r?\n")
_BOM = "\ufeff"

AnalysisResult = Union[LineMetrics, DirectoryReport]


class TargetError(FileNotFoundError):
    """Raised when the analysis target is missing or is not a source file."""


class FileAnalysisError(RuntimeError):
    """Wraps a per-file failure so directory runs can record the reason."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"{path}: {reason}")
        self.path = path
        self.reason = reason


def split_lines(text: str) -> List[str]:
    """Split on LF or CRLF; a trailing newline leaves a final empty line.

    A leading byte order mark is dropped so it cannot hide a comment opener.
    """
    if text.startswith(_BOM):
        text = text[len(_BOM):]
    return _LINE_BREAK_RE.split(text)


def analyze_source(
    text: str, file_path: Optional[str] = None, rules: KeywordRules | None = None
) -> LineMetrics:
    """Measure a JavaScript source string without touching the filesystem."""
    return MetricsAggregator(rules).measure(split_lines(text), file_path=file_path)


class Orchestrator:
    """Coordinates reading, scanning and aggregation for a target path."""

    def __init__(self, config: JslocConfig | None = None) -> None:
        self.config = config
        self.logger = get_logger("orchestrator")

    def run(self, target: Union[str, Path]) -> AnalysisResult:
        """Analyse a single source file or every source file below a directory."""
        path = Path(target).expanduser()
        if not path.exists():
            raise TargetError(f"Target path not found: {target}")

        config = self._config_for(path)

        if path.is_dir():
            return self.analyze_directory(path, config=config)
        if path.is_file():
            scanner = SourceScanner(config)
            if not scanner.is_source_file(path):
                allowed = ", ".join(sorted(scanner.extensions))
                raise TargetError(f"Not a source file ({allowed}): {target}")
            metrics = self.analyze_file(path, config=config)
            if metrics is None:
                raise TargetError(f"Unable to read source file: {target}")
            return metrics
        raise TargetError(f"Target is neither a file nor a directory: {target}")

    def analyze_file(
        self, path: Union[str, Path], *, config: JslocConfig | None = None
    ) -> LineMetrics | None:
        """Return metrics for one file, or None when it cannot be read."""
        path = Path(path)
        config = config or self._config_for(path)
        try:
            return self._measure(path, MetricsAggregator(config.rules))
        except FileAnalysisError as exc:
            self.logger.warning("Error in file %s: %s", exc.path, exc.reason)
            return None

    def analyze_directory(
        self, root: Union[str, Path], *, config: JslocConfig | None = None
    ) -> DirectoryReport:
        root = Path(root)
        config = config or self._config_for(root)
        scanner = SourceScanner(config)
        files = list(scanner.iter_files(root))
        self.logger.info("Analysing %d source files under %s", len(files), root)

        if config.workers > 1 or config.timeout is not None:
            outcomes = self._run_pool(files, config)
        else:
            aggregator = MetricsAggregator(config.rules)
            outcomes = [self._attempt(path, aggregator) for path in files]

        results: List[LineMetrics] = []
        failures: List[Tuple[str, str]] = []
        for path, outcome in zip(files, outcomes):
            if isinstance(outcome, LineMetrics):
                results.append(outcome)
            else:
                self.logger.warning("Skipping %s: %s", path, outcome)
                failures.append((str(path), outcome))

        summary = MetricsAggregator.summarize(results)
        self.logger.debug(
            "Directory %s: %d analysed, %d skipped", root, len(results), len(failures)
        )
        return DirectoryReport(root=str(root), summary=summary, files=results, failures=failures)

    # ------------------------------------------------------------------
    # Internal helpers

    def _config_for(self, path: Path) -> JslocConfig:
        if self.config is not None:
            return self.config
        return load_config(path)

    @staticmethod
    def _measure(path: Path, aggregator: MetricsAggregator) -> LineMetrics:
        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise FileAnalysisError(path, str(exc)) from exc
        return aggregator.measure(split_lines(text), file_path=str(path))

    def _attempt(self, path: Path, aggregator: MetricsAggregator) -> Union[LineMetrics, str]:
        try:
            return self._measure(path, aggregator)
        except FileAnalysisError as exc:
            return exc.reason

    def _run_pool(
        self, files: Sequence[Path], config: JslocConfig
    ) -> List[Union[LineMetrics, str]]:
        """Measure files with at most ``workers`` in flight at once.

        A file is only submitted when a slot is free, so its deadline starts
        when it starts running. A file that overruns its deadline gives up
        its slot; its thread is abandoned and the pool grows a fresh one for
        the next file, so a hung read cannot stall the rest of the queue.
        """
        aggregator = MetricsAggregator(config.rules)
        limit = max(1, config.workers)
        timeout = config.timeout
        outcomes: List[Union[LineMetrics, str]] = [""] * len(files)
        pending = deque(enumerate(files))
        running: Dict[Future, Tuple[int, Optional[float]]] = {}

        executor = ThreadPoolExecutor(max_workers=max(limit, len(files)))
        try:
            while pending or running:
                while pending and len(running) < limit:
                    index, path = pending.popleft()
                    deadline = None if timeout is None else time.monotonic() + timeout
                    future = executor.submit(self._attempt, path, aggregator)
                    running[future] = (index, deadline)

                done, _ = wait(
                    list(running),
                    timeout=self._next_wait(running),
                    return_when=FIRST_COMPLETED,
                )
                for future in done:
                    index, _ = running.pop(future)
                    outcomes[index] = future.result()

                now = time.monotonic()
                for future, (index, deadline) in list(running.items()):
                    if deadline is None or now < deadline or future.done():
                        continue
                    del running[future]
                    future.cancel()
                    outcomes[index] = f"timed out after {timeout:g}s"
            return outcomes
        finally:
            # Abandoned files may still be running; do not block on them.
            executor.shutdown(wait=False, cancel_futures=True)

    @staticmethod
    def _next_wait(running: Dict[Future, Tuple[int, Optional[float]]]) -> Optional[float]:
        deadlines = [deadline for _, deadline in running.values() if deadline is not None]
        if not deadlines:
            return None
        return max(min(deadlines) - time.monotonic(), 0)


__all__ = [
    "AnalysisResult",
    "FileAnalysisError",
    "Orchestrator",
    "TargetError",
    "analyze_source",
    "split_lines",
]
