"""Rendering of metrics records as text tables, JSON and Markdown."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Dict, List, Mapping, Sequence, Union

from jinja2 import Environment, FileSystemLoader

from .models import DirectoryReport, DirectorySummary, LineMetrics

SLOC = "SLOC"
BLANK = "Blank LOCs"
PHYSICAL = "Physical SLOC"
LOGICAL = "Logical SLOC"
COMMENTS = "CLOC, C & SLOC"
COVERAGE = "Comment Coverage %"
KLOC = "KLOC"
AVERAGE_COVERAGE = "Average Comment Coverage"
FILE = "file"

FILE_LABELS = (SLOC, BLANK, PHYSICAL, LOGICAL, COMMENTS, COVERAGE, FILE)
SUMMARY_LABELS = (SLOC, BLANK, PHYSICAL, LOGICAL, COMMENTS, KLOC, AVERAGE_COVERAGE)

_PERCENT_LABELS = {COVERAGE, AVERAGE_COVERAGE}
_INDEX_HEADER = "(index)"
_TEMPLATES_DIR = Path(__file__).with_name("templates")

Row = Dict[str, object]


def file_row(metrics: LineMetrics) -> Row:
    return {
        SLOC: metrics.total_lines,
        BLANK: metrics.blank_lines,
        PHYSICAL: metrics.physical_lines,
        LOGICAL: metrics.logical_lines,
        COMMENTS: metrics.unique_comment_lines,
        COVERAGE: metrics.comment_coverage,
        FILE: metrics.file_path,
    }


def summary_row(summary: DirectorySummary) -> Row:
    return {
        SLOC: summary.total_lines,
        BLANK: summary.blank_lines,
        PHYSICAL: summary.physical_lines,
        LOGICAL: summary.logical_lines,
        COMMENTS: summary.unique_comment_lines,
        KLOC: summary.kilo_lines,
        AVERAGE_COVERAGE: summary.average_comment_coverage,
    }


def format_value(label: str, value: object) -> str:
    if value is None:
        return ""
    if label in _PERCENT_LABELS and isinstance(value, (int, float)):
        return f"{value:.2f}"
    return str(value)


def render_record(record: Mapping[str, object]) -> str:
    """Render one record as a key/value table."""
    rows = [[label, format_value(label, value)] for label, value in record.items()]
    return _grid([_INDEX_HEADER, "Values"], rows)


def render_table(records: Sequence[Mapping[str, object]]) -> str:
    """Render records as an indexed table with one column per label."""
    if not records:
        return _grid([_INDEX_HEADER], [])
    labels = list(records[0].keys())
    rows = [
        [str(index)] + [format_value(label, record.get(label)) for label in labels]
        for index, record in enumerate(records)
    ]
    return _grid([_INDEX_HEADER, *labels], rows)


def render_text(result: Union[LineMetrics, DirectoryReport]) -> str:
    if isinstance(result, LineMetrics):
        return render_record(file_row(result))

    parts = [
        "Directory Summary:",
        render_record(summary_row(result.summary)),
        "Detailed Results:",
        render_table([file_row(metrics) for metrics in result.files]),
    ]
    if result.failures:
        parts.append("Skipped files:")
        parts.extend(f"  {path}: {reason}" for path, reason in result.failures)
    return "\n".join(parts)


def render_json(result: Union[LineMetrics, DirectoryReport]) -> str:
    if isinstance(result, LineMetrics):
        return json.dumps(file_row(result), indent=2)
    payload = {
        "root": result.root,
        "summary": summary_row(result.summary),
        "files": [file_row(metrics) for metrics in result.files],
        "failures": [{"file": path, "reason": reason} for path, reason in result.failures],
    }
    return json.dumps(payload, indent=2)


def render_markdown(
    result: Union[LineMetrics, DirectoryReport], templates_dir: Path | None = None
) -> str:
    env = _create_env(templates_dir)
    template = env.get_template("report.md.j2")
    if isinstance(result, LineMetrics):
        context = {"summary": None, "files": [file_row(result)], "failures": [], "root": None}
    else:
        context = {
            "root": result.root,
            "summary": summary_row(result.summary),
            "files": [file_row(metrics) for metrics in result.files],
            "failures": result.failures,
        }
    return template.render(
        file_labels=FILE_LABELS,
        summary_labels=SUMMARY_LABELS,
        **context,
    ).strip() + "\n"


RENDERERS = {
    "text": render_text,
    "json": render_json,
    "markdown": render_markdown,
}


def _create_env(templates_dir: Path | None) -> Environment:
    directories = [str(templates_dir)] if templates_dir else []
    directories.append(str(_TEMPLATES_DIR))
    env = Environment(
        loader=FileSystemLoader(directories),
        autoescape=False,
        trim_blocks=True,
        lstrip_blocks=True,
    )
    env.filters["metric"] = lambda value, label: format_value(label, value)
    return env


def _grid(headers: List[str], rows: List[List[str]]) -> str:
    widths = [len(header) for header in headers]
    for row in rows:
        for column, cell in enumerate(row):
            widths[column] = max(widths[column], len(cell))

    border = "+" + "+".join("-" * (width + 2) for width in widths) + "+"

    def _line(cells: Sequence[str]) -> str:
        padded = (f" {cell.ljust(widths[column])} " for column, cell in enumerate(cells))
        return "|" + "|".join(padded) + "|"

    lines = [border, _line(headers), border]
    lines.extend(_line(row) for row in rows)
    if rows:
        lines.append(border)
    return "\n".join(lines)


__all__ = [
    "FILE_LABELS",
    "RENDERERS",
    "SUMMARY_LABELS",
    "file_row",
    "format_value",
    "render_json",
    "render_markdown",
    "render_record",
    "render_table",
    "render_text",
    "summary_row",
]
