"""CLI entrypoints for jsloc commands."""

from __future__ import annotations

import argparse
import sys
from dataclasses import replace
from pathlib import Path

from .config import ConfigError, JslocConfig, load_config
from .logging import configure_logging
from .orchestrator import Orchestrator, TargetError
from .report import RENDERERS


def _add_verbose_option(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    default: object = argparse.SUPPRESS if suppress_default else False
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=default,
        help="Increase log verbosity for troubleshooting.",
    )
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        default=argparse.SUPPRESS if suppress_default else False,
        help="Only log warnings and errors.",
    )


def _positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError("must be a positive integer")
    return number


def _positive_float(value: str) -> float:
    number = float(value)
    if number <= 0:
        raise argparse.ArgumentTypeError("must be greater than zero")
    return number


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="jsloc",
        description="Count physical, logical and comment lines in JavaScript sources.",
    )
    _add_verbose_option(parser)
    subparsers = parser.add_subparsers(dest="command", required=True)

    analyze_parser = subparsers.add_parser(
        "analyze",
        help="Report metrics for a .js file or every .js file below a directory.",
    )
    _add_verbose_option(analyze_parser, suppress_default=True)
    analyze_parser.add_argument(
        "path",
        nargs="?",
        default=".",
        help="File or directory to analyse (defaults to current directory).",
    )
    analyze_parser.add_argument(
        "--format",
        choices=sorted(RENDERERS),
        default="text",
        help="Output format for the report.",
    )
    analyze_parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to a .jsloc.yml file (defaults to the one beside the target).",
    )
    analyze_parser.add_argument(
        "--workers",
        type=_positive_int,
        default=None,
        help="Analyse directory files in parallel with this many threads.",
    )
    analyze_parser.add_argument(
        "--timeout",
        type=_positive_float,
        default=None,
        help="Skip files that take longer than this many seconds.",
    )
    analyze_parser.add_argument(
        "--include-minified",
        action="store_true",
        help="Also analyse *.min.js files.",
    )

    serve_parser = subparsers.add_parser(
        "serve",
        help="Run the HTTP analysis service.",
    )
    _add_verbose_option(serve_parser, suppress_default=True)
    serve_parser.add_argument("--host", default="127.0.0.1", help="Interface to bind.")
    serve_parser.add_argument("--port", type=int, default=8000, help="Port to listen on.")

    return parser


def _resolve_config(args: argparse.Namespace) -> JslocConfig:
    source = args.config if args.config is not None else Path(args.path)
    config = load_config(source)
    overrides: dict[str, object] = {}
    if args.workers is not None:
        overrides["workers"] = args.workers
    if args.timeout is not None:
        overrides["timeout"] = args.timeout
    if args.include_minified:
        overrides["skip_minified"] = False
    return replace(config, **overrides) if overrides else config


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for jsloc commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(
        verbose=bool(getattr(args, "verbose", False)),
        quiet=bool(getattr(args, "quiet", False)),
    )

    if args.command == "analyze":
        try:
            config = _resolve_config(args)
            result = Orchestrator(config).run(args.path)
        except TargetError as exc:
            parser.exit(1, f"{exc}\n")
        except ConfigError as exc:
            parser.exit(1, f"Invalid configuration: {exc}\n")
        print(RENDERERS[args.format](result))
    elif args.command == "serve":
        from .service import run_service

        run_service(host=args.host, port=args.port)
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")


if __name__ == "__main__":
    main(sys.argv[1:])
