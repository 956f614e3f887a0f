"""Configuration loading for jsloc (.jsloc.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

from .analyzers.logical import DEFAULT_RULES, KeywordRules

CONFIG_FILENAME = ".jsloc.yml"
_CONFIG_SUFFIXES = {".yml", ".yaml"}


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class JslocConfig:
    """Settings defined in .jsloc.yml, with defaults matching the CLI."""

    root: Path
    extensions: List[str] = field(default_factory=lambda: [".js"])
    exclude_paths: List[str] = field(default_factory=list)
    skip_minified: bool = True
    workers: int = 1
    timeout: Optional[float] = None
    rules: KeywordRules = DEFAULT_RULES


def load_config(config_path: Path) -> JslocConfig:
    """Load configuration for a target directory, a target file or a YAML file."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return JslocConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{config_file.name} must contain a mapping at the root")

    config = JslocConfig(root=root)

    extensions = _as_str_list(data.get("extensions"))
    if extensions:
        config.extensions = [_normalise_suffix(ext) for ext in extensions]
    config.exclude_paths = _as_str_list(data.get("exclude_paths"))

    skip_minified = _as_bool(data.get("skip_minified"))
    if skip_minified is not None:
        config.skip_minified = skip_minified

    workers = _as_int(data.get("workers"))
    if workers is not None:
        if workers < 1:
            raise ConfigError("workers must be a positive integer")
        config.workers = workers

    timeout = _as_float(data.get("timeout"))
    if timeout is not None:
        if timeout <= 0:
            raise ConfigError("timeout must be greater than zero")
        config.timeout = timeout

    keywords = _as_dict(data.get("keywords"))
    if keywords:
        overrides = {str(key): _as_str_list(value) for key, value in keywords.items()}
        try:
            config.rules = DEFAULT_RULES.with_keywords(overrides)
        except ValueError as exc:
            raise ConfigError(str(exc)) from exc

    return config


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    if config_path.suffix.lower() in _CONFIG_SUFFIXES:
        return config_path.resolve()
    return (config_path.parent / CONFIG_FILENAME).resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Failed to read {path.name}: {exc}") from exc
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded if loaded is not None else {}


def _normalise_suffix(value: str) -> str:
    value = value.strip().lower()
    return value if value.startswith(".") else f".{value}"


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_float(value: Any) -> Optional[float]:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            return None
    return None


def _as_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            return None
    return None


def _as_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "1"}:
            return True
        if lowered in {"false", "no", "0"}:
            return False
    return None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float, bool))]
    return []


__all__ = ["CONFIG_FILENAME", "ConfigError", "JslocConfig", "load_config"]
