"""Reviewer configuration loaded from an optional YAML file."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional, Tuple

from .errors import ConfigError
from .rules import RuleRegistry, default_registry
from .utils.code import EXCLUDED_DIRS, SOURCE_EXTENSIONS
from .utils.fileio import read_yaml_file

CONFIG_FILENAME = ".dotnet-review.yaml"
DEFAULT_TARGET_FRAMEWORK = "net8.0"


@dataclass(frozen=True)
class ReviewConfig:
    """Tunables shared by every tool invocation."""

    disabled_rules: Tuple[str, ...] = ()
    workers: int = 1
    extensions: Tuple[str, ...] = SOURCE_EXTENSIONS
    excluded_dirs: Tuple[str, ...] = EXCLUDED_DIRS
    target_framework: str = DEFAULT_TARGET_FRAMEWORK

    def registry(self, base: Optional[RuleRegistry] = None) -> RuleRegistry:
        registry = base or default_registry()
        if not self.disabled_rules:
            return registry
        return registry.without(self.disabled_rules)


def load_config(path: Optional[Path] = None) -> ReviewConfig:
    """Read ``path`` (or ``.dotnet-review.yaml`` in the working directory).

    A missing file yields the defaults. An explicitly requested file that does
    not exist is an error.
    """

    if path is not None and not path.exists():
        raise ConfigError(f"Config file not found: {path}")
    config_path = path or Path(CONFIG_FILENAME)
    raw = read_yaml_file(config_path)
    if raw is None:
        return ReviewConfig()
    if not isinstance(raw, dict):
        raise ConfigError(f"Config at {config_path} is not a mapping")

    disabled = _string_tuple(raw.get("disabled_rules", []), "disabled_rules")
    registry = default_registry()
    unknown = [rule_id for rule_id in disabled if rule_id not in registry]
    if unknown:
        raise ConfigError(f"Unknown rule ids in disabled_rules: {', '.join(unknown)}")

    workers = raw.get("workers", 1)
    if isinstance(workers, bool) or not isinstance(workers, int) or workers < 1:
        raise ConfigError("'workers' must be a positive integer")

    return ReviewConfig(
        disabled_rules=disabled,
        workers=workers,
        extensions=_string_tuple(raw.get("extensions", list(SOURCE_EXTENSIONS)), "extensions"),
        excluded_dirs=_string_tuple(raw.get("excluded_dirs", list(EXCLUDED_DIRS)), "excluded_dirs"),
        target_framework=str(raw.get("target_framework", DEFAULT_TARGET_FRAMEWORK)),
    )


def _string_tuple(value: Any, key: str) -> Tuple[str, ...]:
    if isinstance(value, str):
        return (value,)
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise ConfigError(f"'{key}' must be a string or a list of strings")
    return tuple(value)
