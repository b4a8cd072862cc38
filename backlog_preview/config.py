"""Configuration loading and management."""

from __future__ import annotations

import os
from dataclasses import dataclass, fields, replace
from pathlib import Path
import tomllib

from .constants import (
    DEFAULT_CONTAINER_CLASS,
    DEFAULT_DEBOUNCE_MS,
    DEFAULT_MAX_FILE_SIZE,
    DEFAULT_OUTPUT_SUFFIX,
    DEFAULT_TITLE,
)

CONFIG_TABLE = "backlog-preview"
DOTFILE_NAME = ".backlog-preview.toml"
MAX_FILE_SIZE_ENV_VAR = "BACKLOG_PREVIEW_MAX_FILE_SIZE"

# Checked in order inside each directory; the first table found wins.
CONFIG_SOURCES: tuple[tuple[str, tuple[tuple[str, ...], ...]], ...] = (
    ("pyproject.toml", (("tool", CONFIG_TABLE),)),
    (DOTFILE_NAME, ((CONFIG_TABLE,), ("tool", CONFIG_TABLE))),
)


@dataclass
class PreviewConfig:
    """Configuration for rendering files from the command line.

    `render` itself takes no options; these settings only control how files
    are read, wrapped, and written.

    Attributes:
        standalone: Whether to wrap the fragment in a full HTML page.
        title: Page title used for standalone output.
        container_class: CSS class of the element wrapping standalone output.
        output_suffix: Suffix of the file written next to the source.
        max_file_size: Maximum source file size in bytes.
        debounce: Milliseconds of quiet time before watch mode re-renders.

    Examples:
        PreviewConfig(standalone=True, title="Meeting notes")
    """

    # Output
    standalone: bool = False
    title: str = DEFAULT_TITLE
    container_class: str = DEFAULT_CONTAINER_CLASS
    output_suffix: str = DEFAULT_OUTPUT_SUFFIX

    # Limits
    max_file_size: int = DEFAULT_MAX_FILE_SIZE

    # Watch mode
    debounce: int = DEFAULT_DEBOUNCE_MS


class ConfigError(ValueError):
    """Exception raised when configuration values are invalid.

    Examples:
        raise ConfigError("`title` must be a non-empty string")
    """


_FIELD_NAMES = frozenset(field.name for field in fields(PreviewConfig))
_TEXT_FIELDS = ("title", "container_class", "output_suffix")
_COUNT_FIELDS = ("max_file_size", "debounce")


def load_config(search_path: Path) -> PreviewConfig:
    """Load configuration from the nearest config file.

    Each directory from `search_path` up to the filesystem root is checked for
    a ``[tool.backlog-preview]`` table in `pyproject.toml`, then for a
    ``[backlog-preview]`` or ``[tool.backlog-preview]`` table in
    `.backlog-preview.toml`. Files that cannot be read or are not valid TOML
    are skipped. An empty table yields the defaults and stops the search.

    Args:
        search_path: Directory used as the starting point for configuration lookup.

    Returns:
        PreviewConfig: Loaded configuration, or the defaults when nothing is found.

    Raises:
        ConfigError: If the table found is not a mapping or names unknown keys.

    Examples:
        load_config(Path("docs"))
    """
    start = search_path.resolve()
    for directory in (start, *start.parents):
        for filename, table_paths in CONFIG_SOURCES:
            config_file = directory / filename
            document = _read_toml(config_file)
            if document is None:
                continue
            for table_path in table_paths:
                table = _find_table(document, table_path)
                if table is not None:
                    return _config_from_table(table, config_file, table_path)
    return PreviewConfig()


def _read_toml(config_file: Path) -> dict | None:
    try:
        with open(config_file, "rb") as stream:
            return tomllib.load(stream)
    except (OSError, tomllib.TOMLDecodeError):
        return None


def _find_table(document: dict, table_path: tuple[str, ...]) -> object | None:
    node: object = document
    for key in table_path:
        if not isinstance(node, dict):
            return None
        node = node.get(key)
    return node


def _config_from_table(
    table: object, config_file: Path, table_path: tuple[str, ...]
) -> PreviewConfig:
    location = f"`[{'.'.join(table_path)}]` in {config_file}"
    if not isinstance(table, dict):
        raise ConfigError(f"{location} must be a table")

    unknown = sorted(set(table) - _FIELD_NAMES)
    if unknown:
        raise ConfigError(f"Unknown setting(s) {', '.join(unknown)} in {location}")
    return PreviewConfig(**table)


def max_file_size_from_env() -> int | None:
    """Read the size limit override from ``BACKLOG_PREVIEW_MAX_FILE_SIZE``.

    Returns:
        int | None: The limit in bytes, or None when the variable is unset.

    Raises:
        ConfigError: If the variable is set but not a positive integer.
    """
    raw_value = os.environ.get(MAX_FILE_SIZE_ENV_VAR)
    if raw_value is None:
        return None
    try:
        value = int(raw_value)
    except ValueError as error:
        raise ConfigError(
            f"{MAX_FILE_SIZE_ENV_VAR} must be a positive integer, got {raw_value!r}"
        ) from error
    if value <= 0:
        raise ConfigError(f"{MAX_FILE_SIZE_ENV_VAR} must be a positive integer, got {value}")
    return value


def validate_config(config: PreviewConfig) -> None:
    """Validate a `PreviewConfig` instance.

    Raises:
        ConfigError: If `standalone` is not a boolean, a text setting is empty,
            the output suffix does not start with a dot, or a size or delay is
            not a positive integer.

    Examples:
        validate_config(PreviewConfig(title="Notes"))
    """
    if not isinstance(config.standalone, bool):
        raise ConfigError("`standalone` must be a boolean")

    for name in _TEXT_FIELDS:
        value = getattr(config, name)
        if not isinstance(value, str) or not value:
            raise ConfigError(f"`{name}` must be a non-empty string")
    if not config.output_suffix.startswith("."):
        raise ConfigError("`output_suffix` must start with '.'")

    for name in _COUNT_FIELDS:
        value = getattr(config, name)
        if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
            raise ConfigError(f"`{name}` must be a positive integer")


def build_config(search_path: Path, **overrides: object) -> PreviewConfig:
    """Load, override, and validate configuration.

    Precedence, lowest first: config file, ``BACKLOG_PREVIEW_MAX_FILE_SIZE``,
    then `overrides`. Overrides set to None are ignored.

    Args:
        search_path: Directory where configuration files are resolved.
        overrides: Values keyed by `PreviewConfig` field name.

    Returns:
        PreviewConfig: Validated configuration.

    Raises:
        ConfigError: If loading, the environment override, or validation fails.

    Examples:
        config = build_config(Path.cwd(), standalone=True)
    """
    config = load_config(search_path)

    env_limit = max_file_size_from_env()
    if env_limit is not None:
        config = replace(config, max_file_size=env_limit)

    changes = {key: value for key, value in overrides.items() if value is not None}
    if changes:
        config = replace(config, **changes)

    validate_config(config)
    return config
