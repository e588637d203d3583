"""Configuration loading and management."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass, fields, replace
from pathlib import Path
import tomllib

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SpacingConfig:
    """Options controlling emphasis spacing.

    Attributes:
        remove_internal_bold_spaces: Trim whitespace just inside ``*``, ``**``
            and ``***`` spans.
        space_between_chinese_and_bold: Add a space between bold markers and
            adjacent CJK characters.
        space_between_english_and_bold: Add a space between bold markers and
            adjacent ASCII letters or digits.
        space_between_chinese_and_italic: Add a space between italic markers and
            adjacent CJK characters.
        skip_code_blocks: Leave fenced code blocks untouched.
        skip_inline_code: Leave inline code spans untouched.

    Examples:
        SpacingConfig(space_between_english_and_bold=True)
    """

    remove_internal_bold_spaces: bool = True
    space_between_chinese_and_bold: bool = True
    space_between_english_and_bold: bool = False
    space_between_chinese_and_italic: bool = True
    skip_code_blocks: bool = True
    skip_inline_code: bool = True


# Keys of the settings record persisted by editor integrations.
SETTINGS_KEYS = {
    "removeInternalBoldSpaces": "remove_internal_bold_spaces",
    "spaceBetweenChineseAndBold": "space_between_chinese_and_bold",
    "spaceBetweenEnglishAndBold": "space_between_english_and_bold",
    "spaceBetweenChineseAndItalic": "space_between_chinese_and_italic",
    "skipCodeBlocks": "skip_code_blocks",
    "skipInlineCode": "skip_inline_code",
}


class ConfigError(ValueError):
    """Exception raised when configuration values are invalid.

    Examples:
        raise ConfigError("`skip_code_blocks` must be a boolean")
    """


def load_config(search_path: Path) -> SpacingConfig:
    """Load configuration from the nearest config file.

    Walks parent directories from `search_path` to the filesystem root, reading
    the ``[tool.emphasis-spacing]`` table from `pyproject.toml` and the
    ``[emphasis-spacing]`` or ``[tool.emphasis-spacing]`` table from
    `.emphasis-spacing.toml` when present. Returns default values when no
    configuration is found. TOML files that cannot be read or decoded are
    skipped.

    Args:
        search_path: Directory used as the starting point for configuration lookup.

    Returns:
        SpacingConfig: Loaded configuration with defaults applied when necessary.

    Raises:
        ConfigError: If the table is present but not a mapping or contains
            unsupported keys.

    Examples:
        load_config(Path("docs"))
    """
    current = search_path.resolve()

    while True:
        pyproject_config = _load_from_file(
            current / "pyproject.toml", table_paths=[("tool", "emphasis-spacing")]
        )
        if pyproject_config is not None:
            return pyproject_config

        dotfile_config = _load_from_file(
            current / ".emphasis-spacing.toml",
            table_paths=[("emphasis-spacing",), ("tool", "emphasis-spacing")],
        )
        if dotfile_config is not None:
            return dotfile_config

        parent = current.parent
        if parent == current:
            break
        current = parent

    return SpacingConfig()


_MISSING = object()


def _load_from_file(
    config_file: Path, table_paths: list[tuple[str, ...]]
) -> SpacingConfig | None:
    if not config_file.exists():
        return None

    try:
        with open(config_file, "rb") as stream:
            data = tomllib.load(stream)
    except (OSError, tomllib.TOMLDecodeError):
        logger.debug("Skipping unreadable config file %s", config_file)
        return None

    for table_path in table_paths:
        raw_config = _extract_table(data, table_path)
        if raw_config is _MISSING:
            continue
        logger.debug("Loaded [%s] from %s", ".".join(table_path), config_file)
        return _build_config_from_raw(raw_config, config_file, table_path)

    return None


def _extract_table(data: object, table_path: tuple[str, ...]) -> object:
    current = data
    for key in table_path:
        if not isinstance(current, dict) or key not in current:
            return _MISSING
        current = current[key]
    return current


def _build_config_from_raw(
    raw_config: object, config_file: Path, table_path: tuple[str, ...]
) -> SpacingConfig:
    table_display = ".".join(table_path)

    if raw_config is None:
        return SpacingConfig()

    if not isinstance(raw_config, dict):
        raise ConfigError(f"Invalid `[{table_display}]` settings in {config_file}")

    if not raw_config:
        return SpacingConfig()

    try:
        return SpacingConfig(**raw_config)
    except TypeError as error:
        raise ConfigError(f"Invalid `[{table_display}]` settings in {config_file}") from error


def config_from_settings(settings: Mapping[str, object]) -> SpacingConfig:
    """Build a configuration from a persisted settings record.

    The record is keyed by the camelCase option names editor integrations
    store (``removeInternalBoldSpaces``, ``spaceBetweenChineseAndBold``, ...).
    Absent keys fall back to the defaults and unknown keys are ignored.

    Args:
        settings: Flat mapping of option names to booleans.

    Returns:
        SpacingConfig: Validated configuration.

    Raises:
        ConfigError: If a recognised option holds a non-boolean value.

    Examples:
        config_from_settings({"spaceBetweenEnglishAndBold": True})
    """
    values = {
        attribute: settings[key] for key, attribute in SETTINGS_KEYS.items() if key in settings
    }
    config = replace(SpacingConfig(), **values)
    validate_config(config)
    return config


def load_settings(settings_file: Path) -> SpacingConfig:
    """Load a persisted JSON settings record.

    Args:
        settings_file: Path to the JSON file.

    Returns:
        SpacingConfig: Configuration built from the record.

    Raises:
        ConfigError: If the file cannot be read, is not valid JSON, is not a
            JSON object, or holds non-boolean option values.
    """
    try:
        with open(settings_file, encoding="UTF-8") as stream:
            data = json.load(stream)
    except (OSError, json.JSONDecodeError) as error:
        raise ConfigError(f"Cannot read settings from {settings_file}: {error}") from error

    if not isinstance(data, dict):
        raise ConfigError(f"Settings in {settings_file} must be a JSON object")

    return config_from_settings(data)


def validate_config(config: SpacingConfig) -> None:
    """Validate a `SpacingConfig` instance.

    Raises:
        ConfigError: If any option is not a boolean.

    Examples:
        validate_config(SpacingConfig(skip_inline_code=False))
    """
    for config_field in fields(config):
        value = getattr(config, config_field.name)
        if not isinstance(value, bool):
            raise ConfigError(f"`{config_field.name}` must be a boolean")


def apply_overrides(config: SpacingConfig, **overrides: object) -> SpacingConfig:
    """Apply override values to a `SpacingConfig`.

    Args:
        config: Base configuration to update.
        overrides: Override values keyed by configuration field name; values set to
            None are ignored.

    Returns:
        SpacingConfig: New configuration with the provided overrides applied. The
        original configuration is returned when no changes are supplied.

    Raises:
        TypeError: If an override name is not defined on `SpacingConfig`.

    Examples:
        updated = apply_overrides(config, space_between_english_and_bold=True)
    """
    changes = {key: value for key, value in overrides.items() if value is not None}
    if not changes:
        return config
    return replace(config, **changes)


def build_config(
    search_path: Path, settings_file: Path | None = None, **overrides: object
) -> SpacingConfig:
    """Load, override, and validate configuration.

    Args:
        search_path: Directory where configuration files are resolved.
        settings_file: Persisted JSON settings to use instead of TOML discovery.
        overrides: Override values keyed by configuration attributes; None values
            are ignored.

    Returns:
        SpacingConfig: Validated configuration.

    Raises:
        ConfigError: If configuration loading or validation fails.

    Examples:
        config = build_config(Path.cwd(), skip_inline_code=False)
    """
    if settings_file is not None:
        config = load_settings(settings_file)
    else:
        config = load_config(search_path)
    config = apply_overrides(config, **overrides)
    validate_config(config)
    return config
