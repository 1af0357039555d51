"""Configuration loading and management."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from pathlib import Path
import tomllib

from .constants import DEFAULT_LABELS, DEFAULT_MAX_FILE_SIZE


@dataclass
class GendocConfig:
    """Configuration for building a gendoc document.

    Attributes:
        rules_dirs: Extra directories of ``<language>.toml`` highlight rules,
            loaded after the bundled ones; later directories win.
        strict: Whether reported errors make the build exit with a failure.
        max_file_size: Maximum size in bytes of any input, included, source
            or image file.
        line_numbers: Whether code blocks get a line-number column.
        labels: Overrides of the default labels and variables, applied
            before any ``<doc>`` block.

    Examples:
        GendocConfig(strict=True, labels={"lang": "de", "next": "Weiter"})
    """

    rules_dirs: list[Path] = field(default_factory=list)
    strict: bool = False
    max_file_size: int = DEFAULT_MAX_FILE_SIZE
    line_numbers: bool = True
    labels: dict[str, str] = field(default_factory=dict)

    def resolved_labels(self) -> dict[str, str]:
        """Return a fresh label table with the overrides applied."""
        return {**DEFAULT_LABELS, **self.labels}


class ConfigError(ValueError):
    """Exception raised when configuration values are invalid.

    Examples:
        raise ConfigError("`max_file_size` must be a positive integer")
    """


def load_config(search_path: Path) -> GendocConfig:
    """Load configuration from the nearest config file.

    Walks parent directories from `search_path` to the filesystem root, reading
    the ``[tool.gendoc]`` table from `pyproject.toml` and the ``[gendoc]`` or
    ``[tool.gendoc]`` table from `.gendoc.toml` when present. Returns default
    values when no configuration is found. TOML files that cannot be read or
    decoded are skipped. Relative `rules_dirs` are taken relative to the file
    that declares them.

    Args:
        search_path: Directory used as the starting point for configuration lookup.

    Returns:
        GendocConfig: Loaded configuration with defaults applied when necessary.

    Raises:
        ConfigError: If the table is present but not a mapping or contains
            unsupported keys.

    Examples:
        load_config(Path("docs"))
    """
    current = search_path.resolve()

    while True:
        pyproject_config = _load_from_file(current / "pyproject.toml", table_paths=[("tool", "gendoc")])
        if pyproject_config is not None:
            return pyproject_config

        dotfile_config = _load_from_file(
            current / ".gendoc.toml",
            table_paths=[("gendoc",), ("tool", "gendoc")],
        )
        if dotfile_config is not None:
            return dotfile_config

        parent = current.parent
        if parent == current:
            break
        current = parent

    return GendocConfig()


_MISSING = object()


def _load_from_file(config_file: Path, table_paths: list[tuple[str, ...]]) -> GendocConfig | None:
    if not config_file.exists():
        return None

    try:
        with open(config_file, "rb") as stream:
            data = tomllib.load(stream)
    except (OSError, tomllib.TOMLDecodeError):
        return None

    for table_path in table_paths:
        raw_config = _extract_table(data, table_path)
        if raw_config is _MISSING:
            continue
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
) -> GendocConfig:
    table_display = ".".join(table_path)

    if raw_config is None:
        return GendocConfig()

    if not isinstance(raw_config, dict):
        raise ConfigError(f"Invalid `[{table_display}]` settings in {config_file}")

    if not raw_config:
        return GendocConfig()

    raw = {key.replace("-", "_"): value for key, value in raw_config.items()}
    rules_dirs = raw.get("rules_dirs")
    if isinstance(rules_dirs, list) and all(isinstance(item, str) for item in rules_dirs):
        raw["rules_dirs"] = [config_file.parent / item for item in rules_dirs]

    try:
        return GendocConfig(**raw)
    except TypeError as error:
        raise ConfigError(f"Invalid `[{table_display}]` settings in {config_file}") from error


def normalize_config(config: GendocConfig) -> GendocConfig:
    rules_dirs = config.rules_dirs
    if isinstance(rules_dirs, (str, Path)):
        rules_dirs = [rules_dirs]
    if isinstance(rules_dirs, (list, tuple)):
        rules_dirs = [Path(item) if isinstance(item, str) else item for item in rules_dirs]
    return replace(config, rules_dirs=rules_dirs)


def validate_config(config: GendocConfig) -> None:
    """Validate a `GendocConfig` instance.

    Args:
        config: Configuration to validate.

    Returns:
        None.

    Raises:
        ConfigError: If a flag is not a boolean, the size limit is not a
            positive integer, a rules directory is not a path, or a label is
            not a string.

    Examples:
        validate_config(GendocConfig(max_file_size=1024))
    """
    config = normalize_config(config)

    if not isinstance(config.rules_dirs, list) or not all(
        isinstance(item, Path) for item in config.rules_dirs
    ):
        raise ConfigError("`rules_dirs` must be a list of paths")
    if not isinstance(config.strict, bool):
        raise ConfigError("`strict` must be a boolean")
    if not isinstance(config.line_numbers, bool):
        raise ConfigError("`line_numbers` must be a boolean")

    _ensure_integers({"max_file_size": config.max_file_size})
    _ensure_positive({"max_file_size": config.max_file_size})

    if not isinstance(config.labels, dict):
        raise ConfigError("`labels` must be a table of strings")
    for key, value in config.labels.items():
        if not isinstance(key, str) or not isinstance(value, str):
            raise ConfigError("`labels` must be a table of strings")


def apply_overrides(config: GendocConfig, **overrides: object) -> GendocConfig:
    """Apply override values to a `GendocConfig`.

    Args:
        config: Base configuration to update.
        overrides: Override values keyed by configuration field name; values set to
            None are ignored. ``rules_dirs`` overrides extend the configured
            directories instead of replacing them.

    Returns:
        GendocConfig: New configuration with the provided overrides applied. The
        original configuration is returned when no changes are supplied.

    Raises:
        TypeError: If an override name is not defined on `GendocConfig`.

    Examples:
        updated = apply_overrides(config, strict=True, rules_dirs=[Path("rules")])
    """
    changes = {key: value for key, value in overrides.items() if value is not None}
    if "rules_dirs" in changes:
        changes["rules_dirs"] = [*config.rules_dirs, *changes["rules_dirs"]]
    if not changes:
        return config
    return replace(config, **changes)


def build_config(search_path: Path, **overrides: object) -> GendocConfig:
    """Load, override, and validate configuration.

    Args:
        search_path: Directory where configuration files are resolved.
        overrides: Override values keyed by configuration attributes; None values
            are ignored.

    Returns:
        GendocConfig: Validated configuration ready for a build.

    Raises:
        ConfigError: If configuration loading or validation fails.

    Examples:
        config = build_config(Path.cwd(), strict=True)
    """
    config = load_config(search_path)
    config = apply_overrides(config, **overrides)
    config = normalize_config(config)
    validate_config(config)
    return config


def _ensure_positive(values: dict[str, int]) -> None:
    for key, value in values.items():
        if value <= 0:
            raise ConfigError(f"`{key}` must be a positive integer")


def _ensure_integers(values: dict[str, object]) -> None:
    for key, value in values.items():
        if isinstance(value, bool) or not isinstance(value, int):
            raise ConfigError(f"`{key}` must be an integer")
