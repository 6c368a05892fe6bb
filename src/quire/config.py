"""Unified configuration loaded from .quire.toml, env vars, and CLI flags.

Loading order: defaults → TOML file → env vars → CLI flags.
"""

from __future__ import annotations

import logging
import os
import tomllib
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError, field_validator

from quire.errors import ConfigError
from quire.pages.publishers import OutputFormat

logger = logging.getLogger(__name__)

CONFIG_FILENAME = ".quire.toml"
CONFIG_SEARCH_PATHS = [
    Path("."),
]
GLOBAL_CONFIG = Path.home() / ".config" / "quire" / "config.toml"


class ContentConfig(BaseModel):
    """[content] section."""

    directory: str = "content"
    include_drafts: bool = False


class OutputConfig(BaseModel):
    """[output] section."""

    directory: str = "build"
    formats: list[OutputFormat] = Field(default_factory=lambda: [OutputFormat.JSON])


class BuildConfig(BaseModel):
    """[build] section."""

    workers: int = 1
    dry_run: bool = False

    @field_validator("workers")
    @classmethod
    def _positive(cls, value: int) -> int:
        if value < 1:
            raise ValueError("workers must be at least 1")
        return value


class QuireConfig(BaseModel):
    """Top-level configuration for a site build."""

    content: ContentConfig = Field(default_factory=ContentConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    build: BuildConfig = Field(default_factory=BuildConfig)

    @property
    def content_dir(self) -> Path:
        return Path(self.content.directory)

    @property
    def output_dir(self) -> Path:
        return Path(self.output.directory)


def load_config(path: str | Path | None = None) -> QuireConfig:
    """Load configuration from a TOML file.

    Search order:
    1. Explicit path (if provided)
    2. .quire.toml in CWD
    3. ~/.config/quire/config.toml

    Then overlay environment variables.

    Args:
        path: Explicit path to a TOML file.

    Returns:
        Merged QuireConfig.

    Raises:
        ConfigError: If a file or environment value fails validation.
    """
    data: dict[str, object] = {}

    if path is not None:
        toml_path = Path(path)
        if toml_path.exists():
            data = _load_toml(toml_path)
        else:
            logger.warning("Config file not found: %s", toml_path)
    else:
        for search_dir in CONFIG_SEARCH_PATHS:
            candidate = search_dir / CONFIG_FILENAME
            if candidate.exists():
                data = _load_toml(candidate)
                logger.info("Loaded config from %s", candidate)
                break
        if not data and GLOBAL_CONFIG.exists():
            data = _load_toml(GLOBAL_CONFIG)
            logger.info("Loaded config from %s", GLOBAL_CONFIG)

    config = _validate(data, "config file") if data else QuireConfig()

    return _apply_env_vars(config)


def merge_cli_overrides(config: QuireConfig, **cli_kwargs: object) -> QuireConfig:
    """Overlay explicitly-set CLI flags onto the config.

    Only overrides values where the CLI flag was explicitly provided
    (i.e., not None).

    Args:
        config: Base config.
        **cli_kwargs: CLI flag values, named ``<section>_<field>``
            (e.g. ``content_directory``, ``output_formats``).

    Returns:
        Updated config with CLI overrides applied.

    Raises:
        ConfigError: If an override fails validation.
    """
    data = config.model_dump()

    mapping: dict[str, tuple[str, str]] = {
        "content_directory": ("content", "directory"),
        "include_drafts": ("content", "include_drafts"),
        "output_directory": ("output", "directory"),
        "output_formats": ("output", "formats"),
        "workers": ("build", "workers"),
        "dry_run": ("build", "dry_run"),
    }

    for key, value in cli_kwargs.items():
        if value is None:
            continue
        if key not in mapping:
            raise KeyError(f"Unknown CLI override: {key}")
        section, field = mapping[key]
        data[section][field] = value

    return _validate(data, "CLI options")


def _validate(data: dict, source: str) -> QuireConfig:
    """Validate merged config data, naming where the bad values came from."""
    try:
        return QuireConfig.model_validate(data)
    except ValidationError as exc:
        problems = "; ".join(
            f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in exc.errors()
        )
        raise ConfigError(f"Invalid {source}: {problems}") from exc


def _load_toml(path: Path) -> dict[str, object]:
    """Load a TOML file and return the data dict."""
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (tomllib.TOMLDecodeError, OSError) as exc:
        logger.warning("Failed to parse %s: %s", path, exc)
        return {}


def _apply_env_vars(config: QuireConfig) -> QuireConfig:
    """Apply environment variable overrides to config."""
    data = config.model_dump()

    env_mapping: dict[str, tuple[str, str]] = {
        "QUIRE_CONTENT_DIR": ("content", "directory"),
        "QUIRE_OUTPUT_DIR": ("output", "directory"),
    }

    for env_var, (section, field) in env_mapping.items():
        value = os.environ.get(env_var)
        if value is not None:
            data[section][field] = value

    drafts_raw = os.environ.get("QUIRE_INCLUDE_DRAFTS")
    if drafts_raw is not None:
        data["content"]["include_drafts"] = drafts_raw.lower() in ("true", "1", "yes")

    formats_raw = os.environ.get("QUIRE_FORMATS")
    if formats_raw is not None:
        data["output"]["formats"] = [f.strip() for f in formats_raw.split(",") if f.strip()]

    workers_raw = os.environ.get("QUIRE_WORKERS")
    if workers_raw is not None:
        try:
            data["build"]["workers"] = int(workers_raw)
        except ValueError:
            raise ConfigError(f"QUIRE_WORKERS must be an integer, got {workers_raw!r}") from None

    return _validate(data, "environment")
