"""
Configuration loader — reads filament-modular.yml into a typed model.

The file is optional. Without it every setting falls back to the
layout a fresh Laravel + Filament project has.
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import BaseModel, Field, ValidationError

from filament_modular.core.models.resource import DEFAULT_FIELD_GROUPS

logger = logging.getLogger(__name__)

CONFIG_FILE = "filament-modular.yml"

# Marker file of a Laravel project root
ARTISAN_FILE = "artisan"


class ConfigError(Exception):
    """Raised when filament-modular.yml is invalid or unreadable."""


class GeneratorSettings(BaseModel):
    """How to invoke the scaffolding command."""

    command: list[str] = Field(
        default_factory=lambda: ["php", "artisan", "make:filament-resource"],
        min_length=1,
    )
    timeout: int = Field(default=300, gt=0)


class ModularConfig(BaseModel):
    """Settings for where resources live and how files are named."""

    resources_dir: str = "app/Filament/Resources"
    namespace: str = "App\\Filament\\Resources"
    extension: str = "php"
    default_fields: list[str] = Field(
        default_factory=lambda: list(DEFAULT_FIELD_GROUPS),
        min_length=1,
    )
    generator: GeneratorSettings = Field(default_factory=GeneratorSettings)


def _walk_up(start_dir: Path | None, filename: str) -> Path | None:
    current = (start_dir or Path.cwd()).resolve()

    for _ in range(20):  # safety limit
        candidate = current / filename
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            break  # filesystem root
        current = parent

    return None


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Search for filament-modular.yml starting from the given directory, walking up."""
    return _walk_up(start_dir, CONFIG_FILE)


def find_project_root(
    config_path: Path | None = None,
    start_dir: Path | None = None,
) -> Path:
    """Resolve the Laravel project root.

    The directory of the config file wins; otherwise the nearest ancestor
    containing ``artisan``; otherwise the start directory itself.
    """
    if config_path is None:
        config_path = find_config_file(start_dir)
    if config_path is not None:
        return config_path.parent.resolve()

    artisan = _walk_up(start_dir, ARTISAN_FILE)
    if artisan is not None:
        return artisan.parent

    return (start_dir or Path.cwd()).resolve()


def load_config(path: Path | None = None) -> ModularConfig:
    """Load and validate the configuration.

    Args:
        path: Explicit path to filament-modular.yml. If None, searches upward
            and falls back to defaults when nothing is found.

    Raises:
        ConfigError: If an explicit file is missing, or any file is invalid.
    """
    explicit = path is not None
    if path is None:
        path = find_config_file()

    if path is None:
        logger.debug("No %s found, using defaults", CONFIG_FILE)
        return ModularConfig()

    if not path.is_file():
        if explicit:
            raise ConfigError(f"Config file not found: {path}")
        return ModularConfig()

    logger.debug("Loading config from %s", path)

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")

    try:
        config = ModularConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration in {path}: {e}") from e

    logger.info("Loaded config from %s (resources in %s)", path, config.resources_dir)
    return config
