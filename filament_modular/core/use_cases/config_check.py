"""
Config check use case — validate filament-modular.yml and the project around it.
"""

from __future__ import annotations

import shutil
from dataclasses import dataclass, field
from pathlib import Path

from filament_modular.core.config.loader import (
    ARTISAN_FILE,
    ConfigError,
    ModularConfig,
    find_config_file,
    find_project_root,
    load_config,
)
from filament_modular.core.models.resource import ResourceNameError, parse_field_groups


@dataclass
class ConfigCheckResult:
    """Result of configuration validation."""

    valid: bool = False
    config: ModularConfig | None = None
    config_path: Path | None = None
    project_root: Path | None = None
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "valid": self.valid,
            "config_path": str(self.config_path) if self.config_path else None,
            "project_root": str(self.project_root) if self.project_root else None,
            "errors": self.errors,
            "warnings": self.warnings,
            "config": self.config.model_dump() if self.config else None,
        }


def check_config(config_path: Path | None = None, start_dir: Path | None = None) -> ConfigCheckResult:
    """Validate configuration and report issues.

    A missing config file is not an error: defaults apply.
    """
    result = ConfigCheckResult()

    if config_path is None:
        config_path = find_config_file(start_dir)
    result.config_path = config_path
    result.project_root = find_project_root(config_path, start_dir)

    try:
        config = load_config(config_path) if config_path else ModularConfig()
        result.config = config
    except ConfigError as e:
        result.errors.append(str(e))
        return result

    if config_path is None:
        result.warnings.append("No filament-modular.yml found, using defaults.")

    try:
        parse_field_groups(",".join(config.default_fields))
    except ResourceNameError as e:
        result.errors.append(f"default_fields: {e}")

    if not (result.project_root / ARTISAN_FILE).is_file():
        result.warnings.append(f"No '{ARTISAN_FILE}' in {result.project_root}; is this a Laravel project?")

    if not (result.project_root / config.resources_dir).is_dir():
        result.warnings.append(f"Resources directory does not exist yet: {config.resources_dir}")

    executable = config.generator.command[0]
    if shutil.which(executable) is None:
        result.warnings.append(f"Generator executable not on PATH: {executable}")

    result.valid = len(result.errors) == 0
    return result
