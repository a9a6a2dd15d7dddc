"""
filament-modular — CLI entrypoint.

Usage:
    filament-modular --help
    filament-modular make Employee --fields=PersonalFields,SalaryFields
    filament-modular config check
"""

from __future__ import annotations

import json
import os
import sys
from pathlib import Path

import click

from filament_modular import __version__
from filament_modular.core.observability.logging_config import resolve_level, setup_logging


@click.group()
@click.version_option(version=__version__, prog_name="filament-modular")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=False),
    default=None,
    help="Path to filament-modular.yml (default: auto-detect).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    debug: bool,
    config_path: str | None,
) -> None:
    """filament-modular — split generated Filament resources into modular files."""
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = Path(config_path) if config_path else None

    # ── Logging setup (once, at process start) ──────────────────
    level = resolve_level(
        debug=debug,
        verbose=verbose,
        quiet=quiet,
        env_level=os.environ.get("FMOD_LOG_LEVEL"),
    )
    setup_logging(
        level=level,
        log_file=os.environ.get("FMOD_LOG_FILE"),
        log_file_level=os.environ.get("FMOD_LOG_FILE_LEVEL"),
    )


@cli.group()
def config() -> None:
    """Configuration commands."""


@config.command("check")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def config_check(ctx: click.Context, as_json: bool) -> None:
    """Validate filament-modular.yml and the project layout."""
    from filament_modular.core.use_cases.config_check import check_config

    result = check_config(config_path=ctx.obj.get("config_path"))

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(0 if result.valid else 1)

    if result.valid:
        assert result.config is not None  # guaranteed when valid
        click.secho("✅ Configuration is valid", fg="green", bold=True)
        click.echo(f"   Project root: {result.project_root}")
        click.echo(f"   Resources: {result.config.resources_dir}")
        click.echo(f"   Generator: {' '.join(result.config.generator.command)}")
        click.echo(f"   Default fields: {', '.join(result.config.default_fields)}")
    else:
        click.secho("❌ Configuration errors:", fg="red", bold=True)
        for err in result.errors:
            click.echo(f"   • {err}")

    if result.warnings:
        click.echo()
        click.secho("⚠️  Warnings:", fg="yellow")
        for warn in result.warnings:
            click.echo(f"   • {warn}")

    if not result.valid:
        sys.exit(1)


# ── Register commands from filament_modular/ui/cli/ ──────────────

from filament_modular.ui.cli.make import make  # noqa: E402

cli.add_command(make)


if __name__ == "__main__":
    cli()
