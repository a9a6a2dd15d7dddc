"""
CLI command for making a modular Filament resource.

Thin wrapper over ``filament_modular.core.use_cases.make_resource``.
"""

from __future__ import annotations

import json
import shlex
import sys
from pathlib import Path

import click

from filament_modular.core.services.scaffold_ops import GENERATOR_FLAGS


def _resolve_project_root(ctx: click.Context) -> Path:
    """Resolve the Laravel project root from context or CWD."""
    from filament_modular.core.config.loader import find_project_root

    return find_project_root(ctx.obj.get("config_path"))


def _load_config(ctx: click.Context, as_json: bool = False):
    from filament_modular.core.config.loader import ConfigError, load_config

    try:
        return load_config(ctx.obj.get("config_path"))
    except ConfigError as e:
        if as_json:
            click.echo(json.dumps({"ok": False, "error": str(e)}, indent=2))
        else:
            click.secho(f"❌ {e}", fg="red")
        sys.exit(1)


def _validate_name(ctx: click.Context, param: click.Parameter, value: str) -> str:
    from filament_modular.core.models.resource import ResourceName, ResourceNameError

    try:
        ResourceName.parse(value)
    except ResourceNameError as e:
        raise click.BadParameter(str(e)) from e
    return value


def _validate_fields(ctx: click.Context, param: click.Parameter, value: str | None) -> str | None:
    from filament_modular.core.models.resource import ResourceNameError, parse_field_groups

    if value is None:
        return None
    try:
        parse_field_groups(value)
    except ResourceNameError as e:
        raise click.BadParameter(str(e)) from e
    return value


@click.command("make")
@click.argument("name", callback=_validate_name)
@click.option(
    "--fields",
    default=None,
    callback=_validate_fields,
    help="Comma-separated field groups (default: PersonalFields,SalaryFields,LeaveFields).",
)
@click.option("--model", is_flag=True, help="Also create the Eloquent model.")
@click.option("--migration", is_flag=True, help="Also create a migration for the model.")
@click.option("--factory", is_flag=True, help="Also create a factory for the model.")
@click.option("--generate", is_flag=True, help="Generate form and table from the model's columns.")
@click.option("--simple", is_flag=True, help="Generate a simple (modal) resource.")
@click.option("--view", is_flag=True, help="Generate a view page.")
@click.option("--soft-deletes", is_flag=True, help="Add soft-delete support.")
@click.option("--force", is_flag=True, help="Overwrite existing files.")
@click.option("--skip-generate", is_flag=True, help="Only split an existing resource; don't run artisan.")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def make(
    ctx: click.Context,
    name: str,
    fields: str | None,
    skip_generate: bool,
    as_json: bool,
    **flag_values: bool,
) -> None:
    """Create a Filament resource and split it into modular files.

    Runs ``php artisan make:filament-resource NAME``, then moves the form
    and table definitions into FormSchema / TableSchema classes and
    creates one field-group class per --fields entry.
    """
    from filament_modular.core.models.resource import ResourceName
    from filament_modular.core.services.scaffold_ops import build_generator_command
    from filament_modular.core.use_cases.make_resource import make_resource

    config = _load_config(ctx, as_json)
    project_root = _resolve_project_root(ctx)
    flags = [flag for flag in GENERATOR_FLAGS if flag_values.get(flag.replace("-", "_"))]
    resource = ResourceName.parse(name)

    if not as_json:
        click.secho(f"Creating modular Filament resource: {resource.class_name}", fg="cyan", bold=True)
        if not skip_generate:
            click.echo("Step 1: Creating standard Filament resource...")
            click.echo(f"Executing: {shlex.join(build_generator_command(name, flags, config))}")

    result = make_resource(
        name,
        project_root=project_root,
        fields=fields,
        flags=flags,
        config=config,
        skip_generate=skip_generate,
    )

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(0 if result.ok else 1)

    if result.generator is not None:
        for stream in (result.generator.output, result.generator.metadata.get("stderr", "")):
            if stream:
                click.echo(stream)

    if result.generator is not None and result.generator.failed:
        click.secho(f"❌ {result.error}", fg="red")
        sys.exit(1)

    click.echo("Step 2: Modularizing the resource...")

    if result.error:
        click.secho(f"❌ {result.error}", fg="red")
        sys.exit(1)

    for kind in result.fallbacks:
        click.secho(
            f"⚠️  No {kind}() method found in the resource; "
            f"{'FormSchema' if kind == 'form' else 'TableSchema'} uses the default {kind} body.",
            fg="yellow",
        )

    written = [f for f in result.files if f.ok]
    if written:
        click.echo("Created files:")
        for f in sorted(written, key=lambda f: f.kind != "modified"):
            suffix = " (modified)" if f.kind == "modified" else ""
            click.echo(f"- {f.path}{suffix}")

    if result.failed_files:
        click.secho("❌ Some files could not be written:", fg="red", bold=True)
        for f in result.failed_files:
            click.echo(f"   • {f.error}")
        sys.exit(1)

    resource_dir = f"{config.resources_dir}/{resource.class_name}"
    click.secho("✅ Modular Filament resource created successfully!", fg="green", bold=True)
    click.echo()
    click.secho("📝 Next steps:", fg="cyan")
    click.echo(f"1. Update your field classes in {resource_dir}/Fields/")
    click.echo(f"2. Customize the table columns in {resource_dir}/TableSchema.{config.extension}")
    click.echo("3. Add any additional logic to the main resource file")
