"""
Make-resource use case — generate a Filament resource, then split it.

Phase 1 runs the generator; any failure there ends the run before a
single file is written. Phase 2 reads the generated resource once,
extracts the form and table bodies, renders the split files and the
rewritten resource, and writes each file independently.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path

from filament_modular.adapters.base import Adapter
from filament_modular.core.config.loader import ModularConfig
from filament_modular.core.models.action import Receipt
from filament_modular.core.models.resource import (
    ResourceContext,
    ResourceName,
    ResourceNameError,
    parse_field_groups,
)
from filament_modular.core.models.template import GeneratedFile
from filament_modular.core.services.extractor import extract_blocks
from filament_modular.core.services.file_writer import FileOutcome, write_all
from filament_modular.core.services.generators import (
    render_field_group,
    render_form_schema,
    render_table_schema,
)
from filament_modular.core.services.php_source import (
    SourceParseError,
    blank_non_code,
    existing_imports,
    find_namespace,
)
from filament_modular.core.services.rewriter import render_rewritten_resource
from filament_modular.core.services.scaffold_ops import run_generator

logger = logging.getLogger(__name__)


class ModularizeError(Exception):
    """Phase 2 can't start: resource missing, unreadable, or unscannable."""


@dataclass
class ModularizeOutcome:
    """Files written by phase 2 and which blocks used their default body."""

    files: list[FileOutcome] = field(default_factory=list)
    fallbacks: list[str] = field(default_factory=list)


@dataclass
class MakeResourceResult:
    """Everything the CLI reports after a run."""

    resource: ResourceName | None = None
    field_groups: list[str] = field(default_factory=list)
    generator: Receipt | None = None
    files: list[FileOutcome] = field(default_factory=list)
    fallbacks: list[str] = field(default_factory=list)
    error: str | None = None

    @property
    def failed_files(self) -> list[FileOutcome]:
        return [f for f in self.files if not f.ok]

    @property
    def ok(self) -> bool:
        return self.error is None and not self.failed_files

    def to_dict(self) -> dict:
        return {
            "ok": self.ok,
            "error": self.error,
            "resource": self.resource.class_name if self.resource else None,
            "field_groups": self.field_groups,
            "generator": self.generator.model_dump() if self.generator else None,
            "files": [f.to_dict() for f in self.files],
            "fallbacks": self.fallbacks,
        }


def _lf(body: str) -> str:
    # split files are always written with LF endings
    return body.replace("\r\n", "\n")


def build_files(
    text: str,
    resource: ResourceName,
    field_groups: list[str],
    config: ModularConfig,
    *,
    force: bool = False,
) -> tuple[list[GeneratedFile], list[str]]:
    """Render every file phase 2 writes, from the resource source alone.

    Returns ``(files, fallbacks)`` where ``fallbacks`` names the methods
    that were not found and got their default body.

    Raises:
        SourceParseError: If a method is ambiguous or the source is malformed.
    """
    code = blank_non_code(text)
    blocks = extract_blocks(text, code=code)

    ctx = ResourceContext(
        namespace=find_namespace(text, code) or config.namespace,
        class_name=resource.class_name,
        field_groups=field_groups,
        form_param=blocks["form"].param,
        table_param=blocks["table"].param,
        resources_dir=config.resources_dir,
        extension=config.extension,
        carried_imports=existing_imports(text, code),
    )

    created = [
        render_form_schema(ctx, _lf(blocks["form"].body)),
        render_table_schema(ctx, _lf(blocks["table"].body)),
        *(render_field_group(ctx, group) for group in field_groups),
    ]
    files = [f.model_copy(update={"overwrite": force}) for f in created]
    files.append(render_rewritten_resource(text, blocks, ctx, code=code))

    fallbacks = [kind for kind, block in blocks.items() if block.fallback]
    return files, fallbacks


def modularize_resource(
    resource: ResourceName,
    field_groups: list[str],
    project_root: Path,
    config: ModularConfig,
    *,
    force: bool = False,
) -> ModularizeOutcome:
    """Split an already generated resource into modular files.

    Raises:
        ModularizeError: Before anything is written, if the resource file
            is missing, unreadable, or can't be scanned.
    """
    rel_path = f"{config.resources_dir}/{resource.class_name}.{config.extension}"
    resource_path = project_root / rel_path

    if not resource_path.is_file():
        raise ModularizeError(f"Resource file not found: {resource_path}")

    try:
        text = resource_path.read_text(encoding="utf-8")
    except OSError as e:
        raise ModularizeError(f"Cannot read {resource_path}: {e}") from e

    try:
        files, fallbacks = build_files(text, resource, field_groups, config, force=force)
    except SourceParseError as e:
        raise ModularizeError(f"Cannot split {rel_path}: {e}") from e

    outcome = ModularizeOutcome(fallbacks=fallbacks)
    outcome.files = write_all(project_root, files)

    written = sum(1 for f in outcome.files if f.ok)
    logger.info("Modularized %s: %d/%d file(s) written", resource.class_name, written, len(files))
    return outcome


def make_resource(
    name: str,
    *,
    project_root: Path,
    fields: str | None = None,
    flags: Iterable[str] = (),
    config: ModularConfig | None = None,
    adapter: Adapter | None = None,
    skip_generate: bool = False,
) -> MakeResourceResult:
    """Run both phases for one resource.

    Args:
        name: Resource name as typed by the user (forwarded to the generator).
        project_root: Laravel project root; the generator runs there.
        fields: Comma-separated field groups, or None for the configured default.
        flags: Generator flags to forward (see ``GENERATOR_FLAGS``).
        config: Loaded configuration (defaults when None).
        adapter: Adapter to run the generator with (shell when None).
        skip_generate: Only split an existing resource file.
    """
    config = config or ModularConfig()
    flags = list(flags)
    result = MakeResourceResult()

    try:
        result.resource = ResourceName.parse(name)
        result.field_groups = parse_field_groups(fields, config.default_fields)
    except ResourceNameError as e:
        result.error = str(e)
        return result

    if not skip_generate:
        receipt = run_generator(name, flags, project_root, config=config, adapter=adapter)
        result.generator = receipt
        if receipt.failed:
            result.error = f"Failed to create standard Filament resource: {receipt.error}"
            return result

    try:
        outcome = modularize_resource(
            result.resource,
            result.field_groups,
            project_root,
            config,
            force="force" in flags,
        )
    except ModularizeError as e:
        logger.error("%s", e)
        result.error = str(e)
        return result

    result.files = outcome.files
    result.fallbacks = outcome.fallbacks
    return result
