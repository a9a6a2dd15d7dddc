"""
Resource rewriter — make the generated resource delegate to the split files.

Works from the spans found during extraction; the source is never
searched a second time, so what was extracted is exactly what gets
replaced. All edits are computed against the original text and applied
back to front so earlier offsets stay valid.
"""

from __future__ import annotations

import logging

from filament_modular.core.models.resource import ResourceContext
from filament_modular.core.models.template import GeneratedFile
from filament_modular.core.services.extractor import ExtractedBlock, MethodKind
from filament_modular.core.services.php_source import (
    blank_non_code,
    existing_imports,
    import_insertion_point,
    line_ending,
)

logger = logging.getLogger(__name__)

Edit = tuple[int, int, str]

_SCHEMA_CLASSES: dict[str, str] = {"form": "FormSchema", "table": "TableSchema"}


def delegating_body(schema_class: str, param: str, indent: str = "    ", eol: str = "\n") -> str:
    """Body text that hands the call to ``schema_class::make()``.

    ``indent`` is the closing brace's indentation; the statement goes one
    level deeper. ``eol`` matches the file's line endings.
    """
    return f"{eol}{indent}    return {schema_class}::make(${param});{eol}{indent}"


def apply_edits(text: str, edits: list[Edit]) -> str:
    """Apply ``(start, end, replacement)`` edits made against ``text``.

    Raises:
        ValueError: If two edits overlap.
    """
    ordered = sorted(edits, key=lambda e: (e[0], e[1]), reverse=True)
    limit = len(text)
    for start, end, replacement in ordered:
        if end > limit:
            raise ValueError(f"Overlapping edits at offset {start}")
        text = text[:start] + replacement + text[end:]
        limit = start
    return text


def import_lines(ctx: ResourceContext) -> list[str]:
    return [
        f"use {ctx.schema_namespace}\\FormSchema;",
        f"use {ctx.schema_namespace}\\TableSchema;",
    ]


def rewrite_resource(
    text: str,
    blocks: dict[MethodKind, ExtractedBlock],
    ctx: ResourceContext,
    code: str | None = None,
) -> str:
    """Return the resource source with imports added and bodies delegated.

    Blocks that fell back have no span and leave their method untouched.
    """
    if code is None:
        code = blank_non_code(text)

    eol = line_ending(text)
    edits: list[Edit] = []

    for kind, block in blocks.items():
        if block.span is None:
            continue
        body = delegating_body(_SCHEMA_CLASSES[kind], block.param, block.span.indent, eol)
        edits.append((block.span.body_start, block.span.body_end, body))

    present = existing_imports(text, code)
    missing = [line for line in import_lines(ctx) if line not in present]
    if missing:
        pos, after_use = import_insertion_point(text, code)
        separator = eol if after_use else eol * 2
        edits.append((pos, pos, separator + eol.join(missing)))
    else:
        logger.debug("Schema imports already present in %s", ctx.resource_path)

    return apply_edits(text, edits)


def render_rewritten_resource(
    text: str,
    blocks: dict[MethodKind, ExtractedBlock],
    ctx: ResourceContext,
    code: str | None = None,
) -> GeneratedFile:
    """Wrap ``rewrite_resource`` output as the in-place GeneratedFile."""
    return GeneratedFile(
        path=ctx.resource_path,
        content=rewrite_resource(text, blocks, ctx, code=code),
        overwrite=True,
        kind="modified",
        reason="Resource now delegates to FormSchema and TableSchema",
    )
