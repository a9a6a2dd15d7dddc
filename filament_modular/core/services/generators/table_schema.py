"""
TableSchema generator — the table half of a split resource.

The extracted (or default) table body is wrapped verbatim in ``make()``,
so extracting ``make`` from the output gives the body back unchanged.
"""

from __future__ import annotations

from filament_modular.core.models.resource import ResourceContext
from filament_modular.core.models.template import GeneratedFile
from filament_modular.core.services.generators._imports import use_block


def render_table_schema(ctx: ResourceContext, table_body: str) -> GeneratedFile:
    """Render ``<Resource>/TableSchema.php``."""
    imports = use_block(
        ["Filament\\Tables", "Filament\\Tables\\Table"], ctx.carried_imports, declared=["TableSchema"]
    )
    var = ctx.table_param

    content = f"""\
<?php

namespace {ctx.schema_namespace};

{imports}

class TableSchema
{{
    public static function make(Table ${var}): Table
    {{{table_body}
    }}
}}
"""

    return GeneratedFile(
        path=ctx.table_schema_path,
        content=content,
        reason="Table schema moved out of the resource",
    )
