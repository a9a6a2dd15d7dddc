"""
FormSchema generator — the form half of a split resource.

``make()`` assembles the field groups in declaration order. The body
extracted from the generated resource is kept verbatim under
``originalForm()`` so nothing the generator wrote is lost.
"""

from __future__ import annotations

from filament_modular.core.models.resource import ResourceContext
from filament_modular.core.models.template import GeneratedFile
from filament_modular.core.services.generators._imports import short_name, unique_alias, use_block


def render_form_schema(ctx: ResourceContext, original_body: str) -> GeneratedFile:
    """Render ``<Resource>/FormSchema.php``."""
    required = ["Filament\\Forms", "Filament\\Forms\\Form"]

    # groups whose name is already bound in this file are imported under an alias
    taken = {"forms", "form", "formschema"}
    taken.update(short_name(line).lower() for line in ctx.carried_imports)
    aliases: list[str] = []
    for group in ctx.field_groups:
        alias = unique_alias(group, taken)
        taken.add(alias.lower())
        aliases.append(alias)
        target = f"{ctx.schema_namespace}\\Fields\\{group}"
        required.append(target if alias == group else f"{target} as {alias}")

    imports = use_block(required, ctx.carried_imports, declared=["FormSchema"])

    field_calls = "\n".join(f"                ...{alias}::make()," for alias in aliases)
    var = ctx.form_param

    content = f"""\
<?php

namespace {ctx.schema_namespace};

{imports}

class FormSchema
{{
    public static function make(Form ${var}): Form
    {{
        return ${var}
            ->schema([
{field_calls}
            ]);
    }}

    /**
     * Original form content from generated resource:
     * You can use this as reference or replace the schema above
     */
    public static function originalForm(Form ${var}): Form
    {{{original_body}
    }}
}}
"""

    return GeneratedFile(
        path=ctx.form_schema_path,
        content=content,
        reason=f"Form schema assembling {len(ctx.field_groups)} field group(s)",
    )
