"""
Field group generator — one ``Fields/<Group>.php`` per declared group.
"""

from __future__ import annotations

from filament_modular.core.models.resource import ResourceContext
from filament_modular.core.models.template import GeneratedFile
from filament_modular.core.services.generators._imports import unique_alias, use_block


def _component(name: str, alias: str) -> str:
    target = f"Filament\\Forms\\Components\\{name}"
    return target if alias == name else f"{target} as {alias}"


def render_field_group(ctx: ResourceContext, group: str) -> GeneratedFile:
    """Render a field-group class holding one example section."""
    # the group class owns its name; a component sharing it is aliased
    section = unique_alias("Section", {group.lower()})
    text_input = unique_alias("TextInput", {group.lower()})
    imports = use_block([_component("Section", section), _component("TextInput", text_input)], [])

    content = f"""\
<?php

namespace {ctx.schema_namespace}\\Fields;

{imports}

class {group}
{{
    public static function make(): array
    {{
        return [
            {section}::make('{group}')
                ->schema([
                    {text_input}::make('example_field')
                        ->label('Example Field')
                        ->required(),

                    // Add more fields here as needed
                ])
                ->columns(2),
        ];
    }}
}}
"""

    return GeneratedFile(
        path=ctx.field_group_path(group),
        content=content,
        reason=f"Field group {group}",
    )
