"""
Generators — render the split Filament files.

Each module exposes a ``render_*()`` function taking a ``ResourceContext``
(plus body text where relevant) and returning a ``GeneratedFile``.
Rendering is pure; writing happens in ``file_writer``.
"""

from filament_modular.core.services.generators.field_group import render_field_group
from filament_modular.core.services.generators.form_schema import render_form_schema
from filament_modular.core.services.generators.table_schema import render_table_schema

__all__ = [
    "render_field_group",
    "render_form_schema",
    "render_table_schema",
]
