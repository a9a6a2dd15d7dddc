"""
Domain models — Pydantic types for the modularizer.

Re-exported here for convenient access:

    from filament_modular.core.models import Action, Receipt, GeneratedFile
"""

from filament_modular.core.models.action import Action, Receipt
from filament_modular.core.models.resource import (
    DEFAULT_FIELD_GROUPS,
    ResourceContext,
    ResourceName,
    ResourceNameError,
    parse_field_groups,
    studly,
)
from filament_modular.core.models.template import GeneratedFile

__all__ = [
    # action.py
    "Action",
    "Receipt",
    # resource.py
    "DEFAULT_FIELD_GROUPS",
    "ResourceContext",
    "ResourceName",
    "ResourceNameError",
    "parse_field_groups",
    "studly",
    # template.py
    "GeneratedFile",
]
