"""
Resource naming — turn user input into class and file names.

Names follow Laravel's ``Str::studly`` rules so the files we write line
up with what ``make:filament-resource`` generated.
"""

from __future__ import annotations

import logging
import re

from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)

DEFAULT_FIELD_GROUPS: tuple[str, ...] = ("PersonalFields", "SalaryFields", "LeaveFields")

_IDENTIFIER_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")
_WORD_BREAK_RE = re.compile(r"[\s_-]+")
_RESOURCE_SUFFIX = "Resource"


class ResourceNameError(ValueError):
    """Raised when a resource or field-group name can't become a PHP class name."""


def studly(value: str) -> str:
    """``employee_record`` → ``EmployeeRecord``, ``leave-fields`` → ``LeaveFields``.

    Only the first letter of each word is touched; the rest keeps its case.
    """
    words = _WORD_BREAK_RE.split(value.strip())
    return "".join(w[:1].upper() + w[1:] for w in words if w)


class ResourceName(BaseModel):
    """A Filament resource identity derived from the CLI argument."""

    raw: str                        # exactly what the user typed (passed to artisan)
    model: str                      # Employee
    class_name: str                 # EmployeeResource

    @classmethod
    def parse(cls, raw: str) -> ResourceName:
        """Build a ResourceName from user input.

        Raises:
            ResourceNameError: If the result is not a valid identifier.
        """
        model = studly(raw)
        if model.endswith(_RESOURCE_SUFFIX) and model != _RESOURCE_SUFFIX:
            model = model[: -len(_RESOURCE_SUFFIX)]

        class_name = f"{model}{_RESOURCE_SUFFIX}"
        if not model or not _IDENTIFIER_RE.match(class_name):
            raise ResourceNameError(f"Invalid resource name: {raw!r}")

        return cls(raw=raw, model=model, class_name=class_name)


def parse_field_groups(
    value: str | None,
    default: tuple[str, ...] | list[str] = DEFAULT_FIELD_GROUPS,
) -> list[str]:
    """Parse ``--fields`` into class names.

    ``" personal_fields , SalaryFields "`` → ``["PersonalFields", "SalaryFields"]``.
    Empty entries are dropped and duplicates keep their first position.

    Raises:
        ResourceNameError: If no usable name remains or a name is not an identifier.
    """
    entries = value.split(",") if value is not None else list(default)

    groups: list[str] = []
    for entry in entries:
        name = studly(entry)
        if not name:
            continue
        if not _IDENTIFIER_RE.match(name):
            raise ResourceNameError(f"Invalid field group name: {entry.strip()!r}")
        if name in groups:
            logger.warning("Duplicate field group %s ignored", name)
            continue
        groups.append(name)

    if not groups:
        raise ResourceNameError("At least one field group is required")

    return groups


class ResourceContext(BaseModel):
    """Substitution values for the file templates.

    Renderers take one of these plus body text and return a GeneratedFile;
    they never touch the filesystem.
    """

    namespace: str = "App\\Filament\\Resources"
    class_name: str
    field_groups: list[str] = Field(default_factory=lambda: list(DEFAULT_FIELD_GROUPS))
    form_param: str = "form"
    table_param: str = "table"
    carried_imports: list[str] = Field(default_factory=list)   # `use ...;` lines of the resource
    resources_dir: str = "app/Filament/Resources"
    extension: str = "php"

    @property
    def schema_namespace(self) -> str:
        """Namespace of the split classes: ``App\\Filament\\Resources\\EmployeeResource``."""
        return f"{self.namespace}\\{self.class_name}"

    @property
    def resource_path(self) -> str:
        return f"{self.resources_dir}/{self.class_name}.{self.extension}"

    @property
    def form_schema_path(self) -> str:
        return f"{self.resources_dir}/{self.class_name}/FormSchema.{self.extension}"

    @property
    def table_schema_path(self) -> str:
        return f"{self.resources_dir}/{self.class_name}/TableSchema.{self.extension}"

    def field_group_path(self, group: str) -> str:
        return f"{self.resources_dir}/{self.class_name}/Fields/{group}.{self.extension}"
