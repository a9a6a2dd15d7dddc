"""Shared ``use`` block assembly for the schema templates."""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable

logger = logging.getLogger(__name__)

_USE_RE = re.compile(r"^use\s+(function\s+|const\s+)?([^;]+?)\s*;$", re.IGNORECASE)
_ALIAS_RE = re.compile(r"\s+as\s+", re.IGNORECASE)


def short_name(line: str) -> str:
    """The class name a ``use`` line binds in the file, or "" if none.

    ``use A\\B;`` binds ``B``, ``use A\\B as C;`` binds ``C``. Function and
    const imports, and group imports, bind no class name.
    """
    m = _USE_RE.match(line.strip())
    if m is None or m.group(1) or "{" in m.group(2):
        return ""
    parts = _ALIAS_RE.split(m.group(2))
    if len(parts) == 2:
        return parts[1].strip()
    return parts[0].rsplit("\\", 1)[-1]


def unique_alias(name: str, taken: set[str]) -> str:
    """``name``, or a suffixed variant not in ``taken`` (lower-cased names)."""
    if name.lower() not in taken:
        return name
    base = f"{name}Group" if name.endswith("Fields") else f"{name}Fields"
    candidate, n = base, 2
    while candidate.lower() in taken:
        candidate = f"{base}{n}"
        n += 1
    return candidate


def use_block(required: list[str], carried: list[str], declared: Iterable[str] = ()) -> str:
    """Join ``use`` lines, template-required first, without duplicates.

    ``carried`` are full ``use ...;`` lines copied from the resource so the
    moved method bodies keep resolving the names they refer to. A carried
    line is dropped when the name it binds is already bound by a required
    line or by a class ``declared`` in the file; PHP names are
    case-insensitive.
    """
    lines: list[str] = []
    taken = {name.lower() for name in declared}

    for line in [f"use {name};" for name in required] + carried:
        if line in lines:
            continue
        bound = short_name(line).lower()
        if bound and bound in taken:
            logger.warning("Dropping %s: %s is already in use", line, short_name(line))
            continue
        if bound:
            taken.add(bound)
        lines.append(line)
    return "\n".join(lines)
