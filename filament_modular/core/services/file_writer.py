"""
File writer — put GeneratedFiles on disk, one at a time.

Each write stands alone: a failure is recorded in its outcome and the
next file is still attempted. Nothing is rolled back.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from filament_modular.core.models.template import GeneratedFile

logger = logging.getLogger(__name__)


@dataclass
class FileOutcome:
    """What happened to one GeneratedFile."""

    path: str
    kind: str = "created"
    ok: bool = False
    error: str | None = None
    reason: str = ""

    def to_dict(self) -> dict:
        return {
            "path": self.path,
            "kind": self.kind,
            "ok": self.ok,
            "error": self.error,
            "reason": self.reason,
        }


def write_generated_file(project_root: Path, file: GeneratedFile) -> FileOutcome:
    """Write one GeneratedFile under ``project_root``."""
    outcome = FileOutcome(path=file.path, kind=file.kind, reason=file.reason)
    target = project_root / file.path

    if target.exists() and not file.overwrite:
        outcome.error = f"File already exists: {file.path} (use --force to replace)"
        logger.warning(outcome.error)
        return outcome

    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(file.content, encoding="utf-8")
    except OSError as e:
        outcome.error = f"Cannot write {file.path}: {e}"
        logger.error(outcome.error)
        return outcome

    logger.info("Wrote %s (%s)", target, file.kind)
    outcome.ok = True
    return outcome


def write_all(project_root: Path, files: list[GeneratedFile]) -> list[FileOutcome]:
    """Write every file independently and return all outcomes in order."""
    return [write_generated_file(project_root, f) for f in files]
