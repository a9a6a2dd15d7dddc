"""
Generated file model — produced by the renderers and the rewriter.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel


class GeneratedFile(BaseModel):
    """A file the modularizer wants on disk.

    Attributes:
        path:      Relative path from project root.
        content:   Full file content.
        overwrite: Whether to overwrite if already exists.
        kind:      ``created`` for new files, ``modified`` for the
                   resource file rewritten in place.
        reason:    Why this file was generated.
    """

    path: str
    content: str
    overwrite: bool = False
    kind: Literal["created", "modified"] = "created"
    reason: str = ""
