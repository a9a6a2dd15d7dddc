"""
Form/table extraction — pull the bodies of ``form()`` and ``table()`` out of
a generated Filament resource.

A missing method is not an error: the block falls back to the empty
schema Filament itself generates, and is flagged so the caller can warn.
Ambiguous or malformed source raises (see ``php_source``).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Literal

from filament_modular.core.services.php_source import MethodSpan, blank_non_code, find_method

logger = logging.getLogger(__name__)

MethodKind = Literal["form", "table"]

FORM_FALLBACK = """
        return $form
            ->schema([
                //
            ]);"""

TABLE_FALLBACK = """
        return $table
            ->columns([
                //
            ])
            ->filters([
                //
            ])
            ->actions([
                Tables\\Actions\\EditAction::make(),
                Tables\\Actions\\DeleteAction::make(),
            ])
            ->bulkActions([
                Tables\\Actions\\BulkActionGroup::make([
                    Tables\\Actions\\DeleteBulkAction::make(),
                ]),
            ]);"""

_FALLBACKS: dict[str, str] = {"form": FORM_FALLBACK, "table": TABLE_FALLBACK}


@dataclass(frozen=True)
class ExtractedBlock:
    """The body of one method, or its fallback."""

    method: MethodKind
    body: str
    fallback: bool = False
    span: MethodSpan | None = None

    @property
    def param(self) -> str:
        """Parameter variable the body refers to (``form`` / ``table``)."""
        if self.span is not None and self.span.param:
            return self.span.param
        return self.method


def method_body(text: str, span: MethodSpan) -> str:
    """Inner text of a method with trailing whitespace removed."""
    return text[span.body_start:span.body_end].rstrip()


def fallback_block(method: MethodKind) -> ExtractedBlock:
    return ExtractedBlock(method=method, body=_FALLBACKS[method], fallback=True)


def extract_block(text: str, method: MethodKind, code: str | None = None) -> ExtractedBlock:
    """Extract ``method``'s body from ``text``, or fall back.

    Raises:
        SourceParseError: If the method is declared more than once or
            the source can't be scanned.
    """
    span = find_method(text, method, code=code)
    if span is None:
        logger.warning("No %s() method found, using the default %s schema", method, method)
        return fallback_block(method)

    return ExtractedBlock(method=method, body=method_body(text, span), span=span)


def extract_blocks(text: str, code: str | None = None) -> dict[MethodKind, ExtractedBlock]:
    """Extract both blocks from one scan of the source."""
    if code is None:
        code = blank_non_code(text)
    return {
        "form": extract_block(text, "form", code=code),
        "table": extract_block(text, "table", code=code),
    }
