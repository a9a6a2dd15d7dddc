"""
PHP source scanner — locate methods and imports by structure, not by indentation.

Every search runs over a *blanked* copy of the source: the same text with
the inside of comments, string literals and heredocs replaced by spaces.
Offsets in the blanked copy are offsets in the original, so spans found
there slice the original text directly. Braces inside strings or comments
can then never confuse depth counting.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass

logger = logging.getLogger(__name__)


class SourceParseError(Exception):
    """Base class for problems locating code in a PHP file."""


class AmbiguousMethodError(SourceParseError):
    """More than one declaration matched the method name."""


class MalformedSourceError(SourceParseError):
    """Unbalanced delimiters, unterminated literals, or a bodiless method."""


@dataclass(frozen=True)
class MethodSpan:
    """Where a method lives in the source.

    ``start`` is the beginning of the declaration line, ``body_start`` /
    ``body_end`` bound the text between the braces, ``end`` is just past
    the closing brace.
    """

    name: str
    start: int
    body_start: int
    body_end: int
    end: int
    param: str | None = None        # first parameter variable, without '$'
    indent: str = ""                # leading whitespace of the closing brace line


_HEREDOC_OPEN_RE = re.compile(r"<<<[ \t]*(['\"]?)([A-Za-z_][A-Za-z0-9_]*)\1\r?\n")
_USE_LINE_RE = re.compile(r"^use\s+[^;]+;[ \t]*(?=\r?$)", re.MULTILINE)
_NAMESPACE_RE = re.compile(r"^namespace\s+([^;{\s]+)\s*;[ \t]*(?=\r?$)", re.MULTILINE)
_OPEN_TAG_RE = re.compile(r"<\?php\b[^\r\n]*")
_PARAM_RE = re.compile(r"\$([A-Za-z_][A-Za-z0-9_]*)")


def _line_number(text: str, pos: int) -> int:
    return text.count("\n", 0, pos) + 1


def line_ending(text: str) -> str:
    """``"\\r\\n"`` if the first line break in ``text`` is CRLF, else ``"\\n"``."""
    nl = text.find("\n")
    return "\r\n" if nl > 0 and text[nl - 1] == "\r" else "\n"


def _blank(chars: list[str], start: int, end: int) -> None:
    for i in range(start, end):
        if chars[i] != "\n":
            chars[i] = " "


def blank_non_code(text: str) -> str:
    """Return ``text`` with comment, string and heredoc contents blanked.

    Comments are blanked whole, openers included. String quotes and
    heredoc markers stay in place and only what is between them becomes
    spaces. Newlines survive so line numbers match.

    Raises:
        MalformedSourceError: On an unterminated comment, string or heredoc.
    """
    chars = list(text)
    i, n = 0, len(text)

    while i < n:
        c = text[i]
        nxt = text[i + 1] if i + 1 < n else ""

        if (c == "/" and nxt == "/") or (c == "#" and nxt != "["):
            end = text.find("\n", i)
            end = n if end == -1 else end
            _blank(chars, i, end)
            i = end

        elif c == "/" and nxt == "*":
            end = text.find("*/", i + 2)
            if end == -1:
                raise MalformedSourceError(
                    f"Unterminated comment starting at line {_line_number(text, i)}"
                )
            _blank(chars, i, end + 2)
            i = end + 2

        elif c in "'\"`":
            j = i + 1
            while j < n and text[j] != c:
                j += 2 if text[j] == "\\" else 1
            if j >= n:
                raise MalformedSourceError(
                    f"Unterminated string starting at line {_line_number(text, i)}"
                )
            _blank(chars, i + 1, j)
            i = j + 1

        elif c == "<" and text.startswith("<<<", i):
            m = _HEREDOC_OPEN_RE.match(text, i)
            if m is None:
                i += 3
                continue
            closer = re.compile(rf"^[ \t]*{re.escape(m.group(2))}\b", re.MULTILINE)
            close = closer.search(text, m.end())
            if close is None:
                raise MalformedSourceError(
                    f"Unterminated heredoc {m.group(2)} at line {_line_number(text, i)}"
                )
            _blank(chars, m.end(), close.start())
            i = close.end()

        else:
            i += 1

    return "".join(chars)


def match_delimiter(code: str, open_pos: int, opener: str = "{", closer: str = "}") -> int:
    """Return the offset of the delimiter closing the one at ``open_pos``.

    ``code`` must already be blanked.

    Raises:
        MalformedSourceError: If the delimiter is never closed.
    """
    depth = 0
    for i in range(open_pos, len(code)):
        if code[i] == opener:
            depth += 1
        elif code[i] == closer:
            depth -= 1
            if depth == 0:
                return i
    raise MalformedSourceError(
        f"Unbalanced {opener!r} opened at line {_line_number(code, open_pos)}"
    )


def find_method(text: str, name: str, code: str | None = None) -> MethodSpan | None:
    """Locate the single declaration of method ``name``.

    Returns None when the method is not declared at all.

    Raises:
        AmbiguousMethodError: If the name is declared more than once.
        MalformedSourceError: If the declaration has no body or its
            delimiters don't balance.
    """
    if code is None:
        code = blank_non_code(text)

    pattern = re.compile(rf"\bfunction\s+&?\s*{re.escape(name)}\s*\(", re.IGNORECASE)
    matches = list(pattern.finditer(code))

    if not matches:
        return None
    if len(matches) > 1:
        lines = ", ".join(str(_line_number(code, m.start())) for m in matches)
        raise AmbiguousMethodError(f"Method {name}() is declared more than once (lines {lines})")

    m = matches[0]
    params_open = m.end() - 1
    params_close = match_delimiter(code, params_open, "(", ")")

    body_open = -1
    for i in range(params_close + 1, len(code)):
        if code[i] == "{":
            body_open = i
            break
        if code[i] == ";":
            break
    if body_open == -1:
        raise MalformedSourceError(
            f"Method {name}() at line {_line_number(code, m.start())} has no body"
        )

    body_close = match_delimiter(code, body_open)

    line_start = code.rfind("\n", 0, m.start()) + 1
    close_line_start = code.rfind("\n", 0, body_close) + 1
    leading = text[close_line_start:body_close]
    indent = leading if leading.strip() == "" else ""

    param = _PARAM_RE.search(code, params_open, params_close)

    span = MethodSpan(
        name=name,
        start=line_start,
        body_start=body_open + 1,
        body_end=body_close,
        end=body_close + 1,
        param=param.group(1) if param else None,
        indent=indent,
    )
    logger.debug(
        "Found %s() at lines %d-%d",
        name,
        _line_number(code, line_start),
        _line_number(code, body_close),
    )
    return span


def find_namespace(text: str, code: str | None = None) -> str | None:
    """Return the file's ``namespace`` declaration, if any."""
    if code is None:
        code = blank_non_code(text)
    m = _NAMESPACE_RE.search(code)
    return m.group(1) if m else None


def import_insertion_point(text: str, code: str | None = None) -> tuple[int, bool]:
    """Where new ``use`` lines go.

    Returns ``(offset, after_use)``. The offset is the end of the last
    top-level ``use ...;`` line; ``after_use`` is False when there was
    none and the offset is the end of the ``namespace`` line (or the
    ``<?php`` tag, or the start of the file).
    """
    if code is None:
        code = blank_non_code(text)

    last_use = None
    for last_use in _USE_LINE_RE.finditer(code):
        pass
    if last_use is not None:
        return last_use.end(), True

    ns = _NAMESPACE_RE.search(code)
    if ns is not None:
        return ns.end(), False

    tag = _OPEN_TAG_RE.match(code)
    if tag is not None:
        return tag.end(), False

    return 0, False


def existing_imports(text: str, code: str | None = None) -> list[str]:
    """All top-level ``use`` lines in file order, stripped."""
    if code is None:
        code = blank_non_code(text)
    return [m.group(0).strip() for m in _USE_LINE_RE.finditer(code)]
