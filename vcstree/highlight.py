"""Source loading, sanitization, and Pygments syntax highlighting for previews.

Terminal control bytes are neutralized before display so previewing a file
cannot ring bells or move the cursor.
"""

from __future__ import annotations

import codecs
from pathlib import Path

from pygments import highlight as pygments_highlight
from pygments.formatters import TerminalFormatter
from pygments.lexers import TextLexer, get_lexer_for_filename
from pygments.styles import get_style_by_name
from pygments.util import ClassNotFound

DEFAULT_STYLE = "monokai"

_FORMATTERS: dict[str, TerminalFormatter] = {}
_VALID_STYLES: set[str] = set()
_INVALID_STYLES: set[str] = set()


def decode_source(data: bytes) -> str:
    """Decode file bytes for display.

    UTF-8 is preferred and a leading BOM is dropped. A multi-byte sequence
    cut off at the end of ``data`` (a byte-capped preview) is trimmed; any
    other invalid UTF-8 decodes the whole buffer as Latin-1.
    """
    data = data.removeprefix(codecs.BOM_UTF8)
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as exc:
        if exc.reason == "unexpected end of data":
            return data[: exc.start].decode("utf-8")
        return data.decode("latin-1")


# C0 controls, DEL and C1 controls, except the whitespace a preview lays out.
_CONTROL_ESCAPES = {
    code: f"\\x{code:02x}"
    for code in (*range(0x20), *range(0x7F, 0xA0))
    if chr(code) not in "\n\r\t"
}


def sanitize_terminal_text(source: str) -> str:
    """Spell out control characters as ``\\xNN`` so previews cannot drive the terminal."""
    return source.translate(_CONTROL_ESCAPES)


def _normalize_style(style: str) -> str:
    if style in _VALID_STYLES:
        return style
    if style in _INVALID_STYLES:
        return DEFAULT_STYLE

    try:
        get_style_by_name(style)
    except ClassNotFound:
        _INVALID_STYLES.add(style)
        return DEFAULT_STYLE
    _VALID_STYLES.add(style)
    return style


def _formatter_for_style(style: str) -> TerminalFormatter:
    formatter = _FORMATTERS.get(style)
    if formatter is None:
        formatter = TerminalFormatter(style=style)
        _FORMATTERS[style] = formatter
    return formatter


def colorize_source(source: str, path: Path, style: str = DEFAULT_STYLE) -> str:
    """Return ANSI-highlighted ``source`` using a lexer picked by filename."""
    formatter = _formatter_for_style(_normalize_style(style))
    try:
        lexer = get_lexer_for_filename(path.name, source)
    except ClassNotFound:
        lexer = TextLexer()
    return pygments_highlight(source, lexer, formatter)


def colorize_lines(lines: list[str], path: Path, style: str = DEFAULT_STYLE) -> list[str]:
    """Colorize lines and keep a one-to-one line count, else return them as-is."""
    if not lines:
        return lines
    rendered_lines = colorize_source("\n".join(lines), path, style).splitlines()
    if len(rendered_lines) != len(lines):
        return lines
    return rendered_lines


__all__ = [
    "DEFAULT_STYLE",
    "decode_source",
    "sanitize_terminal_text",
    "colorize_source",
    "colorize_lines",
]
