"""Preview text for the selected entry.

Reads a bounded prefix of regular files, neutralizes terminal control bytes,
and highlights with Pygments. Directories preview as empty.
"""

from __future__ import annotations

import re
from functools import lru_cache
from pathlib import Path

from pygments import highlight
from pygments.formatters import Terminal256Formatter
from pygments.lexers import TextLexer, get_lexer_for_filename
from pygments.util import ClassNotFound

from .entries import Entry

DEFAULT_PREVIEW_MAX_BYTES = 64 * 1024
DEFAULT_PREVIEW_MAX_LINES = 500
DEFAULT_STYLE = "monokai"

_CONTROL_RE = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f-\x9f]")


def sanitize_terminal_text(source: str) -> str:
    """Escape terminal control bytes to avoid side effects (bell, cursor moves, etc.)."""
    return _CONTROL_RE.sub(lambda match: f"\\x{ord(match.group(0)):02x}", source)


@lru_cache(maxsize=8)
def _formatter_for_style(style: str) -> Terminal256Formatter:
    try:
        return Terminal256Formatter(style=style)
    except ClassNotFound:
        return Terminal256Formatter(style=DEFAULT_STYLE)


def highlight_text(text: str, filename: str, style: str = DEFAULT_STYLE) -> str:
    try:
        lexer = get_lexer_for_filename(filename, stripnl=False)
    except ClassNotFound:
        lexer = TextLexer(stripnl=False)
    return highlight(text, lexer, _formatter_for_style(style))


def read_preview_text(path: Path, max_bytes: int, max_lines: int) -> tuple[str, bool]:
    """Read the head of ``path`` for display.

    Returns ``(text, is_source)``; ``is_source`` is ``False`` when ``text`` is a
    placeholder message (binary or unreadable file) rather than file content.
    """
    try:
        with path.open("rb") as handle:
            chunk = handle.read(max_bytes)
    except OSError as exc:
        return f"[could not read file: {exc.strerror or exc}]", False
    if b"\0" in chunk:
        return "[binary file]", False
    text = chunk.decode("utf-8", errors="replace").replace("\r\n", "\n")
    lines = text.split("\n")[:max_lines]
    return sanitize_terminal_text("\n".join(lines)), True


def preview_lines(
    entry: Entry | None,
    *,
    max_bytes: int = DEFAULT_PREVIEW_MAX_BYTES,
    max_lines: int = DEFAULT_PREVIEW_MAX_LINES,
    color: bool = True,
    style: str = DEFAULT_STYLE,
) -> list[str]:
    """Return display lines previewing ``entry``; empty for directories and no selection."""
    if entry is None or entry.is_dir or not entry.path.is_file():
        return []
    text, is_source = read_preview_text(entry.path, max_bytes, max_lines)
    if color and is_source and text:
        text = highlight_text(text, entry.name, style)
    return text.rstrip("\n").split("\n")
