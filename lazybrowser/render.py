"""Frame composition for the browser screen.

Builds one full ANSI frame string from a ``RenderContext``: query row and
entry list on the left, preview on the right, then a mode/prompt row and a
reverse-video status row. Nothing here reads the filesystem or touches state.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from .ansi import clip_ansi_line, pad_ansi_line
from .entries import Entry
from .filtering import SearchMode
from .state import Mode

LEFT_PANE_PERCENT = 60
MIN_LEFT_WIDTH = 12
# Query row on top, prompt row and status row at the bottom.
CHROME_ROWS = 3

_RESET = "\033[0m"
_DIM = "\033[2;38;5;250m"
_QUERY = "\033[1;38;5;81m"
_DIR = "\033[1;34m"
_PROMPT = "\033[1;38;5;229m"
_WARN = "\033[1;38;5;203m"


@dataclass
class RenderContext:
    width: int
    height: int
    current_dir: Path
    mode: Mode
    search_mode: SearchMode
    query: str
    input_buffer: str
    entries: list[Entry]
    selected_idx: int
    list_start: int
    preview: list[str] = field(default_factory=list)
    total_entries: int = 0
    status_message: str = ""
    color: bool = True
    target: Path | None = None


def list_view_rows(height: int) -> int:
    """Number of entry rows visible for a terminal ``height``."""
    return max(1, height - CHROME_ROWS)


def left_pane_width(width: int) -> int:
    left = (width * LEFT_PANE_PERCENT) // 100
    return max(1, min(width - 2, max(MIN_LEFT_WIDTH, left)))


def selected_with_ansi(text: str) -> str:
    """Apply selection styling without discarding existing ANSI colors."""
    if not text:
        return text
    return "\033[7m" + text.replace(_RESET, "\033[0;7m") + _RESET


def _style(text: str, sgr: str, color: bool) -> str:
    return f"{sgr}{text}{_RESET}" if color else text


def format_query_row(context: RenderContext) -> str:
    prefix = "f>" if context.search_mode is SearchMode.FUZZY else "s>"
    if context.mode is Mode.SEARCH:
        return _style(f"{prefix} {context.query}_", _QUERY, context.color)
    if context.query:
        return _style(f"{prefix} {context.query}", _QUERY, context.color)
    return _style("/ or s search, f fuzzy", _DIM, context.color)


def format_entry_row(entry: Entry, color: bool) -> str:
    name = entry.display_name()
    if entry.is_dir:
        return _style(name, _DIR, color)
    return name


def format_prompt_row(context: RenderContext) -> str:
    mode = context.mode
    target = context.target.name if context.target is not None else ""
    if mode is Mode.RENAME:
        return _style(f"Rename {target} to: {context.input_buffer}_", _PROMPT, context.color)
    if mode is Mode.MOVE:
        return _style(f"Move {target} to: {context.input_buffer}_", _PROMPT, context.color)
    if mode is Mode.CREATE:
        return _style(f"New file (end with / for dir): {context.input_buffer}_", _PROMPT, context.color)
    if mode is Mode.DELETE_CONFIRM:
        return _style(f"Delete {target}? (y/n)", _WARN, context.color)
    if mode is Mode.SEARCH:
        return _style("SEARCH  type to filter, Enter/Esc keep filter", _DIM, context.color)
    return _style(
        "j/k move  h/l out/in  H start  r rename  m move  a new  d delete  q quit",
        _DIM,
        context.color,
    )


def build_status_line(left_text: str, width: int, right_text: str = "") -> str:
    usable = max(1, width - 1)
    if usable <= len(right_text):
        return right_text[-usable:]
    left_limit = max(0, usable - len(right_text) - 1)
    left = left_text[:left_limit]
    gap = " " * (usable - len(left) - len(right_text))
    return f"{left}{gap}{right_text}"


def build_frame(context: RenderContext) -> str:
    """Compose a full-screen frame for ``context`` as one ANSI string."""
    width = max(3, context.width)
    rows = list_view_rows(context.height)
    left_width = left_pane_width(width)
    right_width = max(1, width - left_width - 1)
    entries = context.entries

    left_rows = [format_query_row(context)]
    for entry_idx in range(context.list_start, context.list_start + rows):
        if entry_idx >= len(entries):
            left_rows.append("")
            continue
        text = clip_ansi_line(" " + format_entry_row(entries[entry_idx], context.color), left_width)
        if entry_idx == context.selected_idx:
            text = selected_with_ansi(text)
        left_rows.append(text)
    if not entries:
        left_rows[1] = _style(" (no matches)" if context.query else " (empty)", _DIM, context.color)

    divider = _style("│", "\033[2m", context.color)
    out: list[str] = ["\033[H\033[J"]
    for row, left_text in enumerate(left_rows):
        out.append(pad_ansi_line(left_text, left_width))
        out.append(divider)
        if row < len(context.preview):
            preview_text = clip_ansi_line(context.preview[row], right_width)
            out.append(preview_text)
            if "\033" in preview_text:
                out.append(_RESET)
        out.append("\r\n")

    out.append(clip_ansi_line(format_prompt_row(context), width - 1))
    out.append("\r\n")

    shown = f"{len(entries)}/{context.total_entries}"
    status = build_status_line(f"{context.current_dir}  [{shown}]", width, context.status_message)
    out.append(f"\033[7m{status}{_RESET}")
    return "".join(out)
