"""Modal key handling for the browser session.

``handle_key`` routes one key token through the active ``Mode``. It only
mutates the session's mode, query, input buffer, cursor, and prompt target,
and returns at most one effect describing navigation or file work for the
loop to perform. Rename, move, and delete act on the path captured when
their prompt opened, not on whatever row is selected when it is confirmed.
No filesystem or terminal I/O happens here.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from .entries import Entry
from .filtering import SearchMode
from .input.key_registry import KeyComboBinding, KeyComboRegistry
from .selection import clamp, jump_to_first, jump_to_last, move_down, move_up
from .state import TEXT_ENTRY_MODES, BrowserSession, Mode

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NavigateInto:
    path: Path


@dataclass(frozen=True)
class NavigateToParent:
    pass


@dataclass(frozen=True)
class NavigateToRoot:
    pass


@dataclass(frozen=True)
class OpenExternal:
    path: Path


@dataclass(frozen=True)
class RenameEntry:
    path: Path
    new_name: str


@dataclass(frozen=True)
class MoveEntry:
    path: Path
    destination: str


@dataclass(frozen=True)
class CreateEntry:
    parent: Path
    name: str


@dataclass(frozen=True)
class DeleteEntry:
    path: Path


@dataclass(frozen=True)
class Quit:
    pass


Effect = (
    NavigateInto
    | NavigateToParent
    | NavigateToRoot
    | OpenExternal
    | RenameEntry
    | MoveEntry
    | CreateEntry
    | DeleteEntry
    | Quit
)


def is_printable_key(key: str) -> bool:
    """Return whether ``key`` is a single printable character token."""
    return len(key) == 1 and key.isprintable()


def selected_entry(session: BrowserSession, view: Sequence[Entry]) -> Entry | None:
    if not view:
        return None
    return view[clamp(session.selected_idx, len(view))]


def _browse_bindings(session: BrowserSession, view: Sequence[Entry]) -> KeyComboRegistry[Effect]:
    view_length = len(view)

    def move_cursor(step) -> None:
        session.selected_idx = step(session.selected_idx, view_length)

    def enter_search(search_mode: SearchMode) -> None:
        session.mode = Mode.SEARCH
        session.search_mode = search_mode
        if session.query:
            session.selected_idx = 0

    def enter_prompt(mode: Mode) -> None:
        entry = selected_entry(session, view)
        if entry is None:
            return
        session.mode = mode
        session.input_buffer = ""
        session.target = entry.path

    def enter_create() -> None:
        session.mode = Mode.CREATE
        session.input_buffer = ""
        session.target = None

    def open_selected() -> Effect | None:
        entry = selected_entry(session, view)
        if entry is None:
            return None
        if entry.is_dir:
            return NavigateInto(entry.path)
        return OpenExternal(entry.path)

    def clear_query() -> None:
        if session.query:
            session.query = ""
            session.selected_idx = 0

    return KeyComboRegistry[Effect]().register_bindings(
        KeyComboBinding(("q",), Quit),
        KeyComboBinding(("j", "DOWN"), lambda: move_cursor(move_down)),
        KeyComboBinding(("k", "UP"), lambda: move_cursor(move_up)),
        KeyComboBinding(("J",), lambda: move_cursor(jump_to_last)),
        KeyComboBinding(("K",), lambda: move_cursor(jump_to_first)),
        KeyComboBinding(("l", "ENTER", "RIGHT"), open_selected),
        KeyComboBinding(("h", "LEFT"), NavigateToParent),
        KeyComboBinding(("H",), NavigateToRoot),
        KeyComboBinding(("f",), lambda: enter_search(SearchMode.FUZZY)),
        KeyComboBinding(("s", "/"), lambda: enter_search(SearchMode.PLAIN)),
        KeyComboBinding(("r",), lambda: enter_prompt(Mode.RENAME)),
        KeyComboBinding(("m",), lambda: enter_prompt(Mode.MOVE)),
        KeyComboBinding(("a",), enter_create),
        KeyComboBinding(("d",), lambda: enter_prompt(Mode.DELETE_CONFIRM)),
        KeyComboBinding(("ESC",), clear_query),
    )


def _handle_browse_key(session: BrowserSession, key: str, view: Sequence[Entry]) -> Effect | None:
    return _browse_bindings(session, view).dispatch(key)


def _handle_search_key(session: BrowserSession, key: str) -> None:
    if key in {"ESC", "ENTER"}:
        # The query stays active as a filter after leaving text entry.
        session.mode = Mode.BROWSE
    elif key == "BACKSPACE":
        session.query = session.query[:-1]
        session.selected_idx = 0
    elif is_printable_key(key):
        session.query += key
        session.selected_idx = 0


def _return_to_browse(session: BrowserSession) -> None:
    session.mode = Mode.BROWSE
    session.input_buffer = ""
    session.target = None


def _text_entry_effect(session: BrowserSession) -> Effect | None:
    text = session.input_buffer
    if not text:
        return None
    if session.mode is Mode.CREATE:
        return CreateEntry(session.current_dir, text)
    if session.target is None:
        return None
    if session.mode is Mode.RENAME:
        return RenameEntry(session.target, text)
    return MoveEntry(session.target, text)


def _handle_text_entry_key(session: BrowserSession, key: str) -> Effect | None:
    if key == "ESC":
        _return_to_browse(session)
    elif key == "ENTER":
        effect = _text_entry_effect(session)
        _return_to_browse(session)
        return effect
    elif key == "BACKSPACE":
        session.input_buffer = session.input_buffer[:-1]
    elif is_printable_key(key):
        session.input_buffer += key
    return None


def _handle_delete_confirm_key(session: BrowserSession, key: str) -> Effect | None:
    if key == "y":
        target = session.target
        _return_to_browse(session)
        return DeleteEntry(target) if target is not None else None
    if key in {"n", "ESC"}:
        _return_to_browse(session)
    return None


def handle_key(session: BrowserSession, key: str, view: Sequence[Entry]) -> Effect | None:
    """Apply one key token to ``session`` given the current filtered ``view``.

    Keys with no meaning in the active mode leave the session unchanged and
    return ``None``.
    """
    mode = session.mode
    if mode is Mode.BROWSE:
        effect = _handle_browse_key(session, key, view)
    elif mode is Mode.SEARCH:
        _handle_search_key(session, key)
        effect = None
    elif mode in TEXT_ENTRY_MODES:
        effect = _handle_text_entry_key(session, key)
    else:
        effect = _handle_delete_confirm_key(session, key)

    if session.mode is not mode:
        logger.debug("Mode %s -> %s on %r", mode.value, session.mode.value, key)
    return effect
