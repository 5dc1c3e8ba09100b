"""Main interactive loop for the browser.

Each tick lists the current directory, filters it, clamps the cursor,
renders, waits briefly for one key, and applies whatever effect the mode
machine requested. Feature logic lives in the injected collaborators.
"""

from __future__ import annotations

import logging
import os
import shutil
import time
from collections.abc import Callable
from dataclasses import dataclass
from functools import partial
from pathlib import Path

from . import file_ops
from .config import BrowserConfig
from .editor import launch_editor
from .entries import Entry, list_entries_with_fallback
from .filtering import filter_entries
from .input import read_key
from .modes import (
    CreateEntry,
    DeleteEntry,
    Effect,
    MoveEntry,
    NavigateInto,
    NavigateToParent,
    NavigateToRoot,
    OpenExternal,
    Quit,
    RenameEntry,
    handle_key,
    selected_entry,
)
from .preview import preview_lines
from .render import RenderContext, build_frame, list_view_rows
from .selection import clamp, scroll_start
from .state import BrowserSession
from .terminal import TerminalController

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionCollaborators:
    """Injected I/O used by ``SessionLoop``.

    Keeping the loop collaborator-driven keeps filesystem, terminal, and editor
    work out of the loop body and makes it testable with fakes.
    """

    read_key: Callable[[int], str]
    list_entries: Callable[[Path, Path], tuple[list[Entry], Path, str | None]]
    terminal_size: Callable[[], os.terminal_size]
    write_frame: Callable[[str], None]
    preview: Callable[[Entry | None], list[str]]
    open_external: Callable[[Path], str | None]
    create_entry: Callable[[Path, str], str | None]
    rename_entry: Callable[[Path, str], str | None]
    move_entry: Callable[[Path, str], str | None]
    delete_entry: Callable[[Path], str | None]
    clock: Callable[[], float] = time.monotonic


def default_collaborators(
    config: BrowserConfig,
    terminal: TerminalController,
) -> SessionCollaborators:
    return SessionCollaborators(
        read_key=partial(read_key, terminal.stdin_fd),
        list_entries=list_entries_with_fallback,
        terminal_size=lambda: shutil.get_terminal_size((80, 24)),
        write_frame=terminal.write,
        preview=partial(
            preview_lines,
            max_bytes=config.preview_max_bytes,
            max_lines=config.preview_max_lines,
            color=config.color,
            style=config.style,
        ),
        open_external=lambda path: launch_editor(path, config.editor_command, terminal.suspended),
        create_entry=file_ops.create_entry,
        rename_entry=file_ops.rename_entry,
        move_entry=file_ops.move_entry,
        delete_entry=file_ops.delete_entry,
    )


def normalize_enter_key(session: BrowserSession, key: str) -> str | None:
    """Fold CR, LF, and CR+LF into one ``ENTER``; ``None`` means drop the key."""
    if session.skip_next_lf and key == "ENTER_LF":
        session.skip_next_lf = False
        return None
    session.skip_next_lf = key == "ENTER_CR"
    if key in {"ENTER_CR", "ENTER_LF"}:
        return "ENTER"
    return key


def _describe_success(effect: Effect) -> str:
    if isinstance(effect, RenameEntry):
        return f"Renamed {effect.path.name} to {effect.new_name}"
    if isinstance(effect, MoveEntry):
        return f"Moved {effect.path.name} to {effect.destination}"
    if isinstance(effect, CreateEntry):
        return f"Created {effect.name}"
    if isinstance(effect, DeleteEntry):
        return f"Deleted {effect.path.name}"
    return ""


def apply_effect(
    session: BrowserSession,
    effect: Effect,
    collaborators: SessionCollaborators,
    status_seconds: float,
) -> bool:
    """Perform ``effect`` against the session; returns ``True`` when the screen needs a full repaint."""
    now = collaborators.clock()
    if isinstance(effect, Quit):
        session.quit_requested = True
    elif isinstance(effect, NavigateInto):
        session.reset_for_directory(effect.path)
    elif isinstance(effect, NavigateToParent):
        parent = session.current_dir.parent
        if parent != session.current_dir:
            session.reset_for_directory(parent)
    elif isinstance(effect, NavigateToRoot):
        session.reset_for_directory(session.start_dir)
    elif isinstance(effect, OpenExternal):
        error = collaborators.open_external(effect.path)
        if error is not None:
            session.set_status(error, now, status_seconds)
        else:
            session.reset_for_directory(effect.path.parent)
        return True
    else:
        if isinstance(effect, RenameEntry):
            error = collaborators.rename_entry(effect.path, effect.new_name)
        elif isinstance(effect, MoveEntry):
            error = collaborators.move_entry(effect.path, effect.destination)
        elif isinstance(effect, CreateEntry):
            error = collaborators.create_entry(effect.parent, effect.name)
        else:
            error = collaborators.delete_entry(effect.path)
        session.set_status(error or _describe_success(effect), now, status_seconds)
    return False


class SessionLoop:
    """One browsing session from startup to quit."""

    def __init__(
        self,
        session: BrowserSession,
        config: BrowserConfig,
        collaborators: SessionCollaborators,
    ) -> None:
        self.session = session
        self.config = config
        self.ops = collaborators
        self._last_frame: str | None = None

    def refresh_view(self) -> tuple[list[Entry], int]:
        """List and filter the current directory; returns ``(view, total_entries)``."""
        session = self.session
        entries, listed_dir, error = self.ops.list_entries(session.current_dir, session.start_dir)
        if listed_dir != session.current_dir:
            session.reset_for_directory(listed_dir)
        if error is not None:
            session.set_status(error, self.ops.clock(), self.config.status_seconds)
        view = filter_entries(entries, session.query, session.search_mode)
        session.selected_idx = clamp(session.selected_idx, len(view))
        return view, len(entries)

    def render(self, view: list[Entry], total_entries: int) -> None:
        session = self.session
        term = self.ops.terminal_size()
        session.list_start = scroll_start(
            session.list_start,
            session.selected_idx,
            list_view_rows(term.lines),
            len(view),
        )
        frame = build_frame(
            RenderContext(
                width=term.columns,
                height=term.lines,
                current_dir=session.current_dir,
                mode=session.mode,
                search_mode=session.search_mode,
                query=session.query,
                input_buffer=session.input_buffer,
                entries=view,
                selected_idx=session.selected_idx,
                list_start=session.list_start,
                preview=self.ops.preview(selected_entry(session, view)),
                total_entries=total_entries,
                status_message=session.status_message,
                color=self.config.color,
                target=session.target,
            )
        )
        if frame != self._last_frame:
            self.ops.write_frame(frame)
            self._last_frame = frame

    def tick(self) -> None:
        session = self.session
        session.expire_status(self.ops.clock())
        view, total_entries = self.refresh_view()
        self.render(view, total_entries)

        key = self.ops.read_key(self.config.poll_timeout_ms)
        if key == "":
            return
        key = normalize_enter_key(session, key)
        if key is None:
            return
        effect = handle_key(session, key, view)
        if effect is None:
            return
        logger.debug("Applying %r", effect)
        if apply_effect(session, effect, self.ops, self.config.status_seconds):
            self._last_frame = None

    def run(self) -> None:
        while not self.session.quit_requested:
            try:
                self.tick()
            except KeyboardInterrupt:
                # Quitting is only via the quit key.
                continue


def run_session(config: BrowserConfig, stdin_fd: int, stdout_fd: int) -> None:
    """Take over the terminal and browse from ``config.start_dir`` until quit.

    Terminal setup failures propagate; the terminal is restored on any exit.
    """
    terminal = TerminalController(stdin_fd, stdout_fd)
    session = BrowserSession(current_dir=config.start_dir, start_dir=config.start_dir)
    loop = SessionLoop(session, config, default_collaborators(config, terminal))
    logger.info("Session started in %s", config.start_dir)
    with terminal.raw_mode():
        loop.run()
    logger.info("Session ended in %s", session.current_dir)
