"""Terminal control for the browser session.

Owns the raw-mode and alternate-screen lifecycle. ``raw_mode`` brackets the
whole session and ``suspended`` hands the terminal back for the duration of
an external program, so every exit path restores the user's terminal.
"""

from __future__ import annotations

import contextlib
import logging
import os
import termios
import tty

logger = logging.getLogger(__name__)

_ENTER_TUI = b"\x1b[?1049h\x1b[?25l"
_LEAVE_TUI = b"\x1b[?25h\x1b[?1049l"


class TerminalController:
    """Manage raw/alternate-screen transitions for one tty."""

    def __init__(self, stdin_fd: int, stdout_fd: int) -> None:
        """Capture tty state and bind stdin/stdout file descriptors."""
        self.stdin_fd = stdin_fd
        self.stdout_fd = stdout_fd
        self._saved_tty_state = termios.tcgetattr(stdin_fd)
        self._active = False

    @property
    def active(self) -> bool:
        return self._active

    def enable_tui_mode(self) -> None:
        """Enter raw mode on the alternate screen with the cursor hidden."""
        tty.setraw(self.stdin_fd, termios.TCSAFLUSH)
        os.write(self.stdout_fd, _ENTER_TUI)
        self._active = True

    def disable_tui_mode(self) -> None:
        """Show the cursor, leave the alternate screen, and restore tty state."""
        os.write(self.stdout_fd, _LEAVE_TUI)
        self._active = False
        termios.tcsetattr(self.stdin_fd, termios.TCSAFLUSH, self._saved_tty_state)

    def write(self, data: str) -> None:
        os.write(self.stdout_fd, data.encode("utf-8", errors="replace"))

    @contextlib.contextmanager
    def raw_mode(self):
        """Context manager that brackets code with TUI enter/exit calls."""
        try:
            self.enable_tui_mode()
            yield self
        finally:
            self.disable_tui_mode()

    @contextlib.contextmanager
    def suspended(self):
        """Release the terminal to another program, then take it back."""
        self.disable_tui_mode()
        try:
            yield self
        finally:
            self.enable_tui_mode()
            logger.debug("Terminal reacquired")
