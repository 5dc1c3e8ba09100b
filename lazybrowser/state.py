from __future__ import annotations

import enum
from dataclasses import dataclass
from pathlib import Path

from .filtering import SearchMode


class Mode(enum.Enum):
    """Single active interaction context; decides how keys are interpreted."""

    BROWSE = "browse"
    SEARCH = "search"
    RENAME = "rename"
    MOVE = "move"
    CREATE = "create"
    DELETE_CONFIRM = "delete_confirm"


TEXT_ENTRY_MODES = frozenset({Mode.RENAME, Mode.MOVE, Mode.CREATE})


@dataclass
class BrowserSession:
    current_dir: Path
    start_dir: Path
    mode: Mode = Mode.BROWSE
    search_mode: SearchMode = SearchMode.PLAIN
    query: str = ""
    input_buffer: str = ""
    # Entry a rename, move, or delete prompt was opened for.
    target: Path | None = None
    selected_idx: int = 0
    list_start: int = 0
    status_message: str = ""
    status_message_until: float = 0.0
    skip_next_lf: bool = False
    quit_requested: bool = False

    def set_status(self, message: str, now: float, seconds: float) -> None:
        self.status_message = message
        self.status_message_until = now + seconds

    def expire_status(self, now: float) -> None:
        if self.status_message and now >= self.status_message_until:
            self.status_message = ""
            self.status_message_until = 0.0

    def reset_for_directory(self, directory: Path) -> None:
        """Move to ``directory`` with a fresh cursor and no active filter."""
        self.current_dir = directory
        self.selected_idx = 0
        self.list_start = 0
        self.query = ""
