"""Directory listing for the browser pane.

Produces one ``Entry`` per immediate child of a directory. Listing failures
never reach the user as a crash: callers fall back to a known-good directory.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Entry:
    """One filesystem child of the directory being browsed."""

    path: Path
    is_dir: bool

    @property
    def name(self) -> str:
        return self.path.name or str(self.path)

    def display_name(self) -> str:
        """Name shown in the list pane, with a trailing slash for directories."""
        return f"{self.name}/" if self.is_dir else self.name


def _entry_sort_key(entry: Entry) -> tuple[int, str]:
    return (0 if entry.is_dir else 1, entry.name.casefold())


def list_entries(directory: Path) -> list[Entry]:
    """List immediate children of ``directory``, directories first.

    Raises ``OSError`` when the directory cannot be scanned.
    """
    entries: list[Entry] = []
    with os.scandir(directory) as children:
        for child in children:
            try:
                is_dir = child.is_dir()
            except OSError:
                is_dir = False
            entries.append(Entry(path=Path(child.path), is_dir=is_dir))
    entries.sort(key=_entry_sort_key)
    return entries


def list_entries_with_fallback(
    directory: Path,
    fallback: Path,
) -> tuple[list[Entry], Path, str | None]:
    """List ``directory``, falling back to ``fallback`` and then the home directory.

    Returns ``(entries, listed_directory, error_message)``. ``error_message`` is
    set when the requested directory could not be read. When every candidate
    fails the listing is empty and ``listed_directory`` is ``fallback``.
    """
    error: str | None = None
    candidates = [directory]
    for extra in (fallback, Path.home()):
        if extra not in candidates:
            candidates.append(extra)

    for candidate in candidates:
        try:
            entries = list_entries(candidate)
        except OSError as exc:
            logger.warning("Cannot list %s: %s", candidate, exc)
            if error is None:
                error = f"Cannot open {candidate}: {exc.strerror or exc}"
            continue
        return entries, candidate, error

    return [], fallback, error
