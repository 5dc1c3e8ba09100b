"""Runtime configuration assembled once at startup.

Values come from command-line options and the environment only; nothing is
written back to disk.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from platformdirs import user_log_dir

from .editor import resolve_editor_command
from .preview import DEFAULT_PREVIEW_MAX_BYTES, DEFAULT_PREVIEW_MAX_LINES, DEFAULT_STYLE

APP_NAME = "lazybrowser"
LOG_FILENAME = "lazybrowser.log"
LOG_LEVEL_ENV = "LAZYBROWSER_LOG_LEVEL"
DEFAULT_LOG_LEVEL = "WARNING"
POLL_TIMEOUT_MS = 100
STATUS_SECONDS = 3.0


@dataclass(frozen=True)
class BrowserConfig:
    start_dir: Path
    editor_command: tuple[str, ...]
    color: bool = True
    style: str = DEFAULT_STYLE
    log_level: int = logging.WARNING
    log_file: Path | None = None
    poll_timeout_ms: int = POLL_TIMEOUT_MS
    preview_max_bytes: int = DEFAULT_PREVIEW_MAX_BYTES
    preview_max_lines: int = DEFAULT_PREVIEW_MAX_LINES
    status_seconds: float = STATUS_SECONDS


def default_log_file() -> Path:
    return Path(user_log_dir(APP_NAME, appauthor=False)) / LOG_FILENAME


def parse_log_level(value: str | None) -> int:
    """Map a level name such as ``"info"`` to its ``logging`` constant.

    Unknown or empty names fall back to ``WARNING``.
    """
    if not value:
        return logging.WARNING
    level = logging.getLevelName(value.strip().upper())
    return level if isinstance(level, int) else logging.WARNING


def resolve_start_dir(path: Path) -> Path:
    """Return the directory to browse first; a file starts in its parent."""
    resolved = path.expanduser().resolve()
    if resolved.is_dir():
        return resolved
    return resolved.parent


def build_config(
    path: Path,
    *,
    editor: str | None = None,
    no_color: bool = False,
    style: str = DEFAULT_STYLE,
    log_level: str | None = None,
    log_file: Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> BrowserConfig:
    env = os.environ if environ is None else environ
    return BrowserConfig(
        start_dir=resolve_start_dir(path),
        editor_command=resolve_editor_command(editor, env),
        color=not no_color and "NO_COLOR" not in env,
        style=style,
        log_level=parse_log_level(log_level or env.get(LOG_LEVEL_ENV, DEFAULT_LOG_LEVEL)),
        log_file=log_file if log_file is not None else default_log_file(),
    )
