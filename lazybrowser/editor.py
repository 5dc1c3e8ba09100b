"""Editor launch helper for opening the selected file.

Runs the configured editor while the TUI is suspended.
Returns an error message string instead of raising for UI-friendly handling.
"""

from __future__ import annotations

import logging
import os
import shlex
import shutil
import subprocess
from collections.abc import Callable, Mapping
from contextlib import AbstractContextManager
from pathlib import Path

logger = logging.getLogger(__name__)

FALLBACK_EDITORS: tuple[str, ...] = ("nvim", "vim", "vi")


def resolve_editor_command(
    explicit: str | None = None,
    environ: Mapping[str, str] | None = None,
) -> tuple[str, ...]:
    """Pick the editor command: explicit value, ``$VISUAL``, ``$EDITOR``, then PATH lookup.

    Returns an empty tuple when nothing usable is found.
    """
    env = os.environ if environ is None else environ
    for candidate in (explicit, env.get("VISUAL"), env.get("EDITOR")):
        if candidate and candidate.strip():
            cmd = shlex.split(candidate)
            if cmd:
                return tuple(cmd)
    for name in FALLBACK_EDITORS:
        if shutil.which(name):
            return (name,)
    return ()


def launch_editor(
    target: Path,
    command: tuple[str, ...],
    suspend_tui: Callable[[], AbstractContextManager[object]],
) -> str | None:
    """Run ``command target`` with inherited stdio inside ``suspend_tui()``."""
    if not command:
        return "Cannot open: no editor configured (set $EDITOR)."

    logger.info("Launching %s on %s", command[0], target)
    with suspend_tui():
        try:
            result = subprocess.run([*command, str(target)], check=False)
        except OSError as exc:
            logger.warning("Editor launch failed: %s", exc)
            return f"Failed to launch editor: {exc}"
    if result.returncode != 0:
        logger.info("Editor exited with status %d", result.returncode)
    return None
