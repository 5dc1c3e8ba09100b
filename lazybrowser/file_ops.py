"""Filesystem mutations requested from the browser.

Each operation returns ``None`` on success or a message describing the
failure. Nothing here retries, and no failure is fatal to the session.
"""

from __future__ import annotations

import logging
import os
import shutil
from pathlib import Path

logger = logging.getLogger(__name__)


def _failure(action: str, path: Path, exc: OSError) -> str:
    reason = exc.strerror or str(exc)
    logger.warning("%s failed for %s: %s", action, path, exc)
    return f"{action} failed: {reason}"


def _validate_name(name: str) -> str | None:
    if not name or name in {".", ".."}:
        return "Invalid name."
    if "/" in name or "\0" in name:
        return "Name must not contain '/'."
    return None


def create_entry(parent: Path, name: str) -> str | None:
    """Create an empty file ``name`` inside ``parent``; a trailing ``/`` makes a directory."""
    make_dir = name.endswith("/")
    bare_name = name.rstrip("/")
    problem = _validate_name(bare_name)
    if problem is not None:
        return problem
    target = parent / bare_name
    try:
        if make_dir:
            target.mkdir()
        else:
            target.touch(exist_ok=False)
    except OSError as exc:
        return _failure("Create", target, exc)
    logger.info("Created %s", target)
    return None


def rename_entry(path: Path, new_name: str) -> str | None:
    """Rename ``path`` within its own directory."""
    problem = _validate_name(new_name)
    if problem is not None:
        return problem
    target = path.parent / new_name
    if os.path.lexists(target):
        return f"Rename failed: {new_name} already exists."
    try:
        path.rename(target)
    except OSError as exc:
        return _failure("Rename", path, exc)
    logger.info("Renamed %s -> %s", path, target)
    return None


def move_entry(path: Path, destination: str) -> str | None:
    """Move ``path`` to ``destination``.

    An existing directory destination receives the entry under its own base
    name; any other destination is taken as the full new path. Relative
    destinations resolve against the entry's directory.
    """
    if not destination.strip():
        return "Move failed: empty destination."
    target = Path(destination).expanduser()
    if not target.is_absolute():
        target = path.parent / target
    if target.is_dir():
        target = target / path.name
    if os.path.lexists(target):
        return f"Move failed: {target} already exists."
    try:
        shutil.move(str(path), str(target))
    except OSError as exc:
        return _failure("Move", path, exc)
    logger.info("Moved %s -> %s", path, target)
    return None


def delete_entry(path: Path) -> str | None:
    """Delete ``path``; directories are removed recursively."""
    try:
        if path.is_dir() and not path.is_symlink():
            shutil.rmtree(path)
        else:
            path.unlink()
    except OSError as exc:
        return _failure("Delete", path, exc)
    logger.info("Deleted %s", path)
    return None
