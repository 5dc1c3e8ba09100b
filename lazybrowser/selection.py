"""Cursor arithmetic over the filtered entry view.

Every function takes the current index and the view length and returns a
valid index. Index ``0`` doubles as the "no selection" sentinel for an
empty view.
"""

from __future__ import annotations


def clamp(selected_idx: int, view_length: int) -> int:
    if view_length <= 0:
        return 0
    if selected_idx >= view_length:
        return view_length - 1
    if selected_idx < 0:
        return 0
    return selected_idx


def move_down(selected_idx: int, view_length: int) -> int:
    return clamp(selected_idx + 1, view_length)


def move_up(selected_idx: int, view_length: int) -> int:
    return clamp(selected_idx - 1, view_length)


def jump_to_first(selected_idx: int, view_length: int) -> int:
    return 0


def jump_to_last(selected_idx: int, view_length: int) -> int:
    return max(0, view_length - 1)


def scroll_start(list_start: int, selected_idx: int, visible_rows: int, view_length: int) -> int:
    """Return the first visible row so that ``selected_idx`` stays on screen."""
    visible_rows = max(1, visible_rows)
    if selected_idx < list_start:
        list_start = selected_idx
    elif selected_idx >= list_start + visible_rows:
        list_start = selected_idx - visible_rows + 1
    return max(0, min(list_start, max(0, view_length - visible_rows)))
