"""Entry filtering for the browser list.

Plain mode keeps names containing the query; fuzzy mode keeps names that
contain the query as a subsequence and orders them by match score.
All functions here are pure so the same inputs always give the same view.
"""

from __future__ import annotations

import enum
from collections.abc import Sequence

from .entries import Entry

_WORD_BOUNDARY_CHARS = "/_- ."
_RUN_BONUS = 20
_RUN_BONUS_CAP = 16
_GAP_PENALTY_CAP = 40
_BOUNDARY_BONUS = 35
# Per matched character inside the extension.
_EXTENSION_PENALTY = 15
_WHOLE_STEM_BONUS = 50


class SearchMode(enum.Enum):
    PLAIN = "plain"
    FUZZY = "fuzzy"


def substring_match(query: str, name: str) -> bool:
    """Return whether ``name`` contains ``query``, ignoring case."""
    return query.lower() in name.lower()


def stem_length(name: str) -> int:
    """Length of ``name`` without its extension; dotfiles have no extension."""
    dot = name.rfind(".")
    return dot if dot > 0 else len(name)


def _match_positions(query: str, name: str) -> list[int] | None:
    positions: list[int] = []
    start = 0
    for needle in query:
        idx = name.find(needle, start)
        if idx < 0:
            return None
        positions.append(idx)
        start = idx + 1
    return positions


def fuzzy_score(query: str, name: str) -> int | None:
    """Score ``query`` as a case-insensitive subsequence of ``name``.

    Returns ``None`` when some query character cannot be matched in order.
    Consecutive runs and matches at word starts score higher. Gaps, matches
    inside the extension, and long names score lower; a query spelling the
    whole stem (``main`` for ``main.py``) gets a bonus.
    """
    if not query:
        return 0
    query_lower = query.lower()
    name_lower = name.lower()
    positions = _match_positions(query_lower, name_lower)
    if positions is None:
        return None

    stem_end = stem_length(name_lower)
    score = 0
    run = 0
    prev_idx = -1
    for idx in positions:
        if idx == prev_idx + 1:
            run += 1
            score += _RUN_BONUS + min(_RUN_BONUS_CAP, run * 4)
        else:
            run = 0
            score -= min(_GAP_PENALTY_CAP, (idx - prev_idx - 1) * 2)
        if idx == 0 or name_lower[idx - 1] in _WORD_BOUNDARY_CHARS:
            score += _BOUNDARY_BONUS
        if idx >= stem_end:
            score -= _EXTENSION_PENALTY
        prev_idx = idx

    if query_lower == name_lower[:stem_end]:
        score += _WHOLE_STEM_BONUS
    return score - len(name_lower) // 5


def filter_entries(entries: Sequence[Entry], query: str, mode: SearchMode) -> list[Entry]:
    """Return the filtered view of ``entries`` for ``query`` in ``mode``.

    An empty query returns the entries in their original order. Fuzzy results
    are sorted by descending score; ``sorted`` is stable so equal scores keep
    input order.
    """
    if not query:
        return list(entries)

    if mode is SearchMode.PLAIN:
        return [entry for entry in entries if substring_match(query, entry.name)]

    scored: list[tuple[int, Entry]] = []
    for entry in entries:
        score = fuzzy_score(query, entry.name)
        if score is not None:
            scored.append((score, entry))
    scored = sorted(scored, key=lambda item: -item[0])
    return [entry for _, entry in scored]
