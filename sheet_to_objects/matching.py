"""
Three-tier name matching shared by header lookup and enum conversion.

A key is compared against candidate names with progressively looser
rules: exact, case-insensitive, then case-insensitive with all whitespace
removed.  The first tier that matches anything wins, and within a tier
the first candidate in order wins.
"""

import re
from enum import IntEnum
from typing import Iterable, Optional

_WHITESPACE = re.compile(r"\s+")


class MatchTier(IntEnum):
    EXACT = 1
    CASE_INSENSITIVE = 2
    WHITESPACE_INSENSITIVE = 3


def _fold(text: str) -> str:
    return text.casefold()


def _squash(text: str) -> str:
    return _WHITESPACE.sub("", text).casefold()


_TIERS = (
    (MatchTier.EXACT, lambda s: s),
    (MatchTier.CASE_INSENSITIVE, _fold),
    (MatchTier.WHITESPACE_INSENSITIVE, _squash),
)


def find_match(candidates: Iterable[tuple[int, str]],
               key: str) -> Optional[tuple[int, MatchTier]]:
    """Find *key* among ``(index, name)`` candidates.

    Candidates are tried in the order given, so callers pass them sorted by
    index to get lowest-index tie breaking.  Returns ``(index, tier)`` or
    ``None``.
    """
    candidates = list(candidates)
    for tier, normalise in _TIERS:
        wanted = normalise(key)
        for index, name in candidates:
            if normalise(name) == wanted:
                return index, tier
    return None
