# Area: Rounds
"""
lexigame.letters — Word-validity checks against a letter pool
=============================================================

A word is formable from a pool when every character it needs is present
in the pool at least as many times as the word uses it. Plain set
membership is not enough: "apple" needs two p's.

    >>> is_formable("apple", ["a", "p", "p", "l", "e"])
    True
    >>> is_formable("apple", ["a", "p", "l", "e"])
    False
"""

from __future__ import annotations

from collections import Counter
from typing import Iterable, List


def is_formable(word: str, letters: Iterable[str]) -> bool:
    """
    Check whether ``word`` can be spelled from the ``letters`` multiset.

    Both sides are case-folded. Each pool entry is one tile; a multi-
    character entry counts once per character it contains.

    Parameters
    ----------
    word : str
        Candidate word.
    letters : Iterable[str]
        Available letters, e.g. ``["c", "a", "t", "s"]``.

    Returns
    -------
    bool
        True if every character of ``word`` has a remaining tile.
    """
    candidate = word.strip().casefold()
    if not candidate:
        return False

    remaining = Counter("".join(letters).casefold())
    for char in candidate:
        if remaining[char] <= 0:
            return False
        remaining[char] -= 1
    return True


def normalize_words(words: Iterable[str]) -> List[str]:
    """Trim, case-fold, and de-duplicate words keeping first-seen order."""
    seen = set()
    result: List[str] = []
    for word in words:
        if not isinstance(word, str):
            continue
        normalized = word.strip().casefold()
        if normalized and normalized not in seen:
            seen.add(normalized)
            result.append(normalized)
    return result
