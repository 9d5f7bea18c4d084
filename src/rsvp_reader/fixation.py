"""
Fixation point (optimal recognition point) calculation.

A single length-banded table is used for every caller: display, splitting and
any cross-checking. Indices sit roughly 25-35% into the word and saturate at 4
for long words.
"""

from __future__ import annotations

from .models import FixationSplit

# Token length -> 0-based fixation index, for lengths 1 through 13.
FIXATION_TABLE: dict[int, int] = {
    1: 0,
    2: 0,
    3: 1,
    4: 1,
    5: 1,
    6: 2,
    7: 2,
    8: 2,
    9: 3,
    10: 3,
    11: 3,
    12: 4,
    13: 4,
}

MAX_FIXATION_INDEX = 4
LONG_WORD_RATIO = 0.3


def fixation_index(token: str) -> int:
    """Return the character offset the eye should anchor on."""
    length = len(token)
    if length == 0:
        return 0
    if length in FIXATION_TABLE:
        return FIXATION_TABLE[length]
    return min(MAX_FIXATION_INDEX, int(length * LONG_WORD_RATIO))


def split_fixation(token: str) -> FixationSplit:
    """Cut a token into (prefix, focal character, suffix)."""
    if not token:
        return FixationSplit(prefix="", focal=None, suffix="")

    index = fixation_index(token)
    if not 0 <= index < len(token):
        return FixationSplit(prefix=token, focal=None, suffix="")

    return FixationSplit(
        prefix=token[:index],
        focal=token[index],
        suffix=token[index + 1 :],
    )
