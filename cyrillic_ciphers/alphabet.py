"""
Alphabet — the letters every tier rotates through
==================================================
An ordered uppercase sequence plus its positionally case-paired lowercase
sequence. Index i of one case is the same letter as index i of the other.

Any character found in neither sequence is "non-alphabetic" and is passed
through unchanged by every cipher: digits, punctuation, whitespace, Latin
letters, and (for the default alphabet) Ё/ё.

Lookups go through a prebuilt dict, so position() is O(1).
"""

from enum import Enum
from typing import Dict, Optional, Tuple


class Case(Enum):
    UPPER = "upper"
    LOWER = "lower"


class Alphabet:
    """Immutable pair of case-aligned letter sequences."""

    __slots__ = ("_upper", "_lower", "_index")

    def __init__(self, upper: str, lower: str = None):
        if lower is None:
            lower = upper.lower()
        if len(upper) != len(lower):
            raise ValueError("Upper and lower sequences must have the same length.")
        if len(set(upper)) != len(upper) or len(set(lower)) != len(lower):
            raise ValueError("Alphabet letters must be distinct.")
        if set(upper) & set(lower):
            raise ValueError("Upper and lower sequences must not overlap.")

        index: Dict[str, Tuple[int, Case]] = {}
        for i, ch in enumerate(upper):
            index[ch] = (i, Case.UPPER)
        for i, ch in enumerate(lower):
            index[ch] = (i, Case.LOWER)

        object.__setattr__(self, "_upper", upper)
        object.__setattr__(self, "_lower", lower)
        object.__setattr__(self, "_index", index)

    def __setattr__(self, name, value):
        raise AttributeError("Alphabet is immutable.")

    def __len__(self) -> int:
        return len(self._upper)

    def __contains__(self, ch: str) -> bool:
        return ch in self._index

    def __repr__(self):
        return f"Alphabet({self._upper!r})"

    @property
    def upper(self) -> str:
        return self._upper

    @property
    def lower(self) -> str:
        return self._lower

    def letters(self, case: Case) -> str:
        return self._upper if case is Case.UPPER else self._lower

    def position(self, ch: str) -> Optional[Tuple[int, Case]]:
        """Return (index, case) for a letter, or None if ch is non-alphabetic."""
        return self._index.get(ch)

    def at_index(self, index: int, case: Case) -> str:
        """Letter at index (taken modulo the alphabet length) in one case."""
        return self.letters(case)[index % len(self._upper)]

    def is_letter(self, ch: str) -> bool:
        return ch in self._index


# 32 letters: the modern Russian alphabet without Ё.
RUSSIAN = Alphabet("АБВГДЕЖЗИЙКЛМНОПРСТУФХЦЧШЩЪЫЬЭЮЯ")

# 33 letters, Ё after Е.
RUSSIAN_WITH_YO = Alphabet("АБВГДЕЁЖЗИЙКЛМНОПРСТУФХЦЧШЩЪЫЬЭЮЯ")
