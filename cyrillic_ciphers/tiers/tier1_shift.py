"""
Tier 1 — SHIFT: Caesar rotation over the Cyrillic alphabet
===========================================================
Every letter moves a constant number of places along the alphabet,
wrapping around at Я. Case is kept: uppercase letters rotate through the
uppercase sequence, lowercase through the lowercase one.

The shift is normalized to [0, L) before use, so negative shifts and
shifts larger than the alphabet both work:  decode(t, n) == encode(t, -n)
and  encode(t, n) == encode(t, n + L).

Historical note: Julius Caesar, ~50 BC. Breakable by trying all L shifts.
"""

from ..alphabet import Alphabet, RUSSIAN


def normalize_shift(shift: int, length: int) -> int:
    return ((shift % length) + length) % length


def encode(text: str, shift: int, alphabet: Alphabet = RUSSIAN) -> str:
    """Rotate every letter forward by `shift`. Non-letters pass through."""
    length = len(alphabet)
    shift = normalize_shift(shift, length)
    result = []
    for ch in text:
        pos = alphabet.position(ch)
        if pos is None:
            result.append(ch)
            continue
        idx, case = pos
        result.append(alphabet.at_index((idx + shift) % length, case))
    return "".join(result)


def decode(text: str, shift: int, alphabet: Alphabet = RUSSIAN) -> str:
    return encode(text, -shift, alphabet)


class ShiftCipher:
    """Caesar cipher bound to one shift value."""

    def __init__(self, shift: int = 3, alphabet: Alphabet = RUSSIAN):
        self.alphabet = alphabet
        self.shift    = normalize_shift(shift, len(alphabet))

    def encrypt(self, plaintext: str) -> str:
        return encode(plaintext, self.shift, self.alphabet)

    def decrypt(self, ciphertext: str) -> str:
        return decode(ciphertext, self.shift, self.alphabet)

    def __repr__(self):
        return f"ShiftCipher(shift={self.shift})"
