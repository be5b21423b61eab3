"""
Tier 2 — RUNNING KEY: Vigenère polyalphabetic cipher
=====================================================
The rotation changes from letter to letter: the i-th letter of the
message is shifted by the alphabet position of the i-th letter of the
key, and the key repeats when it runs out.

Key scheduling:
  * The key cursor advances only when the message character is a letter,
    so spaces and punctuation never desynchronize the key stream.
  * If the key character under the cursor is not a letter, the message
    character passes through and the cursor does not move. The cursor
    therefore stays on that key character for the rest of the message.
    Key input is normally filtered to letters (see sanitize_key) before
    it gets here.
  * An empty key leaves the text unchanged.

Historical note: Giovan Battista Bellaso, 1553; later credited to
Blaise de Vigenère. Broken by Kasiski (1863) via repeated key periods.
"""

from typing import List, Optional

from ..alphabet import Alphabet, RUSSIAN


def _key_shift(k: str, alphabet: Alphabet) -> Optional[int]:
    pos = alphabet.position(k)
    return None if pos is None else pos[0]


def _walk(text: str, key: str, alphabet: Alphabet, direction: int) -> str:
    length = len(alphabet)
    ki = 0
    result = []
    for ch in text:
        shift = _key_shift(key[ki % len(key)], alphabet)
        if shift is None:
            result.append(ch)
            continue
        pos = alphabet.position(ch)
        if pos is None:
            result.append(ch)
            continue
        ki += 1
        idx, case = pos
        result.append(alphabet.at_index((idx + direction * shift + length) % length, case))
    return "".join(result)


def encode(plaintext: str, key: str, alphabet: Alphabet = RUSSIAN) -> str:
    """Encrypt with a repeating key. Empty key returns plaintext as is."""
    if not key:
        return plaintext
    return _walk(plaintext, key, alphabet, +1)


def decode(ciphertext: str, key: str, alphabet: Alphabet = RUSSIAN) -> str:
    """Decrypt with a repeating key. Empty key returns ciphertext as is."""
    if not key:
        return ciphertext
    return _walk(ciphertext, key, alphabet, -1)


def keystream(text: str, key: str, alphabet: Alphabet = RUSSIAN) -> List[Optional[int]]:
    """
    The shift applied at each position of `text`, or None where the
    character passed through. Same cursor rules as encode/decode.
    """
    if not key:
        return [None] * len(text)
    ki = 0
    stream = []
    for ch in text:
        shift = _key_shift(key[ki % len(key)], alphabet)
        if shift is None or not alphabet.is_letter(ch):
            stream.append(None)
            continue
        ki += 1
        stream.append(shift)
    return stream


def sanitize_key(key: str, alphabet: Alphabet = RUSSIAN) -> str:
    """Drop every non-letter from a user-typed key."""
    return "".join(ch for ch in key if alphabet.is_letter(ch))


class RunningKeyCipher:
    """Vigenère cipher bound to one key string."""

    def __init__(self, key: str, alphabet: Alphabet = RUSSIAN):
        self.key      = key
        self.alphabet = alphabet

    def encrypt(self, plaintext: str) -> str:
        """Encrypt plaintext string. Non-letters pass through."""
        return encode(plaintext, self.key, self.alphabet)

    def decrypt(self, ciphertext: str) -> str:
        """Decrypt ciphertext string."""
        return decode(ciphertext, self.key, self.alphabet)

    def __repr__(self):
        return f"RunningKeyCipher(key={self.key!r})"
