"""
Tier 3 — SUBSTITUTION: Monoalphabetic random-map cipher
========================================================
Each letter is replaced by the letter it maps to in a fixed bijective
table. The table is a random permutation of the uppercase letters,
extended with the matching lowercase pairs, so case is preserved:

    А→Щ  Б→Ю  В→Я ...   а→щ  б→ю  в→я ...

Decryption applies the inverted table.

Map generation uses random.shuffle (Fisher–Yates), a uniform permutation.
It is NOT a secure source: the cipher falls to letter-frequency analysis
anyway, and the map is meant to be shared and shown to students.

Serialized form: a JSON object, letter → letter, all 2×L entries.
The fingerprint is a short SHA-256 digest of that form, handy for telling
two maps apart without printing them.

Dependencies: cryptography >= 41.0 (fingerprint hashing)
"""

import json
import random
from typing import Dict

from cryptography.hazmat.primitives import hashes

from ..alphabet import Alphabet, RUSSIAN

SubstitutionMap = Dict[str, str]

FINGERPRINT_LENGTH = 16   # hex chars (64 bits)


def generate_map(alphabet: Alphabet = RUSSIAN, rng: random.Random = None) -> SubstitutionMap:
    """
    Fresh random bijection over both cases. Pass `rng` (a random.Random)
    for reproducible maps, e.g. in tests.
    """
    rng = rng or random.Random()
    shuffled = list(alphabet.upper)
    rng.shuffle(shuffled)

    mapping = {}
    for src, dst in zip(alphabet.upper, shuffled):
        mapping[src] = dst
        mapping[src.lower()] = dst.lower()
    return mapping


def encode(text: str, mapping: SubstitutionMap) -> str:
    return "".join(mapping.get(ch, ch) for ch in text)


def invert(mapping: SubstitutionMap) -> SubstitutionMap:
    """
    Image → domain. On a non-bijective map the last entry for a repeated
    image wins; no error is raised.
    """
    inverse = {}
    for src, dst in mapping.items():
        inverse[dst] = src
    return inverse


def decode(text: str, mapping: SubstitutionMap) -> str:
    return encode(text, invert(mapping))


def is_bijective(mapping: SubstitutionMap, alphabet: Alphabet = RUSSIAN) -> bool:
    """True if mapping covers every letter of both cases, case-preserving, one-to-one."""
    if set(mapping) != set(alphabet.upper) | set(alphabet.lower):
        return False
    for src, dst in mapping.items():
        pos = alphabet.position(dst) if isinstance(dst, str) else None
        if pos is None or pos[1] is not alphabet.position(src)[1]:
            return False
    return len(set(mapping.values())) == len(mapping)


def serialize_map(mapping: SubstitutionMap) -> str:
    return json.dumps(mapping, ensure_ascii=False, sort_keys=True)


def deserialize_map(raw: str) -> SubstitutionMap:
    """
    Parse a serialized map. Raises ValueError if `raw` is not a JSON object
    of single-character strings. Coverage is not checked here; see is_bijective.
    """
    data = json.loads(raw)
    if not isinstance(data, dict):
        raise ValueError("Serialized map must be a JSON object.")
    for src, dst in data.items():
        if not isinstance(dst, str) or len(src) != 1 or len(dst) != 1:
            raise ValueError(f"Bad map entry: {src!r} -> {dst!r}")
    return data


def fingerprint(mapping: SubstitutionMap) -> str:
    digest = hashes.Hash(hashes.SHA256())
    digest.update(serialize_map(mapping).encode("utf-8"))
    return digest.finalize().hex()[:FINGERPRINT_LENGTH]


class SubstitutionCipher:
    """
    Substitution cipher around an explicit map value.

    Omit `mapping` to start from a freshly generated one. The map is never
    shared between instances; regenerate() swaps in a new one and returns it.
    """

    def __init__(self, mapping: SubstitutionMap = None, alphabet: Alphabet = RUSSIAN):
        self.alphabet = alphabet
        self.mapping  = dict(mapping) if mapping is not None else generate_map(alphabet)
        self._inverse = invert(self.mapping)

    def regenerate(self, rng: random.Random = None) -> SubstitutionMap:
        self.mapping  = generate_map(self.alphabet, rng)
        self._inverse = invert(self.mapping)
        return self.mapping

    def encrypt(self, plaintext: str) -> str:
        return encode(plaintext, self.mapping)

    def decrypt(self, ciphertext: str) -> str:
        return encode(ciphertext, self._inverse)

    def fingerprint(self) -> str:
        return fingerprint(self.mapping)

    def __repr__(self):
        return f"SubstitutionCipher(fingerprint={self.fingerprint()})"
