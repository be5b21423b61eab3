"""
cyrillic_ciphers — classical ciphers over the Russian alphabet
==============================================================
An educational toolkit. Three tiers, each trivially breakable:

Tiers:
    1  SHIFT        — Caesar rotation
    2  RUNNING KEY  — Vigenère, key advanced only on letters
    3  SUBSTITUTION — random bijective letter map, persisted between sessions

For learning only. Do not use to protect anything.

License: Apache 2.0
"""

__version__ = "1.0.0"

import random

from .alphabet                     import Alphabet, Case, RUSSIAN, RUSSIAN_WITH_YO
from .tiers.tier1_shift            import ShiftCipher
from .tiers.tier2_running_key      import RunningKeyCipher
from .tiers.tier3_substitution     import SubstitutionCipher, SubstitutionMap
from .tiers                        import tier1_shift, tier2_running_key, tier3_substitution
from .store                        import (JsonFileStore, MapKeeper, MemoryStore,
                                           load_substitution_map, save_substitution_map)
from .store                        import reset_substitution_map as _reset_stored_map
from .trainer                      import Algorithm, CipherTrainer, Mode


def shift_encode(text: str, n: int, alphabet: Alphabet = RUSSIAN) -> str:
    return tier1_shift.encode(text, n, alphabet)


def shift_decode(text: str, n: int, alphabet: Alphabet = RUSSIAN) -> str:
    return tier1_shift.decode(text, n, alphabet)


def running_key_encode(text: str, key: str, alphabet: Alphabet = RUSSIAN) -> str:
    return tier2_running_key.encode(text, key, alphabet)


def running_key_decode(text: str, key: str, alphabet: Alphabet = RUSSIAN) -> str:
    return tier2_running_key.decode(text, key, alphabet)


def substitution_encode(text: str, mapping: SubstitutionMap) -> str:
    return tier3_substitution.encode(text, mapping)


def substitution_decode(text: str, mapping: SubstitutionMap) -> str:
    return tier3_substitution.decode(text, mapping)


def generate_substitution_map(alphabet: Alphabet = RUSSIAN,
                              rng: random.Random = None) -> SubstitutionMap:
    return tier3_substitution.generate_map(alphabet, rng)


def reset_substitution_map(store, alphabet: Alphabet = RUSSIAN,
                           rng: random.Random = None) -> SubstitutionMap:
    """Clear the stored map, then generate and persist a new one."""
    return _reset_stored_map(store, alphabet, rng)


__all__ = [
    "Alphabet",
    "Case",
    "RUSSIAN",
    "RUSSIAN_WITH_YO",
    "ShiftCipher",
    "RunningKeyCipher",
    "SubstitutionCipher",
    "SubstitutionMap",
    "MemoryStore",
    "JsonFileStore",
    "MapKeeper",
    "CipherTrainer",
    "Mode",
    "Algorithm",
    "load_substitution_map",
    "save_substitution_map",
    "shift_encode",
    "shift_decode",
    "running_key_encode",
    "running_key_decode",
    "substitution_encode",
    "substitution_decode",
    "generate_substitution_map",
    "reset_substitution_map",
]
