"""
CipherTrainer — pick an algorithm and a direction, get text back
================================================================
Thin orchestration over the three tiers, mirroring the trainer form:
mode selector, algorithm selector, shift, key, substitution map with
"generate" and "reset", a result and a "reverse" preview that decrypts
the result (or the input, if there is no result yet).
"""

import logging
from enum import Enum

from .alphabet import Alphabet, RUSSIAN
from .store import MapKeeper, MemoryStore
from .tiers import tier1_shift, tier2_running_key, tier3_substitution
from .tiers.tier2_running_key import sanitize_key

logger = logging.getLogger(__name__)

DEFAULT_SHIFT = 3
DEFAULT_KEY   = "КЛЮЧ"


class Mode(Enum):
    ENCRYPT = "encrypt"
    DECRYPT = "decrypt"


class Algorithm(Enum):
    CAESAR       = "caesar"
    VIGENERE     = "vigenere"
    SUBSTITUTION = "substitution"


class CipherTrainer:
    """Holds the form state and dispatches to the right cipher."""

    def __init__(self, store=None, mode: Mode = Mode.ENCRYPT,
                 algorithm: Algorithm = Algorithm.CAESAR,
                 shift: int = DEFAULT_SHIFT, key: str = DEFAULT_KEY,
                 alphabet: Alphabet = RUSSIAN):
        self.alphabet  = alphabet
        self.mode      = Mode(mode)
        self.algorithm = Algorithm(algorithm)
        self.shift     = shift
        self._key      = sanitize_key(key, alphabet)
        self.store     = store if store is not None else MemoryStore()
        self.output    = ""
        self._keeper   = None

    @property
    def keeper(self) -> MapKeeper:
        """The map is loaded (or generated) on first use, not at construction."""
        if self._keeper is None:
            self._keeper = MapKeeper(self.store, self.alphabet)
        return self._keeper

    @property
    def key(self) -> str:
        return self._key

    @key.setter
    def key(self, value: str):
        self._key = sanitize_key(value, self.alphabet)

    @property
    def substitution_map(self):
        return self.keeper.current

    def _run(self, text: str, mode: Mode) -> str:
        encrypt = mode is Mode.ENCRYPT
        if self.algorithm is Algorithm.CAESAR:
            fn = tier1_shift.encode if encrypt else tier1_shift.decode
            return fn(text, self.shift, self.alphabet)
        if self.algorithm is Algorithm.VIGENERE:
            fn = tier2_running_key.encode if encrypt else tier2_running_key.decode
            return fn(text, self._key, self.alphabet)
        fn = tier3_substitution.encode if encrypt else tier3_substitution.decode
        return fn(text, self.keeper.current)

    def compute(self, text: str) -> str:
        self.output = self._run(text, self.mode)
        logger.debug(f"{self.algorithm.value}/{self.mode.value}: {len(text)} chars")
        return self.output

    def reverse(self, text: str = "") -> str:
        """Decrypt the last output, or `text` if nothing has been computed."""
        source = self.output or text
        if not source:
            return ""
        return self._run(source, Mode.DECRYPT)

    def clear(self) -> None:
        self.output = ""

    def generate_map(self):
        return self.keeper.regenerate()

    def reset_map(self):
        return self.keeper.reset()
