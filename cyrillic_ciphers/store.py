"""
Substitution-map persistence
============================
The ciphers themselves are pure. The only state that outlives a call is
the substitution map, kept in a small key-value store under MAP_KEY.

A store is anything with:
    load(name)  -> Optional[str]
    save(name, value)
    delete(name)

Two are provided: MemoryStore (tests, throwaway sessions) and
JsonFileStore (one JSON object on disk, written atomically).

Lifecycle:
    load_substitution_map  — stored map if present and well-formed,
                             otherwise generate + persist a new one
    reset_substitution_map — delete, generate, persist
    MapKeeper              — holds the current map and serializes
                             read-modify-persist across threads
"""

import json
import logging
import os
import random
import tempfile
import threading
from pathlib import Path
from typing import Dict, Optional

from .alphabet import Alphabet, RUSSIAN
from .tiers.tier3_substitution import (
    SubstitutionMap,
    deserialize_map,
    fingerprint,
    generate_map,
    is_bijective,
    serialize_map,
)

logger = logging.getLogger(__name__)

MAP_KEY            = "cipher_sub_map"
DEFAULT_STORE_PATH = Path.home() / ".cyrillic_ciphers.json"


class MemoryStore:
    """Dict-backed store. Nothing survives the process."""

    def __init__(self, initial: Dict[str, str] = None):
        self._data = dict(initial or {})

    def load(self, name: str) -> Optional[str]:
        return self._data.get(name)

    def save(self, name: str, value: str) -> None:
        self._data[name] = value

    def delete(self, name: str) -> None:
        self._data.pop(name, None)


class JsonFileStore:
    """
    All names live in one JSON object at `path`.

    A missing file is an empty store. A file that cannot be read or parsed
    is logged and also treated as empty; the next save rewrites it.
    """

    def __init__(self, path=DEFAULT_STORE_PATH):
        self.path = Path(path)

    def _read(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (json.JSONDecodeError, UnicodeDecodeError, RecursionError, OSError) as e:
            logger.warning(f"Store {self.path} unreadable ({e}); treating as empty")
            return {}
        if not isinstance(data, dict):
            logger.warning(f"Store {self.path} is not a JSON object; treating as empty")
            return {}
        return data

    def _write(self, data: Dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp = tempfile.mkstemp(dir=self.path.parent, prefix=self.path.name, suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, ensure_ascii=False, indent=2)
            os.replace(tmp, self.path)
        except BaseException:
            if os.path.exists(tmp):
                os.unlink(tmp)
            raise

    def load(self, name: str) -> Optional[str]:
        value = self._read().get(name)
        if value is not None and not isinstance(value, str):
            logger.warning(f"Store entry {name!r} is not a string; ignoring")
            return None
        logger.debug(f"load {name!r} from {self.path}: {'hit' if value is not None else 'miss'}")
        return value

    def save(self, name: str, value: str) -> None:
        data = self._read()
        data[name] = value
        self._write(data)
        logger.debug(f"save {name!r} to {self.path} ({len(value)} chars)")

    def delete(self, name: str) -> None:
        data = self._read()
        if data.pop(name, None) is not None:
            self._write(data)
            logger.debug(f"delete {name!r} from {self.path}")

    def __repr__(self):
        return f"JsonFileStore({str(self.path)!r})"


def save_substitution_map(store, mapping: SubstitutionMap) -> None:
    store.save(MAP_KEY, serialize_map(mapping))


def _generate_and_save(store, alphabet: Alphabet, rng: random.Random) -> SubstitutionMap:
    mapping = generate_map(alphabet, rng)
    save_substitution_map(store, mapping)
    logger.info(f"Generated substitution map {fingerprint(mapping)}")
    return mapping


def load_substitution_map(store, alphabet: Alphabet = RUSSIAN,
                          rng: random.Random = None) -> SubstitutionMap:
    """
    Return the stored map, or a freshly generated (and persisted) one when
    nothing is stored or the stored value is malformed.
    """
    raw = store.load(MAP_KEY)
    if raw is None:
        logger.info("No stored substitution map")
        return _generate_and_save(store, alphabet, rng)

    try:
        mapping = deserialize_map(raw)
    except (ValueError, RecursionError) as e:
        logger.warning(f"Stored substitution map is malformed ({e}); regenerating")
        return _generate_and_save(store, alphabet, rng)

    if not is_bijective(mapping, alphabet):
        logger.warning("Stored substitution map is not a bijection over the alphabet; regenerating")
        return _generate_and_save(store, alphabet, rng)

    logger.info(f"Loaded substitution map {fingerprint(mapping)}")
    return mapping


def reset_substitution_map(store, alphabet: Alphabet = RUSSIAN,
                           rng: random.Random = None) -> SubstitutionMap:
    """Forget the stored map and persist a new one."""
    store.delete(MAP_KEY)
    return _generate_and_save(store, alphabet, rng)


class MapKeeper:
    """
    Current substitution map plus its store.

    Every operation that reads, replaces and persists the map runs under
    one lock, so concurrent callers cannot lose each other's updates.
    """

    def __init__(self, store, alphabet: Alphabet = RUSSIAN, rng: random.Random = None):
        self.store    = store
        self.alphabet = alphabet
        self._rng     = rng
        self._lock    = threading.Lock()
        with self._lock:
            self._mapping = load_substitution_map(store, alphabet, rng)

    @property
    def current(self) -> SubstitutionMap:
        with self._lock:
            return dict(self._mapping)

    def regenerate(self) -> SubstitutionMap:
        with self._lock:
            self._mapping = _generate_and_save(self.store, self.alphabet, self._rng)
            return dict(self._mapping)

    def reset(self) -> SubstitutionMap:
        with self._lock:
            self._mapping = reset_substitution_map(self.store, self.alphabet, self._rng)
            return dict(self._mapping)

    def replace(self, mapping: SubstitutionMap) -> None:
        if not is_bijective(mapping, self.alphabet):
            raise ValueError("Substitution map must be a bijection over the alphabet.")
        with self._lock:
            self._mapping = dict(mapping)
            save_substitution_map(self.store, self._mapping)

    def fingerprint(self) -> str:
        return fingerprint(self.current)
