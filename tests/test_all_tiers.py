"""
cyrillic_ciphers — Tier Test Suite
==================================
Run with:  python -m pytest tests/ -v
       or:  python tests/test_all_tiers.py
"""

import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import random

import pytest
from cyrillic_ciphers import (
    RUSSIAN, RUSSIAN_WITH_YO, Alphabet, Case,
    ShiftCipher, RunningKeyCipher, SubstitutionCipher,
    shift_encode, shift_decode,
    running_key_encode, running_key_decode,
    substitution_encode, substitution_decode,
    generate_substitution_map,
)
from cyrillic_ciphers.tiers.tier2_running_key import keystream, sanitize_key
from cyrillic_ciphers.tiers.tier3_substitution import (
    deserialize_map, fingerprint, generate_map, invert, is_bijective, serialize_map,
)

MSG     = "Привет, мир!"
LONG    = "Съешь же ещё этих мягких французских булок, да выпей чаю. 1918 — Hello?"
NOISE   = "0123456789 .,;:!?-()[]\"' \t\nabcXYZ ёЁ"


def swap_map(pairs):
    """Identity map over RUSSIAN with the given uppercase letters swapped."""
    mapping = {ch: ch for ch in RUSSIAN.upper + RUSSIAN.lower}
    for a, b in pairs:
        mapping[a], mapping[b] = b, a
        mapping[a.lower()], mapping[b.lower()] = b.lower(), a.lower()
    return mapping


# ── Alphabet ──────────────────────────────────────────────────────────────────
def test_alphabet_sizes():
    assert len(RUSSIAN) == 32
    assert len(RUSSIAN_WITH_YO) == 33
    assert RUSSIAN.lower == RUSSIAN.upper.lower()

def test_alphabet_position_and_case():
    assert RUSSIAN.position("А") == (0, Case.UPPER)
    assert RUSSIAN.position("я") == (31, Case.LOWER)
    assert RUSSIAN.position("Ё") is None
    assert RUSSIAN.position("A") is None   # Latin
    assert RUSSIAN_WITH_YO.position("ё") == (6, Case.LOWER)

def test_alphabet_membership():
    assert RUSSIAN.is_letter("Ж") and RUSSIAN.is_letter("ж")
    assert not RUSSIAN.is_letter("Ё")
    assert "ё" in RUSSIAN_WITH_YO
    assert "Z" not in RUSSIAN

def test_alphabet_at_index_wraps():
    assert RUSSIAN.at_index(32, Case.UPPER) == "А"
    assert RUSSIAN.at_index(10, Case.LOWER) == "к"

def test_alphabet_rejects_bad_pairing():
    with pytest.raises(ValueError):
        Alphabet("АБВ", "аб")
    with pytest.raises(ValueError):
        Alphabet("ААБ")

def test_alphabet_is_immutable():
    with pytest.raises(AttributeError):
        RUSSIAN._upper = "XYZ"

# ── Tier 1 ────────────────────────────────────────────────────────────────────
def test_tier1_shift_known_answer():
    assert shift_encode(MSG, 3) == "Тулеих, плу!"
    assert shift_decode("Тулеих, плу!", 3) == MSG

def test_tier1_shift_wraps_both_cases():
    assert shift_encode("Яя", 1) == "Аа"
    assert shift_encode("Аа", -1) == "Яя"

@pytest.mark.parametrize("n", [-100, -33, -1, 0, 1, 3, 31, 32, 33, 1000])
def test_tier1_shift_roundtrip(n):
    assert shift_decode(shift_encode(LONG, n), n) == LONG

@pytest.mark.parametrize("n", [-5, 0, 7, 31])
def test_tier1_shift_periodic(n):
    assert shift_encode(LONG, n) == shift_encode(LONG, n + 32)

def test_tier1_shift_yo_alphabet():
    assert shift_encode("Ёж", 1) == "Ёз"
    assert shift_encode("Е", 1, RUSSIAN_WITH_YO) == "Ё"
    assert shift_encode(LONG, 5, RUSSIAN_WITH_YO) == shift_encode(LONG, 38, RUSSIAN_WITH_YO)

def test_tier1_shift_cipher_class():
    c = ShiftCipher(35)
    assert c.shift == 3
    assert c.encrypt(MSG) == "Тулеих, плу!"
    assert c.decrypt(c.encrypt(LONG)) == LONG

# ── Tier 2 ────────────────────────────────────────────────────────────────────
def test_tier2_running_key_known_answer():
    assert running_key_encode("АБВ", "КЛЮЧ") == "КМА"
    assert keystream("АБВ", "КЛЮЧ") == [10, 11, 30]
    assert running_key_decode("КМА", "КЛЮЧ") == "АБВ"

def test_tier2_running_key_lowercase_key():
    assert running_key_encode("АБВ", "клюЧ") == "КМА"

def test_tier2_running_key_skips_non_letters():
    assert running_key_encode("А Б", "БВ") == "Б Г"
    assert keystream("А Б", "БВ") == [1, None, 2]

def test_tier2_running_key_empty_key_passthrough():
    assert running_key_encode(LONG, "") == LONG
    assert running_key_decode(LONG, "") == LONG

def test_tier2_running_key_stuck_on_non_letter_key():
    # cursor reaches '1' and never moves again
    assert running_key_encode("БББ", "В1") == "ГББ"
    assert running_key_encode("абв", "!") == "абв"
    assert keystream("БББ", "В1") == [2, None, None]

@pytest.mark.parametrize("key", ["КЛЮЧ", "а", "Шифр", "ЯЯЯЯЯЯЯЯЯЯЯЯЯЯЯЯЯЯЯЯЯЯЯЯЯЯЯЯЯЯЯЯЯЯЯЯ"])
def test_tier2_running_key_roundtrip(key):
    ct = running_key_encode(LONG, key)
    assert running_key_decode(ct, key) == LONG

def test_tier2_running_key_preserves_case():
    ct = running_key_encode(MSG, "КЛЮЧ")
    assert [c.isupper() for c in ct] == [c.isupper() for c in MSG]

def test_tier2_sanitize_key():
    assert sanitize_key("К Л-Ю1Чz") == "КЛЮЧ"

def test_tier2_running_key_cipher_class():
    v = RunningKeyCipher("КЛЮЧ")
    assert v.encrypt("АБВ") == "КМА"
    assert v.decrypt(v.encrypt(LONG)) == LONG

# ── Tier 3 ────────────────────────────────────────────────────────────────────
def test_tier3_substitution_known_answer():
    m = swap_map([("А", "Щ"), ("Б", "Ю"), ("В", "Я")])
    assert substitution_encode("АБВ", m) == "ЩЮЯ"
    assert substitution_decode("ЩЮЯ", m) == "АБВ"
    assert substitution_encode("абв", m) == "щюя"

def test_tier3_generate_map_is_bijection():
    m = generate_substitution_map()
    assert len(m) == 64
    assert is_bijective(m)
    for src, dst in m.items():
        assert src.isupper() == dst.isupper()

def test_tier3_generate_map_is_random():
    assert generate_substitution_map() != generate_substitution_map()

def test_tier3_generate_map_reproducible_with_rng():
    assert generate_map(rng=random.Random(7)) == generate_map(rng=random.Random(7))
    assert generate_substitution_map(rng=random.Random(7)) == generate_map(rng=random.Random(7))

def test_tier3_roundtrip():
    m = generate_substitution_map()
    assert substitution_decode(substitution_encode(LONG, m), m) == LONG

def test_tier3_invert_is_involution():
    m = generate_substitution_map()
    assert invert(invert(m)) == m
    inv = invert(m)
    assert all(inv[m[ch]] == ch for ch in m)

def test_tier3_invert_non_bijective_does_not_raise():
    assert invert({"а": "х", "б": "х"}) == {"х": "б"}

def test_tier3_is_bijective_rejects_bad_maps():
    m = generate_substitution_map()
    assert not is_bijective({k: v for k, v in m.items() if k != "А"})
    swapped_case = dict(m)
    swapped_case["А"] = m["а"]
    assert not is_bijective(swapped_case)
    dup = dict(m)
    dup["А"] = m["Б"]
    assert not is_bijective(dup)

def test_tier3_serialize_roundtrip_and_garbage():
    m = generate_substitution_map()
    assert deserialize_map(serialize_map(m)) == m
    for garbage in ["not json", "[]", '{"А": "ББ"}', '{"А": 1}']:
        with pytest.raises(ValueError):
            deserialize_map(garbage)

def test_tier3_fingerprint():
    m = generate_map(rng=random.Random(1))
    fp = fingerprint(m)
    assert len(fp) == 16
    int(fp, 16)
    assert fingerprint(dict(m)) == fp
    assert fingerprint(generate_map(rng=random.Random(2))) != fp

def test_tier3_substitution_cipher_class():
    s = SubstitutionCipher()
    assert s.decrypt(s.encrypt(LONG)) == LONG
    old = s.mapping
    s.regenerate(random.Random(3))
    assert s.mapping != old
    assert s.decrypt(s.encrypt(LONG)) == LONG

def test_tier3_substitution_cipher_copies_map():
    m = swap_map([("А", "Б")])
    s = SubstitutionCipher(m)
    m["В"] = "Г"
    assert s.encrypt("В") == "В"

# ── Cross-tier ────────────────────────────────────────────────────────────────
def test_non_letters_invariant_under_every_transform():
    m = generate_substitution_map()
    assert shift_encode(NOISE, 5) == NOISE
    assert shift_decode(NOISE, 5) == NOISE
    assert running_key_encode(NOISE, "КЛЮЧ") == NOISE
    assert running_key_decode(NOISE, "КЛЮЧ") == NOISE
    assert substitution_encode(NOISE, m) == NOISE
    assert substitution_decode(NOISE, m) == NOISE

def test_empty_text():
    m = generate_substitution_map()
    assert shift_encode("", 3) == ""
    assert running_key_encode("", "КЛЮЧ") == ""
    assert substitution_encode("", m) == ""


# ── run directly ─────────────────────────────────────────────────────────────
if __name__ == "__main__":
    import time
    tests = [
        ("Tier 1 — Shift known answer",          test_tier1_shift_known_answer),
        ("Tier 1 — Shift wraps",                 test_tier1_shift_wraps_both_cases),
        ("Tier 1 — Shift roundtrip",             lambda: test_tier1_shift_roundtrip(-33)),
        ("Tier 1 — Shift periodic",              lambda: test_tier1_shift_periodic(7)),
        ("Tier 2 — Running key known answer",    test_tier2_running_key_known_answer),
        ("Tier 2 — Running key skips non-letters", test_tier2_running_key_skips_non_letters),
        ("Tier 2 — Running key empty key",       test_tier2_running_key_empty_key_passthrough),
        ("Tier 2 — Running key stuck cursor",    test_tier2_running_key_stuck_on_non_letter_key),
        ("Tier 2 — Running key roundtrip",       lambda: test_tier2_running_key_roundtrip("КЛЮЧ")),
        ("Tier 3 — Substitution known answer",   test_tier3_substitution_known_answer),
        ("Tier 3 — Map is a bijection",          test_tier3_generate_map_is_bijection),
        ("Tier 3 — Substitution roundtrip",      test_tier3_roundtrip),
        ("Tier 3 — Fingerprint",                 test_tier3_fingerprint),
        ("All   — Non-letters invariant",        test_non_letters_invariant_under_every_transform),
    ]

    print("\n" + "═" * 70)
    print("  cyrillic_ciphers — Tier Test Suite")
    print("═" * 70)
    passed = failed = 0
    for name, fn in tests:
        t0 = time.perf_counter()
        try:
            fn()
            elapsed = time.perf_counter() - t0
            print(f"  ✓  {name:<45} {elapsed:.3f}s")
            passed += 1
        except Exception as e:
            print(f"  ✗  {name:<45} FAILED: {e}")
            failed += 1
    print("═" * 70)
    print(f"  {passed} passed  |  {failed} failed")
    print("═" * 70 + "\n")
    sys.exit(0 if failed == 0 else 1)
