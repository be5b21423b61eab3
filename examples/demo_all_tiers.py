"""
cyrillic_ciphers — Live Demo: All Three Tiers
==============================================
Run:  python examples/demo_all_tiers.py

Encrypts and decrypts one message with every tier, and walks the
substitution map through its generate / load / reset lifecycle using an
in-memory store.
"""

import sys, os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from cyrillic_ciphers import (
    MemoryStore, ShiftCipher, RunningKeyCipher, SubstitutionCipher,
    load_substitution_map, reset_substitution_map,
)
from cyrillic_ciphers.tiers.tier2_running_key import keystream
from cyrillic_ciphers.tiers.tier3_substitution import fingerprint

LINE = "═" * 70
MSG  = "Привет, мир! Съешь же ещё этих мягких французских булок."

def header(tier, name):
    print(f"\n{LINE}")
    print(f"  Tier {tier} — {name}")
    print(LINE)

def ok(label, value=""):
    print(f"  ✓  {label}{f': {value}' if value else ''}")

# ─────────────────────────────────────────────────────────────────────────────
print(f"\n{LINE}")
print("  cyrillic_ciphers — Three-Tier Demo")
print("  For learning only — not for real protection")
print(LINE)
print(f"  Message: {MSG}\n")

# ── TIER 1 ───────────────────────────────────────────────────────────────────
header(1, "SHIFT — Caesar, shift 3")
c  = ShiftCipher(3)
ct = c.encrypt(MSG)
ok("Encrypted", ct)
ok("Decrypted", c.decrypt(ct))

# ── TIER 2 ───────────────────────────────────────────────────────────────────
header(2, "RUNNING KEY — Vigenère, key КЛЮЧ")
v  = RunningKeyCipher("КЛЮЧ")
ct = v.encrypt(MSG)
ok("Encrypted", ct)
ok("Decrypted", v.decrypt(ct))
ok("First shifts", [s for s in keystream(MSG, "КЛЮЧ") if s is not None][:8])

# ── TIER 3 ───────────────────────────────────────────────────────────────────
header(3, "SUBSTITUTION — random bijective map")
store   = MemoryStore()
mapping = load_substitution_map(store)
ok("Generated map", fingerprint(mapping))
ok("Reloaded map",  fingerprint(load_substitution_map(store)))
s  = SubstitutionCipher(mapping)
ct = s.encrypt(MSG)
ok("Encrypted", ct)
ok("Decrypted", s.decrypt(ct))
ok("Reset map", fingerprint(reset_substitution_map(store)))

print(f"\n{LINE}\n")
