"""
Command-line front end.

    python -m cyrillic_ciphers -a caesar -e -t "Привет, мир!" -s 3
    python -m cyrillic_ciphers -a vigenere -d -k КЛЮЧ -i cipher.txt
    python -m cyrillic_ciphers -a substitution -e -t "АБВ" --store map.json
    python -m cyrillic_ciphers --reset-map
"""

import argparse
import logging
import sys

from . import __version__
from .alphabet import RUSSIAN, RUSSIAN_WITH_YO
from .store import DEFAULT_STORE_PATH, JsonFileStore
from .tiers.tier2_running_key import keystream
from .trainer import DEFAULT_KEY, DEFAULT_SHIFT, Algorithm, CipherTrainer, Mode

logger = logging.getLogger("cyrillic_ciphers")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cyrillic-ciphers",
        description="Cipher trainer for Russian text: Caesar, Vigenère, substitution. "
                    "For learning only, not for real protection.",
        formatter_class=argparse.RawTextHelpFormatter,
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    parser.add_argument("-a", "--algorithm", choices=[a.value for a in Algorithm],
                        default=Algorithm.CAESAR.value,
                        help="Cipher algorithm (default: caesar)")

    action_group = parser.add_mutually_exclusive_group(required=True)
    action_group.add_argument("-e", "--encrypt", action="store_true", help="Encrypt mode")
    action_group.add_argument("-d", "--decrypt", action="store_true", help="Decrypt mode")
    action_group.add_argument("--new-map", action="store_true",
                              help="Generate and store a new substitution map")
    action_group.add_argument("--reset-map", action="store_true",
                              help="Clear the stored substitution map and create a new one")
    action_group.add_argument("--show-map", action="store_true",
                              help="Print the stored substitution map")

    parser.add_argument("-s", "--shift", type=int, default=DEFAULT_SHIFT,
                        help=f"Caesar shift (default: {DEFAULT_SHIFT})")
    parser.add_argument("-k", "--key", default=DEFAULT_KEY,
                        help=f"Vigenère key, letters only (default: {DEFAULT_KEY})")
    parser.add_argument("--store", default=str(DEFAULT_STORE_PATH), metavar="PATH",
                        help=f"Substitution map store (default: {DEFAULT_STORE_PATH})")
    parser.add_argument("--yo", action="store_true",
                        help="Use the 33-letter alphabet including Ё")
    parser.add_argument("--reverse", action="store_true",
                        help="Also print the result decrypted back")
    parser.add_argument("--explain", action="store_true",
                        help="Vigenère only: print the shift applied to each letter")
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose logging")

    io_group = parser.add_mutually_exclusive_group()
    io_group.add_argument("-t", "--text", help="Direct text input")
    io_group.add_argument("-i", "--input", help="Input file path")
    parser.add_argument("-o", "--output", help="Output file path")
    return parser


def read_input(args) -> str:
    if args.text is not None:
        return args.text
    if args.input:
        try:
            with open(args.input, "r", encoding="utf-8") as f:
                return f.read()
        except FileNotFoundError:
            sys.exit(f"Error: File '{args.input}' not found.")
        except UnicodeDecodeError:
            sys.exit(f"Error: File '{args.input}' is not valid UTF-8 text.")
        except OSError as e:
            sys.exit(f"Error: cannot read '{args.input}': {e}")
    if not sys.stdin.isatty():
        return sys.stdin.read()
    print("Paste input below. Ctrl+D (Unix) or Ctrl+Z (Win) to end:", file=sys.stderr)
    try:
        return sys.stdin.read()
    except KeyboardInterrupt:
        sys.exit(0)


def format_map(mapping, alphabet) -> str:
    return " ".join(f"{src}→{mapping[src]}" for src in alphabet.upper)


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.INFO if args.verbose else logging.WARNING,
                        format="[%(levelname)s] %(name)s: %(message)s")

    alphabet = RUSSIAN_WITH_YO if args.yo else RUSSIAN
    mode = Mode.DECRYPT if args.decrypt else Mode.ENCRYPT
    trainer = CipherTrainer(store=JsonFileStore(args.store), mode=mode,
                            algorithm=args.algorithm, shift=args.shift,
                            key=args.key, alphabet=alphabet)

    if args.new_map or args.reset_map or args.show_map:
        try:
            if args.new_map:
                trainer.generate_map()
            elif args.reset_map:
                trainer.reset_map()
            print(format_map(trainer.substitution_map, alphabet))
        except OSError as e:
            sys.exit(f"Error: cannot use store '{args.store}': {e}")
        print(f"fingerprint: {trainer.keeper.fingerprint()}")
        return 0

    if trainer.algorithm is Algorithm.VIGENERE and not trainer.key:
        logger.warning("Vigenère key has no letters; text is passed through unchanged")

    source = read_input(args)
    try:
        result = trainer.compute(source)
    except OSError as e:
        sys.exit(f"Error: cannot use store '{args.store}': {e}")

    if args.output:
        try:
            with open(args.output, "w", encoding="utf-8") as f:
                f.write(result)
        except OSError as e:
            sys.exit(f"Error writing output: {e}")
    else:
        print(result)

    if args.reverse:
        print(trainer.reverse(source))
    if args.explain and trainer.algorithm is Algorithm.VIGENERE:
        shifts = keystream(source, trainer.key, alphabet)
        print(" ".join(f"{ch}+{s}" for ch, s in zip(source, shifts) if s is not None))
    return 0


if __name__ == "__main__":
    sys.exit(main())
