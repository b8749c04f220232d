from typing import Optional

from hash_tickler.models.password_spec import ALPHABET_PRESETS, Alphabet, ConfigurationError, PasswordSpec

LITERAL_PREFIX = "literal:"


def load_alphabet(value: str, separator: Optional[str] = None) -> Alphabet:
    """
    Resolve an alphabet option.
    - a preset name (lower, upper, digits, alnum, hex, printable)
    - @path: a file with one symbol per line
    - literal symbols, one per character, or split on `separator`
    - literal:SYMBOLS, for literal symbols that spell a preset name
    """
    if value.startswith(LITERAL_PREFIX):
        return load_literal(value[len(LITERAL_PREFIX):], separator)

    if value in ALPHABET_PRESETS:
        return Alphabet.from_preset(value)

    if value.startswith("@"):
        return load_alphabet_file(value[1:])

    return load_literal(value, separator)


def load_literal(value: str, separator: Optional[str] = None) -> Alphabet:
    if separator:
        return Alphabet(tuple(value.split(separator)))
    return Alphabet.from_string(value)


def load_alphabet_file(file_path: str) -> Alphabet:
    """Load symbols from a file, one per line. Blank lines are skipped."""
    try:
        with open(file_path, "r", encoding="utf-8") as f:
            lines = f.read().splitlines()
    except OSError as e:
        raise ConfigurationError(f"Could not read alphabet file {file_path}: {e}") from e
    return Alphabet(tuple(line for line in lines if line))


def build_spec(alphabet: str, length: int, separator: Optional[str] = None) -> PasswordSpec:
    return PasswordSpec(load_alphabet(alphabet, separator), length)
