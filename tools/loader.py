# tools/loader.py

import re
from pathlib import Path

from emulator.codec import LECTURE
from emulator.decoder import decode

DECIMAL_MODES = ("auto", "always", "never")


def read_program(source):
    """Read an encoding from a file if `source` names one, else use it literally."""
    path = Path(source)
    try:
        is_file = path.is_file()
    except OSError:
        # Very long literal encodings are not valid path names.
        is_file = False
    if is_file:
        with open(path, "r", encoding="utf-8") as f:
            return f.read()
    return source


def clean_bits(raw):
    return re.sub(r"[^01]", "", raw)


def prepare_program(raw, codec=LECTURE):
    bits = clean_bits(raw)
    if codec.strip_sentinel and bits.startswith("1"):
        bits = bits[1:]
    return bits


def coerce_input(word, mode="auto"):
    """Turn a decimal input word into its binary digits.

    auto:   convert only when every char is a digit and one of them is 2-9,
            so words like "101" are taken as binary already.
    always: convert any all-digit word.
    never:  leave the word as it is.
    """
    if mode not in DECIMAL_MODES:
        raise ValueError(f"Unknown decimal mode '{mode}', expected one of {DECIMAL_MODES}")
    word = word.strip()
    if not word or mode == "never" or not re.fullmatch(r"[0-9]+", word):
        return word
    if mode == "auto" and not re.search(r"[2-9]", word):
        return word
    return format(int(word), "b")


def load(source, word="", codec=LECTURE, decimal_mode="auto"):
    table = decode(prepare_program(read_program(source), codec), codec)
    return table, coerce_input(word, decimal_mode)
