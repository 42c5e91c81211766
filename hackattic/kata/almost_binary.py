"""
almost_binary kata: each input line is a binary number written with
'.' for 0 and '#' for 1. Print every line's decimal value.
"""

from typing import TextIO

from hackattic.exceptions import KataInputError

SYMBOLS = {".": "0", "#": "1"}


def decode_line(line: str) -> int:
    if not line:
        raise KataInputError("Received an empty line")

    digits = []
    for char in line:
        if char not in SYMBOLS:
            raise KataInputError(f"Received an invalid character {char!r}")
        digits.append(SYMBOLS[char])
    return int("".join(digits), 2)


def run(stdin: TextIO, stdout: TextIO) -> None:
    for line in stdin:
        value = decode_line(line.rstrip("\r\n"))
        stdout.write(f"{value}\n")
