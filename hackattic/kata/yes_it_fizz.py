"""yes_it_fizz kata: FizzBuzz over an inclusive range read from the first input line."""

from collections.abc import Iterator
from typing import TextIO

from hackattic.exceptions import KataInputError

FIZZ = "Fizz"
BUZZ = "Buzz"


def parse_range(line: str) -> tuple[int, int]:
    parts = line.split()
    if len(parts) != 2:
        raise KataInputError(f"Expected two numbers, got {line!r}")
    try:
        start, end = int(parts[0]), int(parts[1])
    except ValueError as e:
        raise KataInputError(f"Expected two integers, got {line!r}") from e
    if start > end:
        raise KataInputError(f"First number must not exceed second: {start} > {end}")
    return start, end


def fizzbuzz(start: int, end: int) -> Iterator[str]:
    if start > end:
        raise KataInputError(f"First number must not exceed second: {start} > {end}")
    for i in range(start, end + 1):
        if i % 15 == 0:
            yield FIZZ + BUZZ
        elif i % 3 == 0:
            yield FIZZ
        elif i % 5 == 0:
            yield BUZZ
        else:
            yield str(i)


def run(stdin: TextIO, stdout: TextIO) -> None:
    start, end = parse_range(stdin.readline())
    for value in fizzbuzz(start, end):
        stdout.write(f"{value}\n")
