"""Base-b digit strings -> arbitrary-precision integers.

Two decoders are provided and callers pick one per use site:

``decode``          strict.  Any character that is not a digit of *base*
                    (including whitespace inside the numeral, ``_`` or
                    ``-``) raises ``InvalidDigitError``.
``decode_lenient``  best-effort.  Characters that are not alphanumeric are
                    skipped; an alphanumeric character whose value is
                    >= *base* still raises ``InvalidDigitError``.

Both trim surrounding whitespace, are case-insensitive, and evaluate
left to right with Horner's rule.  Empty input decodes to 0.
"""

from __future__ import annotations

from typing import Optional

from polyrecon.config import MAX_BASE, MIN_BASE


class DecodeError(ValueError):
    """Base class for digit-string input errors."""


class InvalidDigitError(DecodeError):
    """Raised when a character is not a valid digit for the declared base."""

    def __init__(self, char: str, base: int, position: int) -> None:
        self.char = char
        self.base = base
        self.position = position
        super().__init__(
            f"invalid digit {char!r} at position {position} for base {base}"
        )


class InvalidBaseError(DecodeError):
    """Raised when the declared base is outside [MIN_BASE, MAX_BASE]."""


def digit_value(char: str) -> Optional[int]:
    """Return the value of *char* as a base-36 digit, or None."""
    if not char.isascii():
        return None
    if "0" <= char <= "9":
        return ord(char) - ord("0")
    lower = char.lower()
    if "a" <= lower <= "z":
        return ord(lower) - ord("a") + 10
    return None


def _check_base(base: int) -> None:
    if isinstance(base, bool) or not isinstance(base, int):
        raise InvalidBaseError(f"base must be an int, got {base!r}")
    if base < MIN_BASE or base > MAX_BASE:
        raise InvalidBaseError(
            f"base {base} outside supported range [{MIN_BASE}, {MAX_BASE}]"
        )


def decode(text: str, base: int) -> int:
    """Strictly decode *text* as a base-*base* numeral."""
    _check_base(base)
    acc = 0
    for pos, ch in enumerate(text.strip()):
        d = digit_value(ch)
        if d is None or d >= base:
            raise InvalidDigitError(ch, base, pos)
        acc = acc * base + d
    return acc


def decode_lenient(text: str, base: int) -> int:
    """Decode *text*, skipping characters that are not digits at all."""
    _check_base(base)
    acc = 0
    for pos, ch in enumerate(text.strip()):
        d = digit_value(ch)
        if d is None:
            continue
        if d >= base:
            raise InvalidDigitError(ch, base, pos)
        acc = acc * base + d
    return acc
