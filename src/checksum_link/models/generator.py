"""Generator polynomial model and binary-digit input parsing.

A generator is a GF(2) polynomial written as a bit string whose most
significant bit is 1, e.g. ``1001`` for x^3 + 1. Its degree ``r`` is the
number of checksum bits appended to every frame.
"""

from __future__ import annotations

from dataclasses import dataclass

from ..protocol.errors import InvalidFormatError

MAX_CODE_BITS = 64
BINARY_DIGITS = frozenset("01")


def parse_binary(text: str) -> int:
    """Parse a string of ``0``/``1`` characters into an unsigned integer.

    Surrounding whitespace is ignored; anything else that is not a binary
    digit raises ``InvalidFormatError``.
    """
    digits = text.strip()
    if not digits:
        raise InvalidFormatError("Expected binary digits, got an empty string")
    if not set(digits) <= BINARY_DIGITS:
        raise InvalidFormatError(f"Expected binary digits, got {text!r}")
    return int(digits, 2)


def parse_payload(text: str) -> int:
    """Parse a payload entered as binary digits. Zero is a valid payload."""
    return parse_binary(text)


def payload_bits(payload: int) -> str:
    """Return the bit string for a payload, without leading zeros."""
    if payload < 0:
        raise InvalidFormatError(f"Payload must be unsigned, got {payload}")
    return format(payload, "b")


@dataclass(frozen=True)
class GeneratorCode:
    """An immutable generator polynomial of degree 1 or more."""

    value: int

    def __post_init__(self) -> None:
        if self.value <= 0:
            raise InvalidFormatError("Generator code must be nonzero")
        if self.value.bit_length() < 2:
            raise InvalidFormatError(
                "Generator code needs at least two bits (degree 1 or more)"
            )
        if self.value.bit_length() > MAX_CODE_BITS:
            raise InvalidFormatError(
                f"Generator code is limited to {MAX_CODE_BITS} bits, "
                f"got {self.value.bit_length()}"
            )

    @classmethod
    def parse(cls, text: str) -> GeneratorCode:
        """Build a code from binary digits; leading zeros are dropped."""
        return cls(parse_binary(text))

    @property
    def degree(self) -> int:
        """Number of checksum bits this code produces."""
        return self.value.bit_length() - 1

    @property
    def bits(self) -> str:
        return format(self.value, "b")

    def __str__(self) -> str:
        return self.bits
