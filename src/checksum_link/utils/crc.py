"""Bit-serial CRC engine over GF(2).

Division works on the literal bit string of a dividend: each bit is shifted
into an r-bit register, and whenever the register's leading coefficient
(bit ``r``) becomes 1 the generator is XOR-ed out of it. What is left after
the last bit is the remainder.

- ``encode`` divides ``payload || r zero bits`` and returns the r-bit remainder
  as the checksum.
- ``verify`` divides the received frame as-is; a zero remainder means the
  frame is a multiple of the generator and no error was detected.
"""

from __future__ import annotations

import logging
from typing import NamedTuple

from ..models.generator import BINARY_DIGITS, GeneratorCode, payload_bits
from ..protocol.errors import InvalidFormatError

logger = logging.getLogger(__name__)


class Verification(NamedTuple):
    """Verdict of dividing a received frame by the generator."""

    ok: bool
    remainder: int
    degree: int

    @property
    def remainder_bits(self) -> str:
        """Remainder zero-padded to exactly ``degree`` bits."""
        return format(self.remainder, f"0{self.degree}b")


def divide(dividend: str, code: GeneratorCode) -> int:
    """Return the GF(2) remainder of a bit-string dividend by ``code``.

    The result is always less than ``2 ** code.degree``.
    """
    if not set(dividend) <= BINARY_DIGITS:
        raise InvalidFormatError(f"Dividend must be binary digits, got {dividend!r}")

    top = 1 << code.degree
    register = 0
    for bit in dividend:
        register = (register << 1) | (bit == "1")
        if register & top:
            register ^= code.value
    return register


def encode(payload: int, code: GeneratorCode) -> str:
    """Compute the checksum bits for ``payload``.

    Args:
        payload: Unsigned data value. Zero is valid.
        code: Generator polynomial.

    Returns:
        The remainder as a string of exactly ``code.degree`` bits.
    """
    r = code.degree
    remainder = divide(payload_bits(payload) + "0" * r, code)
    return format(remainder, f"0{r}b")


def verify(frame: str, code: GeneratorCode) -> Verification:
    """Divide a complete frame (payload bits then checksum bits) by ``code``."""
    remainder = divide(frame, code)
    result = Verification(ok=remainder == 0, remainder=remainder, degree=code.degree)
    logger.debug(
        "verify frame=%s code=%s remainder=%s", frame, code, result.remainder_bits
    )
    return result
