"""Frame builder and splitter for the bit-string wire format.

Frame layout::

    +----------------------+-------------------+
    | Payload bits         | Checksum bits     |
    | variable length      | exactly r bits    |
    +----------------------+-------------------+

- There is no delimiter or header; the frame is not self-describing.
- The receiver finds the split point from the degree ``r`` of its own
  generator, so leading zeros in the checksum segment must be kept.
"""

from __future__ import annotations

from .errors import InvalidFormatError, MalformedFrameError

BINARY_DIGITS = frozenset("01")


def _is_binary(bits: str) -> bool:
    return set(bits) <= BINARY_DIGITS


def build_frame(payload_bits: str, checksum_bits: str) -> str:
    """Concatenate payload and checksum bits into a wire frame.

    Raises:
        InvalidFormatError: If either segment contains non-binary characters.
    """
    if not _is_binary(payload_bits):
        raise InvalidFormatError(f"Invalid payload bits: {payload_bits!r}")
    if not _is_binary(checksum_bits):
        raise InvalidFormatError(f"Invalid checksum bits: {checksum_bits!r}")
    return payload_bits + checksum_bits


def split_frame(frame: str, degree: int) -> tuple[str, str]:
    """Split a wire frame into ``(payload_bits, checksum_bits)``.

    The trailing ``degree`` characters are the checksum; the rest is payload.

    Raises:
        MalformedFrameError: If the frame is shorter than ``degree`` or
            contains characters other than ``0`` and ``1``.
    """
    if degree < 1:
        raise ValueError(f"Degree must be at least 1, got {degree}")
    if len(frame) < degree:
        raise MalformedFrameError(
            f"Frame of {len(frame)} bits is shorter than the checksum ({degree} bits)"
        )
    if not _is_binary(frame):
        raise MalformedFrameError(f"Frame contains non-binary characters: {frame!r}")
    return frame[:-degree], frame[-degree:]
