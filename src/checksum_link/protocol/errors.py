"""Error types raised by the codec, engine, and transport layers."""

from __future__ import annotations


class ChecksumLinkError(Exception):
    """Base class for all checksum-link errors."""


class InvalidFormatError(ChecksumLinkError, ValueError):
    """Binary-digit input for a code or payload is malformed."""


class MalformedFrameError(ChecksumLinkError, ValueError):
    """An inbound frame cannot be split using the configured degree."""


class ChannelError(ChecksumLinkError, ConnectionError):
    """The receiver could not be reached or gave no usable response."""


class ConfigurationError(ChecksumLinkError, RuntimeError):
    """No generator code is configured."""
