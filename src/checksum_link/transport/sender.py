"""Sender side of the transport protocol.

One ``transmit`` call delivers one payload. The sender blocks on each round
trip and retries only on ``DATA_ERROR``, up to ``max_attempts`` sends in
total; ``CODE_ERROR`` and channel failures are never retried.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum

from ..models.generator import GeneratorCode, payload_bits
from ..protocol.errors import ChannelError, ConfigurationError
from ..protocol.framing import build_frame
from ..protocol.results import ResultCode
from ..utils.crc import encode
from .channel import Channel

logger = logging.getLogger(__name__)

MAX_ATTEMPTS = 3


class SenderState(Enum):
    IDLE = "idle"
    AWAITING_RESULT = "awaiting_result"


class TransmitStatus(Enum):
    """How a transmission ended."""

    DELIVERED = "delivered"
    EXHAUSTED = "exhausted"
    CODE_REJECTED = "code_rejected"


@dataclass
class TransmitReport:
    """Outcome of one ``Sender.transmit`` call."""

    status: TransmitStatus
    attempts: int
    result: ResultCode
    frames: list[str] = field(default_factory=list)

    @property
    def delivered(self) -> bool:
        return self.status is TransmitStatus.DELIVERED


class Sender:
    """Builds frames, sends them over a channel, and applies bounded retry.

    Usage::

        sender = Sender(McpChannel(), GeneratorCode.parse("1001"))
        report = sender.transmit(0b1101)
    """

    def __init__(
        self,
        channel: Channel,
        code: GeneratorCode | None = None,
        max_attempts: int = MAX_ATTEMPTS,
    ) -> None:
        if max_attempts < 1:
            raise ValueError(f"max_attempts must be at least 1, got {max_attempts}")
        self._channel = channel
        self._code = code
        self._max_attempts = max_attempts
        self._retry_count = 0
        self._state = SenderState.IDLE

    @property
    def code(self) -> GeneratorCode | None:
        return self._code

    @property
    def retry_count(self) -> int:
        """Consecutive DATA_ERROR results for the payload in flight."""
        return self._retry_count

    @property
    def state(self) -> SenderState:
        return self._state

    def configure(self, code: GeneratorCode) -> None:
        self._code = code

    def frame_for(self, payload: int, error_mask: int = 0) -> str:
        """Build the wire frame for ``payload``.

        The checksum always covers ``payload``; ``error_mask`` is XOR-ed into
        the payload bits only, which simulates corruption on the wire.
        """
        if self._code is None:
            raise ConfigurationError("Sender has no generator code configured")
        checksum = encode(payload, self._code)
        return build_frame(payload_bits(payload ^ error_mask), checksum)

    def transmit(self, payload: int, error_mask: int = 0) -> TransmitReport:
        """Send ``payload`` until it is accepted, rejected, or retries run out.

        Only the first attempt carries ``error_mask``; retries resend the
        original payload unchanged.

        Raises:
            ConfigurationError: If no code has been configured.
            ChannelError: If the receiver cannot be reached. Not retried.
        """
        frames: list[str] = []
        frame = self.frame_for(payload, error_mask)
        self._retry_count = 0

        while True:
            frames.append(frame)
            self._state = SenderState.AWAITING_RESULT
            logger.info("Sending frame %s (attempt %d)", frame, len(frames))
            try:
                result = self._channel.send(frame)
            except ChannelError:
                logger.error("Receiver unreachable; giving up on payload")
                self._reset()
                raise
            finally:
                self._state = SenderState.IDLE

            if result is ResultCode.DATA_SUCCESS:
                logger.info("Frame delivered")
                self._reset()
                return TransmitReport(TransmitStatus.DELIVERED, len(frames), result, frames)

            if result is ResultCode.CODE_ERROR:
                logger.warning("Receiver has no code configured (sender code %s)", self._code)
                self._reset()
                return TransmitReport(TransmitStatus.CODE_REJECTED, len(frames), result, frames)

            self._retry_count += 1
            if self._retry_count >= self._max_attempts:
                logger.error(
                    "Giving up after %d rejected transmissions", self._retry_count
                )
                self._reset()
                return TransmitReport(TransmitStatus.EXHAUSTED, len(frames), result, frames)

            logger.warning("Receiver reported DATA_ERROR, resending original payload")
            frame = self.frame_for(payload)

    def _reset(self) -> None:
        self._retry_count = 0
        self._state = SenderState.IDLE
