"""Receiver side of the transport protocol.

A ``ReceiverSession`` owns the configured generator code and turns each
inbound frame into a ``ResultCode``. Frame handling is stateless: the only
shared state is the code, which is swapped whole under a lock and read once
per frame, so a reconfiguration mid-verification is never seen half-applied.
"""

from __future__ import annotations

import logging
import threading

from ..models.generator import GeneratorCode
from ..protocol.errors import ConfigurationError, MalformedFrameError
from ..protocol.framing import split_frame
from ..protocol.results import ResultCode
from ..utils.crc import verify

logger = logging.getLogger(__name__)


class ReceiverSession:
    """Receiver state shared between the console and the remote-call server.

    Usage::

        session = ReceiverSession(GeneratorCode.parse("1001"))
        session.handle("1101100")   # ResultCode.DATA_SUCCESS
    """

    def __init__(self, code: GeneratorCode | None = None) -> None:
        self._lock = threading.Lock()
        self._code = code

    @property
    def configured(self) -> bool:
        return self.snapshot() is not None

    def snapshot(self) -> GeneratorCode | None:
        """Return the code currently in effect (or None)."""
        with self._lock:
            return self._code

    def configure(self, code: GeneratorCode) -> None:
        """Replace the generator code used for subsequent frames."""
        with self._lock:
            previous, self._code = self._code, code
        logger.info("Receiver code set to %s (was %s)", code, previous)

    def clear(self) -> None:
        with self._lock:
            self._code = None
        logger.info("Receiver code cleared")

    def require_code(self) -> GeneratorCode:
        code = self.snapshot()
        if code is None:
            raise ConfigurationError("Receiver has no generator code configured")
        return code

    def handle(self, frame: str) -> ResultCode:
        """Verify one inbound frame and return the result code for the sender."""
        try:
            code = self.require_code()
        except ConfigurationError as e:
            logger.warning("Rejecting frame %s: %s", frame, e)
            return ResultCode.CODE_ERROR

        try:
            payload, checksum = split_frame(frame, code.degree)
        except MalformedFrameError as e:
            logger.warning("Malformed frame %r: %s", frame, e)
            return ResultCode.DATA_ERROR

        result = verify(frame, code)
        logger.info(
            "Received payload=%s checksum=%s remainder=%s",
            payload or "(empty)",
            checksum,
            result.remainder_bits,
        )
        if result.ok:
            return ResultCode.DATA_SUCCESS
        return ResultCode.DATA_ERROR
