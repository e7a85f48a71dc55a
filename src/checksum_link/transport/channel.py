"""Request/response channels between sender and receiver.

The remote channel rides on the Model Context Protocol: the receiver runs a
FastMCP server (see ``checksum_link.server``) exposing a ``transport_data``
tool, and ``McpChannel`` calls it over streamable HTTP. Each ``send`` is one
blocking round trip with its own client session.
"""

from __future__ import annotations

import logging
from typing import Protocol

import anyio
from mcp import ClientSession
from mcp.client.streamable_http import streamablehttp_client

from ..protocol.errors import ChannelError
from ..protocol.results import ResultCode
from .receiver import ReceiverSession

logger = logging.getLogger(__name__)

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 8080
DEFAULT_PATH = "/mcp"
DEFAULT_TIMEOUT_S = 5.0
TRANSPORT_TOOL = "transport_data"


class Channel(Protocol):
    """Anything that can deliver one frame and return the receiver's verdict."""

    def send(self, frame: str) -> ResultCode:
        """Deliver ``frame``; raise ``ChannelError`` if the peer is unreachable."""
        ...


class LoopbackChannel:
    """In-process channel that hands frames straight to a ReceiverSession."""

    def __init__(self, session: ReceiverSession) -> None:
        self.session = session

    def send(self, frame: str) -> ResultCode:
        return self.session.handle(frame)


class McpChannel:
    """Channel to a remote receiver's FastMCP server.

    Usage::

        channel = McpChannel("127.0.0.1", 8080)
        result = channel.send("1101100")
    """

    def __init__(
        self,
        host: str = DEFAULT_HOST,
        port: int = DEFAULT_PORT,
        timeout_s: float = DEFAULT_TIMEOUT_S,
        path: str = DEFAULT_PATH,
    ) -> None:
        self._host = host
        self._port = port
        self._path = path
        self._timeout_s = timeout_s

    @property
    def url(self) -> str:
        return f"http://{self._host}:{self._port}{self._path}"

    def send(self, frame: str) -> ResultCode:
        """Call the receiver's transport tool with ``frame``.

        Raises:
            ChannelError: If the receiver is unreachable, times out, reports
                a tool error, or answers with an unknown token.
        """
        try:
            token = anyio.run(self._request, frame)
        except Exception as e:
            raise ChannelError(f"Could not reach receiver at {self.url}: {e}") from e

        try:
            return ResultCode.parse(token)
        except ValueError as e:
            raise ChannelError(str(e)) from e

    async def _request(self, frame: str) -> str:
        """Run one MCP session: initialize, call the tool, return its text."""
        with anyio.fail_after(self._timeout_s):
            async with streamablehttp_client(self.url) as (read, write, _):
                async with ClientSession(read, write) as session:
                    await session.initialize()
                    result = await session.call_tool(
                        TRANSPORT_TOOL, {"data": frame}
                    )

        texts = [c.text for c in result.content if getattr(c, "type", "") == "text"]
        if result.isError:
            raise RuntimeError("; ".join(texts) or "tool call failed")
        if not texts:
            raise RuntimeError("empty response from receiver")
        logger.debug("Receiver at %s answered %s", self.url, texts[0])
        return texts[0]
