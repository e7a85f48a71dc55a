"""MCP server for the checksum receiver.

Exposes the receiver's transport tool, a reconfiguration tool, and a status
resource via the Model Context Protocol using the official Python MCP SDK
with streamable-HTTP transport.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from mcp.server.fastmcp import FastMCP

from .models.generator import GeneratorCode
from .protocol.errors import InvalidFormatError
from .transport.channel import DEFAULT_HOST, DEFAULT_PATH, DEFAULT_PORT, TRANSPORT_TOOL
from .transport.receiver import ReceiverSession

logger = logging.getLogger(__name__)


def _status(session: ReceiverSession) -> dict[str, Any]:
    code = session.snapshot()
    if code is None:
        return {"configured": False, "code": None, "degree": None}
    return {"configured": True, "code": code.bits, "degree": code.degree}


def create_server(
    session: ReceiverSession,
    host: str = DEFAULT_HOST,
    port: int = DEFAULT_PORT,
) -> FastMCP:
    """Build a FastMCP server whose tools act on ``session``."""
    mcp = FastMCP(
        "checksum-receiver",
        instructions="Receives CRC-protected frames and reports whether they arrived intact.",
        host=host,
        port=port,
        streamable_http_path=DEFAULT_PATH,
    )

    @mcp.tool(name=TRANSPORT_TOOL)
    def transport_data(data: str) -> str:
        """Verify one frame and return DATA_SUCCESS, DATA_ERROR, or CODE_ERROR.

        Args:
            data: Frame as a string of 0/1 characters (payload then checksum).
        """
        return session.handle(data).value

    @mcp.tool()
    def set_code(code: str) -> dict[str, Any]:
        """Replace the receiver's generator code.

        Args:
            code: Generator polynomial as binary digits, e.g. "1001".
        """
        try:
            parsed = GeneratorCode.parse(code)
        except InvalidFormatError as e:
            return {"error": str(e)}
        session.configure(parsed)
        return _status(session)

    @mcp.tool()
    def get_status() -> dict[str, Any]:
        """Report whether a code is configured, and which one."""
        return _status(session)

    @mcp.resource("checksum://receiver/status")
    def resource_status() -> str:
        """Receiver configuration state."""
        return json.dumps(_status(session))

    return mcp


def serve(session: ReceiverSession, host: str = DEFAULT_HOST, port: int = DEFAULT_PORT) -> None:
    """Run the receiver server until the process exits."""
    logger.info("Receiver listening on http://%s:%d%s", host, port, DEFAULT_PATH)
    create_server(session, host, port).run(transport="streamable-http")
