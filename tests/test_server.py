"""Tests for the receiver's MCP server tools."""

from __future__ import annotations

import json
from unittest.mock import MagicMock, patch

from checksum_link.models.generator import GeneratorCode
from checksum_link.transport.channel import TRANSPORT_TOOL
from checksum_link.transport.receiver import ReceiverSession


def _create(session: ReceiverSession, **kwargs):
    """Build the server with FastMCP mocked, returning registered handlers."""
    registered: dict[str, object] = {}

    def register(fn):
        registered[fn.__name__] = fn
        return fn

    mock_fastmcp_cls = MagicMock()
    mock_fastmcp_instance = MagicMock()
    # Make the decorators no-ops that record the function
    mock_fastmcp_instance.tool.return_value = register
    mock_fastmcp_instance.resource.return_value = register
    mock_fastmcp_cls.return_value = mock_fastmcp_instance

    from checksum_link import server

    with patch.object(server, "FastMCP", mock_fastmcp_cls):
        mcp = server.create_server(session, **kwargs)

    assert mcp is mock_fastmcp_instance
    return registered, mock_fastmcp_cls, mock_fastmcp_instance


def test_server_settings():
    _, cls, _ = _create(ReceiverSession(), host="0.0.0.0", port=9999)
    kwargs = cls.call_args.kwargs
    assert kwargs["host"] == "0.0.0.0"
    assert kwargs["port"] == 9999
    assert kwargs["streamable_http_path"] == "/mcp"


def test_transport_tool_registered_under_wire_name():
    _, _, instance = _create(ReceiverSession())
    names = [c.kwargs.get("name") for c in instance.tool.call_args_list]
    assert TRANSPORT_TOOL in names


def test_transport_data_tokens():
    session = ReceiverSession()
    tools, _, _ = _create(session)

    assert tools["transport_data"]("1101100") == "CODE_ERROR"
    session.configure(GeneratorCode.parse("1001"))
    assert tools["transport_data"]("1101100") == "DATA_SUCCESS"
    assert tools["transport_data"]("1101101") == "DATA_ERROR"


def test_set_code_tool():
    session = ReceiverSession()
    tools, _, _ = _create(session)

    result = tools["set_code"]("1011")
    assert result == {"configured": True, "code": "1011", "degree": 3}
    assert session.snapshot() == GeneratorCode.parse("1011")


def test_set_code_rejects_bad_input():
    session = ReceiverSession(GeneratorCode.parse("1001"))
    tools, _, _ = _create(session)

    result = tools["set_code"]("12")
    assert "error" in result
    assert session.snapshot().bits == "1001"


def test_status_tool_and_resource():
    session = ReceiverSession()
    tools, _, _ = _create(session)

    assert tools["get_status"]() == {"configured": False, "code": None, "degree": None}
    session.configure(GeneratorCode.parse("11"))
    assert json.loads(tools["resource_status"]()) == {
        "configured": True,
        "code": "11",
        "degree": 1,
    }


def test_serve_runs_streamable_http():
    from checksum_link import server

    instance = MagicMock()
    with patch.object(server, "create_server", return_value=instance) as create:
        server.serve(ReceiverSession(), "127.0.0.1", 8181)

    create.assert_called_once()
    instance.run.assert_called_once_with(transport="streamable-http")
