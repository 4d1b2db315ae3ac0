import pytest

from conftest import FakeResponse, FakeSession
from core.mcp_http import McpHttpClient


def test_call_tool_returns_first_text_block():
    session = FakeSession(FakeResponse(200, {
        "jsonrpc": "2.0", "id": "x",
        "result": {"content": [{"type": "text", "text": "W vs Kansas"}]},
    }))
    client = McpHttpClient("http://localhost:8080/mcp/", token="s3cret", session=session)

    assert client.callTool("get_basketball_score", {"team": "oklahoma"}) == "W vs Kansas"

    call = session.calls[0]
    assert call["url"] == "http://localhost:8080/mcp"
    assert call["json"]["method"] == "tools/call"
    assert call["json"]["params"] == {"name": "get_basketball_score", "arguments": {"team": "oklahoma"}}
    assert session.headers["Authorization"] == "Bearer s3cret"


def test_error_envelope_raises_even_with_http_error_status():
    session = FakeSession(FakeResponse(401, {
        "jsonrpc": "2.0", "id": None, "error": {"code": -32001, "message": "Unauthorized"},
    }))
    client = McpHttpClient("http://localhost:8080/mcp", session=session)
    with pytest.raises(RuntimeError, match="Unauthorized"):
        client.listTools()


def test_list_tools_is_cached():
    session = FakeSession(FakeResponse(200, {"jsonrpc": "2.0", "id": 1, "result": {"tools": [{"name": "t"}]}}))
    client = McpHttpClient("http://localhost:8080/mcp", session=session)
    assert client.listTools() == {"result": {"tools": [{"name": "t"}]}}
    client.listTools()
    assert len(session.calls) == 1
    client.stop()
    assert session.closed
