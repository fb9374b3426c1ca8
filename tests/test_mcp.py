import json
import pytest

from app.main import init_app


async def call_tool(app, arguments):
    mcp = app.state.mcp
    return await mcp._execute_api_tool(
        app.state.mcp_client,
        "summarize_url",
        arguments,
        mcp.operation_map,
    )


def test_mcp_tools(app):
    assert [tool.name for tool in app.state.mcp.tools] == ["summarize_url"]


async def test_summarize_url_tool(app, content_client):
    result = await call_tool(app, {"url": "https://example.com"})

    assert json.loads(result[0].text) == {"pass": True, "metaTags": "testing, example, benign"}
    assert content_client.calls == [("https://example.com", True)]


async def test_summarize_url_tool_error(app, content_client):
    with pytest.raises(Exception) as exc_info:
        await call_tool(app, {"url": "not-a-url"})

    assert "400" in str(exc_info.value)
    assert "Invalid URL format" in str(exc_info.value)
    assert content_client.calls == []


def test_init_app_without_mcp(test_config, summarizer):
    app = init_app(config=test_config, summarizer=summarizer, mount_mcp=False)
    assert app.state.mcp is None
    assert all(getattr(route, "path", None) != "/mcp" for route in app.routes)
