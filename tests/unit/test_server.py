"""
Unit tests for the MCP server implementation.
"""

import json
import logging

import pytest
from mcp.types import TextContent

from budget_allocator_mcp.server import BudgetAllocatorServer
from budget_allocator_mcp.tools.tools import TOOL_NAMES


@pytest.fixture
def server(settings):
    """Create server over an empty temporary data directory."""
    return BudgetAllocatorServer(settings=settings)


@pytest.mark.unit
def test_server_initialization(server, settings):
    """Test server initialization from settings."""
    assert server.session is not None
    assert server.tools is not None
    assert server.server is not None
    assert server.storage.data_dir == settings.data_dir
    assert server.session.user_id == "tester"


@pytest.mark.unit
def test_server_overrides(settings, tmp_path):
    """Test that explicit arguments win over settings."""
    server = BudgetAllocatorServer(tmp_path / "other", "alice", settings=settings)

    assert server.storage.data_dir == tmp_path / "other"
    assert server.session.user_id == "alice"


@pytest.mark.unit
def test_server_starts_from_empty_state(server):
    """Test that a user with no saved state starts blank."""
    assert server.session.state.total_income == 0.0
    assert server.session.state.categories == []


@pytest.mark.unit
def test_handlers_registered(server):
    """Test that list_tools and call_tool handlers are registered."""
    assert hasattr(server.server, "list_tools")
    assert hasattr(server.server, "call_tool")


@pytest.mark.unit
@pytest.mark.asyncio
async def test_handle_tool_returns_json(server):
    """Test that tool results are returned as indented JSON text."""
    [content] = await server.handle_tool("set_total_income", {"amount": 1000})

    assert isinstance(content, TextContent)
    payload = json.loads(content.text)
    assert payload["accepted"] is True
    assert payload["total_income"] == 1000.0


@pytest.mark.unit
@pytest.mark.asyncio
async def test_handle_tool_without_arguments(server):
    """Test that a missing arguments dict is treated as empty."""
    [content] = await server.handle_tool("get_budget_overview", None)
    assert json.loads(content.text)["category_count"] == 0


@pytest.mark.unit
@pytest.mark.asyncio
async def test_handle_unknown_tool(server):
    """Test that unknown tool names are reported, not dispatched."""
    [content] = await server.handle_tool("__init__", {})
    assert content.text == "Unknown tool: __init__"


@pytest.mark.unit
@pytest.mark.asyncio
async def test_handle_tool_caller_errors(server):
    """Test that bad arguments come back as error text."""
    [missing] = await server.handle_tool("edit_category", {"category_id": "x"})
    assert missing.text.startswith("Error: ")

    [negative] = await server.handle_tool("add_category", {"name": "Rent", "amount": -5})
    assert negative.text.startswith("Error: ")

    [not_found] = await server.handle_tool("get_allocation_bounds", {"category_id": "nope"})
    assert not_found.text == "Error: Category not found: nope"


@pytest.mark.unit
@pytest.mark.asyncio
async def test_rejection_is_a_result_not_an_error(server):
    """Test that out-of-bound amounts return a rejected mutation."""
    await server.handle_tool("set_total_income", {"amount": 100})
    [content] = await server.handle_tool("add_category", {"name": "Rent", "amount": 150})

    payload = json.loads(content.text)
    assert payload["accepted"] is False
    assert payload["reason"] == "exceeds_available"
    assert "$100.00" in payload["message"]


@pytest.mark.unit
def test_tool_names_are_tools_methods(server):
    """Test that every advertised tool maps to a BudgetTools method."""
    for name in TOOL_NAMES:
        assert callable(getattr(server.tools, name))


@pytest.mark.unit
@pytest.mark.asyncio
async def test_handle_tool_when_data_dir_unavailable(settings, tmp_path):
    """Test that calls are refused when the data directory cannot be created."""
    server = BudgetAllocatorServer(tmp_path / "missing" / "deeper", settings=settings)

    [content] = await server.handle_tool("get_budget_overview", {})

    assert content.text.startswith("Data directory not available")
    assert server.session.state.categories == []


@pytest.mark.unit
@pytest.mark.asyncio
async def test_unexpected_error_is_logged(server, monkeypatch, caplog):
    """Test that unexpected failures are logged with the tool name as an argument."""

    def broken() -> dict:
        raise RuntimeError("disk on fire")

    monkeypatch.setattr(server.tools, "get_statistics", broken)

    with caplog.at_level(logging.ERROR, logger="budget_allocator_mcp.server"):
        [content] = await server.handle_tool("get_statistics", {})

    assert content.text == "Error executing tool: disk on fire"
    [record] = [r for r in caplog.records if r.name == "budget_allocator_mcp.server"]
    assert record.msg == "Error executing tool %s"
    assert record.args == ("get_statistics",)
    assert record.exc_info is not None
