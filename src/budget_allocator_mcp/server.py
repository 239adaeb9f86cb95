"""
MCP server for the budget allocator.

Exposes the allocation engine through the Model Context Protocol.
"""

import json
import logging
from pathlib import Path
from typing import Any, Optional

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import TextContent, Tool

from budget_allocator_mcp.core.exceptions import BudgetError
from budget_allocator_mcp.core.session import BudgetSession
from budget_allocator_mcp.core.settings import BudgetSettings, get_settings
from budget_allocator_mcp.core.storage import JsonFileStorage
from budget_allocator_mcp.tools.tools import TOOL_NAMES, BudgetTools, create_tool_schemas

logger = logging.getLogger(__name__)


class BudgetAllocatorServer:
    """MCP server over one user's budget session."""

    def __init__(
        self,
        data_dir: Optional[Path] = None,
        user_id: Optional[str] = None,
        settings: Optional[BudgetSettings] = None,
    ):
        """
        Initialize the MCP server.

        Args:
            data_dir: Directory for state files. If None, uses settings.
            user_id: User whose state is served. If None, uses settings.
            settings: Application settings. If None, loads them from the environment.
        """
        self.settings = settings if settings is not None else get_settings()
        self.storage = JsonFileStorage(
            data_dir or self.settings.data_dir,
            default_currency=self.settings.default_currency,
        )
        self.session = BudgetSession(
            self.storage, user_id or self.settings.user_id, settings=self.settings
        )
        self.tools = BudgetTools(self.session)
        self.server = Server("budget-allocator-mcp")

        # Register handlers
        self._register_handlers()

    def _register_handlers(self) -> None:
        """Register MCP protocol handlers."""

        @self.server.list_tools()
        async def list_tools() -> list[Tool]:
            """List available tools."""
            return [
                Tool(
                    name=schema["name"],
                    description=schema["description"],
                    inputSchema=schema["inputSchema"],
                )
                for schema in create_tool_schemas()
            ]

        @self.server.call_tool()
        async def call_tool(name: str, arguments: dict[str, Any]) -> list[TextContent]:
            """Handle tool calls."""
            return await self.handle_tool(name, arguments)

    async def handle_tool(
        self, name: str, arguments: Optional[dict[str, Any]]
    ) -> list[TextContent]:
        """Route a tool call to its handler and format the response."""
        if name not in TOOL_NAMES:
            return [TextContent(type="text", text=f"Unknown tool: {name}")]

        # Check that state can be saved
        if not self.storage.is_available():
            error_msg = (
                f"Data directory not available: {self.storage.data_dir}. Please create it "
                "or point BUDGET_DATA_DIR at a writable directory."
            )
            return [TextContent(type="text", text=error_msg)]

        try:
            handler = getattr(self.tools, name)
            result = handler(**(arguments or {}))
            return [TextContent(type="text", text=json.dumps(result, indent=2))]

        except (ValueError, TypeError, BudgetError) as e:
            # Bad arguments, unknown ids and similar caller errors
            return [TextContent(type="text", text=f"Error: {str(e)}")]
        except Exception as e:
            logger.exception("Error executing tool %s", name)
            return [
                TextContent(
                    type="text",
                    text=f"Error executing tool: {str(e)}",
                )
            ]

    async def run(self) -> None:  # pragma: no cover
        """Run the MCP server using stdio transport."""
        try:
            async with stdio_server() as (read_stream, write_stream):
                await self.server.run(
                    read_stream,
                    write_stream,
                    self.server.create_initialization_options(),
                )
        finally:
            await self.session.flush()


async def run_server(
    data_dir: Optional[Path] = None, user_id: Optional[str] = None
) -> None:  # pragma: no cover
    """
    Run the budget allocator MCP server.

    Args:
        data_dir: Optional directory for state files
        user_id: Optional user id
    """
    server = BudgetAllocatorServer(data_dir, user_id)
    await server.run()
