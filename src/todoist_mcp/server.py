"""Todoist MCP Server - Expose Todoist projects and tasks to AI assistants.

Resources (todoist://...) are for reading; tools are for queries and changes.
"""
from typing import Any, Iterable, Optional
import logging

from mcp.server import Server
from mcp.server.lowlevel.helper_types import ReadResourceContents
from mcp.server.stdio import stdio_server
from mcp.types import (
    GetPromptResult,
    Prompt,
    PromptMessage,
    Resource,
    TextContent,
    Tool,
)
from pydantic import AnyUrl

from . import __version__
from . import handlers
from . import resources
from . import tools
from .context import ServerContext
from .errors import TodoistMCPError

logger = logging.getLogger("todoist-mcp")

SERVER_INSTRUCTIONS = (
    "MCP server for Todoist. Use the RESOURCES to read projects and tasks "
    "(todoist://today/tasks, todoist://project/{id}, todoist://project/{id}/tasks, "
    "todoist://project/{id}/structure, todoist://task/{id}) and the TOOLS to create, "
    "update, complete, move or delete them."
)

OVERVIEW_PROMPT = "todoist_overview"


def create_server(ctx: ServerContext) -> Server:
    """Build the MCP server; every handler reads the client from ``ctx``."""
    app = Server("todoist-mcp", version=__version__, instructions=SERVER_INSTRUCTIONS)

    @app.list_resources()
    async def list_resources() -> list[Resource]:
        """List today's view, every project and every task."""
        logger.info("Listing resources")
        return await resources.list_resources(ctx.client)

    @app.read_resource()
    async def read_resource(uri: AnyUrl) -> Iterable[ReadResourceContents]:
        try:
            text = await resources.read_resource(ctx.client, str(uri))
        except TodoistMCPError as e:
            logger.warning(f"Resource read failed for {uri}: {e}")
            raise
        return [ReadResourceContents(content=text, mime_type=resources.MIME_TYPE)]

    @app.list_tools()
    async def list_tools() -> list[Tool]:
        """List available MCP tools for Todoist."""
        return tools.get_tools()

    # Arguments are validated and coerced by the per-tool models in handlers.
    @app.call_tool(validate_input=False)
    async def call_tool(name: str, arguments: Optional[dict[str, Any]]) -> list[TextContent]:
        """Handle MCP tool calls by delegating to the dispatcher."""
        logger.info(f"Tool call: {name} with arguments: {arguments}")
        try:
            return await handlers.dispatch(ctx.client, name, arguments)
        except TodoistMCPError as e:
            logger.warning(f"Tool {name} failed: {e}")
            raise

    @app.list_prompts()
    async def list_prompts() -> list[Prompt]:
        return [
            Prompt(
                name=OVERVIEW_PROMPT,
                description="Summarize the current state of Todoist",
            )
        ]

    @app.get_prompt()
    async def get_prompt(name: str, arguments: Optional[dict[str, str]] = None) -> GetPromptResult:
        if name != OVERVIEW_PROMPT:
            raise ValueError(f"Unknown prompt: {name}")
        return GetPromptResult(
            description="Summarize the current state of Todoist",
            messages=[
                PromptMessage(
                    role="user",
                    content=TextContent(
                        type="text",
                        text="Summarize the current state of my Todoist, including projects and tasks."
                    )
                )
            ]
        )

    return app


async def run_stdio(ctx: ServerContext) -> None:
    """Run the MCP server over stdin/stdout."""
    app = create_server(ctx)
    try:
        async with stdio_server() as (read_stream, write_stream):
            logger.info("Server started on stdio")
            await app.run(read_stream, write_stream, app.create_initialization_options())
    finally:
        await ctx.aclose()
