"""Todoist MCP Server - Model Context Protocol integration for Todoist.

This package exposes Todoist projects and tasks to AI assistants as MCP
resources (read) and tools (query and change).

Modules:
- server: MCP server (resources, tools, prompt) and the stdio transport
- http_server: streamable HTTP transport
- resources: todoist:// resource namespace
- tools: MCP tool definitions
- handlers: tool handlers and dispatcher
- projects / tasks: operations against the Todoist API
- client: HTTP client for the Todoist API
"""

__version__ = "0.2.0"

from . import formatters
from . import tools
from . import handlers

__all__ = ["formatters", "tools", "handlers", "__version__"]
