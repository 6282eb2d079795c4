"""Command-line entry point: ``todoist-mcp [--token TOKEN] [--transport stdio|http]``."""
import argparse
import asyncio
import logging
from typing import Optional

from .config import configure_logging, get_settings
from .context import ServerContext

logger = logging.getLogger("todoist-mcp")


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="todoist-mcp",
        description="Run the Todoist MCP server.",
    )
    parser.add_argument(
        "-t", "--token",
        help="Todoist API token (overrides TODOIST_API_TOKEN)",
    )
    parser.add_argument(
        "--transport",
        choices=["stdio", "http"],
        default="stdio",
        help="Transport to serve on (default: stdio)",
    )
    parser.add_argument("--host", help="Bind address for the HTTP transport")
    parser.add_argument("--port", type=int, help="Port for the HTTP transport")
    return parser.parse_args(argv)


def main(argv: Optional[list[str]] = None) -> None:
    args = parse_args(argv)

    settings = get_settings()
    overrides = {key: value for key, value in (("host", args.host), ("port", args.port)) if value is not None}
    if overrides:
        settings = settings.model_copy(update=overrides)

    configure_logging(settings)
    logger.info("Initializing server...")

    ctx = ServerContext(settings)
    if ctx.use_token(args.token) is None:
        logger.warning(
            "Todoist client is not initialized. Set TODOIST_API_TOKEN in the environment "
            "or a .env file, or pass --token when starting the server."
        )

    if args.transport == "http":
        from .http_server import run_http
        run_http(ctx)
    else:
        from .server import run_stdio
        asyncio.run(run_stdio(ctx))


if __name__ == "__main__":
    main()
