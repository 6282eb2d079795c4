"""Runtime configuration and logging setup."""
import logging
import os
import sys
from functools import lru_cache
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field

DEFAULT_API_BASE_URL = "https://api.todoist.com/api/v1"
DEFAULT_LOG_FILE = "todoist-mcp-server.log"
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


class Settings(BaseModel):
    """Settings for the MCP server, read from the environment."""

    api_token: Optional[str] = None
    api_base_url: str = DEFAULT_API_BASE_URL
    request_timeout: float = Field(30.0, gt=0)
    log_level: str = "INFO"
    log_file: Optional[str] = DEFAULT_LOG_FILE
    host: str = "127.0.0.1"
    port: int = 3002

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from environment variables (after .env is loaded)."""
        log_file = os.getenv("TODOIST_MCP_LOG_FILE", DEFAULT_LOG_FILE)
        return cls(
            api_token=os.getenv("TODOIST_API_TOKEN") or None,
            api_base_url=os.getenv("TODOIST_API_BASE_URL", DEFAULT_API_BASE_URL),
            request_timeout=float(os.getenv("TODOIST_REQUEST_TIMEOUT", "30")),
            log_level=os.getenv("TODOIST_MCP_LOG_LEVEL", "INFO").upper(),
            log_file=log_file or None,
            host=os.getenv("HOST", "127.0.0.1"),
            port=int(os.getenv("PORT", "3002")),
        )

    def with_token(self, token: Optional[str]) -> "Settings":
        """Return a copy using ``token`` when one is given (CLI overrides env)."""
        if not token:
            return self
        return self.model_copy(update={"api_token": token})


@lru_cache()
def get_settings() -> Settings:
    """Load .env once and return the cached settings."""
    load_dotenv()
    return Settings.from_env()


def configure_logging(settings: Settings) -> None:
    """Log to stderr and, when configured, to an append-mode file.

    stdout is reserved for the stdio protocol stream.
    """
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if settings.log_file:
        handlers.append(logging.FileHandler(settings.log_file, mode="a", encoding="utf-8"))

    logging.basicConfig(
        level=settings.log_level,
        format=LOG_FORMAT,
        handlers=handlers,
        force=True
    )
