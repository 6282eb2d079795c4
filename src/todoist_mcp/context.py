"""Per-process server context owning the Todoist client."""
from typing import Optional
import logging

import httpx

from .client import TodoistClient
from .config import Settings

logger = logging.getLogger("todoist-mcp")


class ServerContext:
    """Holds settings and the single Todoist client for the process.

    The client is created on first use. If no token was configured at
    startup, ``use_token`` creates it once a token is supplied.
    """

    def __init__(self, settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.settings = settings
        self._transport = transport
        self._client: Optional[TodoistClient] = None

    @property
    def client(self) -> Optional[TodoistClient]:
        if self._client is None and self.settings.api_token:
            self._client = TodoistClient(
                self.settings.api_token,
                base_url=self.settings.api_base_url,
                timeout=self.settings.request_timeout,
                transport=self._transport,
            )
            logger.info(f"Todoist client initialized for {self.settings.api_base_url}")
        return self._client

    def use_token(self, token: Optional[str]) -> Optional[TodoistClient]:
        """Adopt ``token`` if no client exists yet, and return the client."""
        if self._client is None and token:
            self.settings = self.settings.with_token(token)
        return self.client

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None
