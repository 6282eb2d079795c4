"""Async HTTP client for the Todoist REST API.

The client is a thin wrapper: it authenticates, raises on non-2xx responses
(``httpx.HTTPStatusError``) and hands back decoded JSON. Error handling and
logging of faults belong to the project/task operations that call it.
"""
from typing import Any, Optional
import logging

import httpx
from pydantic import ValidationError

from .config import DEFAULT_API_BASE_URL
from .errors import NotInitializedError

logger = logging.getLogger("todoist-mcp.client")


def extract_results(payload: Any, key: str = "results") -> list[dict]:
    """Normalize a list response to a plain list.

    List endpoints answer either with a bare array or with an envelope such
    as ``{"results": [...], "next_cursor": ...}``. Anything else is treated
    as an empty result.
    """
    if isinstance(payload, list):
        return payload
    if isinstance(payload, dict) and isinstance(payload.get(key), list):
        return payload[key]
    return []


class TodoistClient:
    """Authenticated access to the Todoist API."""

    def __init__(
        self,
        token: str,
        base_url: str = DEFAULT_API_BASE_URL,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._client = httpx.AsyncClient(
            base_url=base_url,
            timeout=timeout,
            headers={"Authorization": f"Bearer {token}"},
            transport=transport,
        )

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _request(self, method: str, path: str, **kwargs) -> Any:
        response = await self._client.request(method, path, **kwargs)
        response.raise_for_status()
        if response.status_code == 204 or not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise httpx.DecodingError(
                f"Response is not JSON ({response.headers.get('content-type', 'no content type')})",
                request=response.request,
            ) from e

    async def _list_all(self, path: str, params: Optional[dict] = None) -> list[dict]:
        """Fetch every page of a list endpoint, one request at a time."""
        query = dict(params or {})
        items: list[dict] = []
        seen: set[str] = set()
        while True:
            payload = await self._request("GET", path, params=query)
            items.extend(extract_results(payload))
            cursor = payload.get("next_cursor") if isinstance(payload, dict) else None
            if not cursor:
                return items
            if cursor in seen:
                logger.warning(f"Cursor for {path} did not advance, stopping after {len(items)} items")
                return items
            seen.add(cursor)
            logger.debug(f"Following cursor for {path}")
            query["cursor"] = cursor

    # Projects

    async def list_projects(self) -> list[dict]:
        return await self._list_all("/projects")

    async def get_project(self, project_id: str) -> Any:
        return await self._request("GET", f"/projects/{project_id}")

    async def create_project(self, payload: dict) -> Any:
        return await self._request("POST", "/projects", json=payload)

    async def update_project(self, project_id: str, payload: dict) -> Any:
        return await self._request("POST", f"/projects/{project_id}", json=payload)

    async def delete_project(self, project_id: str) -> None:
        await self._request("DELETE", f"/projects/{project_id}")

    # Tasks

    async def list_tasks(self, project_id: Optional[str] = None) -> list[dict]:
        params = {"project_id": project_id} if project_id else None
        return await self._list_all("/tasks", params)

    async def filter_tasks(self, query: str) -> list[dict]:
        return await self._list_all("/tasks/filter", {"query": query})

    async def get_task(self, task_id: str) -> Any:
        return await self._request("GET", f"/tasks/{task_id}")

    async def create_task(self, payload: dict) -> Any:
        return await self._request("POST", "/tasks", json=payload)

    async def update_task(self, task_id: str, payload: dict) -> Any:
        return await self._request("POST", f"/tasks/{task_id}", json=payload)

    async def delete_task(self, task_id: str) -> None:
        await self._request("DELETE", f"/tasks/{task_id}")

    async def close_task(self, task_id: str) -> None:
        await self._request("POST", f"/tasks/{task_id}/close")

    async def reopen_task(self, task_id: str) -> None:
        await self._request("POST", f"/tasks/{task_id}/reopen")

    async def move_task(self, task_id: str, payload: dict) -> Any:
        return await self._request("POST", f"/tasks/{task_id}/move", json=payload)

    # Completed-task history

    async def get_completed_tasks(
        self,
        since: str,
        until: Optional[str] = None,
        project_id: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> list[dict]:
        """Query completed tasks by completion date.

        Pagination and ``limit`` are the history endpoint's own; only the
        first page is returned.
        """
        params: dict[str, Any] = {"since": since}
        if until:
            params["until"] = until
        if project_id:
            params["project_id"] = project_id
        if limit is not None:
            params["limit"] = limit
        payload = await self._request("GET", "/tasks/completed/by_completion_date", params=params)
        return extract_results(payload, key="items")


def require_client(client: Optional[TodoistClient]) -> TodoistClient:
    """Return ``client`` or raise NotInitializedError when no token was configured."""
    if client is None:
        raise NotInitializedError()
    return client


def log_api_error(log: logging.Logger, action: str, error: Exception) -> None:
    """Log a failed API call with as much detail as the error exposes."""
    if isinstance(error, NotInitializedError):
        log.error(f"Cannot {action}: {error}")
    elif isinstance(error, httpx.HTTPStatusError):
        if error.response.status_code == 404:
            log.warning(f"Cannot {action}: not found ({error.request.url})")
            return
        log.error(f"HTTP error while trying to {action}:")
        log.error(f"  Status: {error.response.status_code}")
        log.error(f"  URL: {error.request.url}")
        log.error(f"  Response body: {error.response.text}")
    elif isinstance(error, httpx.RequestError):
        try:
            url = error.request.url
        except RuntimeError:
            url = "N/A"
        log.error(f"Request error while trying to {action}:")
        log.error(f"  Error type: {type(error).__name__}")
        log.error(f"  Error message: {error}")
        log.error(f"  URL: {url}")
    else:
        log.error(f"Unexpected response while trying to {action}: {type(error).__name__}: {error}")


API_ERRORS = (NotInitializedError, httpx.HTTPStatusError, httpx.RequestError, ValidationError)
