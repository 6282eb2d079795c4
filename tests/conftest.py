"""Shared fixtures: an in-memory Todoist API served through httpx.MockTransport."""
import itertools
import json
from datetime import date, datetime, timedelta
from typing import Optional

import httpx
import pytest
import pytest_asyncio

from todoist_mcp.client import TodoistClient

BASE_URL = "https://api.todoist.test/api/v1"
API_PREFIX = "/api/v1"


class FakeTodoist:
    """Minimal stand-in for the Todoist REST API.

    Every request is recorded in ``requests``. Set ``fail_with`` to answer
    every call with that status code, ``envelope = False`` to answer list
    endpoints with bare arrays, and ``page_size`` to paginate with cursors.
    """

    def __init__(self):
        self.projects: dict[str, dict] = {}
        self.tasks: dict[str, dict] = {}
        self.completed: dict[str, dict] = {}
        self.requests: list[httpx.Request] = []
        self.fail_with: Optional[int] = None
        self.envelope = True
        self.page_size: Optional[int] = None
        self._ids = itertools.count(100)

    # Seeding helpers

    def add_project(self, project_id: str, name: str, parent_id: Optional[str] = None, **extra) -> dict:
        project = {"id": project_id, "name": name, "color": "charcoal", "parent_id": parent_id, **extra}
        self.projects[project_id] = project
        return project

    def add_task(self, task_id: str, content: str, project_id: str = "inbox", due: Optional[date] = None, **extra) -> dict:
        task = {"id": task_id, "content": content, "project_id": project_id, "priority": 1, "labels": [], **extra}
        if due is not None:
            task["due"] = {"date": due.isoformat(), "string": due.isoformat(), "is_recurring": False}
        self.tasks[task_id] = task
        return task

    def add_completed(self, task_id: str, content: str, completed_at: datetime, **extra) -> dict:
        item = {
            "id": task_id,
            "content": content,
            "project_id": "inbox",
            "completed_at": completed_at.isoformat(timespec="seconds"),
            **extra,
        }
        self.completed[task_id] = item
        return item

    def paths(self) -> list[str]:
        return [f"{r.method} {r.url.path[len(API_PREFIX):]}" for r in self.requests]

    # Transport

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.fail_with:
            return httpx.Response(self.fail_with, json={"error": "Simulated failure"})

        parts = request.url.path[len(API_PREFIX):].strip("/").split("/")
        body = json.loads(request.content) if request.content else {}
        params = request.url.params
        method = request.method

        if parts == ["projects"]:
            if method == "GET":
                return self._list(list(self.projects.values()), params)
            project_id = str(next(self._ids))
            project = {"id": project_id, "parent_id": None, **body}
            self.projects[project_id] = project
            return httpx.Response(200, json=project)

        if parts[0] == "projects" and len(parts) == 2:
            project = self.projects.get(parts[1])
            if project is None:
                return httpx.Response(404, text="Project not found")
            if method == "GET":
                return httpx.Response(200, json=project)
            if method == "POST":
                project.update(body)
                return httpx.Response(200, json=project)
            del self.projects[parts[1]]
            return httpx.Response(204)

        if parts == ["tasks", "filter"]:
            assert params["query"] == "today|overdue"
            today = date.today().isoformat()
            due = [t for t in self.tasks.values() if t.get("due") and t["due"]["date"] <= today]
            return self._list(due, params)

        if parts == ["tasks", "completed", "by_completion_date"]:
            items = [
                item for item in self.completed.values()
                if params["since"] <= item["completed_at"] <= params.get("until", "9999")
                and ("project_id" not in params or item["project_id"] == params["project_id"])
            ]
            if "limit" in params:
                items = items[:int(params["limit"])]
            return httpx.Response(200, json={"items": items, "next_cursor": None})

        if parts == ["tasks"]:
            if method == "GET":
                tasks = list(self.tasks.values())
                if "project_id" in params:
                    tasks = [t for t in tasks if t.get("project_id") == params["project_id"]]
                return self._list(tasks, params)
            task_id = str(next(self._ids))
            task = {"id": task_id, "project_id": "inbox", "priority": 1, "labels": [], **body}
            self.tasks[task_id] = task
            return httpx.Response(200, json=task)

        if parts[0] == "tasks":
            task_id = parts[1]
            action = parts[2] if len(parts) > 2 else None
            if action == "reopen":
                task = self.completed.pop(task_id, None)
                if task is None:
                    return httpx.Response(404, text="Task not found")
                task.pop("completed_at", None)
                self.tasks[task_id] = task
                return httpx.Response(204)
            task = self.tasks.get(task_id)
            if task is None:
                return httpx.Response(404, text="Task not found")
            if action == "close":
                del self.tasks[task_id]
                self.completed[task_id] = {**task, "completed_at": datetime.now().isoformat(timespec="seconds")}
                return httpx.Response(204)
            if action == "move":
                task.update(body)
                return httpx.Response(200, json=task)
            if method == "GET":
                return httpx.Response(200, json=task)
            if method == "POST":
                task.update(body)
                return httpx.Response(200, json=task)
            del self.tasks[task_id]
            return httpx.Response(204)

        return httpx.Response(404, text="No route")

    def _list(self, items: list[dict], params) -> httpx.Response:
        if not self.envelope:
            return httpx.Response(200, json=items)
        next_cursor = None
        if self.page_size:
            start = int(params.get("cursor", "0"))
            end = start + self.page_size
            next_cursor = str(end) if end < len(items) else None
            items = items[start:end]
        return httpx.Response(200, json={"results": items, "next_cursor": next_cursor})


@pytest.fixture
def fake() -> FakeTodoist:
    return FakeTodoist()


@pytest_asyncio.fixture
async def client(fake):
    todoist = TodoistClient("test-token", base_url=BASE_URL, transport=httpx.MockTransport(fake.handler))
    yield todoist
    await todoist.aclose()


@pytest.fixture
def today() -> date:
    return date.today()


@pytest.fixture
def yesterday(today) -> date:
    return today - timedelta(days=1)


@pytest.fixture
def tomorrow(today) -> date:
    return today + timedelta(days=1)
