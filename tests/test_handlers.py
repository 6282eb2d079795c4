"""Tests for the tool catalog and the tool dispatcher."""
import json
from datetime import datetime

import pytest

from todoist_mcp.errors import (
    GatewayFailureError,
    InvalidArgumentError,
    MissingArgumentError,
    UnknownToolError,
)
from todoist_mcp.handlers import TOOL_HANDLERS, dispatch
from todoist_mcp.tools import get_tools


async def call(client, name, arguments=None) -> str:
    result = await dispatch(client, name, arguments)
    assert len(result) == 1
    assert result[0].type == "text"
    return result[0].text


class TestCatalog:

    def test_catalog_matches_handlers(self):
        names = [tool.name for tool in get_tools()]
        assert len(names) == 14
        assert len(set(names)) == 14
        assert set(names) == set(TOOL_HANDLERS)

    def test_tool_names(self):
        assert [tool.name for tool in get_tools()] == [
            "get_todoist_projects",
            "get_todoist_tasks",
            "create_todoist_project",
            "update_todoist_project",
            "delete_todoist_project",
            "create_todoist_task",
            "update_todoist_task",
            "delete_todoist_task",
            "complete_todoist_task",
            "reopen_todoist_task",
            "move_todoist_task",
            "get_completed_tasks",
            "get_today_completed_tasks",
            "get_week_completed_tasks",
        ]

    def test_catalog_is_stable(self):
        assert [t.model_dump() for t in get_tools()] == [t.model_dump() for t in get_tools()]

    def test_schema_properties_match_argument_models(self):
        """Every tool declares exactly its model's (camelCase) arguments and required ones."""
        for tool in get_tools():
            model, _ = TOOL_HANDLERS[tool.name]
            aliases = {name: field.alias or name for name, field in model.model_fields.items()}
            required = {aliases[name] for name, field in model.model_fields.items() if field.is_required()}
            assert set(tool.inputSchema.get("required", [])) == required, tool.name
            assert set(tool.inputSchema["properties"]) == set(aliases.values()), tool.name

    def test_argument_names_are_camel_case(self):
        properties = {tool.name: tool.inputSchema["properties"] for tool in get_tools()}
        assert set(properties["move_todoist_task"]) == {"taskId", "projectId", "sectionId", "parentId"}
        assert {"projectId", "dueString", "dueDate"} <= set(properties["create_todoist_task"])
        assert set(properties["get_todoist_tasks"]) == {"projectId", "filter"}


class TestArgumentValidation:

    @pytest.mark.asyncio
    async def test_unknown_tool(self, fake, client):
        with pytest.raises(UnknownToolError, match="Unknown tool: archive_everything"):
            await dispatch(client, "archive_everything", {})
        assert fake.requests == []

    @pytest.mark.asyncio
    @pytest.mark.parametrize("arguments", [{}, None, {"taskId": None}, {"taskId": "  "}])
    async def test_missing_required_argument(self, fake, client, arguments):
        with pytest.raises(MissingArgumentError, match="'taskId' for tool complete_todoist_task"):
            await dispatch(client, "complete_todoist_task", arguments)
        assert fake.requests == []

    @pytest.mark.asyncio
    async def test_numeric_strings_are_coerced(self, fake, client):
        await call(client, "create_todoist_task", {"content": "Pay rent", "priority": "4", "projectId": 42})
        assert json.loads(fake.requests[-1].content) == {"content": "Pay rent", "priority": 4, "project_id": "42"}

    @pytest.mark.asyncio
    async def test_snake_case_names_also_accepted(self, fake, client):
        fake.add_task("1", "Task")
        assert await call(client, "complete_todoist_task", {"task_id": "1"}) == "Task 1 completed"

    @pytest.mark.asyncio
    async def test_out_of_range_priority(self, fake, client):
        with pytest.raises(InvalidArgumentError, match="priority"):
            await dispatch(client, "create_todoist_task", {"content": "x", "priority": 7})
        assert fake.requests == []

    @pytest.mark.asyncio
    async def test_uncoercible_value(self, fake, client):
        with pytest.raises(InvalidArgumentError, match="limit"):
            await dispatch(client, "get_completed_tasks", {"limit": "many"})

    @pytest.mark.asyncio
    async def test_unknown_argument_rejected(self, fake, client):
        with pytest.raises(InvalidArgumentError, match="colour"):
            await dispatch(client, "create_todoist_project", {"name": "X", "colour": "red"})

    @pytest.mark.asyncio
    async def test_arguments_must_be_an_object(self, client):
        with pytest.raises(InvalidArgumentError, match="arguments"):
            await dispatch(client, "get_todoist_projects", ["not", "a", "dict"])


class TestReadTools:

    @pytest.mark.asyncio
    async def test_list_projects(self, fake, client):
        fake.add_project("1", "Work")
        body = json.loads(await call(client, "get_todoist_projects"))
        assert [p["name"] for p in body] == ["Work"]

    @pytest.mark.asyncio
    async def test_list_tasks_all(self, fake, client):
        fake.add_task("1", "A", project_id="p1")
        fake.add_task("2", "B", project_id="p2")
        body = json.loads(await call(client, "get_todoist_tasks", {}))
        assert [t["id"] for t in body] == ["1", "2"]

    @pytest.mark.asyncio
    async def test_list_tasks_by_project(self, fake, client):
        fake.add_task("1", "A", project_id="p1")
        fake.add_task("2", "B", project_id="p2")
        body = json.loads(await call(client, "get_todoist_tasks", {"projectId": "p2"}))
        assert [t["id"] for t in body] == ["2"]

    @pytest.mark.asyncio
    async def test_today_filter_wins_over_project(self, fake, client, today):
        fake.add_task("1", "Due", project_id="p1", due=today)
        fake.add_task("2", "Other project", project_id="p2")

        body = json.loads(await call(client, "get_todoist_tasks", {"filter": "today", "projectId": "p2"}))

        assert [t["id"] for t in body] == ["1"]
        assert fake.paths() == ["GET /tasks/filter"]

    @pytest.mark.asyncio
    async def test_completed_tasks(self, fake, client):
        fake.add_completed("1", "Done", datetime(2026, 3, 2, 9, 0), project_id="p1")
        body = json.loads(await call(client, "get_completed_tasks", {
            "since": "2026-03-01T00:00:00",
            "until": "2026-03-07T23:59:59",
            "projectId": "p1",
        }))
        assert [t["content"] for t in body] == ["Done"]

    @pytest.mark.asyncio
    async def test_today_and_week_completed(self, fake, client):
        fake.add_completed("1", "Just now", datetime.now())
        assert json.loads(await call(client, "get_today_completed_tasks"))[0]["id"] == "1"
        assert json.loads(await call(client, "get_week_completed_tasks"))[0]["id"] == "1"


class TestWriteTools:

    @pytest.mark.asyncio
    async def test_create_project(self, fake, client):
        text = await call(client, "create_todoist_project", {"name": "Garden", "color": "green"})
        assert text.startswith("Created project: Garden (ID: 100)")
        assert "Color: green" in text

    @pytest.mark.asyncio
    async def test_create_sub_project(self, fake, client):
        fake.add_project("1", "Work")
        await call(client, "create_todoist_project", {"name": "Q3", "parentId": "1"})
        assert json.loads(fake.requests[-1].content) == {"name": "Q3", "parent_id": "1"}

    @pytest.mark.asyncio
    async def test_update_project(self, fake, client):
        fake.add_project("1", "Work")
        text = await call(client, "update_todoist_project", {"projectId": "1", "name": "Job"})
        assert text.startswith("Updated project 1: Job")
        assert json.loads(fake.requests[-1].content) == {"name": "Job"}

    @pytest.mark.asyncio
    async def test_delete_project(self, fake, client):
        fake.add_project("1", "Work")
        assert await call(client, "delete_todoist_project", {"projectId": "1"}) == "Project 1 deleted"

    @pytest.mark.asyncio
    async def test_create_task(self, fake, client):
        text = await call(client, "create_todoist_task", {"content": "Call mom", "labels": ["family"], "dueString": "tomorrow"})
        assert text.startswith("Created task: Call mom (ID: 100)")
        assert "Labels: family" in text
        assert json.loads(fake.requests[-1].content)["due_string"] == "tomorrow"

    @pytest.mark.asyncio
    async def test_update_task(self, fake, client):
        fake.add_task("1", "Old")
        text = await call(client, "update_todoist_task", {"taskId": "1", "priority": 3})
        assert text.startswith("Updated task 1: Old")
        assert "Priority: 3" in text

    @pytest.mark.asyncio
    @pytest.mark.parametrize("tool, verb", [
        ("complete_todoist_task", "completed"),
        ("delete_todoist_task", "deleted"),
    ])
    async def test_simple_task_actions(self, fake, client, tool, verb):
        fake.add_task("1", "Task")
        assert await call(client, tool, {"taskId": "1"}) == f"Task 1 {verb}"

    @pytest.mark.asyncio
    async def test_reopen_task(self, fake, client):
        fake.add_task("1", "Task")
        await call(client, "complete_todoist_task", {"taskId": "1"})
        assert await call(client, "reopen_todoist_task", {"taskId": "1"}) == "Task 1 reopened"

    @pytest.mark.asyncio
    async def test_move_task(self, fake, client):
        fake.add_task("1", "Task")
        text = await call(client, "move_todoist_task", {"taskId": "1", "projectId": "p2", "sectionId": "s1"})
        assert text == "Task 1 moved to project p2, section s1"
        assert json.loads(fake.requests[-1].content) == {"project_id": "p2", "section_id": "s1"}


class TestFailures:

    @pytest.mark.asyncio
    async def test_failure_names_action_and_target(self, fake, client):
        fake.fail_with = 500
        with pytest.raises(GatewayFailureError, match="Failed to complete task 7"):
            await dispatch(client, "complete_todoist_task", {"taskId": "7"})

    @pytest.mark.asyncio
    async def test_missing_task(self, fake, client):
        with pytest.raises(GatewayFailureError, match="Failed to delete task 404"):
            await dispatch(client, "delete_todoist_task", {"taskId": "404"})

    @pytest.mark.asyncio
    async def test_not_initialized(self):
        with pytest.raises(GatewayFailureError, match="Failed to retrieve projects"):
            await dispatch(None, "get_todoist_projects", {})
