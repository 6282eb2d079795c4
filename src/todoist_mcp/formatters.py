"""Shared formatting functions for MCP responses.

Reads are returned as pretty-printed JSON; mutations get a short
human-readable confirmation built from the records below.
"""
from typing import Any
import json

from .schemas import Project, Task


def to_json(data: Any) -> str:
    """Pretty-print records (or plain data containing records) as JSON."""
    return json.dumps(_plain(data), indent=2, ensure_ascii=False)


def _plain(data: Any) -> Any:
    if isinstance(data, list):
        return [_plain(item) for item in data]
    if isinstance(data, dict):
        return {key: _plain(value) for key, value in data.items()}
    if hasattr(data, "to_json_dict"):
        return data.to_json_dict()
    return data


def format_project(project: Project) -> str:
    """Format a project for display."""
    color_info = f"\nColor: {project.color}" if project.color else ""
    parent_info = f"\nParent: {project.parent_id}" if project.parent_id else ""

    return f"""**{project.name}**
ID: {project.id}{color_info}{parent_info}"""


def format_task(task: Task) -> str:
    """Format a task for display."""
    project_info = f"\nProject: {task.project_id}" if task.project_id else ""
    priority_info = f"\nPriority: {task.priority}" if task.priority else ""
    due_info = ""
    if task.due:
        due_info = f"\nDue: {task.due.string or task.due.date}"
        if task.due.is_recurring:
            due_info += " (recurring)"
    labels_info = f"\nLabels: {', '.join(task.labels)}" if task.labels else ""

    return f"""**{task.content}**
ID: {task.id}{project_info}{priority_info}{due_info}{labels_info}"""
