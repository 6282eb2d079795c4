"""MCP tool definitions for Todoist.

The catalog is static; both the stdio and HTTP transports expose exactly this
list. Use the resources (todoist://...) for reading individual records and
these tools for queries and changes.
"""

from mcp.types import Tool


def _task_id(action: str) -> dict:
    return {"type": "string", "description": f"ID of the task to {action}"}


def get_tools() -> list[Tool]:
    """Get the list of all MCP tools for Todoist."""
    return [
        # ============================================================================
        # Read Tools
        # ============================================================================
        Tool(
            name="get_todoist_projects",
            description="List all Todoist projects.",
            inputSchema={
                "type": "object",
                "properties": {}
            }
        ),
        Tool(
            name="get_todoist_tasks",
            description="List open Todoist tasks. "
                       "filter='today' returns tasks due today or overdue and takes precedence over projectId; "
                       "projectId restricts the list to one project.",
            inputSchema={
                "type": "object",
                "properties": {
                    "projectId": {
                        "type": "string",
                        "description": "Only tasks of this project (optional)"
                    },
                    "filter": {
                        "type": "string",
                        "description": "'today' for tasks due today or overdue (optional)"
                    }
                }
            }
        ),
        # ============================================================================
        # Project Tools
        # ============================================================================
        Tool(
            name="create_todoist_project",
            description="Create a new Todoist project, optionally as a sub-project.",
            inputSchema={
                "type": "object",
                "properties": {
                    "name": {
                        "type": "string",
                        "description": "Project name"
                    },
                    "color": {
                        "type": "string",
                        "description": "Project color, e.g. 'berry_red' (optional)"
                    },
                    "parentId": {
                        "type": "string",
                        "description": "ID of the parent project (optional)"
                    }
                },
                "required": ["name"]
            }
        ),
        Tool(
            name="update_todoist_project",
            description="Update an existing Todoist project (name, color). Only the fields given are changed.",
            inputSchema={
                "type": "object",
                "properties": {
                    "projectId": {
                        "type": "string",
                        "description": "ID of the project to update"
                    },
                    "name": {
                        "type": "string",
                        "description": "New project name (optional)"
                    },
                    "color": {
                        "type": "string",
                        "description": "New project color (optional)"
                    }
                },
                "required": ["projectId"]
            }
        ),
        Tool(
            name="delete_todoist_project",
            description="Delete a Todoist project together with its tasks.",
            inputSchema={
                "type": "object",
                "properties": {
                    "projectId": {
                        "type": "string",
                        "description": "ID of the project to delete"
                    }
                },
                "required": ["projectId"]
            }
        ),
        # ============================================================================
        # Task Tools
        # ============================================================================
        Tool(
            name="create_todoist_task",
            description="Create a new Todoist task.",
            inputSchema={
                "type": "object",
                "properties": {
                    "content": {
                        "type": "string",
                        "description": "Task title"
                    },
                    "description": {
                        "type": "string",
                        "description": "Longer task description (optional)"
                    },
                    "projectId": {
                        "type": "string",
                        "description": "ID of the project the task belongs to (optional, default: Inbox)"
                    },
                    "sectionId": {
                        "type": "string",
                        "description": "ID of the section the task belongs to (optional)"
                    },
                    "parentId": {
                        "type": "string",
                        "description": "ID of the parent task, to create a sub-task (optional)"
                    },
                    "dueString": {
                        "type": "string",
                        "description": "Due date in natural language, e.g. 'tomorrow', 'every monday' (optional)"
                    },
                    "dueDate": {
                        "type": "string",
                        "description": "Due date as YYYY-MM-DD (optional)"
                    },
                    "priority": {
                        "type": "integer",
                        "minimum": 1,
                        "maximum": 4,
                        "description": "Priority from 1 (normal) to 4 (urgent) (optional)"
                    },
                    "labels": {
                        "type": "array",
                        "items": {"type": "string"},
                        "description": "Label names (optional)"
                    }
                },
                "required": ["content"]
            }
        ),
        Tool(
            name="update_todoist_task",
            description="Update an existing Todoist task (title, description, priority, due date, labels). "
                       "Only the fields given are changed.",
            inputSchema={
                "type": "object",
                "properties": {
                    "taskId": _task_id("update"),
                    "content": {
                        "type": "string",
                        "description": "New task title (optional)"
                    },
                    "description": {
                        "type": "string",
                        "description": "New task description (optional)"
                    },
                    "priority": {
                        "type": "integer",
                        "minimum": 1,
                        "maximum": 4,
                        "description": "New priority from 1 to 4 (optional)"
                    },
                    "dueString": {
                        "type": "string",
                        "description": "New due date in natural language, e.g. 'in 3 days' (optional)"
                    },
                    "dueDate": {
                        "type": "string",
                        "description": "New due date as YYYY-MM-DD (optional)"
                    },
                    "labels": {
                        "type": "array",
                        "items": {"type": "string"},
                        "description": "New label names, replacing the current ones (optional)"
                    }
                },
                "required": ["taskId"]
            }
        ),
        Tool(
            name="delete_todoist_task",
            description="Delete a Todoist task.",
            inputSchema={
                "type": "object",
                "properties": {"taskId": _task_id("delete")},
                "required": ["taskId"]
            }
        ),
        Tool(
            name="complete_todoist_task",
            description="Mark a Todoist task as completed.",
            inputSchema={
                "type": "object",
                "properties": {"taskId": _task_id("complete")},
                "required": ["taskId"]
            }
        ),
        Tool(
            name="reopen_todoist_task",
            description="Reopen a completed Todoist task.",
            inputSchema={
                "type": "object",
                "properties": {"taskId": _task_id("reopen")},
                "required": ["taskId"]
            }
        ),
        Tool(
            name="move_todoist_task",
            description="Move a task to a project, to a section, or under a parent task as a sub-task. "
                       "Give one of projectId, sectionId or parentId.",
            inputSchema={
                "type": "object",
                "properties": {
                    "taskId": _task_id("move"),
                    "projectId": {
                        "type": "string",
                        "description": "ID of the destination project (optional)"
                    },
                    "sectionId": {
                        "type": "string",
                        "description": "ID of the destination section (optional)"
                    },
                    "parentId": {
                        "type": "string",
                        "description": "ID of the new parent task (optional)"
                    }
                },
                "required": ["taskId"]
            }
        ),
        # ============================================================================
        # Completed Task Tools
        # ============================================================================
        Tool(
            name="get_completed_tasks",
            description="List tasks completed within a date range (default: today).",
            inputSchema={
                "type": "object",
                "properties": {
                    "since": {
                        "type": "string",
                        "description": "Start of the range, ISO 8601 (e.g. '2026-02-06T00:00:00') (optional, default: start of today)"
                    },
                    "until": {
                        "type": "string",
                        "description": "End of the range, ISO 8601 (e.g. '2026-02-06T23:59:59') (optional, default: end of today)"
                    },
                    "projectId": {
                        "type": "string",
                        "description": "Only tasks of this project (optional)"
                    },
                    "limit": {
                        "type": "integer",
                        "minimum": 1,
                        "description": "Maximum number of results (optional)"
                    }
                }
            }
        ),
        Tool(
            name="get_today_completed_tasks",
            description="List all tasks completed today.",
            inputSchema={
                "type": "object",
                "properties": {}
            }
        ),
        Tool(
            name="get_week_completed_tasks",
            description="List all tasks completed this week (Sunday to Saturday).",
            inputSchema={
                "type": "object",
                "properties": {}
            }
        ),
    ]
