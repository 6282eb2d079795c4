"""MCP tool handlers and the dispatcher that routes tool calls to them.

All handlers follow a consistent pattern:
- Accept: validated arguments (one pydantic model per tool) and the
  optional TodoistClient
- Call the project/task operations, which return None/False on failure
- Raise GatewayFailureError naming the action and target on failure
- Return text: JSON for reads, a short confirmation for changes

``dispatch`` validates the raw argument bag before any handler runs, so an
unknown tool or a missing required argument never reaches the Todoist API.
"""
from typing import Any, Awaitable, Callable, Optional
import logging

from mcp.types import TextContent
from pydantic import ValidationError

from . import formatters
from . import projects as project_ops
from . import schemas
from . import tasks as task_ops
from .client import TodoistClient
from .errors import GatewayFailureError, InvalidArgumentError, MissingArgumentError, UnknownToolError

logger = logging.getLogger("todoist-mcp.handlers")

Handler = Callable[[Any, Optional[TodoistClient]], Awaitable[str]]


# ============================================================================
# Read Handlers
# ============================================================================

async def handle_list_projects(args: schemas.NoArguments, client: Optional[TodoistClient]) -> str:
    projects = await project_ops.list_projects(client)
    if projects is None:
        raise GatewayFailureError("retrieve projects")
    return formatters.to_json(projects)


async def handle_list_tasks(args: schemas.ListTasksArguments, client: Optional[TodoistClient]) -> str:
    """List tasks: today's view, one project, or everything, in that order of precedence."""
    if args.filter == "today":
        tasks = await task_ops.list_today_tasks(client)
    elif args.project_id:
        tasks = await task_ops.list_tasks_by_project(client, args.project_id)
    else:
        tasks = await task_ops.list_tasks(client)

    if tasks is None:
        raise GatewayFailureError("retrieve tasks", args.project_id)
    return formatters.to_json(tasks)


# ============================================================================
# Project Handlers
# ============================================================================

async def handle_create_project(args: schemas.CreateProjectArguments, client: Optional[TodoistClient]) -> str:
    params = schemas.ProjectCreate(**args.model_dump(exclude_none=True))
    project = await project_ops.create_project(client, params)
    if project is None:
        raise GatewayFailureError("create project", args.name)

    return (f"Created project: {project.name} (ID: {project.id})\n\n"
            f"Full details:\n{formatters.format_project(project)}")


async def handle_update_project(args: schemas.UpdateProjectArguments, client: Optional[TodoistClient]) -> str:
    params = schemas.ProjectUpdate(**args.model_dump(exclude={"project_id"}, exclude_none=True))
    project = await project_ops.update_project(client, args.project_id, params)
    if project is None:
        raise GatewayFailureError("update project", args.project_id)

    return f"Updated project {args.project_id}: {project.name}\n\n{formatters.format_project(project)}"


async def handle_delete_project(args: schemas.ProjectIdArguments, client: Optional[TodoistClient]) -> str:
    if not await project_ops.delete_project(client, args.project_id):
        raise GatewayFailureError("delete project", args.project_id)
    return f"Project {args.project_id} deleted"


# ============================================================================
# Task Handlers
# ============================================================================

async def handle_create_task(args: schemas.CreateTaskArguments, client: Optional[TodoistClient]) -> str:
    params = schemas.TaskCreate(**args.model_dump(exclude_none=True))
    task = await task_ops.create_task(client, params)
    if task is None:
        raise GatewayFailureError("create task", args.content)

    return (f"Created task: {task.content} (ID: {task.id})\n\n"
            f"Full details:\n{formatters.format_task(task)}")


async def handle_update_task(args: schemas.UpdateTaskArguments, client: Optional[TodoistClient]) -> str:
    params = schemas.TaskUpdate(**args.model_dump(exclude={"task_id"}, exclude_none=True))
    task = await task_ops.update_task(client, args.task_id, params)
    if task is None:
        raise GatewayFailureError("update task", args.task_id)

    return f"Updated task {args.task_id}: {task.content}\n\n{formatters.format_task(task)}"


async def handle_delete_task(args: schemas.TaskIdArguments, client: Optional[TodoistClient]) -> str:
    if not await task_ops.delete_task(client, args.task_id):
        raise GatewayFailureError("delete task", args.task_id)
    return f"Task {args.task_id} deleted"


async def handle_complete_task(args: schemas.TaskIdArguments, client: Optional[TodoistClient]) -> str:
    if not await task_ops.complete_task(client, args.task_id):
        raise GatewayFailureError("complete task", args.task_id)
    return f"Task {args.task_id} completed"


async def handle_reopen_task(args: schemas.TaskIdArguments, client: Optional[TodoistClient]) -> str:
    if not await task_ops.reopen_task(client, args.task_id):
        raise GatewayFailureError("reopen task", args.task_id)
    return f"Task {args.task_id} reopened"


async def handle_move_task(args: schemas.MoveTaskArguments, client: Optional[TodoistClient]) -> str:
    """Move a task. All supplied destinations are forwarded as given."""
    params = schemas.TaskMove(**args.model_dump(exclude={"task_id"}, exclude_none=True))
    task = await task_ops.move_task(client, args.task_id, params)
    if task is None:
        raise GatewayFailureError("move task", args.task_id)

    destination = f"project {task.project_id}" if task.project_id else "its new location"
    if task.section_id:
        destination += f", section {task.section_id}"
    if task.parent_id:
        destination += f", under task {task.parent_id}"
    return f"Task {args.task_id} moved to {destination}"


# ============================================================================
# Completed Task Handlers
# ============================================================================

async def handle_get_completed_tasks(args: schemas.CompletedTasksArguments, client: Optional[TodoistClient]) -> str:
    query = schemas.CompletedTaskQuery(**args.model_dump(exclude_none=True))
    tasks = await task_ops.get_completed_tasks(client, query)
    if tasks is None:
        raise GatewayFailureError("retrieve completed tasks", args.project_id)
    return formatters.to_json(tasks)


async def handle_get_today_completed_tasks(args: schemas.NoArguments, client: Optional[TodoistClient]) -> str:
    tasks = await task_ops.get_today_completed_tasks(client)
    if tasks is None:
        raise GatewayFailureError("retrieve tasks completed today")
    return formatters.to_json(tasks)


async def handle_get_week_completed_tasks(args: schemas.NoArguments, client: Optional[TodoistClient]) -> str:
    tasks = await task_ops.get_week_completed_tasks(client)
    if tasks is None:
        raise GatewayFailureError("retrieve tasks completed this week")
    return formatters.to_json(tasks)


# ============================================================================
# Dispatch
# ============================================================================

# Map tool names to (argument model, handler)
TOOL_HANDLERS: dict[str, tuple[type[schemas.ToolArguments], Handler]] = {
    "get_todoist_projects": (schemas.NoArguments, handle_list_projects),
    "get_todoist_tasks": (schemas.ListTasksArguments, handle_list_tasks),
    "create_todoist_project": (schemas.CreateProjectArguments, handle_create_project),
    "update_todoist_project": (schemas.UpdateProjectArguments, handle_update_project),
    "delete_todoist_project": (schemas.ProjectIdArguments, handle_delete_project),
    "create_todoist_task": (schemas.CreateTaskArguments, handle_create_task),
    "update_todoist_task": (schemas.UpdateTaskArguments, handle_update_task),
    "delete_todoist_task": (schemas.TaskIdArguments, handle_delete_task),
    "complete_todoist_task": (schemas.TaskIdArguments, handle_complete_task),
    "reopen_todoist_task": (schemas.TaskIdArguments, handle_reopen_task),
    "move_todoist_task": (schemas.MoveTaskArguments, handle_move_task),
    "get_completed_tasks": (schemas.CompletedTasksArguments, handle_get_completed_tasks),
    "get_today_completed_tasks": (schemas.NoArguments, handle_get_today_completed_tasks),
    "get_week_completed_tasks": (schemas.NoArguments, handle_get_week_completed_tasks),
}


def validate_arguments(tool: str, model: type[schemas.ToolArguments], arguments: Any) -> schemas.ToolArguments:
    """Check required fields, then coerce and validate the whole bag.

    A required field that is absent, null or blank raises
    MissingArgumentError; any other problem raises InvalidArgumentError.
    """
    if arguments is None:
        arguments = {}
    if not isinstance(arguments, dict):
        raise InvalidArgumentError(tool, "arguments", "expected an object")

    for field_name, field in model.model_fields.items():
        if not field.is_required():
            continue
        name = field.alias or field_name
        value = arguments.get(name, arguments.get(field_name))
        if value is None or (isinstance(value, str) and not value.strip()):
            raise MissingArgumentError(tool, name)

    try:
        return model.model_validate(arguments)
    except ValidationError as e:
        error = e.errors()[0]
        field_name = ".".join(str(part) for part in error["loc"]) or "arguments"
        raise InvalidArgumentError(tool, field_name, error["msg"]) from e


async def dispatch(client: Optional[TodoistClient], name: str, arguments: Any) -> list[TextContent]:
    """Route a tool call to its handler."""
    entry = TOOL_HANDLERS.get(name)
    if entry is None:
        logger.warning(f"Unknown tool requested: {name}")
        raise UnknownToolError(name)

    model, handler = entry
    args = validate_arguments(name, model, arguments)
    text = await handler(args, client)
    return [TextContent(type="text", text=text)]
