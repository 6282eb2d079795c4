"""Task operations, including the completed-task history query.

Like the project operations, these never raise for API faults: they log and
return ``None`` (reads and writes returning a record) or ``False``
(delete/complete/reopen).
"""
from datetime import datetime, timedelta
from typing import Awaitable, Callable, Optional
import logging

from .client import API_ERRORS, TodoistClient, log_api_error, require_client
from .schemas import CompletedTask, CompletedTaskQuery, Task, TaskCreate, TaskMove, TaskUpdate

logger = logging.getLogger("todoist-mcp.tasks")

TODAY_FILTER = "today|overdue"


async def _list(
    client: Optional[TodoistClient],
    action: str,
    fetch: Callable[[TodoistClient], Awaitable[list[dict]]]
) -> Optional[list[Task]]:
    try:
        items = await fetch(require_client(client))
        tasks = [Task.model_validate(item) for item in items]
    except API_ERRORS as e:
        log_api_error(logger, action, e)
        return None
    logger.info(f"Retrieved {len(tasks)} tasks ({action})")
    return tasks


async def list_tasks(client: Optional[TodoistClient]) -> Optional[list[Task]]:
    """All open tasks."""
    return await _list(client, "list tasks", lambda api: api.list_tasks())


async def list_tasks_by_project(client: Optional[TodoistClient], project_id: str) -> Optional[list[Task]]:
    """Open tasks of one project, filtered by the API."""
    return await _list(
        client,
        f"list tasks of project {project_id}",
        lambda api: api.list_tasks(project_id=project_id)
    )


async def list_today_tasks(client: Optional[TodoistClient]) -> Optional[list[Task]]:
    """Open tasks due today or overdue."""
    return await _list(client, "list today's tasks", lambda api: api.filter_tasks(TODAY_FILTER))


async def get_task(client: Optional[TodoistClient], task_id: str) -> Optional[Task]:
    try:
        payload = await require_client(client).get_task(task_id)
        return Task.model_validate(payload)
    except API_ERRORS as e:
        log_api_error(logger, f"retrieve task {task_id}", e)
        return None


async def create_task(client: Optional[TodoistClient], params: TaskCreate) -> Optional[Task]:
    try:
        payload = await require_client(client).create_task(params.to_payload())
        task = Task.model_validate(payload)
    except API_ERRORS as e:
        log_api_error(logger, "create task", e)
        return None
    logger.info(f"Created task: {task.content} (ID: {task.id})")
    return task


async def update_task(client: Optional[TodoistClient], task_id: str, params: TaskUpdate) -> Optional[Task]:
    """Update a task with only the supplied fields. An empty patch is allowed."""
    try:
        payload = await require_client(client).update_task(task_id, params.to_payload())
        task = Task.model_validate(payload)
    except API_ERRORS as e:
        log_api_error(logger, f"update task {task_id}", e)
        return None
    logger.info(f"Updated task {task_id}: {task.content}")
    return task


async def move_task(client: Optional[TodoistClient], task_id: str, params: TaskMove) -> Optional[Task]:
    """Move a task to a project, a section or under a parent task.

    Every supplied destination is forwarded; precedence between them is the
    API's business.
    """
    try:
        payload = await require_client(client).move_task(task_id, params.to_payload())
        task = Task.model_validate(payload)
    except API_ERRORS as e:
        log_api_error(logger, f"move task {task_id}", e)
        return None
    logger.info(f"Moved task {task_id} to project {task.project_id}")
    return task


async def delete_task(client: Optional[TodoistClient], task_id: str) -> bool:
    try:
        await require_client(client).delete_task(task_id)
    except API_ERRORS as e:
        log_api_error(logger, f"delete task {task_id}", e)
        return False
    logger.info(f"Deleted task {task_id}")
    return True


async def complete_task(client: Optional[TodoistClient], task_id: str) -> bool:
    try:
        await require_client(client).close_task(task_id)
    except API_ERRORS as e:
        log_api_error(logger, f"complete task {task_id}", e)
        return False
    logger.info(f"Completed task {task_id}")
    return True


async def reopen_task(client: Optional[TodoistClient], task_id: str) -> bool:
    try:
        await require_client(client).reopen_task(task_id)
    except API_ERRORS as e:
        log_api_error(logger, f"reopen task {task_id}", e)
        return False
    logger.info(f"Reopened task {task_id}")
    return True


# ============================================================================
# Completed tasks
# ============================================================================

def day_window(now: datetime) -> tuple[str, str]:
    """Start and end of the local day containing ``now``, second precision."""
    start = now.replace(hour=0, minute=0, second=0, microsecond=0)
    end = now.replace(hour=23, minute=59, second=59, microsecond=0)
    return start.isoformat(timespec="seconds"), end.isoformat(timespec="seconds")


def week_window(now: datetime) -> tuple[str, str]:
    """Sunday 00:00:00.000 through Saturday 23:59:59.999 of the week containing ``now``."""
    days_since_sunday = (now.weekday() + 1) % 7
    start = (now - timedelta(days=days_since_sunday)).replace(hour=0, minute=0, second=0, microsecond=0)
    end = (start + timedelta(days=6)).replace(hour=23, minute=59, second=59, microsecond=999000)
    return start.isoformat(timespec="milliseconds"), end.isoformat(timespec="milliseconds")


async def get_completed_tasks(
    client: Optional[TodoistClient],
    query: Optional[CompletedTaskQuery] = None,
    now: Optional[datetime] = None
) -> Optional[list[CompletedTask]]:
    """Completed tasks in a date window (default: the current local day)."""
    query = query or CompletedTaskQuery()
    day_start, day_end = day_window(now or datetime.now())
    since = query.since or day_start
    until = query.until or day_end
    try:
        items = await require_client(client).get_completed_tasks(
            since,
            until=until,
            project_id=query.project_id,
            limit=query.limit,
        )
        tasks = [CompletedTask.from_item(item) for item in items]
    except API_ERRORS as e:
        log_api_error(logger, f"list tasks completed between {since} and {until}", e)
        return None
    logger.info(f"Retrieved {len(tasks)} completed tasks ({since} - {until})")
    return tasks


async def get_today_completed_tasks(
    client: Optional[TodoistClient],
    now: Optional[datetime] = None
) -> Optional[list[CompletedTask]]:
    return await get_completed_tasks(client, now=now)


async def get_week_completed_tasks(
    client: Optional[TodoistClient],
    now: Optional[datetime] = None
) -> Optional[list[CompletedTask]]:
    since, until = week_window(now or datetime.now())
    return await get_completed_tasks(client, CompletedTaskQuery(since=since, until=until))
