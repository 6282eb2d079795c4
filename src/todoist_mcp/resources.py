"""Virtual ``todoist://`` resource namespace over projects and tasks.

Addresses:

- ``todoist://today/tasks``            open tasks due today or overdue
- ``todoist://project/<id>``           one project
- ``todoist://project/<id>/tasks``     a project with its tasks
- ``todoist://project/<id>/structure`` a project with its sub-project tree
- ``todoist://task/<id>``              one task

Nothing is cached: every listing or read fetches live data.
"""
from collections import defaultdict
from typing import Optional
import logging

from mcp.types import Resource

from . import projects as project_ops
from . import tasks as task_ops
from .client import TodoistClient
from .errors import GatewayFailureError, NotFoundError, UnsupportedResourceError
from .formatters import to_json
from .schemas import Project

logger = logging.getLogger("todoist-mcp.resources")

URI_SCHEME = "todoist://"
MIME_TYPE = "application/json"
TODAY_TASKS_URI = f"{URI_SCHEME}today/tasks"


def parse_uri(uri: str) -> list[str]:
    """Split a ``todoist://`` URI into its path segments."""
    uri = str(uri)
    if not uri.startswith(URI_SCHEME):
        raise UnsupportedResourceError(f"Unsupported protocol: {uri}")
    path = uri[len(URI_SCHEME):].strip("/")
    if not path:
        raise UnsupportedResourceError(f"Missing resource path: {uri}")
    return path.split("/")


def build_structure(projects: list[Project], root_id: str) -> dict:
    """Assemble the project subtree rooted at ``root_id``.

    Each node is the project record plus a ``children`` list, which is left
    out entirely for leaves. A parent cycle means the project data is
    corrupt and raises GatewayFailureError.
    """
    index = {project.id: project for project in projects}
    if root_id not in index:
        raise NotFoundError("project", root_id)

    children_of: dict[Optional[str], list[Project]] = defaultdict(list)
    for project in projects:
        children_of[project.parent_id].append(project)

    visited: set[str] = set()

    def build(project: Project) -> dict:
        if project.id in visited:
            logger.error(f"Cycle in project hierarchy at project {project.id}")
            raise GatewayFailureError("build project structure", f"{root_id} (cycle at project {project.id})")
        visited.add(project.id)
        node = project.to_json_dict()
        children = [build(child) for child in children_of.get(project.id, [])]
        if children:
            node["children"] = children
        return node

    return build(index[root_id])


def _project_resources(projects: list[Project]) -> list[Resource]:
    """Descriptors for the project forest, pre-order, grouped by parent."""
    children_of: dict[Optional[str], list[Project]] = defaultdict(list)
    for project in projects:
        children_of[project.parent_id or None].append(project)

    resources: list[Resource] = []
    emitted: set[str] = set()

    def walk(parent_id: Optional[str]) -> None:
        for project in children_of.get(parent_id, []):
            if project.id in emitted:
                continue
            emitted.add(project.id)
            suffix = " (sub-project)" if parent_id else ""
            resources.append(Resource(
                uri=f"{URI_SCHEME}project/{project.id}",
                mimeType=MIME_TYPE,
                name=project.name,
                description=f"Todoist project: {project.name}{suffix}"
            ))
            resources.append(Resource(
                uri=f"{URI_SCHEME}project/{project.id}/tasks",
                mimeType=MIME_TYPE,
                name=f"Tasks of {project.name}",
                description=f"Tasks in project {project.name}"
            ))
            if children_of.get(project.id):
                resources.append(Resource(
                    uri=f"{URI_SCHEME}project/{project.id}/structure",
                    mimeType=MIME_TYPE,
                    name=f"Structure of {project.name}",
                    description=f"Full structure of project {project.name} with its sub-projects"
                ))
            walk(project.id)

    walk(None)
    return resources


async def list_resources(client: Optional[TodoistClient]) -> list[Resource]:
    """Enumerate every readable resource.

    Emits the today view, then the project forest, then one entry per task.
    Fetches the full project and task collections; no paging.
    """
    resources = [Resource(
        uri=TODAY_TASKS_URI,
        mimeType=MIME_TYPE,
        name="Today's tasks",
        description="All tasks due today or overdue"
    )]

    projects = await project_ops.list_projects(client)
    if projects is None:
        raise GatewayFailureError("list projects")
    resources.extend(_project_resources(projects))

    tasks = await task_ops.list_tasks(client)
    if tasks is None:
        raise GatewayFailureError("list tasks")
    for task in tasks:
        resources.append(Resource(
            uri=f"{URI_SCHEME}task/{task.id}",
            mimeType=MIME_TYPE,
            name=task.content,
            description=f"Todoist task: {task.content}"
        ))

    logger.info(f"Listed {len(resources)} resources ({len(projects)} projects, {len(tasks)} tasks)")
    return resources


async def read_resource(client: Optional[TodoistClient], uri: str) -> str:
    """Resolve a resource URI to its JSON text."""
    parts = parse_uri(uri)
    logger.info(f"Reading resource {uri} (path: {'/'.join(parts)})")

    if parts == ["today", "tasks"]:
        tasks = await task_ops.list_today_tasks(client)
        if tasks is None:
            raise GatewayFailureError("retrieve today's tasks")
        return to_json(tasks)

    if parts[0] == "project" and len(parts) == 3 and parts[2] == "structure":
        projects = await project_ops.list_projects(client)
        if projects is None:
            raise GatewayFailureError("list projects for the structure of project", parts[1])
        return to_json(build_structure(projects, parts[1]))

    if parts[0] == "project" and (len(parts) == 2 or (len(parts) == 3 and parts[2] == "tasks")):
        project_id = parts[1]
        project = await project_ops.get_project(client, project_id)
        if project is None:
            raise NotFoundError("project", project_id)
        if len(parts) == 2:
            return to_json(project)
        tasks = await task_ops.list_tasks_by_project(client, project_id)
        if tasks is None:
            raise GatewayFailureError("retrieve tasks of project", project_id)
        return to_json({"project": project, "tasks": tasks})

    if parts[0] == "task" and len(parts) == 2:
        task = await task_ops.get_task(client, parts[1])
        if task is None:
            raise NotFoundError("task", parts[1])
        return to_json(task)

    raise UnsupportedResourceError(f"Unsupported resource: {uri}")
