"""Project operations.

Every operation catches API faults, logs them and returns a sentinel
(``None`` or ``False``) instead of raising. Callers must check the result.
"""
from typing import Optional
import logging

from .client import API_ERRORS, TodoistClient, log_api_error, require_client
from .schemas import Project, ProjectCreate, ProjectUpdate

logger = logging.getLogger("todoist-mcp.projects")


async def list_projects(client: Optional[TodoistClient]) -> Optional[list[Project]]:
    """Return all projects in API order."""
    try:
        items = await require_client(client).list_projects()
        projects = [Project.model_validate(item) for item in items]
    except API_ERRORS as e:
        log_api_error(logger, "list projects", e)
        return None
    logger.info(f"Retrieved {len(projects)} projects")
    return projects


async def get_project(client: Optional[TodoistClient], project_id: str) -> Optional[Project]:
    try:
        payload = await require_client(client).get_project(project_id)
        return Project.model_validate(payload)
    except API_ERRORS as e:
        log_api_error(logger, f"retrieve project {project_id}", e)
        return None


async def create_project(client: Optional[TodoistClient], params: ProjectCreate) -> Optional[Project]:
    try:
        payload = await require_client(client).create_project(params.to_payload())
        project = Project.model_validate(payload)
    except API_ERRORS as e:
        log_api_error(logger, "create project", e)
        return None
    logger.info(f"Created project: {project.name} (ID: {project.id})")
    return project


async def update_project(
    client: Optional[TodoistClient],
    project_id: str,
    params: ProjectUpdate
) -> Optional[Project]:
    """Update a project, sending only the fields that were supplied."""
    try:
        payload = await require_client(client).update_project(project_id, params.to_payload())
        project = Project.model_validate(payload)
    except API_ERRORS as e:
        log_api_error(logger, f"update project {project_id}", e)
        return None
    logger.info(f"Updated project {project_id}: {project.name}")
    return project


async def delete_project(client: Optional[TodoistClient], project_id: str) -> bool:
    try:
        await require_client(client).delete_project(project_id)
    except API_ERRORS as e:
        log_api_error(logger, f"delete project {project_id}", e)
        return False
    logger.info(f"Deleted project {project_id}")
    return True
