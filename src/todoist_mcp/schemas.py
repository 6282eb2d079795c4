"""Pydantic schemas for Todoist records, operation parameters and tool arguments."""
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


# Record Schemas
#
# Records keep every field the provider returns; only the fields the bridge
# relies on are declared.

class Record(BaseModel):
    """Base for provider records (extension fields pass through)."""

    model_config = ConfigDict(extra="allow", coerce_numbers_to_str=True)

    def to_json_dict(self) -> dict[str, Any]:
        """Dump exactly the fields the provider sent (plus mapped ones)."""
        return self.model_dump(mode="json", exclude_unset=True)


class Due(Record):
    """Due date of a task."""

    date: str
    string: Optional[str] = None
    is_recurring: Optional[bool] = None


class Project(Record):
    """A Todoist project. Projects form a forest through ``parent_id``."""

    id: str
    name: str
    color: Optional[str] = None
    parent_id: Optional[str] = None


class Task(Record):
    """A live (open) Todoist task."""

    id: str
    content: str
    project_id: Optional[str] = None
    section_id: Optional[str] = None
    parent_id: Optional[str] = None
    priority: Optional[int] = None
    due: Optional[Due] = None
    labels: Optional[list[str]] = None


class CompletedTask(Record):
    """Read-only projection of a task at completion time."""

    id: str
    content: str
    completed_at: str
    project_id: Optional[str] = None
    priority: Optional[int] = None
    labels: Optional[list[str]] = None

    @classmethod
    def from_item(cls, item: dict[str, Any]) -> "CompletedTask":
        """Map a raw completed-task item, keeping all provider fields.

        Older history payloads identify the task by ``task_id`` rather than
        ``id``.
        """
        data = dict(item)
        if data.get("id") is None and data.get("task_id") is not None:
            data["id"] = data["task_id"]
        return cls.model_validate(data)


# Operation Parameter Schemas

class Params(BaseModel):
    """Base for parameters forwarded to the Todoist API."""

    model_config = ConfigDict(extra="allow", coerce_numbers_to_str=True)

    def to_payload(self) -> dict[str, Any]:
        """Only explicitly supplied, non-null fields are sent."""
        return self.model_dump(mode="json", exclude_none=True)


class ProjectCreate(Params):
    """Parameters for creating a project."""

    name: str = Field(..., min_length=1)
    color: Optional[str] = None
    parent_id: Optional[str] = None


class ProjectUpdate(Params):
    """Patch for a project; every field is optional."""

    name: Optional[str] = None
    color: Optional[str] = None


class TaskCreate(Params):
    """Parameters for creating a task."""

    content: str = Field(..., min_length=1)
    description: Optional[str] = None
    project_id: Optional[str] = None
    section_id: Optional[str] = None
    parent_id: Optional[str] = None
    due_string: Optional[str] = None
    due_date: Optional[str] = None
    priority: Optional[int] = Field(None, ge=1, le=4)
    labels: Optional[list[str]] = None


class TaskUpdate(Params):
    """Patch for a task; every field is optional and ``{}`` is a no-op."""

    content: Optional[str] = None
    description: Optional[str] = None
    priority: Optional[int] = Field(None, ge=1, le=4)
    due_string: Optional[str] = None
    due_date: Optional[str] = None
    labels: Optional[list[str]] = None


class TaskMove(BaseModel):
    """Move destination. More than one kind may be given; the API decides."""

    model_config = ConfigDict(coerce_numbers_to_str=True)

    project_id: Optional[str] = None
    section_id: Optional[str] = None
    parent_id: Optional[str] = None

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(exclude_none=True)


class CompletedTaskQuery(BaseModel):
    """Filter for the completed-task history query."""

    model_config = ConfigDict(coerce_numbers_to_str=True)

    since: Optional[str] = None
    until: Optional[str] = None
    project_id: Optional[str] = None
    limit: Optional[int] = Field(None, ge=1)


# Tool Argument Schemas
#
# One model per tool. Arguments arrive camelCased (taskId, dueString); unknown
# keys are rejected and numbers or numeric strings are coerced to the
# declared type.

class ToolArguments(BaseModel):
    """Base for validated tool arguments."""

    model_config = ConfigDict(
        extra="forbid",
        coerce_numbers_to_str=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


class NoArguments(ToolArguments):
    pass


class ListTasksArguments(ToolArguments):
    project_id: Optional[str] = None
    filter: Optional[str] = None


class CreateProjectArguments(ToolArguments):
    name: str
    color: Optional[str] = None
    parent_id: Optional[str] = None


class UpdateProjectArguments(ToolArguments):
    project_id: str
    name: Optional[str] = None
    color: Optional[str] = None


class ProjectIdArguments(ToolArguments):
    project_id: str


class CreateTaskArguments(ToolArguments):
    content: str
    description: Optional[str] = None
    project_id: Optional[str] = None
    section_id: Optional[str] = None
    parent_id: Optional[str] = None
    due_string: Optional[str] = None
    due_date: Optional[str] = None
    priority: Optional[int] = Field(None, ge=1, le=4)
    labels: Optional[list[str]] = None


class UpdateTaskArguments(ToolArguments):
    task_id: str
    content: Optional[str] = None
    description: Optional[str] = None
    priority: Optional[int] = Field(None, ge=1, le=4)
    due_string: Optional[str] = None
    due_date: Optional[str] = None
    labels: Optional[list[str]] = None


class TaskIdArguments(ToolArguments):
    task_id: str


class MoveTaskArguments(ToolArguments):
    task_id: str
    project_id: Optional[str] = None
    section_id: Optional[str] = None
    parent_id: Optional[str] = None


class CompletedTasksArguments(ToolArguments):
    since: Optional[str] = None
    until: Optional[str] = None
    project_id: Optional[str] = None
    limit: Optional[int] = Field(None, ge=1)
