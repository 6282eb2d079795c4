"""Error taxonomy for the Todoist MCP bridge."""
from typing import Optional


class TodoistMCPError(Exception):
    """Base class for all errors raised by the bridge."""
    pass


class NotInitializedError(TodoistMCPError):
    """Raised when no Todoist API token has been configured."""

    def __init__(self, message: str = "Todoist API not initialized. Check the API token."):
        super().__init__(message)


class NotFoundError(TodoistMCPError):
    """Raised when a requested project or task does not exist."""

    def __init__(self, kind: str, entity_id: str):
        self.kind = kind
        self.entity_id = entity_id
        super().__init__(f"{kind.capitalize()} not found: {entity_id}")


class UnsupportedResourceError(TodoistMCPError):
    """Raised when a resource URI has an unknown scheme, type or shape."""
    pass


class MissingArgumentError(TodoistMCPError):
    """Raised when a tool call omits a required argument."""

    def __init__(self, tool: str, field: str):
        self.tool = tool
        self.field = field
        super().__init__(f"Missing required argument '{field}' for tool {tool}")


class InvalidArgumentError(TodoistMCPError):
    """Raised when a tool argument cannot be coerced to its declared type."""

    def __init__(self, tool: str, field: str, reason: str):
        self.tool = tool
        self.field = field
        self.reason = reason
        super().__init__(f"Invalid argument '{field}' for tool {tool}: {reason}")


class UnknownToolError(TodoistMCPError):
    """Raised when a tool call names an operation outside the catalog."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Unknown tool: {name}")


class GatewayFailureError(TodoistMCPError):
    """Raised when a call to the Todoist API failed.

    The underlying fault has already been logged by the operation that made
    the call; this error only carries the attempted action and target.
    """

    def __init__(self, action: str, target: Optional[str] = None):
        self.action = action
        self.target = target
        suffix = f" {target}" if target else ""
        super().__init__(f"Failed to {action}{suffix}")
