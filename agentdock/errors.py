"""Error taxonomy shared by every agentdock component.

Every error is request-scoped. The HTTP layer turns a DockError into an
``{error, details}`` body using the class-level status code.
"""

from typing import Any


class DockError(Exception):
    """Base class for all expected agentdock failures."""

    status_code: int = 500
    error: str = "internal_error"

    def __init__(self, message: str, details: Any = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details

    def to_dict(self) -> dict[str, Any]:
        body: dict[str, Any] = {"error": self.message}
        if self.details is not None:
            body["details"] = self.details
        return body


class InvalidInput(DockError):
    """Bad input shape. Never retried."""

    status_code = 400
    error = "validation_error"


class NotFound(DockError):
    status_code = 404
    error = "not_found"


class AgentNotFound(NotFound):
    def __init__(self, name: str) -> None:
        super().__init__(f"Agent '{name}' not found")
        self.name = name


class ToolNotFound(NotFound):
    def __init__(self, name: str) -> None:
        super().__init__(f"Tool '{name}' not found")
        self.name = name


class CategoryNotFound(NotFound):
    def __init__(self, key: str) -> None:
        super().__init__(f"Tool category '{key}' not found")
        self.key = key


class LogNotFound(NotFound):
    pass


class CorruptRecord(DockError):
    """A stored record that no longer parses."""

    status_code = 500
    error = "corrupt_record"


class Conflict(DockError):
    status_code = 409
    error = "conflict"


class AgentDisabled(DockError):
    status_code = 403
    error = "agent_disabled"

    def __init__(self, name: str) -> None:
        super().__init__(f"Agent '{name}' is disabled")
        self.name = name


class ProviderNotConfigured(DockError):
    status_code = 503
    error = "provider_not_configured"


class ProviderCallFailed(DockError):
    status_code = 502
    error = "provider_call_failed"


class CompletionFailed(DockError):
    status_code = 502
    error = "completion_failed"


class TransitionNotFound(DockError):
    status_code = 404
    error = "transition_not_found"

    def __init__(self, transition_name: str) -> None:
        super().__init__(f"Transition '{transition_name}' not found")
        self.transition_name = transition_name
