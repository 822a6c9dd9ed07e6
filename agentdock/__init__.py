"""AgentDock - agent registry, provider tool gateway and audited query dispatch."""

from agentdock.audit import AuditLog
from agentdock.completion import CompletionClient
from agentdock.config import Settings
from agentdock.dispatcher import QueryDispatcher
from agentdock.errors import (
    AgentDisabled,
    AgentNotFound,
    CategoryNotFound,
    CompletionFailed,
    Conflict,
    CorruptRecord,
    DockError,
    InvalidInput,
    LogNotFound,
    NotFound,
    ProviderCallFailed,
    ProviderNotConfigured,
    ToolNotFound,
    TransitionNotFound,
)
from agentdock.models import (
    Agent,
    AgentCreate,
    AgentUpdate,
    QueryLogEntry,
    QueryResult,
    ToolDescriptor,
    ToolResult,
)
from agentdock.registry import AgentRegistry
from agentdock.tools.catalog import ToolCatalog
from agentdock.tools.gateway import ToolGateway

__all__ = [
    # Components
    "AgentRegistry",
    "AuditLog",
    "CompletionClient",
    "QueryDispatcher",
    "Settings",
    "ToolCatalog",
    "ToolGateway",
    # Models
    "Agent",
    "AgentCreate",
    "AgentUpdate",
    "QueryLogEntry",
    "QueryResult",
    "ToolDescriptor",
    "ToolResult",
    # Errors
    "AgentDisabled",
    "AgentNotFound",
    "CategoryNotFound",
    "CompletionFailed",
    "Conflict",
    "CorruptRecord",
    "DockError",
    "InvalidInput",
    "LogNotFound",
    "NotFound",
    "ProviderCallFailed",
    "ProviderNotConfigured",
    "ToolNotFound",
    "TransitionNotFound",
]
