"""Core data models for agentdock."""

from agentdock.models.agent import Agent, AgentCreate, AgentUpdate
from agentdock.models.query_log import (
    DailyLog,
    LogPage,
    Pagination,
    QueryLogEntry,
    QueryRequest,
    QueryResult,
    ToolQueryRequest,
    SortOrder,
)
from agentdock.models.results import ToolResult
from agentdock.models.tool import ProviderCategory, ProviderKey, ToolDescriptor

__all__ = [
    # Agents
    "Agent",
    "AgentCreate",
    "AgentUpdate",
    # Queries and audit log
    "DailyLog",
    "LogPage",
    "Pagination",
    "QueryLogEntry",
    "QueryRequest",
    "QueryResult",
    "SortOrder",
    "ToolQueryRequest",
    # Tools
    "ProviderCategory",
    "ProviderKey",
    "ToolDescriptor",
    "ToolResult",
]
