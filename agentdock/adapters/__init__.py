"""Storage adapters for agent records and the query audit log."""

from agentdock.adapters.stores import (
    AgentStore,
    MemoryAgentStore,
    MemoryQueryLogStore,
    QueryLogStore,
)

__all__ = [
    "AgentStore",
    "MemoryAgentStore",
    "QueryLogStore",
    "MemoryQueryLogStore",
]
