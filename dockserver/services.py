"""Wires the agentdock components together for one server process."""

from dataclasses import dataclass

from fastapi import Request

from agentdock.audit import AuditLog
from agentdock.completion import CompletionClient
from agentdock.config import Settings
from agentdock.dispatcher import Completer, QueryDispatcher
from agentdock.registry import AgentRegistry
from agentdock.tools.gateway import ToolGateway
from dockserver.agent_db import SqliteAgentStore
from dockserver.query_log_db import SqliteQueryLogStore


@dataclass
class Services:
    settings: Settings
    registry: AgentRegistry
    audit: AuditLog
    dispatcher: QueryDispatcher
    gateway: ToolGateway

    def close(self) -> None:
        self.gateway.close()


def build_services(settings: Settings, completion: Completer | None = None) -> Services:
    """Build every component from ``settings`` against the sqlite file it names."""
    registry = AgentRegistry(SqliteAgentStore(settings.db_path))
    audit = AuditLog(SqliteQueryLogStore(settings.db_path))
    dispatcher = QueryDispatcher(
        registry,
        completion or CompletionClient(settings.completion),
        audit,
    )
    return Services(
        settings=settings,
        registry=registry,
        audit=audit,
        dispatcher=dispatcher,
        gateway=ToolGateway.from_settings(settings),
    )


def get_services(request: Request) -> Services:
    """FastAPI dependency returning the services attached to the app."""
    return request.app.state.services
