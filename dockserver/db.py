"""database initialization helpers."""

from dockserver.agent_db import SqliteAgentStore
from dockserver.query_log_db import SqliteQueryLogStore
from dockserver.services import Services


def init_all(services: Services) -> None:
    """initialize all sqlite tables."""
    for store in (services.registry.store, services.audit.store):
        if isinstance(store, (SqliteAgentStore, SqliteQueryLogStore)):
            store.init_db()
