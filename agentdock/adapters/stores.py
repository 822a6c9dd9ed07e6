"""Persistence interfaces for agent records and the query audit log.

The registry and audit log only talk to these interfaces. The sqlite
implementations live in dockserver; the in-memory ones here back tests and
embedded use.
"""

import threading

from agentdock.models.query_log import QueryLogEntry
from agentdock.utils.identifiers import utc_day


class AgentStore:
    """Protocol for agent record persistence.

    Records travel as JSON text so that a corrupted record can be detected
    and skipped by the registry instead of breaking the whole listing.
    Implementations must make single-record writes crash-consistent.
    """

    def list_agents(self) -> list[str]:
        """Return the raw JSON of every stored record."""
        raise NotImplementedError

    def read_agent(self, name: str) -> str | None:
        raise NotImplementedError

    def insert_agent(self, name: str, record_json: str) -> bool:
        """Store a new record. Returns False if the name is already taken."""
        raise NotImplementedError

    def write_agent(self, name: str, record_json: str) -> None:
        """Overwrite an existing record."""
        raise NotImplementedError

    def delete_agent(self, name: str) -> bool:
        """Remove a record. Returns False if there was nothing to remove."""
        raise NotImplementedError


class MemoryAgentStore(AgentStore):
    """Stores agent records in a dict."""

    def __init__(self) -> None:
        self.records: dict[str, str] = {}
        self._lock = threading.Lock()

    def list_agents(self) -> list[str]:
        with self._lock:
            return [self.records[name] for name in sorted(self.records)]

    def read_agent(self, name: str) -> str | None:
        return self.records.get(name)

    def insert_agent(self, name: str, record_json: str) -> bool:
        with self._lock:
            if name in self.records:
                return False
            self.records[name] = record_json
            return True

    def write_agent(self, name: str, record_json: str) -> None:
        with self._lock:
            self.records[name] = record_json

    def delete_agent(self, name: str) -> bool:
        with self._lock:
            return self.records.pop(name, None) is not None


class QueryLogStore:
    """Protocol for the append-only query log.

    Entries keep their append order. Each entry is also indexed under the
    UTC calendar day of its timestamp.
    """

    def append(self, entry: QueryLogEntry) -> None:
        raise NotImplementedError

    def count(self) -> int:
        raise NotImplementedError

    def list_range(self, offset: int, limit: int, descending: bool = False) -> list[QueryLogEntry]:
        """Return up to ``limit`` entries starting at ``offset`` in the given order."""
        raise NotImplementedError

    def get(self, log_id: str) -> QueryLogEntry | None:
        raise NotImplementedError

    def list_for_day(self, day: str) -> list[QueryLogEntry] | None:
        """Entries for one day in append order, or None if the day has no partition."""
        raise NotImplementedError


class MemoryQueryLogStore(QueryLogStore):
    """Stores log entries in a list with a per-id and per-day index."""

    def __init__(self) -> None:
        self.entries: list[QueryLogEntry] = []
        self._by_id: dict[str, QueryLogEntry] = {}
        self._by_day: dict[str, list[QueryLogEntry]] = {}
        self._lock = threading.Lock()

    def append(self, entry: QueryLogEntry) -> None:
        with self._lock:
            self.entries.append(entry)
            self._by_id[entry.id] = entry
            self._by_day.setdefault(utc_day(entry.timestamp), []).append(entry)

    def count(self) -> int:
        return len(self.entries)

    def list_range(self, offset: int, limit: int, descending: bool = False) -> list[QueryLogEntry]:
        with self._lock:
            ordered = list(reversed(self.entries)) if descending else list(self.entries)
        return ordered[offset:offset + limit]

    def get(self, log_id: str) -> QueryLogEntry | None:
        return self._by_id.get(log_id)

    def list_for_day(self, day: str) -> list[QueryLogEntry] | None:
        with self._lock:
            entries = self._by_day.get(day)
            return list(entries) if entries is not None else None
