"""SQLite storage for the query audit log."""

import sqlite3
from pathlib import Path

from agentdock.adapters.stores import QueryLogStore
from agentdock.models.query_log import QueryLogEntry
from agentdock.utils.identifiers import utc_day


class SqliteQueryLogStore(QueryLogStore):
    """Append-only log table.

    ``seq`` keeps insertion order; ``day`` is the UTC date of the entry's
    timestamp and serves as the daily index.
    """

    def __init__(self, db_path: Path) -> None:
        self.db_path = Path(db_path)

    def _connect(self) -> sqlite3.Connection:
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        return conn

    def init_db(self) -> None:
        with self._connect() as conn:
            conn.execute(
                """
                create table if not exists query_logs (
                    seq integer primary key autoincrement,
                    id text not null unique,
                    day text not null,
                    timestamp text not null,
                    entry_json text not null
                )
                """
            )
            conn.execute(
                "create index if not exists idx_query_logs_day on query_logs(day)"
            )
            conn.commit()

    def append(self, entry: QueryLogEntry) -> None:
        with self._connect() as conn:
            conn.execute(
                "insert into query_logs (id, day, timestamp, entry_json) values (?, ?, ?, ?)",
                (entry.id, utc_day(entry.timestamp), entry.timestamp, entry.model_dump_json(by_alias=True)),
            )
            conn.commit()

    def count(self) -> int:
        with self._connect() as conn:
            row = conn.execute("select count(*) as n from query_logs").fetchone()
        return row["n"]

    def list_range(self, offset: int, limit: int, descending: bool = False) -> list[QueryLogEntry]:
        order = "desc" if descending else "asc"
        with self._connect() as conn:
            rows = conn.execute(
                f"select entry_json from query_logs order by seq {order} limit ? offset ?",
                (limit, offset),
            ).fetchall()
        return [QueryLogEntry.model_validate_json(row["entry_json"]) for row in rows]

    def get(self, log_id: str) -> QueryLogEntry | None:
        with self._connect() as conn:
            row = conn.execute(
                "select entry_json from query_logs where id = ?",
                (log_id,),
            ).fetchone()
        if not row:
            return None
        return QueryLogEntry.model_validate_json(row["entry_json"])

    def list_for_day(self, day: str) -> list[QueryLogEntry] | None:
        with self._connect() as conn:
            rows = conn.execute(
                "select entry_json from query_logs where day = ? order by seq",
                (day,),
            ).fetchall()
        if not rows:
            return None
        return [QueryLogEntry.model_validate_json(row["entry_json"]) for row in rows]
