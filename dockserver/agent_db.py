"""SQLite storage for agent records."""

import sqlite3
from pathlib import Path

from agentdock.adapters.stores import AgentStore
from agentdock.utils.identifiers import utc_timestamp


class SqliteAgentStore(AgentStore):
    """Agent records keyed by name, stored as JSON text."""

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
                create table if not exists agents (
                    name text primary key,
                    record_json text not null,
                    updated_at text not null
                )
                """
            )
            conn.commit()

    def list_agents(self) -> list[str]:
        with self._connect() as conn:
            rows = conn.execute("select record_json from agents order by name").fetchall()
        return [row["record_json"] for row in rows]

    def read_agent(self, name: str) -> str | None:
        with self._connect() as conn:
            row = conn.execute(
                "select record_json from agents where name = ?",
                (name,),
            ).fetchone()
        return row["record_json"] if row else None

    def insert_agent(self, name: str, record_json: str) -> bool:
        """insert a new record; the primary key rejects a second writer."""
        try:
            with self._connect() as conn:
                conn.execute(
                    "insert into agents (name, record_json, updated_at) values (?, ?, ?)",
                    (name, record_json, utc_timestamp()),
                )
                conn.commit()
        except sqlite3.IntegrityError:
            return False
        return True

    def write_agent(self, name: str, record_json: str) -> None:
        with self._connect() as conn:
            conn.execute(
                """
                insert into agents (name, record_json, updated_at)
                values (?, ?, ?)
                on conflict(name) do update set
                    record_json = excluded.record_json,
                    updated_at = excluded.updated_at
                """,
                (name, record_json, utc_timestamp()),
            )
            conn.commit()

    def delete_agent(self, name: str) -> bool:
        with self._connect() as conn:
            cursor = conn.execute("delete from agents where name = ?", (name,))
            conn.commit()
        return cursor.rowcount > 0
