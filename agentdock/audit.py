"""Audit log of dispatched queries.

Append-only. Entries are addressable by id, listed page by page in append
order, and partitioned by UTC calendar day.
"""

import logging
import re

from agentdock.adapters.stores import QueryLogStore
from agentdock.errors import InvalidInput, LogNotFound
from agentdock.models.query_log import DailyLog, LogPage, Pagination, QueryLogEntry, SortOrder

logger = logging.getLogger(__name__)

DAY_PATTERN = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 20


class AuditLog:
    def __init__(self, store: QueryLogStore) -> None:
        self.store = store

    def append(self, entry: QueryLogEntry) -> None:
        """Write one entry. Raises if the store could not take it."""
        self.store.append(entry)
        logger.debug(f"Logged query {entry.id} ({entry.response_time_ms} ms)")

    def list_page(
        self,
        page: int = DEFAULT_PAGE,
        limit: int = DEFAULT_LIMIT,
        sort: SortOrder | str = SortOrder.desc,
    ) -> LogPage:
        """Offset pagination over append order; desc puts the newest first."""
        if page < 1:
            raise InvalidInput("Invalid pagination parameters", "page must be >= 1")
        if limit < 1:
            raise InvalidInput("Invalid pagination parameters", "limit must be >= 1")
        try:
            sort = SortOrder(sort)
        except ValueError:
            raise InvalidInput("Invalid pagination parameters", "sort must be 'asc' or 'desc'") from None

        total = self.store.count()
        start_index = (page - 1) * limit
        end_index = min(start_index + limit, total)
        if start_index >= total:
            logs = []
        else:
            logs = self.store.list_range(start_index, end_index - start_index, sort == SortOrder.desc)
        return LogPage(logs=logs, pagination=Pagination.compute(page, limit, total))

    def get(self, log_id: str) -> QueryLogEntry:
        entry = self.store.get(log_id)
        if entry is None:
            raise LogNotFound(f"Log with ID '{log_id}' not found")
        return entry

    def list_for_day(self, date: str) -> DailyLog:
        """Entries recorded on one UTC day. ``date`` must look like YYYY-MM-DD."""
        if not DAY_PATTERN.fullmatch(date):
            raise InvalidInput("Invalid date format", "Date must be in the format YYYY-MM-DD")
        logs = self.store.list_for_day(date)
        if logs is None:
            raise LogNotFound(f"Daily log for '{date}' not found")
        return DailyLog(date=date, logs=logs)
