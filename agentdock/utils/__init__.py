"""Utility functions for agentdock."""

from agentdock.utils.identifiers import (
    generate_log_id,
    utc_day,
    utc_now,
    utc_timestamp,
)

__all__ = [
    "generate_log_id",
    "utc_day",
    "utc_now",
    "utc_timestamp",
]
