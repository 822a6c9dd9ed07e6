"""Query requests, dispatch results and the audit log entry written for each."""

import math
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class SortOrder(str, Enum):
    asc = "asc"
    desc = "desc"


class QueryRequest(BaseModel):
    """Request body for the query endpoint."""

    query: str = Field(min_length=1)
    agent: str | None = None
    context: dict[str, Any] | None = None


class ToolQueryRequest(BaseModel):
    """Request body for a query answered by a model primed for one tool."""

    query: str = Field(min_length=1)
    tool: str = Field(min_length=1)
    action: str = Field(min_length=1)
    context: dict[str, Any] | None = None


class QueryResult(BaseModel):
    """Synchronous answer returned to the caller of a dispatch."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    response: str
    response_time_ms: int = Field(ge=0, alias="responseTime")


class QueryLogEntry(BaseModel):
    """One audited query/response pair. Immutable once written."""

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        alias_generator=lambda name: "responseTime" if name == "response_time_ms" else to_camel(name),
    )

    id: str
    timestamp: str
    query: str
    response: str
    agent: str | None = None
    context: dict[str, Any] | None = None
    response_time_ms: int = Field(ge=0)


class Pagination(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    page: int
    limit: int
    total: int
    total_pages: int

    @classmethod
    def compute(cls, page: int, limit: int, total: int) -> "Pagination":
        return cls(page=page, limit=limit, total=total, total_pages=math.ceil(total / limit))


class LogPage(BaseModel):
    logs: list[QueryLogEntry]
    pagination: Pagination


class DailyLog(BaseModel):
    date: str
    logs: list[QueryLogEntry]
