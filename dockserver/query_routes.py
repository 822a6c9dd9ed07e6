"""API routes for natural-language queries."""

from fastapi import APIRouter, Depends

from agentdock.models.query_log import QueryRequest, QueryResult, ToolQueryRequest
from dockserver.services import Services, get_services

router = APIRouter()


@router.post("/query")
def process_query(request: QueryRequest, services: Services = Depends(get_services)) -> QueryResult:
    """answer a query, optionally as a named agent. Every call is audited."""
    return services.dispatcher.dispatch(request.query, request.agent, request.context)


@router.post("/query/tool")
def process_tool_query(request: ToolQueryRequest, services: Services = Depends(get_services)) -> QueryResult:
    """answer a query with a model primed for one tool and task."""
    return services.dispatcher.dispatch_tool_query(request.query, request.tool, request.action, request.context)
