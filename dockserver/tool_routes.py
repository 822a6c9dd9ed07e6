"""API routes for the tool catalog and tool execution."""

from typing import Any

from fastapi import APIRouter, Body, Depends
from fastapi.responses import JSONResponse

from agentdock.errors import ProviderCallFailed, ProviderNotConfigured, TransitionNotFound
from agentdock.models.tool import ProviderCategory, ProviderKey, ToolDescriptor
from dockserver.services import Services, get_services

router = APIRouter()

# ToolResult.kind -> HTTP status of a failed execution
_FAILURE_STATUS = {
    cls.__name__: cls.status_code
    for cls in (ProviderNotConfigured, ProviderCallFailed, TransitionNotFound)
}


@router.get("/tools")
def list_tools(services: Services = Depends(get_services)) -> list[ToolDescriptor]:
    """list every tool with its effective enabled flag."""
    return services.gateway.catalog.list_all()


@router.get("/tools/categories")
def list_categories(services: Services = Depends(get_services)) -> dict[ProviderKey, ProviderCategory]:
    return services.gateway.catalog.list_categories()


@router.get("/tools/category/{category}")
def list_category_tools(category: str, services: Services = Depends(get_services)) -> list[ToolDescriptor]:
    return services.gateway.catalog.list_by_category(category)


@router.get("/tools/{name}")
def get_tool(name: str, services: Services = Depends(get_services)) -> ToolDescriptor:
    return services.gateway.catalog.get(name)


@router.post("/tools/{name}/execute")
def execute_tool(
    name: str,
    arguments: dict[str, Any] | None = Body(default=None),
    services: Services = Depends(get_services),
) -> JSONResponse:
    """run a tool; the body holds the operation's arguments.

    Returns the result envelope: 200 when ok, otherwise the status of the
    failure kind (503 not configured, 404 unknown transition, 502 provider error).
    """
    result = services.gateway.execute(name, arguments or {})
    status = 200 if result.ok else _FAILURE_STATUS.get(result.kind, 502)
    return JSONResponse(result.to_dict(), status_code=status)
