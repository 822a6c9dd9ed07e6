"""API routes for the agent registry."""

from fastapi import APIRouter, Depends, Response

from agentdock.models.agent import Agent, AgentCreate, AgentUpdate
from dockserver.services import Services, get_services

router = APIRouter()


@router.get("/agents")
def list_agents(services: Services = Depends(get_services)) -> list[Agent]:
    """list all registered agents."""
    return services.registry.list()


@router.get("/agents/{name}")
def get_agent(name: str, services: Services = Depends(get_services)) -> Agent:
    """get a single agent by name."""
    return services.registry.get(name)


@router.post("/agents", status_code=201)
def create_agent(request: AgentCreate, services: Services = Depends(get_services)) -> Agent:
    """register a new agent. 409 if the name is taken."""
    return services.registry.create(request)


@router.put("/agents/{name}")
def update_agent(name: str, request: AgentUpdate, services: Services = Depends(get_services)) -> Agent:
    """update an agent; fields left out of the body keep their value."""
    return services.registry.update(name, request)


@router.delete("/agents/{name}", status_code=204)
def delete_agent(name: str, services: Services = Depends(get_services)) -> Response:
    """remove an agent from the registry."""
    services.registry.delete(name)
    return Response(status_code=204)
