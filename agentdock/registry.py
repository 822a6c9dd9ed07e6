"""Agent registry: CRUD over agent records held in an AgentStore."""

import logging

from pydantic import ValidationError

from agentdock.adapters.stores import AgentStore
from agentdock.errors import AgentNotFound, Conflict, CorruptRecord, InvalidInput
from agentdock.models.agent import Agent, AgentCreate, AgentUpdate
from agentdock.utils.identifiers import utc_timestamp

logger = logging.getLogger(__name__)


def _validation_details(exc: ValidationError) -> list[dict]:
    return [
        {"loc": list(err["loc"]), "msg": err["msg"], "type": err["type"]}
        for err in exc.errors()
    ]


class AgentRegistry:
    """Owns the canonical copy of every agent.

    Malformed stored records are skipped by list() and logged at warning
    level; they are never merged into the result. Reading one by name
    raises CorruptRecord.
    """

    def __init__(self, store: AgentStore) -> None:
        self.store = store

    def list(self) -> list[Agent]:
        agents = []
        for raw in self.store.list_agents():
            try:
                agents.append(Agent.model_validate_json(raw))
            except ValidationError as e:
                logger.warning(f"Skipping malformed agent record: {e.error_count()} error(s): {raw[:200]}")
        return agents

    def get(self, name: str) -> Agent:
        raw = self.store.read_agent(name)
        if raw is None:
            raise AgentNotFound(name)
        try:
            return Agent.model_validate_json(raw)
        except ValidationError as e:
            logger.error(f"Malformed record for agent '{name}': {e.error_count()} error(s): {raw[:200]}")
            raise CorruptRecord(f"Agent '{name}' has a malformed record", _validation_details(e)) from e

    def create(self, draft: AgentCreate | dict) -> Agent:
        now = utc_timestamp()
        try:
            if isinstance(draft, dict):
                draft = AgentCreate.model_validate(draft)
            agent = Agent(**draft.model_dump(), created_at=now, updated_at=now)
        except ValidationError as e:
            logger.error(f"Validation error registering agent: {e}")
            raise InvalidInput("Invalid agent data", _validation_details(e)) from e

        if self.store.read_agent(agent.name) is not None:
            raise Conflict(f"Agent '{agent.name}' already exists")
        # the store insert is the real guard; the read above only gives a fast answer
        if not self.store.insert_agent(agent.name, agent.model_dump_json(by_alias=True)):
            raise Conflict(f"Agent '{agent.name}' already exists")

        logger.info(f"Agent '{agent.name}' registered successfully")
        return agent

    def update(self, name: str, partial: AgentUpdate | dict) -> Agent:
        existing = self.get(name)
        try:
            if isinstance(partial, dict):
                partial = AgentUpdate.model_validate(partial)
            changes = partial.model_dump(exclude_unset=True)
            changes.pop("name", None)
            merged = existing.model_dump() | changes
            merged["name"] = name
            merged["updated_at"] = utc_timestamp()
            agent = Agent.model_validate(merged)
        except ValidationError as e:
            logger.error(f"Validation error updating agent: {e}")
            raise InvalidInput("Invalid agent data", _validation_details(e)) from e

        self.store.write_agent(name, agent.model_dump_json(by_alias=True))
        logger.info(f"Agent '{name}' updated successfully")
        return agent

    def delete(self, name: str) -> None:
        if not self.store.delete_agent(name):
            raise AgentNotFound(name)
        logger.info(f"Agent '{name}' deleted successfully")
