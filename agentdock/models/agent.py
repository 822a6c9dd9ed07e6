"""Agent records: named prompt personas with an optional tool list."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


AGENT_NAME_MAX = 100


class _AgentFields(BaseModel):
    """camelCase on the wire, snake_case in Python."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    @field_validator("tools", check_fields=False)
    @classmethod
    def dedupe_tools(cls, value: list[str] | None) -> list[str] | None:
        # tools is a set of names; keep first-seen order for stable output
        if value is None:
            return None
        return list(dict.fromkeys(value))


class Agent(_AgentFields):
    """The canonical agent record owned by the registry."""

    name: str = Field(min_length=1, max_length=AGENT_NAME_MAX)
    description: str = Field(min_length=1)
    config: dict[str, Any] | None = None
    tools: list[str] | None = None
    enabled: bool = True
    created_at: str
    updated_at: str


class AgentCreate(_AgentFields):
    """Request body for registering an agent."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    name: str = Field(min_length=1, max_length=AGENT_NAME_MAX)
    description: str = Field(min_length=1)
    config: dict[str, Any] | None = None
    tools: list[str] | None = None
    enabled: bool = True


class AgentUpdate(_AgentFields):
    """Partial update. Unset fields keep their stored value; name is ignored."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    name: str | None = None
    description: str | None = None
    config: dict[str, Any] | None = None
    tools: list[str] | None = None
    enabled: bool | None = None
