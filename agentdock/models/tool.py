"""Tool catalog data models.

A tool is one provider operation. Its effective enablement is derived:
the owning category must be configured AND the tool statically enabled.
"""

from enum import Enum

from pydantic import BaseModel


class ProviderKey(str, Enum):
    """Provider categories tools are grouped under."""

    github = "github"
    slack = "slack"
    jira = "jira"


class ProviderCategory(BaseModel):
    """A provider category and whether its credentials are present."""

    model_config = {"frozen": True}

    key: ProviderKey
    name: str  # display name
    description: str
    enabled: bool  # same as configured; "enabled" is the wire name


class ToolDescriptor(BaseModel):
    """What callers see for a tool: effective enablement already applied."""

    model_config = {"frozen": True}

    name: str
    description: str
    category: ProviderKey
    enabled: bool
