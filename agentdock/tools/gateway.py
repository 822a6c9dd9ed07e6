"""Routes a tool invocation to the provider client that implements it."""

import logging
import time
from collections.abc import Mapping
from typing import Any

import httpx

from agentdock.config import Settings
from agentdock.models.results import ToolResult
from agentdock.models.tool import ProviderKey
from agentdock.providers.base import ProviderClient
from agentdock.providers.github import GitHubClient
from agentdock.providers.jira import JiraClient
from agentdock.providers.slack import SlackClient
from agentdock.tools.catalog import ToolCatalog

logger = logging.getLogger(__name__)


class ToolGateway:
    def __init__(self, catalog: ToolCatalog, clients: Mapping[ProviderKey, ProviderClient]) -> None:
        self.catalog = catalog
        self.clients = dict(clients)

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        transports: Mapping[ProviderKey, httpx.BaseTransport] | None = None,
    ) -> "ToolGateway":
        """Build the catalog and one client per provider from ``settings``.

        ``transports`` lets tests swap in an httpx.MockTransport per provider.
        """
        transports = transports or {}
        timeout = settings.provider_timeout
        clients: dict[ProviderKey, ProviderClient] = {
            ProviderKey.github: GitHubClient(settings.github, timeout, transports.get(ProviderKey.github)),
            ProviderKey.slack: SlackClient(settings.slack, timeout, transports.get(ProviderKey.slack)),
            ProviderKey.jira: JiraClient(settings.jira, timeout, transports.get(ProviderKey.jira)),
        }
        for key, configured in settings.provider_configured().items():
            if not configured:
                logger.warning(f"{key.value} integration disabled: credentials not set")
        return cls(ToolCatalog(settings.provider_configured()), clients)

    def execute(self, tool_name: str, arguments: dict[str, Any] | None = None) -> ToolResult:
        """Run one tool. Unknown names raise ToolNotFound; bad arguments raise InvalidInput."""
        definition = self.catalog.definition(tool_name)
        started = time.perf_counter()

        if not self.catalog.is_configured(definition.category):
            result = ToolResult.failure(
                f"{definition.category.value} integration is not configured",
                f"Tool '{tool_name}' is unavailable until its credentials are set",
                kind="ProviderNotConfigured",
            )
        elif not definition.enabled:
            result = ToolResult.failure(
                f"Tool '{tool_name}' is disabled",
                "The tool is switched off in the catalog",
                kind="ProviderNotConfigured",
            )
        else:
            result = self.clients[definition.category].execute(definition.operation, arguments or {})

        elapsed_ms = round((time.perf_counter() - started) * 1000)
        if result.ok:
            logger.info(f"Tool {tool_name} succeeded in {elapsed_ms}ms")
        else:
            logger.warning(f"Tool {tool_name} failed in {elapsed_ms}ms: {result.error} ({result.details})")
        return result

    def close(self) -> None:
        for client in self.clients.values():
            client.close()
