"""Static tool table and the per-process catalog view of it.

The table is fixed at import time. ToolCatalog applies provider
configuration once, at construction, so lookups never recompute enablement.
"""

from collections.abc import Mapping
from dataclasses import dataclass

from agentdock.errors import CategoryNotFound, ToolNotFound
from agentdock.models.tool import ProviderCategory, ProviderKey, ToolDescriptor


@dataclass(frozen=True)
class ToolDefinition:
    """One row of the tool table."""

    name: str
    description: str
    category: ProviderKey
    operation: str  # method name on the provider client
    enabled: bool = True  # static flag; configuration can still turn it off


CATEGORIES: dict[ProviderKey, tuple[str, str]] = {
    ProviderKey.github: ("GitHub", "GitHub repository management and CI/CD tools"),
    ProviderKey.slack: ("Slack", "Slack messaging and channel management tools"),
    ProviderKey.jira: ("Jira", "Jira issue tracking and project management tools"),
}


TOOLS: tuple[ToolDefinition, ...] = (
    # GitHub
    ToolDefinition("github_list_repos", "List GitHub repositories for the authenticated user",
                   ProviderKey.github, "list_repos"),
    ToolDefinition("github_get_pr", "Get details of a GitHub Pull Request",
                   ProviderKey.github, "get_pr"),
    ToolDefinition("github_create_pr_comment", "Create a comment on a GitHub Pull Request",
                   ProviderKey.github, "create_pr_comment"),
    ToolDefinition("github_trigger_workflow", "Trigger a GitHub Actions workflow",
                   ProviderKey.github, "trigger_workflow"),
    # Slack
    ToolDefinition("slack_list_channels", "List available Slack channels",
                   ProviderKey.slack, "list_channels"),
    ToolDefinition("slack_get_channel_history", "Get message history from a Slack channel",
                   ProviderKey.slack, "get_channel_history"),
    ToolDefinition("slack_send_message", "Send a message to a Slack channel",
                   ProviderKey.slack, "send_message"),
    ToolDefinition("slack_update_message", "Update an existing Slack message",
                   ProviderKey.slack, "update_message"),
    ToolDefinition("slack_add_reaction", "Add a reaction to a Slack message",
                   ProviderKey.slack, "add_reaction"),
    # Jira
    ToolDefinition("jira_search_issues", "Search Jira issues using JQL",
                   ProviderKey.jira, "search_issues"),
    ToolDefinition("jira_get_issue", "Get details of a specific Jira issue",
                   ProviderKey.jira, "get_issue"),
    ToolDefinition("jira_create_issue", "Create a new Jira issue",
                   ProviderKey.jira, "create_issue"),
    ToolDefinition("jira_update_issue", "Update an existing Jira issue",
                   ProviderKey.jira, "update_issue"),
    ToolDefinition("jira_add_comment", "Add a comment to a Jira issue",
                   ProviderKey.jira, "add_comment"),
    ToolDefinition("jira_transition_issue", "Transition a Jira issue to a new status",
                   ProviderKey.jira, "transition_issue"),
)


class ToolCatalog:
    """Read-only view of the tool table under one provider configuration."""

    def __init__(
        self,
        configured: Mapping[ProviderKey, bool],
        tools: tuple[ToolDefinition, ...] = TOOLS,
    ) -> None:
        self._configured = {key: bool(configured.get(key, False)) for key in CATEGORIES}
        self._definitions = {tool.name: tool for tool in tools}
        self._descriptors = {
            tool.name: ToolDescriptor(
                name=tool.name,
                description=tool.description,
                category=tool.category,
                enabled=self._configured[tool.category] and tool.enabled,
            )
            for tool in tools
        }
        self._categories = {
            key: ProviderCategory(key=key, name=name, description=description, enabled=self._configured[key])
            for key, (name, description) in CATEGORIES.items()
        }

    def list_all(self) -> list[ToolDescriptor]:
        return list(self._descriptors.values())

    def list_by_category(self, key: ProviderKey | str) -> list[ToolDescriptor]:
        category = self._category_key(key)
        return [d for d in self._descriptors.values() if d.category == category]

    def get(self, name: str) -> ToolDescriptor:
        try:
            return self._descriptors[name]
        except KeyError:
            raise ToolNotFound(name) from None

    def definition(self, name: str) -> ToolDefinition:
        """Table row for ``name``, including the provider operation it runs."""
        try:
            return self._definitions[name]
        except KeyError:
            raise ToolNotFound(name) from None

    def list_categories(self) -> dict[ProviderKey, ProviderCategory]:
        return dict(self._categories)

    def is_configured(self, key: ProviderKey) -> bool:
        return self._configured[key]

    @staticmethod
    def _category_key(key: ProviderKey | str) -> ProviderKey:
        try:
            return ProviderKey(key)
        except ValueError:
            raise CategoryNotFound(str(key)) from None
