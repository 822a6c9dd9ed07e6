"""Jira REST API (v2) client.

Input models take Jira's camelCase argument names (issueKey, maxResults, ...)
and also accept the snake_case attribute names.
"""

import logging
from typing import Any

import httpx
from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

from agentdock.config import JiraSettings
from agentdock.errors import TransitionNotFound
from agentdock.models.tool import ProviderKey
from agentdock.providers.base import ProviderClient, operation

logger = logging.getLogger(__name__)


SEARCH_FIELDS = [
    "summary", "status", "assignee", "reporter", "priority",
    "issuetype", "created", "updated", "description",
]
ISSUE_FIELDS = SEARCH_FIELDS + ["comment"]


class _JiraInput(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class SearchIssuesInput(_JiraInput):
    jql: str = Field(min_length=1)
    max_results: int = Field(default=50, ge=1, le=1000)
    start_at: int = Field(default=0, ge=0)
    fields: list[str] = Field(default_factory=lambda: list(SEARCH_FIELDS))


class GetIssueInput(_JiraInput):
    issue_key: str = Field(min_length=1)
    fields: list[str] = Field(default_factory=lambda: list(ISSUE_FIELDS))


class _IssueFields(_JiraInput):
    description: str | None = None
    priority: str | None = None
    assignee: str | None = None
    labels: list[str] | None = None
    components: list[str] | None = None
    custom_fields: dict[str, Any] | None = None

    def jira_fields(self) -> dict[str, Any]:
        """The ``fields`` object of a create/update payload."""
        fields: dict[str, Any] = {}
        if self.description:
            fields["description"] = self.description
        if self.priority:
            fields["priority"] = {"name": self.priority}
        if self.assignee:
            fields["assignee"] = {"name": self.assignee}
        if self.labels is not None:
            fields["labels"] = self.labels
        if self.components is not None:
            fields["components"] = [{"name": name} for name in self.components]
        if self.custom_fields:
            fields.update(self.custom_fields)
        return fields


class CreateIssueInput(_IssueFields):
    project_key: str = Field(min_length=1)
    summary: str = Field(min_length=1)
    issue_type: str = "Task"


class UpdateIssueInput(_IssueFields):
    issue_key: str = Field(min_length=1)
    summary: str | None = None


class AddCommentInput(_JiraInput):
    issue_key: str = Field(min_length=1)
    comment: str = Field(min_length=1)


class TransitionIssueInput(_JiraInput):
    issue_key: str = Field(min_length=1)
    transition_id: str | None = None
    transition_name: str | None = None
    comment: str | None = None
    resolution: str | None = None

    @model_validator(mode="after")
    def _needs_transition(self) -> "TransitionIssueInput":
        if not self.transition_id and not self.transition_name:
            raise ValueError("Either transitionId or transitionName must be provided")
        return self


def _person(person: dict[str, Any] | None) -> dict[str, Any] | None:
    if not person:
        return None
    return {"name": person.get("displayName"), "email": person.get("emailAddress")}


def _format_issue(issue: dict[str, Any]) -> dict[str, Any]:
    fields = issue.get("fields") or {}
    return {
        "id": issue.get("id"),
        "key": issue.get("key"),
        "summary": fields.get("summary"),
        "status": (fields.get("status") or {}).get("name"),
        "assignee": _person(fields.get("assignee")),
        "reporter": _person(fields.get("reporter")),
        "priority": (fields.get("priority") or {}).get("name"),
        "issuetype": (fields.get("issuetype") or {}).get("name"),
        "created": fields.get("created"),
        "updated": fields.get("updated"),
        "description": fields.get("description"),
    }


def _format_comment(comment: dict[str, Any]) -> dict[str, Any]:
    return {
        "id": comment.get("id"),
        "author": _person(comment.get("author")),
        "body": comment.get("body"),
        "created": comment.get("created"),
        "updated": comment.get("updated"),
    }


class JiraClient(ProviderClient):
    key = ProviderKey.jira
    display_name = "Jira"

    def __init__(
        self,
        settings: JiraSettings,
        timeout: float = 30.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        host = (settings.host or "http://jira.invalid").rstrip("/")
        super().__init__(
            base_url=f"{host}/rest/api/2",
            configured=settings.configured,
            headers={"Content-Type": "application/json"},
            auth=(settings.username or "", settings.api_token or ""),
            timeout=timeout,
            transport=transport,
        )

    def _error_details(self, response: httpx.Response) -> str:
        # Jira reports {"errorMessages": [...], "errors": {field: message}}
        try:
            body = response.json()
        except ValueError:
            return response.text[:500]
        if not isinstance(body, dict):
            return response.text[:500]
        messages = list(body.get("errorMessages") or [])
        messages += [f"{field}: {message}" for field, message in (body.get("errors") or {}).items()]
        return "; ".join(messages) if messages else response.text[:500]

    @operation(SearchIssuesInput, "Failed to search issues")
    def search_issues(self, params: SearchIssuesInput) -> dict[str, Any]:
        data = self._request(
            "POST",
            "/search",
            expect=dict,
            json={
                "jql": params.jql,
                "maxResults": params.max_results,
                "startAt": params.start_at,
                "fields": params.fields,
            },
        )
        return {
            "issues": [_format_issue(issue) for issue in data.get("issues", [])],
            "total": data.get("total"),
            "startAt": data.get("startAt"),
            "maxResults": data.get("maxResults"),
        }

    @operation(GetIssueInput, "Failed to get issue details")
    def get_issue(self, params: GetIssueInput) -> dict[str, Any]:
        issue = self._request(
            "GET",
            f"/issue/{params.issue_key}",
            params={"fields": ",".join(params.fields)},
            expect=dict,
        )
        formatted = _format_issue(issue)
        comment_page = (issue.get("fields") or {}).get("comment") or {}
        formatted["comments"] = [_format_comment(c) for c in comment_page.get("comments", [])]
        return formatted

    @operation(CreateIssueInput, "Failed to create issue")
    def create_issue(self, params: CreateIssueInput) -> dict[str, Any]:
        fields = {
            "project": {"key": params.project_key},
            "summary": params.summary,
            "issuetype": {"name": params.issue_type},
            **params.jira_fields(),
        }
        created = self._request("POST", "/issue", json={"fields": fields}, expect=dict)
        return {"id": created.get("id"), "key": created.get("key"), "self": created.get("self")}

    @operation(UpdateIssueInput, "Failed to update issue")
    def update_issue(self, params: UpdateIssueInput) -> dict[str, Any]:
        fields = params.jira_fields()
        if params.summary:
            fields["summary"] = params.summary
        self._request("PUT", f"/issue/{params.issue_key}", json={"fields": fields})
        return {"success": True, "message": f"Issue {params.issue_key} updated successfully"}

    @operation(AddCommentInput, "Failed to add comment")
    def add_comment(self, params: AddCommentInput) -> dict[str, Any]:
        comment = self._request(
            "POST",
            f"/issue/{params.issue_key}/comment",
            json={"body": params.comment},
            expect=dict,
        )
        return _format_comment(comment)

    @operation(TransitionIssueInput, "Failed to transition issue")
    def transition_issue(self, params: TransitionIssueInput) -> dict[str, Any]:
        """Move an issue through its workflow.

        A transition given only by name is looked up among the issue's
        available transitions (case-insensitive) before anything is posted,
        so an unknown name leaves the issue untouched.
        """
        transition_id = params.transition_id or self._resolve_transition(
            params.issue_key, params.transition_name
        )

        payload: dict[str, Any] = {"transition": {"id": transition_id}}
        if params.comment:
            payload["update"] = {"comment": [{"add": {"body": params.comment}}]}
        if params.resolution:
            payload["fields"] = {"resolution": {"name": params.resolution}}

        self._request("POST", f"/issue/{params.issue_key}/transitions", json=payload)
        return {
            "success": True,
            "message": f"Issue {params.issue_key} transitioned successfully",
            "transitionId": transition_id,
        }

    def _resolve_transition(self, issue_key: str, transition_name: str) -> str:
        data = self._request("GET", f"/issue/{issue_key}/transitions", expect=dict)
        wanted = transition_name.casefold()
        for transition in data.get("transitions") or []:
            if not isinstance(transition, dict) or transition.get("id") is None:
                continue
            if str(transition.get("name", "")).casefold() == wanted:
                logger.debug(f"Resolved transition '{transition_name}' to id {transition['id']}")
                return str(transition["id"])
        raise TransitionNotFound(transition_name)
