"""GitHub REST API client."""

from typing import Any

import httpx
from pydantic import BaseModel, Field

from agentdock.config import GitHubSettings
from agentdock.models.tool import ProviderKey
from agentdock.providers.base import ProviderClient, operation


class ListReposInput(BaseModel):
    page: int = Field(default=1, ge=1)
    per_page: int = Field(default=30, ge=1, le=100)


class PullRequestRef(BaseModel):
    owner: str = Field(min_length=1)
    repo: str = Field(min_length=1)
    pull_number: int = Field(ge=1)


class PrCommentInput(PullRequestRef):
    body: str = Field(min_length=1)


class TriggerWorkflowInput(BaseModel):
    owner: str = Field(min_length=1)
    repo: str = Field(min_length=1)
    workflow_id: str = Field(min_length=1)  # workflow file name or numeric id
    ref: str = "main"
    inputs: dict[str, str] | None = None


def _user(user: dict[str, Any] | None) -> dict[str, Any] | None:
    if not user:
        return None
    return {"login": user.get("login"), "avatar_url": user.get("avatar_url")}


class GitHubClient(ProviderClient):
    key = ProviderKey.github
    display_name = "GitHub"

    def __init__(
        self,
        settings: GitHubSettings,
        timeout: float = 30.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        super().__init__(
            base_url=settings.api_url,
            configured=settings.configured,
            headers={
                "Authorization": f"token {settings.token or ''}",
                "Accept": "application/vnd.github.v3+json",
            },
            timeout=timeout,
            transport=transport,
        )

    @operation(ListReposInput, "Failed to list repositories")
    def list_repos(self, params: ListReposInput) -> dict[str, Any]:
        data = self._request(
            "GET",
            "/user/repos",
            expect=list,
            params={"page": params.page, "per_page": params.per_page, "sort": "updated"},
        )
        repos = [
            {
                "name": repo.get("name"),
                "description": repo.get("description"),
                "full_name": repo.get("full_name"),
                "html_url": repo.get("html_url"),
                "language": repo.get("language"),
                "updated_at": repo.get("updated_at"),
            }
            for repo in data
        ]
        return {
            "repos": repos,
            "page": params.page,
            "per_page": params.per_page,
            "total_count": len(repos),
        }

    @operation(PullRequestRef, "Failed to get PR details")
    def get_pr(self, params: PullRequestRef) -> dict[str, Any]:
        """PR details with its reviews merged in.

        Both requests must succeed; a failed reviews fetch fails the whole call.
        """
        path = f"/repos/{params.owner}/{params.repo}/pulls/{params.pull_number}"
        pr = self._request("GET", path, expect=dict)
        reviews = self._request("GET", f"{path}/reviews", expect=list)
        return {
            "id": pr.get("id"),
            "number": pr.get("number"),
            "title": pr.get("title"),
            "state": pr.get("state"),
            "user": _user(pr.get("user")),
            "body": pr.get("body"),
            "created_at": pr.get("created_at"),
            "updated_at": pr.get("updated_at"),
            "html_url": pr.get("html_url"),
            "diff_url": pr.get("diff_url"),
            "additions": pr.get("additions"),
            "deletions": pr.get("deletions"),
            "changed_files": pr.get("changed_files"),
            "reviews": [
                {
                    "id": review.get("id"),
                    "user": _user(review.get("user")),
                    "body": review.get("body"),
                    "state": review.get("state"),
                    "submitted_at": review.get("submitted_at"),
                }
                for review in reviews
            ],
        }

    @operation(PrCommentInput, "Failed to create PR comment")
    def create_pr_comment(self, params: PrCommentInput) -> dict[str, Any]:
        # PR conversation comments live on the issues endpoint
        comment = self._request(
            "POST",
            f"/repos/{params.owner}/{params.repo}/issues/{params.pull_number}/comments",
            json={"body": params.body},
            expect=dict,
        )
        return {
            "id": comment.get("id"),
            "html_url": comment.get("html_url"),
            "body": comment.get("body"),
            "created_at": comment.get("created_at"),
        }

    @operation(TriggerWorkflowInput, "Failed to trigger workflow")
    def trigger_workflow(self, params: TriggerWorkflowInput) -> dict[str, Any]:
        payload: dict[str, Any] = {"ref": params.ref}
        if params.inputs:
            payload["inputs"] = params.inputs
        self._request(
            "POST",
            f"/repos/{params.owner}/{params.repo}/actions/workflows/{params.workflow_id}/dispatches",
            json=payload,
        )
        return {
            "success": True,
            "message": f"Workflow {params.workflow_id} triggered successfully on {params.ref}",
            "status": 204,
        }
