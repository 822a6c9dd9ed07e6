"""End-to-end tests for the REST API against a temporary sqlite file."""

import httpx
import pytest
from fastapi.testclient import TestClient

from agentdock.config import JiraSettings
from agentdock.models.tool import ProviderKey
from agentdock.tests.fakes import FakeCompleter
from agentdock.tools.gateway import ToolGateway
from agentdock.utils.identifiers import utc_day
from dockserver.app import create_app
from dockserver.services import build_services


def _github_handler(request: httpx.Request) -> httpx.Response:
    if request.url.path == "/user/repos":
        return httpx.Response(200, json=[{"name": "agentdock", "full_name": "acme/agentdock"}])
    return httpx.Response(404, json={"message": "Not Found"})


@pytest.fixture
def api(settings):
    """TestClient over sqlite with a fake model and no Jira credentials."""
    settings = settings.model_copy(update={"jira": JiraSettings()})
    services = build_services(settings, completion=FakeCompleter("Hello from the model"))
    services.gateway = ToolGateway.from_settings(settings, transports={
        ProviderKey.github: httpx.MockTransport(_github_handler),
    })
    with TestClient(create_app(services=services)) as client:
        yield client


def _agent(name: str = "GitHubSync", **extra) -> dict:
    return {"name": name, "description": "Synchronizes with GitHub repositories", **extra}


class TestHealth:
    def test_health(self, api):
        assert api.get("/health").json() == {"status": "ok"}

    def test_root_reports_providers(self, api):
        body = api.get("/").json()
        assert body["providers"] == {"github": True, "slack": True, "jira": False}


class TestAgentRoutes:
    """Test /api/agents."""

    def test_create_returns_201_with_camel_case(self, api):
        response = api.post("/api/agents", json=_agent(tools=["github_get_pr"]))
        assert response.status_code == 201
        body = response.json()
        assert body["name"] == "GitHubSync"
        assert body["enabled"] is True
        assert body["createdAt"] == body["updatedAt"]

    def test_duplicate_is_409(self, api):
        api.post("/api/agents", json=_agent())
        response = api.post("/api/agents", json=_agent())
        assert response.status_code == 409
        assert response.json()["error"] == "Agent 'GitHubSync' already exists"

    def test_invalid_body_is_400(self, api):
        response = api.post("/api/agents", json={"name": "x"})
        assert response.status_code == 400
        assert response.json()["error"] == "Invalid request"

    def test_get_list_update_delete(self, api):
        api.post("/api/agents", json=_agent())
        api.post("/api/agents", json=_agent("SlackAgent"))

        assert [a["name"] for a in api.get("/api/agents").json()] == ["GitHubSync", "SlackAgent"]
        assert api.get("/api/agents/SlackAgent").status_code == 200

        updated = api.put("/api/agents/SlackAgent", json={"enabled": False})
        assert updated.status_code == 200
        assert updated.json()["enabled"] is False
        assert updated.json()["description"] == "Synchronizes with GitHub repositories"

        assert api.delete("/api/agents/SlackAgent").status_code == 204
        assert api.get("/api/agents/SlackAgent").status_code == 404

    def test_missing_agent_is_404(self, api):
        response = api.get("/api/agents/ghost")
        assert response.status_code == 404
        assert response.json() == {"error": "Agent 'ghost' not found"}
        assert api.put("/api/agents/ghost", json={}).status_code == 404
        assert api.delete("/api/agents/ghost").status_code == 404


class TestToolRoutes:
    """Test /api/tools."""

    def test_list_tools_applies_configuration(self, api):
        tools = {tool["name"]: tool for tool in api.get("/api/tools").json()}
        assert len(tools) == 15
        assert tools["github_list_repos"]["enabled"] is True
        assert tools["jira_get_issue"]["enabled"] is False
        assert tools["jira_get_issue"]["category"] == "jira"

    def test_categories(self, api):
        categories = api.get("/api/tools/categories").json()
        assert set(categories) == {"github", "slack", "jira"}
        assert categories["jira"]["enabled"] is False
        assert categories["github"]["name"] == "GitHub"

    def test_tools_by_category(self, api):
        tools = api.get("/api/tools/category/slack").json()
        assert len(tools) == 5
        assert api.get("/api/tools/category/gitlab").status_code == 404

    def test_single_tool(self, api):
        assert api.get("/api/tools/jira_add_comment").json()["description"] == "Add a comment to a Jira issue"
        assert api.get("/api/tools/nope").status_code == 404

    def test_execute_success(self, api):
        response = api.post("/api/tools/github_list_repos/execute", json={"per_page": 5})
        assert response.status_code == 200
        body = response.json()
        assert body["ok"] is True
        assert body["data"]["repos"][0]["full_name"] == "acme/agentdock"

    def test_execute_provider_error_is_502(self, api):
        response = api.post(
            "/api/tools/github_get_pr/execute",
            json={"owner": "acme", "repo": "missing", "pull_number": 1},
        )
        assert response.status_code == 502
        assert response.json()["error"] == "Failed to get PR details"

    def test_execute_unconfigured_is_503(self, api):
        response = api.post("/api/tools/jira_get_issue/execute", json={"issueKey": "DOCK-1"})
        assert response.status_code == 503
        assert response.json()["kind"] == "ProviderNotConfigured"

    def test_execute_bad_arguments_is_400(self, api):
        response = api.post("/api/tools/github_get_pr/execute", json={"owner": "acme"})
        assert response.status_code == 400


class TestQueryAndLogRoutes:
    """Test /api/query and /api/logs."""

    def test_query_round_trip_through_logs(self, api):
        response = api.post("/api/query", json={"query": "hi"})
        assert response.status_code == 200
        result = response.json()
        assert result["response"] == "Hello from the model"
        assert result["responseTime"] >= 0

        entry = api.get(f"/api/logs/queries/{result['id']}").json()
        assert entry["response"] == result["response"]
        assert entry["responseTime"] == result["responseTime"]

    def test_tool_query_is_answered_and_logged(self, api):
        response = api.post(
            "/api/query/tool",
            json={"query": "How do I open a PR?", "tool": "GitHub", "action": "manage pull requests"},
        )
        assert response.status_code == 200
        result = response.json()
        assert result["response"] == "Hello from the model"
        assert api.get(f"/api/logs/queries/{result['id']}").json()["query"] == "How do I open a PR?"
        assert api.post("/api/query/tool", json={"query": "hi", "tool": "GitHub"}).status_code == 400

    def test_empty_query_is_400_and_not_logged(self, api):
        assert api.post("/api/query", json={"query": ""}).status_code == 400
        assert api.get("/api/logs/queries").json()["pagination"]["total"] == 0

    def test_unknown_agent_is_404_and_logged(self, api):
        response = api.post("/api/query", json={"query": "hi", "agent": "ghost"})
        assert response.status_code == 404
        page = api.get("/api/logs/queries").json()
        assert page["pagination"]["total"] == 1
        assert page["logs"][0]["response"].startswith("Error:")

    def test_disabled_agent_is_403(self, api):
        api.post("/api/agents", json=_agent("Sleepy", enabled=False))
        response = api.post("/api/query", json={"query": "hi", "agent": "Sleepy"})
        assert response.status_code == 403
        assert response.json()["error"] == "Agent 'Sleepy' is disabled"

    def test_pagination_parameters(self, api):
        for i in range(3):
            api.post("/api/query", json={"query": f"q{i}"})
        page = api.get("/api/logs/queries", params={"page": 1, "limit": 2, "sort": "asc"}).json()
        assert [log["query"] for log in page["logs"]] == ["q0", "q1"]
        assert page["pagination"] == {"page": 1, "limit": 2, "total": 3, "totalPages": 2}
        assert api.get("/api/logs/queries", params={"page": 0}).status_code == 400
        assert api.get("/api/logs/queries", params={"sort": "sideways"}).status_code == 400

    def test_missing_log_is_404(self, api):
        assert api.get("/api/logs/queries/unknown").status_code == 404

    def test_daily_log(self, api):
        api.post("/api/query", json={"query": "today"})
        today = utc_day()
        daily = api.get(f"/api/logs/daily/{today}").json()
        assert daily["date"] == today
        assert daily["logs"][0]["query"] == "today"

    def test_daily_log_validation(self, api):
        assert api.get("/api/logs/daily/2024-5-1").status_code == 400
        assert api.get("/api/logs/daily/1999-01-01").status_code == 404

    def test_system_log_tail(self, api):
        api.get("/health")
        lines = api.get("/api/logs/system", params={"lines": 5}).json()["logs"]
        assert 0 < len(lines) <= 5
        assert api.get("/api/logs/system", params={"lines": 0}).status_code == 400

    def test_error_log_tail(self, api):
        api.post("/api/query", json={"query": "hi", "agent": "ghost"})
        lines = api.get("/api/logs/errors").json()["logs"]
        assert any("ghost" in line for line in lines)
