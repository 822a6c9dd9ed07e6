"""Tests for the agent registry, over the memory and sqlite stores."""

import threading

import pytest

from agentdock.adapters.stores import MemoryAgentStore
from agentdock.errors import AgentNotFound, Conflict, CorruptRecord, InvalidInput
from agentdock.models.agent import AgentCreate
from agentdock.registry import AgentRegistry
from dockserver.agent_db import SqliteAgentStore


@pytest.fixture(params=["memory", "sqlite"])
def any_registry(request, tmp_path) -> AgentRegistry:
    if request.param == "memory":
        return AgentRegistry(MemoryAgentStore())
    store = SqliteAgentStore(tmp_path / "agents.db")
    store.init_db()
    return AgentRegistry(store)


def _draft(name: str = "JiraAgent", **extra) -> dict:
    return {"name": name, "description": "Manages Jira tickets and workflows", **extra}


class TestCreateAndGet:
    """Test registration and lookup."""

    def test_create_then_get_returns_same_record(self, any_registry):
        created = any_registry.create(_draft(tools=["jira_get_issue"], config={"tone": "brief"}))
        fetched = any_registry.get("JiraAgent")
        assert fetched == created
        assert fetched.tools == ["jira_get_issue"]
        assert fetched.config == {"tone": "brief"}
        assert fetched.created_at == fetched.updated_at

    def test_create_accepts_model(self, any_registry):
        agent = any_registry.create(AgentCreate(name="SlackAgent", description="Slack helper"))
        assert agent.enabled is True

    def test_duplicate_name_is_conflict(self, any_registry):
        any_registry.create(_draft())
        with pytest.raises(Conflict):
            any_registry.create(_draft(description="a different agent"))
        assert any_registry.get("JiraAgent").description == "Manages Jira tickets and workflows"

    def test_invalid_draft(self, any_registry):
        with pytest.raises(InvalidInput) as exc_info:
            any_registry.create({"name": "", "description": "x"})
        assert exc_info.value.message == "Invalid agent data"
        assert exc_info.value.details

    def test_get_missing_agent(self, any_registry):
        with pytest.raises(AgentNotFound):
            any_registry.get("ghost")

    def test_list_sorted_by_name(self, any_registry):
        for name in ("b-agent", "a-agent", "c-agent"):
            any_registry.create(_draft(name))
        assert [agent.name for agent in any_registry.list()] == ["a-agent", "b-agent", "c-agent"]


class TestUpdate:
    """Test partial updates."""

    def test_unset_fields_keep_their_values(self, any_registry):
        any_registry.create(_draft(tools=["jira_get_issue"]))
        updated = any_registry.update("JiraAgent", {"enabled": False})
        assert updated.enabled is False
        assert updated.tools == ["jira_get_issue"]
        assert any_registry.get("JiraAgent").enabled is False

    def test_name_in_patch_is_ignored(self, any_registry):
        any_registry.create(_draft())
        updated = any_registry.update("JiraAgent", {"name": "Renamed", "description": "new"})
        assert updated.name == "JiraAgent"
        assert updated.description == "new"
        with pytest.raises(AgentNotFound):
            any_registry.get("Renamed")

    def test_empty_patch_refreshes_updated_at(self, any_registry, monkeypatch):
        created = any_registry.create(_draft())
        monkeypatch.setattr("agentdock.registry.utc_timestamp", lambda: "2099-01-01T00:00:00+00:00")
        updated = any_registry.update("JiraAgent", {})
        assert updated.updated_at == "2099-01-01T00:00:00+00:00"
        assert updated.created_at == created.created_at
        assert updated.description == created.description

    def test_update_missing_agent(self, any_registry):
        with pytest.raises(AgentNotFound):
            any_registry.update("ghost", {"enabled": False})

    def test_update_rejects_invalid_values(self, any_registry):
        any_registry.create(_draft())
        with pytest.raises(InvalidInput):
            any_registry.update("JiraAgent", {"description": ""})


class TestDelete:
    """Test removal."""

    def test_delete_then_get_fails(self, any_registry):
        any_registry.create(_draft())
        any_registry.delete("JiraAgent")
        with pytest.raises(AgentNotFound):
            any_registry.get("JiraAgent")

    def test_delete_missing_agent(self, any_registry):
        with pytest.raises(AgentNotFound):
            any_registry.delete("ghost")


class TestStoreEdgeCases:
    """Test behaviour that depends on the store."""

    def test_malformed_record_is_skipped(self):
        store = MemoryAgentStore()
        registry = AgentRegistry(store)
        registry.create(_draft("good"))
        store.records["broken"] = '{"name": "broken"}'
        store.records["garbage"] = "not json"
        assert [agent.name for agent in registry.list()] == ["good"]

    def test_malformed_record_by_name_is_corrupt(self):
        store = MemoryAgentStore()
        registry = AgentRegistry(store)
        store.records["broken"] = '{"name": "broken"}'
        with pytest.raises(CorruptRecord) as exc_info:
            registry.get("broken")
        assert exc_info.value.status_code == 500
        assert exc_info.value.details
        with pytest.raises(CorruptRecord):
            registry.update("broken", {"enabled": False})

    def test_concurrent_creates_have_one_winner(self, tmp_path):
        """Racing creates of one name: exactly one succeeds, the rest conflict."""
        store = SqliteAgentStore(tmp_path / "agents.db")
        store.init_db()
        registry = AgentRegistry(store)
        outcomes: list[str] = []
        lock = threading.Lock()

        def attempt(i: int) -> None:
            try:
                registry.create(_draft(description=f"attempt {i}"))
                result = "created"
            except Conflict:
                result = "conflict"
            with lock:
                outcomes.append(result)

        threads = [threading.Thread(target=attempt, args=(i,)) for i in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert outcomes.count("created") == 1
        assert outcomes.count("conflict") == 7
