"""Tests for the completion client, with the openai SDK on a mock transport."""

import json

import httpx
import openai
import pytest

from agentdock.completion import CompletionClient
from agentdock.config import CompletionSettings
from agentdock.errors import CompletionFailed


def _chat_completion(content: str | None) -> dict:
    choices = [] if content is None else [
        {"index": 0, "message": {"role": "assistant", "content": content}, "finish_reason": "stop"},
    ]
    return {
        "id": "chatcmpl-1",
        "object": "chat.completion",
        "created": 1714557600,
        "model": "llama-3.1-8b-instant",
        "choices": choices,
    }


def _client(handler) -> openai.OpenAI:
    return openai.OpenAI(
        api_key="test-key",
        base_url="https://llm.example.com/v1",
        max_retries=0,
        http_client=httpx.Client(transport=httpx.MockTransport(handler)),
    )


class TestCompletionClient:
    """Test CompletionClient.complete."""

    def test_sends_prompts_and_limits(self):
        seen: list[dict] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(json.loads(request.content))
            return httpx.Response(200, json=_chat_completion("Hi there"))

        settings = CompletionSettings(api_key="test-key", temperature=0.2, max_tokens=256)
        answer = CompletionClient(settings, client=_client(handler)).complete("be brief", "hello")

        assert answer == "Hi there"
        body = seen[0]
        assert body["model"] == settings.model
        assert body["temperature"] == 0.2
        assert body["max_tokens"] == 256
        assert body["messages"] == [
            {"role": "system", "content": "be brief"},
            {"role": "user", "content": "hello"},
        ]

    def test_api_error_becomes_completion_failed(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(500, json={"error": {"message": "upstream exploded"}})

        client = CompletionClient(CompletionSettings(), client=_client(handler))
        with pytest.raises(CompletionFailed) as exc_info:
            client.complete("sys", "hello")
        assert exc_info.value.message.startswith("Failed to process query")

    def test_empty_choices_become_completion_failed(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json=_chat_completion(None))

        client = CompletionClient(CompletionSettings(), client=_client(handler))
        with pytest.raises(CompletionFailed):
            client.complete("sys", "hello")

    def test_connection_error_becomes_completion_failed(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        client = CompletionClient(CompletionSettings(), client=_client(handler))
        with pytest.raises(CompletionFailed):
            client.complete("sys", "hello")

    def test_timeout_becomes_completion_failed(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("read timed out", request=request)

        client = CompletionClient(CompletionSettings(timeout=0.5), client=_client(handler))
        with pytest.raises(CompletionFailed) as exc_info:
            client.complete("sys", "hello")
        assert "timed out" in exc_info.value.message
