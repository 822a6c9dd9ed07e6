"""Slack Web API client.

Slack answers HTTP 200 even for failed calls; the outcome is in the body's
``ok`` flag and the reason in its ``error`` field.
"""

from typing import Any

import httpx
from pydantic import BaseModel, Field

from agentdock.config import SlackSettings
from agentdock.errors import ProviderCallFailed
from agentdock.models.tool import ProviderKey
from agentdock.providers.base import ProviderClient, drop_none, operation


class ListChannelsInput(BaseModel):
    limit: int = Field(default=100, ge=1, le=1000)
    exclude_archived: bool = True


class ChannelHistoryInput(BaseModel):
    channel: str = Field(min_length=1)
    limit: int = Field(default=50, ge=1, le=1000)
    oldest: str | None = None  # unix timestamp
    latest: str | None = None


class SendMessageInput(BaseModel):
    channel: str = Field(min_length=1)
    text: str = Field(min_length=1)
    thread_ts: str | None = None
    unfurl_links: bool = True
    unfurl_media: bool = True


class UpdateMessageInput(BaseModel):
    channel: str = Field(min_length=1)
    ts: str = Field(min_length=1)
    text: str = Field(min_length=1)


class AddReactionInput(BaseModel):
    channel: str = Field(min_length=1)
    timestamp: str = Field(min_length=1)
    name: str = Field(min_length=1)  # emoji name without colons


class SlackClient(ProviderClient):
    key = ProviderKey.slack
    display_name = "Slack"

    def __init__(
        self,
        settings: SlackSettings,
        timeout: float = 30.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        super().__init__(
            base_url=settings.api_url,
            configured=settings.configured,
            headers={
                "Authorization": f"Bearer {settings.token or ''}",
                "Content-Type": "application/json; charset=utf-8",
            },
            timeout=timeout,
            transport=transport,
        )

    def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        data = super()._request(method, path, **kwargs)
        if not isinstance(data, dict) or not data.get("ok"):
            reason = data.get("error", "unknown_error") if isinstance(data, dict) else "empty response"
            raise ProviderCallFailed("Slack request failed", reason)
        return data

    @operation(ListChannelsInput, "Failed to list channels")
    def list_channels(self, params: ListChannelsInput) -> dict[str, Any]:
        data = self._request(
            "GET",
            "/conversations.list",
            params={
                "limit": params.limit,
                "exclude_archived": params.exclude_archived,
                "types": "public_channel,private_channel",
            },
        )
        channels = [
            {
                "id": channel.get("id"),
                "name": channel.get("name"),
                "is_private": channel.get("is_private"),
                "is_archived": channel.get("is_archived"),
                "topic": (channel.get("topic") or {}).get("value"),
                "purpose": (channel.get("purpose") or {}).get("value"),
                "num_members": channel.get("num_members"),
            }
            for channel in data.get("channels", [])
        ]
        return {"channels": channels}

    @operation(ChannelHistoryInput, "Failed to get channel history")
    def get_channel_history(self, params: ChannelHistoryInput) -> dict[str, Any]:
        data = self._request(
            "GET",
            "/conversations.history",
            params=drop_none({
                "channel": params.channel,
                "limit": params.limit,
                "oldest": params.oldest,
                "latest": params.latest,
            }),
        )
        messages = [
            {
                "type": message.get("type"),
                "user": message.get("user"),
                "text": message.get("text"),
                "ts": message.get("ts"),
                "thread_ts": message.get("thread_ts"),
                "reply_count": message.get("reply_count"),
                "reactions": message.get("reactions"),
            }
            for message in data.get("messages", [])
        ]
        return {"messages": messages, "has_more": data.get("has_more", False)}

    @operation(SendMessageInput, "Failed to send message")
    def send_message(self, params: SendMessageInput) -> dict[str, Any]:
        data = self._request("POST", "/chat.postMessage", json=drop_none(params.model_dump()))
        message = data.get("message") or {}
        return {
            "ts": data.get("ts"),
            "channel": data.get("channel"),
            "message": {
                "text": message.get("text"),
                "user": message.get("user"),
                "bot_id": message.get("bot_id"),
                "ts": message.get("ts"),
            },
        }

    @operation(UpdateMessageInput, "Failed to update message")
    def update_message(self, params: UpdateMessageInput) -> dict[str, Any]:
        data = self._request("POST", "/chat.update", json=params.model_dump())
        return {"ts": data.get("ts"), "channel": data.get("channel"), "text": data.get("text")}

    @operation(AddReactionInput, "Failed to add reaction")
    def add_reaction(self, params: AddReactionInput) -> dict[str, Any]:
        self._request("POST", "/reactions.add", json=params.model_dump())
        return {"success": True, "reaction": params.name}
