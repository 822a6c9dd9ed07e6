"""Shared machinery for provider clients.

A provider client owns one authenticated httpx.Client bound to the provider's
base URL. Its public operations are declared with @operation, which gives all
of them the same contract:

- arguments are validated against a pydantic input model before any request
  is made (InvalidInput is raised for bad arguments)
- an unconfigured provider short-circuits without touching the network
- expected failures (HTTP errors, provider error payloads, lookups that find
  nothing) come back as a failed ToolResult, never as an exception
"""

import functools
import logging
from collections.abc import Callable
from typing import Any

import httpx
from pydantic import BaseModel, ValidationError

from agentdock.errors import DockError, InvalidInput, ProviderCallFailed
from agentdock.models.results import ToolResult
from agentdock.models.tool import ProviderKey

logger = logging.getLogger(__name__)


def operation(input_model: type[BaseModel], failure_message: str) -> Callable:
    """Declare a provider operation.

    The decorated method receives a validated ``input_model`` instance and
    returns plain data or raises a DockError. Callers get a ToolResult.
    """

    def decorate(fn: Callable[[Any, Any], Any]) -> Callable[..., ToolResult]:
        @functools.wraps(fn)
        def wrapper(self: "ProviderClient", params: BaseModel | dict | None = None, /, **arguments: Any) -> ToolResult:
            if not isinstance(params, input_model):
                params = _parse_input(input_model, {**(params or {}), **arguments})
            return self._invoke(fn.__name__, failure_message, lambda: fn(self, params))

        wrapper.is_operation = True  # type: ignore[attr-defined]
        wrapper.input_model = input_model  # type: ignore[attr-defined]
        return wrapper

    return decorate


def _parse_input(input_model: type[BaseModel], arguments: dict[str, Any]) -> BaseModel:
    try:
        return input_model.model_validate(arguments)
    except ValidationError as e:
        details = [
            {"loc": list(err["loc"]), "msg": err["msg"], "type": err["type"]}
            for err in e.errors()
        ]
        raise InvalidInput(f"Invalid arguments for {input_model.__name__}", details) from e


def drop_none(payload: dict[str, Any]) -> dict[str, Any]:
    """Drop None values so optional fields are simply not sent."""
    return {k: v for k, v in payload.items() if v is not None}


class ProviderClient:
    """Base class for the GitHub, Slack and Jira clients."""

    key: ProviderKey
    display_name: str

    def __init__(
        self,
        *,
        base_url: str,
        configured: bool,
        headers: dict[str, str] | None = None,
        auth: httpx.Auth | tuple[str, str] | None = None,
        timeout: float = 30.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.configured = configured
        self._http = httpx.Client(
            base_url=base_url,
            headers=headers,
            auth=auth,
            timeout=timeout,
            transport=transport,
        )

    def __enter__(self) -> "ProviderClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def close(self) -> None:
        self._http.close()

    @classmethod
    def operations(cls) -> list[str]:
        """Names of every operation this client exposes."""
        return sorted(
            name for name in dir(cls)
            if getattr(getattr(cls, name, None), "is_operation", False)
        )

    def execute(self, op: str, arguments: dict[str, Any] | None = None) -> ToolResult:
        """Run an operation by name."""
        if op not in self.operations():
            # the catalog only routes to declared operations
            raise ValueError(f"Unknown {self.key.value} operation: {op}")
        return getattr(self, op)(arguments or {})

    # --- Internals ---

    def _invoke(self, op: str, failure_message: str, call: Callable[[], Any]) -> ToolResult:
        if not self.configured:
            logger.warning(f"{self.display_name} integration disabled; refusing {op}")
            return ToolResult.failure(
                f"{self.display_name} integration is not configured",
                f"Set the {self.display_name} credentials to enable this tool",
                kind="ProviderNotConfigured",
            )
        try:
            return ToolResult.success(call())
        except DockError as e:
            details = str(e.details) if e.details is not None else e.message
            logger.error(f"Error in {self.key.value} {op}: {details}")
            return ToolResult.failure(failure_message, details, kind=type(e).__name__)

    def _request(
        self,
        method: str,
        path: str,
        *,
        expect: type | tuple[type, ...] | None = None,
        **kwargs: Any,
    ) -> Any:
        """One HTTP call. Returns the decoded JSON body (None when empty).

        With ``expect``, a body that is not of that type (an empty body
        included) raises ProviderCallFailed.
        """
        try:
            response = self._http.request(method, path, **kwargs)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise ProviderCallFailed(
                f"{self.display_name} request failed",
                f"Request failed with status code {e.response.status_code}: {self._error_details(e.response)}",
            ) from e
        except httpx.RequestError as e:
            raise ProviderCallFailed(f"{self.display_name} request failed", f"{type(e).__name__}: {e}") from e

        data = None
        if response.content:
            try:
                data = response.json()
            except ValueError as e:
                raise ProviderCallFailed(
                    f"{self.display_name} request failed",
                    f"Malformed response payload from {path}",
                ) from e
        if expect is not None and not isinstance(data, expect):
            raise ProviderCallFailed(
                f"{self.display_name} request failed",
                f"Malformed response payload from {path}: got {type(data).__name__}",
            )
        return data

    def _error_details(self, response: httpx.Response) -> str:
        """Best-effort provider error message from an error response."""
        try:
            body = response.json()
        except ValueError:
            return response.text[:500]
        if isinstance(body, dict) and body.get("message"):
            return str(body["message"])
        return response.text[:500]
