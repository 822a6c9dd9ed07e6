"""Query dispatch: natural-language query -> completion -> audit log.

A query is answered either by the general assistant prompt or, when an
agent name is given, by a persona prompt built from that agent's record.
Every dispatched query produces exactly one audit entry, failed ones
included; validation failures happen before dispatch starts and produce none.
"""

import logging
import time
from collections.abc import Callable
from typing import Any, Protocol

from agentdock.audit import AuditLog
from agentdock.errors import AgentDisabled, CompletionFailed, DockError, InvalidInput
from agentdock.models.query_log import QueryLogEntry, QueryResult
from agentdock.prompts import GENERAL_SYSTEM_PROMPT, agent_system_prompt, tool_system_prompt
from agentdock.registry import AgentRegistry
from agentdock.utils.identifiers import generate_log_id, utc_timestamp

logger = logging.getLogger(__name__)


class Completer(Protocol):
    def complete(self, system_prompt: str, user_text: str) -> str: ...


class QueryDispatcher:
    def __init__(self, registry: AgentRegistry, completion: Completer, audit: AuditLog) -> None:
        self.registry = registry
        self.completion = completion
        self.audit = audit

    def dispatch(
        self,
        query: str,
        agent_name: str | None = None,
        context: dict[str, Any] | None = None,
    ) -> QueryResult:
        """Answer ``query``, optionally as the named agent.

        Raises InvalidInput before anything is timed or logged. After that,
        AgentNotFound, AgentDisabled and CompletionFailed are raised only once
        the failure has been written to the audit log.
        """
        self._validate(query)

        def resolve_prompt() -> str:
            if not agent_name:
                logger.info(f"Processing general query: {query[:100]}")
                return GENERAL_SYSTEM_PROMPT
            agent = self.registry.get(agent_name)
            if not agent.enabled:
                raise AgentDisabled(agent_name)
            logger.info(f"Processing query with agent {agent_name}: {query[:100]}")
            return agent_system_prompt(agent)

        return self._run(query, agent_name or None, context, resolve_prompt)

    def dispatch_tool_query(
        self,
        query: str,
        tool: str,
        action: str,
        context: dict[str, Any] | None = None,
    ) -> QueryResult:
        """Answer ``query`` with a model primed for one tool and task."""
        self._validate(query)
        if not tool or not action:
            raise InvalidInput("Invalid query request", "tool and action must be non-empty")
        logger.info(f"Processing {tool} query: {query[:100]}")
        return self._run(query, None, context, lambda: tool_system_prompt(tool, action))

    @staticmethod
    def _validate(query: str) -> None:
        if not isinstance(query, str) or not query:
            raise InvalidInput("Invalid query request", "query must be a non-empty string")

    def _run(
        self,
        query: str,
        agent_name: str | None,
        context: dict[str, Any] | None,
        resolve_prompt: Callable[[], str],
    ) -> QueryResult:
        started = time.perf_counter()
        log_id = generate_log_id()
        timestamp = utc_timestamp()

        try:
            system_prompt = resolve_prompt()
            try:
                response = self.completion.complete(system_prompt, query)
            except DockError:
                raise
            except Exception as e:
                # anything the completion client lets through is still a completion failure
                raise CompletionFailed(f"Failed to process query: {e}", str(e)) from e
        except Exception as e:
            elapsed_ms = self._elapsed_ms(started)
            logger.error(f"Error processing query: {e}")
            self._record(log_id, timestamp, query, f"Error: {e}", agent_name, context, elapsed_ms)
            raise

        elapsed_ms = self._elapsed_ms(started)
        self._record(log_id, timestamp, query, response, agent_name, context, elapsed_ms)
        return QueryResult(id=log_id, response=response, response_time_ms=elapsed_ms)

    @staticmethod
    def _elapsed_ms(started: float) -> int:
        return max(0, round((time.perf_counter() - started) * 1000))

    def _record(
        self,
        log_id: str,
        timestamp: str,
        query: str,
        response: str,
        agent_name: str | None,
        context: dict[str, Any] | None,
        elapsed_ms: int,
    ) -> None:
        entry = QueryLogEntry(
            id=log_id,
            timestamp=timestamp,
            query=query,
            response=response,
            agent=agent_name,
            context=context,
            response_time_ms=elapsed_ms,
        )
        try:
            self.audit.append(entry)
        except Exception:
            # the caller still gets the result or error
            logger.exception(f"Error logging query response {log_id}")
