"""Client for the language-model completion service.

Talks to any OpenAI-compatible chat completions endpoint (Groq by default)
through the openai SDK. Model and generation limits are fixed at
construction time.
"""

import logging

import openai

from agentdock.config import CompletionSettings
from agentdock.errors import CompletionFailed
from agentdock.prompts import GENERAL_SYSTEM_PROMPT

logger = logging.getLogger(__name__)


class CompletionClient:
    """Turns (system prompt, user text) into generated text or CompletionFailed."""

    def __init__(self, settings: CompletionSettings, client: openai.OpenAI | None = None) -> None:
        self.settings = settings
        # one pass only: failures surface to the caller instead of being retried
        self._client = client or openai.OpenAI(
            api_key=settings.api_key or "missing-api-key",
            base_url=settings.base_url,
            timeout=settings.timeout,
            max_retries=0,
        )
        logger.info(f"Initialized completion client with model: {settings.model}")

    @property
    def model(self) -> str:
        return self.settings.model

    def complete(self, system_prompt: str = GENERAL_SYSTEM_PROMPT, user_text: str = "") -> str:
        logger.info(f"Sending query to completion service: {user_text[:100]}...")
        try:
            response = self._client.chat.completions.create(
                model=self.settings.model,
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": user_text},
                ],
                temperature=self.settings.temperature,
                max_tokens=self.settings.max_tokens,
            )
        except openai.APITimeoutError as e:
            logger.error(f"Completion request timed out after {self.settings.timeout}s")
            raise CompletionFailed(f"Failed to process query: timed out: {e}", str(e)) from e
        except openai.APIStatusError as e:
            logger.error(f"Completion API response error: {e.status_code} {e.message}")
            raise CompletionFailed(f"Failed to process query: {e.message}", e.message) from e
        except openai.APIError as e:
            logger.error(f"Error processing query with completion service: {e}")
            raise CompletionFailed(f"Failed to process query: {e}", str(e)) from e

        if not response.choices or response.choices[0].message.content is None:
            logger.error("Completion response had no message content")
            raise CompletionFailed(
                "Failed to process query: completion response contained no text",
                "no message content in choices",
            )

        answer = response.choices[0].message.content
        logger.info(f"Received response from completion service: {answer[:100]}...")
        return answer
