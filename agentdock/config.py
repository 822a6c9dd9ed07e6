"""Process configuration.

Settings are read once from the environment (and an optional .env file) and
passed by reference into each component. Nothing here is a global: tests build
their own Settings with fabricated credentials.
"""

import os
from collections.abc import Mapping
from pathlib import Path
from typing import Literal

from dotenv import load_dotenv
from pydantic import BaseModel, Field

from agentdock.models.tool import ProviderKey


LogLevel = Literal["error", "warn", "info", "debug"]

DEFAULT_GROQ_BASE_URL = "https://api.groq.com/openai/v1"
DEFAULT_GROQ_MODEL = "llama-3.1-8b-instant"


class ServerSettings(BaseModel):
    model_config = {"frozen": True}

    host: str = "0.0.0.0"
    port: int = 3001
    log_level: LogLevel = "info"
    log_dir: Path = Path("logs")
    cors_origins: tuple[str, ...] = ("*",)


class CompletionSettings(BaseModel):
    # protected_namespaces() lets us keep a field called "model"
    model_config = {"frozen": True, "protected_namespaces": ()}

    api_key: str = ""
    model: str = DEFAULT_GROQ_MODEL
    base_url: str = DEFAULT_GROQ_BASE_URL
    temperature: float = Field(default=0.7, ge=0.0, le=2.0)
    max_tokens: int = Field(default=2048, gt=0)
    timeout: float = Field(default=30.0, gt=0)


class GitHubSettings(BaseModel):
    model_config = {"frozen": True}

    token: str | None = None
    api_url: str = "https://api.github.com"

    @property
    def configured(self) -> bool:
        return bool(self.token)


class SlackSettings(BaseModel):
    model_config = {"frozen": True}

    token: str | None = None
    api_url: str = "https://slack.com/api"

    @property
    def configured(self) -> bool:
        return bool(self.token)


class JiraSettings(BaseModel):
    model_config = {"frozen": True}

    host: str | None = None
    username: str | None = None
    api_token: str | None = None

    @property
    def configured(self) -> bool:
        return bool(self.host and self.username and self.api_token)


class Settings(BaseModel):
    """Immutable configuration snapshot for one process."""

    model_config = {"frozen": True}

    server: ServerSettings = ServerSettings()
    completion: CompletionSettings = CompletionSettings()
    github: GitHubSettings = GitHubSettings()
    slack: SlackSettings = SlackSettings()
    jira: JiraSettings = JiraSettings()
    db_path: Path = Path("data") / "agentdock.db"
    provider_timeout: float = Field(default=30.0, gt=0)

    def provider_configured(self) -> dict[ProviderKey, bool]:
        """category -> configured, computed from credential presence."""
        return {
            ProviderKey.github: self.github.configured,
            ProviderKey.slack: self.slack.configured,
            ProviderKey.jira: self.jira.configured,
        }

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "Settings":
        """Build settings from environment variables.

        When no mapping is given the process environment is used, after
        loading a .env file from the working directory if one exists.
        """
        if environ is None:
            load_dotenv()
            environ = os.environ

        def get(name: str, default: str | None = None) -> str | None:
            value = environ.get(name)
            return value if value not in (None, "") else default

        origins = get("CORS_ORIGINS", "*") or "*"
        return cls(
            server=ServerSettings(
                host=get("HOST", "0.0.0.0"),
                port=get("PORT", "3001"),
                log_level=get("LOG_LEVEL", "info"),
                log_dir=get("LOG_DIR", "logs"),
                cors_origins=tuple(o.strip() for o in origins.split(",") if o.strip()),
            ),
            completion=CompletionSettings(
                api_key=get("GROQ_API_KEY", ""),
                model=get("GROQ_MODEL", DEFAULT_GROQ_MODEL),
                base_url=get("GROQ_BASE_URL", DEFAULT_GROQ_BASE_URL),
                temperature=get("COMPLETION_TEMPERATURE", "0.7"),
                max_tokens=get("COMPLETION_MAX_TOKENS", "2048"),
                timeout=get("COMPLETION_TIMEOUT", "30"),
            ),
            github=GitHubSettings(
                token=get("GITHUB_TOKEN"),
                api_url=get("GITHUB_API_URL", "https://api.github.com"),
            ),
            slack=SlackSettings(
                token=get("SLACK_TOKEN"),
                api_url=get("SLACK_API_URL", "https://slack.com/api"),
            ),
            jira=JiraSettings(
                host=get("JIRA_HOST"),
                username=get("JIRA_USERNAME"),
                api_token=get("JIRA_API_TOKEN"),
            ),
            db_path=get("AGENTDOCK_DB_PATH", str(Path("data") / "agentdock.db")),
            provider_timeout=get("PROVIDER_TIMEOUT", "30"),
        )
