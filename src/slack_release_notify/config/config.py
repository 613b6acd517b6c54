# -*- coding: utf-8 -*-
"""Configuration loaded from environment via Pydantic Settings.

Action inputs come from INPUT_<NAME> variables exactly as GitHub Actions exposes
them (hyphens kept, e.g. INPUT_USERNAME-MAPPING). Other sections use nested env
vars <section>__<key>, e.g. LOGGING__CONSOLE_LEVEL, API__TIMEOUT_SECONDS, or their
own NOTIFY_<SECTION>_<KEY> form (never the bare key, e.g. ENVIRONMENT).
"""

from __future__ import annotations

import json
from functools import lru_cache
from typing import Any, Literal, Optional, cast

from pydantic import AliasChoices, Field, computed_field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """General application configuration."""

    model_config = SettingsConfigDict(env_prefix="NOTIFY_APP_", extra="ignore")

    app_name: str = "slack-release-notify"
    service_name: Optional[str] = None
    service_version: Optional[str] = None
    environment: Literal["development", "test", "production"] = "production"


class LoggingSettings(BaseSettings):
    """Structured logging configuration for structlog/stdlib/Logfire."""

    model_config = SettingsConfigDict(env_prefix="NOTIFY_LOGGING_", extra="ignore")

    console_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    file_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    logfire_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"

    log_to_console: bool = True
    log_to_file: bool = False
    log_file_path: str = "logs/slack_release_notify.log"

    # Main output format: JSONRenderer if True, ConsoleRenderer if False
    json_format: bool = False

    logfire_enabled: bool = False
    logfire_token: Optional[str] = None

    runner_debug: bool = Field(
        default=False,
        description="Set by the runner (RUNNER_DEBUG=1) when step debug logging is on.",
        validation_alias="runner_debug",
    )


class ApiSettings(BaseSettings):
    """Base URLs and transport limits for the GitHub and Slack APIs."""

    model_config = SettingsConfigDict(env_prefix="NOTIFY_API_", extra="ignore")

    github_api_url: str = Field(
        default="https://api.github.com",
        description="GitHub REST API base URL.",
    )
    slack_api_url: str = Field(
        default="https://slack.com/api",
        description="Slack Web API base URL.",
    )
    timeout_seconds: float = Field(
        default=15.0,
        ge=1.0,
        le=120.0,
        description="HTTP request timeout in seconds.",
    )
    max_retries: int = Field(
        default=4,
        ge=1,
        le=20,
        description="Maximum attempts for idempotent (GET) requests.",
    )


class GitHubSettings(BaseSettings):
    """GitHub credentials and web host (from the action inputs or runner env)."""

    model_config = SettingsConfigDict(extra="ignore", populate_by_name=True)

    token: Optional[str] = Field(
        default=None,
        description="Token used for release/commit lookups.",
        validation_alias=AliasChoices("input_github-token", "github_token"),
    )
    server_url: str = Field(
        default="https://github.com",
        description="Web host for commit, workflow and pull request links.",
        validation_alias="github_server_url",
    )


class SlackSettings(BaseSettings):
    """Slack bot credentials."""

    model_config = SettingsConfigDict(extra="ignore", populate_by_name=True)

    bot_token: Optional[str] = Field(
        default=None,
        description="Slack bot token (xoxb-...).",
        validation_alias=AliasChoices("input_slack-bot-token", "slack_bot_token"),
    )


class InputsSettings(BaseSettings):
    """Action inputs (from env INPUT_*)."""

    model_config = SettingsConfigDict(
        env_prefix="INPUT_",
        extra="ignore",
        populate_by_name=True,
    )

    notify_type: str = Field(default="", validation_alias="input_type")
    repository: str = ""
    actor: str = ""
    # Raw string so pydantic-settings does not try to JSON-decode it; parsed by the validator below.
    username_mapping_raw: str = Field(
        default="",
        description="JSON object mapping GitHub usernames to Slack member IDs.",
        validation_alias="input_username-mapping",
    )
    release_tag: str = Field(default="", validation_alias="input_release-tag")
    environment: str = ""
    channel: str = ""
    channel_id: str = Field(default="", validation_alias="input_channel-id")
    thread_ts: str = Field(default="", validation_alias="input_thread-ts")
    staging_url: str = Field(default="", validation_alias="input_staging-url")
    commit_sha: str = Field(default="", validation_alias="input_commit-sha")
    branch: str = ""
    show_progress: str = Field(default="", validation_alias="input_show-progress")

    @field_validator("username_mapping_raw")
    @classmethod
    def _check_username_mapping(cls, value: str) -> str:
        _parse_mapping(value)
        return value

    @computed_field
    @property
    def username_mapping(self) -> dict[str, str]:
        """Parsed username-mapping input (empty when the input is blank)."""
        return _parse_mapping(self.username_mapping_raw)

    @property
    def progress_enabled(self) -> bool:
        return self.show_progress == "true"

    @property
    def reaction_channel(self) -> str:
        """Channel holding the thread to react on: channel-id, else channel."""
        return self.channel_id or self.channel


def _parse_mapping(raw: str) -> dict[str, str]:
    if not raw or not raw.strip():
        return {}
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise ValueError(f"'username-mapping' is not valid JSON: {exc.msg}") from exc
    if not isinstance(data, dict):
        raise ValueError("'username-mapping' must be a JSON object")
    mapping = cast(dict[Any, Any], data)
    for key, value in mapping.items():
        if not isinstance(key, str) or not isinstance(value, str):
            raise ValueError("'username-mapping' values must be strings")
    return cast(dict[str, str], mapping)


class Settings(BaseSettings):
    """Root application configuration.

    Groups all sub-configurations so the rest of the code does not
    read environment variables directly.
    """

    model_config = SettingsConfigDict(
        env_nested_delimiter="__",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    app: AppSettings = Field(default_factory=AppSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    api: ApiSettings = Field(default_factory=ApiSettings)
    github: GitHubSettings = Field(default_factory=GitHubSettings)
    slack: SlackSettings = Field(default_factory=SlackSettings)
    inputs: InputsSettings = Field(default_factory=InputsSettings)

    @classmethod
    def from_env(cls, **overrides: Any) -> Settings:
        """Build settings from environment (and .env), with optional overrides.

        Nested overrides can be passed as flat keys or nested dicts, e.g.:
        - from_env(api__timeout_seconds=30)
        - from_env(inputs={"notify_type": "release"})

        Returns:
            A new Settings instance.
        """
        return cls(**overrides)


@lru_cache
def get_settings() -> Settings:
    """Return a single cached instance of Settings.

    Typical usage:

        from slack_release_notify.config import get_settings

        settings = get_settings()
        kind = settings.inputs.notify_type
    """
    return Settings()
