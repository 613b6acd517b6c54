# -*- coding: utf-8 -*-
"""GitHub Actions run context (GITHUB_* variables and the event payload)."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional, cast

import structlog
from pydantic_settings import BaseSettings, SettingsConfigDict

from slack_release_notify.models.commits import CommitRecord


class RunnerEnv(BaseSettings):
    """Default variables set by the Actions runner (GITHUB_*)."""

    model_config = SettingsConfigDict(env_prefix="GITHUB_", extra="ignore")

    run_id: str = ""
    workflow: str = ""
    ref: str = ""
    sha: str = ""
    repository: str = ""
    server_url: str = "https://github.com"
    event_path: Optional[str] = None
    output: Optional[str] = None


@dataclass(frozen=True)
class ActionContext:
    """Read-only view of the workflow run that triggered the notifier."""

    run_id: str = ""
    workflow: str = ""
    ref: str = ""
    sha: str = ""
    repository: str = ""
    server_url: str = "https://github.com"
    payload: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_env(cls, runner: RunnerEnv | None = None) -> ActionContext:
        runner = runner or RunnerEnv()
        return cls(
            run_id=runner.run_id,
            workflow=runner.workflow,
            ref=runner.ref,
            sha=runner.sha,
            repository=runner.repository,
            server_url=runner.server_url,
            payload=load_event_payload(runner.event_path),
        )

    def push_commits(self) -> list[CommitRecord]:
        """Commits carried by a push event payload, oldest first; empty otherwise."""
        raw = self.payload.get("commits")
        if not isinstance(raw, list):
            return []
        return [
            CommitRecord.from_push_payload(cast(dict[str, Any], c))
            for c in cast(list[Any], raw)
            if isinstance(c, dict)
        ]

    def workflow_url(self, repository: str) -> str:
        return f"{self.server_url.rstrip('/')}/{repository}/actions/runs/{self.run_id}"


def load_event_payload(event_path: str | None) -> dict[str, Any]:
    """Read the webhook payload file; a missing or unreadable file gives ``{}``."""
    if not event_path:
        return {}
    logger = structlog.get_logger("ActionContext")
    try:
        data = json.loads(Path(event_path).read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        logger.warning(
            "event_payload_unreadable",
            event_path=event_path,
            error_type=type(exc).__name__,
            error_message=str(exc),
        )
        return {}
    if not isinstance(data, dict):
        return {}
    return cast(dict[str, Any], data)
