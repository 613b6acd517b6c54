# -*- coding: utf-8 -*-
"""Shared pytest fixtures for unit tests."""

from __future__ import annotations

import json
from collections.abc import Callable
from types import SimpleNamespace
from typing import Any
from unittest.mock import AsyncMock, Mock

import pytest

from slack_release_notify.ci.context import ActionContext
from slack_release_notify.config.config import (
    GitHubSettings,
    InputsSettings,
    Settings,
    SlackSettings,
)
from slack_release_notify.formatting.markup import MarkupTranslator
from slack_release_notify.formatting.mentions import MentionMapper
from slack_release_notify.models.blocks import ThreadRef
from slack_release_notify.models.commits import CommitRecord, ReleaseInfo
from slack_release_notify.notifications.composer import NotificationComposer

REPOSITORY = "acme/widget"
ALICE_SLACK_ID = "U1234567890"


@pytest.fixture
def repository() -> str:
    """Default owner/repo used by tests."""
    return REPOSITORY


@pytest.fixture
def username_mapping() -> dict[str, str]:
    """GitHub -> Slack mapping: alice has a member ID, carol a Slack handle."""
    return {"alice": ALICE_SLACK_ID, "carol": "carol.smith"}


@pytest.fixture
def settings_factory(
    repository: str,
    username_mapping: dict[str, str],
) -> Callable[..., Settings]:
    """Build Settings with valid defaults; keyword overrides go to the inputs section."""

    def _build(
        *,
        github_token: str | None = "ghp_test",
        slack_token: str | None = "xoxb-test",
        server_url: str = "https://github.com",
        **inputs: Any,
    ) -> Settings:
        values: dict[str, Any] = {
            "notify_type": "release",
            "repository": repository,
            "actor": "alice",
            "username_mapping_raw": json.dumps(username_mapping),
            "channel": "C0RELEASES",
        }
        values.update(inputs)
        return Settings(
            github=GitHubSettings(token=github_token, server_url=server_url),
            slack=SlackSettings(bot_token=slack_token),
            inputs=InputsSettings(**values),
        )

    return _build


@pytest.fixture
def mention_mapper(username_mapping: dict[str, str]) -> MentionMapper:
    return MentionMapper(username_mapping)


@pytest.fixture
def translator(mention_mapper: MentionMapper, repository: str) -> MarkupTranslator:
    return MarkupTranslator(mention_mapper, repository=repository)


@pytest.fixture
def composer(
    translator: MarkupTranslator,
    mention_mapper: MentionMapper,
    repository: str,
) -> NotificationComposer:
    return NotificationComposer(translator, mention_mapper, repository=repository)


@pytest.fixture
def commit_factory() -> Callable[..., CommitRecord]:
    """Build CommitRecord with an author login by default."""

    def _build(login: str | None = "alice", **overrides: Any) -> CommitRecord:
        return CommitRecord(
            sha=overrides.pop("sha", "0123456789abcdef0123456789abcdef01234567"),
            message=overrides.pop("message", "Fix the widget"),
            author_login=login,
            author_email=overrides.pop("author_email", None),
            html_url=overrides.pop("html_url", None),
        )

    return _build


@pytest.fixture
def release_info() -> ReleaseInfo:
    return ReleaseInfo(
        tag_name="v1.1.0",
        name="Widget 1.1",
        body="## Fixes\n- fixed [bug](https://github.com/acme/widget/pull/42) @alice",
        html_url="https://github.com/acme/widget/releases/tag/v1.1.0",
    )


@pytest.fixture
def action_context() -> ActionContext:
    return ActionContext(
        run_id="987654",
        workflow="Deploy",
        ref="refs/heads/main",
        sha="feedfacefeedfacefeedfacefeedfacefeedface",
        repository=REPOSITORY,
    )


@pytest.fixture
def fake_slack() -> SimpleNamespace:
    """Slack client double; post_message returns a fixed ThreadRef."""
    return SimpleNamespace(
        post_message=AsyncMock(
            return_value=ThreadRef(channel="C0RELEASES", ts="1700000000.000100")
        ),
        add_reaction=AsyncMock(),
        remove_reaction=AsyncMock(),
    )


@pytest.fixture
def fake_outputs() -> SimpleNamespace:
    return SimpleNamespace(set=Mock())
