# -*- coding: utf-8 -*-
"""Slack Block Kit layouts for release and staging notifications."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from slack_release_notify.exceptions import ConfigurationError
from slack_release_notify.formatting.markup import HEADER_MAX_LENGTH, MarkupTranslator
from slack_release_notify.formatting.mentions import MentionMapper
from slack_release_notify.models.blocks import Notification, SlackBlock, ThreadReply
from slack_release_notify.models.commits import ReleaseInfo
from slack_release_notify.models.identity import ContributorSet, GithubUsername
from slack_release_notify.models.kinds import NotificationKind

NO_CONTRIBUTORS = "No contributors found"


@dataclass(frozen=True)
class ReleasePayload:
    channel: str
    release: ReleaseInfo
    released_by: GithubUsername
    tag: str
    commit_sha: str
    contributors: ContributorSet = ContributorSet()


@dataclass(frozen=True)
class StagingPayload:
    channel: str
    repository: str
    environment: str
    branch: str
    pushed_by: GithubUsername
    notes: str
    commit_sha: str
    contributors: ContributorSet = ContributorSet()
    staging_url: str = ""


NotificationPayload = Union[ReleasePayload, StagingPayload]


def _header(text: str) -> SlackBlock:
    if len(text) > HEADER_MAX_LENGTH:
        text = text[: HEADER_MAX_LENGTH - 1] + "…"
    return {"type": "header", "text": {"type": "plain_text", "text": text}}


def _fields(*texts: str) -> SlackBlock:
    return {"type": "section", "fields": [{"type": "mrkdwn", "text": t} for t in texts]}


def _button(label: str, url: str) -> SlackBlock:
    return {
        "type": "actions",
        "elements": [
            {"type": "button", "text": {"type": "plain_text", "text": label}, "url": url}
        ],
    }


class NotificationComposer:
    """Build ready-to-send notifications; performs no I/O."""

    def __init__(
        self,
        translator: MarkupTranslator,
        mentions: MentionMapper,
        *,
        repository: str,
    ) -> None:
        self._translator = translator
        self._mentions = mentions
        self._repository = repository
        self._repo = repository.partition("/")[2]

    def compose(self, kind: NotificationKind, payload: NotificationPayload) -> Notification:
        if kind is NotificationKind.RELEASE and isinstance(payload, ReleasePayload):
            return self.release(payload)
        if kind is NotificationKind.STAGING and isinstance(payload, StagingPayload):
            return self.staging(payload)
        raise ConfigurationError(
            f"No message layout for '{kind.value}' with {type(payload).__name__}"
        )

    def release(self, payload: ReleasePayload) -> Notification:
        title = f"New {self._repo} release: {payload.release.name}"
        blocks: list[SlackBlock] = [
            _header(f"🚀 {title}"),
            _fields(
                f"*Released by:*\n{self._mentions.mention(payload.released_by)}",
                f"*Tag:*\n`{payload.tag}`",
            ),
            *self._notes(payload.release.body),
            _fields(
                f"*Contributors:*\n{self._contributors(payload.contributors)}",
                f"SHA: `{payload.commit_sha}`",
            ),
        ]
        if payload.release.html_url:
            blocks.append(_button("View Release", payload.release.html_url))
        return Notification(channel=payload.channel, text=title, blocks=tuple(blocks))

    def staging(self, payload: StagingPayload) -> Notification:
        title = f"Staging Updated: {payload.environment}"
        blocks: list[SlackBlock] = [
            _header(f"🔄 {title}"),
            _fields(
                f"*Repository:*\n{payload.repository}",
                f"*Environment:*\n`{payload.environment}`",
                f"*Branch:*\n`{payload.branch}`",
                f"*Pushed by:*\n{self._mentions.mention(payload.pushed_by)}",
            ),
            *self._notes(payload.notes),
            _fields(
                f"*Contributors:*\n{self._contributors(payload.contributors)}",
                f"Commit: `{payload.commit_sha}`",
            ),
        ]
        if payload.staging_url:
            blocks.append(_button("View Staging", payload.staging_url))
        return Notification(channel=payload.channel, text=title, blocks=tuple(blocks))

    def _notes(self, text: str) -> list[SlackBlock]:
        return [block.to_block() for block in self._translator.translate(text)]

    def _contributors(self, contributors: ContributorSet) -> str:
        return " ".join(self._mentions.mentions(contributors)) or NO_CONTRIBUTORS


def deployment_reply(kind: NotificationKind, workflow: str, workflow_url: str) -> ThreadReply:
    """Thread reply announcing a deployment outcome; failures are broadcast to the channel."""
    link = f"<{workflow_url}|View workflow>"
    if kind is NotificationKind.DEPLOYMENT_SUCCESS:
        return ThreadReply(text=f"✅ {workflow} successful! {link}")
    if kind is NotificationKind.DEPLOYMENT_FAILURE:
        return ThreadReply(text=f"❌ {workflow} failed! {link}", reply_broadcast=True)
    raise ConfigurationError(f"'{kind.value}' is not a deployment notification")
