# -*- coding: utf-8 -*-
"""Step sequencing for each notification kind.

release:     fetch release -> resolve contributors -> post -> step outputs -> (progress reaction)
staging:     gather commits -> resolve contributors -> post
deployment:  progress reaction -> remove it -> thread reply -> outcome reaction

Steps run strictly in order; each needs the result of the previous one.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Sequence
from typing import TYPE_CHECKING, Any, Optional

import structlog
from structlog.contextvars import bound_contextvars

from slack_release_notify.exceptions import ReactionAlreadyExistsError, UpstreamAPIError
from slack_release_notify.formatting.commits import commit_notes
from slack_release_notify.models.blocks import ThreadRef
from slack_release_notify.models.commits import ReleaseInfo
from slack_release_notify.models.identity import GithubUsername
from slack_release_notify.models.kinds import NotificationKind
from slack_release_notify.notifications.composer import (
    ReleasePayload,
    StagingPayload,
    deployment_reply,
)
from slack_release_notify.services.contributors import push_contributors

if TYPE_CHECKING:
    from slack_release_notify.ci.context import ActionContext
    from slack_release_notify.ci.outputs import StepOutputs
    from slack_release_notify.clients.github_api import GitHubClient
    from slack_release_notify.clients.slack_api import SlackClient
    from slack_release_notify.config.config import Settings
    from slack_release_notify.notifications.composer import NotificationComposer
    from slack_release_notify.services.contributors import ContributorResolver

PROGRESS_REACTION = "hourglass_flowing_sand"
SUCCESS_REACTION = "white_check_mark"
FAILURE_REACTION = "x"
DEFAULT_STAGING_ENVIRONMENT = "staging"


def previous_tag(releases: Sequence[ReleaseInfo], current_tag: str) -> Optional[str]:
    """Tag of the release listed right after ``current_tag`` (releases are newest first)."""
    for index, release in enumerate(releases):
        if release.tag_name == current_tag:
            if index + 1 < len(releases):
                return releases[index + 1].tag_name or None
            return None
    return None


class LifecycleOrchestrator:
    """Run one notification flow against GitHub and Slack."""

    def __init__(
        self,
        settings: "Settings",
        *,
        github: "GitHubClient",
        slack: "SlackClient",
        resolver: "ContributorResolver",
        composer: "NotificationComposer",
        context: "ActionContext",
        outputs: "StepOutputs",
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: Optional[str] = None,
    ) -> None:
        self._settings = settings
        self._github = github
        self._slack = slack
        self._resolver = resolver
        self._composer = composer
        self._context = context
        self._outputs = outputs
        self._logger = get_logger(logger_name or self.__class__.__name__)

    async def run(self, kind: NotificationKind) -> Optional[ThreadRef]:
        """Run the flow for ``kind``; returns the posted message for release/staging."""
        with bound_contextvars(notify_kind=kind.value):
            self._logger.info("notify_started", repository=self._settings.inputs.repository)
            if kind is NotificationKind.RELEASE:
                return await self.notify_release()
            if kind is NotificationKind.STAGING:
                return await self.notify_staging()
            await self.notify_deployment(kind)
            return None

    async def notify_release(self) -> ThreadRef:
        inputs = self._settings.inputs
        if inputs.release_tag:
            release = await self._github.get_release_by_tag(inputs.release_tag)
        else:
            release = await self._github.get_latest_release()
        releases = await self._github.list_releases()
        base = previous_tag(releases, release.tag_name)
        contributors = await self._resolver.for_release(release.tag_name, base)

        notification = self._composer.release(
            ReleasePayload(
                channel=inputs.channel,
                release=release,
                released_by=GithubUsername(inputs.actor),
                tag=inputs.branch or self._context.ref or release.tag_name,
                commit_sha=inputs.commit_sha or self._context.sha,
                contributors=contributors,
            )
        )
        ref = await self._slack.post_message(
            notification.channel, notification.text, blocks=list(notification.blocks)
        )
        self._outputs.set("thread-ts", ref.ts)
        self._outputs.set("channel-id", ref.channel)
        self._logger.info(
            "release_notification_sent",
            release_tag=release.tag_name,
            slack_channel=ref.channel,
            slack_ts=ref.ts,
        )

        if inputs.progress_enabled:
            await self._add_reaction(ref, PROGRESS_REACTION)
        return ref

    async def notify_staging(self) -> ThreadRef:
        inputs = self._settings.inputs
        commits = await self._resolver.push_commits(self._context.push_commits())
        server = self._settings.github.server_url.rstrip("/")
        notes = commit_notes(commits, f"{server}/{inputs.repository}/commit")

        notification = self._composer.staging(
            StagingPayload(
                channel=inputs.channel,
                repository=inputs.repository,
                environment=inputs.environment or DEFAULT_STAGING_ENVIRONMENT,
                branch=inputs.branch,
                pushed_by=GithubUsername(inputs.actor),
                notes=notes,
                commit_sha=inputs.commit_sha or self._context.sha,
                contributors=push_contributors(commits),
                staging_url=inputs.staging_url,
            )
        )
        ref = await self._slack.post_message(
            notification.channel, notification.text, blocks=list(notification.blocks)
        )
        self._logger.info(
            "staging_notification_sent",
            commits_count=len(commits),
            slack_channel=ref.channel,
            slack_ts=ref.ts,
        )
        return ref

    async def notify_deployment(self, kind: NotificationKind) -> None:
        inputs = self._settings.inputs
        ref = ThreadRef(channel=inputs.reaction_channel, ts=inputs.thread_ts)
        success = kind is NotificationKind.DEPLOYMENT_SUCCESS

        await self._add_reaction(ref, PROGRESS_REACTION)
        await self._best_effort(
            "remove_progress_reaction",
            lambda: self._slack.remove_reaction(ref, PROGRESS_REACTION),
        )

        reply = deployment_reply(
            kind,
            self._context.workflow,
            self._context.workflow_url(inputs.repository),
        )
        await self._best_effort(
            "post_deployment_reply",
            lambda: self._slack.post_message(
                ref.channel,
                reply.text,
                thread_ts=ref.ts,
                reply_broadcast=reply.reply_broadcast,
            ),
        )

        await self._add_reaction(ref, SUCCESS_REACTION if success else FAILURE_REACTION)
        self._logger.info(
            "deployment_notification_sent",
            environment=inputs.environment,
            deployment_succeeded=success,
            slack_channel=ref.channel,
            slack_ts=ref.ts,
        )

    async def _add_reaction(self, ref: ThreadRef, name: str) -> None:
        """Add a reaction; one that is already there counts as added."""
        try:
            await self._slack.add_reaction(ref, name)
        except ReactionAlreadyExistsError:
            self._logger.debug("slack_reaction_already_present", slack_reaction=name)

    async def _best_effort(self, step: str, call: Callable[[], Awaitable[Any]]) -> None:
        """Run a cosmetic follow-up; failures are logged, not raised."""
        try:
            await call()
        except UpstreamAPIError as exc:
            self._logger.error(
                "notify_step_failed",
                notify_step=step,
                error_type=type(exc).__name__,
                error_message=str(exc),
            )
