# -*- coding: utf-8 -*-
"""Contributor resolution for releases and pushes."""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Sequence
from typing import TYPE_CHECKING, Any, Optional

import structlog

from slack_release_notify.models.commits import CommitRecord
from slack_release_notify.models.identity import ContributorSet

if TYPE_CHECKING:
    from slack_release_notify.clients.github_api import GitHubClient

# Commits sampled when a release has no previous tag to compare with.
RECENT_COMMITS_LIMIT = 10
# Commits sampled when a push event carries no commit list.
PUSH_FALLBACK_COMMITS = 5

CompareFetcher = Callable[[str, str], Awaitable[Sequence[CommitRecord]]]
RecentFetcher = Callable[[int], Awaitable[Sequence[CommitRecord]]]


async def resolve_contributors(
    head: str,
    base: Optional[str],
    *,
    fetch_compare: CompareFetcher,
    fetch_recent: RecentFetcher,
    recent_limit: int = RECENT_COMMITS_LIMIT,
) -> ContributorSet:
    """Distinct GitHub logins of the authors between ``base`` and ``head``.

    Without a base (first release) the authors of the ``recent_limit`` most
    recent commits are used instead. Commits GitHub could not tie to an
    account contribute nothing.
    """
    if base:
        commits = await fetch_compare(base, head)
    else:
        commits = await fetch_recent(recent_limit)
    return ContributorSet.of(c.author_login for c in commits)


def push_contributors(commits: Sequence[CommitRecord]) -> ContributorSet:
    """Authors of pushed commits: username, else email."""
    return ContributorSet.of(c.identity for c in commits)


class ContributorResolver:
    """Resolve contributors with the GitHub client as data source."""

    def __init__(
        self,
        github: "GitHubClient",
        *,
        recent_limit: int = RECENT_COMMITS_LIMIT,
        push_fallback_limit: int = PUSH_FALLBACK_COMMITS,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: Optional[str] = None,
    ) -> None:
        self._github = github
        self._recent_limit = recent_limit
        self._push_fallback_limit = push_fallback_limit
        self._logger = get_logger(logger_name or self.__class__.__name__)

    async def for_release(self, head: str, base: Optional[str]) -> ContributorSet:
        if not base:
            self._logger.info("contributors_no_previous_release", release_tag=head)

        async def fetch_recent(limit: int) -> Sequence[CommitRecord]:
            return await self._github.list_commits(per_page=limit)

        contributors = await resolve_contributors(
            head,
            base,
            fetch_compare=self._github.compare_commits,
            fetch_recent=fetch_recent,
            recent_limit=self._recent_limit,
        )
        self._logger.info(
            "contributors_resolved",
            release_tag=head,
            previous_tag=base,
            contributors_count=len(contributors),
        )
        return contributors

    async def push_commits(self, event_commits: Sequence[CommitRecord]) -> list[CommitRecord]:
        """Commits of the push event, or the latest commits when it carries none."""
        if event_commits:
            self._logger.info("push_commits_from_event", commits_count=len(event_commits))
            return list(event_commits)
        self._logger.info("push_commits_from_recent", commits_limit=self._push_fallback_limit)
        return await self._github.list_commits(per_page=self._push_fallback_limit)
