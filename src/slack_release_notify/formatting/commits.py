"""Commit list rendering for staging notes."""

from __future__ import annotations

from collections.abc import Iterable

from slack_release_notify.models.commits import CommitRecord


def escape_commit_subject(subject: str) -> str:
    """Make a commit subject safe inside a Slack ``<url|text>`` link."""
    return (
        subject.replace("|", "")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
        .replace("\r", "")
    )


def commit_notes(commits: Iterable[CommitRecord], commit_url_base: str) -> str:
    """Render one markdown link line per commit: ``- [subject](<base>/<sha>)``."""
    base = commit_url_base.rstrip("/")
    return "\n".join(
        f"- [{escape_commit_subject(c.subject)}]({base}/{c.sha})" for c in commits
    )
