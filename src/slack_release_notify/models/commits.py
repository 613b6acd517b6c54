"""Commit and release DTOs built from GitHub REST responses and push payloads."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, cast


def _as_dict(value: Any) -> dict[str, Any]:
    return cast(dict[str, Any], value) if isinstance(value, dict) else {}


@dataclass(frozen=True, slots=True)
class CommitRecord:
    """A commit as seen by the notifier.

    ``author_login`` is the GitHub account of the author when GitHub could
    resolve one (REST) or the pusher-supplied username (push payload).
    """

    sha: str
    message: str = ""
    author_login: str | None = None
    author_email: str | None = None
    html_url: str | None = None

    @property
    def subject(self) -> str:
        """First line of the commit message."""
        return self.message.split("\n")[0]

    @property
    def identity(self) -> str | None:
        """Author username, else author email."""
        return self.author_login or self.author_email or None

    @classmethod
    def from_response(cls, response: dict[str, Any]) -> CommitRecord:
        """Build from a GitHub REST commit item (list commits / compare)."""
        commit = _as_dict(response.get("commit"))
        git_author = _as_dict(commit.get("author"))
        author = _as_dict(response.get("author"))
        return cls(
            sha=str(response.get("sha") or ""),
            message=str(commit.get("message") or ""),
            author_login=author.get("login") or None,
            author_email=git_author.get("email") or None,
            html_url=response.get("html_url"),
        )

    @classmethod
    def from_push_payload(cls, item: dict[str, Any]) -> CommitRecord:
        """Build from a ``commits[]`` entry of a push event payload."""
        author = _as_dict(item.get("author"))
        return cls(
            sha=str(item.get("id") or ""),
            message=str(item.get("message") or ""),
            author_login=author.get("username") or None,
            author_email=author.get("email") or None,
            html_url=item.get("url"),
        )


@dataclass(frozen=True, slots=True)
class ReleaseInfo:
    """Subset of a GitHub release used by the release notification."""

    tag_name: str
    name: str
    body: str
    html_url: str

    @classmethod
    def from_response(cls, response: dict[str, Any]) -> ReleaseInfo:
        tag = str(response.get("tag_name") or "")
        return cls(
            tag_name=tag,
            name=str(response.get("name") or tag),
            body=str(response.get("body") or ""),
            html_url=str(response.get("html_url") or ""),
        )
