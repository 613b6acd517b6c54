"""GitHub and Slack identity types.

The two username namespaces are kept apart by distinct NewTypes so a GitHub
login is never passed where a rendered Slack mention is expected.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from typing import NewType

GithubUsername = NewType("GithubUsername", str)
SlackMention = NewType("SlackMention", str)


@dataclass(frozen=True, slots=True)
class ContributorSet:
    """Deduplicated, sorted set of GitHub usernames attributed to a change range."""

    members: tuple[GithubUsername, ...] = ()

    @classmethod
    def of(cls, identities: Iterable[str | None]) -> ContributorSet:
        """Build from raw identities, dropping empty/None values and duplicates."""
        unique = {GithubUsername(i) for i in identities if i}
        return cls(members=tuple(sorted(unique)))

    def __iter__(self) -> Iterator[GithubUsername]:
        return iter(self.members)

    def __len__(self) -> int:
        return len(self.members)

    def __contains__(self, item: object) -> bool:
        return item in self.members
