# -*- coding: utf-8 -*-
"""GitHub username to Slack mention resolution."""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping
from types import MappingProxyType

from slack_release_notify.models.identity import GithubUsername, SlackMention

# Slack member IDs: "U" followed by 10 uppercase alphanumerics.
MEMBER_ID_PATTERN = re.compile(r"^U[A-Z0-9]{10}$")


class MentionMapper:
    """Map GitHub usernames to Slack mentions using a static mapping.

    Unmapped usernames are used as the candidate token themselves. A token that
    looks like a Slack member ID renders as ``<@ID>``; anything else renders as a
    plain ``@token``.
    """

    def __init__(self, mapping: Mapping[str, str] | None = None) -> None:
        self._mapping: Mapping[str, str] = MappingProxyType(dict(mapping or {}))

    @property
    def mapping(self) -> Mapping[str, str]:
        return self._mapping

    def mention(self, identity: GithubUsername | str) -> SlackMention:
        token = self._mapping.get(identity, identity)
        if MEMBER_ID_PATTERN.match(token):
            return SlackMention(f"<@{token}>")
        return SlackMention(f"@{token}")

    def mentions(self, identities: Iterable[str]) -> list[SlackMention]:
        return [self.mention(i) for i in identities]
