"""Slack text formatting: mentions, markup translation and commit notes."""

from slack_release_notify.formatting.commits import commit_notes, escape_commit_subject
from slack_release_notify.formatting.markup import (
    HEADER_MAX_LENGTH,
    SECTION_MAX_LENGTH,
    MarkupTranslator,
)
from slack_release_notify.formatting.mentions import MEMBER_ID_PATTERN, MentionMapper

__all__ = [
    "HEADER_MAX_LENGTH",
    "MEMBER_ID_PATTERN",
    "SECTION_MAX_LENGTH",
    "MarkupTranslator",
    "MentionMapper",
    "commit_notes",
    "escape_commit_subject",
]
