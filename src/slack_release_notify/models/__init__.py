"""Domain models."""

from slack_release_notify.models.commits import CommitRecord, ReleaseInfo
from slack_release_notify.models.blocks import (
    HeadingBlock,
    NoteBlock,
    Notification,
    SectionBlock,
    SlackBlock,
    ThreadRef,
    ThreadReply,
)
from slack_release_notify.models.identity import ContributorSet, GithubUsername, SlackMention
from slack_release_notify.models.kinds import NotificationKind

__all__ = [
    "CommitRecord",
    "ReleaseInfo",
    "ContributorSet",
    "GithubUsername",
    "HeadingBlock",
    "NoteBlock",
    "Notification",
    "NotificationKind",
    "SectionBlock",
    "SlackBlock",
    "SlackMention",
    "ThreadRef",
    "ThreadReply",
]
