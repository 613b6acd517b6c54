"""Slack message content: note blocks, notifications and thread references."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Union

SlackBlock = dict[str, Any]


@dataclass(frozen=True, slots=True)
class HeadingBlock:
    """Standalone heading translated from a ``#`` line; rendered as a header block."""

    text: str

    def to_block(self) -> SlackBlock:
        return {"type": "header", "text": {"type": "plain_text", "text": self.text}}


@dataclass(frozen=True, slots=True)
class SectionBlock:
    """Accumulated mrkdwn text; never longer than the section size limit."""

    text: str

    def to_block(self) -> SlackBlock:
        return {"type": "section", "text": {"type": "mrkdwn", "text": self.text}}


NoteBlock = Union[HeadingBlock, SectionBlock]


@dataclass(frozen=True)
class Notification:
    """Complete chat.postMessage payload for a top-level notification."""

    channel: str
    text: str
    blocks: tuple[SlackBlock, ...] = field(default_factory=tuple)

    def to_payload(self) -> dict[str, Any]:
        return {"channel": self.channel, "text": self.text, "blocks": list(self.blocks)}


@dataclass(frozen=True)
class ThreadReply:
    """Plain-text reply posted into an existing notification thread."""

    text: str
    reply_broadcast: bool = False


@dataclass(frozen=True, slots=True)
class ThreadRef:
    """Channel and timestamp of a posted message."""

    channel: str
    ts: str
