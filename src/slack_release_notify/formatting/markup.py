# -*- coding: utf-8 -*-
"""Markdown release notes to Slack blocks.

Only the subset found in release notes and commit lists is handled: ``#``
headings, ``**bold**``, ``[text](url)`` links, links to pull requests/issues of
the same repository and ``@user`` mentions. Anything else passes through as is.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Sequence

from slack_release_notify.formatting.mentions import MentionMapper
from slack_release_notify.models.blocks import HeadingBlock, NoteBlock, SectionBlock

# Slack rejects section text above 3000 characters; keep headroom.
SECTION_MAX_LENGTH = 2500
HEADER_MAX_LENGTH = 150

LineTransform = Callable[[str], str]

_HEADING_LINE = re.compile(r"^#+ +(.+?) *$")
_INLINE_HEADING = re.compile(r"^#+ +(.*) *$")
_BOLD = re.compile(r"\*\*([^*]*)\*\*")
_LINK = re.compile(r"\[([^\]]*)\]\(([^)]*)\)")
_MENTION = re.compile(r"@([a-zA-Z0-9_-]+)")


def collapse_inline_heading(line: str) -> str:
    """``# text`` that did not qualify as a heading block becomes ``*text*``."""
    return _INLINE_HEADING.sub(r"*\1*", line)


def to_slack_bold(line: str) -> str:
    """``**bold**`` to Slack's single-asterisk ``*bold*``."""
    return _BOLD.sub(r"*\1*", line)


def to_slack_links(line: str) -> str:
    """``[text](url)`` to ``<url|text>``."""
    return _LINK.sub(r"<\2|\1>", line)


def repo_link_shortener(server_url: str, owner: str, repo: str) -> LineTransform:
    """Build a transform that renders in-repo pull/issue links as ``<url|repo#N>``.

    Both already converted ``<url|text>`` links and bare URLs are shortened.
    Only ``pull/`` and ``issue/`` paths match; GitHub's ``issues/`` URLs are
    left alone.
    """
    base = re.escape(f"{server_url.rstrip('/')}/{owner}/{repo}/")

    def url(tag: str) -> str:
        return rf"(?P<{tag}>{base}(?:pull|issue)/(?P<{tag}_num>[0-9]+))\b"

    pattern = re.compile(rf"<{url('linked')}\|[^>]*>|(?<!<)\b{url('bare')}")

    def _replace(match: re.Match[str]) -> str:
        link = match.group("linked") or match.group("bare")
        number = match.group("linked_num") or match.group("bare_num")
        return f"<{link}|{repo}#{number}>"

    def shorten_repo_links(line: str) -> str:
        return pattern.sub(_replace, line)

    return shorten_repo_links


def mention_rewriter(mentions: MentionMapper) -> LineTransform:
    """Build a transform that turns ``@user`` into the user's Slack mention."""

    def rewrite_mentions(line: str) -> str:
        return _MENTION.sub(lambda m: mentions.mention(m.group(1)), line)

    return rewrite_mentions


def heading_text(line: str) -> str | None:
    """Return the heading text of a ``#`` line, or None if it is not a heading."""
    match = _HEADING_LINE.match(line)
    if not match:
        return None
    text = match.group(1).strip()
    if not text:
        return None
    if len(text) > HEADER_MAX_LENGTH:
        text = text[: HEADER_MAX_LENGTH - 1] + "…"
    return text


class MarkupTranslator:
    """Translate markdown-like notes into Slack heading and section blocks."""

    def __init__(
        self,
        mentions: MentionMapper,
        *,
        repository: str,
        server_url: str = "https://github.com",
        max_section_length: int = SECTION_MAX_LENGTH,
    ) -> None:
        owner, _, repo = repository.partition("/")
        self._max_section_length = max_section_length
        # Order matters: each stage sees the output of the previous one.
        self._transforms: tuple[LineTransform, ...] = (
            collapse_inline_heading,
            to_slack_bold,
            to_slack_links,
            repo_link_shortener(server_url, owner, repo),
            mention_rewriter(mentions),
        )

    @property
    def transforms(self) -> Sequence[LineTransform]:
        return self._transforms

    def transform_line(self, line: str) -> str:
        for transform in self._transforms:
            line = transform(line)
        return line

    def translate(self, raw: str) -> list[NoteBlock]:
        """Translate ``raw`` line by line.

        Heading lines become standalone heading blocks. Other lines are
        transformed and appended to the open section, which is closed before it
        would grow past the section limit. Never raises on malformed markdown.
        """
        text = raw.replace("\r", "").replace("\0", "")
        if not text:
            return []

        out: list[NoteBlock] = []
        pending: str | None = None
        for line in text.split("\n"):
            heading = heading_text(line)
            if heading is not None:
                if pending is not None:
                    out.append(SectionBlock(pending))
                    pending = None
                out.append(HeadingBlock(heading))
                continue

            for piece in self._pieces(self.transform_line(line) + "\n"):
                if pending is not None and len(pending) + len(piece) > self._max_section_length:
                    out.append(SectionBlock(pending))
                    pending = None
                pending = piece if pending is None else pending + piece

        if pending is not None:
            out.append(SectionBlock(pending))
        return out

    def _pieces(self, chunk: str) -> list[str]:
        """Split a single line that alone exceeds the section limit.

        Cuts after the last space or tab that fits, so links and mentions stay
        whole; a run without whitespace is cut at the limit.
        """
        size = self._max_section_length
        pieces: list[str] = []
        while len(chunk) > size:
            cut = max(chunk.rfind(" ", 0, size), chunk.rfind("\t", 0, size)) + 1
            if cut <= 0:
                cut = size
            pieces.append(chunk[:cut])
            chunk = chunk[cut:]
        pieces.append(chunk)
        return pieces
