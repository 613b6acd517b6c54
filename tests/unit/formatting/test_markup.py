# -*- coding: utf-8 -*-
"""Unit tests for MarkupTranslator and its line transforms."""

from __future__ import annotations

from slack_release_notify.formatting.markup import (
    HEADER_MAX_LENGTH,
    SECTION_MAX_LENGTH,
    MarkupTranslator,
    collapse_inline_heading,
    heading_text,
    repo_link_shortener,
    to_slack_bold,
    to_slack_links,
)
from slack_release_notify.formatting.mentions import MentionMapper
from slack_release_notify.models.blocks import HeadingBlock, SectionBlock


def test_release_notes_example(translator: MarkupTranslator) -> None:
    raw = "## Fixes\n- fixed [bug](https://github.com/acme/widget/pull/42) @alice"

    blocks = translator.translate(raw)

    assert blocks == [
        HeadingBlock("Fixes"),
        SectionBlock(
            "- fixed <https://github.com/acme/widget/pull/42|widget#42> <@U1234567890>\n"
        ),
    ]


def test_empty_input_yields_no_blocks(translator: MarkupTranslator) -> None:
    assert translator.translate("") == []
    assert translator.translate("\r\0") == []


def test_plain_text_is_a_single_unchanged_section(translator: MarkupTranslator) -> None:
    assert translator.translate("Nothing special here.") == [
        SectionBlock("Nothing special here.\n")
    ]


def test_carriage_returns_and_nul_bytes_are_removed(translator: MarkupTranslator) -> None:
    assert translator.translate("one\r\ntwo\0") == [SectionBlock("one\ntwo\n")]


def test_whitespace_line_still_contributes_newline(translator: MarkupTranslator) -> None:
    assert translator.translate("a\n   \nb") == [SectionBlock("a\n   \nb\n")]


def test_heading_is_never_merged_into_neighbouring_sections(
    translator: MarkupTranslator,
) -> None:
    blocks = translator.translate("before\n## Title\nafter")

    assert blocks == [
        SectionBlock("before\n"),
        HeadingBlock("Title"),
        SectionBlock("after\n"),
    ]


def test_consecutive_headings_produce_no_empty_sections(translator: MarkupTranslator) -> None:
    assert translator.translate("# One\n### Two") == [HeadingBlock("One"), HeadingBlock("Two")]


def test_long_input_is_split_into_sections_within_limit(translator: MarkupTranslator) -> None:
    line = "x" * 99
    raw = "\n".join([line] * 60)  # 6000 characters once newlines are added

    blocks = translator.translate(raw)

    assert len(blocks) >= 2
    assert all(isinstance(b, SectionBlock) for b in blocks)
    assert all(0 < len(b.text) <= SECTION_MAX_LENGTH for b in blocks)
    assert "".join(b.text for b in blocks) == (line + "\n") * 60


def test_single_oversized_line_is_hard_split(translator: MarkupTranslator) -> None:
    raw = "y" * (SECTION_MAX_LENGTH * 2 + 10)

    blocks = translator.translate(raw)

    assert [len(b.text) for b in blocks] == [SECTION_MAX_LENGTH, SECTION_MAX_LENGTH, 11]


def test_oversized_line_is_split_at_whitespace(mention_mapper: MentionMapper) -> None:
    translator = MarkupTranslator(mention_mapper, repository="acme/widget", max_section_length=50)

    blocks = translator.translate(
        "see [docs](https://example.com/a/very/long/path) and more words here"
    )

    assert blocks == [
        SectionBlock("see <https://example.com/a/very/long/path|docs> "),
        SectionBlock("and more words here\n"),
    ]


def test_line_without_whitespace_is_cut_at_limit(mention_mapper: MentionMapper) -> None:
    translator = MarkupTranslator(mention_mapper, repository="acme/widget", max_section_length=30)

    blocks = translator.translate("see [docs](https://example.com/a/very/long/path)")

    assert all(len(b.text) <= 30 for b in blocks)
    assert blocks[0] == SectionBlock("see ")
    assert "".join(b.text for b in blocks) == "see <https://example.com/a/very/long/path|docs>\n"


def test_custom_section_limit_is_respected(mention_mapper: MentionMapper) -> None:
    translator = MarkupTranslator(mention_mapper, repository="acme/widget", max_section_length=10)

    blocks = translator.translate("abcd\nefgh\nijkl")

    assert blocks == [SectionBlock("abcd\nefgh\n"), SectionBlock("ijkl\n")]


def test_malformed_markdown_passes_through(translator: MarkupTranslator) -> None:
    raw = "[unclosed](link and **bold and [x] (y"

    assert translator.translate(raw) == [SectionBlock(raw + "\n")]


def test_bold_and_links_are_converted(translator: MarkupTranslator) -> None:
    blocks = translator.translate("**New** see [docs](https://example.com/docs)")

    assert blocks == [SectionBlock("*New* see <https://example.com/docs|docs>\n")]


def test_bare_in_repo_pull_url_is_shortened(translator: MarkupTranslator) -> None:
    blocks = translator.translate("in https://github.com/acme/widget/pull/7 by @bob")

    assert blocks == [
        SectionBlock("in <https://github.com/acme/widget/pull/7|widget#7> by @bob\n")
    ]


def test_other_repository_links_are_not_shortened(translator: MarkupTranslator) -> None:
    blocks = translator.translate("https://github.com/acme/gadget/pull/7")

    assert blocks == [SectionBlock("https://github.com/acme/gadget/pull/7\n")]


def test_issues_plural_path_is_not_shortened(translator: MarkupTranslator) -> None:
    # Only "pull/" and "issue/" paths are recognised; GitHub's real "issues/" path is not.
    blocks = translator.translate("https://github.com/acme/widget/issues/9")

    assert blocks == [SectionBlock("https://github.com/acme/widget/issues/9\n")]


def test_issue_singular_path_is_shortened() -> None:
    shorten = repo_link_shortener("https://github.com", "acme", "widget")

    assert shorten("https://github.com/acme/widget/issue/9") == (
        "<https://github.com/acme/widget/issue/9|widget#9>"
    )


def test_shortener_uses_configured_server_url() -> None:
    shorten = repo_link_shortener("https://ghe.example.com/", "acme", "widget")

    assert shorten("<https://ghe.example.com/acme/widget/pull/3|PR>") == (
        "<https://ghe.example.com/acme/widget/pull/3|widget#3>"
    )


def test_mentions_in_lines_are_rewritten(translator: MarkupTranslator) -> None:
    blocks = translator.translate("thanks @alice, @carol and @new-user_1")

    assert blocks == [
        SectionBlock("thanks <@U1234567890>, @carol.smith and @new-user_1\n")
    ]


def test_transforms_run_in_order(translator: MarkupTranslator) -> None:
    assert [t.__name__ for t in translator.transforms] == [
        "collapse_inline_heading",
        "to_slack_bold",
        "to_slack_links",
        "shorten_repo_links",
        "rewrite_mentions",
    ]

    line = "**[x](https://github.com/acme/widget/pull/1)**"
    line = to_slack_bold(line)
    assert line == "*[x](https://github.com/acme/widget/pull/1)*"
    line = to_slack_links(line)
    assert line == "*<https://github.com/acme/widget/pull/1|x>*"


def test_collapse_inline_heading_makes_bold() -> None:
    assert collapse_inline_heading("## Notes") == "*Notes*"
    assert collapse_inline_heading("not # a heading") == "not # a heading"


def test_heading_text_rules() -> None:
    assert heading_text("## Title  ") == "Title"
    assert heading_text("##Title") is None
    assert heading_text("#   ") is None
    assert heading_text("text # not") is None


def test_overlong_heading_is_truncated(translator: MarkupTranslator) -> None:
    blocks = translator.translate("# " + "h" * 200)

    assert len(blocks) == 1
    assert isinstance(blocks[0], HeadingBlock)
    assert len(blocks[0].text) == HEADER_MAX_LENGTH
    assert blocks[0].text.endswith("…")


def test_blocks_render_as_slack_json(translator: MarkupTranslator) -> None:
    blocks = [b.to_block() for b in translator.translate("# Title\nbody")]

    assert blocks == [
        {"type": "header", "text": {"type": "plain_text", "text": "Title"}},
        {"type": "section", "text": {"type": "mrkdwn", "text": "body\n"}},
    ]
