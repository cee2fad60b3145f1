"""Tests for status HTML and plain-text tokenisation."""

import logging

import pytest

from mastotext.models.tokens import Bold, Emoji, HashTag, Italic, LineBreak, Link, Mention, Text, TokenList
from mastotext.parsed_text import (
    Html,
    HtmlParsingError,
    MissingMentionAnchor,
    MissingMentionNameSpan,
    ParsedContent,
    Plain,
    UnparseableMentionInstance,
    parse,
    parse_html,
    parse_plain,
)
from mastotext.renderer import to_plain_text

CODL_MENTION = (
    '<span class="h-card"><a href="https://chitter.xyz/@codl" class="u-url mention" '
    'rel="nofollow noopener noreferrer" target="_blank">@<span>codl</span></a></span>'
)
PYTHON_TAG = '<a href="https://mastodon.social/tags/python" class="mention hashtag" rel="tag">#<span>python</span></a>'


def test_plain_text_with_emoji():
    assert parse_plain("Hello :blob: world") == [
        Text(text="Hello "),
        Emoji(shortcode="blob"),
        Text(text=" world"),
    ]


def test_plain_text_keeps_newlines_inside_text():
    assert parse_plain("a\nb :x:") == [Text(text="a\nb "), Emoji(shortcode="x")]


def test_plain_text_ignores_stray_colons():
    assert parse_plain("Problem!: :yikes:! ':'") == [
        Text(text="Problem!: "),
        Emoji(shortcode="yikes"),
        Text(text="! ':'"),
    ]


def test_plain_text_adjacent_emoji_and_empty_input():
    assert parse_plain(":a::b:") == [Emoji(shortcode="a"), Emoji(shortcode="b")]
    assert parse_plain("") == []
    assert parse_plain(":not an emoji:") == [Text(text=":not an emoji:")]


def test_two_paragraphs_separated_by_two_line_breaks():
    tokens = parse_html("<p>Hello world</p><p>Second para</p>")

    assert tokens == [
        Text(text="Hello world"),
        LineBreak(),
        LineBreak(),
        Text(text="Second para"),
    ]


def test_no_line_breaks_at_start_or_end_of_paragraphs():
    tokens = parse_html("<p>one</p>\n<p>two</p>\n<p>three</p>\n")

    assert tokens[0] == Text(text="one")
    assert tokens[-1] == Text(text="three")
    assert tokens.count(LineBreak()) == 4


def test_unclosed_paragraphs_are_not_duplicated():
    assert parse_html("<p>a<p>b") == [Text(text="a"), LineBreak(), LineBreak(), Text(text="b")]
    assert parse_html("<p>a<p>b</p>c</p>") == [
        Text(text="a"),
        LineBreak(),
        LineBreak(),
        Text(text="b"),
        LineBreak(),
        LineBreak(),
        Text(text="c"),
    ]


def test_fragment_without_paragraphs_parses_top_level_nodes():
    assert parse_html("Simple HTML with emoji! :fatyoshi:") == [
        Text(text="Simple HTML with emoji! "),
        Emoji(shortcode="fatyoshi"),
    ]


def test_br_becomes_line_break():
    assert parse_html("<p>line one<br>line two<br />end</p>") == [
        Text(text="line one"),
        LineBreak(),
        Text(text="line two"),
        LineBreak(),
        Text(text="end"),
    ]


def test_newlines_between_top_level_nodes_are_dropped():
    assert parse_html("<strong>a</strong>\n<em>b</em>\n") == [Bold(text="a"), Italic(text="b")]


def test_entities_are_decoded_in_text():
    assert parse_html("<p>you&#39;re &amp; me</p>") == [Text(text="you're & me")]


def test_hashtag_link():
    assert parse_html(PYTHON_TAG) == [HashTag(name="python", url="https://mastodon.social/tags/python")]


def test_hashtag_without_span_falls_back_to_anchor_text():
    tokens = parse_html('<a href="https://example.social/tags/cats" rel="tag">#cats</a>')
    assert tokens == [HashTag(name="cats", url="https://example.social/tags/cats")]


def test_web_link():
    html = (
        '<a href="https://example.com/page" rel="nofollow noopener" target="_blank">'
        '<span class="invisible">https://</span><span class="">example.com/page</span></a>'
    )
    assert parse_html(html) == [Link(url="https://example.com/page")]


def test_link_with_unparseable_or_missing_href():
    assert parse_html('<a href="not a url">x</a>') == [Link(url=None)]
    assert parse_html("<a>x</a>") == [Link(url=None)]


def test_mention_h_card():
    html = (
        '<span class="h-card"><a href="https://example.social/@bob" class="mention">@<span>bob</span></a></span>'
    )
    assert parse_html(html) == [Mention(name="bob", instance="example.social", url="https://example.social/@bob")]


def test_mention_h_card_among_other_classes():
    html = '<span class="h-card foo"><a href="https://example.social/@bob">@<span>bob</span></a></span>'
    assert parse_html(html) == [Mention(name="bob", instance="example.social", url="https://example.social/@bob")]


def test_status_with_mention_hashtag_and_emoji():
    html = f"<p>Hello {CODL_MENTION} check {PYTHON_TAG}</p><p>bye :wave:</p>"

    assert parse_html(html) == [
        Text(text="Hello "),
        Mention(name="codl", instance="chitter.xyz", url="https://chitter.xyz/@codl"),
        Text(text=" check "),
        HashTag(name="python", url="https://mastodon.social/tags/python"),
        LineBreak(),
        LineBreak(),
        Text(text="bye "),
        Emoji(shortcode="wave"),
    ]


def test_mention_instance_is_lowercased_host_without_port():
    html = '<span class="h-card" translate="no"><a href="https://Example.Social:8443/@bob">@<span>bob</span></a></span>'
    (token,) = parse_html(html)
    assert token.instance == "example.social"


def test_mention_without_anchor_raises():
    with pytest.raises(MissingMentionAnchor) as exc_info:
        parse_html('<p>hi <span class="h-card"><span>@bob</span></span></p>')

    assert "No inner anchor found" in str(exc_info.value)
    assert 'class="h-card"' in exc_info.value.node_html


def test_mention_without_name_span_raises():
    with pytest.raises(MissingMentionNameSpan):
        parse_html('<span class="h-card"><a href="https://example.social/@bob">@bob</a></span>')


def test_mention_without_host_raises():
    with pytest.raises(UnparseableMentionInstance) as exc_info:
        parse_html('<span class="h-card"><a href="/@bob">@<span>bob</span></a></span>')

    assert exc_info.value.url_string == "/@bob"


def test_mention_error_fails_the_whole_parse():
    html = f'<p>{CODL_MENTION}</p><p><span class="h-card"></span></p>'
    with pytest.raises(HtmlParsingError):
        parse_html(html)


def test_strong_and_em_use_first_child_only():
    assert parse_html("<p><strong>bold</strong> and <em>it</em></p>") == [
        Bold(text="bold"),
        Text(text=" and "),
        Italic(text="it"),
    ]
    assert parse_html('<strong>one<a href="https://a.com">two</a></strong>') == [Bold(text="one")]
    assert parse_html("<em></em>") == [Italic(text="")]


def test_unrecognised_elements_are_reparsed_as_plain_text():
    assert parse_html("<p><span>hi :wave:</span></p>") == [
        Text(text="<span>hi "),
        Emoji(shortcode="wave"),
        Text(text="</span>"),
    ]


def test_parse_dispatches_on_input_kind():
    assert parse(Plain("<p>:x:</p>")) == [Text(text="<p>"), Emoji(shortcode="x"), Text(text="</p>")]
    assert parse(Html("<p>:x:</p>")) == [Emoji(shortcode="x")]
    assert parse(ParsedContent.plain("hi")) == [Text(text="hi")]


def test_parsed_content_is_repeatable():
    content = ParsedContent.html(f"<p>Hello {CODL_MENTION}</p>")
    assert content.tokens() == content.tokens()


def test_tokens_or_empty_degrades_on_malformed_html(caplog):
    content = ParsedContent.html('<span class="h-card">nobody</span>')

    with caplog.at_level(logging.WARNING, logger="mastotext.parsed_text"):
        assert content.tokens_or_empty() == []

    assert "Failed to parse status content" in caplog.text
    with pytest.raises(MissingMentionAnchor):
        content.tokens()


def test_plain_input_never_raises():
    assert ParsedContent.plain('<span class="h-card">nobody</span>').tokens_or_empty() == [
        Text(text='<span class="h-card">nobody</span>')
    ]


def test_surfaces_reconstruct_readable_text():
    tokens = parse_html(f"<p>Hello {CODL_MENTION} check {PYTHON_TAG} :wave:</p><p>bye</p>")
    assert to_plain_text(tokens) == "Hello @codl check #python :wave:\n\nbye"


def test_token_list_json_uses_kind_discriminator():
    tokens = TokenList.validate_python(
        [{"kind": "emoji", "shortcode": "x"}, {"kind": "line_break"}, {"kind": "link", "url": None}]
    )
    assert tokens == [Emoji(shortcode="x"), LineBreak(), Link(url=None)]
    assert TokenList.dump_python([Text(text="a")]) == [{"kind": "text", "text": "a"}]
