"""Tests for the markup tokenizer."""

import pytest

from templ_components.tokenizer import Token, Tokenizer, TokenType, tokenize


def types(content):
    return [t.type for t in tokenize(content)]


@pytest.mark.parametrize(
    "content",
    [
        "",
        "just text",
        "<p>a</p>",
        '<div class="a">\n  <my-comp x="1" y/>\n  text &amp; more\n</div>\n',
        "<!DOCTYPE html><!-- c --><?xml version='1.0'?><br><br/>",
        "<style>p > a { color: red }</style><script>let x = '<b>';</script>",
        "a < b and c > d",
        "trailing </",
        "<c></>x</c></>",
    ],
)
def test_raw_slices_reassemble_input(content):
    assert "".join(t.raw for t in tokenize(content)) == content


def test_token_kinds():
    assert types('<c a="1" b>x</c><d/><!-- n --><!doctype html>') == [
        TokenType.START_TAG,
        TokenType.TEXT,
        TokenType.END_TAG,
        TokenType.SELF_CLOSING_TAG,
        TokenType.COMMENT,
        TokenType.DOCTYPE,
        TokenType.EOF,
    ]


def test_tag_tokens_carry_name_and_attrs():
    start, text, end, eof = tokenize('<c a="1" b>x</c >')
    assert start.tag == "c"
    assert start.attrs == (("a", "1"), ("b", None))
    assert start.raw == '<c a="1" b>'
    assert text.tag is None
    assert end.tag == "c"
    assert end.raw == "</c >"
    assert eof.type is TokenType.EOF


def test_tag_names_are_lowercased_raw_is_not():
    start = tokenize("<MyComp Title='x'/>")[0]
    assert start.tag == "mycomp"
    assert start.attrs == (("title", "x"),)
    assert start.raw == "<MyComp Title='x'/>"


def test_attribute_entities_are_decoded():
    start = tokenize('<c v="a &amp; b"/>')[0]
    assert start.attrs == (("v", "a & b"),)


def test_text_raw_keeps_entities():
    text = tokenize("a &amp; b")[0]
    assert text.type is TokenType.TEXT
    assert text.raw == "a &amp; b"


def test_dropped_markup_is_split_from_tags():
    tokens = tokenize("<c></>x</c></><d/></>")
    assert [(t.type, t.raw) for t in tokens] == [
        (TokenType.START_TAG, "<c>"),
        (TokenType.TEXT, "</>"),
        (TokenType.TEXT, "x"),
        (TokenType.END_TAG, "</c>"),
        (TokenType.TEXT, "</>"),
        (TokenType.SELF_CLOSING_TAG, "<d/>"),
        (TokenType.TEXT, "</>"),
        (TokenType.EOF, ""),
    ]


def test_malformed_marked_section_ends_with_error():
    tokens = tokenize("<p>a</p><![foo bar]>x")
    assert [t.raw for t in tokens[:-1]] == ["<p>", "a", "</p>"]
    assert tokens[-1].type is TokenType.ERROR
    assert isinstance(tokens[-1].error, AssertionError)


def test_empty_input_is_just_eof():
    assert tokenize("") == [Token(TokenType.EOF)]


class TestTokenizer:
    def test_iteration_stops_after_eof(self):
        tokens = list(Tokenizer("<p>x</p>"))
        assert [t.type for t in tokens] == [
            TokenType.START_TAG,
            TokenType.TEXT,
            TokenType.END_TAG,
            TokenType.EOF,
        ]

    def test_next_token_repeats_terminal(self):
        tokenizer = Tokenizer("x")
        assert tokenizer.next_token().type is TokenType.TEXT
        assert tokenizer.next_token().type is TokenType.EOF
        assert tokenizer.next_token().type is TokenType.EOF

    def test_terminal_flag(self):
        assert Token(TokenType.EOF).is_terminal
        assert Token(TokenType.ERROR, error=ValueError("x")).is_terminal
        assert not Token(TokenType.TEXT, "x").is_terminal
