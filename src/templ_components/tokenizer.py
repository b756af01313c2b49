"""Tokenizer - turns a markup string into a stream of typed tokens.

Built on the standard library HTMLParser. The parser is push-based, so the
whole input is parsed up front and handed out one token at a time.

Every token keeps the exact slice of source it was parsed from:
concatenating the raw text of all tokens gives back the input, which is
what lets markup that is not a component pass through untouched.
"""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass
from enum import Enum
from html.parser import HTMLParser
from typing import Iterator

log = logging.getLogger(__name__)


class TokenType(str, Enum):
    """Kind of a token."""

    START_TAG = "start_tag"
    END_TAG = "end_tag"
    SELF_CLOSING_TAG = "self_closing_tag"
    TEXT = "text"
    COMMENT = "comment"
    DOCTYPE = "doctype"
    OTHER = "other"  # processing instructions, marked sections
    EOF = "eof"
    ERROR = "error"


TERMINAL_TYPES = frozenset({TokenType.EOF, TokenType.ERROR})


@dataclass(frozen=True)
class Token:
    """A single unit of the token stream."""

    type: TokenType
    raw: str = ""
    tag: str | None = None  # tag tokens only, as reported by HTMLParser
    attrs: tuple[tuple[str, str | None], ...] = ()
    error: Exception | None = None  # ERROR tokens only

    @property
    def is_terminal(self) -> bool:
        return self.type in TERMINAL_TYPES


class _TokenCollector(HTMLParser):
    """HTMLParser that records token kinds and their source offsets.

    Handlers fire before the parser advances its position, so getpos()
    inside a handler is the start of the construct being reported. Raw
    slices are cut between consecutive start offsets once parsing is done.
    Tags also record where they end: anything HTMLParser skips silently
    after a tag (such as `</>`) becomes text instead of part of the tag.
    """

    def __init__(self, content: str):
        super().__init__(convert_charrefs=True)
        self._content = content
        self._line_starts = [0]
        pos = content.find("\n")
        while pos >= 0:
            self._line_starts.append(pos + 1)
            pos = content.find("\n", pos + 1)
        # (type, start offset, tag end offset or None, tag, attrs)
        self.marks: list[tuple[TokenType, int, int | None, str | None, tuple]] = []

    def position(self) -> int:
        lineno, column = self.getpos()
        return self._line_starts[lineno - 1] + column

    def _mark(
        self,
        token_type: TokenType,
        tag: str | None = None,
        attrs=(),
        length: int | None = None,
    ) -> None:
        start = self.position()
        tag_end = start + length if length is not None else None
        self.marks.append((token_type, start, tag_end, tag, tuple(attrs)))

    def handle_starttag(self, tag, attrs):
        self._mark(TokenType.START_TAG, tag, attrs, len(self.get_starttag_text()))

    def handle_startendtag(self, tag, attrs):
        self._mark(TokenType.SELF_CLOSING_TAG, tag, attrs, len(self.get_starttag_text()))

    def handle_endtag(self, tag):
        start = self.position()
        close = self._content.find(">", start)
        self._mark(TokenType.END_TAG, tag, length=close + 1 - start if close >= 0 else None)

    def handle_data(self, data):
        self._mark(TokenType.TEXT)

    def handle_comment(self, data):
        self._mark(TokenType.COMMENT)

    def handle_decl(self, decl):
        self._mark(TokenType.DOCTYPE)

    def handle_pi(self, data):
        self._mark(TokenType.OTHER)

    def unknown_decl(self, data):
        self._mark(TokenType.OTHER)


def tokenize(content: str) -> list[Token]:
    """Tokenize a markup string.

    The returned list always ends with exactly one terminal token: EOF when
    the whole input was consumed, ERROR when the parser gave up.

    Args:
        content: Markup to tokenize.

    Returns:
        Tokens in source order.
    """
    collector = _TokenCollector(content)
    failure: Exception | None = None
    try:
        collector.feed(content)
        collector.close()
        end = len(content)
    except AssertionError as e:
        # _markupbase reports malformed declarations with AssertionError
        failure = e
        end = collector.position()

    tokens: list[Token] = []
    marks = collector.marks
    if marks and marks[0][1] > 0:
        tokens.append(Token(TokenType.TEXT, content[: marks[0][1]]))

    for index, (token_type, start, tag_end, tag, attrs) in enumerate(marks):
        stop = marks[index + 1][1] if index + 1 < len(marks) else end
        if tag_end is not None and tag_end < stop:
            tokens.append(Token(token_type, content[start:tag_end], tag, attrs))
            tokens.append(Token(TokenType.TEXT, content[tag_end:stop]))
        else:
            tokens.append(Token(token_type, content[start:stop], tag, attrs))

    if failure is not None:
        log.debug("Tokenizer failed after %d tokens: %s", len(tokens), failure)
        tokens.append(Token(TokenType.ERROR, error=failure))
    else:
        if not marks and content:
            tokens.append(Token(TokenType.TEXT, content))
        tokens.append(Token(TokenType.EOF))
    return tokens


class Tokenizer:
    """Pull-style token stream over a markup string.

    Usage:
        tokenizer = Tokenizer("<p>hi</p>")
        for token in tokenizer:
            ...

    Iteration stops after the terminal token. next_token() keeps returning
    the terminal token once the stream is exhausted.
    """

    def __init__(self, content: str):
        self._tokens: deque[Token] = deque(tokenize(content))

    def next_token(self) -> Token:
        if len(self._tokens) > 1:
            return self._tokens.popleft()
        return self._tokens[0]

    def __iter__(self) -> Iterator[Token]:
        while True:
            token = self.next_token()
            yield token
            if token.is_terminal:
                return
