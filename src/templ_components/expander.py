"""Expander - rewrites component tags into their rendered templates.

Open component tags are tracked on an explicit stack of frames. Each frame
buffers everything produced between its start and end tag, including the
output of nested components, and its template runs when the end tag
arrives. Inner components therefore always render before outer ones, and
the outer template sees their output as ``children``.

Template context for a component instance:
    - every attribute by name, re-escaped as markupsafe.Markup
    - ``attributes``: the same entries as one mapping, for spreading
    - ``children``: rendered inner content (paired tags only)
"""

from __future__ import annotations

import io
import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Callable, Iterable, Mapping, TextIO

from markupsafe import Markup, escape

from templ_components.component import Component
from templ_components.engine import execute
from templ_components.exceptions import MismatchedEndTagError, TokenizationError
from templ_components.tokenizer import Token, TokenType

log = logging.getLogger(__name__)

ATTRIBUTES_KEY = "attributes"
CHILDREN_KEY = "children"


def build_attributes(attrs: Iterable[tuple[str, str | None]]) -> Mapping[str, Markup]:
    """Capture tag attributes as a read-only mapping of escaped values.

    The tokenizer hands over entity-decoded values, so they are escaped
    again here and render safely in both text and attribute positions.
    Valueless attributes map to an empty string. Later duplicates win.
    """
    return MappingProxyType({name: escape(value or "") for name, value in attrs})


def build_context(attributes: Mapping[str, Markup]) -> dict[str, Any]:
    context: dict[str, Any] = dict(attributes)
    context[ATTRIBUTES_KEY] = attributes
    return context


@dataclass
class Frame:
    """One open component tag, waiting for its end tag."""

    tag: str
    attributes: Mapping[str, Markup]
    children: io.StringIO = field(default_factory=io.StringIO)


class Expander:
    """Expands component tags in a token stream.

    Args:
        lookup: Returns the component registered under a tag name, or None.
    """

    def __init__(self, lookup: Callable[[str], Component | None]):
        self._lookup = lookup

    def expand(self, tokens: Iterable[Token], root: TextIO) -> None:
        """Consume tokens until the end of input, writing output to ``root``.

        Raises:
            TokenizationError: The tokenizer reported a failure.
            TemplateExecutionError: A component template failed to render.
            MismatchedEndTagError: A component end tag closed the wrong frame.
        """
        stack: list[Frame] = []
        out: TextIO = root

        for token in tokens:
            if token.type is TokenType.EOF:
                break
            if token.type is TokenType.ERROR:
                raise TokenizationError(f"tokenizer error: {token.error}") from token.error

            comp = self._lookup(token.tag) if token.tag is not None else None

            if comp is not None and token.type is TokenType.SELF_CLOSING_TAG:
                attributes = build_attributes(token.attrs)
                log.debug("Expanding <%s/>", comp.name)
                execute(comp.template, build_context(attributes), out, tag=comp.name)

            elif comp is not None and token.type is TokenType.START_TAG:
                stack.append(Frame(tag=comp.name, attributes=build_attributes(token.attrs)))
                log.debug("Opened <%s> (depth %d)", comp.name, len(stack))

            elif comp is not None and token.type is TokenType.END_TAG and stack:
                frame = stack[-1]
                if frame.tag != comp.name:
                    raise MismatchedEndTagError(expected=frame.tag, found=comp.name)
                stack.pop()
                log.debug("Closed <%s> (depth %d)", frame.tag, len(stack))

                context = build_context(frame.attributes)
                context[CHILDREN_KEY] = Markup(frame.children.getvalue())
                out = stack[-1].children if stack else root
                execute(comp.template, context, out, tag=frame.tag)

            else:
                out.write(token.raw)

            out = stack[-1].children if stack else root

        if stack:
            log.warning(
                "Unclosed components at end of input: %s",
                ", ".join(f"<{frame.tag}>" for frame in stack),
            )
