"""Registry - name to component mapping and the conversion entry point.

The registry is a plain object owned by the caller. It does no locking:
registering components while a conversion is running is not supported.
"""

from __future__ import annotations

import io
import logging
from typing import TextIO

from jinja2 import Environment

from templ_components.component import Component, component
from templ_components.engine import create_environment
from templ_components.exceptions import ConversionError
from templ_components.expander import Expander
from templ_components.tokenizer import Tokenizer

log = logging.getLogger(__name__)


class Registry:
    """Components by tag name.

    Usage:
        registry = Registry()
        registry.add_source("card", '<div class="card">{{ children }}</div>')
        html = registry.convert("<card><p>hi</p></card>")
    """

    def __init__(self, env: Environment | None = None):
        self.env = env or create_environment()
        self._components: dict[str, Component] = {}

    def add(self, comp: Component) -> None:
        """Register a component, replacing any previous one with the same name."""
        if comp.name in self._components:
            log.debug("Replacing component %s", comp.name)
        else:
            log.debug("Registered component %s", comp.name)
        self._components[comp.name] = comp

    def add_source(self, name: str, source: str) -> Component:
        """Compile an inline template with the registry's environment and register it."""
        comp = component(name, source, env=self.env)
        self.add(comp)
        return comp

    def lookup(self, name: str) -> Component | None:
        return self._components.get(name)

    def names(self) -> list[str]:
        return sorted(self._components)

    def __contains__(self, name: object) -> bool:
        return name in self._components

    def __len__(self) -> int:
        return len(self._components)

    def render(self, content: str, out: TextIO) -> None:
        """Expand component tags in ``content``, writing the result to ``out``.

        Raises:
            ConversionError: Expansion stopped early; whatever was already
                written to ``out`` stays there.
        """
        Expander(self.lookup).expand(Tokenizer(content), out)

    def convert(self, content: str) -> str:
        """Expand every component tag in ``content``.

        Args:
            content: Markup mixing plain HTML and component tags.

        Returns:
            The expanded markup.

        Raises:
            ConversionError: Expansion stopped early. The error's ``output``
                attribute holds the output produced up to that point.
        """
        buf = io.StringIO()
        try:
            self.render(content, buf)
        except ConversionError as e:
            e.output = buf.getvalue()
            raise
        return buf.getvalue()
