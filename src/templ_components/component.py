"""Component definitions.

A component binds a custom tag name to a compiled Jinja2 template:

    <alert level="warn">Disk almost full</alert>

renders the template registered as "alert" with ``level`` and
``children`` in its context.
"""

from __future__ import annotations

from dataclasses import dataclass

from jinja2 import Environment, Template

from templ_components.engine import create_environment


@dataclass(frozen=True)
class Component:
    """A named, reusable template bound to a custom tag.

    ``name`` must equal the tag name as the tokenizer reports it. Matching
    is exact, and HTMLParser lowercases tag names, so component names
    should be lowercase.
    """

    name: str
    template: Template


def component(
    name: str,
    source: str | None = None,
    *,
    path: str | None = None,
    env: Environment | None = None,
) -> Component:
    """Create a component from an inline template or a template file.

    Args:
        name: Tag name the component answers to.
        source: Inline template source.
        path: Template name resolved through the environment's loader
            (alternative to source).
        env: Environment to compile with; defaults to create_environment().

    Examples:
        component("card", '<div class="card">{{ children }}</div>')
        component("card", path="card.html", env=env)
    """
    if source is None and path is None:
        raise ValueError("Must provide either 'source' or 'path'")
    if source is not None and path is not None:
        raise ValueError("Cannot provide both 'source' and 'path'")

    env = env or create_environment()
    if source is not None:
        tmpl = env.from_string(source)
    else:
        tmpl = env.get_template(path)  # type: ignore[arg-type]
    return Component(name=name, template=tmpl)
