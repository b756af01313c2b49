"""Jinja2 environment and template execution for components."""

from __future__ import annotations

from typing import Any, Mapping, TextIO

from jinja2 import BaseLoader, Environment, Template

from templ_components.exceptions import TemplateExecutionError


def create_environment(loader: BaseLoader | None = None, **options: Any) -> Environment:
    """Create the Jinja2 Environment used to compile component templates.

    Autoescaping is always on: attribute values and children reach templates
    as markupsafe.Markup, everything else a template prints is escaped.

    Args:
        loader: Optional loader for file-based templates.
        **options: Extra Environment options, overriding the defaults.

    Returns:
        Configured Jinja2 Environment.
    """
    settings: dict[str, Any] = {
        "keep_trailing_newline": True,
    }
    settings.update(options)
    settings["autoescape"] = True
    return Environment(loader=loader, **settings)


def execute(template: Template, context: Mapping[str, Any], out: TextIO, *, tag: str) -> None:
    """Render a template into a writable text buffer, chunk by chunk.

    Anything raised while the template renders becomes a
    TemplateExecutionError for ``tag``. Anything raised by ``out.write``
    propagates unchanged.

    Args:
        template: Compiled template.
        context: Template variables.
        out: Destination buffer.
        tag: Tag name of the component instance being rendered.
    """
    chunks = template.generate(dict(context))
    while True:
        try:
            chunk = next(chunks)
        except StopIteration:
            return
        except Exception as e:
            raise TemplateExecutionError(tag, cause=e) from e
        out.write(chunk)
