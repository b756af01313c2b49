"""templ-components - HTML component expansion with Jinja2.

Register templates under custom tag names, then expand markup that uses
those tags:

    registry = Registry()
    registry.add_source("card", '<div class="card">{{ children }}</div>')
    registry.convert("<card><p>hi</p></card>")
    # '<div class="card"><p>hi</p></div>'
"""

from templ_components._version import __version__
from templ_components.component import Component, component
from templ_components.engine import create_environment
from templ_components.exceptions import (
    ConfigError,
    ConversionError,
    MismatchedEndTagError,
    TemplateExecutionError,
    TemplComponentsError,
    TokenizationError,
)
from templ_components.registry import Registry

__all__ = [
    "__version__",
    # Core
    "Registry",
    "Component",
    "component",
    "create_environment",
    # Errors
    "TemplComponentsError",
    "ConfigError",
    "ConversionError",
    "TokenizationError",
    "TemplateExecutionError",
    "MismatchedEndTagError",
]
