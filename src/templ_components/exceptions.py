"""templ-components exceptions

Errors raised while loading components or expanding markup.
"""

from __future__ import annotations


class TemplComponentsError(Exception):
    """Base exception for all templ-components errors."""

    pass


class ConfigError(TemplComponentsError):
    """Raised when a components file cannot be turned into a registry."""

    pass


class ConversionError(TemplComponentsError):
    """Raised when expansion stops early.

    ``output`` holds whatever had been written to the root buffer before
    the failure, so callers can still show a best-effort result.
    """

    def __init__(self, message: str, output: str = ""):
        self.output = output
        super().__init__(message)


class TokenizationError(ConversionError):
    """Raised when the markup tokenizer fails."""

    pass


class TemplateExecutionError(ConversionError):
    """Raised when a component template fails to render."""

    def __init__(self, tag: str, output: str = "", cause: Exception | None = None):
        self.tag = tag
        message = f"error executing template: tagname: {tag}"
        if cause is not None:
            message = f"{message}: {cause}"
        super().__init__(message, output)


class MismatchedEndTagError(ConversionError):
    """Raised when a component end tag does not close the innermost component."""

    def __init__(self, expected: str, found: str, output: str = ""):
        self.expected = expected
        self.found = found
        super().__init__(
            f"mismatched end tag: expected </{expected}>, found </{found}>", output
        )
