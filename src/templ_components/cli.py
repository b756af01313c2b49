"""templ-components CLI

Usage:
    templ-components render page.html                  # expand to stdout
    templ-components render page.html -o out.html      # expand to a file
    templ-components render - < page.html             # read from stdin
    templ-components render page.html -c ui/components.yaml
    templ-components list                              # show components
    templ-components --version
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from ._version import __version__
from .config import build_registry, find_config, load_config, load_registry
from .exceptions import ConversionError, TemplComponentsError

log = logging.getLogger(__name__)

console = Console()
err_console = Console(stderr=True)

app = typer.Typer(help="Expand component tags in HTML using Jinja2 templates.")


def setup_logging(verbose: bool = False) -> None:
    """Configure logging for the CLI.

    Log levels:
    - Normal: Only warnings/errors shown
    - Verbose (-v): INFO level
    - Debug (TEMPL_COMPONENTS_DEBUG=1): DEBUG level - every frame push/pop
    """
    debug = bool(os.environ.get("TEMPL_COMPONENTS_DEBUG"))
    if debug:
        level = logging.DEBUG
    elif verbose:
        level = logging.INFO
    else:
        level = logging.WARNING

    handler = RichHandler(
        console=err_console,
        show_time=verbose,
        show_path=debug,
        rich_tracebacks=True,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))

    logger = logging.getLogger("templ_components")
    logger.setLevel(level)
    logger.handlers = [handler]
    logger.propagate = False


def resolve_components_file(components: Optional[Path]) -> Path:
    """Use the given components file, or find components.yaml upwards from cwd."""
    if components is not None:
        return components
    found = find_config()
    if found is None:
        typer.secho(
            "Error: No components.yaml found in current directory or parents.",
            err=True,
            fg=typer.colors.RED,
        )
        raise typer.Exit(code=1)
    return found


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"templ-components {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "-V",
        "--version",
        help="Show version and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
) -> None:
    """Expand component tags in HTML using Jinja2 templates."""


@app.command()
def render(
    input_file: str = typer.Argument(..., metavar="INPUT", help="Markup file, or - for stdin."),
    components: Optional[Path] = typer.Option(
        None, "-c", "--components", help="Path to components.yaml."
    ),
    output: Optional[Path] = typer.Option(
        None, "-o", "--output", help="Write the result to a file instead of stdout."
    ),
    partial: bool = typer.Option(
        False, "--partial", help="On error, still write the output produced so far."
    ),
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Show progress."),
) -> None:
    """Expand every component tag in INPUT."""
    setup_logging(verbose)
    components_file = resolve_components_file(components)

    if input_file == "-":
        content = typer.get_text_stream("stdin").read()
    else:
        path = Path(input_file)
        if not path.exists():
            typer.secho(f"Error: File not found: {path}", err=True, fg=typer.colors.RED)
            raise typer.Exit(code=1)
        content = path.read_text(encoding="utf-8")

    try:
        registry = load_registry(components_file)
        result = registry.convert(content)
    except ConversionError as exc:
        if partial:
            _write(exc.output, output)
        typer.secho(f"Error: {exc}", err=True, fg=typer.colors.RED)
        raise typer.Exit(code=1)
    except (TemplComponentsError, FileNotFoundError) as exc:
        typer.secho(f"Error: {exc}", err=True, fg=typer.colors.RED)
        raise typer.Exit(code=1)

    _write(result, output)


def _write(text: str, output: Optional[Path]) -> None:
    if output is None:
        typer.echo(text, nl=False)
        return
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(text, encoding="utf-8")
    log.info("Wrote %s", output)


@app.command("list")
def list_command(
    components: Optional[Path] = typer.Option(
        None, "-c", "--components", help="Path to components.yaml."
    ),
) -> None:
    """List the components registered from a components file.

    Every template is compiled first, so a broken component is reported
    here rather than on the first render.
    """
    setup_logging()
    components_file = resolve_components_file(components)

    try:
        config = load_config(components_file)
        registry = build_registry(config, components_file.parent)
    except (TemplComponentsError, FileNotFoundError) as exc:
        typer.secho(f"Error: {exc}", err=True, fg=typer.colors.RED)
        raise typer.Exit(code=1)

    if len(registry) == 0:
        console.print("[yellow]No components declared[/yellow]")
        return

    table = Table()
    table.add_column("Tag", style="cyan")
    table.add_column("Source")
    table.add_column("Description")

    decls = {decl.name: decl for decl in config.components}
    for name in registry.names():
        decl = decls[name]
        table.add_row(name, decl.path or "inline", decl.description or "")

    console.print(table)


if __name__ == "__main__":
    app()
