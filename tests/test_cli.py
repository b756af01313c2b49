"""Tests for the templ-components CLI."""

import pytest
from typer.testing import CliRunner

from templ_components import __version__
from templ_components.cli import app

runner = CliRunner()


@pytest.fixture
def project(tmp_path, monkeypatch):
    (tmp_path / "components.yaml").write_text(
        "components:\n"
        "  - name: card\n"
        "    template: '<div class=\"card\">{{ children }}</div>'\n"
        "    description: Card wrapper\n"
        "  - name: badge\n"
        "    template: '<span class=\"badge\">{{ label }}</span>'\n"
    )
    (tmp_path / "page.html").write_text('<main><card><badge label="new"/></card></main>')
    monkeypatch.chdir(tmp_path)
    return tmp_path


def test_render_to_stdout(project):
    result = runner.invoke(app, ["render", "page.html"])
    assert result.exit_code == 0
    assert result.stdout == (
        '<main><div class="card"><span class="badge">new</span></div></main>'
    )


def test_render_to_file(project):
    result = runner.invoke(app, ["render", "page.html", "-o", "out/page.html"])
    assert result.exit_code == 0
    assert (project / "out" / "page.html").read_text() == (
        '<main><div class="card"><span class="badge">new</span></div></main>'
    )


def test_render_from_stdin(project):
    result = runner.invoke(app, ["render", "-"], input="<card>x</card>")
    assert result.exit_code == 0
    assert '<div class="card">x</div>' in result.stdout


def test_render_with_explicit_components_file(project, tmp_path_factory, monkeypatch):
    elsewhere = tmp_path_factory.mktemp("elsewhere")
    monkeypatch.chdir(elsewhere)
    result = runner.invoke(
        app,
        ["render", str(project / "page.html"), "-c", str(project / "components.yaml")],
    )
    assert result.exit_code == 0
    assert "badge" in result.stdout


def test_render_missing_input(project):
    result = runner.invoke(app, ["render", "nope.html"])
    assert result.exit_code == 1
    assert "File not found" in result.output


def test_render_without_components_file(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "page.html").write_text("<p>x</p>")
    result = runner.invoke(app, ["render", "page.html", "-c", str(tmp_path / "missing.yaml")])
    assert result.exit_code == 1
    assert "Error" in result.output


def test_render_error_exits_nonzero(project):
    (project / "bad.html").write_text("<p>ok</p><card><badge></card>")
    result = runner.invoke(app, ["render", "bad.html"])
    assert result.exit_code == 1
    assert "mismatched end tag" in result.output
    assert "<p>ok</p>" not in result.output


def test_render_error_with_partial_output(project):
    (project / "bad.html").write_text("<p>ok</p><card><badge></card>")
    result = runner.invoke(app, ["render", "bad.html", "--partial"])
    assert result.exit_code == 1
    assert "<p>ok</p>" in result.output


def test_list_components(project):
    result = runner.invoke(app, ["list"])
    assert result.exit_code == 0
    assert "card" in result.stdout
    assert "badge" in result.stdout
    assert "Card wrapper" in result.stdout


def test_list_reports_broken_template(project):
    (project / "components.yaml").write_text(
        "components:\n"
        "  - name: card\n"
        "    path: missing.html\n"
    )
    result = runner.invoke(app, ["list"])
    assert result.exit_code == 1
    assert "Cannot load template for component 'card'" in result.output


def test_list_empty_components_file(project):
    (project / "components.yaml").write_text("components: []\n")
    result = runner.invoke(app, ["list"])
    assert result.exit_code == 0
    assert "No components declared" in result.stdout


def test_version():
    result = runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.stdout
