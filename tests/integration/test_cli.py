"""Integration tests for the render_resume.py command-line interface."""

import importlib.util
from pathlib import Path

import pytest
from typer.testing import CliRunner

PROJECT_ROOT = Path(__file__).resolve().parents[2]
SCRIPT_PATH = PROJECT_ROOT / "scripts" / "render_resume.py"


def _load_cli():
    spec = importlib.util.spec_from_file_location("render_resume_cli", SCRIPT_PATH)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


cli = _load_cli()
runner = CliRunner()


@pytest.fixture
def data_dir(tmp_path: Path) -> Path:
    templates = tmp_path / "templates"
    templates.mkdir()
    (templates / "index.tem").write_text("{{ me.chosen }}: {{ meta.statement | linkify }}", encoding="utf-8")
    (templates / "link.tem").write_text('<a href="{{ url }}">{{ label }}</a>', encoding="utf-8")
    return templates


@pytest.fixture
def resume_file(tmp_path: Path) -> Path:
    path = tmp_path / "me.yaml"
    path.write_text(
        "me: {chosen: Sam}\nstatement: I <3 ((https://example.com/tea tea))\n", encoding="utf-8"
    )
    return path


@pytest.mark.integration
def test_no_command_shows_help():
    """Test that running without a command prints help and fails."""
    result = runner.invoke(cli.app, [])

    assert result.exit_code == 1
    assert "render" in result.output
    assert "yaml" in result.output


@pytest.mark.integration
def test_render_html_to_file(data_dir, resume_file, tmp_path):
    """Test rendering HTML to an output file."""
    out = tmp_path / "out" / "resume.html"
    result = runner.invoke(
        cli.app, ["render", str(resume_file), "--data-dir", str(data_dir), "-o", str(out)]
    )

    assert result.exit_code == 0
    assert out.read_text(encoding="utf-8") == 'Sam: I &lt;3 <a href="https://example.com/tea">tea</a>\n'


@pytest.mark.integration
def test_render_text_without_newline(data_dir, resume_file, tmp_path):
    """Test --text and --no-newline."""
    out = tmp_path / "resume.txt"
    result = runner.invoke(
        cli.app,
        ["render", str(resume_file), "-d", str(data_dir), "--text", "--no-newline", "-o", str(out)],
    )

    assert result.exit_code == 0
    assert out.read_text(encoding="utf-8") == 'Sam: I <3 <a href="https://example.com/tea">tea</a>'


@pytest.mark.integration
def test_render_config_file(data_dir, resume_file, tmp_path):
    """Test that settings can come from a config file."""
    (data_dir / "short.tem").write_text("{{ me.chosen }}", encoding="utf-8")
    config = tmp_path / "resify.yaml"
    config.write_text(f"data_dir: {data_dir}\ntemplate: short.tem\n", encoding="utf-8")
    out = tmp_path / "resume.txt"

    result = runner.invoke(cli.app, ["render", str(resume_file), "-c", str(config), "-o", str(out)])

    assert result.exit_code == 0
    assert out.read_text(encoding="utf-8") == "Sam\n"


@pytest.mark.integration
def test_render_bad_record_fails(data_dir, tmp_path):
    """Test that a record with unusable dates exits with status 1."""
    bad = tmp_path / "bad.yaml"
    bad.write_text("work:\n  - when: {from: soon, to: later}\n", encoding="utf-8")

    result = runner.invoke(cli.app, ["render", str(bad), "-d", str(data_dir), "-o", str(tmp_path / "o")])

    assert result.exit_code == 1


@pytest.mark.integration
def test_render_broken_template_fails(data_dir, resume_file, tmp_path):
    """Test that a template that does not compile exits with status 1."""
    (data_dir / "broken.tem").write_text("{% for %}", encoding="utf-8")

    result = runner.invoke(
        cli.app, ["render", str(resume_file), "-d", str(data_dir), "-o", str(tmp_path / "o")]
    )

    assert result.exit_code == 1


@pytest.mark.integration
def test_yaml_command(tmp_path):
    """Test writing the example resume."""
    out = tmp_path / "example.yaml"
    result = runner.invoke(cli.app, ["yaml", "-o", str(out)])

    assert result.exit_code == 0
    text = out.read_text(encoding="utf-8")
    assert "chosen: Chosen Name" in text
    assert "from: 2010-08" in text
    assert "to: 2015-12" in text


@pytest.mark.integration
def test_yaml_command_stdout():
    """Test writing the example resume to stdout."""
    result = runner.invoke(cli.app, ["yaml"])

    assert result.exit_code == 0
    assert "manager: Damien V. Satansteeth" in result.output
