#!/usr/bin/env python3
"""
Resume Rendering CLI

Renders YAML resume records through templates loaded from a data directory
(by default ./templates, templates are the *.tem files in it).

Commands:
    render - Render one or more YAML resumes (stdin if none are given)
    yaml   - Write an example resume YAML to start from

Templates can use these helpers in addition to Jinja2's own:

    embed    Contents of a file beneath the data directory
    html     Mark a string as safe HTML (HTML output only)
    attr     Mark a string as a safe attribute value (HTML output only)
    css      Mark a string as safe CSS (HTML output only)
    js       Mark a string as safe JavaScript (HTML output only)
    linkify  Replace ((URL label)) with the output of the "link" template
             (link.tem); without one, the label is used

Examples:\n

    render_resume.py render me.yaml                         # HTML to stdout using templates/index.tem

    render_resume.py render me.yaml --text -t resume.tem    # Plain text with templates/resume.tem

    render_resume.py render me.yaml -o out/resume.html      # Write to a file

    render_resume.py yaml -o me.yaml                        # Start a new resume
"""

import sys
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, List, Optional, TextIO

import typer
from omegaconf.errors import OmegaConfBaseException
from typing_extensions import Annotated

from resify.contexts.records import generate_example_yaml
from resify.contexts.rendering import load_render_config, render_resume_files
from resify.contexts.rendering.logger import setup_rendering_logger
from resify.contexts.templating import OutputMode, TemplateRegistry, TemplateRenderError

STDOUT_PATH = "-"

app = typer.Typer(
    help="Render YAML resumes through HTML or text templates",
    add_completion=False,
    invoke_without_command=True,
)


@app.callback()
def main(ctx: typer.Context):
    """Show help by default when no command is provided."""
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit(code=1)


@contextmanager
def open_output(path: str) -> Iterator[TextIO]:
    """Open the output path for writing; "-" or "" is stdout."""
    if path in (STDOUT_PATH, ""):
        yield sys.stdout
        return

    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    with open(target, "w", encoding="utf-8") as f:
        yield f


@app.command("render")
def render_command(
    files: Annotated[
        Optional[List[str]],
        typer.Argument(help="YAML resume files ('-' or none for stdin)"),
    ] = None,
    template: Annotated[
        Optional[str],
        typer.Option("--template", "-t", help="Main template to execute (default: index.tem)"),
    ] = None,
    data_dir: Annotated[
        Optional[Path],
        typer.Option(
            "--data-dir",
            "-d",
            help="Directory containing templates and other data (default: templates)",
            file_okay=False,
        ),
    ] = None,
    output: Annotated[
        str,
        typer.Option("--output", "-o", help="Path to write output to ('-' for stdout)"),
    ] = STDOUT_PATH,
    text: Annotated[
        Optional[bool],
        typer.Option("--text/--html", help="Skip HTML-specific escaping in templates"),
    ] = None,
    newline: Annotated[
        Optional[bool],
        typer.Option("--newline/--no-newline", help="Write a trailing newline after the output"),
    ] = None,
    config: Annotated[
        Optional[Path],
        typer.Option("--config", "-c", help="YAML file with render settings", dir_okay=False),
    ] = None,
    log_dir: Annotated[
        Optional[Path],
        typer.Option("--log-dir", help="Directory for a detailed render.log", file_okay=False),
    ] = None,
):
    """
    Render YAML resumes through the main template.

    Examples:\n

        $ render_resume.py render me.yaml

        $ cat me.yaml | render_resume.py render --text -t resume.tem
    """
    try:
        settings = load_render_config(
            config,
            template=template,
            data_dir=data_dir,
            text=text,
            newline=newline,
            log_dir=log_dir,
        )
    except (OSError, OmegaConfBaseException) as e:
        typer.secho(f"Error: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    mode = OutputMode.TEXT if settings.text else OutputMode.HTML
    setup_rendering_logger(settings.log_path, mode=mode.value, template=settings.template)

    registry = TemplateRegistry(settings.data_path, mode=mode)
    try:
        registry.preload()
    except TemplateRenderError as e:
        typer.secho(f"Error: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    try:
        with open_output(output) as stream:
            result = render_resume_files(
                files or [],
                registry,
                settings.template,
                stream,
                newline=settings.newline,
            )
    except OSError as e:
        typer.secho(f"Cannot open {output} for writing: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    if not result.success:
        for error in result.errors:
            typer.secho(f"Error: {error}", fg=typer.colors.RED, err=True)

    raise typer.Exit(code=0 if result.success else 1)


@app.command("yaml")
def yaml_command(
    output: Annotated[
        str,
        typer.Option("--output", "-o", help="Path to write the example to ('-' for stdout)"),
    ] = STDOUT_PATH,
):
    """Write an example resume YAML to start a new resume from."""
    try:
        with open_output(output) as stream:
            stream.write(generate_example_yaml())
    except OSError as e:
        typer.secho(f"Cannot write {output}: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)


if __name__ == "__main__":
    app()
