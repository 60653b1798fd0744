"""
Resume Rendering Module

Renders resume records through the main template and writes the results.
"""

import time
from dataclasses import dataclass, field
from typing import IO, Iterable, List

from resify.contexts.records import DateParseError, InvalidYAMLStructureError, Resume, load_resume
from resify.contexts.rendering.logger import _log_debug, log_render_result, log_render_start
from resify.contexts.templating import TemplateExecutor, TemplateRenderError

WHITESPACE = "\r\n\t "


@dataclass
class RenderResult:
    """
    Result of rendering one or more records.

    Attributes:
        success: Whether every record rendered and was written
        rendered: Names of records rendered, in order
        errors: Error messages (rendering stops at the first one)
    """

    success: bool
    rendered: List[str] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)


def render_resume(resume: Resume, executor: TemplateExecutor, template_name: str) -> str:
    """
    Render a resume through the main template.

    Args:
        resume: Resume record
        executor: Template executor (usually a TemplateRegistry)
        template_name: Main template name

    Returns:
        Rendered output without surrounding whitespace

    Raises:
        TemplateRenderError: If the template is missing or fails
    """
    return executor.execute_named_template(template_name, resume).strip(WHITESPACE)


def render_resume_files(
    inputs: Iterable[str],
    executor: TemplateExecutor,
    template_name: str,
    output: IO[str],
    newline: bool = True,
) -> RenderResult:
    """
    Load, render and write each resume file in turn.

    Stops at the first record that cannot be loaded, rendered or written.
    A trailing newline is written once at the end when everything succeeded.

    Args:
        inputs: YAML file paths ("-" for standard input)
        executor: Template executor
        template_name: Main template name
        output: Stream to write rendered output to
        newline: Whether to end the output with a newline

    Returns:
        RenderResult with the names rendered and any error
    """
    inputs = list(inputs) or ["-"]
    result = RenderResult(success=True)
    start_time = time.time()

    for source in inputs:
        log_render_start(source, template_name)
        try:
            resume = load_resume(source)
            rendered = render_resume(resume, executor, template_name)
            output.write(rendered)
        except (OSError, InvalidYAMLStructureError, DateParseError, TemplateRenderError) as e:
            result.success = False
            result.errors.append(f"{source}: {e}")
            break
        result.rendered.append(source)
        _log_debug(f"Wrote {len(rendered)} chars for {source}")

    if result.success and newline:
        output.write("\n")

    log_render_result(result, time.time() - start_time)
    return result
