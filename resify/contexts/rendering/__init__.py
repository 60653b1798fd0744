"""
Rendering Context

Responsibilities:
- Resolves render configuration (defaults, config file, CLI flags)
- Renders resume records through the main template
- Writes rendered output and reports failures

Owns: Render orchestration, configuration, output management
Never: Parses link notation or dates itself
"""

from resify.contexts.rendering.config import RenderConfig, load_render_config
from resify.contexts.rendering.renderer import RenderResult, render_resume, render_resume_files

__all__ = [
    "RenderConfig",
    "load_render_config",
    "RenderResult",
    "render_resume",
    "render_resume_files",
]
