"""
resify - Resume records rendered through user templates

Renders YAML resume records into HTML or plain text using templates loaded
from a data directory.

Architecture:
- Records Context: Resume data model, date ranges, YAML conversion
- Templating Context: Template registry, inline link notation, file embedding
- Rendering Context: Render orchestration, configuration, output management
"""

__version__ = "0.1.0"
