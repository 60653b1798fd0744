import dataclasses
from enum import Enum
from pathlib import Path
from typing import Any, Callable, Dict, List, Mapping, Protocol

from jinja2 import Environment, FileSystemLoader, Template, TemplateError, TemplateNotFound
from markupsafe import Markup, escape as html_escape

from resify.contexts.templating.embed import read_relative
from resify.contexts.templating.exceptions import TemplateRenderError
from resify.contexts.templating.linkify import linkify
from resify.contexts.templating.logger import _log_debug, log_template_loaded

TEMPLATE_SUFFIX = ".tem"


class OutputMode(str, Enum):
    """Output context of the rendered document."""

    HTML = "html"
    TEXT = "text"


class TemplateExecutor(Protocol):
    """Anything that can execute a template by name."""

    def execute_named_template(self, name: str, data: Any) -> str: ...


def _identity(text: str) -> str:
    return text


def _escape_html(text: str) -> str:
    return str(html_escape(text))


def _as_context(data: Any) -> Dict[str, Any]:
    """
    Build a template context from data.

    Mappings are used as-is. Other objects are available as `data`, with
    their public attributes also exposed at the top level.
    """
    if isinstance(data, Mapping):
        return dict(data)

    context = {"data": data}
    if dataclasses.is_dataclass(data):
        context.update({f.name: getattr(data, f.name) for f in dataclasses.fields(data)})
    elif hasattr(data, "__dict__"):
        context.update({k: v for k, v in vars(data).items() if not k.startswith("_")})
    return context


class TemplateRegistry:
    """
    Registry for loading, caching and executing Jinja2 templates from a data directory.

    Templates are the *.tem files in the data directory. A template can be
    addressed with or without its suffix, so the link template may live in
    link.tem and be executed as "link".

    In HTML mode autoescaping is on and the html/attr/css/js helpers mark a
    string as safe; in text mode nothing is escaped and the helpers return
    their input unchanged.
    """

    def __init__(self, data_dir: Path, mode: OutputMode = OutputMode.HTML, suffix: str = TEMPLATE_SUFFIX):
        """
        Initialize the template registry.

        Args:
            data_dir: Directory containing templates and embeddable files
            mode: Output mode, controls escaping
            suffix: File extension of templates
        """
        self.data_dir = Path(data_dir)
        self.mode = OutputMode(mode)
        self.suffix = suffix
        self._cache: Dict[str, Template] = {}

        self.env = Environment(
            loader=FileSystemLoader(str(self.data_dir)),
            autoescape=self.mode is OutputMode.HTML,
            keep_trailing_newline=True,
        )

        helpers = self._helpers()
        self.env.filters.update(helpers)
        self.env.globals.update(helpers)

    @property
    def escape(self) -> Callable[[str], str]:
        """Escape function for plain text in this registry's output mode."""
        return _escape_html if self.mode is OutputMode.HTML else _identity

    def _helpers(self) -> Dict[str, Callable]:
        """Functions available to every template, as filters and as globals."""
        if self.mode is OutputMode.HTML:
            safe = Markup
        else:
            safe = _identity

        def embed(path: str) -> str:
            return read_relative(self.data_dir, path)

        def linkify_helper(text: Any) -> str:
            text = "" if text is None else str(text)
            return safe(linkify(text, self, self.escape))

        return {
            "embed": embed,
            "html": safe,
            "attr": safe,
            "css": safe,
            "js": safe,
            "linkify": linkify_helper,
        }

    def template_names(self) -> List[str]:
        """Names of all template files in the data directory."""
        return sorted(p.name for p in self.data_dir.glob(f"*{self.suffix}") if p.is_file())

    def preload(self) -> List[str]:
        """
        Compile every template in the data directory.

        Returns:
            Names of the loaded templates

        Raises:
            TemplateRenderError: If any template fails to compile
        """
        names = self.template_names()
        for name in names:
            try:
                self.get_template(name)
            except TemplateError as e:
                raise TemplateRenderError(
                    f"Cannot parse template as {self.mode.value}", template_name=name, original_error=e
                ) from e
        log_template_loaded(self.data_dir, names)
        return names

    def get_template(self, name: str) -> Template:
        """
        Get a template by name, loading and caching it if necessary.

        Args:
            name: Template name, with or without the template suffix

        Returns:
            Jinja2 Template object

        Raises:
            TemplateNotFound: If neither name nor name + suffix exists
            TemplateSyntaxError: If template has Jinja2 syntax errors
        """
        # Check cache first
        if name in self._cache:
            return self._cache[name]

        candidates = [name]
        if not name.endswith(self.suffix):
            candidates.append(name + self.suffix)

        for candidate in candidates:
            try:
                template = self.env.get_template(candidate)
            except TemplateNotFound:
                continue
            self._cache[name] = template
            return template

        raise TemplateNotFound(
            f"Template '{name}' not found in {self.data_dir} (tried: {', '.join(candidates)})"
        )

    def execute_named_template(self, name: str, data: Any) -> str:
        """
        Render the named template with data.

        Args:
            name: Template name
            data: Mapping used as the template context, or an object whose
                attributes are exposed

        Returns:
            Rendered output

        Raises:
            TemplateRenderError: If the template is missing, fails to compile,
                or fails while rendering
        """
        try:
            template = self.get_template(name)
            output = template.render(_as_context(data))
        except (TemplateError, OSError) as e:
            raise TemplateRenderError(
                "Cannot execute template", template_name=name, original_error=e
            ) from e

        _log_debug(f"Rendered template '{name}' ({len(output)} chars)")
        return output
