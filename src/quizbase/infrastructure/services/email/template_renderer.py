"""Rendering of email bodies.

Templates run in a Jinja2 sandbox with ``StrictUndefined``: a template that
references a variable the caller did not supply fails instead of silently
rendering an empty string. Only HTML bodies are autoescaped.
"""

from typing import Any, Mapping

from jinja2 import StrictUndefined, TemplateError
from jinja2.sandbox import SandboxedEnvironment

from quizbase.core.logging import get_logger


def _sandbox(autoescape: bool) -> SandboxedEnvironment:
    return SandboxedEnvironment(
        autoescape=autoescape,
        undefined=StrictUndefined,
        trim_blocks=True,
        lstrip_blocks=True,
    )


class TemplateRenderer:
    """Renders plain text and HTML templates from strings."""

    def __init__(self, logger: Any | None = None) -> None:
        self.logger = logger or get_logger("quizbase.template_renderer")
        self._environments = {False: _sandbox(False), True: _sandbox(True)}

    def render(self, template: str, variables: Mapping[str, Any], html: bool = False) -> str:
        """Render ``template`` with ``variables``.

        Raises:
            jinja2.TemplateSyntaxError: If the template does not parse.
            jinja2.UndefinedError: If the template uses a missing variable.
        """
        try:
            return self._environments[html].from_string(template).render(**variables)
        except TemplateError as e:
            self.logger.error(
                "Email template rendering failed",
                error_type=type(e).__name__,
                error=str(e),
                html=html,
            )
            raise


_template_renderer: TemplateRenderer | None = None


def get_template_renderer() -> TemplateRenderer:
    """Return the shared renderer."""
    global _template_renderer
    if _template_renderer is None:
        _template_renderer = TemplateRenderer()
    return _template_renderer
