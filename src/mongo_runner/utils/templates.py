"""Template rendering utilities."""

import logging
from pathlib import Path
from typing import Any, Set, Union
from jinja2 import Environment, BaseLoader, StrictUndefined, meta
from jinja2 import TemplateError as JinjaTemplateError

from mongo_runner.errors import TemplateNotFoundError, TemplateRenderError


logger = logging.getLogger(__name__)


class StringTemplateLoader(BaseLoader):
    """Template loader for string templates."""

    def __init__(self, template_string: str):
        self.template_string = template_string

    def get_source(self, environment, template):
        return self.template_string, None, lambda: True


def default_templates_dir() -> Path:
    """Directory of the templates shipped with the package."""
    return Path(__file__).resolve().parent.parent / "templates"


def read_template(templates_dir: Union[str, Path], name: str) -> str:
    """Read template ``name`` from ``templates_dir``."""
    path = Path(templates_dir) / name
    try:
        return path.read_text()
    except FileNotFoundError as e:
        logger.error(f"Template not found: {path}")
        raise TemplateNotFoundError(f"Template not found: {path}") from e


def declared_placeholders(template_str: str) -> Set[str]:
    """Return the variables a template expects from its context."""
    env = Environment()
    try:
        return meta.find_undeclared_variables(env.parse(template_str))
    except JinjaTemplateError as e:
        raise TemplateRenderError(f"Invalid template: {e}") from e


def render_template(template_str: str, **context: Any) -> str:
    """Render a Jinja2 template string with given context.

    Every placeholder the template declares must have a binding in
    ``context``; missing ones are reported before rendering starts.
    """
    missing = declared_placeholders(template_str) - set(context)
    if missing:
        names = ", ".join(sorted(missing))
        logger.error(f"Template placeholders without bindings: {names}")
        raise TemplateRenderError(f"Unresolved template placeholders: {names}")

    try:
        env = Environment(
            loader=StringTemplateLoader(template_str),
            undefined=StrictUndefined,
            keep_trailing_newline=True,
        )
        template = env.get_template("")
        return template.render(**context)

    except JinjaTemplateError as e:
        logger.error(f"Template rendering error: {e}")
        raise TemplateRenderError(str(e)) from e
