"""HTML rendering of pages.

Two templates exist, ``view`` and ``edit``. Both are compiled once at startup
into a TemplateSet which is never reloaded, so it can be shared by all
requests without locking.
"""

import logging
import shutil
from pathlib import Path
from types import MappingProxyType
from typing import Self

from jinja2 import Environment, FileSystemLoader, StrictUndefined, Template, TemplateError

from lsrv.assets import get_templates_dir
from lsrv.core.types import Page
from lsrv.errors import RenderError, TemplateLoadError

logger = logging.getLogger(__name__)

TEMPLATE_NAMES = ("view", "edit")
TEMPLATE_SUFFIX = ".html"


def bootstrap_templates(template_dir: Path) -> list[Path]:
    """Write the default templates into template_dir where missing.

    Templates that already exist are left untouched so they can be
    customised.

    Args:
        template_dir: Directory the server loads templates from

    Returns:
        Paths of the template files that were written
    """
    template_dir.mkdir(parents=True, exist_ok=True)
    defaults = get_templates_dir()

    written: list[Path] = []
    for name in TEMPLATE_NAMES:
        filename = name + TEMPLATE_SUFFIX
        target = template_dir / filename
        if target.exists():
            continue
        shutil.copyfile(defaults / filename, target)
        logger.info(f"Wrote default template {target}")
        written.append(target)
    return written


class TemplateSet:
    """Compiled view and edit templates.

    Page bodies are HTML-escaped on output; a page can never inject markup.
    """

    def __init__(self, templates: dict[str, Template]) -> None:
        self._templates = MappingProxyType(dict(templates))

    @classmethod
    def load(cls, template_dir: Path) -> Self:
        """Compile the view and edit templates from a directory.

        Args:
            template_dir: Directory containing view.html and edit.html

        Returns:
            TemplateSet holding both compiled templates

        Raises:
            TemplateLoadError: If a template is missing or does not compile
        """
        env = Environment(
            loader=FileSystemLoader(template_dir),
            autoescape=True,
            undefined=StrictUndefined,
            auto_reload=False,
        )

        templates: dict[str, Template] = {}
        for name in TEMPLATE_NAMES:
            filename = name + TEMPLATE_SUFFIX
            try:
                templates[name] = env.get_template(filename)
            except TemplateError as e:
                raise TemplateLoadError(
                    f"Cannot load template {template_dir / filename}: {e}",
                ) from e

        logger.debug(f"Loaded templates from {template_dir}")
        return cls(templates)

    @property
    def names(self) -> tuple[str, ...]:
        """Names of the loaded templates."""
        return tuple(self._templates)

    def render(self, name: str, page: Page) -> str:
        """Render a page with the named template.

        Args:
            name: Template name ("view" or "edit")
            page: Page to bind into the template

        Returns:
            Rendered HTML

        Raises:
            RenderError: If the template does not exist or fails to execute
        """
        template = self._templates.get(name)
        if template is None:
            raise RenderError(f"no such template: {name}")

        try:
            return template.render(title=page.title, body=page.text)
        except Exception as e:
            # Filters and method calls inside a template can raise anything.
            raise RenderError(str(e) or type(e).__name__) from e
