"""
Template registry for the web dashboard.

PURPOSE: Load Jinja2 templates once, or before every render in development.
AI CONTEXT: The reload lifecycle is fixed at construction. A reload builds
a new environment and swaps it in; concurrent renders keep using the one
they already hold.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, Template, select_autoescape

__all__ = ["TemplateRegistry", "DEFAULT_TEMPLATE_DIR"]

logger = logging.getLogger(__name__)

DEFAULT_TEMPLATE_DIR = Path(__file__).parent / "templates"


class TemplateRegistry:
    """
    Process-wide cache of compiled templates.

    LIFECYCLES:
    - reload_on_access=False (production): compiled once in __init__
    - reload_on_access=True (development): recompiled before every render
    """

    def __init__(
        self,
        directory: str | Path = DEFAULT_TEMPLATE_DIR,
        reload_on_access: bool = False,
        globals: dict[str, Any] | None = None,  # noqa: A002
    ) -> None:
        """
        Args:
            directory: Folder holding the *.html templates.
            reload_on_access: Recompile templates before each render.
            globals: Values available to every template (base path, version).
        """
        self.directory = Path(directory)
        self.reload_on_access = reload_on_access
        self._globals = dict(globals or {})
        self._templates: dict[str, Template] = {}
        self.reload()

    def reload(self) -> None:
        """Compile every template in the directory and replace the cache."""
        env = Environment(
            loader=FileSystemLoader(str(self.directory)),
            autoescape=select_autoescape(["html"]),
            auto_reload=False,
            trim_blocks=True,
            lstrip_blocks=True,
        )
        env.globals.update(self._globals)
        templates = {
            name: env.get_template(name) for name in env.list_templates(extensions=["html"])
        }
        self._templates = templates
        logger.debug(f"Loaded {len(templates)} template(s) from {self.directory}")

    @property
    def names(self) -> list[str]:
        return sorted(self._templates)

    def render(self, name: str, view_model: object, **context: Any) -> str:
        """
        Render a template with a view model exposed as "vm".

        Args:
            name: Template file name, e.g. "summary.html".
            view_model: Object handed to the template.
            **context: Extra template variables.

        Returns:
            Rendered HTML.

        Raises:
            KeyError: If no template of that name was loaded.
        """
        if self.reload_on_access:
            self.reload()
        template = self._templates[name]
        return template.render(vm=view_model, **context)
