"""Template manager for loading and rendering Jinja2 Markdown templates.

Provides a centralized interface for rendering doc records and index
pages from Jinja2 templates stored in the package templates/ directory.
"""

import logging
from pathlib import Path
from typing import Any, Optional

from jinja2 import Environment, FileSystemLoader, StrictUndefined

from docmark.parsers.structure import DocRecord

logger = logging.getLogger(__name__)

_DEFAULT_TEMPLATES_DIR = Path(__file__).parent.parent / "templates"


class TemplateManager:
    """Loads and renders Jinja2 templates for Markdown output.

    Templates are loaded from a configurable directory and rendered
    with the structured records produced by the parser.
    """

    def __init__(self, templates_dir: Optional[str] = None) -> None:
        """Initialize the template manager.

        Args:
            templates_dir: Path to the templates directory. Uses the
                packaged templates/ directory if not specified.
        """
        self._templates_path = (
            Path(templates_dir) if templates_dir else _DEFAULT_TEMPLATES_DIR
        )

        if not self._templates_path.exists():
            logger.warning("Templates directory not found: %s", self._templates_path)

        self._env = Environment(
            loader=FileSystemLoader(str(self._templates_path)),
            trim_blocks=True,
            lstrip_blocks=True,
            undefined=StrictUndefined,
        )
        logger.debug("Template manager initialized with: %s", self._templates_path)

    def render_record(self, record: DocRecord, title: str, body: str) -> str:
        """Render one doc record.

        Args:
            record: The parsed record.
            title: Title split off the record description.
            body: Remainder of the description.

        Returns:
            Rendered Markdown, ending with a single newline.
        """
        rendered = self._render("record.md.j2", record=record, title=title, body=body)
        return rendered.strip() + "\n"

    def render_index(self, title: str, entries: list[dict[str, Any]]) -> str:
        """Render the index page.

        Args:
            title: Heading of the index page.
            entries: One dict per file with file_path, link and count keys.

        Returns:
            Rendered Markdown, ending with a single newline.
        """
        rendered = self._render("index.md.j2", title=title, entries=entries)
        return rendered.strip() + "\n"

    def _render(self, template_name: str, **kwargs: Any) -> str:
        """Render a template with the given context variables.

        Args:
            template_name: Name of the template file to render.
            **kwargs: Template context variables.

        Returns:
            Rendered template string.

        Raises:
            TemplateNotFound: If the template file does not exist.
        """
        template = self._env.get_template(template_name)
        rendered = template.render(**kwargs)
        logger.debug("Rendered template %s (%d chars)", template_name, len(rendered))
        return rendered
