"""Markdown output generation for parsed doc comments.

Renders each DocRecord as a Markdown section: a heading from the title
part of its description, the remaining description as body text, then
Parameters and Returns lists. Also writes one file per source and an
index page linking them.
"""

import logging
from pathlib import Path
from typing import Optional

from docmark.errors import MissingSeparatorError
from docmark.output.template_manager import TemplateManager
from docmark.parsers.structure import DocFile, DocRecord
from docmark.utils.config import validate_policy

logger = logging.getLogger(__name__)

DEFAULT_TITLE_SEPARATOR = ". "


def split_title(
    description: str, separator: str = DEFAULT_TITLE_SEPARATOR
) -> tuple[str, str]:
    """Split a description into a title and a body.

    Args:
        description: Flat description string of a record.
        separator: Sequence marking the end of the title. Only the first
            occurrence counts.

    Returns:
        A (title, body) pair, both trimmed.

    Raises:
        MissingSeparatorError: If the separator does not occur.
    """
    title, found, body = description.partition(separator)
    if not found:
        raise MissingSeparatorError(description, separator)
    return title.strip(), body.strip()


class MarkdownWriter:
    """Renders doc records as Markdown and writes them to disk.

    The missing-separator policy decides what happens to a record whose
    description cannot be split: "error" raises MissingSeparatorError,
    "skip" logs a warning and leaves the record out.
    """

    def __init__(
        self,
        output_dir: str = "docs/generated",
        title_separator: str = DEFAULT_TITLE_SEPARATOR,
        on_missing_separator: str = "error",
        templates: Optional[TemplateManager] = None,
    ) -> None:
        """Initialize the Markdown writer.

        Args:
            output_dir: Directory where Markdown files will be written.
            title_separator: Separator between title and body.
            on_missing_separator: Either "error" or "skip".
            templates: Template manager to render with. A default one is
                created if not given.

        Raises:
            ConfigError: If the policy is unknown.
        """
        self.output_dir = Path(output_dir)
        self.title_separator = title_separator
        self.on_missing_separator = validate_policy(on_missing_separator)
        self._templates = templates or TemplateManager()
        self._links: dict[str, str] = {}

    def render_record(self, record: DocRecord) -> str:
        """Render a single record, ignoring the skip policy.

        Args:
            record: The record to render.

        Returns:
            Markdown string for the record.

        Raises:
            MissingSeparatorError: If the description has no separator.
        """
        title, body = split_title(record.description, self.title_separator)
        return self._templates.render_record(record, title, body)

    def render_file(self, doc_file: DocFile) -> str:
        """Render every record of a file, applying the separator policy.

        Args:
            doc_file: Records extracted from one source file.

        Returns:
            Markdown for all renderable records, separated by blank lines.

        Raises:
            MissingSeparatorError: If a record cannot be split and the
                policy is "error".
        """
        sections: list[str] = []
        for index, record in enumerate(doc_file.records):
            try:
                sections.append(self.render_record(record))
            except MissingSeparatorError as e:
                if self.on_missing_separator == "error":
                    raise
                logger.warning(
                    "Skipping record %d in %s: %s", index + 1, doc_file.file_path, e
                )
        return "\n".join(sections)

    def write_file_doc(self, doc_file: DocFile) -> Path:
        """Write the documentation of one source file to a .md file.

        Args:
            doc_file: Records extracted from one source file.

        Returns:
            Path to the written Markdown file.
        """
        content = self.render_file(doc_file)

        self.output_dir.mkdir(parents=True, exist_ok=True)
        md_path = self.output_dir / self._file_link(doc_file)
        md_path.write_text(content, encoding="utf-8")

        logger.info("Wrote documentation: %s", md_path)
        return md_path

    def write_index(
        self,
        doc_files: list[DocFile],
        title: str = "API Reference",
    ) -> Path:
        """Generate an index page linking all documented files.

        Args:
            doc_files: Files that were documented.
            title: Title for the index page.

        Returns:
            Path to the written index file.
        """
        self.output_dir.mkdir(parents=True, exist_ok=True)
        index_path = self.output_dir / "index.md"

        entries = [
            {
                "file_path": doc_file.file_path,
                "link": self._file_link(doc_file),
                "count": len(doc_file.records),
            }
            for doc_file in sorted(doc_files, key=lambda d: d.file_path)
        ]
        index_path.write_text(
            self._templates.render_index(title, entries), encoding="utf-8"
        )

        logger.info("Wrote index: %s (%d files)", index_path, len(doc_files))
        return index_path

    def _file_link(self, doc_file: DocFile) -> str:
        """Generate the output filename for a source file.

        The source extension is kept, so lib.rs and lib.swift map to
        lib.rs.md and lib.swift.md. Paths that still flatten to the same
        name get a numeric suffix. A file keeps its name for the lifetime
        of the writer.

        Args:
            doc_file: The documented file.

        Returns:
            Relative path string, also used for index links.
        """
        link = self._links.get(doc_file.file_path)
        if link is not None:
            return link

        safe_name = doc_file.file_path.replace("/", "_").replace("\\", "_")
        taken = set(self._links.values())
        link = f"{safe_name}.md"
        counter = 2
        while link in taken:
            link = f"{safe_name}-{counter}.md"
            counter += 1

        self._links[doc_file.file_path] = link
        return link
