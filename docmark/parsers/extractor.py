"""Structured extraction of doc-comment blocks.

Turns one raw block (as produced by the segmenter) into a DocRecord.
Each line is classified once, in a single forward pass:

- lines before the first tag line form the description,
- ``@param <name> <type-expr> [= <default>] <description>`` lines become
  ParamFields,
- the first ``@return <type> <description>`` line becomes the ReturnField,
- everything else is dropped without error.
"""

import logging
import re
from pathlib import Path
from typing import Optional

from docmark.parsers.segmenter import DEFAULT_MARKER, segment, split_lines
from docmark.parsers.structure import (
    DocFile,
    DocRecord,
    LineKind,
    ParamField,
    ReturnField,
)

logger = logging.getLogger(__name__)

DEFAULT_TAG_MARKER = "@"


def _param_pattern(tag_marker: str) -> re.Pattern[str]:
    return re.compile(
        rf"^{re.escape(tag_marker)}param\s+(?P<name>\w+)\s+"
        r"(?P<type>\[[^\]]*\]|\S+)"
        r"(?:\s*=\s*(?P<default>\S+))?"
        r"\s*(?P<description>.*)$"
    )


def _return_pattern(tag_marker: str) -> re.Pattern[str]:
    # No union syntax here: the type is always a single token.
    return re.compile(
        rf"^{re.escape(tag_marker)}return\s+(?P<type>\S+)\s*(?P<description>.*)$"
    )


_PARAM_RE = _param_pattern(DEFAULT_TAG_MARKER)
_RETURN_RE = _return_pattern(DEFAULT_TAG_MARKER)


def parse_type_expr(expr: str) -> tuple[str, ...]:
    """Parse a parameter type expression.

    A bracketed expression is a union whose alternatives are separated
    by ``|``. Alternatives are trimmed but never filtered, so ``[int | ]``
    keeps an empty second alternative.

    Args:
        expr: A single type token or a bracketed union.

    Returns:
        The type alternatives in source order; never empty.
    """
    if expr.startswith("[") and expr.endswith("]"):
        return tuple(alt.strip() for alt in expr[1:-1].split("|"))
    return (expr,)


def classify_line(
    line: str,
    seen_tag: bool = False,
    tag_marker: str = DEFAULT_TAG_MARKER,
) -> tuple[LineKind, Optional[re.Match[str]]]:
    """Classify one block line.

    Args:
        line: The line, with or without surrounding whitespace.
        seen_tag: Whether a tag line has already occurred in the block.
        tag_marker: Character that introduces a tag line.

    Returns:
        A (kind, match) pair. ``match`` is set for PARAM and RETURN lines.
    """
    stripped = line.strip()
    if not stripped.startswith(tag_marker):
        return (LineKind.UNMATCHED if seen_tag else LineKind.DESCRIPTION), None

    if tag_marker == DEFAULT_TAG_MARKER:
        param_re, return_re = _PARAM_RE, _RETURN_RE
    else:
        param_re, return_re = _param_pattern(tag_marker), _return_pattern(tag_marker)

    match = param_re.match(stripped)
    if match:
        return LineKind.PARAM, match
    match = return_re.match(stripped)
    if match:
        return LineKind.RETURN, match
    return LineKind.UNMATCHED, None


def extract(raw_block: str, tag_marker: str = DEFAULT_TAG_MARKER) -> DocRecord:
    """Extract a DocRecord from one raw doc-comment block.

    Args:
        raw_block: Block text with the comment markers already removed.
        tag_marker: Character that introduces a tag line.

    Returns:
        The parsed record. Malformed tag lines and stray text after the
        first tag are silently dropped.
    """
    description_lines: list[str] = []
    params: list[ParamField] = []
    return_field: Optional[ReturnField] = None
    seen_tag = False

    for line in split_lines(raw_block):
        kind, match = classify_line(line, seen_tag, tag_marker)

        if kind is LineKind.DESCRIPTION:
            description_lines.append(line.strip())
            continue

        seen_tag = True
        if kind is LineKind.PARAM:
            params.append(
                ParamField(
                    name=match.group("name"),
                    type_alternatives=parse_type_expr(match.group("type")),
                    default=match.group("default"),
                    description=match.group("description").strip(),
                )
            )
        elif kind is LineKind.RETURN and return_field is None:
            return_field = ReturnField(
                type_name=match.group("type"),
                description=match.group("description").strip(),
            )

    return DocRecord(
        description=" ".join(description_lines).strip(),
        params=tuple(params),
        return_field=return_field,
    )


class DocCommentParser:
    """Parses doc comments out of source text.

    Combines the segmenter and the extractor. File reading is the only
    I/O, and it happens in parse_file.
    """

    def __init__(
        self,
        marker: str = DEFAULT_MARKER,
        tag_marker: str = DEFAULT_TAG_MARKER,
        encoding: str = "utf-8",
    ) -> None:
        """Initialize the parser.

        Args:
            marker: Token that starts a doc-comment line.
            tag_marker: Character that introduces a tag line.
            encoding: Encoding used when reading files.
        """
        self.marker = marker
        self.tag_marker = tag_marker
        self.encoding = encoding

    def parse_file(self, file_path: str) -> DocFile:
        """Parse a source file and extract its doc comments.

        Args:
            file_path: Path to the source file.

        Returns:
            A DocFile holding one record per doc-comment block.

        Raises:
            FileNotFoundError: If the file does not exist.
            UnicodeDecodeError: If the file is not valid in the configured
                encoding.
        """
        path = Path(file_path)
        if not path.exists():
            raise FileNotFoundError(f"File not found: {file_path}")

        source = path.read_text(encoding=self.encoding)
        return self.parse_source(source, file_path)

    def parse_source(self, source: str, file_path: str = "<string>") -> DocFile:
        """Parse a source string and extract its doc comments.

        Args:
            source: Full source text.
            file_path: Optional file path for reference.

        Returns:
            A DocFile holding one record per doc-comment block.
        """
        records = [
            extract(block, self.tag_marker) for block in segment(source, self.marker)
        ]
        logger.debug("Parsed %s: %d doc records", file_path, len(records))
        return DocFile(file_path=file_path, records=records)
