"""Splits source text into raw doc-comment blocks.

A block is a maximal run of consecutive lines whose stripped content
starts with the doc marker (``///`` by default). The marker and the
whitespace right after it are removed; everything else about the
source is ignored.
"""

import logging
import re

logger = logging.getLogger(__name__)

DEFAULT_MARKER = "///"

_LINE_BREAK_RE = re.compile(r"\r?\n")


def split_lines(text: str) -> list[str]:
    """Split text on "\\n" or "\\r\\n" only.

    Other characters that str.splitlines treats as breaks (form feed,
    U+2028 and the like) stay inside their line.

    Args:
        text: Text to split.

    Returns:
        The lines without terminators. A final terminator does not
        produce a trailing empty line.
    """
    lines = _LINE_BREAK_RE.split(text)
    if lines[-1] == "":
        lines.pop()
    return lines


def is_doc_line(line: str, marker: str = DEFAULT_MARKER) -> bool:
    """Check whether a line belongs to a doc-comment block.

    Args:
        line: A single source line.
        marker: The doc-comment marker token.

    Returns:
        True if the stripped line starts with the marker.
    """
    return line.strip().startswith(marker)


def segment(text: str, marker: str = DEFAULT_MARKER) -> list[str]:
    """Collect the doc-comment blocks of a source buffer.

    Blank marker lines contribute an empty line to their block. Any
    non-marker line closes the current block, so two runs separated by
    a single ordinary line yield two blocks.

    Args:
        text: Full source text, already decoded.
        marker: The doc-comment marker token.

    Returns:
        Raw blocks in source order, each line terminated by a newline.
    """
    blocks: list[str] = []
    current: list[str] = []

    for line in split_lines(text):
        if is_doc_line(line, marker):
            stripped = line.strip()
            current.append(stripped[len(marker) :].lstrip() + "\n")
        elif current:
            blocks.append("".join(current))
            current = []

    if current:
        blocks.append("".join(current))

    logger.debug("Segmented %d doc blocks", len(blocks))
    return blocks
