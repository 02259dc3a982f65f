"""JSON serialization of parsed doc comments."""

import json

from docmark.parsers.structure import DocFile


def render_json(doc_files: list[DocFile], indent: int = 2) -> str:
    """Serialize parsed files to a JSON document.

    Args:
        doc_files: Parsed files in the order they were given.
        indent: Indentation passed to json.dumps.

    Returns:
        A JSON array with one object per file.
    """
    return json.dumps([d.to_dict() for d in doc_files], indent=indent)


def load_json(payload: str) -> list[DocFile]:
    """Rebuild DocFile objects from render_json output."""
    return [DocFile.from_dict(item) for item in json.loads(payload)]
