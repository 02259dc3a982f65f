"""docmark.

Extracts /// doc comments with @param and @return fields from source
text and renders them as Markdown.
"""

__version__ = "0.1.0"
