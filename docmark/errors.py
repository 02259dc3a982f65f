"""Exception types raised by docmark."""


class DocmarkError(Exception):
    """Base class for all docmark errors."""


class ConfigError(DocmarkError):
    """Raised when a configuration value is invalid."""


class RenderError(DocmarkError):
    """Raised when a record cannot be rendered."""


class MissingSeparatorError(RenderError):
    """Raised when a description has no title separator.

    Attributes:
        description: The description that could not be split.
        separator: The separator that was expected.
    """

    def __init__(self, description: str, separator: str) -> None:
        self.description = description
        self.separator = separator
        preview = description if len(description) <= 60 else description[:57] + "..."
        super().__init__(
            f"Description has no title separator {separator!r}: {preview!r}"
        )
