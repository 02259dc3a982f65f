"""Data models for parsed doc comments.

Defines the immutable records produced by the extractor: parameter
fields, the return field, one record per doc-comment block, and the
collection of records found in a single source file.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional


class LineKind(str, Enum):
    """Classification of a single line inside a doc-comment block."""

    DESCRIPTION = "description"
    PARAM = "param"
    RETURN = "return"
    UNMATCHED = "unmatched"


@dataclass(frozen=True)
class ParamField:
    """Represents one `@param` line.

    Attributes:
        name: Parameter name.
        type_alternatives: Type names, in source order. A single element
            means the parameter is not a union.
        default: Raw default literal, or None when no `=` clause was given.
        description: Trailing free text on the same line.
    """

    name: str
    type_alternatives: tuple[str, ...] = ("",)
    default: Optional[str] = None
    description: str = ""

    @property
    def is_union(self) -> bool:
        return len(self.type_alternatives) > 1

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a dictionary.

        Returns:
            Dictionary representation of this parameter.
        """
        return {
            "name": self.name,
            "type_alternatives": list(self.type_alternatives),
            "default": self.default,
            "description": self.description,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ParamField:
        """Deserialize from a dictionary.

        Args:
            data: Dictionary with parameter fields.

        Returns:
            A new ParamField instance.
        """
        return cls(
            name=data["name"],
            type_alternatives=tuple(data.get("type_alternatives") or ("",)),
            default=data.get("default"),
            description=data.get("description", ""),
        )


@dataclass(frozen=True)
class ReturnField:
    """Represents the `@return` line of a block."""

    type_name: str
    description: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {"type_name": self.type_name, "description": self.description}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ReturnField:
        return cls(
            type_name=data["type_name"],
            description=data.get("description", ""),
        )


@dataclass(frozen=True)
class DocRecord:
    """One parsed doc comment.

    Attributes:
        description: Whitespace-joined text of the lines preceding the
            first tag line.
        params: Parameter fields in source order. Duplicates are kept.
        return_field: The first `@return` field of the block, if any.
    """

    description: str = ""
    params: tuple[ParamField, ...] = ()
    return_field: Optional[ReturnField] = None

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a dictionary.

        Returns:
            Dictionary representation of this record.
        """
        return {
            "description": self.description,
            "params": [p.to_dict() for p in self.params],
            "return_field": (
                self.return_field.to_dict() if self.return_field else None
            ),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> DocRecord:
        """Deserialize from a dictionary.

        Args:
            data: Dictionary with record fields.

        Returns:
            A new DocRecord instance.
        """
        return_data = data.get("return_field")
        return cls(
            description=data.get("description", ""),
            params=tuple(ParamField.from_dict(p) for p in data.get("params", [])),
            return_field=ReturnField.from_dict(return_data) if return_data else None,
        )


@dataclass
class DocFile:
    """The doc records extracted from one source file.

    Attributes:
        file_path: Path of the source file, or "<string>" for raw text.
        records: Records in the order their blocks appear in the source.
    """

    file_path: str
    records: list[DocRecord] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "file_path": self.file_path,
            "records": [r.to_dict() for r in self.records],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> DocFile:
        return cls(
            file_path=data["file_path"],
            records=[DocRecord.from_dict(r) for r in data.get("records", [])],
        )
