from __future__ import annotations

from typing import TYPE_CHECKING, List, Optional

if TYPE_CHECKING:
    from form_schema_engine.validation import SchemaIssue


class FormEngineError(Exception):
    """Base class for errors raised by the form schema engine."""


class SchemaImportError(FormEngineError):
    """
    Raised when an imported schema cannot be used.

    The caller's data is left untouched; `issues` lists the invariant
    violations that caused the rejection (empty for format errors).
    """

    def __init__(self, message: str, issues: Optional[List["SchemaIssue"]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.issues = list(issues or [])


class UnknownFieldTypeError(FormEngineError, ValueError):
    def __init__(self, field_type: str) -> None:
        super().__init__(f"Unknown field type: {field_type!r}")
        self.field_type = field_type


class NestedGroupError(FormEngineError, ValueError):
    """Groups may only contain leaf fields."""


class FieldNotFoundError(FormEngineError, KeyError):
    def __init__(self, field_id: str) -> None:
        super().__init__(field_id)
        self.field_id = field_id

    def __str__(self) -> str:
        return f"Field not found: {self.field_id!r}"


class InvalidDefaultValueError(FormEngineError, ValueError):
    """A default value must reference an option with a non-empty value."""
