"""Encoding package exceptions."""

from __future__ import annotations

from typing import Any

from url_params_core.primitives.exceptions import SchemaError


def describe_annotation(annotation: Any) -> str:
    """Readable form of a type annotation for error messages."""
    if isinstance(annotation, type):
        return annotation.__qualname__
    return repr(annotation).replace("typing.", "")


class UnsupportedFieldTypeError(SchemaError):
    """Raised when a field's declared shape is outside the supported set."""

    def __init__(self, field: str, annotation: Any, reason: str) -> None:
        self.field = field
        self.annotation = annotation
        self.reason = reason
        super().__init__(
            f"The type of the field {field!r} is not supported "
            f"({describe_annotation(annotation)}): {reason}"
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "UNSUPPORTED_FIELD_TYPE",
            "field": self.field,
            "annotation": describe_annotation(self.annotation),
            "reason": self.reason,
        }


class MissingRenderCapabilityError(SchemaError):
    """Raised when a custom leaf type has no string conversion.

    Supply a renderer (``Render`` marker, ``FieldSpec.renderer`` or a
    registry renderer table) or define ``__str__`` on the type.
    """

    def __init__(self, field: str, annotation: Any, reason: str) -> None:
        self.field = field
        self.annotation = annotation
        self.reason = reason
        super().__init__(
            f"The field {field!r} has no string conversion for "
            f"{describe_annotation(annotation)}: {reason}"
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "MISSING_RENDER_CAPABILITY",
            "field": self.field,
            "annotation": describe_annotation(self.annotation),
            "reason": self.reason,
        }


class RecordSchemaError(SchemaError):
    """Raised by the registry when one or more fields of a record fail.

    Carries structured errors: ``{field: [messages]}``.
    """

    def __init__(
        self,
        record_type: type[Any],
        field_errors: list[UnsupportedFieldTypeError | MissingRenderCapabilityError],
    ) -> None:
        self.record_type = record_type
        self.field_errors = field_errors
        self.errors: dict[str, list[str]] = {}
        for err in field_errors:
            self.errors.setdefault(err.field, []).append(str(err))
        lines = [f"Cannot register {record_type.__qualname__} for query params:"]
        lines.extend(f"  • {err}" for err in field_errors)
        super().__init__("\n".join(lines))

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "RECORD_SCHEMA_ERROR",
            "record": self.record_type.__qualname__,
            "fields": [err.to_dict() for err in self.field_errors],
        }
