"""Registration and reference exceptions for url-params-core."""

from __future__ import annotations

from typing import Any


class UrlParamsError(Exception):
    """Root exception for the entire url-params toolkit."""

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": self.__class__.__name__,
            "message": str(self),
        }


class SchemaError(UrlParamsError):
    """Raised when a record's field shapes cannot be encoded.

    This is a programmer/integration error surfaced once, when the record
    type is registered. It is never raised while encoding an instance.
    """


class RegistrationError(UrlParamsError):
    """Base class for registry lookup and registration conflicts."""


class RecordNotRegisteredError(RegistrationError):
    """Raised when encoding a record whose type has no encoder table."""

    def __init__(self, record_type: type[Any]) -> None:
        self.record_type = record_type
        super().__init__(
            f"{record_type.__qualname__} is not registered for query params. "
            "Decorate it with @query_params or call registry.register()."
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "RECORD_NOT_REGISTERED",
            "record": self.record_type.__qualname__,
        }


class DuplicateRegistrationError(RegistrationError):
    """Raised when a record type is registered twice with different fields.

    Usage: QueryParamsRegistry raises this when a second, conflicting field
    table is supplied for an already registered type.
    """

    def __init__(self, record_type: type[Any]) -> None:
        self.record_type = record_type
        super().__init__(
            f"Duplicate query params registration for {record_type.__qualname__}: "
            "a different field table is already registered"
        )


class NullReferenceError(UrlParamsError):
    """Raised when dereferencing a null ``Ref``."""
