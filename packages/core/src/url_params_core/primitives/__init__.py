"""Primitives: exceptions."""

from __future__ import annotations

from .exceptions import (
    DuplicateRegistrationError,
    NullReferenceError,
    RecordNotRegisteredError,
    RegistrationError,
    SchemaError,
    UrlParamsError,
)

__all__ = [
    "DuplicateRegistrationError",
    "NullReferenceError",
    "RecordNotRegisteredError",
    "RegistrationError",
    "SchemaError",
    "UrlParamsError",
]
