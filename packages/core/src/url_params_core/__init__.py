"""url-params-core — Foundation package for the url-params toolkit.

Exceptions, the ``Ref`` nullable reference and the ``IQueryParams`` port.
No encoding logic lives here.
"""

from __future__ import annotations

from .domain import Ref
from .ports import IQueryParams
from .primitives import (
    DuplicateRegistrationError,
    NullReferenceError,
    RecordNotRegisteredError,
    RegistrationError,
    SchemaError,
    UrlParamsError,
)

__all__ = [
    # Domain
    "Ref",
    # Ports
    "IQueryParams",
    # Exceptions
    "DuplicateRegistrationError",
    "NullReferenceError",
    "RecordNotRegisteredError",
    "RegistrationError",
    "SchemaError",
    "UrlParamsError",
]
