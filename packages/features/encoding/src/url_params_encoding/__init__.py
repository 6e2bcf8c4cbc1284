"""Record -> URL query string: shape classification, encoders, registry."""

from __future__ import annotations

from url_params_core import IQueryParams, Ref, SchemaError

from .assembler import CompiledField, EncodedFragment, RecordEncoder, assemble
from .classifier import classify
from .decorators import query_params
from .encoders import FieldEncoder, build_encoder
from .exceptions import (
    MissingRenderCapabilityError,
    RecordSchemaError,
    UnsupportedFieldTypeError,
)
from .fields import FieldSpec, QueryKey, Render, extract_fields
from .model import QueryParamsModel
from .options import DEFAULT_FORMAT, QueryFormat
from .registry import (
    QueryParamsRegistry,
    compile_fields,
    get_default_registry,
    set_default_registry,
    to_query_params,
)
from .renderers import DEFAULT_RENDERERS, Renderer, resolve_renderer
from .shapes import (
    FieldShape,
    IndirectionShape,
    OptionalShape,
    ScalarShape,
    SequenceShape,
    ShapeKind,
    TupleShape,
    UnsupportedShape,
)

__all__ = [
    # Public operation
    "to_query_params",
    "query_params",
    "QueryParamsModel",
    "IQueryParams",
    "Ref",
    # Registration
    "FieldSpec",
    "QueryKey",
    "Render",
    "QueryParamsRegistry",
    "extract_fields",
    "compile_fields",
    "get_default_registry",
    "set_default_registry",
    # Shapes
    "FieldShape",
    "ShapeKind",
    "ScalarShape",
    "OptionalShape",
    "SequenceShape",
    "TupleShape",
    "IndirectionShape",
    "UnsupportedShape",
    "classify",
    # Encoding
    "FieldEncoder",
    "build_encoder",
    "CompiledField",
    "EncodedFragment",
    "RecordEncoder",
    "assemble",
    "QueryFormat",
    "DEFAULT_FORMAT",
    "Renderer",
    "DEFAULT_RENDERERS",
    "resolve_renderer",
    # Exceptions
    "SchemaError",
    "RecordSchemaError",
    "UnsupportedFieldTypeError",
    "MissingRenderCapabilityError",
]
