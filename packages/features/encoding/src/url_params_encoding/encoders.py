"""
Encoder builder — FieldShape -> ``(value) -> str | None``.

Every encoder is a pure function: it returns the rendered value of a
field, or ``None`` when the field must not produce a fragment. Encoders
are built once per registered record type and shared read-only.

Suppression policy (the only one):

- a scalar rendering to ``""`` is suppressed
- an absent optional or a null reference suppresses the field
- a sequence with no surviving element is suppressed
- a tuple with a null reference at any position is suppressed
- otherwise a tuple is suppressed only if every element renders empty
"""

from __future__ import annotations

from collections.abc import Callable
from functools import singledispatch
from typing import Any

from url_params_core.domain.reference import Ref

from .exceptions import UnsupportedFieldTypeError
from .options import DEFAULT_FORMAT, QueryFormat
from .shapes import (
    FieldShape,
    IndirectionShape,
    OptionalShape,
    ScalarShape,
    SequenceShape,
    TupleShape,
    UnsupportedShape,
)

FieldEncoder = Callable[[Any], "str | None"]


def is_null(shape: FieldShape, value: Any) -> bool:
    """``True`` when *value* is absent behind the ``Ref`` layers of *shape*."""
    while isinstance(shape, IndirectionShape):
        if isinstance(value, Ref):
            value = value.target
        if value is None:
            return True
        shape = shape.inner
    return False


@singledispatch
def build_encoder(shape: Any, fmt: QueryFormat = DEFAULT_FORMAT) -> FieldEncoder:
    """Build the encoder for *shape*."""
    raise TypeError(f"Not a field shape: {shape!r}")


@build_encoder.register(UnsupportedShape)
def _unsupported(
    shape: UnsupportedShape, fmt: QueryFormat = DEFAULT_FORMAT
) -> FieldEncoder:
    raise UnsupportedFieldTypeError("<unnamed>", shape.annotation, shape.reason)


@build_encoder.register(ScalarShape)
def _scalar(shape: ScalarShape, fmt: QueryFormat = DEFAULT_FORMAT) -> FieldEncoder:
    render = shape.render

    def encode(value: Any) -> str | None:
        return render(value) or None

    return encode


@build_encoder.register(OptionalShape)
def _optional(shape: OptionalShape, fmt: QueryFormat = DEFAULT_FORMAT) -> FieldEncoder:
    inner = build_encoder(shape.inner, fmt)

    def encode(value: Any) -> str | None:
        if value is None:
            return None
        return inner(value)

    return encode


@build_encoder.register(IndirectionShape)
def _indirection(
    shape: IndirectionShape, fmt: QueryFormat = DEFAULT_FORMAT
) -> FieldEncoder:
    inner = build_encoder(shape.inner, fmt)

    def encode(value: Any) -> str | None:
        # A non-Ref value is an already dereferenced target.
        if isinstance(value, Ref):
            value = value.target
        if value is None:
            return None
        return inner(value)

    return encode


@build_encoder.register(SequenceShape)
def _sequence(shape: SequenceShape, fmt: QueryFormat = DEFAULT_FORMAT) -> FieldEncoder:
    element = build_encoder(shape.inner, fmt)
    separator = fmt.item_separator

    def encode(value: Any) -> str | None:
        if value is None:
            return None
        rendered = [r for r in map(element, value) if r]
        if not rendered:
            return None
        return separator.join(rendered)

    return encode


@build_encoder.register(TupleShape)
def _tuple(shape: TupleShape, fmt: QueryFormat = DEFAULT_FORMAT) -> FieldEncoder:
    shapes = shape.elements
    elements = tuple(build_encoder(e, fmt) for e in shapes)
    separator = fmt.item_separator

    def encode(value: Any) -> str | None:
        if value is None:
            return None
        # A null reference anywhere makes the whole tuple absent.
        if any(is_null(s, v) for s, v in zip(shapes, value, strict=True)):
            return None
        rendered = [(enc(v) or "") for enc, v in zip(elements, value, strict=True)]
        if not any(rendered):
            return None
        return separator.join(rendered)

    return encode
