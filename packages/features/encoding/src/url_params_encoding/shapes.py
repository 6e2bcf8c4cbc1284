"""
Field shapes — the classified structural type of a record field.

A shape describes *how* a field is laid out (single value, optional,
sequence, tuple, nullable reference) independently of its leaf scalar
type. Shapes are built once per record type by the classifier and are
immutable afterwards.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any, Union

if TYPE_CHECKING:
    from .renderers import Renderer


class ShapeKind(str, Enum):
    """Tags of the closed shape variant."""

    SCALAR = "scalar"
    OPTIONAL = "optional"
    SEQUENCE = "sequence"
    TUPLE = "tuple"
    INDIRECTION = "indirection"
    UNSUPPORTED = "unsupported"


@dataclass(frozen=True)
class ScalarShape:
    """A single value rendered through its string-conversion capability."""

    leaf: Any
    render: Renderer = field(compare=False)

    kind = ShapeKind.SCALAR

    def describe(self) -> str:
        return getattr(self.leaf, "__qualname__", None) or repr(self.leaf)


@dataclass(frozen=True)
class OptionalShape:
    """A value that is either present or ``None``."""

    inner: FieldShape

    kind = ShapeKind.OPTIONAL

    def describe(self) -> str:
        return f"Optional[{self.inner.describe()}]"


@dataclass(frozen=True)
class SequenceShape:
    """Ordered homogeneous collection; ``fixed`` marks immutable-length ones."""

    inner: FieldShape
    fixed: bool = False

    kind = ShapeKind.SEQUENCE

    def describe(self) -> str:
        label = "FixedSequence" if self.fixed else "Sequence"
        return f"{label}[{self.inner.describe()}]"


@dataclass(frozen=True)
class TupleShape:
    """Fixed-arity heterogeneous grouping; element order is significant."""

    elements: tuple[FieldShape, ...]

    kind = ShapeKind.TUPLE

    def describe(self) -> str:
        return f"Tuple[{', '.join(e.describe() for e in self.elements)}]"


@dataclass(frozen=True)
class IndirectionShape:
    """Nullable reference (``Ref``) to another shape."""

    inner: FieldShape

    kind = ShapeKind.INDIRECTION

    def describe(self) -> str:
        return f"Ref[{self.inner.describe()}]"


@dataclass(frozen=True)
class UnsupportedShape:
    """Any annotation outside the supported set.

    Never encoded: the registry rejects it before an encoder is built.
    """

    annotation: Any
    reason: str
    missing_capability: bool = False

    kind = ShapeKind.UNSUPPORTED

    def describe(self) -> str:
        return f"Unsupported[{self.reason}]"


FieldShape = Union[
    ScalarShape,
    OptionalShape,
    SequenceShape,
    TupleShape,
    IndirectionShape,
    UnsupportedShape,
]


def strip_indirections(shape: FieldShape) -> FieldShape:
    """Return the first non-indirection shape under *shape*."""
    while isinstance(shape, IndirectionShape):
        shape = shape.inner
    return shape


def is_scalar_like(shape: FieldShape) -> bool:
    """``True`` for a scalar, optionally behind any number of ``Ref`` layers."""
    return isinstance(strip_indirections(shape), ScalarShape)
