"""
Shape classifier — annotation -> FieldShape.

Classification is a pure function of the declared annotation; it never
looks at runtime values. Failures are returned as ``UnsupportedShape`` so
the registry can report every offending field of a record at once.
"""

from __future__ import annotations

import collections.abc
import logging
import types
from typing import (
    TYPE_CHECKING,
    Annotated,
    Any,
    ForwardRef,
    Literal,
    Tuple,
    TypeVar,
    Union,
    get_args,
    get_origin,
)

from url_params_core.domain.reference import Ref

from .fields import Render, is_namedtuple_type, resolve_hints
from .renderers import render_value, resolve_renderer
from .shapes import (
    FieldShape,
    IndirectionShape,
    OptionalShape,
    ScalarShape,
    SequenceShape,
    TupleShape,
    UnsupportedShape,
    is_scalar_like,
    strip_indirections,
)

if TYPE_CHECKING:
    from collections.abc import Mapping

    from .renderers import Renderer

logger = logging.getLogger("url_params.classifier")

_NONE_TYPE = type(None)

_UNION_ORIGINS: tuple[Any, ...] = (Union, types.UnionType)

_SEQUENCE_ORIGINS: tuple[Any, ...] = (
    list,
    collections.abc.Sequence,
    collections.abc.MutableSequence,
)

# Types with no canonical text rendering even though they define __str__
_REJECTED_LEAVES: tuple[type, ...] = (bytes, bytearray, memoryview)


def classify(
    annotation: Any,
    *,
    renderers: Mapping[type, Renderer] | None = None,
    leaf_renderer: Renderer | None = None,
) -> FieldShape:
    """
    Resolve *annotation* to a tagged shape.

    Args:
        annotation: The declared type of a field.
        renderers: Per-type string conversions that override the built-ins.
        leaf_renderer: String conversion for the leaf of this field; wins
            over every other lookup.

    Returns:
        A ``FieldShape``; ``UnsupportedShape`` when the annotation cannot
        be encoded.
    """
    return _Classifier(renderers, leaf_renderer).classify(annotation)


class _Classifier:
    def __init__(
        self,
        renderers: Mapping[type, Renderer] | None,
        leaf_renderer: Renderer | None,
    ) -> None:
        self._renderers = renderers
        self._leaf_renderer = leaf_renderer

    def classify(self, annotation: Any) -> FieldShape:
        origin = get_origin(annotation)

        if origin is Annotated:
            return self._classify_annotated(annotation)
        if origin in _UNION_ORIGINS:
            return self._classify_union(annotation)
        if origin is Ref:
            return self._classify_ref(annotation)
        if annotation is Ref:
            return UnsupportedShape(annotation, "Ref needs a target type")
        if origin is tuple:
            return self._classify_tuple_alias(annotation)
        if origin in _SEQUENCE_ORIGINS:
            return self._classify_sequence(annotation, fixed=False)
        if origin is Literal:
            return ScalarShape(annotation, self._leaf_renderer or render_value)
        if origin is not None:
            return UnsupportedShape(
                annotation, f"{origin!r} is not an encodable container"
            )
        return self._classify_leaf(annotation)

    # ── Wrappers ─────────────────────────────────────────────────

    def _classify_annotated(self, annotation: Any) -> FieldShape:
        inner, *metadata = get_args(annotation)
        for meta in metadata:
            if isinstance(meta, Render):
                return _Classifier(self._renderers, meta.func).classify(inner)
        return self.classify(inner)

    def _classify_union(self, annotation: Any) -> FieldShape:
        args = get_args(annotation)
        members = [a for a in args if a is not _NONE_TYPE]
        if len(members) == len(args):
            return UnsupportedShape(annotation, "unions are only supported with None")
        if len(members) != 1:
            return UnsupportedShape(
                annotation, "optional of a union of several types is ambiguous"
            )
        inner = self.classify(members[0])
        if isinstance(inner, UnsupportedShape):
            return inner
        if isinstance(strip_indirections(inner), OptionalShape):
            return UnsupportedShape(
                annotation, "nested optionals have ambiguous absence semantics"
            )
        return OptionalShape(inner)

    def _classify_ref(self, annotation: Any) -> FieldShape:
        args = get_args(annotation)
        if len(args) != 1:
            return UnsupportedShape(annotation, "Ref takes exactly one target type")
        inner = self.classify(args[0])
        if isinstance(inner, UnsupportedShape):
            return inner
        return IndirectionShape(inner)

    # ── Collections ──────────────────────────────────────────────

    def _classify_tuple_alias(self, annotation: Any) -> FieldShape:
        if annotation is Tuple:
            return UnsupportedShape(annotation, "tuple element types are unknown")
        args = get_args(annotation)
        if len(args) == 2 and args[1] is Ellipsis:
            return self._classify_sequence(annotation, fixed=True)
        if args == ((),):
            # tuple[()] on interpreters that keep the empty-tuple marker
            return TupleShape(())
        return self._classify_tuple(annotation, args)

    def _classify_sequence(self, annotation: Any, *, fixed: bool) -> FieldShape:
        args = get_args(annotation)
        if not args:
            return UnsupportedShape(annotation, "sequence element type is unknown")
        element = self.classify(args[0])
        if isinstance(element, UnsupportedShape):
            return element
        if is_scalar_like(element):
            return SequenceShape(element, fixed=fixed)
        base = strip_indirections(element)
        if isinstance(base, OptionalShape) and is_scalar_like(base.inner):
            return SequenceShape(element, fixed=fixed)
        return UnsupportedShape(
            annotation,
            f"sequence elements must be scalars or optional scalars, "
            f"got {element.describe()}",
        )

    def _classify_tuple(self, annotation: Any, args: tuple[Any, ...]) -> FieldShape:
        elements = []
        for arg in args:
            element = self.classify(arg)
            if isinstance(element, UnsupportedShape):
                return element
            if not is_scalar_like(element):
                return UnsupportedShape(
                    annotation,
                    f"tuple elements must be scalars, got {element.describe()}",
                )
            elements.append(element)
        return TupleShape(tuple(elements))

    def _classify_namedtuple(self, annotation: type[Any]) -> FieldShape:
        hints = resolve_hints(annotation)
        args = tuple(hints.get(name, Any) for name in annotation._fields)
        return self._classify_tuple(annotation, args)

    # ── Leaves ───────────────────────────────────────────────────

    def _classify_leaf(self, annotation: Any) -> FieldShape:
        if annotation is None or annotation is _NONE_TYPE:
            return UnsupportedShape(annotation, "a field cannot always be None")
        if isinstance(annotation, (str, ForwardRef)):
            return UnsupportedShape(annotation, "unresolved forward reference")
        if annotation is Any or isinstance(annotation, TypeVar):
            return UnsupportedShape(annotation, "the leaf type is not concrete")
        if not isinstance(annotation, type):
            return UnsupportedShape(annotation, "not a type")
        if self._leaf_renderer is not None:
            return ScalarShape(annotation, self._leaf_renderer)
        if is_namedtuple_type(annotation) and not self._has_override(annotation):
            return self._classify_namedtuple(annotation)
        if issubclass(annotation, _REJECTED_LEAVES):
            return UnsupportedShape(
                annotation, "binary data has no query-string rendering"
            )
        if annotation in (list, tuple, dict, set, frozenset, object):
            return UnsupportedShape(
                annotation, f"{annotation.__name__} has no encodable shape"
            )
        renderer = resolve_renderer(annotation, self._renderers)
        if renderer is None:
            return UnsupportedShape(
                annotation,
                "the type defines no __str__ and no renderer was registered",
                missing_capability=True,
            )
        return ScalarShape(annotation, renderer)

    def _has_override(self, annotation: type[Any]) -> bool:
        if not self._renderers:
            return False
        return any(
            klass in self._renderers
            for klass in annotation.__mro__
            if klass is not tuple and klass is not object
        )


def log_shape(record: str, field: str, shape: FieldShape) -> None:
    logger.debug("Classified %s.%s as %s", record, field, shape.describe())
