"""
Field specifications — the registration input for a record type.

A ``FieldSpec`` is the ``(name, annotation, renderer)`` triple the engine
needs per field. ``extract_fields`` derives them, in declaration order,
from dataclasses, pydantic models, ``NamedTuple`` classes and plain
annotated classes.
"""

from __future__ import annotations

import dataclasses
import inspect
import logging
import sys
from dataclasses import dataclass
from typing import Annotated, Any, ClassVar, get_args, get_origin, get_type_hints

from pydantic import BaseModel

from .renderers import Renderer

logger = logging.getLogger("url_params.fields")


@dataclass(frozen=True)
class QueryKey:
    """``Annotated`` marker overriding the query key of a field.

    Usage::

        page_size: Annotated[int, QueryKey("page-size")]
    """

    name: str


@dataclass(frozen=True)
class Render:
    """``Annotated`` marker supplying the string conversion of a leaf.

    Usage::

        price: Annotated[Money, Render(lambda m: f"{m.amount}{m.currency}")]
    """

    func: Renderer


@dataclass(frozen=True)
class FieldSpec:
    """
    One field of a record as seen by the encoder.

    Attributes:
        name: Query key, emitted verbatim.
        annotation: Declared type of the field.
        attribute: Attribute read from the record (defaults to ``name``).
        renderer: String conversion for the leaf scalar, when custom.
    """

    name: str
    annotation: Any
    attribute: str | None = None
    renderer: Renderer | None = None

    @property
    def source(self) -> str:
        return self.attribute or self.name


def _query_key(annotation: Any) -> str | None:
    if get_origin(annotation) is not Annotated:
        return None
    for meta in annotation.__metadata__:
        if isinstance(meta, QueryKey):
            return meta.name
    return None


def _spec(attribute: str, annotation: Any, alias: str | None = None) -> FieldSpec:
    key = _query_key(annotation) or alias or attribute
    return FieldSpec(name=key, annotation=annotation, attribute=attribute)


def _is_classvar(annotation: Any) -> bool:
    if get_origin(annotation) is Annotated:
        annotation = get_args(annotation)[0]
    return annotation is ClassVar or get_origin(annotation) is ClassVar


def _model_fields(model: type[BaseModel]) -> tuple[FieldSpec, ...]:
    specs = []
    for attribute, info in model.model_fields.items():
        if info.exclude:
            continue
        annotation = info.annotation
        if info.metadata:
            # pydantic moves Annotated extras into FieldInfo.metadata
            annotation = Annotated[(annotation, *info.metadata)]
        alias = info.serialization_alias or info.alias
        specs.append(_spec(attribute, annotation, alias))
    return tuple(specs)


def _evaluate(
    annotation: Any, globalns: dict[str, Any], localns: dict[str, Any]
) -> Any:
    if not isinstance(annotation, str):
        return annotation
    try:
        return eval(annotation, globalns, localns)
    except NameError:
        return annotation


def resolve_hints(record_type: type[Any]) -> dict[str, Any]:
    """
    Resolve the annotations of *record_type*, base classes first.

    An annotation naming something that cannot be found is kept as its raw
    string, so classification reports it against that one field instead of
    failing the whole record with a ``NameError``.
    """
    try:
        return get_type_hints(record_type, include_extras=True)
    except NameError as exc:
        logger.debug("Unresolved annotations on %s: %s", record_type.__qualname__, exc)
    module = sys.modules.get(record_type.__module__)
    globalns = dict(vars(module)) if module is not None else {}
    hints: dict[str, Any] = {}
    for klass in reversed(record_type.__mro__):
        localns = dict(vars(klass))
        for name, annotation in inspect.get_annotations(klass).items():
            hints[name] = _evaluate(annotation, globalns, localns)
    return hints


def _dataclass_fields(record_type: type[Any]) -> tuple[FieldSpec, ...]:
    hints = resolve_hints(record_type)
    return tuple(
        _spec(f.name, hints.get(f.name, f.type))
        for f in dataclasses.fields(record_type)
    )


def _namedtuple_fields(record_type: type[Any]) -> tuple[FieldSpec, ...]:
    hints = resolve_hints(record_type)
    return tuple(_spec(name, hints.get(name, Any)) for name in record_type._fields)


def _annotated_fields(record_type: type[Any]) -> tuple[FieldSpec, ...]:
    hints = resolve_hints(record_type)
    return tuple(
        _spec(name, annotation)
        for name, annotation in hints.items()
        if not _is_classvar(annotation)
    )


def is_namedtuple_type(obj: Any) -> bool:
    return isinstance(obj, type) and issubclass(obj, tuple) and hasattr(obj, "_fields")


def extract_fields(record_type: type[Any]) -> tuple[FieldSpec, ...]:
    """
    Derive field specs from *record_type* in declaration order.

    Supports:
    - pydantic models (``serialization_alias``/``alias`` become the key,
      ``Field(exclude=True)`` fields are skipped)
    - dataclasses
    - ``NamedTuple`` classes
    - plain classes with annotations (``ClassVar`` entries are skipped)

    A ``QueryKey`` marker always wins over the attribute name or alias.
    """
    if issubclass(record_type, BaseModel):
        specs = _model_fields(record_type)
    elif dataclasses.is_dataclass(record_type):
        specs = _dataclass_fields(record_type)
    elif is_namedtuple_type(record_type):
        specs = _namedtuple_fields(record_type)
    else:
        specs = _annotated_fields(record_type)
    logger.debug(
        "Extracted %d fields from %s: %s",
        len(specs),
        record_type.__qualname__,
        [s.name for s in specs],
    )
    return specs
