"""QueryParamsRegistry — explicit table of record type -> encoder."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from url_params_core.primitives.exceptions import (
    DuplicateRegistrationError,
    RecordNotRegisteredError,
)

from .assembler import CompiledField, RecordEncoder
from .classifier import classify, log_shape
from .encoders import build_encoder
from .exceptions import (
    MissingRenderCapabilityError,
    RecordSchemaError,
    UnsupportedFieldTypeError,
)
from .fields import FieldSpec, extract_fields
from .options import DEFAULT_FORMAT, QueryFormat
from .shapes import UnsupportedShape

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from .assembler import EncodedFragment
    from .renderers import Renderer

logger = logging.getLogger("url_params.registry")


def compile_fields(
    record_type: type[Any],
    specs: Iterable[FieldSpec],
    *,
    renderers: Mapping[type, Renderer] | None = None,
    fmt: QueryFormat = DEFAULT_FORMAT,
) -> RecordEncoder:
    """
    Classify every field of *record_type* and build its encoder table.

    Raises:
        RecordSchemaError: If any field is unsupported; lists all of them.
    """
    compiled: list[CompiledField] = []
    failures: list[UnsupportedFieldTypeError | MissingRenderCapabilityError] = []
    for spec in specs:
        shape = classify(
            spec.annotation, renderers=renderers, leaf_renderer=spec.renderer
        )
        log_shape(record_type.__qualname__, spec.name, shape)
        if isinstance(shape, UnsupportedShape):
            error_cls = (
                MissingRenderCapabilityError
                if shape.missing_capability
                else UnsupportedFieldTypeError
            )
            failures.append(error_cls(spec.name, spec.annotation, shape.reason))
            continue
        compiled.append(CompiledField(spec, shape, build_encoder(shape, fmt)))
    if failures:
        raise RecordSchemaError(record_type, failures)
    return RecordEncoder(record_type, tuple(compiled), fmt)


class QueryParamsRegistry:
    """Declarative store of record types and their compiled encoders.

    Registration is the one-time setup step: it classifies every field and
    fails loudly (``RecordSchemaError``) before any encoding can happen.
    After startup the table is only read, so it can be shared by any number
    of threads.

    **Conflict detection:** registering the same type again with an
    identical field table, renderer table and format returns the existing
    encoder; any difference raises ``DuplicateRegistrationError``.

    Usage::

        registry = QueryParamsRegistry()
        registry.register(SearchParams)
        registry.to_query_params(SearchParams(q="python", page=2))
        # '?q=python&page=2'
    """

    def __init__(self, *, fmt: QueryFormat = DEFAULT_FORMAT) -> None:
        self._encoders: dict[type[Any], RecordEncoder] = {}
        self._renderers: dict[type[Any], dict[type, Renderer]] = {}
        self._fmt = fmt

    # ── Registration ─────────────────────────────────────────────

    def register(
        self,
        record_type: type[Any],
        fields: Iterable[FieldSpec] | None = None,
        *,
        renderers: Mapping[type, Renderer] | None = None,
        fmt: QueryFormat | None = None,
    ) -> RecordEncoder:
        """Register *record_type* and return its encoder.

        Parameters
        ----------
        record_type:
            The record class.
        fields:
            Explicit field specs; extracted from the class when omitted.
        renderers:
            String conversions for custom leaf types.
        fmt:
            Output separators; defaults to the registry's format.
        """
        specs = tuple(fields) if fields is not None else extract_fields(record_type)
        encoder = compile_fields(
            record_type, specs, renderers=renderers, fmt=fmt or self._fmt
        )
        table = dict(renderers or {})
        existing = self._encoders.get(record_type)
        if existing is not None:
            if (
                existing.field_specs == encoder.field_specs
                and existing.fmt == encoder.fmt
                and self._renderers[record_type] == table
            ):
                return existing
            raise DuplicateRegistrationError(record_type)
        self._encoders[record_type] = encoder
        self._renderers[record_type] = table
        logger.debug(
            "Registered query params for %s (%d fields)",
            record_type.__qualname__,
            len(encoder.fields),
        )
        return encoder

    def unregister(self, record_type: type[Any]) -> None:
        """Remove *record_type* (no-op when absent)."""
        self._encoders.pop(record_type, None)
        self._renderers.pop(record_type, None)

    # ── Lookup ───────────────────────────────────────────────────

    def get(self, record_type: type[Any]) -> RecordEncoder | None:
        return self._encoders.get(record_type)

    def has(self, record_type: type[Any]) -> bool:
        """Return ``True`` if *record_type* is registered."""
        return record_type in self._encoders

    def encoder_for(self, record: Any) -> RecordEncoder:
        """Return the encoder of ``type(record)`` or raise."""
        encoder = self._encoders.get(type(record))
        if encoder is None:
            raise RecordNotRegisteredError(type(record))
        return encoder

    # ── Encoding ─────────────────────────────────────────────────

    def to_query_params(self, record: Any) -> str:
        return self.encoder_for(record).to_query_params(record)

    def fragments(self, record: Any) -> list[EncodedFragment]:
        return list(self.encoder_for(record).fragments(record))

    # ── Introspection ───────────────────────────────────────────

    def list_registered(self) -> list[str]:
        """Return all registered record type names."""
        return [t.__qualname__ for t in self._encoders]

    def clear(self) -> None:
        """Remove all registrations (testing utility)."""
        self._encoders.clear()
        self._renderers.clear()


_default_registry = QueryParamsRegistry()


def get_default_registry() -> QueryParamsRegistry:
    """Return the process-wide registry used by decorators and models."""
    return _default_registry


def set_default_registry(registry: QueryParamsRegistry) -> None:
    """Replace the process-wide registry (tests, isolated applications)."""
    global _default_registry
    _default_registry = registry


def to_query_params(record: Any, registry: QueryParamsRegistry | None = None) -> str:
    """Render *record* through *registry* (the default one when omitted)."""
    if registry is None:
        registry = get_default_registry()
    return registry.to_query_params(record)
