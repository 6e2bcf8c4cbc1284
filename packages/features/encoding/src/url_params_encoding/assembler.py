"""Query assembler — record -> ``?name=value&name=value``."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, NamedTuple

from .options import DEFAULT_FORMAT, QueryFormat

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

    from .encoders import FieldEncoder
    from .fields import FieldSpec
    from .shapes import FieldShape


class EncodedFragment(NamedTuple):
    """One ``name=value`` pair produced by a field encoder."""

    key: str
    value: str


@dataclass(frozen=True)
class CompiledField:
    """A registered field: its spec, classified shape and encoder."""

    spec: FieldSpec
    shape: FieldShape
    encode: FieldEncoder

    @property
    def name(self) -> str:
        return self.spec.name

    def fragment(self, record: Any) -> EncodedFragment | None:
        value = self.encode(getattr(record, self.spec.source))
        if value is None:
            return None
        return EncodedFragment(self.spec.name, value)


def assemble(
    fragments: Iterable[EncodedFragment], fmt: QueryFormat = DEFAULT_FORMAT
) -> str:
    """Join *fragments* into a query string; ``""`` when there are none."""
    query = fmt.pair_separator.join(
        f"{key}{fmt.key_value_separator}{value}" for key, value in fragments
    )
    if not query:
        return ""
    return fmt.prefix + query


@dataclass(frozen=True)
class RecordEncoder:
    """
    Immutable encoder table of one record type.

    Built once at registration; safe to share across threads. Encoding only
    reads the record. A tuple value whose length differs from its declared
    arity raises ``ValueError``.
    """

    record_type: type[Any]
    fields: tuple[CompiledField, ...]
    fmt: QueryFormat = DEFAULT_FORMAT

    @property
    def field_specs(self) -> tuple[FieldSpec, ...]:
        return tuple(f.spec for f in self.fields)

    def shapes(self) -> dict[str, FieldShape]:
        """Return ``{key: shape}`` in declaration order (introspection)."""
        return {f.name: f.shape for f in self.fields}

    def fragments(self, record: Any) -> Iterator[EncodedFragment]:
        """Yield the fragments of *record* in declared field order."""
        for compiled in self.fields:
            fragment = compiled.fragment(record)
            if fragment is not None:
                yield fragment

    def to_pairs(self, record: Any) -> list[tuple[str, str]]:
        """Return ``[(key, value), ...]`` for HTTP clients that escape params."""
        return [(f.key, f.value) for f in self.fragments(record)]

    def to_query_params(self, record: Any) -> str:
        return assemble(self.fragments(record), self.fmt)
