"""``@query_params`` — register a record class and give it ``to_query_params``."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, TypeVar, overload

from .registry import get_default_registry

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Mapping

    from .fields import FieldSpec
    from .options import QueryFormat
    from .registry import QueryParamsRegistry
    from .renderers import Renderer

T = TypeVar("T", bound=type)


@overload
def query_params(cls: T) -> T: ...


@overload
def query_params(
    cls: None = None,
    *,
    registry: QueryParamsRegistry | None = None,
    fields: Iterable[FieldSpec] | None = None,
    renderers: Mapping[type, Renderer] | None = None,
    fmt: QueryFormat | None = None,
) -> Callable[[T], T]: ...


def query_params(
    cls: T | None = None,
    *,
    registry: QueryParamsRegistry | None = None,
    fields: Iterable[FieldSpec] | None = None,
    renderers: Mapping[type, Renderer] | None = None,
    fmt: QueryFormat | None = None,
) -> Any:
    """Class decorator registering a record for query-string encoding.

    The class is classified immediately, so an unsupported field raises
    ``RecordSchemaError`` at import time rather than on first use. A
    ``to_query_params()`` method is attached unless the class defines one.

    Usage::

        @query_params
        @dataclass(frozen=True)
        class Search:
            q: str
            page: int | None = None

        Search("python").to_query_params()  # '?q=python'

        @query_params(renderers={Money: Money.format})
        @dataclass
        class Order: ...
    """

    def decorate(record_type: T) -> T:
        target = registry if registry is not None else get_default_registry()
        encoder = target.register(record_type, fields, renderers=renderers, fmt=fmt)

        if "to_query_params" not in record_type.__dict__:

            def to_query_params(self: Any) -> str:
                return encoder.to_query_params(self)

            to_query_params.__qualname__ = f"{record_type.__qualname__}.to_query_params"
            record_type.to_query_params = to_query_params  # type: ignore[attr-defined]
        record_type.__query_encoder__ = encoder  # type: ignore[attr-defined]
        return record_type

    if cls is not None:
        return decorate(cls)
    return decorate
