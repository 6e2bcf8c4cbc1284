"""QueryParamsModel — pydantic base class for query-string records."""

from __future__ import annotations

from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict

from .assembler import RecordEncoder
from .registry import get_default_registry
from .renderers import Renderer


class QueryParamsModel(BaseModel):
    """Base class for immutable records that render as a query string.

    Every subclass is classified when the class is created, so unsupported
    fields fail at import time. ``Ref`` fields accept plain values (or
    ``None``) and wrap them.

    Custom leaf types are rendered by their ``__str__`` or by an entry in
    ``query_renderers``::

        class Search(QueryParamsModel):
            query_renderers: ClassVar[dict[type, Renderer]] = {Money: Money.fmt}

            q: str
            page: int | None = None
            max_price: Money | None = None
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    query_renderers: ClassVar[dict[type, Renderer]] = {}
    __query_encoder__: ClassVar[RecordEncoder | None] = None

    @classmethod
    def __pydantic_init_subclass__(cls, **kwargs: Any) -> None:
        super().__pydantic_init_subclass__(**kwargs)
        cls.__query_encoder__ = get_default_registry().register(
            cls, renderers=cls.query_renderers
        )

    def to_query_params(self) -> str:
        """Return ``?name=value&...`` or ``""`` when no field is emitted."""
        encoder = type(self).__query_encoder__
        if encoder is None:
            encoder = get_default_registry().encoder_for(self)
        return encoder.to_query_params(self)

    def query_pairs(self) -> list[tuple[str, str]]:
        """Return the emitted ``(key, value)`` pairs in field order."""
        encoder = type(self).__query_encoder__
        if encoder is None:
            encoder = get_default_registry().encoder_for(self)
        return encoder.to_pairs(self)
