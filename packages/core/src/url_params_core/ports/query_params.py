"""IQueryParams — protocol for records that render as a URL query string."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class IQueryParams(Protocol):
    """A record that can render itself as ``?key=value&key=value``.

    Implemented by classes decorated with ``@query_params`` and by
    ``QueryParamsModel`` subclasses in ``url_params_encoding``.
    """

    def to_query_params(self) -> str:
        """Return the query string, or ``""`` when no field is emitted."""
        ...
