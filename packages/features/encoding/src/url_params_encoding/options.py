"""
Output format options for query strings.

The defaults produce the canonical format ``?a=1&b=x,y``. Nothing is ever
percent-encoded; callers that need escaping should work from
``RecordEncoder.to_pairs()`` instead.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class QueryFormat:
    """
    Immutable separators used when assembling a query string.

    Attributes:
        prefix: Prepended to a non-empty query string.
        pair_separator: Between ``name=value`` segments.
        key_value_separator: Between a key and its value.
        item_separator: Between sequence/tuple element renderings.
    """

    prefix: str = "?"
    pair_separator: str = "&"
    key_value_separator: str = "="
    item_separator: str = ","

    def with_separators(
        self,
        *,
        pair_separator: str | None = None,
        item_separator: str | None = None,
    ) -> QueryFormat:
        """Return a copy with updated separators."""
        return QueryFormat(
            prefix=self.prefix,
            pair_separator=(
                pair_separator if pair_separator is not None else self.pair_separator
            ),
            key_value_separator=self.key_value_separator,
            item_separator=(
                item_separator if item_separator is not None else self.item_separator
            ),
        )


DEFAULT_FORMAT = QueryFormat()
