"""
String-conversion capabilities for leaf scalar values.

A *renderer* turns one leaf value into its query-string text. Built-in
renderers cover the standard scalar types; anything else needs an explicit
renderer or its own ``__str__``.
"""

from __future__ import annotations

import datetime
import uuid
from collections.abc import Callable, Mapping
from decimal import Decimal
from enum import Enum
from typing import Any

Renderer = Callable[[Any], str]


def render_bool(value: Any) -> str:
    return "true" if value else "false"


def render_isoformat(value: Any) -> str:
    return str(value.isoformat())


def render_enum(value: Any) -> str:
    """Render an enum member by its value (``Color.RED`` → ``red``)."""
    return render_value(value.value)


def render_value(value: Any) -> str:
    """Render by the runtime type of *value* (used for ``Literal`` leaves)."""
    renderer = resolve_renderer(type(value))
    if renderer is None:
        return str(value)
    return renderer(value)


DEFAULT_RENDERERS: dict[type, Renderer] = {
    bool: render_bool,
    int: str,
    float: str,
    str: str,
    Decimal: str,
    uuid.UUID: str,
    # datetime before date: datetime subclasses date
    datetime.datetime: render_isoformat,
    datetime.date: render_isoformat,
    datetime.time: render_isoformat,
    Enum: render_enum,
}


def _lookup(leaf: type, table: Mapping[type, Renderer]) -> Renderer | None:
    for klass in leaf.__mro__:
        renderer = table.get(klass)
        if renderer is not None:
            return renderer
    return None


def has_custom_str(leaf: type) -> bool:
    """``True`` when *leaf* (or a base other than ``object``) defines ``__str__``."""
    return leaf.__str__ is not object.__str__


def resolve_renderer(
    leaf: type, overrides: Mapping[type, Renderer] | None = None
) -> Renderer | None:
    """
    Find the string-conversion capability for *leaf*.

    Lookup order:
    1. *overrides* (exact type, then MRO)
    2. enum members (rendered by value, even for ``str``/``int`` mixins)
    3. built-in renderers (MRO)
    4. a ``__str__`` defined by the type itself

    Returns ``None`` when the type has no capability.
    """
    if overrides:
        renderer = _lookup(leaf, overrides)
        if renderer is not None:
            return renderer
    if issubclass(leaf, Enum):
        return render_enum
    renderer = _lookup(leaf, DEFAULT_RENDERERS)
    if renderer is not None:
        return renderer
    if has_custom_str(leaf):
        return str
    return None
