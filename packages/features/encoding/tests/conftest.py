"""Shared fixtures for encoding tests."""

from __future__ import annotations

import pytest

from url_params_encoding.registry import (
    QueryParamsRegistry,
    get_default_registry,
    set_default_registry,
)


@pytest.fixture
def registry() -> QueryParamsRegistry:
    """Fresh registry, isolated from the process-wide default."""
    return QueryParamsRegistry()


@pytest.fixture
def default_registry():
    """Swap in an empty default registry for the duration of a test."""
    previous = get_default_registry()
    fresh = QueryParamsRegistry()
    set_default_registry(fresh)
    yield fresh
    set_default_registry(previous)
