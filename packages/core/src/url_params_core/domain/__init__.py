"""Domain primitives: nullable references."""

from __future__ import annotations

from .reference import Ref

__all__: list[str] = ["Ref"]
