"""Ref — explicit nullable reference for indirection fields."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Generic, TypeVar

from pydantic_core import core_schema

from ..primitives.exceptions import NullReferenceError

if TYPE_CHECKING:
    from pydantic import GetCoreSchemaHandler

T = TypeVar("T")


class Ref(Generic[T]):
    """Immutable reference to a value that may be null.

    The target may itself be a ``Ref``; a null at *any* level makes the
    whole chain null. Consumers check :attr:`is_null` (or use
    :meth:`resolve`) instead of dereferencing blindly.

    Usage::

        Ref(5).deref()            # 5
        Ref.null().is_null        # True
        Ref(Ref(None)).resolve()  # None
    """

    __slots__ = ("_target",)

    _target: T | None

    def __init__(self, target: T | None = None) -> None:
        object.__setattr__(self, "_target", target)

    def __setattr__(self, name: str, value: object) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    @classmethod
    def null(cls) -> Ref[Any]:
        """Return a null reference."""
        return cls(None)

    @classmethod
    def wrap(cls, value: Any) -> Ref[Any]:
        """Return *value* unchanged if it is a ``Ref``, else a ``Ref`` to it."""
        if isinstance(value, Ref):
            return value
        return cls(value)

    @property
    def target(self) -> T | None:
        return self._target

    @property
    def is_null(self) -> bool:
        return self._target is None

    def deref(self) -> T:
        """Return the target, raising ``NullReferenceError`` when null."""
        if self._target is None:
            raise NullReferenceError("Cannot dereference a null Ref")
        return self._target

    def resolve(self) -> Any:
        """Follow nested references; ``None`` if any level is null."""
        value: Any = self
        while isinstance(value, Ref):
            if value._target is None:
                return None
            value = value._target
        return value

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Ref):
            return NotImplemented
        return bool(self._target == other._target)

    def __hash__(self) -> int:
        return hash((Ref, self._target))

    def __reduce__(self) -> tuple[Any, ...]:
        return (type(self), (self._target,))

    def __repr__(self) -> str:
        if self._target is None:
            return "Ref.null()"
        return f"Ref({self._target!r})"

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source_type: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        # Models accept raw values (or None) for Ref fields and wrap them.
        return core_schema.no_info_plain_validator_function(
            cls.wrap,
            serialization=core_schema.plain_serializer_function_ser_schema(
                lambda ref: ref.resolve()
            ),
        )
