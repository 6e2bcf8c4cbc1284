"""Tests for the shape classifier."""

from __future__ import annotations

import datetime
import uuid
from collections.abc import MutableSequence, Sequence
from decimal import Decimal
from enum import Enum
from typing import Annotated, Any, List, Literal, NamedTuple, Optional, Tuple, Union

import pytest

from url_params_core import Ref
from url_params_encoding.classifier import classify
from url_params_encoding.fields import Render
from url_params_encoding.renderers import render_bool
from url_params_encoding.shapes import (
    IndirectionShape,
    OptionalShape,
    ScalarShape,
    SequenceShape,
    ShapeKind,
    TupleShape,
    UnsupportedShape,
)


class Color(str, Enum):
    RED = "red"


class Label:
    def __init__(self, text: str) -> None:
        self.text = text

    def __str__(self) -> str:
        return self.text


class Opaque:
    pass


class Point(NamedTuple):
    x: int
    y: int


# -- Scalars ------------------------------------------------------------------


@pytest.mark.parametrize(
    "leaf",
    [int, float, bool, str, Decimal, uuid.UUID, datetime.date, datetime.datetime],
)
def test_builtin_leaves_are_scalar(leaf: type) -> None:
    shape = classify(leaf)
    assert isinstance(shape, ScalarShape)
    assert shape.kind is ShapeKind.SCALAR
    assert shape.leaf is leaf


def test_bool_uses_lowercase_renderer() -> None:
    shape = classify(bool)
    assert isinstance(shape, ScalarShape)
    assert shape.render is render_bool


def test_enum_and_custom_str_are_scalar() -> None:
    assert isinstance(classify(Color), ScalarShape)
    assert isinstance(classify(Label), ScalarShape)


def test_literal_is_scalar() -> None:
    shape = classify(Literal["asc", "desc"])
    assert isinstance(shape, ScalarShape)
    assert shape.render("asc") == "asc"


def test_custom_leaf_without_str_is_missing_capability() -> None:
    shape = classify(Opaque)
    assert isinstance(shape, UnsupportedShape)
    assert shape.missing_capability is True


def test_renderer_table_supplies_capability() -> None:
    shape = classify(Opaque, renderers={Opaque: lambda _: "opaque"})
    assert isinstance(shape, ScalarShape)
    assert shape.render(Opaque()) == "opaque"


def test_render_marker_supplies_capability() -> None:
    shape = classify(Annotated[Opaque, Render(lambda _: "x")])
    assert isinstance(shape, ScalarShape)
    assert shape.render(Opaque()) == "x"


def test_leaf_renderer_wins_over_builtins() -> None:
    shape = classify(int, leaf_renderer=lambda v: f"#{v}")
    assert isinstance(shape, ScalarShape)
    assert shape.render(3) == "#3"


# -- Optional -----------------------------------------------------------------


def test_optional_forms() -> None:
    for annotation in (Optional[int], Union[int, None], int | None):
        shape = classify(annotation)
        assert shape == OptionalShape(classify(int))


def test_optional_of_sequence_is_supported() -> None:
    shape = classify(Optional[list[int]])
    assert isinstance(shape, OptionalShape)
    assert isinstance(shape.inner, SequenceShape)


def test_nested_optional_behind_ref_is_unsupported() -> None:
    shape = classify(Optional[Ref[Optional[int]]])
    assert isinstance(shape, UnsupportedShape)
    assert "nested optionals" in shape.reason


def test_multi_member_unions_are_unsupported() -> None:
    assert isinstance(classify(int | str), UnsupportedShape)
    assert isinstance(classify(int | str | None), UnsupportedShape)


# -- Sequences ----------------------------------------------------------------


def test_variable_sequences() -> None:
    for annotation in (list[int], List[int], Sequence[int], MutableSequence[int]):
        shape = classify(annotation)
        assert isinstance(shape, SequenceShape)
        assert shape.fixed is False


def test_homogeneous_tuple_is_fixed_sequence() -> None:
    shape = classify(tuple[str, ...])
    assert isinstance(shape, SequenceShape)
    assert shape.fixed is True


def test_sequence_of_refs_and_optionals() -> None:
    assert isinstance(classify(list[Ref[int]]), SequenceShape)
    assert isinstance(classify(list[Optional[int]]), SequenceShape)
    assert isinstance(classify(list[Ref[Optional[int]]]), SequenceShape)


@pytest.mark.parametrize(
    "annotation",
    [list[list[int]], list[tuple[int, str]], list[Optional[list[int]]], list, List],
)
def test_unsupported_sequences(annotation: Any) -> None:
    assert isinstance(classify(annotation), UnsupportedShape)


# -- Tuples -------------------------------------------------------------------


def test_heterogeneous_tuple() -> None:
    shape = classify(tuple[int, bool, Ref[str]])
    assert isinstance(shape, TupleShape)
    assert [e.kind for e in shape.elements] == [
        ShapeKind.SCALAR,
        ShapeKind.SCALAR,
        ShapeKind.INDIRECTION,
    ]


def test_namedtuple_is_tuple() -> None:
    shape = classify(Point)
    assert shape == TupleShape((classify(int), classify(int)))


def test_namedtuple_with_renderer_is_scalar() -> None:
    shape = classify(Point, renderers={Point: lambda p: f"{p.x}:{p.y}"})
    assert isinstance(shape, ScalarShape)


@pytest.mark.parametrize(
    "annotation",
    [tuple[int, Optional[int]], tuple[int, list[int]], Tuple],
)
def test_unsupported_tuples(annotation: Any) -> None:
    assert isinstance(classify(annotation), UnsupportedShape)


# -- Indirection --------------------------------------------------------------


def test_nested_refs() -> None:
    shape = classify(Ref[Ref[int]])
    assert shape == IndirectionShape(IndirectionShape(classify(int)))
    assert shape.describe() == "Ref[Ref[int]]"


def test_ref_to_containers() -> None:
    cases = [
        (Ref[list[int]], SequenceShape),
        (Ref[tuple[int]], TupleShape),
        (Ref[Optional[int]], OptionalShape),
    ]
    for annotation, expected in cases:
        shape = classify(annotation)
        assert isinstance(shape, IndirectionShape)
        assert isinstance(shape.inner, expected)


def test_bare_ref_is_unsupported() -> None:
    assert isinstance(classify(Ref), UnsupportedShape)


# -- Everything else ----------------------------------------------------------


@pytest.mark.parametrize(
    "annotation",
    [dict[str, int], set[int], frozenset[int], Any, object, None, bytes, "int"],
)
def test_other_annotations_are_unsupported(annotation: Any) -> None:
    shape = classify(annotation)
    assert isinstance(shape, UnsupportedShape)
    assert shape.kind is ShapeKind.UNSUPPORTED


def test_classification_is_pure() -> None:
    assert classify(list[Optional[int]]) == classify(list[Optional[int]])
