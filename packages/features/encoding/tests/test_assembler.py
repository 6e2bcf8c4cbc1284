"""Tests for query assembly and output format options."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from url_params_encoding.assembler import EncodedFragment, assemble
from url_params_encoding.fields import FieldSpec
from url_params_encoding.options import DEFAULT_FORMAT, QueryFormat
from url_params_encoding.registry import compile_fields


@dataclass
class Pair:
    a: int
    b: Optional[str] = None


def test_assemble_empty() -> None:
    assert assemble([]) == ""


def test_assemble_single_and_many() -> None:
    assert assemble([EncodedFragment("a", "1")]) == "?a=1"
    assert (
        assemble([EncodedFragment("a", "1"), EncodedFragment("b", "x,y")])
        == "?a=1&b=x,y"
    )


def test_assemble_custom_format() -> None:
    fmt = QueryFormat(prefix="", pair_separator=";", key_value_separator=":")
    fragments = [EncodedFragment("a", "1"), EncodedFragment("b", "2")]
    assert assemble(fragments, fmt) == "a:1;b:2"


def test_with_separators_copies() -> None:
    fmt = DEFAULT_FORMAT.with_separators(item_separator="|")
    assert fmt.item_separator == "|"
    assert fmt.pair_separator == "&"
    assert DEFAULT_FORMAT.item_separator == ","


def test_record_encoder_fragments_and_pairs() -> None:
    encoder = compile_fields(Pair, [FieldSpec("a", int), FieldSpec("b", Optional[str])])
    record = Pair(1, "x")
    assert list(encoder.fragments(record)) == [
        EncodedFragment("a", "1"),
        EncodedFragment("b", "x"),
    ]
    assert encoder.to_pairs(record) == [("a", "1"), ("b", "x")]
    assert encoder.to_query_params(Pair(2)) == "?a=2"


def test_field_key_differs_from_attribute() -> None:
    encoder = compile_fields(Pair, [FieldSpec("alpha", int, attribute="a")])
    assert encoder.to_query_params(Pair(5)) == "?alpha=5"


def test_record_encoder_uses_its_format() -> None:
    fmt = QueryFormat(item_separator=" ")
    encoder = compile_fields(Pair, [FieldSpec("a", list[int])], fmt=fmt)
    assert encoder.fmt is fmt

    @dataclass
    class Holder:
        a: list[int]

    assert encoder.to_query_params(Holder([1, 2])) == "?a=1 2"


def test_shapes_introspection() -> None:
    encoder = compile_fields(Pair, [FieldSpec("a", int), FieldSpec("b", Optional[str])])
    assert [s.kind.value for s in encoder.shapes().values()] == ["scalar", "optional"]
