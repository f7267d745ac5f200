"""Tests for property tables and value coercion."""

from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

import pytest
from attrs import define, field

from conftest import PropertyPoolFactory, SamplePoolFactory
from dynoconf.core.properties import coerce, is_general_type, property_table, string_form


def test_table_derives_lower_camel_names_from_public_fields() -> None:
    table = property_table(SamplePoolFactory)

    assert list(table)[:7] == [
        "url",
        "size",
        "maxLifetime",
        "autoCommit",
        "loginTimeout",
        "schemas",
        "options",
    ]
    assert "initialized" not in table
    assert "_initialized" not in table


def test_table_is_built_once_per_type() -> None:
    assert property_table(SamplePoolFactory) is property_table(SamplePoolFactory)


def test_extractable_follows_general_type_whitelist() -> None:
    table = property_table(SamplePoolFactory)

    assert table["size"].extractable
    assert table["autoCommit"].extractable
    assert table["schemas"].extractable
    assert not table["options"].extractable
    assert not table["logger"].extractable
    assert not table["logger"].writable


def test_table_includes_annotated_properties() -> None:
    table = property_table(PropertyPoolFactory)

    assert table["maxIdle"].writable
    assert table["maxIdle"].value_type is int
    assert not table["driver"].writable


def test_frozen_attrs_fields_are_read_only() -> None:
    @define(frozen=True)
    class FrozenFactory:
        size: int = field(default=1)

    assert not property_table(FrozenFactory)["size"].writable


@pytest.mark.parametrize(
    "value_type",
    [bool, int, str, Optional[str], List[str], Tuple[str, ...], Sequence[int], list],
)
def test_general_types(value_type) -> None:
    assert is_general_type(value_type)


@pytest.mark.parametrize("value_type", [float, dict, object, Optional[dict]])
def test_non_general_types(value_type) -> None:
    assert not is_general_type(value_type)


def test_coerce_parses_text_by_target_type() -> None:
    assert coerce("42", int) == 42
    assert coerce("TRUE", bool) is True
    assert coerce("false", bool) is False
    assert coerce(7, str) == "7"
    assert coerce(True, str) == "true"
    assert coerce("5", Optional[int]) == 5


def test_coerce_passes_other_types_through() -> None:
    options = {"ssl": True}

    assert coerce(options, dict) is options
    assert coerce(["a"], List[str]) == ["a"]


def test_coerce_copies_sequences_into_declared_container() -> None:
    names = ["a"]

    copied = coerce(names, Tuple[str, ...])

    assert copied == ("a",)
    assert isinstance(copied, tuple)
    assert coerce(names, List[str]) is not names


@pytest.mark.parametrize(
    ("value", "value_type"),
    [
        ("notanumber", int),
        ("yes", bool),
        ("4.5", int),
        ("4_2", int),
        (" 42 ", int),
        ("\u0664\u0662", int),
    ],
)
def test_coerce_rejects_malformed_text(value, value_type) -> None:
    with pytest.raises(ValueError):
        coerce(value, value_type)


def test_string_form() -> None:
    assert string_form(True) == "true"
    assert string_form(None) == "null"
    assert string_form(["a", 1, False]) == "[a, 1, false]"
    assert string_form(12) == "12"
