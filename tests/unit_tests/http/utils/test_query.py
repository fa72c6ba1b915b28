from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Dict, List, Optional

import pytest

from keywordsai_sdk.http.entities import LogFilter
from keywordsai_sdk.http.utils.query import (
    build_query_string,
    is_empty_value,
    is_optional_type,
    query_field,
)


@dataclass
class ModelQuery:
    model: str = query_field("model")
    limit: int = query_field("limit")


@dataclass
class OptionalNameQuery:
    name: Optional[str] = query_field("name", omit_empty=True)
    count: int = query_field("count")


@dataclass
class PageQuery:
    page: Optional[int] = query_field("page", omit_empty=True)
    name: Optional[str] = query_field("name", omit_empty=True)


@dataclass
class OmitEmptyQuery:
    text: str = query_field("text", omit_empty=True, default="")
    flag: bool = query_field("flag", omit_empty=True, default=False)
    number: int = query_field("number", omit_empty=True, default=0)
    ratio: float = query_field("ratio", omit_empty=True, default=0.0)
    items: List[str] = query_field("items", omit_empty=True, default_factory=list)
    mapping: Dict[str, int] = query_field(
        "mapping", omit_empty=True, default_factory=dict
    )


@dataclass
class NotTaggedQuery:
    visible: str = query_field("visible")
    hidden: str = query_field("-", default="hidden")
    untagged: str = "untagged"
    plain: str = field(default="plain")


@dataclass
class Nested:
    b: int
    a: str


class Order(str, Enum):
    ASCENDING = "asc"


@dataclass
class RichQuery:
    flag: bool = query_field("flag")
    ratio: float = query_field("ratio")
    since: datetime = query_field("since")
    nested: Nested = query_field("nested")
    mapping: Dict[str, int] = query_field("mapping")
    order: Order = query_field("order")


def test_build_query_string_sorts_parameters_by_name() -> None:
    # when
    result = build_query_string(params=ModelQuery(model="gpt-4", limit=10))

    # then
    assert result == "limit=10&model=gpt-4"


def test_build_query_string_when_optional_field_is_unset() -> None:
    # when
    result = build_query_string(params=OptionalNameQuery(name=None, count=5))

    # then
    assert result == "count=5"


def test_build_query_string_when_optional_fields_hold_zero_values() -> None:
    # when
    result = build_query_string(params=PageQuery(page=0, name=""))

    # then
    assert result == "name=&page=0"


def test_build_query_string_when_optional_fields_are_unset() -> None:
    # when
    result = build_query_string(params=PageQuery())

    # then
    assert result == ""


def test_build_query_string_when_unset_field_has_no_omit_empty_modifier() -> None:
    # when
    result = build_query_string(params=ModelQuery(model="gpt-4", limit=None))

    # then
    assert result == "model=gpt-4"


def test_build_query_string_when_all_omit_empty_fields_are_empty() -> None:
    # when
    result = build_query_string(params=OmitEmptyQuery())

    # then
    assert result == ""


def test_build_query_string_when_omit_empty_fields_are_set() -> None:
    # given
    params = OmitEmptyQuery(
        text="abc",
        flag=True,
        number=-3,
        ratio=0.25,
        items=["x"],
        mapping={"k": 1},
    )

    # when
    result = build_query_string(params=params)

    # then
    assert result == (
        "flag=true&items=x&mapping=%7B%22k%22%3A1%7D&number=-3&ratio=0.250000&text=abc"
    )


def test_build_query_string_when_empty_values_are_not_omitted() -> None:
    # given
    params = ModelQuery(model="", limit=0)

    # when
    result = build_query_string(params=params)

    # then
    assert result == "limit=0&model="


def test_build_query_string_skips_untagged_and_excluded_fields() -> None:
    # when
    result = build_query_string(params=NotTaggedQuery(visible="yes"))

    # then
    assert result == "visible=yes"


def test_build_query_string_repeats_sequence_parameters_in_order() -> None:
    # given
    params = LogFilter(tags=["b-tag", "a-tag", "c tag"], limit=5)

    # when
    result = build_query_string(params=params)

    # then
    assert result == "limit=5&tags=b-tag&tags=a-tag&tags=c+tag"


def test_build_query_string_renders_values_by_type() -> None:
    # given
    params = RichQuery(
        flag=False,
        ratio=1.5,
        since=datetime(2024, 1, 2, 15, 4, 5, tzinfo=timezone.utc),
        nested=Nested(b=2, a="x"),
        mapping={"z": 1, "a": 2},
        order=Order.ASCENDING,
    )

    # when
    result = build_query_string(params=params)

    # then
    assert result == (
        "flag=false"
        "&mapping=%7B%22a%22%3A2%2C%22z%22%3A1%7D"
        "&nested=%7B%22a%22%3A%22x%22%2C%22b%22%3A2%7D"
        "&order=asc"
        "&ratio=1.500000"
        "&since=2024-01-02T15%3A04%3A05Z"
    )


def test_build_query_string_for_log_filter() -> None:
    # given
    params = LogFilter(
        model="gpt-4",
        failed=False,
        customer_identifier="",
        start_time=datetime(2024, 1, 1),
        offset=0,
    )

    # when
    result = build_query_string(params=params)

    # then
    assert result == (
        "customer_identifier=&failed=false&model=gpt-4&offset=0"
        "&start_time=2024-01-01T00%3A00%3A00Z"
    )


def test_build_query_string_for_log_filter_with_zero_offset() -> None:
    # when
    result = build_query_string(params=LogFilter(offset=0, limit=10))

    # then
    assert result == "limit=10&offset=0"


@pytest.mark.parametrize(
    "params",
    [None, 42, "model=gpt-4", {"model": "gpt-4"}, ["model"], ModelQuery],
)
def test_build_query_string_when_input_is_not_dataclass_instance(params) -> None:
    # when
    result = build_query_string(params=params)

    # then
    assert result == ""


@pytest.mark.parametrize(
    "value, expected_result",
    [
        ("", True),
        ("a", False),
        ([], True),
        (["a"], False),
        ({}, True),
        ({"a": 1}, False),
        (False, True),
        (True, False),
        (0, True),
        (7, False),
        (0.0, True),
        (0.1, False),
        (None, True),
        (datetime(2024, 1, 1), False),
        (Nested(b=0, a=""), False),
    ],
)
def test_is_empty_value(value, expected_result: bool) -> None:
    # when
    result = is_empty_value(value=value)

    # then
    assert result is expected_result


@pytest.mark.parametrize(
    "annotation, expected_result",
    [
        (Optional[int], True),
        (Optional[List[str]], True),
        (int, False),
        (List[str], False),
        (Dict[str, int], False),
    ],
)
def test_is_optional_type(annotation, expected_result: bool) -> None:
    # when
    result = is_optional_type(annotation)

    # then
    assert result is expected_result
