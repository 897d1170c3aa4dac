"""parse_query_options: query string -> QueryOptions (lenient, never raises)."""

import pytest

from eduhub.application.services.query_builder import parse_query_options
from eduhub.domain.value_objects import QueryOptions


def test_empty_query_gives_default_options() -> None:
    opts = parse_query_options({})
    assert opts == QueryOptions()
    assert opts.where == {}


def test_fields_builds_select_and_trims_names() -> None:
    opts = parse_query_options({"fields": "id, name ,code"})
    assert opts.select == {"id": True, "name": True, "code": True}
    assert opts.include is None


def test_fields_wins_over_include() -> None:
    """include is not parsed at all when fields is present."""
    opts = parse_query_options({"fields": "id,name", "include": "courses"})
    assert opts.select == {"id": True, "name": True}
    assert opts.include is None


def test_empty_fields_yields_single_empty_key() -> None:
    opts = parse_query_options({"fields": ""})
    assert opts.select == {"": True}


def test_include_nested_tree() -> None:
    opts = parse_query_options({"include": "a.b,c"})
    assert opts.include == {"a": {"include": {"b": True}}, "c": True}
    assert opts.select is None


def test_include_deep_nesting() -> None:
    opts = parse_query_options({"include": "courses.batches.contents"})
    assert opts.include == {
        "courses": {"include": {"batches": {"include": {"contents": True}}}}
    }


def test_include_later_token_replaces_plain_entry() -> None:
    opts = parse_query_options({"include": "a,a.b"})
    assert opts.include == {"a": {"include": {"b": True}}}


def test_include_siblings_share_wrapper() -> None:
    opts = parse_query_options({"include": "a.b,a.c"})
    assert opts.include == {"a": {"include": {"b": True, "c": True}}}


@pytest.mark.parametrize(
    ("page", "limit", "skip", "take"),
    [("1", "10", 0, 10), ("3", "25", 50, 25), ("2", "1", 1, 1)],
)
def test_pagination(page: str, limit: str, skip: int, take: int) -> None:
    opts = parse_query_options({"page": page, "limit": limit})
    assert (opts.skip, opts.take) == (skip, take)
    assert opts.is_paginated


@pytest.mark.parametrize(
    "query",
    [
        {"page": "2"},
        {"limit": "10"},
        {"page": "0", "limit": "10"},
        {"page": "1", "limit": "-5"},
        {"page": "abc", "limit": "10"},
        {"page": "1.5", "limit": "10"},
    ],
)
def test_pagination_requires_both_positive(query: dict[str, str]) -> None:
    opts = parse_query_options(query)
    assert opts.skip is None
    assert opts.take is None


@pytest.mark.parametrize(("raw", "expected"), [("name:asc", "asc"), ("name:desc", "desc")])
def test_sort(raw: str, expected: str) -> None:
    assert parse_query_options({"sort": raw}).order_by == {"name": expected}


@pytest.mark.parametrize("raw", ["name:bogus", "nameonly", "name:DESC", ":asc", ""])
def test_malformed_sort_is_ignored(raw: str) -> None:
    assert parse_query_options({"sort": raw}).order_by is None


def test_unknown_keys_are_ignored() -> None:
    opts = parse_query_options({"business_id": "3", "search": "x"})
    assert opts == QueryOptions()


def test_list_values_use_first_item() -> None:
    opts = parse_query_options({"fields": ["id,name", "code"]})
    assert opts.select == {"id": True, "name": True}


def test_with_where_merges_and_new_keys_win() -> None:
    base = QueryOptions(where={"status": "ACTIVE", "business_id": 1})
    merged = base.with_where(business_id=2, exam_id=5)
    assert merged.where == {"status": "ACTIVE", "business_id": 2, "exam_id": 5}
    assert base.where == {"status": "ACTIVE", "business_id": 1}


def test_select_and_include_are_mutually_exclusive() -> None:
    with pytest.raises(ValueError):
        QueryOptions(select={"id": True}, include={"courses": True})


def test_parsing_twice_gives_equal_options() -> None:
    query = {"include": "courses.batches,exam", "page": "2", "limit": "5", "sort": "name:desc"}
    first = parse_query_options(query)
    second = parse_query_options(query)
    assert first == second
    assert first is not second
    assert query == {
        "include": "courses.batches,exam",
        "page": "2",
        "limit": "5",
        "sort": "name:desc",
    }
