"""
Unit tests for WHERE-clause construction.
"""

import pytest

from codes import repository as codes_repository
from core.filters import FilterBuilder, parse_int, parse_int_list
from incidents import repository as incidents_repository
from neighborhoods import repository as neighborhoods_repository


@pytest.mark.parametrize(
    "token, expected",
    [
        ("12", 12),
        (" 7 ", 7),
        ("12abc", 12),
        ("1.9", 1),
        ("-3", -3),
        ("+4", 4),
        ("abc", None),
        ("", None),
        (None, None),
    ],
)
def test_parse_int_takes_leading_integer(token, expected):
    assert parse_int(token) == expected


def test_parse_int_list_keeps_malformed_tokens():
    assert parse_int_list("1, x ,3") == [1, None, 3]
    assert parse_int_list("5,") == [5, None]


def test_empty_builder_has_no_where_clause():
    builder = FilterBuilder()
    assert builder.where_clause() == ""
    assert builder.params == []


def test_add_in_uses_one_placeholder_per_value():
    builder = FilterBuilder().add_in("code", "110, 120,600")
    assert builder.where_clause() == " WHERE code IN (?,?,?)"
    assert builder.params == [110, 120, 600]


def test_missing_or_empty_values_add_nothing():
    builder = (
        FilterBuilder()
        .add_in("code", None)
        .add_in("code", "")
        .add_condition("date(date_time) >= ?", None)
        .add_condition("date(date_time) >= ?", "")
    )
    assert builder.conditions == []
    assert builder.params == []


def test_codes_filter():
    where = codes_repository.build_filter(code="300")
    assert where.conditions == ["code IN (?)"]
    assert where.params == [300]


def test_neighborhoods_filter_targets_neighborhood_number():
    where = neighborhoods_repository.build_filter(neighborhood_id="1,17")
    assert where.conditions == ["neighborhood_number IN (?,?)"]
    assert where.params == [1, 17]


def test_incidents_filter_combines_conditions_with_and_in_order():
    where = incidents_repository.build_filter(
        start_date="2020-01-02",
        end_date="2020-01-04",
        code="600",
        grid="87,88",
        neighborhood="2",
    )
    assert where.where_clause() == (
        " WHERE date(date_time) >= ?"
        " AND date(date_time) <= ?"
        " AND code IN (?)"
        " AND police_grid IN (?,?)"
        " AND neighborhood_number IN (?)"
    )
    assert where.params == ["2020-01-02", "2020-01-04", 600, 87, 88, 2]


def test_dates_are_bound_unparsed():
    where = incidents_repository.build_filter(start_date="not-a-date")
    assert where.params == ["not-a-date"]


def test_hostile_values_never_reach_sql_text():
    hostile = "1); DROP TABLE Codes;--"
    where = incidents_repository.build_filter(start_date=hostile, code=hostile)

    sql = where.where_clause()
    assert "DROP" not in sql
    assert where.params == [hostile, 1]


@pytest.mark.parametrize(
    "token",
    [
        "99999999999999999999",
        "9223372036854775808",
        "-9223372036854775809",
        "1" * 5000,
    ],
)
def test_parse_int_outside_sqlite_integer_range_is_none(token):
    assert parse_int(token) is None


def test_parse_int_accepts_sqlite_integer_bounds():
    assert parse_int("9223372036854775807") == 2**63 - 1
    assert parse_int("-9223372036854775808") == -(2**63)
    assert parse_int("0000000000000000000000042") == 42


def test_parse_int_only_reads_ascii_digits():
    assert parse_int("١١٠") is None
    assert parse_int_list("110,١١٠") == [110, None]
