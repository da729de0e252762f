import json
from datetime import UTC, datetime, timedelta, timezone

import pytest

from api_fdw.errors import ConfigError, ProjectionError
from api_fdw.models import Cell, Column, TypeTag
from api_fdw.projection import MissingFieldPolicy, project


def _col(name: str, tag: TypeTag) -> Column:
    return Column(name=name, type_tag=tag)


def test_bool_column_keeps_json_boolean() -> None:
    cells = project({"active": True}, [_col("active", TypeTag.BOOL)])
    assert cells == [Cell.of(TypeTag.BOOL, True)]


def test_string_column_with_number_is_null() -> None:
    cells = project({"name": 42}, [_col("name", TypeTag.STRING)])
    assert cells == [Cell.null()]
    assert cells[0].is_null


def test_missing_field_is_error_by_default() -> None:
    with pytest.raises(ProjectionError, match="source column `email` not found"):
        project({"id": "A1"}, [_col("email", TypeTag.STRING)])


def test_missing_field_null_policy() -> None:
    cells = project(
        {"id": "A1"},
        [_col("id", TypeTag.STRING), _col("email", TypeTag.STRING)],
        missing_field=MissingFieldPolicy.NULL,
    )
    assert cells == [Cell.of(TypeTag.STRING, "A1"), Cell.null()]


def test_int64_accepts_integers_only() -> None:
    record = {"a": 7, "b": 7.5, "c": True, "d": "7", "e": 2**63, "f": -(2**63)}
    columns = [_col(name, TypeTag.INT64) for name in "abcdef"]
    cells = project(record, columns)
    assert cells[0] == Cell.of(TypeTag.INT64, 7)
    assert all(cell.is_null for cell in cells[1:5])
    assert cells[5] == Cell.of(TypeTag.INT64, -(2**63))


def test_bool_rejects_integer() -> None:
    assert project({"flag": 1}, [_col("flag", TypeTag.BOOL)]) == [Cell.null()]


def test_timestamp_parses_rfc3339() -> None:
    cells = project(
        {"created_at": "2024-03-01T12:30:00.123Z", "updated_at": "2024-03-01T12:30:00+02:00"},
        [_col("created_at", TypeTag.TIMESTAMP), _col("updated_at", TypeTag.TIMESTAMP)],
    )
    assert cells[0].value == datetime(2024, 3, 1, 12, 30, 0, 123000, tzinfo=UTC)
    assert cells[1].value == datetime(2024, 3, 1, 12, 30, tzinfo=timezone(timedelta(hours=2)))
    assert cells[0].kind is TypeTag.TIMESTAMP


def test_timestamp_malformed_string_is_error() -> None:
    with pytest.raises(ProjectionError, match="created_at"):
        project({"created_at": "yesterday"}, [_col("created_at", TypeTag.TIMESTAMP)])


@pytest.mark.parametrize(
    "text",
    [
        "2024-03-01T12:30+00:00",
        "20240301T123000Z",
        "2024-W09-5T12:30:00Z",
        "2024-03-01T12Z",
        "2024-03-01",
        "2024-03-01T12:30:00+0000",
        "2024-13-01T12:30:00Z",
        "٢٠٢٤-03-01T12:30:00Z",
    ],
)
def test_timestamp_rejects_non_rfc3339_forms(text: str) -> None:
    with pytest.raises(ProjectionError, match="not an RFC 3339 timestamp"):
        project({"t": text}, [_col("t", TypeTag.TIMESTAMP)])


def test_timestamp_accepts_lowercase_separators() -> None:
    cells = project({"t": "2024-03-01t12:30:00z"}, [_col("t", TypeTag.TIMESTAMP)])
    assert cells[0].value == datetime(2024, 3, 1, 12, 30, tzinfo=UTC)


def test_timestamp_without_offset_is_error() -> None:
    with pytest.raises(ProjectionError):
        project({"created_at": "2024-03-01T12:30:00"}, [_col("created_at", TypeTag.TIMESTAMP)])


def test_timestamp_non_string_is_null() -> None:
    assert project({"created_at": 1700000000}, [_col("created_at", TypeTag.TIMESTAMP)]) == [
        Cell.null()
    ]


def test_json_object_is_serialized() -> None:
    cells = project(
        {"address": {"city": "Oslo", "zip": "0150"}, "tags": ["a"]},
        [_col("address", TypeTag.JSON), _col("tags", TypeTag.JSON)],
    )
    assert cells[0].kind is TypeTag.JSON
    assert json.loads(cells[0].value) == {"city": "Oslo", "zip": "0150"}
    assert cells[1].is_null


def test_json_null_value_is_null_cell() -> None:
    cells = project({"nickname": None}, [_col("nickname", TypeTag.STRING)])
    assert cells == [Cell.null()]


def test_unsupported_type_is_error_even_when_field_missing() -> None:
    with pytest.raises(ProjectionError, match="column `balance` type is not supported"):
        project({}, [_col("balance", TypeTag.FLOAT64)])


def test_first_error_wins_left_to_right() -> None:
    columns = [
        _col("id", TypeTag.STRING),
        _col("missing", TypeTag.STRING),
        _col("balance", TypeTag.NUMERIC),
    ]
    with pytest.raises(ProjectionError, match="missing"):
        project({"id": "A1", "balance": 1}, columns)


def test_lookup_is_case_sensitive() -> None:
    with pytest.raises(ProjectionError):
        project({"Email": "x@example.com"}, [_col("email", TypeTag.STRING)])


def test_missing_field_policy_parse() -> None:
    assert MissingFieldPolicy.parse(None) is MissingFieldPolicy.ERROR
    assert MissingFieldPolicy.parse(" NULL ") is MissingFieldPolicy.NULL
    with pytest.raises(ConfigError, match="on_missing_field"):
        MissingFieldPolicy.parse("ignore")


def test_type_tag_parse() -> None:
    assert TypeTag.parse("Int64") is TypeTag.INT64
    with pytest.raises(ConfigError, match="unknown column type"):
        TypeTag.parse("varchar")
