"""Conversion of raw JSON records into typed rows.

Every lookup result goes through ``CONVERTERS``; a type that has no entry
there is unsupported and fails the row.
"""

from __future__ import annotations

import json
import re
from collections.abc import Callable, Iterable
from datetime import datetime
from enum import StrEnum

from api_fdw.errors import ConfigError, ProjectionError
from api_fdw.models import Cell, Column, TypeTag

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1

_MISSING = object()

RFC3339_RE = re.compile(
    r"\d{4}-\d{2}-\d{2}[Tt ]\d{2}:\d{2}:\d{2}(?:\.\d+)?(?:[Zz]|[+-]\d{2}:\d{2})",
    re.ASCII,
)


class MissingFieldPolicy(StrEnum):
    ERROR = "error"
    NULL = "null"

    @classmethod
    def parse(cls, name: str | None) -> MissingFieldPolicy:
        if name is None:
            return cls.ERROR
        try:
            return cls(name.strip().lower())
        except ValueError as exc:
            raise ConfigError(
                f"table option `on_missing_field` must be `error` or `null`, got {name!r}"
            ) from exc


def _to_bool(column: Column, value: object) -> Cell:
    if isinstance(value, bool):
        return Cell.of(TypeTag.BOOL, value)
    return Cell.null()


def _to_int64(column: Column, value: object) -> Cell:
    # bool is an int subclass; JSON true/false is not a number.
    if isinstance(value, int) and not isinstance(value, bool) and INT64_MIN <= value <= INT64_MAX:
        return Cell.of(TypeTag.INT64, value)
    return Cell.null()


def _to_string(column: Column, value: object) -> Cell:
    if isinstance(value, str):
        return Cell.of(TypeTag.STRING, value)
    return Cell.null()


def parse_rfc3339(text: str) -> datetime:
    """Parse an RFC 3339 date-time (full date, full time, Z or numeric offset)."""
    if RFC3339_RE.fullmatch(text) is None:
        raise ValueError(f"not an RFC 3339 date-time: {text!r}")
    # fromisoformat does not take a lower-case z or t.
    return datetime.fromisoformat(text.upper())


def _to_timestamp(column: Column, value: object) -> Cell:
    if not isinstance(value, str):
        return Cell.null()
    try:
        return Cell.of(TypeTag.TIMESTAMP, parse_rfc3339(value))
    except ValueError as exc:
        raise ProjectionError(
            f"column `{column.name}` value {value!r} is not an RFC 3339 timestamp"
        ) from exc


def _to_json(column: Column, value: object) -> Cell:
    if isinstance(value, dict):
        return Cell.of(TypeTag.JSON, json.dumps(value, separators=(",", ":")))
    return Cell.null()


CONVERTERS: dict[TypeTag, Callable[[Column, object], Cell]] = {
    TypeTag.BOOL: _to_bool,
    TypeTag.INT64: _to_int64,
    TypeTag.STRING: _to_string,
    TypeTag.TIMESTAMP: _to_timestamp,
    TypeTag.JSON: _to_json,
}


def project_cell(
    record: dict,
    column: Column,
    missing_field: MissingFieldPolicy = MissingFieldPolicy.ERROR,
) -> Cell:
    converter = CONVERTERS.get(column.type_tag)
    if converter is None:
        raise ProjectionError(f"column `{column.name}` type is not supported")

    value = record.get(column.name, _MISSING)
    if value is _MISSING:
        if missing_field is MissingFieldPolicy.ERROR:
            raise ProjectionError(f"source column `{column.name}` not found")
        return Cell.null()
    if value is None:
        return Cell.null()
    return converter(column, value)


def project(
    record: dict,
    columns: Iterable[Column],
    *,
    missing_field: MissingFieldPolicy = MissingFieldPolicy.ERROR,
) -> list[Cell]:
    """Project one record onto ``columns``, left to right; the first error wins."""
    return [project_cell(record, column, missing_field) for column in columns]
