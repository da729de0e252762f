from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum

from api_fdw.errors import ConfigError

TOKEN_PREVIEW_CHARS = 6


class TypeTag(StrEnum):
    """Declared output type of a column, as named by the host."""

    BOOL = "bool"
    INT8 = "int8"
    INT16 = "int16"
    INT32 = "int32"
    INT64 = "int64"
    FLOAT32 = "float32"
    FLOAT64 = "float64"
    NUMERIC = "numeric"
    STRING = "string"
    DATE = "date"
    TIMESTAMP = "timestamp"
    TIMESTAMPTZ = "timestamptz"
    JSON = "json"
    UUID = "uuid"

    @classmethod
    def parse(cls, name: str) -> TypeTag:
        try:
            return cls(name.strip().lower())
        except ValueError as exc:
            choices = ", ".join(tag.value for tag in cls)
            raise ConfigError(f"unknown column type `{name}` (expected one of: {choices})") from exc


@dataclass(frozen=True)
class Column:
    name: str
    type_tag: TypeTag


@dataclass(frozen=True)
class ScanRequest:
    object_name: str
    columns: tuple[Column, ...]


@dataclass(frozen=True)
class ConnectionConfig:
    base_url: str
    access_token: str = field(repr=False)

    def token_preview(self) -> str:
        # At most half the token is shown, so short tokens never appear whole.
        shown = min(TOKEN_PREVIEW_CHARS, len(self.access_token) // 2)
        return f"{self.access_token[:shown]}..."


@dataclass(frozen=True)
class Cell:
    """One typed value; ``kind`` is None for SQL NULL."""

    kind: TypeTag | None
    value: object = None

    @classmethod
    def null(cls) -> Cell:
        return cls(kind=None)

    @classmethod
    def of(cls, kind: TypeTag, value: object) -> Cell:
        return cls(kind=kind, value=value)

    @property
    def is_null(self) -> bool:
        return self.kind is None


@dataclass
class Row:
    cells: list[Cell] = field(default_factory=list)

    def extend(self, cells: list[Cell]) -> None:
        self.cells.extend(cells)

    def clear(self) -> None:
        self.cells.clear()

    def values(self) -> list[object]:
        return [cell.value for cell in self.cells]

    def __len__(self) -> int:
        return len(self.cells)


@dataclass(frozen=True)
class Page:
    records: list[dict]
    next_cursor: str | None
