"""Error types raised across the scan lifecycle."""

from enum import StrEnum


class ErrorKind(StrEnum):
    """Classification of scan errors."""

    GENERAL = "general"
    CONFIG = "config"
    TRANSPORT = "transport"
    HTTP_STATUS = "http_status"
    PARSE = "parse"
    SCHEMA = "schema"
    PROJECTION = "projection"
    UNSUPPORTED = "unsupported"
    SCAN_STATE = "scan_state"


class FdwError(Exception):
    """Base error for every failure surfaced to the host."""

    kind: ErrorKind = ErrorKind.GENERAL

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.message!r}, kind={self.kind!r})"


class ConfigError(FdwError):
    kind = ErrorKind.CONFIG


class TransportError(FdwError):
    kind = ErrorKind.TRANSPORT


class HttpStatusError(FdwError):
    kind = ErrorKind.HTTP_STATUS

    def __init__(self, message: str, status_code: int) -> None:
        super().__init__(message)
        self.status_code = status_code


class ParseError(FdwError):
    kind = ErrorKind.PARSE


class SchemaError(FdwError):
    kind = ErrorKind.SCHEMA


class ProjectionError(FdwError):
    kind = ErrorKind.PROJECTION


class UnsupportedOperationError(FdwError):
    kind = ErrorKind.UNSUPPORTED


class ScanStateError(FdwError):
    """Lifecycle call made in a state that does not allow it."""

    kind = ErrorKind.SCAN_STATE
