from collections.abc import Mapping

from api_fdw.errors import ConfigError


class Options:
    """Read-only view over one option surface (server or table) handed over by the host."""

    def __init__(self, values: Mapping[str, str] | None, kind: str) -> None:
        self._values = dict(values or {})
        self.kind = kind

    def get(self, key: str) -> str | None:
        value = self._values.get(key)
        if value is None:
            return None
        value = str(value).strip()
        return value or None

    def require(self, key: str) -> str:
        value = self.get(key)
        if value is None:
            raise ConfigError(f"required {self.kind} option `{key}` is missing")
        return value

    def require_or(self, key: str, default: str) -> str:
        value = self.get(key)
        return default if value is None else value

    def get_int(self, key: str) -> int | None:
        value = self.get(key)
        if value is None:
            return None
        try:
            parsed = int(value)
        except ValueError as exc:
            msg = f"{self.kind} option `{key}` must be an integer, got {value!r}"
            raise ConfigError(msg) from exc
        if parsed <= 0:
            raise ConfigError(f"{self.kind} option `{key}` must be positive, got {parsed}")
        return parsed
