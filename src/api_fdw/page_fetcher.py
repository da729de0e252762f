import json

import httpx

from api_fdw.connectors.base import BaseConnector
from api_fdw.errors import HttpStatusError, ParseError, SchemaError
from api_fdw.http_client import HttpClient
from api_fdw.models import ConnectionConfig, Page


def _reject_constant(name: str) -> object:
    # NaN, Infinity and -Infinity are not JSON.
    raise ValueError(f"non-standard JSON constant {name}")


class PageFetcher:
    """Fetches and unpacks one page of a cursor-paginated collection."""

    def __init__(
        self,
        http: HttpClient,
        config: ConnectionConfig,
        connector: BaseConnector,
        records_field: str,
        *,
        limit: int | None = None,
    ) -> None:
        self.http = http
        self.config = config
        self.connector = connector
        self.records_field = records_field
        self.limit = limit

    def page_url(self, url: str, cursor: str | None) -> str:
        page_url = httpx.URL(url)
        if self.limit is not None:
            page_url = page_url.copy_add_param(self.connector.limit_param, str(self.limit))
        if cursor is not None:
            page_url = page_url.copy_add_param(self.connector.cursor_param, cursor)
        return str(page_url)

    def headers(self) -> dict[str, str]:
        return {
            "authorization": f"Bearer {self.config.access_token}",
            "content-type": "application/json",
            "user-agent": self.connector.user_agent,
        }

    def fetch_page(self, url: str, cursor: str | None = None) -> Page:
        records_field = self.records_field
        page_url = self.page_url(url, cursor)
        response = self.http.get(page_url, headers=self.headers())

        # Non-2xx is a hard failure; no retry at this layer.
        if not response.ok:
            preview = response.body[:800].decode("utf-8", errors="replace")
            msg = (
                f"request failed with HTTP status {response.status_code} "
                f"url={page_url} "
                f"body_preview={preview}"
            )
            raise HttpStatusError(msg, status_code=response.status_code)

        try:
            payload = json.loads(response.body, parse_constant=_reject_constant)
        except ValueError as exc:
            raise ParseError(f"response body is not valid JSON: {exc} url={page_url}") from exc
        if not isinstance(payload, dict):
            raise ParseError(
                f"expected a JSON object response, got {type(payload).__name__} url={page_url}"
            )

        records = payload.get(records_field)
        if not isinstance(records, list):
            raise SchemaError(f"expected field `{records_field}` to be a JSON array")
        for index, record in enumerate(records):
            if not isinstance(record, dict):
                raise SchemaError(
                    f"expected `{records_field}[{index}]` to be a JSON object, "
                    f"got {type(record).__name__}"
                )

        return Page(records=records, next_cursor=self._next_cursor(payload))

    def _next_cursor(self, payload: dict) -> str | None:
        cursor = payload.get(self.connector.cursor_field)
        # Anything other than a non-empty string ends pagination.
        if isinstance(cursor, str) and cursor:
            return cursor
        return None
