from __future__ import annotations

from collections.abc import Iterable, Mapping

from api_fdw.connectors.base import BaseConnector
from api_fdw.connectors.square import SquareConnector
from api_fdw.errors import ScanStateError, UnsupportedOperationError
from api_fdw.http_client import HttpClient
from api_fdw.models import Cell, Column, ConnectionConfig, Row, ScanRequest
from api_fdw.options import Options
from api_fdw.page_fetcher import PageFetcher
from api_fdw.pagination import Reporter, fetch_all
from api_fdw.projection import MissingFieldPolicy, project
from api_fdw.scan import ScanCursor, ScanState

HOST_VERSION_REQUIREMENT = "^0.1.0"


class ApiFdw:
    """Scan lifecycle for one foreign table backed by a paginated REST collection.

    Hosts that run scans concurrently need one instance per scan; nothing is
    shared between instances.
    """

    def __init__(
        self,
        http: HttpClient,
        *,
        connector: BaseConnector | None = None,
        reporter: Reporter | None = None,
    ) -> None:
        self.http = http
        self.connector = connector or SquareConnector()
        self.report = reporter
        self.config: ConnectionConfig | None = None
        self.request: ScanRequest | None = None
        self.missing_field = MissingFieldPolicy.ERROR
        self.cursor = ScanCursor()

    @staticmethod
    def host_version_requirement() -> str:
        return HOST_VERSION_REQUIREMENT

    @property
    def state(self) -> ScanState:
        return self.cursor.state

    def init(self, server_options: Mapping[str, str] | None) -> None:
        opts = Options(server_options, kind="server")
        self.config = ConnectionConfig(
            base_url=opts.require_or("base_url", self.connector.default_base_url),
            access_token=opts.require("access_token"),
        )
        if self.report is not None:
            self.report(
                f"Connecting to {self.config.base_url} "
                f"with access token {self.config.token_preview()}"
            )

    def begin_scan(
        self,
        table_options: Mapping[str, str] | None,
        columns: Iterable[Column],
    ) -> None:
        if self.config is None:
            raise ScanStateError("begin_scan called before init")
        config = self.config

        opts = Options(table_options, kind="table")
        request = ScanRequest(object_name=opts.require("object"), columns=tuple(columns))
        limit = opts.get_int("limit")
        start_cursor = opts.get("cursor")
        missing_field = MissingFieldPolicy.parse(opts.get("on_missing_field"))

        fetcher = PageFetcher(
            self.http,
            config,
            self.connector,
            self.connector.records_field(request.object_name),
            limit=limit,
        )
        url = self.connector.collection_url(config.base_url, request.object_name)

        self.cursor.start(
            lambda: fetch_all(fetcher, url, start_cursor=start_cursor, reporter=self.report)
        )
        self.request = request
        self.missing_field = missing_field
        if self.report is not None:
            self.report(
                f"Retrieved {len(self.cursor)} {request.object_name} "
                f"from {self.connector.provider}."
            )

    def iter_scan(self, row: Row) -> bool:
        """Fill ``row`` with the next record; False once the buffer is used up."""
        row.clear()
        record = self.cursor.current()
        if record is None:
            return False
        cells: list[Cell] = project(
            record, self.request.columns, missing_field=self.missing_field
        )
        row.extend(cells)
        self.cursor.advance()
        return True

    def re_scan(self) -> None:
        raise UnsupportedOperationError("re_scan on foreign table is not supported")

    def end_scan(self) -> None:
        self.cursor.reset()
        self.request = None

    def begin_modify(self, table_options: Mapping[str, str] | None = None) -> None:
        raise UnsupportedOperationError("modify on foreign table is not supported")

    def insert(self, row: Row) -> None:
        raise UnsupportedOperationError("insert on foreign table is not supported")

    def update(self, rowid: Cell, row: Row) -> None:
        raise UnsupportedOperationError("update on foreign table is not supported")

    def delete(self, rowid: Cell) -> None:
        raise UnsupportedOperationError("delete on foreign table is not supported")

    def end_modify(self) -> None:
        return None
