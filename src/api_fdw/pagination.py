from collections.abc import Callable
from typing import Protocol

from api_fdw.models import Page

Reporter = Callable[[str], None]


class SupportsFetchPage(Protocol):
    def fetch_page(self, url: str, cursor: str | None = None) -> Page: ...


def fetch_all(
    fetcher: SupportsFetchPage,
    url: str,
    *,
    start_cursor: str | None = None,
    reporter: Reporter | None = None,
) -> list[dict]:
    """Walk every page of ``url`` and return all records in request order.

    There is no page or record cap: the whole collection is held in memory
    before the caller sees the first record. Any page error propagates and
    the records gathered so far are dropped with the local accumulator.
    """
    records: list[dict] = []
    cursor = start_cursor
    page_number = 0

    while True:
        page = fetcher.fetch_page(url, cursor)
        page_number += 1
        records.extend(page.records)

        if reporter is not None:
            reporter(
                f"Fetched page {page_number}: {len(page.records)} records "
                f"({len(records)} total)"
            )

        cursor = page.next_cursor
        if cursor is None:
            return records
