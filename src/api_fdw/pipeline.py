from collections.abc import Iterable, Iterator, Mapping

from api_fdw.adapter import ApiFdw
from api_fdw.models import Column, Row


class ScanRunner:
    """Drives one begin/iter/end cycle the way a host engine would."""

    def __init__(self, adapter: ApiFdw) -> None:
        self.adapter = adapter

    def run(
        self,
        table_options: Mapping[str, str],
        columns: Iterable[Column],
    ) -> Iterator[Row]:
        try:
            self.adapter.begin_scan(table_options, columns)
            row = Row()
            while self.adapter.iter_scan(row):
                yield Row(cells=list(row.cells))
        finally:
            self.adapter.end_scan()
