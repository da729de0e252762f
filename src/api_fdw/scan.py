from __future__ import annotations

from collections.abc import Callable
from enum import Enum

from api_fdw.errors import ScanStateError


class ScanState(Enum):
    UNSTARTED = "unstarted"
    FETCHING = "fetching"
    READY = "ready"
    EXHAUSTED = "exhausted"
    FAILED = "failed"


class ScanCursor:
    """Record buffer plus read offset for a single scan.

    UNSTARTED -> FETCHING -> READY -> EXHAUSTED, or FETCHING -> FAILED.
    Only ``reset`` leads back to UNSTARTED.
    """

    def __init__(self) -> None:
        self.state = ScanState.UNSTARTED
        self._records: list[dict] = []
        self._offset = 0

    @property
    def offset(self) -> int:
        return self._offset

    def __len__(self) -> int:
        return len(self._records)

    def start(self, load: Callable[[], list[dict]]) -> None:
        if self.state is not ScanState.UNSTARTED:
            raise ScanStateError(
                f"cannot begin a scan in state `{self.state.value}`; end the previous scan first"
            )

        self.state = ScanState.FETCHING
        try:
            records = load()
        except BaseException:
            self._records = []
            self._offset = 0
            self.state = ScanState.FAILED
            raise

        self._records = list(records)
        self._offset = 0
        self.state = ScanState.READY if self._records else ScanState.EXHAUSTED

    def current(self) -> dict | None:
        if self.state is ScanState.EXHAUSTED:
            return None
        if self.state is not ScanState.READY:
            raise ScanStateError(f"cannot read rows in scan state `{self.state.value}`")
        return self._records[self._offset]

    def advance(self) -> None:
        if self.state is not ScanState.READY:
            raise ScanStateError(f"cannot advance in scan state `{self.state.value}`")
        self._offset += 1
        if self._offset >= len(self._records):
            self.state = ScanState.EXHAUSTED

    def reset(self) -> None:
        self._records = []
        self._offset = 0
        self.state = ScanState.UNSTARTED
