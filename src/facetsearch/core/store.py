from __future__ import annotations

from collections.abc import Iterable, Iterator

from ..utils.error_handling import RecordValidationError
from .types import Record


class RecordStore:
    """
    Read-only, versioned snapshot of catalogue records.

    The engine never mutates a store. A changed catalogue is represented by a
    new store obtained from ``replace()``, which carries a bumped version so
    derived data (bounds, cached filter results) can be invalidated by key.
    """

    def __init__(self, records: Iterable[Record] = (), version: int = 0) -> None:
        self._records: tuple[Record, ...] = tuple(records)
        self._version = version
        self._by_id: dict[str, Record] = {}
        for record in self._records:
            if record.id in self._by_id:
                raise RecordValidationError(
                    f"Duplicate record id: {record.id}", record_id=record.id
                )
            self._by_id[record.id] = record

    @property
    def version(self) -> int:
        return self._version

    def get_all_records(self) -> tuple[Record, ...]:
        return self._records

    def get(self, record_id: str) -> Record | None:
        return self._by_id.get(record_id)

    def replace(self, records: Iterable[Record]) -> RecordStore:
        """Return a new store holding ``records`` with the next version."""
        return RecordStore(records, version=self._version + 1)

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[Record]:
        return iter(self._records)

    def __repr__(self) -> str:
        return f"RecordStore(records={len(self._records)}, version={self._version})"
