"""Record store contract used by the user and comment anonymizers.

The anonymizers never talk to a database directly. They read, update and
list records through an object satisfying ``RecordStore``, so any backend
(an ORM, a CMS API, a plain dict) can be plugged in.
"""

from __future__ import annotations

import copy
from typing import Any, Hashable, Iterable, Mapping, Optional, Protocol, Sequence

Record = Mapping[str, Any]


class RecordStore(Protocol):
    """Narrow read/update/list interface over a collection of records."""

    def get_record(self, record_id: Hashable) -> Optional[Record]:
        """Return the record with ``record_id`` or None if it does not exist."""
        ...

    def update_record(self, record_id: Hashable, fields: Mapping[str, Any]) -> bool:
        """Write ``fields`` onto a record; return False if the update failed."""
        ...

    def list_records(self, filters: Mapping[str, Any]) -> Sequence[Record]:
        """Return the records whose fields equal every item of ``filters``."""
        ...


class InMemoryRecordStore:
    """Dict-backed ``RecordStore``.

    Records are copied on the way in and out so callers cannot mutate
    stored state by accident.

    Examples:
        >>> store = InMemoryRecordStore({1: {"user_email": "john@example.com"}})
        >>> store.update_record(1, {"user_email": "deleted@site.invalid"})
        True
        >>> store.get_record(1)["user_email"]
        'deleted@site.invalid'
    """

    def __init__(self, records: Optional[Mapping[Hashable, Record]] = None):
        self._records: dict[Hashable, dict[str, Any]] = {
            record_id: dict(record) for record_id, record in (records or {}).items()
        }

    def get_record(self, record_id: Hashable) -> Optional[Record]:
        record = self._records.get(record_id)
        return copy.deepcopy(record) if record is not None else None

    def update_record(self, record_id: Hashable, fields: Mapping[str, Any]) -> bool:
        record = self._records.get(record_id)
        if record is None:
            return False
        record.update(fields)
        return True

    def list_records(self, filters: Mapping[str, Any]) -> Sequence[Record]:
        return [
            copy.deepcopy(record)
            for record in self._records.values()
            if all(record.get(key) == value for key, value in filters.items())
        ]

    def add(self, record_id: Hashable, record: Record) -> None:
        self._records[record_id] = dict(record)

    def ids(self) -> Iterable[Hashable]:
        return list(self._records)

    def __len__(self) -> int:
        return len(self._records)
