import time
import uuid

from kyc_extractor.exceptions import StoreError
from kyc_extractor.records.models import KycRecord, SavedKycRecord
from kyc_extractor.records.store_base import BaseRecordStore


class InMemoryRecordStore(BaseRecordStore):
    """Process-local store. Useful for local runs and tests.

    Timestamps are epoch milliseconds and strictly increase across inserts
    and updates, even when two writes land in the same millisecond.
    """

    def __init__(self) -> None:
        self._records: dict[str, SavedKycRecord] = {}
        self._last_timestamp = 0

    def insert(self, record: KycRecord) -> SavedKycRecord:
        saved = SavedKycRecord(
            id=uuid.uuid4().hex,
            timestamp=self._next_timestamp(),
            record=record,
        )
        self._records[saved.id] = saved
        return saved

    def update(self, record_id: str, record: KycRecord) -> SavedKycRecord:
        if record_id not in self._records:
            raise StoreError(f"Record {record_id} not found")
        saved = SavedKycRecord(id=record_id, timestamp=self._next_timestamp(), record=record)
        self._records[record_id] = saved
        return saved

    def get(self, record_id: str) -> SavedKycRecord | None:
        return self._records.get(record_id)

    def list_records(self) -> list[SavedKycRecord]:
        return sorted(self._records.values(), key=lambda r: r.timestamp, reverse=True)

    def _next_timestamp(self) -> int:
        now = time.time_ns() // 1_000_000
        self._last_timestamp = max(now, self._last_timestamp + 1)
        return self._last_timestamp
