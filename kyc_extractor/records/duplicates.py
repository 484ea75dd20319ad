from kyc_extractor.logging.logger import Log
from kyc_extractor.records.models import KycRecord, SavedKycRecord
from kyc_extractor.records.store_base import BaseRecordStore


class DuplicateResolver:
    """Finds a stored record that shares the new record's ID number."""

    def __init__(self, store: BaseRecordStore) -> None:
        self._store = store

    def find_duplicate(self, record: KycRecord) -> SavedKycRecord | None:
        """Return the first stored record matching the lookup key, or None.

        A record with neither a national ID nor a passport number can never
        collide, so the store is not queried at all. Matching is exact and
        case-sensitive. The whole store is scanned and the first match in
        store order wins; uniqueness is not enforced.
        """
        key = record.lookup_key()
        if key is None:
            Log.info("No national ID or passport number, skipping duplicate check")
            return None

        for saved in self._store.list_records():
            if getattr(saved.record, key.field) == key.value:
                Log.info(f"Duplicate found: record {saved.id} matches {key.field}")
                return saved
        return None
