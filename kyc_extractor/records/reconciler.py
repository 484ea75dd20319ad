from kyc_extractor.logging.logger import Log
from kyc_extractor.notification.base import BaseNotifier
from kyc_extractor.records.models import KycRecord, SavedKycRecord
from kyc_extractor.records.store_base import BaseRecordStore


class RecordReconciler:
    """Applies the reviewer's decision for a pending record."""

    def __init__(self, store: BaseRecordStore, notifier: BaseNotifier | None = None) -> None:
        self._store = store
        self._notifier = notifier

    def commit_new(self, record: KycRecord) -> SavedKycRecord:
        saved = self._store.insert(record)
        Log.info(f"Record {saved.id} saved")
        self._notify(saved)
        return saved

    def commit_update(self, existing_id: str, record: KycRecord) -> SavedKycRecord:
        """Overwrite the stored record wholesale.

        Fields present on the stored record but absent on ``record`` are
        cleared; the reviewer has already seen the diff.
        """
        saved = self._store.update(existing_id, record)
        Log.info(f"Record {saved.id} updated")
        self._notify(saved)
        return saved

    def discard(self, record: KycRecord) -> None:
        """Release a pending record without touching the store."""
        key = record.lookup_key()
        Log.info(f"Pending record discarded (lookup field: {key.field if key else 'none'})")

    def _notify(self, saved: SavedKycRecord) -> None:
        if self._notifier is None:
            return
        try:
            self._notifier.notify(saved)
        except Exception as exc:
            Log.error(f"Notification for record {saved.id} failed: {exc}")
