from abc import ABC, abstractmethod

from kyc_extractor.records.models import KycRecord, SavedKycRecord


class BaseRecordStore(ABC):
    """Contract for all record store adapters."""

    @abstractmethod
    def insert(self, record: KycRecord) -> SavedKycRecord:
        """Persist a new record; the store assigns its id and timestamp.

        Raises:
            StoreError: on any failure.
        """

    @abstractmethod
    def update(self, record_id: str, record: KycRecord) -> SavedKycRecord:
        """Overwrite every field of an existing record and refresh its timestamp.

        Raises:
            StoreError: if the record does not exist or the write fails.
        """

    @abstractmethod
    def get(self, record_id: str) -> SavedKycRecord | None:
        """Return one record by id, or None."""

    @abstractmethod
    def list_records(self) -> list[SavedKycRecord]:
        """Return all records, most recent timestamp first."""

    def close(self) -> None:
        """Release resources held by the store."""
