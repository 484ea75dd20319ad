from kyc_extractor.config.settings import Settings
from kyc_extractor.database.connection import create_pool
from kyc_extractor.database.repositories.kyc_record_repository import KycRecordRepository
from kyc_extractor.records.memory_store import InMemoryRecordStore
from kyc_extractor.records.store_base import BaseRecordStore


class RecordStoreFactory:
    """Creates the configured record store."""

    BACKENDS: tuple[str, ...] = ("memory", "postgres")

    @classmethod
    def create(cls, settings: Settings) -> BaseRecordStore:
        backend = settings.store_backend.lower()
        if backend == "memory":
            return InMemoryRecordStore()
        if backend == "postgres":
            repository = KycRecordRepository(create_pool(settings))
            repository.create_schema()
            return repository
        raise ValueError(
            f"Unknown store backend '{backend}'. Choose from: {list(cls.BACKENDS)}"
        )
