import uuid
from typing import Any

import psycopg
from psycopg.rows import dict_row
from psycopg_pool import ConnectionPool

from kyc_extractor.exceptions import StoreError
from kyc_extractor.records.models import ALL_FIELDS, KycRecord, SavedKycRecord
from kyc_extractor.records.store_base import BaseRecordStore

_COLUMNS = ", ".join(ALL_FIELDS)
_PLACEHOLDERS = ", ".join(["%s"] * len(ALL_FIELDS))
_ASSIGNMENTS = ", ".join(f"{name} = %s" for name in ALL_FIELDS)

# Epoch milliseconds, forced past the newest stored value so ordering is strict.
_NEXT_TIMESTAMP = (
    "GREATEST((EXTRACT(EPOCH FROM clock_timestamp()) * 1000)::BIGINT, "
    "(SELECT COALESCE(MAX(saved_at), 0) + 1 FROM kyc_records))"
)

CREATE_TABLE_SQL = (
    "CREATE TABLE IF NOT EXISTS kyc_records ("
    "id UUID PRIMARY KEY DEFAULT gen_random_uuid(), "
    + "".join(f"{name} TEXT, " for name in ALL_FIELDS)
    + "saved_at BIGINT NOT NULL)"
)


class KycRecordRepository(BaseRecordStore):
    """Database operations for the kyc_records table."""

    def __init__(self, pool: ConnectionPool) -> None:
        self._pool = pool

    def create_schema(self) -> None:
        """Create the kyc_records table if it does not exist."""
        try:
            with self._pool.connection() as conn:
                conn.execute(CREATE_TABLE_SQL)
                conn.commit()
        except psycopg.Error as exc:
            raise StoreError(f"Could not create the records table: {exc}") from exc

    def insert(self, record: KycRecord) -> SavedKycRecord:
        try:
            with self._pool.connection() as conn:
                with conn.cursor(row_factory=dict_row) as cur:
                    cur.execute(
                        f"""
                        INSERT INTO kyc_records ({_COLUMNS}, saved_at)
                        VALUES ({_PLACEHOLDERS}, {_NEXT_TIMESTAMP})
                        RETURNING id, saved_at
                        """,
                        self._values(record),
                    )
                    row = cur.fetchone()
                conn.commit()
        except psycopg.Error as exc:
            raise StoreError(f"Could not save the record to the database: {exc}") from exc

        if row is None:
            raise StoreError("Insert returned no row")
        return SavedKycRecord(id=str(row["id"]), timestamp=int(row["saved_at"]), record=record)

    def update(self, record_id: str, record: KycRecord) -> SavedKycRecord:
        try:
            uuid.UUID(record_id)
        except ValueError as exc:
            raise StoreError(f"Record {record_id} not found") from exc
        try:
            with self._pool.connection() as conn:
                with conn.cursor(row_factory=dict_row) as cur:
                    cur.execute(
                        f"""
                        UPDATE kyc_records
                        SET {_ASSIGNMENTS}, saved_at = {_NEXT_TIMESTAMP}
                        WHERE id = %s
                        RETURNING saved_at
                        """,
                        (*self._values(record), record_id),
                    )
                    row = cur.fetchone()
                conn.commit()
        except psycopg.Error as exc:
            raise StoreError(f"Could not update record {record_id}: {exc}") from exc

        if row is None:
            raise StoreError(f"Record {record_id} not found")
        return SavedKycRecord(id=record_id, timestamp=int(row["saved_at"]), record=record)

    def get(self, record_id: str) -> SavedKycRecord | None:
        try:
            uuid.UUID(record_id)
        except ValueError:
            return None
        try:
            with self._pool.connection() as conn:
                with conn.cursor(row_factory=dict_row) as cur:
                    cur.execute(
                        f"SELECT id, saved_at, {_COLUMNS} FROM kyc_records WHERE id = %s",
                        (record_id,),
                    )
                    row = cur.fetchone()
        except psycopg.Error as exc:
            raise StoreError(f"Could not fetch record {record_id}: {exc}") from exc

        if row is None:
            return None
        return self._to_saved(row)

    def list_records(self) -> list[SavedKycRecord]:
        try:
            with self._pool.connection() as conn:
                with conn.cursor(row_factory=dict_row) as cur:
                    cur.execute(
                        f"SELECT id, saved_at, {_COLUMNS} FROM kyc_records "
                        "ORDER BY saved_at DESC"
                    )
                    rows = cur.fetchall()
        except psycopg.Error as exc:
            raise StoreError(f"Could not fetch records from the database: {exc}") from exc

        return [self._to_saved(row) for row in rows]

    def close(self) -> None:
        self._pool.close()

    @staticmethod
    def _values(record: KycRecord) -> tuple[str | None, ...]:
        data = record.to_dict()
        return tuple(data[name] for name in ALL_FIELDS)

    @staticmethod
    def _to_saved(row: dict[str, Any]) -> SavedKycRecord:
        return SavedKycRecord(
            id=str(row["id"]),
            timestamp=int(row["saved_at"]),
            record=KycRecord.from_mapping(row),
        )
