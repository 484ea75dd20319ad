import os
from collections.abc import Generator

import pytest
from psycopg_pool import ConnectionPool

from kyc_extractor.config.settings import Settings
from kyc_extractor.database.connection import build_conninfo
from kyc_extractor.database.repositories.kyc_record_repository import KycRecordRepository


def _test_settings() -> Settings:
    os.environ.setdefault("DB_DATABASE", "kyc_test")
    return Settings(_env_file=None)


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    return _test_settings()


@pytest.fixture(scope="session")
def integration_pool(test_settings: Settings) -> Generator[ConnectionPool, None, None]:
    pool = ConnectionPool(build_conninfo(test_settings), min_size=1, max_size=2, open=False)
    try:
        pool.open(wait=True, timeout=5)
    except Exception as e:
        pool.close()
        pytest.skip(
            f"PostgreSQL test DB not available: {e}. "
            "Set DB_* env to point at a disposable database"
        )
    try:
        yield pool
    finally:
        pool.close()


@pytest.fixture
def repository(integration_pool: ConnectionPool) -> Generator[KycRecordRepository, None, None]:
    repo = KycRecordRepository(integration_pool)
    repo.create_schema()
    yield repo
    with integration_pool.connection() as conn:
        conn.execute("DELETE FROM kyc_records")
        conn.commit()
