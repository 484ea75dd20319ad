from psycopg_pool import ConnectionPool

from kyc_extractor.config.settings import Settings


def build_conninfo(settings: Settings) -> str:
    return (
        f"host={settings.db_host} "
        f"port={settings.db_port} "
        f"dbname={settings.db_database} "
        f"user={settings.db_username} "
        f"password={settings.db_password.get_secret_value()}"
    )


def create_pool(settings: Settings) -> ConnectionPool:
    """Open a connection pool from settings. The caller owns and closes it."""
    return ConnectionPool(
        build_conninfo(settings),
        min_size=1,
        max_size=settings.db_pool_max_size,
        open=True,
    )
