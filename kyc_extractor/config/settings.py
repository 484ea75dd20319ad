from pydantic import SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    inference_provider: str = "openai"
    inference_api_key: SecretStr = SecretStr("")
    inference_model_name: str = "gpt-4o"
    inference_base_url: str | None = None
    inference_timeout_seconds: int = 60
    inference_temperature: float = 0.0

    store_backend: str = "postgres"
    db_host: str = "localhost"
    db_port: int = 5432
    db_database: str = "kyc"
    db_username: str = "kyc"
    db_password: SecretStr = SecretStr("secret")
    db_pool_max_size: int = 5

    notification_provider: str = "none"
    telegram_bot_token: SecretStr = SecretStr("")
    telegram_chat_id: str = ""
    telegram_api_base_url: str = "https://api.telegram.org"
    telegram_timeout_seconds: int = 30
