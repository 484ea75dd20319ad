from kyc_extractor.config.settings import Settings
from kyc_extractor.notification.base import BaseNotifier
from kyc_extractor.notification.telegram_notifier import TelegramNotifier


class NotifierFactory:
    """Creates the configured notification relay, if any."""

    PROVIDERS: tuple[str, ...] = ("none", "telegram")

    @classmethod
    def create(cls, settings: Settings) -> BaseNotifier | None:
        provider = settings.notification_provider.lower()
        if provider == "none":
            return None
        if provider == "telegram":
            token = settings.telegram_bot_token.get_secret_value().strip()
            chat_id = settings.telegram_chat_id.strip()
            if not token or not chat_id:
                raise ValueError(
                    "telegram_bot_token and telegram_chat_id are required for "
                    "notification_provider=telegram"
                )
            return TelegramNotifier(
                bot_token=token,
                chat_id=chat_id,
                timeout_seconds=settings.telegram_timeout_seconds,
                base_url=settings.telegram_api_base_url,
            )
        raise ValueError(
            f"Unknown notification provider '{provider}'. Choose from: {list(cls.PROVIDERS)}"
        )
