from unittest.mock import MagicMock

import pytest
from pydantic import SecretStr

from kyc_extractor.notification.factory import NotifierFactory
from kyc_extractor.notification.telegram_notifier import TelegramNotifier


def _settings(provider: str, token: str = "TOKEN", chat_id: str = "42") -> MagicMock:
    return MagicMock(
        notification_provider=provider,
        telegram_bot_token=SecretStr(token),
        telegram_chat_id=chat_id,
        telegram_timeout_seconds=10,
        telegram_api_base_url="https://api.telegram.org",
    )


class TestNotifierFactory:
    def test_none_provider_returns_none(self) -> None:
        assert NotifierFactory.create(_settings("none")) is None

    def test_creates_telegram_notifier(self) -> None:
        assert isinstance(NotifierFactory.create(_settings("telegram")), TelegramNotifier)

    def test_telegram_requires_token_and_chat(self) -> None:
        with pytest.raises(ValueError, match="required"):
            NotifierFactory.create(_settings("telegram", token=""))
        with pytest.raises(ValueError, match="required"):
            NotifierFactory.create(_settings("telegram", chat_id=" "))

    def test_unknown_provider_raises(self) -> None:
        with pytest.raises(ValueError, match="Unknown notification provider"):
            NotifierFactory.create(_settings("slack"))
