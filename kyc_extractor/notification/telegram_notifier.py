import json

import httpx

from kyc_extractor.logging.logger import Log
from kyc_extractor.notification.base import BaseNotifier
from kyc_extractor.notification.formatter import (
    Attachment,
    format_summary,
    image_attachments,
)
from kyc_extractor.records.models import SavedKycRecord


class TelegramNotifier(BaseNotifier):
    """Mirrors saved records to a Telegram chat through the Bot API.

    Images go out first (one photo, or a media group for several), then the
    text summary. Every
    failure is logged and swallowed so a relay outage never blocks a commit.
    """

    def __init__(
        self,
        *,
        bot_token: str,
        chat_id: str,
        timeout_seconds: int = 30,
        base_url: str = "https://api.telegram.org",
        client: httpx.Client | None = None,
    ) -> None:
        self._chat_id = chat_id
        self._client = client or httpx.Client(
            base_url=f"{base_url.rstrip('/')}/bot{bot_token}",
            timeout=timeout_seconds,
        )

    def notify(self, saved: SavedKycRecord) -> None:
        self._send_images(saved)
        self._send_message(saved)

    def _send_images(self, saved: SavedKycRecord) -> None:
        attachments = image_attachments(saved.record)
        if not attachments:
            return
        # sendMediaGroup needs 2-10 items.
        if len(attachments) == 1:
            self._send_photo(saved, attachments[0])
            return
        files = {
            f"{a.field}_photo": (a.file_name, a.content, a.mime_type) for a in attachments
        }
        media = [{"type": "photo", "media": f"attach://{a.field}_photo"} for a in attachments]
        self._post(
            "sendMediaGroup",
            saved,
            data={"chat_id": self._chat_id, "media": json.dumps(media)},
            files=files,
        )

    def _send_photo(self, saved: SavedKycRecord, attachment: Attachment) -> None:
        self._post(
            "sendPhoto",
            saved,
            data={"chat_id": self._chat_id},
            files={"photo": (attachment.file_name, attachment.content, attachment.mime_type)},
        )

    def _send_message(self, saved: SavedKycRecord) -> None:
        self._post(
            "sendMessage",
            saved,
            json={
                "chat_id": self._chat_id,
                "text": format_summary(saved.record),
                "parse_mode": "MarkdownV2",
            },
        )

    def _post(self, method: str, saved: SavedKycRecord, **kwargs: object) -> None:
        try:
            response = self._client.post(f"/{method}", **kwargs)  # type: ignore[arg-type]
        except httpx.HTTPError as exc:
            Log.error(f"Telegram {method} failed for record {saved.id}: {exc}")
            return
        if response.is_success:
            Log.debug(f"Telegram {method} delivered for record {saved.id}")
            return
        Log.error(
            f"Telegram API error ({method}) for record {saved.id}: "
            f"{self._describe_error(response)}"
        )

    @staticmethod
    def _describe_error(response: httpx.Response) -> str:
        try:
            body = response.json()
        except ValueError:
            return f"HTTP {response.status_code}"
        if isinstance(body, dict) and body.get("description"):
            return str(body["description"])
        return f"HTTP {response.status_code}"
