"""Message and attachment building for record notifications."""

import base64
import binascii
import re
from dataclasses import dataclass

from kyc_extractor.logging.logger import Log
from kyc_extractor.records.fields import DISPLAY_ORDER, FIELD_LABELS, format_value
from kyc_extractor.records.models import IMAGE_FIELDS, KycRecord

_MARKDOWN_V2_SPECIAL = re.compile(r"([_*\[\]()~`>#+\-=|{}.!\\])")
_DATA_URL = re.compile(r"^data:(?P<mime>[\w.+-]+/[\w.+-]+);base64,(?P<data>.+)$", re.DOTALL)

SUMMARY_HEADER = "*New KYC Record Submission*"


@dataclass(frozen=True)
class Attachment:
    """A decoded image ready for upload."""

    field: str
    file_name: str
    mime_type: str
    content: bytes


def escape_markdown_v2(text: str) -> str:
    return _MARKDOWN_V2_SPECIAL.sub(r"\\\1", text)


def format_summary(record: KycRecord) -> str:
    """Render every non-empty field as a MarkdownV2 ``*Label:* value`` line."""
    lines = [SUMMARY_HEADER, ""]
    for field in DISPLAY_ORDER:
        value = format_value(field, getattr(record, field))
        if not value:
            continue
        lines.append(f"*{escape_markdown_v2(FIELD_LABELS[field])}:* {escape_markdown_v2(value)}")
    return "\n".join(lines) + "\n"


def decode_data_url(data_url: str) -> tuple[str, bytes] | None:
    """Split a base64 data URL into (mime_type, bytes); None if malformed."""
    match = _DATA_URL.match(data_url.strip())
    if match is None:
        return None
    try:
        content = base64.b64decode(match.group("data"), validate=True)
    except (binascii.Error, ValueError):
        return None
    return match.group("mime"), content


def image_attachments(record: KycRecord) -> list[Attachment]:
    """Decode the record's embedded images; undecodable ones are skipped."""
    attachments: list[Attachment] = []
    for field in IMAGE_FIELDS:
        data_url = getattr(record, field)
        if not data_url:
            continue
        decoded = decode_data_url(data_url)
        if decoded is None:
            Log.warning(f"Skipping {field}: not a valid base64 data URL")
            continue
        mime_type, content = decoded
        extension = mime_type.split("/")[1] or "jpg"
        attachments.append(
            Attachment(
                field=field,
                file_name=f"{field}.{extension}",
                mime_type=mime_type,
                content=content,
            )
        )
    return attachments
