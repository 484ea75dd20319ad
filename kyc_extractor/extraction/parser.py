"""Parses inference output into a KycRecord.

Strict on shape, lenient on content: the response must be a JSON object,
but keys outside the contract are dropped and missing keys stay absent.
"""

import json
from typing import Any

from kyc_extractor.documents.schema_builder import FieldContract
from kyc_extractor.exceptions import MalformedResponseError
from kyc_extractor.logging.logger import Log
from kyc_extractor.records.models import KycRecord


def parse(raw_text: str, contract: FieldContract) -> KycRecord:
    """Build a KycRecord from raw inference text, keeping only contracted fields.

    Raises:
        MalformedResponseError: if the text is not JSON or not a JSON object.
    """
    data = _load_object(raw_text)

    values: dict[str, str] = {}
    for name, spec in contract.items():
        value = _coerce(name, data.get(name))
        if value is None:
            continue
        if spec.enum is not None and value not in spec.enum:
            Log.warning(f"Dropping '{name}': {value!r} is not one of {list(spec.enum)}")
            continue
        values[name] = value

    dropped = sorted(set(data) - set(contract))
    if dropped:
        Log.debug(f"Dropped fields outside the contract: {dropped}")
    return KycRecord(**values)


def _load_object(raw_text: str) -> dict[str, Any]:
    cleaned = _strip_code_fence(raw_text.strip())
    try:
        parsed = json.loads(cleaned)
    except json.JSONDecodeError as exc:
        Log.debug(f"Unparseable inference response:\n{raw_text}")
        raise MalformedResponseError(
            "Could not parse the extracted data. "
            f"The model may have returned an invalid format: {exc.msg}"
        ) from exc

    if not isinstance(parsed, dict):
        Log.debug(f"Inference response is not an object:\n{raw_text}")
        raise MalformedResponseError("Extracted data must be a JSON object")
    return parsed


def _strip_code_fence(text: str) -> str:
    if not text.startswith("```"):
        return text
    lines = text.splitlines()
    if lines and lines[0].startswith("```"):
        lines = lines[1:]
    if lines and lines[-1].strip() == "```":
        lines = lines[:-1]
    return "\n".join(lines).strip()


def _coerce(name: str, value: Any) -> str | None:
    if value is None or isinstance(value, str):
        return value
    if isinstance(value, (bool, int, float)):
        return str(value)
    Log.warning(f"Dropping '{name}': expected a string, got {type(value).__name__}")
    return None
