from dataclasses import dataclass

from kyc_extractor.records.fields import DISPLAY_ORDER, FIELD_LABELS, has_value
from kyc_extractor.records.models import KycRecord


@dataclass(frozen=True)
class DiffRow:
    """One field compared between a stored record and a new extraction."""

    field: str
    label: str
    existing_value: str | None
    new_value: str | None
    changed: bool


def _collapse(value: str | None) -> str | None:
    return value if has_value(value) else None


def diff(existing: KycRecord, new: KycRecord) -> list[DiffRow]:
    """Compare two records field by field in display order.

    Rows where neither side has a value are omitted. Row values are the
    stored values as-is; only the ``changed`` flag treats empty as missing.
    """
    rows: list[DiffRow] = []
    for field in DISPLAY_ORDER:
        old_value = getattr(existing, field)
        new_value = getattr(new, field)
        if not has_value(old_value) and not has_value(new_value):
            continue
        rows.append(
            DiffRow(
                field=field,
                label=FIELD_LABELS[field],
                existing_value=old_value,
                new_value=new_value,
                changed=_collapse(old_value) != _collapse(new_value),
            )
        )
    return rows
