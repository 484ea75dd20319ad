"""Builds the per-request field contract sent to the inference backend.

Each document part licenses a fixed group of fields. The contract for a
request is the union of the groups of the parts that were supplied, plus
``document_type``. Fields not licensed by a supplied part are never
requested, so the model has no slot to invent values for unseen faces.
"""

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from typing import Any

from kyc_extractor.documents.models import DocumentPart, DocumentType


@dataclass(frozen=True)
class FieldSpec:
    """Expected shape of a single extracted field."""

    description: str
    type: str = "string"
    enum: tuple[str, ...] | None = None

    def payload(self) -> dict[str, Any]:
        data: dict[str, Any] = {"type": self.type}
        if self.enum is not None:
            data["enum"] = list(self.enum)
        data["description"] = self.description
        return data


FIELD_SPECS: dict[str, FieldSpec] = {
    "document_type": FieldSpec(
        description="The type of the document, either 'id_card' or 'passport'.",
        enum=tuple(t.value for t in DocumentType),
    ),
    "full_name": FieldSpec(description="The person's full name in Arabic (الاسم الكامل)."),
    "national_id": FieldSpec(
        description="The national identification number (رقم الهوية الوطنية)."
    ),
    "passport_number": FieldSpec(description="The passport number (رقم جواز السفر)."),
    "nationality": FieldSpec(description="The nationality in Arabic (الجنسية)."),
    "date_of_birth": FieldSpec(
        description="Date of birth, preferably in YYYY-MM-DD format (تاريخ الميلاد)."
    ),
    "place_of_birth": FieldSpec(description="The place of birth in Arabic (مكان الميلاد)."),
    "gender": FieldSpec(
        description="Gender, as 'Male' or 'Female' or in Arabic 'ذكر'/'أنثى' (الجنس)."
    ),
    "issue_date": FieldSpec(
        description=(
            "The document's issue date, preferably in YYYY-MM-DD format (تاريخ الإصدار)."
        )
    ),
    "expiry_date": FieldSpec(
        description=(
            "The document's expiry date, preferably in YYYY-MM-DD format (تاريخ الانتهاء)."
        )
    ),
    "mrz": FieldSpec(description="The full Machine Readable Zone (MRZ) text if available."),
    "blood_group": FieldSpec(description="The blood group, e.g., A+, O- (فصيلة الدم)."),
}

BASE_FIELDS: tuple[str, ...] = ("document_type",)

FIELD_GROUPS: dict[DocumentPart, tuple[str, ...]] = {
    DocumentPart.ID_FRONT: (
        "full_name",
        "national_id",
        "date_of_birth",
        "place_of_birth",
        "gender",
        "blood_group",
    ),
    DocumentPart.ID_BACK: (
        "issue_date",
        "expiry_date",
    ),
    DocumentPart.PASSPORT_PAGE: (
        "full_name",
        "passport_number",
        "nationality",
        "date_of_birth",
        "place_of_birth",
        "gender",
        "issue_date",
        "expiry_date",
        "mrz",
    ),
}


class FieldContract(Mapping[str, FieldSpec]):
    """Ordered, immutable mapping of permitted field names to their specs."""

    def __init__(self, fields: Iterable[str]) -> None:
        self._specs: dict[str, FieldSpec] = {name: FIELD_SPECS[name] for name in fields}

    def __getitem__(self, name: str) -> FieldSpec:
        return self._specs[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._specs)

    def __len__(self) -> int:
        return len(self._specs)

    def __repr__(self) -> str:
        return f"FieldContract({list(self._specs)!r})"

    def payload(self) -> dict[str, dict[str, Any]]:
        """Return the contract as ``{field: {type, enum?, description}}``."""
        return {name: spec.payload() for name, spec in self._specs.items()}

    def json_schema(self) -> dict[str, Any]:
        """Return the contract as a strict JSON Schema object with nullable fields."""
        properties: dict[str, Any] = {}
        for name, spec in self._specs.items():
            prop: dict[str, Any] = {
                "type": [spec.type, "null"],
                "description": spec.description,
            }
            if spec.enum is not None:
                prop["enum"] = [*spec.enum, None]
            properties[name] = prop
        return {
            "type": "object",
            "properties": properties,
            "required": list(self._specs),
            "additionalProperties": False,
        }


def build_schema(doc_type: DocumentType, parts: Iterable[DocumentPart]) -> FieldContract:
    """Fold the field groups of the supplied parts into a FieldContract.

    ``doc_type`` is accepted for symmetry with ``composition``; the parts
    already encode which document they belong to.
    """
    _ = doc_type
    active = set(parts)
    names: list[str] = list(BASE_FIELDS)
    for part in DocumentPart:
        if part not in active:
            continue
        for name in FIELD_GROUPS[part]:
            if name not in names:
                names.append(name)
    return FieldContract(names)
