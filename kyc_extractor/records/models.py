from dataclasses import asdict, dataclass, replace
from typing import Any

from kyc_extractor.documents.models import DocumentImages

# Fields the reviewer and the inference backend deal with.
DATA_FIELDS: tuple[str, ...] = (
    "document_type",
    "full_name",
    "national_id",
    "passport_number",
    "nationality",
    "date_of_birth",
    "place_of_birth",
    "gender",
    "issue_date",
    "expiry_date",
    "mrz",
    "blood_group",
    "phone_number",
)

# Embedded data URLs, carried only on persisted records.
IMAGE_FIELDS: tuple[str, ...] = (
    "id_front_image",
    "id_back_image",
    "passport_image",
)

ALL_FIELDS: tuple[str, ...] = DATA_FIELDS + IMAGE_FIELDS


@dataclass(frozen=True)
class LookupKey:
    """Field and value used to find an existing record for the same person."""

    field: str
    value: str


@dataclass(frozen=True)
class KycRecord:
    """Identity fields for one document holder. Every field is optional."""

    document_type: str | None = None
    full_name: str | None = None
    national_id: str | None = None
    passport_number: str | None = None
    nationality: str | None = None
    date_of_birth: str | None = None
    place_of_birth: str | None = None
    gender: str | None = None
    issue_date: str | None = None
    expiry_date: str | None = None
    mrz: str | None = None
    blood_group: str | None = None
    phone_number: str | None = None
    id_front_image: str | None = None
    id_back_image: str | None = None
    passport_image: str | None = None

    @classmethod
    def from_mapping(cls, data: dict[str, Any]) -> "KycRecord":
        """Build a record from a flat mapping; unknown keys are ignored."""
        return cls(**{name: data.get(name) for name in ALL_FIELDS})

    def to_dict(self) -> dict[str, str | None]:
        return asdict(self)

    def with_field(self, name: str, value: str | None) -> "KycRecord":
        """Return a copy with one field replaced (reviewer correction)."""
        if name not in ALL_FIELDS:
            raise ValueError(f"Unknown field '{name}'. Choose from: {list(ALL_FIELDS)}")
        return replace(self, **{name: value})

    def with_images(self, images: DocumentImages) -> "KycRecord":
        """Return a copy with the supplied images embedded as data URLs."""
        return replace(
            self,
            id_front_image=images.front.to_data_url() if images.front else None,
            id_back_image=images.back.to_data_url() if images.back else None,
            passport_image=images.passport.to_data_url() if images.passport else None,
        )

    def lookup_key(self) -> LookupKey | None:
        """National ID if present, else passport number, else None."""
        if self.national_id:
            return LookupKey("national_id", self.national_id)
        if self.passport_number:
            return LookupKey("passport_number", self.passport_number)
        return None


@dataclass(frozen=True)
class SavedKycRecord:
    """A record as held by the store."""

    id: str
    timestamp: int
    record: KycRecord
