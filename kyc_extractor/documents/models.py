import base64
from dataclasses import dataclass
from enum import Enum


class DocumentType(str, Enum):
    """Kind of identification document being extracted."""

    ID_CARD = "id_card"
    PASSPORT = "passport"


class DocumentPart(Enum):
    """A physical face of a document; the value is its request label."""

    ID_FRONT = "ID CARD FRONT"
    ID_BACK = "ID CARD BACK"
    PASSPORT_PAGE = "PASSPORT PHOTO PAGE"

    @property
    def label(self) -> str:
        return self.value


@dataclass(frozen=True)
class DocumentImage:
    """Raw image bytes with their MIME type."""

    data: bytes
    mime_type: str = "image/jpeg"

    def to_base64(self) -> str:
        return base64.b64encode(self.data).decode("ascii")

    def to_data_url(self) -> str:
        return f"data:{self.mime_type};base64,{self.to_base64()}"


@dataclass(frozen=True)
class DocumentImages:
    """Images supplied for one extraction attempt."""

    front: DocumentImage | None = None
    back: DocumentImage | None = None
    passport: DocumentImage | None = None

    def for_part(self, part: DocumentPart) -> DocumentImage | None:
        if part is DocumentPart.ID_FRONT:
            return self.front
        if part is DocumentPart.ID_BACK:
            return self.back
        return self.passport

    def restricted_to(self, parts: frozenset[DocumentPart]) -> "DocumentImages":
        """Copy keeping only the images for the given parts."""
        return DocumentImages(
            front=self.front if DocumentPart.ID_FRONT in parts else None,
            back=self.back if DocumentPart.ID_BACK in parts else None,
            passport=self.passport if DocumentPart.PASSPORT_PAGE in parts else None,
        )

    def is_empty(self) -> bool:
        return self.front is None and self.back is None and self.passport is None
