from kyc_extractor.documents.models import DocumentImages, DocumentPart, DocumentType

# Request order of parts; labels and images are sent in this sequence.
PART_ORDER: tuple[DocumentPart, ...] = (
    DocumentPart.ID_FRONT,
    DocumentPart.ID_BACK,
    DocumentPart.PASSPORT_PAGE,
)


def composition(doc_type: DocumentType, images: DocumentImages) -> frozenset[DocumentPart]:
    """Return the document parts that were actually supplied for doc_type.

    Images that do not belong to the selected document type are ignored.
    The result may be empty; callers must check before requesting extraction.
    """
    parts: set[DocumentPart] = set()
    if doc_type is DocumentType.ID_CARD:
        if images.front is not None:
            parts.add(DocumentPart.ID_FRONT)
        if images.back is not None:
            parts.add(DocumentPart.ID_BACK)
    elif images.passport is not None:
        parts.add(DocumentPart.PASSPORT_PAGE)
    return frozenset(parts)


def ordered_parts(parts: frozenset[DocumentPart]) -> list[DocumentPart]:
    return [part for part in PART_ORDER if part in parts]
