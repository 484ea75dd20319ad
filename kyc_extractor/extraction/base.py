from abc import ABC, abstractmethod

from kyc_extractor.documents.models import DocumentImages, DocumentType
from kyc_extractor.records.models import KycRecord


class BaseExtractor(ABC):
    """Contract for all document extraction adapters."""

    @abstractmethod
    def extract(self, doc_type: DocumentType, images: DocumentImages) -> KycRecord:
        """Extract identity fields from the supplied document images.

        Args:
            doc_type: Selected document type.
            images: Front/back images of an ID card, or a passport page.

        Returns:
            KycRecord populated only with fields licensed by the supplied faces.

        Raises:
            NoInputError: if no image relevant to doc_type was supplied.
            InferenceError: if the backend call fails.
            MalformedResponseError: if the response is not a JSON object.
        """
