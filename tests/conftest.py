import json
from unittest.mock import MagicMock

import pytest

from kyc_extractor.documents.models import DocumentImage, DocumentImages
from kyc_extractor.records.models import KycRecord

# Content is never decoded as an image; only the bytes and MIME type matter.
PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 16
JPEG_BYTES = b"\xff\xd8\xff\xe0" + b"\x00" * 16


@pytest.fixture()
def front_image() -> DocumentImage:
    return DocumentImage(data=JPEG_BYTES, mime_type="image/jpeg")


@pytest.fixture()
def back_image() -> DocumentImage:
    return DocumentImage(data=PNG_BYTES, mime_type="image/png")


@pytest.fixture()
def passport_image() -> DocumentImage:
    return DocumentImage(data=JPEG_BYTES, mime_type="image/jpeg")


@pytest.fixture()
def id_card_images(front_image: DocumentImage, back_image: DocumentImage) -> DocumentImages:
    return DocumentImages(front=front_image, back=back_image)


@pytest.fixture()
def sample_record() -> KycRecord:
    return KycRecord(
        document_type="id_card",
        full_name="علي حسن",
        national_id="01010123456",
        date_of_birth="1990-01-01",
        place_of_birth="صنعاء",
        gender="ذكر",
        blood_group="O+",
    )


@pytest.fixture()
def mock_inference_client() -> MagicMock:
    """Inference client that answers with a fixed ID card front response."""
    client = MagicMock()
    client.infer.return_value = json.dumps({
        "document_type": "id_card",
        "full_name": "علي حسن",
        "national_id": "01010123456",
        "date_of_birth": "1990-01-01",
        "place_of_birth": "صنعاء",
        "gender": "ذكر",
        "blood_group": "O+",
    })
    return client
