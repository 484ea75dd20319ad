from pathlib import Path
from typing import ClassVar

from kyc_extractor.documents.models import DocumentImage
from kyc_extractor.exceptions import ImageLoadError


class ImageLoader:
    """Reads document images from disk and tags them with a MIME type."""

    MIME_TYPES: ClassVar[dict[str, str]] = {
        ".jpg": "image/jpeg",
        ".jpeg": "image/jpeg",
        ".png": "image/png",
        ".webp": "image/webp",
        ".gif": "image/gif",
    }

    def load(self, path: Path) -> DocumentImage:
        """Read an image file.

        Raises:
            ImageLoadError: if the file is missing, unreadable, empty,
                or has an unsupported extension.
        """
        mime_type = self.MIME_TYPES.get(path.suffix.lower())
        if mime_type is None:
            raise ImageLoadError(
                f"Unsupported image type '{path.suffix}'. Choose from: {sorted(self.MIME_TYPES)}"
            )
        if not path.exists():
            raise ImageLoadError(f"Image not found: {path}")
        try:
            data = path.read_bytes()
        except OSError as exc:
            raise ImageLoadError(f"Failed to read image {path}: {exc}") from exc
        if not data:
            raise ImageLoadError(f"Image is empty: {path}")
        return DocumentImage(data=data, mime_type=mime_type)

    def load_optional(self, path: Path | None) -> DocumentImage | None:
        return self.load(path) if path is not None else None
