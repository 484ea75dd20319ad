class KycError(Exception):
    """Base exception for all KYC extraction and reconciliation errors."""


class NoInputError(KycError):
    """Raised when no document image relevant to the selected type was supplied."""


class InferenceError(KycError):
    """Raised when the inference backend is unreachable or returns a failure."""


class MalformedResponseError(KycError):
    """Raised when the inference response is not a JSON object."""


class StoreError(KycError):
    """Raised when a record store operation fails."""


class SessionStateError(KycError):
    """Raised when a review session operation is not allowed in its current state."""


class ImageLoadError(KycError):
    """Raised when a document image cannot be read from disk."""
