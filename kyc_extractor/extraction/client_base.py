from abc import ABC, abstractmethod
from dataclasses import dataclass

from kyc_extractor.documents.models import DocumentImage


@dataclass(frozen=True)
class InferencePart:
    """One element of a multi-part request: either text or an image."""

    text: str | None = None
    image: DocumentImage | None = None

    def __post_init__(self) -> None:
        if (self.text is None) == (self.image is None):
            raise ValueError("InferencePart needs exactly one of text or image")


class BaseInferenceClient(ABC):
    """Contract for provider-specific multimodal inference clients."""

    @abstractmethod
    def infer(
        self,
        *,
        model: str,
        temperature: float,
        system_prompt: str,
        parts: list[InferencePart],
        json_schema: dict[str, object],
    ) -> str:
        """Return the provider response as plain text.

        Raises:
            InferenceError: on transport or provider failure.
        """
