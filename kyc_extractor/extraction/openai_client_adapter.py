from typing import Any

import httpx
import openai

from kyc_extractor.exceptions import InferenceError
from kyc_extractor.extraction.client_base import BaseInferenceClient, InferencePart


class OpenAIClientAdapter(BaseInferenceClient):
    """Inference client built on the OpenAI-compatible chat API with image input."""

    def __init__(
        self,
        *,
        api_key: str,
        timeout_seconds: int,
        base_url: str | None = None,
    ) -> None:
        self._client = openai.OpenAI(
            api_key=api_key,
            timeout=timeout_seconds,
            base_url=base_url,
        )

    def infer(
        self,
        *,
        model: str,
        temperature: float,
        system_prompt: str,
        parts: list[InferencePart],
        json_schema: dict[str, object],
    ) -> str:
        messages: list[dict[str, Any]] = []
        if system_prompt:
            messages.append({"role": "system", "content": system_prompt})
        messages.append({"role": "user", "content": [self._content(p) for p in parts]})

        try:
            response = self._client.chat.completions.create(
                model=model,
                temperature=temperature,
                response_format={
                    "type": "json_schema",
                    "json_schema": {
                        "name": "kyc_record",
                        "strict": True,
                        "schema": json_schema,
                    },
                },
                messages=messages,  # type: ignore[arg-type]
            )
        except (openai.APIConnectionError, httpx.ConnectError, httpx.TimeoutException) as exc:
            raise InferenceError(f"Inference backend network error: {exc}") from exc
        except openai.APIError as exc:
            raise InferenceError(f"Inference backend API error: {exc}") from exc

        if not response.choices:
            raise InferenceError("Inference backend returned no choices")
        content = response.choices[0].message.content
        if content is None:
            raise InferenceError("Inference backend returned an empty response")
        return content

    @staticmethod
    def _content(part: InferencePart) -> dict[str, Any]:
        if part.image is not None:
            return {
                "type": "image_url",
                "image_url": {"url": part.image.to_data_url(), "detail": "high"},
            }
        return {"type": "text", "text": part.text}
