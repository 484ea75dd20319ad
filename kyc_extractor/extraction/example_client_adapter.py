"""Example inference client adapter.

Use this module as a reference when implementing new provider adapters.
Implement BaseInferenceClient and register the provider in ExtractorFactory.
"""

import json
from typing import ClassVar

from kyc_extractor.extraction.client_base import BaseInferenceClient, InferencePart


class ExampleClientAdapter(BaseInferenceClient):
    """Example adapter that fills a fixed name and null for every other requested field.

    No network calls. Useful for local development, tests, and as a template
    for building real provider adapters.
    """

    DEFAULT_VALUES: ClassVar[dict[str, str]] = {
        "full_name": "EXAMPLE PERSON",
    }

    def infer(
        self,
        *,
        model: str,
        temperature: float,
        system_prompt: str,
        parts: list[InferencePart],
        json_schema: dict[str, object],
    ) -> str:
        _ = model, temperature, system_prompt, parts
        properties = json_schema.get("properties", {})
        fields = list(properties) if isinstance(properties, dict) else []
        return json.dumps({name: self.DEFAULT_VALUES.get(name) for name in fields})
