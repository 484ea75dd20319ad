"""Multimodal extraction of identity fields from document images."""

import json
from dataclasses import replace
from pathlib import Path

from kyc_extractor.documents.composition import composition, ordered_parts
from kyc_extractor.documents.models import DocumentImages, DocumentPart, DocumentType
from kyc_extractor.documents.schema_builder import FieldContract, build_schema
from kyc_extractor.exceptions import NoInputError
from kyc_extractor.extraction.base import BaseExtractor
from kyc_extractor.extraction.client_base import BaseInferenceClient, InferencePart
from kyc_extractor.extraction.parser import parse
from kyc_extractor.extraction.prompt_loader import load_prompt_template, load_system_prompt
from kyc_extractor.logging.logger import Log
from kyc_extractor.records.models import KycRecord


class Extractor(BaseExtractor):
    """Sends labelled document images plus a narrowed field contract to a model."""

    def __init__(
        self,
        *,
        client: BaseInferenceClient,
        model: str,
        temperature: float = 0.0,
        prompt_template_path: Path | None = None,
        system_prompt_path: Path | None = None,
    ) -> None:
        self._client = client
        self._model = model
        self._temperature = max(0.0, min(0.2, temperature))
        self._prompt_template = load_prompt_template(prompt_template_path)
        self._system_prompt = load_system_prompt(system_prompt_path)

    def extract(self, doc_type: DocumentType, images: DocumentImages) -> KycRecord:
        parts, contract = self._negotiate(doc_type, images)
        raw_response = self._call_ai(doc_type, images, parts, contract)
        record = parse(raw_response, contract)
        if not record.document_type:
            record = replace(record, document_type=doc_type.value)

        populated = sum(1 for name in contract if getattr(record, name))
        Log.info(
            f"Extraction complete: {populated}/{len(contract)} fields from "
            f"{len(parts)} {doc_type.value} image(s)"
        )
        return record

    def extract_raw(self, doc_type: DocumentType, images: DocumentImages) -> str:
        """Run the single inference round-trip and return its raw text."""
        parts, contract = self._negotiate(doc_type, images)
        return self._call_ai(doc_type, images, parts, contract)

    def _negotiate(
        self, doc_type: DocumentType, images: DocumentImages
    ) -> tuple[list[DocumentPart], FieldContract]:
        parts = composition(doc_type, images)
        if not parts:
            raise NoInputError(
                f"Please upload at least one {doc_type.value.replace('_', ' ')} image."
            )
        if doc_type is DocumentType.ID_CARD and images.passport is not None:
            Log.warning("Ignoring passport image supplied for an ID card extraction")
        if doc_type is DocumentType.PASSPORT and (images.front or images.back):
            Log.warning("Ignoring ID card images supplied for a passport extraction")
        return ordered_parts(parts), build_schema(doc_type, parts)

    def _call_ai(
        self,
        doc_type: DocumentType,
        images: DocumentImages,
        parts: list[DocumentPart],
        contract: FieldContract,
    ) -> str:
        request_parts = self._build_parts(doc_type, images, parts, contract)
        Log.debug(f"Extraction request: {[p.label for p in parts]}, fields {list(contract)}")

        raw_response = self._client.infer(
            model=self._model,
            temperature=self._temperature,
            system_prompt=self._system_prompt,
            parts=request_parts,
            json_schema=contract.json_schema(),
        )
        Log.debug(f"AI raw response:\n{raw_response}")
        return raw_response

    def _build_parts(
        self,
        doc_type: DocumentType,
        images: DocumentImages,
        parts: list[DocumentPart],
        contract: FieldContract,
    ) -> list[InferencePart]:
        request_parts: list[InferencePart] = []
        for part in parts:
            # Each label immediately precedes its image.
            request_parts.append(InferencePart(text=part.label))
            request_parts.append(InferencePart(image=images.for_part(part)))
        request_parts.append(InferencePart(text=self._build_prompt(doc_type, contract)))
        return request_parts

    def _build_prompt(self, doc_type: DocumentType, contract: FieldContract) -> str:
        return self._prompt_template.format(
            document_type=doc_type.value.replace("_", " "),
            field_contract=json.dumps(contract.payload(), ensure_ascii=False, indent=2),
        )
