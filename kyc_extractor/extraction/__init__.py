from kyc_extractor.extraction.base import BaseExtractor
from kyc_extractor.extraction.extractor import Extractor
from kyc_extractor.extraction.factory import ExtractorFactory
from kyc_extractor.extraction.parser import parse

__all__ = ["BaseExtractor", "Extractor", "ExtractorFactory", "parse"]
