"""Extraction package initialization."""
from codesync.extraction.document import PageDocument
from codesync.extraction.language import normalize_language
from codesync.extraction.platforms import EXTRACTORS, detect_platform, extract

__all__ = ["PageDocument", "normalize_language", "EXTRACTORS", "detect_platform", "extract"]
