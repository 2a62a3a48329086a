"""Tesseract command line infrastructure."""

from .engine_adapter import OCRRequest, OCRResponse, TesseractCLIEngine
from .tsv import OCRWord, parse_tsv_words, words_to_text

__all__ = [
    "OCRRequest",
    "OCRResponse",
    "OCRWord",
    "TesseractCLIEngine",
    "parse_tsv_words",
    "words_to_text",
]
