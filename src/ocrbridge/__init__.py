"""Run the tesseract OCR binary on in-memory images."""

from ocrbridge.api import (
    decode_image_payload,
    perform_recognition,
    perform_recognition_async,
    run_ocr,
    run_ocr_tsv,
)
from ocrbridge.domain.entities import OutputMode
from ocrbridge.domain.exceptions import (
    DataNotFoundError,
    DecodeError,
    EngineFailedError,
    EngineNotFoundError,
    EngineTimeoutError,
    LaunchError,
    OcrError,
    OutputMissingError,
    WorkspaceError,
)

__all__ = [
    "DataNotFoundError",
    "DecodeError",
    "EngineFailedError",
    "EngineNotFoundError",
    "EngineTimeoutError",
    "LaunchError",
    "OcrError",
    "OutputMissingError",
    "OutputMode",
    "WorkspaceError",
    "decode_image_payload",
    "perform_recognition",
    "perform_recognition_async",
    "run_ocr",
    "run_ocr_tsv",
]
