"""Exceptions raised by the OCR pipeline.

Every failure of a single recognition request surfaces as one of these
types. None of them are retried by the pipeline itself.
"""

from collections.abc import Sequence
from pathlib import Path


class OcrError(Exception):
    """Base class for all recognition failures."""

    pass


class DecodeError(OcrError):
    """Raise when the input payload is not usable image data."""

    pass


class WorkspaceError(OcrError):
    """Raise when the scratch workspace cannot be created or written."""

    pass


class EngineNotFoundError(OcrError):
    """Raise when no tesseract binary exists in any searched location."""

    def __init__(self, message: str, searched: Sequence[Path] = ()) -> None:
        super().__init__(message)
        self.searched = list(searched)


class DataNotFoundError(OcrError):
    """Raise when no tessdata directory holds the requested language."""

    def __init__(self, language: str, searched: Sequence[Path] = ()) -> None:
        super().__init__(
            f"No trained data found for language '{language}'. "
            f"Bundle or install {language}.traineddata."
        )
        self.language = language
        self.searched = list(searched)


class LaunchError(OcrError):
    """Raise when the engine binary exists but cannot be started."""

    pass


class EngineFailedError(OcrError):
    """Raise when the engine ran and exited with a failure status."""

    def __init__(self, stderr: str, returncode: int | None = None) -> None:
        super().__init__(f"Tesseract failed: {stderr}")
        self.stderr = stderr
        self.returncode = returncode


class OutputMissingError(OcrError):
    """Raise when the engine reported success but left no readable output."""

    pass


class EngineTimeoutError(OcrError):
    """Raise when the engine exceeded its time limit and was killed."""

    def __init__(self, timeout: float) -> None:
        super().__init__(f"Tesseract did not finish within {timeout} seconds")
        self.timeout = timeout
