import os
from pathlib import Path

TESSERACT_BINARY = "tesseract.exe" if os.name == "nt" else "tesseract"
TESSDATA_ENV_VAR = "TESSDATA_PREFIX"
TRAINEDDATA_SUFFIX = ".traineddata"

DEFAULT_LANGUAGE = "eng"
DEFAULT_DPI = 300
DEFAULT_TIMEOUT_SECONDS = 120.0

INPUT_FILENAME = "input.png"
OUTPUT_STEM = "output"
WORKSPACE_PREFIX = "ocrbridge-"

# Most specific install first.
SYSTEM_ENGINE_PATHS: tuple[Path, ...] = (
    Path("/opt/homebrew/bin/tesseract"),
    Path("/usr/local/bin/tesseract"),
    Path("/usr/bin/tesseract"),
) + ((Path("C:/Program Files/Tesseract-OCR/tesseract.exe"),) if os.name == "nt" else ())

SYSTEM_TESSDATA_PATHS: tuple[Path, ...] = (
    Path("/opt/homebrew/share/tessdata"),
    Path("/usr/local/share/tessdata"),
    Path("/usr/share/tesseract-ocr/5/tessdata"),
    Path("/usr/share/tesseract-ocr/4.00/tessdata"),
    Path("/usr/share/tessdata"),
) + ((Path("C:/Program Files/Tesseract-OCR/tessdata"),) if os.name == "nt" else ())
