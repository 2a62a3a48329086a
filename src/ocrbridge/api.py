"""Public entry points for recognising a single in-memory image.

``run_ocr`` and ``run_ocr_tsv`` accept the base64 payloads a desktop front
end sends over its command bridge; ``perform_recognition`` takes raw bytes.
"""

import base64
import binascii
import io

from PIL import Image, UnidentifiedImageError

from ocrbridge.domain.entities import OutputMode
from ocrbridge.domain.exceptions import DecodeError
from ocrbridge.infrastructure.tesseract.engine_adapter import OCRRequest, TesseractCLIEngine
from ocrbridge.schemas.configs import TesseractCLIConfig


def _engine(engine: TesseractCLIEngine | None) -> TesseractCLIEngine:
    return engine or TesseractCLIEngine.from_config(TesseractCLIConfig())


def _request(
    engine: TesseractCLIEngine, image_bytes: bytes, language: str | None, mode: OutputMode
) -> OCRRequest:
    if language is None:
        language = engine.config.language
    return OCRRequest(input=image_bytes, language=language, mode=mode)


def perform_recognition(
    image_bytes: bytes,
    language: str | None = None,
    mode: OutputMode = OutputMode.TEXT,
    *,
    engine: TesseractCLIEngine | None = None,
) -> str:
    """Recognise ``image_bytes`` and return the text (or TSV table).

    Raises:
        OcrError: Any subclass, see ``ocrbridge.domain.exceptions``.
    """
    engine = _engine(engine)
    return engine.process(_request(engine, image_bytes, language, mode)).output


async def perform_recognition_async(
    image_bytes: bytes,
    language: str | None = None,
    mode: OutputMode = OutputMode.TEXT,
    *,
    engine: TesseractCLIEngine | None = None,
) -> str:
    """Like :func:`perform_recognition` but awaits the engine subprocess."""
    engine = _engine(engine)
    response = await engine.aprocess(_request(engine, image_bytes, language, mode))
    return response.output


def decode_image_payload(payload: str) -> bytes:
    """Decode a base64 image payload and check that it is an image.

    Raises:
        DecodeError: If the payload is empty, not base64, or not an image.
    """
    try:
        data = base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as e:
        raise DecodeError(f"Failed to decode image data: {e}") from e
    if not data:
        raise DecodeError("Failed to decode image data: payload is empty")

    try:
        with Image.open(io.BytesIO(data)) as image:
            image.verify()
    except (UnidentifiedImageError, OSError, SyntaxError, ValueError) as e:
        raise DecodeError(f"Failed to decode image data: {e}") from e
    return data


def run_ocr(
    image_base64: str,
    language: str | None = None,
    *,
    engine: TesseractCLIEngine | None = None,
) -> str:
    return perform_recognition(
        decode_image_payload(image_base64), language, OutputMode.TEXT, engine=engine
    )


def run_ocr_tsv(
    image_base64: str,
    language: str | None = None,
    *,
    engine: TesseractCLIEngine | None = None,
) -> str:
    return perform_recognition(
        decode_image_payload(image_base64), language, OutputMode.TSV, engine=engine
    )
