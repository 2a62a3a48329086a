from pathlib import Path

from structlog import get_logger

from ocrbridge.domain.entities import EngineOutcome, OutputMode
from ocrbridge.domain.exceptions import EngineFailedError, OutputMissingError
from ocrbridge.shared.logger import Logger

logger: Logger = get_logger(__name__)


def output_path(output_prefix: Path, mode: OutputMode) -> Path:
    """Append the mode extension; tesseract never replaces a suffix."""
    return output_prefix.with_name(output_prefix.name + mode.extension)


def extract(outcome: EngineOutcome, output_prefix: Path, mode: OutputMode) -> str:
    """Turn an engine outcome into the recognised text.

    Raises:
        EngineFailedError: If the engine exited with a failure status.
        OutputMissingError: If the engine succeeded but the output file
            is absent or unreadable.
    """
    if not outcome.exit_success:
        stderr = outcome.stderr.decode("utf-8", errors="replace").strip()
        logger.warning("tesseract_failed", returncode=outcome.returncode, stderr=stderr)
        raise EngineFailedError(stderr, returncode=outcome.returncode)

    path = output_path(output_prefix, mode)
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise OutputMissingError(f"Failed to read OCR output {path}: {e}") from e

    try:
        path.unlink(missing_ok=True)
    except OSError as e:
        logger.warning("output_cleanup_failed", path=str(path), error=str(e))
    return text
