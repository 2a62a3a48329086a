"""Checks that a release bundle carries the OCR assets it needs.

Run before packaging so an application is never shipped without language
data. Missing trained data is fatal; a missing TSV config or bundled binary
only degrades the bundle to relying on a system install.
"""

from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path

from structlog import get_logger

from ocrbridge.shared.constants import DEFAULT_LANGUAGE, TESSERACT_BINARY, TRAINEDDATA_SUFFIX
from ocrbridge.shared.logger import Logger

logger: Logger = get_logger(__name__)


@dataclass
class BundleReport:
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors


def check_bundle(
    resource_root: Path,
    binary_dir: Path | None = None,
    languages: Sequence[str] = (DEFAULT_LANGUAGE,),
) -> BundleReport:
    """Inspect ``resource_root/tessdata`` and the optional binary directory.

    Args:
        resource_root: Directory that will become the app resource directory
        binary_dir: Directory expected to hold the bundled tesseract binary
        languages: Language codes that must ship with the bundle

    Returns:
        BundleReport with fatal errors and non-fatal warnings
    """
    report = BundleReport()
    tessdata = resource_root / "tessdata"

    for language in languages:
        trained = tessdata / f"{language}{TRAINEDDATA_SUFFIX}"
        if not trained.is_file():
            report.errors.append(f"Missing OCR traineddata at {trained}")

    tsv_config = tessdata / "configs" / "tsv"
    if not tsv_config.is_file():
        report.warnings.append(f"Missing TSV config at {tsv_config}; TSV output may fail")

    if binary_dir is not None:
        binary = binary_dir / TESSERACT_BINARY
        if not binary.is_file():
            report.warnings.append(
                f"Bundled tesseract not found at {binary}. "
                "OCR will fail on machines without system tesseract."
            )

    for message in report.errors:
        logger.error("bundle_check_failed", detail=message)
    for message in report.warnings:
        logger.warning("bundle_check_warning", detail=message)
    return report
