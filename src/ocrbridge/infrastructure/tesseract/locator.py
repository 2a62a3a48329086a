"""Locate the tesseract binary and the tessdata prefix.

Both searches walk an ordered candidate list built fresh on every call
from the arguments, so a changed environment is always honoured.

Binary order:
    1. ``exe_dir/tesseract`` (bundled next to the application)
    2. explicit override (``TESSERACT_PATH``)
    3. system installs, most specific first

Tessdata order:
    1. explicit override and its ``tessdata`` subdirectory
    2. ``resource_dir/tessdata`` and ``resource_dir/resources/tessdata``
    3. ``exe_dir/../Resources/tessdata`` and ``.../Resources/resources/tessdata``
    4. system installs, most specific first

A tessdata candidate matches only when the trained data file itself is
present; an existing directory without the language does not count.
"""

import re
from collections.abc import Iterable, Sequence
from pathlib import Path

from structlog import get_logger

from ocrbridge.domain.exceptions import DataNotFoundError, EngineNotFoundError
from ocrbridge.shared.constants import (
    SYSTEM_ENGINE_PATHS,
    SYSTEM_TESSDATA_PATHS,
    TESSERACT_BINARY,
    TRAINEDDATA_SUFFIX,
)
from ocrbridge.shared.logger import Logger

logger: Logger = get_logger(__name__)

_LANGUAGE_RE = re.compile(r"^[A-Za-z0-9_]+(\+[A-Za-z0-9_]+)*$")


def engine_candidates(
    exe_dir: Path,
    env_override: Path | None = None,
    system_paths: Iterable[Path] = SYSTEM_ENGINE_PATHS,
) -> list[Path]:
    candidates = [exe_dir / TESSERACT_BINARY]
    if env_override is not None:
        candidates.append(env_override)
    candidates.extend(system_paths)
    return candidates


def locate_engine(
    exe_dir: Path,
    env_override: Path | None = None,
    system_paths: Iterable[Path] = SYSTEM_ENGINE_PATHS,
) -> Path:
    """Return the first tesseract binary that exists as a regular file.

    Raises:
        EngineNotFoundError: If no candidate exists.
    """
    candidates = engine_candidates(exe_dir, env_override, system_paths)
    for candidate in candidates:
        if candidate.is_file():
            return candidate

    raise EngineNotFoundError(
        f"Bundled tesseract not found at {candidates[0]} "
        f"and no system tesseract available",
        searched=candidates,
    )


def data_prefix_candidates(
    exe_dir: Path,
    env_prefix: Path | None = None,
    resource_dir: Path | None = None,
    system_paths: Iterable[Path] = SYSTEM_TESSDATA_PATHS,
) -> list[Path]:
    candidates: list[Path] = []
    if env_prefix is not None:
        candidates.append(env_prefix)
        candidates.append(env_prefix / "tessdata")
    if resource_dir is not None:
        candidates.append(resource_dir / "tessdata")
        # Some bundlers keep the source folder name one level deeper.
        candidates.append(resource_dir / "resources" / "tessdata")
    resources_root = exe_dir.parent / "Resources"
    candidates.append(resources_root / "tessdata")
    candidates.append(resources_root / "resources" / "tessdata")
    candidates.extend(system_paths)
    return candidates


def language_codes(language: str) -> list[str]:
    """Split a tesseract language selector such as ``eng+fra`` into codes.

    Raises:
        DataNotFoundError: If the selector is empty or malformed.
    """
    if not _LANGUAGE_RE.fullmatch(language or ""):
        raise DataNotFoundError(language)
    return language.split("+")


def has_trained_data(directory: Path, codes: Sequence[str]) -> bool:
    return all((directory / f"{code}{TRAINEDDATA_SUFFIX}").is_file() for code in codes)


def locate_data_prefix(
    language: str,
    exe_dir: Path,
    env_prefix: Path | None = None,
    resource_dir: Path | None = None,
    system_paths: Iterable[Path] = SYSTEM_TESSDATA_PATHS,
) -> Path:
    """Return the first directory directly holding ``<language>.traineddata``.

    For a multi-language selector every code must be present in the same
    directory.

    Raises:
        DataNotFoundError: If no candidate holds the trained data.
    """
    codes = language_codes(language)
    candidates = data_prefix_candidates(exe_dir, env_prefix, resource_dir, system_paths)
    for candidate in candidates:
        if has_trained_data(candidate, codes):
            return candidate

    logger.debug("tessdata_not_found", language=language, searched=[str(c) for c in candidates])
    raise DataNotFoundError(language, searched=candidates)
