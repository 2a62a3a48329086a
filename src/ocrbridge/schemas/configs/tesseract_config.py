from pathlib import Path

from pydantic import BaseModel, Field, PositiveFloat, PositiveInt

from ocrbridge.shared.constants import (
    DEFAULT_DPI,
    DEFAULT_LANGUAGE,
    DEFAULT_TIMEOUT_SECONDS,
    SYSTEM_ENGINE_PATHS,
    SYSTEM_TESSDATA_PATHS,
    WORKSPACE_PREFIX,
)


class SearchPaths(BaseModel):
    """System install locations probed after the bundled and override ones."""

    engine: list[Path] = Field(
        default_factory=lambda: list(SYSTEM_ENGINE_PATHS),
        description="Candidate tesseract binaries, most specific first",
    )
    tessdata: list[Path] = Field(
        default_factory=lambda: list(SYSTEM_TESSDATA_PATHS),
        description="Candidate tessdata directories, most specific first",
    )


class TesseractCLIConfig(BaseModel):
    """Configuration for the tesseract command line engine."""

    language: str = Field(
        default=DEFAULT_LANGUAGE,
        description="Language selector passed to tesseract (e.g. 'eng', 'eng+fra')",
    )
    dpi: PositiveInt = Field(
        default=DEFAULT_DPI, description="Resolution hint (--dpi parameter)"
    )
    timeout_seconds: PositiveFloat | None = Field(
        default=DEFAULT_TIMEOUT_SECONDS,
        description="Kill the engine after this many seconds; None waits forever",
    )
    executable_dir: Path | None = Field(
        default=None,
        description="Directory holding the bundled binary; detected at runtime when unset",
    )
    resource_dir: Path | None = Field(
        default=None,
        description="Application resource directory; detected at runtime when unset",
    )
    search_paths: SearchPaths = Field(default_factory=SearchPaths)
    workspace_prefix: str = Field(
        default=WORKSPACE_PREFIX, description="Name prefix of scratch directories"
    )
