from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class EnvironmentOverrides(BaseSettings):
    """Developer overrides read from the process environment.

    Instantiate per request: the environment may change between calls.
    """

    model_config = SettingsConfigDict(env_ignore_empty=True, extra="ignore")

    tesseract_path: Path | None = Field(
        default=None, description="Explicit tesseract binary (TESSERACT_PATH)"
    )
    tessdata_prefix: Path | None = Field(
        default=None, description="Explicit tessdata directory (TESSDATA_PREFIX)"
    )


class LoggingConfig(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="OCRBRIDGE_", extra="ignore")

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    logs_dir: Path | None = None
    colors: bool = True
