"""Per-call value types of a recognition request.

Nothing here outlives a single request; all instances are immutable.
"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path


class OutputMode(Enum):
    """Output format requested from the engine.

    The value is the trailing config keyword passed on the command line.
    """

    TEXT = "txt"
    TSV = "tsv"

    @property
    def extension(self) -> str:
        return f".{self.value}"


@dataclass(frozen=True)
class ResolvedEnvironment:
    """Engine binary and tessdata prefix chosen for one request."""

    engine_path: Path
    data_prefix: Path
    language: str


@dataclass(frozen=True)
class EngineOutcome:
    """Raw result of one engine subprocess."""

    exit_success: bool
    stdout: bytes
    stderr: bytes
    returncode: int | None = None
