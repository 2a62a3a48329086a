"""Scratch directory holding one request's input image and engine output."""

import shutil
import tempfile
from pathlib import Path
from types import TracebackType
from typing import Self, final

from structlog import get_logger

from ocrbridge.domain.exceptions import WorkspaceError
from ocrbridge.shared.constants import INPUT_FILENAME, OUTPUT_STEM, WORKSPACE_PREFIX
from ocrbridge.shared.logger import Logger

logger: Logger = get_logger(__name__)


@final
class ScratchWorkspace:
    """Temporary directory owned by exactly one recognition request.

    Use as a context manager so the directory is removed on every exit path:

        ```python
        with ScratchWorkspace.create() as workspace:
            workspace.stage_input(image_bytes)
            ...
        ```
    """

    def __init__(self, directory: Path) -> None:
        self.dir = directory
        self.input_path = directory / INPUT_FILENAME
        self.output_prefix = directory / OUTPUT_STEM

    @classmethod
    def create(cls, prefix: str = WORKSPACE_PREFIX) -> Self:
        """Allocate a uniquely named temporary directory.

        Raises:
            WorkspaceError: If the directory cannot be created.
        """
        try:
            directory = tempfile.mkdtemp(prefix=prefix)
        except OSError as e:
            raise WorkspaceError(f"Failed to create temp dir: {e}") from e
        return cls(Path(directory))

    def stage_input(self, data: bytes) -> Path:
        """Write the image bytes to the fixed input file.

        Raises:
            WorkspaceError: If the file cannot be written.
        """
        try:
            self.input_path.write_bytes(data)
        except OSError as e:
            raise WorkspaceError(f"Failed to write image file: {e}") from e
        return self.input_path

    def destroy(self) -> None:
        """Remove the directory and everything in it. Never raises."""
        try:
            shutil.rmtree(self.dir)
        except FileNotFoundError:
            pass
        except OSError as e:
            logger.warning("workspace_cleanup_failed", dir=str(self.dir), error=str(e))

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.destroy()
