"""OCR engine adapter driving the tesseract command line binary."""

import asyncio
from dataclasses import dataclass
from typing import Any, Self, final, override

from structlog import get_logger

from ocrbridge.application.ports.outbound.engine import (
    ConfigurableEngine,
    track_stats,
    track_stats_async,
)
from ocrbridge.config import EnvironmentOverrides
from ocrbridge.domain.entities import EngineOutcome, OutputMode, ResolvedEnvironment
from ocrbridge.domain.exceptions import DecodeError, WorkspaceError
from ocrbridge.domain.protocols import BaseRequest, BaseResponse
from ocrbridge.infrastructure.tesseract.extractor import extract
from ocrbridge.infrastructure.tesseract.invoker import invoke, invoke_async
from ocrbridge.infrastructure.tesseract.locator import locate_data_prefix, locate_engine
from ocrbridge.infrastructure.tesseract.workspace import ScratchWorkspace
from ocrbridge.schemas.configs import TesseractCLIConfig
from ocrbridge.shared import runtime_paths
from ocrbridge.shared.constants import DEFAULT_LANGUAGE
from ocrbridge.shared.logger import Logger

logger: Logger = get_logger(__name__)


@dataclass(frozen=True)
class OCRRequest(BaseRequest[bytes]):
    """Request for OCR processing.

    Attributes:
        input: Encoded image bytes (PNG, JPEG, ...)
        language: Tesseract language selector
        mode: Requested output format
    """

    input: bytes
    language: str = DEFAULT_LANGUAGE
    mode: OutputMode = OutputMode.TEXT


@dataclass(frozen=True)
class OCRResponse(BaseResponse[str]):
    """Response from OCR processing.

    Attributes:
        output: Recognised text, or the raw TSV table in TSV mode
        mode: Output format that was produced
        environment: Binary and tessdata prefix used for the run
    """

    output: str
    mode: OutputMode
    environment: ResolvedEnvironment


@final
class TesseractCLIEngine(ConfigurableEngine[TesseractCLIConfig, OCRRequest, OCRResponse]):
    """Tesseract engine running the external binary once per request.

    Each request goes through the same steps: stage the image in a private
    scratch directory, resolve the binary and tessdata prefix, run the
    engine, read back the output. The scratch directory is removed however
    the request ends.

    Example:
        ```python
        engine = TesseractCLIEngine.from_config(TesseractCLIConfig())
        response = engine.process(OCRRequest(input=png_bytes, mode=OutputMode.TSV))
        print(response.output)
        ```
    """

    def __init__(self, config: TesseractCLIConfig) -> None:
        self._init_stats()
        self.config = config

    @classmethod
    @override
    def from_config(cls, config: TesseractCLIConfig) -> Self:
        return cls(config=config)

    def resolve(self, language: str) -> ResolvedEnvironment:
        """Locate the binary and the tessdata prefix for ``language``.

        Environment overrides are read on every call.

        Raises:
            EngineNotFoundError: If no binary is found.
            DataNotFoundError: If no prefix holds the language data.
        """
        overrides = EnvironmentOverrides()
        exe_dir = self.config.executable_dir or runtime_paths.executable_dir()
        resource_dir = self.config.resource_dir or runtime_paths.resource_dir()

        engine_path = locate_engine(
            exe_dir,
            overrides.tesseract_path,
            self.config.search_paths.engine,
        )
        data_prefix = locate_data_prefix(
            language,
            exe_dir,
            overrides.tessdata_prefix,
            resource_dir,
            self.config.search_paths.tessdata,
        )
        logger.debug(
            "resolved_tesseract",
            tesseract=str(engine_path),
            tessdata_prefix=str(data_prefix),
            language=language,
        )
        return ResolvedEnvironment(
            engine_path=engine_path, data_prefix=data_prefix, language=language
        )

    def _open_workspace(self, request: OCRRequest) -> ScratchWorkspace:
        if not request.input:
            raise DecodeError("Image data is empty")

        workspace = ScratchWorkspace.create(self.config.workspace_prefix)
        try:
            workspace.stage_input(request.input)
        except WorkspaceError:
            workspace.destroy()
            raise
        return workspace

    def _invocation(
        self, environment: ResolvedEnvironment, workspace: ScratchWorkspace, mode: OutputMode
    ) -> dict[str, Any]:
        return {
            "engine_path": environment.engine_path,
            "data_prefix": environment.data_prefix,
            "input_path": workspace.input_path,
            "output_prefix": workspace.output_prefix,
            "language": environment.language,
            "mode": mode,
            "dpi": self.config.dpi,
            "timeout": self.config.timeout_seconds,
        }

    def _finish(
        self,
        outcome: EngineOutcome,
        workspace: ScratchWorkspace,
        mode: OutputMode,
        environment: ResolvedEnvironment,
    ) -> OCRResponse:
        text = extract(outcome, workspace.output_prefix, mode)
        return OCRResponse(output=text, mode=mode, environment=environment)

    @override
    @track_stats
    def process(self, request: OCRRequest) -> OCRResponse:
        """Recognise the request image, blocking until the engine exits."""
        with self._open_workspace(request) as workspace:
            environment = self.resolve(request.language)
            outcome = invoke(**self._invocation(environment, workspace, request.mode))
            return self._finish(outcome, workspace, request.mode, environment)

    @track_stats_async
    async def aprocess(self, request: OCRRequest) -> OCRResponse:
        """Recognise the request image, awaiting the engine subprocess.

        Staging, resolution, extraction and cleanup run in worker threads so
        the event loop keeps serving other requests.
        """
        if not request.input:
            raise DecodeError("Image data is empty")

        workspace = ScratchWorkspace.create(self.config.workspace_prefix)
        try:
            await asyncio.to_thread(workspace.stage_input, request.input)
            environment = await asyncio.to_thread(self.resolve, request.language)
            outcome = await invoke_async(**self._invocation(environment, workspace, request.mode))
            return await asyncio.to_thread(
                self._finish, outcome, workspace, request.mode, environment
            )
        finally:
            await asyncio.to_thread(workspace.destroy)
