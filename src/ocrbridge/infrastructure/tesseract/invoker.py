"""Run the tesseract binary as a subprocess.

One subprocess per request. A non-zero exit status is reported through
``EngineOutcome``; only a failure to start the binary or a timeout raises.
"""

import asyncio
import os
import subprocess
from pathlib import Path

from structlog import get_logger

from ocrbridge.domain.entities import EngineOutcome, OutputMode
from ocrbridge.domain.exceptions import EngineTimeoutError, LaunchError
from ocrbridge.shared.constants import DEFAULT_DPI, TESSDATA_ENV_VAR
from ocrbridge.shared.logger import Logger

logger: Logger = get_logger(__name__)


def build_command(
    engine_path: Path,
    input_path: Path,
    output_prefix: Path,
    language: str,
    mode: OutputMode,
    dpi: int = DEFAULT_DPI,
) -> list[str]:
    return [
        str(engine_path),
        str(input_path),
        str(output_prefix),
        "-l",
        language,
        "--dpi",
        str(dpi),
        mode.value,
    ]


def build_environment(data_prefix: Path) -> dict[str, str]:
    env = os.environ.copy()
    env[TESSDATA_ENV_VAR] = str(data_prefix)
    return env


def invoke(
    engine_path: Path,
    data_prefix: Path,
    input_path: Path,
    output_prefix: Path,
    language: str,
    mode: OutputMode,
    dpi: int = DEFAULT_DPI,
    timeout: float | None = None,
) -> EngineOutcome:
    """Run tesseract and block until it exits.

    Raises:
        LaunchError: If the binary could not be started.
        EngineTimeoutError: If ``timeout`` expired; the child is killed.
    """
    command = build_command(engine_path, input_path, output_prefix, language, mode, dpi)
    try:
        completed = subprocess.run(
            command,
            env=build_environment(data_prefix),
            capture_output=True,
            timeout=timeout,
            check=False,
        )
    except subprocess.TimeoutExpired as e:
        logger.warning("tesseract_timeout", timeout=timeout, engine=str(engine_path))
        raise EngineTimeoutError(timeout or 0.0) from e
    except OSError as e:
        raise LaunchError(f"Failed to launch tesseract: {e}") from e

    return EngineOutcome(
        exit_success=completed.returncode == 0,
        stdout=completed.stdout,
        stderr=completed.stderr,
        returncode=completed.returncode,
    )


async def _kill(process: asyncio.subprocess.Process) -> None:
    """Kill a still running child and reap it."""
    if process.returncode is None:
        try:
            process.kill()
        except ProcessLookupError:
            pass
    await process.wait()


async def invoke_async(
    engine_path: Path,
    data_prefix: Path,
    input_path: Path,
    output_prefix: Path,
    language: str,
    mode: OutputMode,
    dpi: int = DEFAULT_DPI,
    timeout: float | None = None,
) -> EngineOutcome:
    """Run tesseract without blocking the event loop.

    Same contract as :func:`invoke`. Cancelling the awaiting task kills
    the child before the cancellation propagates.
    """
    command = build_command(engine_path, input_path, output_prefix, language, mode, dpi)
    try:
        process = await asyncio.create_subprocess_exec(
            *command,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
            env=build_environment(data_prefix),
        )
    except OSError as e:
        raise LaunchError(f"Failed to launch tesseract: {e}") from e

    try:
        stdout, stderr = await asyncio.wait_for(process.communicate(), timeout)
    except TimeoutError as e:
        await _kill(process)
        logger.warning("tesseract_timeout", timeout=timeout, engine=str(engine_path))
        raise EngineTimeoutError(timeout or 0.0) from e
    except asyncio.CancelledError:
        await _kill(process)
        logger.warning("tesseract_cancelled", engine=str(engine_path))
        raise

    return EngineOutcome(
        exit_success=process.returncode == 0,
        stdout=stdout,
        stderr=stderr,
        returncode=process.returncode,
    )
