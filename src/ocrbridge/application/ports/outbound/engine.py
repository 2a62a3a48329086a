from abc import ABC, abstractmethod
from collections.abc import Awaitable, Callable
from functools import wraps
from threading import Lock
from typing import Any, Concatenate, Literal, Self, TypedDict

from pydantic import BaseModel

from ocrbridge.domain.protocols import BaseRequest, BaseResponse


class EngineStats(TypedDict):
    """Statistics tracked by all engines."""

    calls: int
    errors: int


class ConfigurableEngine[
    ConfigT: BaseModel,
    RequestT: BaseRequest[Any],
    ResponseT: BaseResponse[Any],
](ABC):
    """Base engine interface generic over config, request, and response types.

    Type Parameters:
        ConfigT: The configuration type for this engine
        RequestT: The request type this engine accepts
        ResponseT: The response type this engine returns

    Stats Tracking:
        Engines track basic statistics (calls, errors). Decorate ``process``
        with @track_stats (or ``aprocess`` with @track_stats_async) to count
        them automatically. Counters are guarded by a lock, so an engine
        shared between threads reports exact totals.
    """

    _stats: EngineStats
    _stats_lock: Lock

    def _init_stats(self) -> None:
        """Initialize stats for this engine instance. Call in __init__."""
        self._stats_lock = Lock()
        self._stats = _create_base_stats()

    def _count(self, key: Literal["calls", "errors"]) -> None:
        with self._stats_lock:
            self._stats[key] += 1

    @classmethod
    @abstractmethod
    def from_config(cls, config: ConfigT) -> Self:
        raise NotImplementedError

    @abstractmethod
    def process(self, request: RequestT) -> ResponseT:
        raise NotImplementedError

    @property
    def stats(self) -> EngineStats:
        """Get a copy of current engine statistics."""
        with self._stats_lock:
            return EngineStats(**self._stats)

    def clear_stats(self) -> None:
        """Reset engine statistics."""
        with self._stats_lock:
            self._stats = _create_base_stats()


def _create_base_stats() -> EngineStats:
    """Create a fresh EngineStats instance."""
    return EngineStats(calls=0, errors=0)


Engine = ConfigurableEngine[Any, Any, Any]


def track_stats[**P, R](
    func: Callable[Concatenate[Engine, P], R],
) -> Callable[Concatenate[Engine, P], R]:
    @wraps(func)
    def wrapper(self: Engine, *args: P.args, **kwargs: P.kwargs) -> R:
        self._count("calls")
        try:
            return func(self, *args, **kwargs)
        except Exception:
            self._count("errors")
            raise

    return wrapper


def track_stats_async[**P, R](
    func: Callable[Concatenate[Engine, P], Awaitable[R]],
) -> Callable[Concatenate[Engine, P], Awaitable[R]]:
    @wraps(func)
    async def wrapper(self: Engine, *args: P.args, **kwargs: P.kwargs) -> R:
        self._count("calls")
        try:
            return await func(self, *args, **kwargs)
        except Exception:
            self._count("errors")
            raise

    return wrapper
