from structlog.typing import FilteringBoundLogger

Logger = FilteringBoundLogger
