"""structlog setup for the costume API.

``development`` renders colored console lines; every other environment
renders one JSON object per line. With LOG_FILE set, output is also
appended to that file.
"""

from __future__ import annotations

import logging
import sys
from typing import IO

import structlog

from costume.config import settings


class _LogFileTee:
    """File-like sink for PrintLogger: stdout plus an append-only log file.

    The file is best-effort. Failing to open or write it disables file output
    and keeps stdout.
    """

    def __init__(self, file_path: str) -> None:
        self._path = file_path
        self._file: IO[str] | None = None
        try:
            self._file = open(file_path, "a")  # noqa: SIM115
        except OSError as exc:
            # structlog is not configured yet
            self._warn(f"Could not open log file {file_path!r}: {exc}. Logging to stdout only.")

    @staticmethod
    def _warn(message: str) -> None:
        print(f"WARNING: {message}", file=sys.stderr)

    def _disable_file(self, action: str) -> None:
        self._file = None
        self._warn(f"Log file {action} failed for {self._path!r}. File logging disabled.")

    def write(self, data: str) -> None:
        sys.stdout.write(data)
        if self._file is None:
            return
        try:
            self._file.write(data)
            self._file.flush()
        except (OSError, ValueError):
            self._disable_file("write")

    def flush(self) -> None:
        sys.stdout.flush()
        if self._file is None:
            return
        try:
            self._file.flush()
        except (OSError, ValueError):
            self._disable_file("flush")


def _shared_processors() -> list[structlog.types.Processor]:
    processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
    ]
    if settings.environment == "development":
        processors.append(structlog.dev.ConsoleRenderer())
    else:
        processors += [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    return processors


def configure_logging() -> None:
    level = logging.getLevelName(settings.log_level.upper())
    if not isinstance(level, int):
        level = logging.INFO

    if settings.log_file:
        logger_factory = structlog.PrintLoggerFactory(file=_LogFileTee(settings.log_file))  # type: ignore[arg-type]
    else:
        logger_factory = structlog.PrintLoggerFactory()

    structlog.configure(
        processors=_shared_processors(),
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=logger_factory,
        cache_logger_on_first_use=True,
    )
