from __future__ import annotations

import logging
from pathlib import Path

from dependency_injector.resources import Resource

from ...shared.to_jsonable import to_jsonable
from .handlers import build_human_console_handler, build_json_file_handler


class AppLogger(Resource):
    """Structured logger for ingestion, comparison and explanation events.

    Writes JSON lines to `logs_dir/log_file_name` and optionally mirrors
    events to the console in human-readable form.
    """

    def init(
        self,
        *,
        logs_dir: Path,
        log_file_name: str = "issue_delta.jsonl",
        logger_name: str = "issue_delta",
        console_output: bool = False,
        level: str = "INFO",
    ) -> "AppLogger":
        """Initialize logger handlers.

        Returns:
            Self for dependency_injector Resource pattern
        """
        numeric_level = getattr(logging, level.upper())
        self._logger = logging.getLogger(logger_name)
        self._logger.setLevel(numeric_level)
        self._logger.propagate = False

        self._logger.handlers.clear()
        self._handlers: list[logging.Handler] = []

        file_handler = build_json_file_handler(logs_dir / log_file_name, level=numeric_level)
        self._logger.addHandler(file_handler)
        self._handlers.append(file_handler)

        if console_output:
            console_handler = build_human_console_handler(level=numeric_level)
            self._logger.addHandler(console_handler)
            self._handlers.append(console_handler)

        return self

    def shutdown(self, resource: "AppLogger") -> None:
        """Flush and close handlers so log files are released."""
        for handler in self._handlers:
            handler.flush()
            handler.close()
        self._logger.handlers.clear()

    @staticmethod
    def _extra(kwargs: dict) -> dict | None:
        return {k: to_jsonable(v) for k, v in kwargs.items()} if kwargs else None

    def debug(self, message: str, **kwargs) -> None:
        self._logger.debug(message, extra=self._extra(kwargs))

    def info(self, message: str, **kwargs) -> None:
        self._logger.info(message, extra=self._extra(kwargs))

    def warning(self, message: str, **kwargs) -> None:
        self._logger.warning(message, extra=self._extra(kwargs))

    def error(self, message: str, exc_info: bool = False, **kwargs) -> None:
        self._logger.error(message, extra=self._extra(kwargs), exc_info=exc_info)

    def exception(self, message: str, **kwargs) -> None:
        """Log at ERROR level with the active exception's traceback."""
        self._logger.exception(message, extra=self._extra(kwargs))
