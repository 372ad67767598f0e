"""Structured logging for the calculation engine.

Each record is a single JSON object on its own line. Records go to stderr by
default so the CLI can keep stdout for its JSON result. Loggers can be bound
to a fixed context (e.g. the geometry under evaluation) and ``timer`` hands the
measured duration back to the caller, which the engine stores in
``CalculationResult.diag``.
"""

from __future__ import annotations

import json
import sys
import time
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, TextIO

import numpy as np

LEVELS = {"DEBUG": 0, "INFO": 1, "WARN": 2, "ERROR": 3}


def _level_number(level: str, default: int = 1) -> int:
    return LEVELS.get(level.upper(), default)


def _json_default(value: Any) -> Any:
    # numpy scalars from factor arrays, enum labels from the analysis
    if isinstance(value, np.generic):
        return value.item()
    if isinstance(value, Enum):
        return value.value
    return str(value)


@dataclass
class LogRecord:
    """One structured log line."""

    level: str
    message: str
    logger: str
    timestamp: float = field(default_factory=time.time)
    data: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "level": self.level,
            "message": self.message,
            "logger": self.logger,
            "timestamp": self.timestamp,
            **self.data,
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), default=_json_default)


@dataclass
class Timing:
    """Filled in by ``StructuredLogger.timer`` when the block exits."""

    operation: str
    elapsed_ms: float = 0.0


class StructuredLogger:
    """JSON-lines logger with a minimum level and optional bound context."""

    def __init__(
        self,
        name: str,
        output: TextIO | None = None,
        min_level: str = "INFO",
        context: dict[str, Any] | None = None,
    ) -> None:
        self.name = name
        self._output = output
        self._min_level = _level_number(min_level)
        self._context = dict(context or {})

    @property
    def output(self) -> TextIO:
        # resolved per call so a replaced sys.stderr (pytest capture) is used
        return self._output or sys.stderr

    def set_level(self, level: str) -> None:
        self._min_level = _level_number(level)

    def is_enabled_for(self, level: str) -> bool:
        return _level_number(level, default=0) >= self._min_level

    def bind(self, **context: Any) -> StructuredLogger:
        """Return a child logger that adds ``context`` to every record.

        The child shares this logger's output and current level.
        """
        child = StructuredLogger(self.name, output=self._output, context={**self._context, **context})
        child._min_level = self._min_level
        return child

    def _log(self, level: str, message: str, **data: Any) -> None:
        if not self.is_enabled_for(level):
            return
        record = LogRecord(level=level, message=message, logger=self.name, data={**self._context, **data})
        print(record.to_json(), file=self.output)

    def debug(self, message: str, **data: Any) -> None:
        self._log("DEBUG", message, **data)

    def info(self, message: str, **data: Any) -> None:
        self._log("INFO", message, **data)

    def warn(self, message: str, **data: Any) -> None:
        self._log("WARN", message, **data)

    def error(self, message: str, **data: Any) -> None:
        self._log("ERROR", message, **data)

    @contextmanager
    def timer(self, operation: str, **data: Any) -> Iterator[Timing]:
        """Time a block, log the duration at DEBUG and expose it to the caller.

        Usage:
            with logger.timer("compute_factors", geometry="prism") as timing:
                factors = compute_factors(dims)
            diag["elapsed_ms"] = timing.elapsed_ms

        The duration is recorded even if the block raises.
        """
        timing = Timing(operation)
        start = time.perf_counter()
        try:
            yield timing
        finally:
            timing.elapsed_ms = (time.perf_counter() - start) * 1000
            self.debug(f"{operation} completed", elapsed_ms=timing.elapsed_ms, **data)


_loggers: dict[str, StructuredLogger] = {}
_default_level = "INFO"


def get_logger(name: str) -> StructuredLogger:
    """Get or create the module-level logger called ``name``.

    Args:
        name: Logger name (typically __name__).

    Returns:
        StructuredLogger instance, created at the current default level.
    """
    if name not in _loggers:
        _loggers[name] = StructuredLogger(name, min_level=_default_level)
    return _loggers[name]


def set_log_level(level: str) -> None:
    """Set the minimum level for every registered logger and for later ones.

    Args:
        level: One of DEBUG, INFO, WARN, ERROR.

    Raises:
        ValueError: Unknown level name.
    """
    global _default_level
    if level.upper() not in LEVELS:
        raise ValueError(f"Unknown log level {level!r}; expected one of {', '.join(LEVELS)}")
    _default_level = level.upper()
    for logger in _loggers.values():
        logger.set_level(_default_level)
