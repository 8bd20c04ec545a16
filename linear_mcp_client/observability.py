from __future__ import annotations

import json
import logging
import os
import threading
from collections import defaultdict
from dataclasses import dataclass
from typing import DefaultDict, Dict, Optional

LOGGER_NAME = "linear_mcp_client"
LOG_LEVEL_ENV_VAR = "MCP_CLIENT_LOG_LEVEL"


class StructuredFormatter(logging.Formatter):
    """One JSON object per line; ``server``, ``tool`` and ``duration_ms`` default to ""."""

    FIELDS = ("server", "tool", "duration_ms")

    def format(self, record: logging.LogRecord) -> str:
        entry: Dict[str, str] = {
            "ts": self.formatTime(record),
            "level": record.levelname,
        }
        for name in self.FIELDS:
            entry[name] = str(getattr(record, name, ""))
        entry["msg"] = record.getMessage()
        if record.exc_info:
            entry["exc"] = self.formatException(record.exc_info)
        return json.dumps(entry, ensure_ascii=False, separators=(",", ":"))


def setup_logger(log_level: Optional[str] = None, name: str = LOGGER_NAME) -> logging.Logger:
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger
    level_name = str(os.getenv(LOG_LEVEL_ENV_VAR) or log_level or "INFO").upper()
    logger.setLevel(getattr(logging, level_name, logging.INFO))
    handler = logging.StreamHandler()
    handler.setFormatter(StructuredFormatter())
    logger.addHandler(handler)
    logger.propagate = False
    return logger


@dataclass
class CallStats:
    calls: int = 0
    errors: int = 0
    total_ms: float = 0.0
    max_ms: float = 0.0

    def add(self, duration_ms: float, failed: bool) -> None:
        self.calls += 1
        self.errors += int(failed)
        self.total_ms += duration_ms
        self.max_ms = max(self.max_ms, duration_ms)

    def as_dict(self) -> Dict[str, float]:
        return {
            "calls": self.calls,
            "errors": self.errors,
            "avg_ms": self.total_ms / self.calls if self.calls else 0.0,
            "max_ms": self.max_ms,
        }


class InMemoryMetrics:
    """Call stats per remote operation, keyed like ``tools/list`` or ``tools/call:list_issues``."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._stats: DefaultDict[str, CallStats] = defaultdict(CallStats)

    def record(self, operation: str, duration_ms: float, error: bool) -> None:
        with self._lock:
            self._stats[operation].add(float(duration_ms), error)

    def snapshot(self) -> Dict[str, Dict[str, float]]:
        with self._lock:
            return {operation: stats.as_dict() for operation, stats in self._stats.items()}


def format_metrics(metrics: InMemoryMetrics) -> str:
    return json.dumps(metrics.snapshot(), sort_keys=True)
