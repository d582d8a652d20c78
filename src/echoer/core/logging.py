"""
CONTRACT: inline
ROLE: Structured internal diagnostics to console (and optionally the bus).

INPUTS:
  - Topic: n/a  Type: n/a
OUTPUTS:
  - Topic: log.events  Type: LogEvent

CONFIG KEYS:
  - logging.level: minimum level

PERF / TIMING:
  - one synchronous write per event

FAILURE MODES:
  - n/a

LOG EVENTS:
  - module=core.bus, event=queue_full, payload keys=topic, depth
  - module=core.bus, event=handler_failed, payload keys=topic, error

TESTS:
  - tests/test_logging.py

CONTRACT DETAILS:
# Logging contract

- Structured LogEvent with module, severity, and context.
- Diagnostics never go to the echo channel.
"""

from __future__ import annotations

import json
import sys
from typing import Any, Dict, Optional, TextIO

from echoer.core.clock import now_ns


LEVELS = {"debug": 10, "info": 20, "warning": 30, "error": 40}
LOG_TOPIC = "log.events"


class LogEmitter:
    """Emit structured LogEvents to the bus and stderr."""

    def __init__(self, bus: Optional[Any] = None, min_level: str = "info", stream: Optional[TextIO] = None) -> None:
        self._bus = bus
        self._min_level = LEVELS.get(min_level, 20)
        self._stream = stream

    def emit(self, level: str, module: str, event: str, payload: Optional[Dict[str, Any]] = None) -> None:
        record = {
            "t_ns": now_ns(),
            "level": level,
            "message": event,
            "context": {
                "module": module,
                "event": event,
                "details": payload or {},
            },
        }
        if self._bus is not None:
            self._bus.publish(LOG_TOPIC, record)
        if LEVELS.get(level, 0) >= self._min_level:
            stream = self._stream if self._stream is not None else sys.stderr
            print(json.dumps(record, sort_keys=True, default=str), file=stream)


def watch_bus(bus: Any, logger: LogEmitter) -> None:
    """Report bus queue drops and handler failures through ``logger``."""

    def _on_drop(topic: str, depth: int) -> None:
        if topic == LOG_TOPIC:
            # Reporting a dropped log event on the log topic would recurse.
            return
        logger.emit("warning", "core.bus", "queue_full", {"topic": topic, "depth": depth})

    def _on_error(topic: str, exc: BaseException) -> None:
        if topic == LOG_TOPIC:
            # Same as _on_drop: a failing log handler would see its own report.
            return
        logger.emit("error", "core.bus", "handler_failed", {"topic": topic, "error": repr(exc)})

    bus.set_drop_handler(_on_drop)
    bus.set_error_handler(_on_error)
