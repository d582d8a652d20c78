"""
CONTRACT: inline
ROLE: Echoer notifier: log/warn/error/objekt/image to console and event channel.

INPUTS:
  - Topic: n/a  Type: n/a
OUTPUTS:
  - Topic: echoer  Type: Envelope dict
  - stdout  Type: colored text

CONFIG KEYS:
  - echoer.short: short (one line) vs long (JSON envelope) console output
  - echoer.delay_ms: pause after every emission
  - echoer.channel: channel name for published envelopes
  - echoer.color: ANSI colors on/off
  - logging.level: diagnostics level

PERF / TIMING:
  - console write and publish happen before the delay

FAILURE MODES:
  - value cannot be stringified -> str() of the value (or its default repr) -> log stringify_failed
  - console write failed -> envelope still published -> log render_failed
  - sink publish failed -> call still completes -> log publish_failed

LOG EVENTS:
  - module=notifier, event=stringify_failed, payload keys=type, error
  - module=notifier, event=render_failed, payload keys=method, error
  - module=notifier, event=publish_failed, payload keys=channel, method, error

TESTS:
  - tests/test_notifier.py
"""

from __future__ import annotations

import asyncio
import traceback
from collections.abc import Mapping
from typing import Any, Dict, Optional, Protocol

from echoer.contracts.messages import ERROR, IMAGE, LOG, OBJEKT, WARN, Envelope
from echoer.core.clock import now_iso
from echoer.core.config import get_path
from echoer.core.logging import LogEmitter
from echoer.render.console import ConsoleRenderer
from echoer.render.stringify import stringify


CHANNEL = "echoer"


class Sink(Protocol):
    def publish(self, channel: str, payload: Any) -> None: ...


class Echoer:
    """Send messages, objects, errors and images to the console and an event sink.

    Every operation renders to the console first, then publishes the envelope
    ``{"msg", "method", "time"}`` on ``channel`` when a sink is set, then waits
    ``delay_ms`` so tight caller loops do not flood the console.

    Usage::

        echo = Echoer(short=True, delay_ms=10, sink=bus)
        await echo.log("one", "two", 12, {"a": 88})
    """

    def __init__(
        self,
        short: bool = True,
        delay_ms: int = 100,
        sink: Optional[Sink] = None,
        *,
        channel: str = CHANNEL,
        renderer: Optional[ConsoleRenderer] = None,
        logger: Optional[LogEmitter] = None,
    ) -> None:
        if delay_ms < 0:
            raise ValueError(f"delay_ms must be >= 0, got {delay_ms}")
        self.short = short
        self.delay_ms = delay_ms
        self.sink = sink
        self.channel = channel
        self.renderer = renderer if renderer is not None else ConsoleRenderer()
        self.logger = logger if logger is not None else LogEmitter(None)

    @classmethod
    def from_config(cls, config: Dict[str, Any], sink: Optional[Sink] = None) -> "Echoer":
        renderer = ConsoleRenderer(color=bool(get_path(config, "echoer.color", True)))
        logger = LogEmitter(None, min_level=str(get_path(config, "logging.level", "info")))
        return cls(
            short=bool(get_path(config, "echoer.short", True)),
            delay_ms=int(get_path(config, "echoer.delay_ms", 100)),
            sink=sink,
            channel=str(get_path(config, "echoer.channel", CHANNEL)),
            renderer=renderer,
            logger=logger,
        )

    async def log(self, *values: Any) -> None:
        """Echo space-joined values, like print(): ``await echo.log("a", 1)``."""
        await self._echo(self._join(values), LOG)

    async def warn(self, *values: Any) -> None:
        """Echo space-joined values as a warning."""
        await self._echo(self._join(values), WARN)

    async def error(self, err: Any) -> None:
        """Echo an error as ``{"message", "stack"}``."""
        message, stack = _error_fields(err)
        await self._echo({"message": message, "stack": stack}, ERROR)

    async def objekt(self, obj: Any) -> None:
        """Echo an object as is; the console shows it as indented JSON."""
        await self._echo(obj, OBJEKT)

    async def image(self, img_b64: str) -> None:
        """Echo a base64 encoded image string."""
        await self._echo(img_b64, IMAGE)

    async def _echo(self, msg: Any, method: str) -> None:
        envelope = Envelope(msg=msg, method=method, time=now_iso())
        self._log_console(envelope)
        self._log_event(envelope)
        await asyncio.sleep(self.delay_ms / 1000.0)

    def _log_console(self, envelope: Envelope) -> None:
        try:
            self.renderer.render(envelope, short=self.short)
        except Exception as exc:  # noqa: BLE001
            self.logger.emit("error", "notifier", "render_failed", {"method": envelope.method, "error": repr(exc)})

    def _log_event(self, envelope: Envelope) -> None:
        if self.sink is None:
            return
        try:
            self.sink.publish(self.channel, envelope.to_dict())
        except Exception as exc:  # noqa: BLE001
            self.logger.emit(
                "error",
                "notifier",
                "publish_failed",
                {"channel": self.channel, "method": envelope.method, "error": repr(exc)},
            )

    def _join(self, values: Any) -> str:
        return " ".join(self._to_string(value) for value in values)

    def _to_string(self, value: Any) -> str:
        try:
            return stringify(value)
        except Exception as exc:  # noqa: BLE001
            self.logger.emit(
                "warning",
                "notifier",
                "stringify_failed",
                {"type": type(value).__name__, "error": repr(exc)},
            )
        return _passthrough(value)


def _passthrough(value: Any) -> str:
    try:
        return str(value)
    except Exception:  # noqa: BLE001
        # str() itself can fail (ints past the digit limit, broken __str__).
        return object.__repr__(value)


def _error_fields(err: Any) -> tuple[Any, Any]:
    if isinstance(err, Mapping):
        return err.get("message"), err.get("stack")
    if isinstance(err, BaseException):
        message = getattr(err, "message", None)
        if not isinstance(message, str):
            message = str(err)
        stack = getattr(err, "stack", None)
        if not isinstance(stack, str):
            stack = "".join(traceback.format_exception(type(err), err, err.__traceback__))
        return message, stack
    return getattr(err, "message", None), getattr(err, "stack", None)
