"""
CONTRACT: inline
ROLE: In-process pub/sub for echo envelopes and diagnostics.

INPUTS:
  - Topic: n/a  Type: n/a
OUTPUTS:
  - Topic: echoer  Type: Envelope dict
  - Topic: log.events  Type: LogEvent

CONFIG KEYS:
  - bus.max_queue_depth: per-subscriber queue depth

PERF / TIMING:
  - publish never blocks the publisher

FAILURE MODES:
  - queue full -> drop oldest -> log queue_full
  - handler raised -> handler skipped -> log handler_failed

LOG EVENTS:
  - module=core.bus, event=queue_full, payload keys=topic, depth
  - module=core.bus, event=handler_failed, payload keys=topic, error

TESTS:
  - tests/test_bus.py

CONTRACT DETAILS:
# Bus contract

- Handlers registered per topic are called inline, in registration order.
- Queue subscribers get bounded queues; overflow drops the oldest item.
- Publishers never see subscriber results or subscriber failures.
"""

from __future__ import annotations

import queue
import threading
from collections import defaultdict
from typing import Any, Callable, Dict, List, Optional


Handler = Callable[[Any], None]
DropHandler = Callable[[str, int], None]
ErrorHandler = Callable[[str, BaseException], None]


class Bus:
    """Simple in-process pub/sub bus with handlers and bounded queues."""

    def __init__(
        self,
        max_queue_depth: int = 8,
        on_drop: Optional[DropHandler] = None,
        on_error: Optional[ErrorHandler] = None,
    ) -> None:
        self._max_queue_depth = max_queue_depth
        self._on_drop = on_drop
        self._on_error = on_error
        self._lock = threading.Lock()
        self._stats_lock = threading.Lock()
        self._subscribers: Dict[str, List[queue.Queue[Any]]] = defaultdict(list)
        self._handlers: Dict[str, List[Handler]] = defaultdict(list)
        self._drop_counts: Dict[str, int] = defaultdict(int)

    def set_drop_handler(self, on_drop: Optional[DropHandler]) -> None:
        self._on_drop = on_drop

    def set_error_handler(self, on_error: Optional[ErrorHandler]) -> None:
        self._on_error = on_error

    def get_drop_counts(self) -> Dict[str, int]:
        with self._stats_lock:
            return dict(self._drop_counts)

    def register(self, topic: str, handler: Handler) -> Callable[[], None]:
        """Call ``handler(msg)`` for every message published on ``topic``.

        Returns a callable that removes the handler again.
        """
        with self._lock:
            self._handlers[topic].append(handler)

        def _unregister() -> None:
            with self._lock:
                handlers = self._handlers.get(topic, [])
                if handler in handlers:
                    handlers.remove(handler)

        return _unregister

    def subscribe(self, topic: str) -> queue.Queue[Any]:
        """Subscribe to a topic and return a queue of messages."""
        q: queue.Queue[Any] = queue.Queue(maxsize=self._max_queue_depth)
        with self._lock:
            self._subscribers[topic].append(q)
        return q

    def publish(self, topic: str, msg: Any) -> None:
        """Publish a message to all handlers and queues without blocking."""
        with self._lock:
            handlers = list(self._handlers.get(topic, []))
            subscribers = list(self._subscribers.get(topic, []))
        for handler in handlers:
            try:
                handler(msg)
            except Exception as exc:  # noqa: BLE001
                if self._on_error:
                    self._on_error(topic, exc)
        for q in subscribers:
            dropped = self._put_with_drop_oldest(q, msg)
            if dropped:
                with self._stats_lock:
                    self._drop_counts[topic] += 1
                if self._on_drop:
                    self._on_drop(topic, q.maxsize)

    @staticmethod
    def _put_with_drop_oldest(q: queue.Queue[Any], msg: Any) -> bool:
        """Enqueue, dropping the oldest item on overflow.

        Returns True when a drop occurred (even if enqueue succeeds).
        """
        try:
            q.put_nowait(msg)
            return False
        except queue.Full:
            try:
                q.get_nowait()
            except queue.Empty:
                pass
            try:
                q.put_nowait(msg)
                return True
            except queue.Full:
                return True
