import io
import json
import unittest

from echoer.core.bus import Bus
from echoer.core.logging import LOG_TOPIC, LogEmitter, watch_bus


class LogEmitterTests(unittest.TestCase):
    def test_emit_writes_json_line(self) -> None:
        out = io.StringIO()
        logger = LogEmitter(None, min_level="info", stream=out)
        logger.emit("warning", "notifier", "stringify_failed", {"type": "object"})
        record = json.loads(out.getvalue())
        self.assertEqual(record["level"], "warning")
        self.assertEqual(record["context"]["module"], "notifier")
        self.assertEqual(record["context"]["details"], {"type": "object"})

    def test_below_min_level_not_printed_but_published(self) -> None:
        out = io.StringIO()
        bus = Bus(max_queue_depth=4)
        q = bus.subscribe(LOG_TOPIC)
        logger = LogEmitter(bus, min_level="error", stream=out)
        logger.emit("info", "test", "hello", {"a": 1})
        self.assertEqual(out.getvalue(), "")
        self.assertEqual(q.get_nowait()["context"]["event"], "hello")


class WatchBusTests(unittest.TestCase):
    def test_reports_drops_and_handler_failures(self) -> None:
        out = io.StringIO()
        bus = Bus(max_queue_depth=1)
        watch_bus(bus, LogEmitter(None, stream=out))

        def _boom(_msg) -> None:  # noqa: ANN001
            raise RuntimeError("ui gone")

        bus.register("echoer", _boom)
        bus.subscribe("echoer")
        bus.publish("echoer", 1)
        bus.publish("echoer", 2)
        events = [json.loads(line)["context"] for line in out.getvalue().splitlines()]
        self.assertEqual(
            [e["event"] for e in events],
            ["handler_failed", "handler_failed", "queue_full"],
        )
        self.assertEqual(events[-1]["details"], {"topic": "echoer", "depth": 1})

    def test_failing_log_events_handler_is_not_reported_back(self) -> None:
        out = io.StringIO()
        bus = Bus()
        watch_bus(bus, LogEmitter(bus, stream=out))
        calls = []

        def _boom(msg) -> None:  # noqa: ANN001
            calls.append(msg)
            raise ZeroDivisionError("division by zero")

        bus.register(LOG_TOPIC, _boom)
        bus.register("echoer", _boom)
        bus.publish("echoer", {"msg": "x"})
        events = [json.loads(line)["context"]["event"] for line in out.getvalue().splitlines()]
        self.assertEqual(events, ["handler_failed"])
        self.assertEqual(len(calls), 2)


if __name__ == "__main__":
    unittest.main()
