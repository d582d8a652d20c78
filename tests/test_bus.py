import unittest

from echoer.core.bus import Bus


class BusTests(unittest.TestCase):
    def test_handlers_called_in_order(self) -> None:
        bus = Bus()
        seen = []
        bus.register("echoer", lambda msg: seen.append(("first", msg)))
        bus.register("echoer", lambda msg: seen.append(("second", msg)))
        bus.register("other", lambda msg: seen.append(("other", msg)))
        bus.publish("echoer", {"msg": "hi"})
        self.assertEqual(seen, [("first", {"msg": "hi"}), ("second", {"msg": "hi"})])

    def test_unregister(self) -> None:
        bus = Bus()
        seen = []
        unregister = bus.register("echoer", seen.append)
        unregister()
        unregister()
        bus.publish("echoer", 1)
        self.assertEqual(seen, [])

    def test_failing_handler_reported_and_isolated(self) -> None:
        errors = []
        bus = Bus(on_error=lambda topic, exc: errors.append((topic, str(exc))))
        seen = []

        def _boom(_msg) -> None:  # noqa: ANN001
            raise RuntimeError("ui gone")

        bus.register("echoer", _boom)
        bus.register("echoer", seen.append)
        bus.publish("echoer", 7)
        self.assertEqual(seen, [7])
        self.assertEqual(errors, [("echoer", "ui gone")])

    def test_publish_without_subscribers(self) -> None:
        Bus().publish("echoer", {"msg": "nobody"})

    def test_queue_drops_oldest(self) -> None:
        drops = []
        bus = Bus(max_queue_depth=2, on_drop=lambda topic, depth: drops.append((topic, depth)))
        q = bus.subscribe("echoer")
        for i in range(3):
            bus.publish("echoer", i)
        self.assertEqual([q.get_nowait(), q.get_nowait()], [1, 2])
        self.assertEqual(drops, [("echoer", 2)])
        self.assertEqual(bus.get_drop_counts(), {"echoer": 1})


if __name__ == "__main__":
    unittest.main()
