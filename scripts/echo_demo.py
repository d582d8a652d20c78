#!/usr/bin/env python3
"""Echoer demo: concurrent callers plus an event subscriber.

What it does:
  - Registers a bus handler that prints every published envelope as "EVT:: ...".
  - Runs one scenario: a mixed message racing a loop of N numbered messages
    (log, warn), or a single error / object echo.

Run:
  python3 scripts/echo_demo.py --scenario log --count 100 --delay-ms 10
  python3 scripts/echo_demo.py --scenario error --long
"""

from __future__ import annotations

import argparse
import asyncio

from echoer.core.bus import Bus
from echoer.core.config import build_config, get_path, load_config
from echoer.core.logging import watch_bus
from echoer.notifier import Echoer


async def _run(echo: Echoer, scenario: str, count: int) -> None:
    if scenario in ("log", "warn"):
        emit = echo.log if scenario == "log" else echo.warn

        async def f1() -> None:
            await emit("One", "two", 3, {"a": 22}, True)

        async def f2() -> None:
            for i in range(1, count + 1):
                await emit(f"FOR {i}")

        await asyncio.gather(f1(), f2())
    elif scenario == "error":
        try:
            raise RuntimeError("Very bad error !")
        except RuntimeError as exc:
            await echo.error(exc)
    elif scenario == "objekt":
        await echo.objekt({"a": "str", "b": 55})


def main() -> None:
    parser = argparse.ArgumentParser(description="Echoer demo")
    parser.add_argument("--config", default="")
    parser.add_argument("--scenario", choices=["log", "warn", "error", "objekt"], default="log")
    parser.add_argument("--count", type=int, default=100)
    parser.add_argument("--delay-ms", type=int, default=None)
    parser.add_argument("--long", action="store_true", help="print whole envelopes as JSON")
    args = parser.parse_args()

    config = load_config(args.config) if args.config else build_config()
    overrides = config.setdefault("echoer", {})
    if args.delay_ms is not None:
        overrides["delay_ms"] = args.delay_ms
    if args.long:
        overrides["short"] = False

    bus = Bus(max_queue_depth=int(get_path(config, "bus.max_queue_depth", 8)))
    echo = Echoer.from_config(config, sink=bus)
    watch_bus(bus, echo.logger)
    bus.register(echo.channel, lambda envelope: print("EVT::", envelope))

    asyncio.run(_run(echo, args.scenario, args.count))


if __name__ == "__main__":
    main()
