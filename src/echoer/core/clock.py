"""
CONTRACT: inline
ROLE: Call-time timestamps and their console formatting.

INPUTS:
  - Topic: n/a  Type: n/a
OUTPUTS:
  - Topic: n/a  Type: n/a

CONFIG KEYS:
  - n/a

PERF / TIMING:
  - monotonic now_ns() for diagnostics, wall clock for envelopes

FAILURE MODES:
  - unparsable ISO string -> ValueError to the caller

LOG EVENTS:
  - n/a

TESTS:
  - tests/test_clock.py

CONTRACT DETAILS:
# Clock and timestamps

- Envelope time is UTC ISO-8601 with milliseconds and a Z suffix.
- Short console lines show local time as DD.Mon.YYYY HH:mm:ss.mmm.
"""

from __future__ import annotations

import time
from datetime import datetime, timezone
from typing import Optional


# Fixed English abbreviations, independent of the process locale.
MONTHS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")


def now_ns() -> int:
    return time.monotonic_ns()


def now_iso(now: Optional[datetime] = None) -> str:
    """Return ``now`` (default: current time) as ``YYYY-MM-DDTHH:MM:SS.mmmZ``."""
    moment = now if now is not None else datetime.now(timezone.utc)
    if moment.tzinfo is None:
        moment = moment.astimezone()
    moment = moment.astimezone(timezone.utc)
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def parse_iso(value: str) -> datetime:
    text = value[:-1] + "+00:00" if value.endswith("Z") else value
    return datetime.fromisoformat(text)


def format_short(value: str, tz: Optional[timezone] = None) -> str:
    """Format an envelope time for short console lines, in local time by default."""
    moment = parse_iso(value).astimezone(tz)
    return (
        f"{moment.day:02d}.{MONTHS[moment.month - 1]}.{moment.year:04d} "
        f"{moment.hour:02d}:{moment.minute:02d}:{moment.second:02d}.{moment.microsecond // 1000:03d}"
    )
