"""
CONTRACT: inline
ROLE: Echo envelope model shared by the console renderer and the event channel.

INPUTS:
  - Topic: n/a  Type: n/a
OUTPUTS:
  - Topic: echoer  Type: Envelope dict

CONFIG KEYS:
  - n/a

PERF / TIMING:
  - one envelope per emission, never reused

FAILURE MODES:
  - n/a

LOG EVENTS:
  - n/a

TESTS:
  - tests/test_notifier.py
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict


LOG = "log"
WARN = "warn"
ERROR = "error"
OBJEKT = "objekt"
IMAGE = "image"

METHODS = (LOG, WARN, ERROR, OBJEKT, IMAGE)


@dataclass(frozen=True)
class Envelope:
    """One echoed message: ``msg`` payload, ``method`` tag and ISO ``time``."""

    msg: Any
    method: str
    time: str

    def to_dict(self) -> Dict[str, Any]:
        # Shallow on purpose: msg keeps its identity.
        return {"msg": self.msg, "method": self.method, "time": self.time}
