"""
CONTRACT: inline
ROLE: Top-level Echoer package.

INPUTS:
  - Topic: n/a  Type: n/a
OUTPUTS:
  - Topic: echoer  Type: Envelope dict

CONFIG KEYS:
  - n/a

PERF / TIMING:
  - n/a

FAILURE MODES:
  - n/a

LOG EVENTS:
  - n/a

TESTS:
  - n/a
"""

from .contracts.messages import Envelope
from .core.bus import Bus
from .notifier import CHANNEL, Echoer
from .version import __version__

__all__ = ["Bus", "CHANNEL", "Echoer", "Envelope", "__version__"]
