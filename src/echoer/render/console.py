"""
CONTRACT: inline
ROLE: Color-coded console rendering of echo envelopes.

INPUTS:
  - Topic: n/a  Type: Envelope
OUTPUTS:
  - stdout (or injected text stream)

CONFIG KEYS:
  - echoer.short: one line per envelope vs whole envelope as JSON
  - echoer.color: ANSI colors on/off

PERF / TIMING:
  - one write + flush per envelope

FAILURE MODES:
  - payload not JSON encodable -> TypeError/ValueError to the caller

LOG EVENTS:
  - n/a

TESTS:
  - tests/test_console.py

CONTRACT DETAILS:
# Console contract

- Short: "(DD.Mon.YYYY HH:mm:ss.mmm) <payload>".
- Long: the whole envelope as 2-space indented JSON.
- log/warn with an empty message print a single blank line.
- Colors: log green, warn yellow, error red, objekt blue, image gray.
"""

from __future__ import annotations

import sys
from typing import Any, Dict, Optional, TextIO

from colorama import Fore, Style, just_fix_windows_console

from echoer.contracts.messages import ERROR, IMAGE, LOG, OBJEKT, WARN, Envelope
from echoer.core.clock import format_short
from echoer.render.stringify import to_json

just_fix_windows_console()

COLORS: Dict[str, str] = {
    LOG: Fore.LIGHTGREEN_EX,
    WARN: Fore.YELLOW,
    ERROR: Fore.LIGHTRED_EX,
    OBJEKT: Fore.LIGHTBLUE_EX,
    IMAGE: Fore.LIGHTBLACK_EX,
}
RESET = Style.RESET_ALL


class ConsoleRenderer:
    """Write envelopes to a text stream, short or long form."""

    def __init__(self, stream: Optional[TextIO] = None, color: bool = True) -> None:
        self._stream = stream
        self.color = color

    def render(self, envelope: Envelope, short: bool = True) -> None:
        if envelope.method in (LOG, WARN) and envelope.msg == "":
            self._write("")
            return
        text = self.format_short(envelope) if short else self.format_long(envelope)
        self._write(self._paint(envelope.method, text))

    def format_short(self, envelope: Envelope) -> str:
        return f"({format_short(envelope.time)}) {self._summary(envelope)}"

    def format_long(self, envelope: Envelope) -> str:
        return to_json(envelope.to_dict(), indent=2)

    @staticmethod
    def _summary(envelope: Envelope) -> Any:
        if envelope.method == OBJEKT:
            return to_json(envelope.msg, indent=2)
        if envelope.method == ERROR:
            msg = envelope.msg
            return msg.get("message") if isinstance(msg, dict) else msg
        return envelope.msg

    def _paint(self, method: str, text: str) -> str:
        color = COLORS.get(method, "") if self.color else ""
        if not color:
            return text
        return f"{color}{text}{RESET}"

    def _write(self, line: str) -> None:
        stream = self._stream if self._stream is not None else sys.stdout
        stream.write(line + "\n")
        stream.flush()
