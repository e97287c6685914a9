# Area: Shared
"""
lobby_client._shared.protocol_logger — Protocol trace output
=============================================================

One colored line per request sent and per response received, with the
session context (nickname and stored state). Lines are printed only
while protocol mode is enabled; otherwise the trace is silent and the
standard loggers are the only output.
"""

from __future__ import annotations
import sys
from datetime import datetime
from typing import Optional

from .logging_formatters import is_protocol_mode_enabled

# ══════════════════════════════════════════════════════════════
# ANSI COLOR CODES
# ══════════════════════════════════════════════════════════════

GREEN = "\033[32m"       # Requests and successful responses
ORANGE = "\033[38;5;208m"  # Server-reported errors
RED = "\033[31m"         # Client-side errors
RESET = "\033[0m"

# ══════════════════════════════════════════════════════════════
# COMMAND → DISPLAY NAME MAPPINGS
# ══════════════════════════════════════════════════════════════

COMMAND_DISPLAY_NAMES = {
    "register": "REGISTER",
    "players": "LIST-PLAYERS",
    "error_description": "EXPLAIN-ERROR",
    "state": "QUERY-STATE",
    "search": "START-SEARCH",
    "idle": "GO-IDLE",
    "requests": "MATCH-REQUESTS",
    "messages": "MESSAGES",
    "end_game": "END-GAME",
}


def display_name(path: str) -> str:
    """Display name for a command path ("12/search" -> "START-SEARCH")."""
    command = path.rsplit("/", 1)[-1]
    return COMMAND_DISPLAY_NAMES.get(command, command.upper())


class ProtocolLogger:
    """Logger for request/response round trips.

    Holds no session data: the caller passes the nickname on every
    line, so several clients in one process keep their own labels.
    """

    def _now(self) -> str:
        return datetime.now().strftime("%H:%M:%S")

    def _emit(self, line: str, stream=None) -> None:
        if is_protocol_mode_enabled():
            print(line, file=stream or sys.stdout)

    def log_sent(self, method: str, path: str, nickname: Optional[str] = None) -> None:
        """Log an outgoing request."""
        line = (
            f"{GREEN}{self._now()} | PLAYER: {nickname or '-':16} | SENT     | "
            f"{method:4} | {display_name(path):15} | /{path}{RESET}"
        )
        self._emit(line)

    def log_received(
        self,
        path: str,
        outcome: str,
        state: str,
        nickname: Optional[str] = None,
    ) -> None:
        """Log a decoded response and the state after it."""
        color = GREEN if outcome == "OK" else ORANGE
        line = (
            f"{color}{self._now()} | PLAYER: {nickname or '-':16} | RECEIVED | "
            f"{display_name(path):20} | RESULT: {outcome:24} | STATE: {state}{RESET}"
        )
        self._emit(line)

    def log_error(self, description: str) -> None:
        """Log a client-side failure."""
        line = f"{RED}[ERROR] {self._now()} | {description}{RESET}"
        self._emit(line, sys.stderr)


# Global singleton instance
_protocol_logger: Optional[ProtocolLogger] = None


def get_protocol_logger() -> ProtocolLogger:
    """Get or create the global protocol logger instance."""
    global _protocol_logger
    if _protocol_logger is None:
        _protocol_logger = ProtocolLogger()
    return _protocol_logger
