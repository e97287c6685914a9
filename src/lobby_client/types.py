"""
lobby_client.types — Value types returned by the session client
================================================================

All types are exported from the main package:

    from lobby_client import Player, Identity, SessionState, StateKind

Every type here is immutable. Instances are built from decoded server
payloads and handed back to the caller as-is.
"""

from __future__ import annotations
from dataclasses import dataclass

from ._session.enums import STATE_CODES, StateKind


@dataclass(frozen=True)
class Player:
    """A player known to the server (self, a peer, or a requester)."""
    id: int
    nickname: str

    def __str__(self) -> str:
        return f"{self.id}:{self.nickname}"


@dataclass(frozen=True)
class Identity:
    """What the server assigned to us at registration.

    Fields
    ------
    nickname : str
        The nickname the server registered (may differ from the one asked for).
    server_id : int
        Session identifier; prefixes every session-scoped route.
    player_id : int
        Match/game-scoped identifier. Never used for routing.
    """
    nickname: str
    server_id: int
    player_id: int


@dataclass(frozen=True)
class SessionState:
    """Coarse lifecycle state of the session.

    `reason` is only set for DISCONNECTED, which is synthesized locally
    when the server reports a state code we do not recognize.
    """
    kind: StateKind
    reason: str = ""

    @classmethod
    def disconnected(cls, reason: str) -> "SessionState":
        return cls(StateKind.DISCONNECTED, reason or "Disconnected")

    @classmethod
    def from_code(cls, code: int) -> "SessionState":
        """Map a server state code (0-3) to a state; anything else disconnects."""
        kind = STATE_CODES.get(code)
        if kind is None:
            return cls.disconnected(f"Unknown state id: {code}")
        return cls(kind)

    @property
    def is_disconnected(self) -> bool:
        return self.kind is StateKind.DISCONNECTED

    def __str__(self) -> str:
        if self.reason:
            return f"{self.kind.value} ({self.reason})"
        return self.kind.value


REGISTRATION = SessionState(StateKind.REGISTRATION)
IDLE = SessionState(StateKind.IDLE)
SEARCHING = SessionState(StateKind.SEARCHING)
PLAYING = SessionState(StateKind.PLAYING)
