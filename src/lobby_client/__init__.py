"""
lobby_client — Matchmaking Lobby Session Client
================================================

Client-side session manager for an HTTP+JSON matchmaking server.
Tracks one player through Registration -> Idle -> Searching -> Playing.

Quick Start:
    from lobby_client import SessionClient
    client = SessionClient("http://localhost:8000")
    session = client.register("alice")
    session.search()
    for player in session.get_requests():
        if session.send_request(player.id):
            break

Every operation either returns its result or raises one of:

    TransportError      the HTTP call failed or the body was not JSON
    RemoteError         the server rejected the request (id, description, info)
    ProtocolError       the response did not have the expected shape
    NotRegisteredError  a session-scoped operation was used before register()
"""

from .client import RegisteredSession, SessionClient
from .errors import (
    LobbyClientError,
    TransportError,
    RemoteError,
    ProtocolError,
    ProtocolErrorKind,
    SessionError,
    NotRegisteredError,
    AlreadyRegisteredError,
)
from .types import (
    Player,
    Identity,
    SessionState,
    REGISTRATION,
    IDLE,
    SEARCHING,
    PLAYING,
)
from ._session.enums import StateKind
from ._shared.transport import HttpTransport

__all__ = [
    # Main classes
    "SessionClient",
    "RegisteredSession",
    "HttpTransport",
    # Errors
    "LobbyClientError",
    "TransportError",
    "RemoteError",
    "ProtocolError",
    "ProtocolErrorKind",
    "SessionError",
    "NotRegisteredError",
    "AlreadyRegisteredError",
    # Types
    "Player",
    "Identity",
    "SessionState",
    "StateKind",
    "REGISTRATION",
    "IDLE",
    "SEARCHING",
    "PLAYING",
]
__version__ = "1.0.0"
