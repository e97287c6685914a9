"""
lobby_client.errors — Custom exception classes
===============================================

Defines the exception hierarchy raised by the session client.
Each exception stores full context for structured logging.

    LobbyClientError
    ├── TransportError      the HTTP call could not be completed
    ├── RemoteError         the server rejected the request ({"error": ...})
    ├── ProtocolError       the response did not have the expected shape
    └── SessionError
        ├── NotRegisteredError
        └── AlreadyRegisteredError
"""

from __future__ import annotations
from enum import Enum
from typing import Any, Optional

from .error_formatter import format_error_block


class LobbyClientError(Exception):
    """Base exception for all lobby client errors."""

    command: Optional[str] = None

    def format_error_log(self) -> str:
        return format_error_block(
            error_type=self.__class__.__name__,
            command=self.command,
            details={"message": str(self)},
        )


class TransportError(LobbyClientError):
    """Raised when the HTTP round trip fails or the body is not JSON."""

    def __init__(
        self,
        message: str,
        command: Optional[str] = None,
        status_code: Optional[int] = None,
    ):
        self.message = message
        self.command = command
        self.status_code = status_code
        super().__init__(message)

    def format_error_log(self) -> str:
        return format_error_block(
            error_type="TRANSPORT_FAILURE",
            command=self.command,
            details={"message": self.message, "status_code": self.status_code},
        )


class RemoteError(LobbyClientError):
    """Raised when the server answers with an error envelope."""

    def __init__(self, id: int, description: str, info: str, command: Optional[str] = None):
        self.id = id
        self.description = description
        self.info = info
        self.command = command
        super().__init__(
            f"Error id: {id}, description: {description}, info: {info}"
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RemoteError):
            return NotImplemented
        return (self.id, self.description, self.info) == (
            other.id, other.description, other.info
        )

    def __hash__(self) -> int:
        return hash((self.id, self.description, self.info))

    def format_error_log(self) -> str:
        return format_error_block(
            error_type="REMOTE_ERROR",
            command=self.command,
            details={
                "id": self.id,
                "description": self.description,
                "info": self.info,
            },
        )


class ProtocolErrorKind(Enum):
    """What was wrong with a response that parsed as JSON."""
    MALFORMED_ENVELOPE = "malformed_envelope"
    MALFORMED_ERROR_ENVELOPE = "malformed_error_envelope"
    MALFORMED_PLAYER_ENTRY = "malformed_player_entry"
    MISSING_FIELD = "missing_field"
    WRONG_TYPE = "wrong_type"


class ProtocolError(LobbyClientError):
    """Raised when a response does not match the shape a command expects."""

    def __init__(
        self,
        kind: ProtocolErrorKind,
        message: str,
        payload: Any = None,
        command: Optional[str] = None,
    ):
        self.kind = kind
        self.message = message
        self.payload = payload
        self.command = command
        super().__init__(f"{kind.value}: {message}")

    def format_error_log(self) -> str:
        return format_error_block(
            error_type="PROTOCOL_MISMATCH",
            command=self.command,
            details={"kind": self.kind.value, "message": self.message},
            payload=self.payload,
            notes=["Client and server protocol versions may differ"],
        )


class SessionError(LobbyClientError):
    """Raised when an operation is not allowed in the current session."""
    pass


class NotRegisteredError(SessionError):
    """Raised when a session-scoped operation is used before register()."""

    def __init__(self, command: Optional[str] = None):
        self.command = command
        what = f"'{command}'" if command else "This operation"
        super().__init__(f"{what} requires a registered session; call register() first")


class AlreadyRegisteredError(SessionError):
    """Raised when register() is called on a client that already has an identity."""

    def __init__(self, nickname: str):
        self.command = "register"
        self.nickname = nickname
        super().__init__(f"Client is already registered as '{nickname}'")
