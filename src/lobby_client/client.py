"""
lobby_client.client — Session client for the matchmaking server
================================================================

Two objects, one per phase of a session:

    SessionClient       unregistered surface: register, players, error lookups
    RegisteredSession   returned by register(); holds the Identity by value and
                        exposes the session-scoped operations

A RegisteredSession cannot exist without an Identity, so scoped routes
always have a server id to prefix. For callers that prefer a single
object, SessionClient also forwards every scoped operation to its bound
session and raises NotRegisteredError, without touching the network,
when there is none.

Each operation is one blocking round trip:

    build path/query/body -> transport.call -> envelope -> decoder -> state

Stored state and identity change only after all of those succeed.
"""

from __future__ import annotations
import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Type

from ._client_config import validate_config
from ._session.enums import SessionEvent
from ._session.state_machine import SessionStateMachine
from ._shared.decoders import (
    ErrorDescriptionPayload,
    MessagesPayload,
    Payload,
    PlayersPayload,
    RegisterPayload,
    RequestsPayload,
    SendRequestPayload,
    StatePayload,
    decode_payload,
    decode_player_list,
)
from ._shared.envelope import unwrap_envelope
from ._shared.protocol_logger import get_protocol_logger
from ._shared.routes import scoped_path, unscoped_path
from ._shared.transport import HttpTransport, Transport
from .errors import (
    AlreadyRegisteredError,
    LobbyClientError,
    NotRegisteredError,
    RemoteError,
)
from .types import REGISTRATION, Identity, Player, SessionState

logger = logging.getLogger("lobby_client.client")


class _BaseSession(ABC):
    """Round-trip plumbing and the operations that need no session."""

    def __init__(self, transport: Transport):
        self._transport = transport

    @abstractmethod
    def get_stored_state(self) -> SessionState:
        """Current local state; no network call."""

    @abstractmethod
    def _trace_nickname(self) -> Optional[str]:
        """Nickname shown on protocol trace lines (None before register)."""

    def _request(
        self,
        method: str,
        path: str,
        schema: Optional[Type[Payload]] = None,
        query=(),
        body: str = "",
    ) -> Any:
        """
        Perform one call, unwrap the envelope and decode the payload.

        The caller applies its state event and then calls _received(),
        so the trace shows the state after the response.

        Args:
            method: "GET" or "POST"
            path: Route from unscoped_path() / scoped_path()
            schema: Payload schema, or None when the payload is ignored
            query: Ordered (key, value) string pairs
            body: Raw request body

        Returns:
            The decoded payload model, or the raw payload if schema is None
        """
        command = path.rsplit("/", 1)[-1]
        plog = get_protocol_logger()
        plog.log_sent(method, path, self._trace_nickname())
        try:
            response = self._transport.call(method, path, query, body)
            payload = unwrap_envelope(response, command)
            return payload if schema is None else decode_payload(schema, payload, command)
        except RemoteError as e:
            plog.log_received(
                path, f"ERROR {e.id}", str(self.get_stored_state()), self._trace_nickname()
            )
            logger.info(f"{command} rejected by server: {e}")
            raise
        except LobbyClientError as e:
            plog.log_error(f"{command}: {e}")
            raise

    def _received(self, path: str) -> None:
        """Trace a successful response with the state it left us in."""
        get_protocol_logger().log_received(
            path, "OK", str(self.get_stored_state()), self._trace_nickname()
        )

    # ── Unscoped operations ─────────────────────────────────────

    def get_players(self) -> List[Player]:
        """List every player currently known to the server."""
        path = unscoped_path("players")
        payload = self._request("GET", path, PlayersPayload)
        players = decode_player_list(payload.players, "players")
        self._received(path)
        return players

    def get_error_description(self, error_id: int) -> str:
        """Look up the server's description text for an error id."""
        path = unscoped_path("error_description")
        payload = self._request(
            "GET", path, ErrorDescriptionPayload, query=[("id", str(error_id))]
        )
        self._received(path)
        return payload.description

    def describe_error(self, error: RemoteError) -> str:
        """Fetch the server-side description for a RemoteError we received."""
        return self.get_error_description(error.id)


class RegisteredSession(_BaseSession):
    """
    A registered player session.

    Holds the Identity the server assigned at registration and the
    locally tracked lifecycle state. All session-scoped routes are
    prefixed with identity.server_id.
    """

    def __init__(
        self,
        transport: Transport,
        identity: Identity,
        state_machine: Optional[SessionStateMachine] = None,
    ):
        super().__init__(transport)
        self._identity = identity
        self._state_machine = state_machine or SessionStateMachine()

    @property
    def identity(self) -> Identity:
        return self._identity

    def get_nickname(self) -> str:
        return self._identity.nickname

    def get_stored_state(self) -> SessionState:
        """Current local state; no network call."""
        return self._state_machine.current_state

    def _trace_nickname(self) -> Optional[str]:
        return self._identity.nickname

    def _scoped(self, command: str) -> str:
        return scoped_path(self._identity.server_id, command)

    def get_state(self) -> SessionState:
        """
        Ask the server for our state and store it.

        An unknown state code is not an error: the stored state becomes
        DISCONNECTED with a reason, and that state is returned.
        """
        path = self._scoped("state")
        payload = self._request("GET", path, StatePayload)
        state = self._state_machine.apply(SessionEvent.STATE_REPORTED, payload.state)
        self._received(path)
        return state

    def search(self) -> None:
        """Enter the matchmaking queue."""
        path = self._scoped("search")
        self._request("POST", path)
        self._state_machine.apply(SessionEvent.SEARCH_STARTED)
        self._received(path)

    def idle(self) -> None:
        """Leave the queue (or a game) and go idle."""
        path = self._scoped("idle")
        self._request("POST", path)
        self._state_machine.apply(SessionEvent.WENT_IDLE)
        self._received(path)

    def send_request(self, target_id: int) -> bool:
        """
        Ask another player for a match.

        Returns:
            True if the server put us in a game right away (state becomes
            PLAYING), False if the request is pending (state unchanged)
        """
        if isinstance(target_id, bool) or target_id < 0:
            raise ValueError(f"target_id must be an unsigned integer, got {target_id!r}")
        path = self._scoped("requests")
        payload = self._request(
            "POST", path, SendRequestPayload, query=[("send_to", str(target_id))]
        )
        if payload.in_game:
            self._state_machine.apply(SessionEvent.REQUEST_ACCEPTED)
            logger.info(f"{self._identity.nickname} is now playing against {target_id}")
        else:
            self._state_machine.apply(SessionEvent.REQUEST_PENDING)
        self._received(path)
        return payload.in_game

    def get_requests(self) -> List[Player]:
        """Players who have sent us a match request."""
        path = self._scoped("requests")
        payload = self._request("GET", path, RequestsPayload)
        players = decode_player_list(payload.requests, "requests")
        self._received(path)
        return players

    def send_message(self, text: str) -> None:
        """Send an in-game message; the text is the raw request body."""
        path = self._scoped("messages")
        self._request("POST", path, body=text)
        self._received(path)

    def get_messages(self) -> List[str]:
        """In-game messages waiting for us."""
        path = self._scoped("messages")
        payload = self._request("GET", path, MessagesPayload)
        self._received(path)
        return list(payload.messages)

    def end_game(self) -> None:
        """
        Tell the server the current game is over.

        The stored state is left as it is; call get_state() to learn
        where the server put us afterwards.
        """
        path = self._scoped("end_game")
        self._request("POST", path)
        self._state_machine.apply(SessionEvent.GAME_ENDED)
        self._received(path)


class SessionClient(_BaseSession):
    """
    Entry point for talking to a matchmaking server.

    Usage:
        client = SessionClient("http://localhost:8000")
        session = client.register("alice")
        session.search()

    The scoped operations are also available on the client itself once
    register() has succeeded.
    """

    def __init__(
        self,
        base_url: str,
        transport: Optional[Transport] = None,
        timeout: Optional[float] = None,
    ):
        """Initialize the client.

        Args:
            base_url: Server root URL
            transport: Object with a compatible call() (defaults to HttpTransport)
            timeout: Per-request timeout for the default transport (None = none)
        """
        super().__init__(transport or HttpTransport(base_url, timeout=timeout))
        self.base_url = base_url
        self._session: Optional[RegisteredSession] = None

    @classmethod
    def from_config(cls, config: Dict[str, Any]) -> "SessionClient":
        """Build a client from a config dict (see lobby_client._client_config)."""
        validate_config(config)
        return cls(config["base_url"], timeout=config.get("timeout_seconds"))

    # ── Registration ────────────────────────────────────────────

    @property
    def session(self) -> Optional[RegisteredSession]:
        """The bound session, or None before register() succeeds."""
        return self._session

    @property
    def is_registered(self) -> bool:
        return self._session is not None

    def register(self, nickname: str) -> RegisteredSession:
        """
        Register a nickname and bind the resulting identity.

        Returns:
            The RegisteredSession for this player (state IDLE)

        Raises:
            AlreadyRegisteredError: If this client already has an identity
        """
        if self._session is not None:
            raise AlreadyRegisteredError(self._session.get_nickname())

        path = unscoped_path("register")
        payload = self._request("POST", path, RegisterPayload, query=[("name", nickname)])
        identity = payload.player.to_identity()

        state_machine = SessionStateMachine()
        state_machine.apply(SessionEvent.REGISTERED)
        self._session = RegisteredSession(self._transport, identity, state_machine)
        self._received(path)

        logger.info(
            f"Registered as {identity.nickname} "
            f"(server_id={identity.server_id}, player_id={identity.player_id})"
        )
        return self._session

    def _require_session(self, command: str) -> RegisteredSession:
        if self._session is None:
            raise NotRegisteredError(command)
        return self._session

    # ── Accessors ───────────────────────────────────────────────

    def get_stored_state(self) -> SessionState:
        if self._session is None:
            return REGISTRATION
        return self._session.get_stored_state()

    def _trace_nickname(self) -> Optional[str]:
        if self._session is None:
            return None
        return self._session.get_nickname()

    def get_nickname(self) -> str:
        return self._require_session("nickname").get_nickname()

    # ── Scoped operations (forwarded) ───────────────────────────

    def get_state(self) -> SessionState:
        return self._require_session("state").get_state()

    def search(self) -> None:
        self._require_session("search").search()

    def idle(self) -> None:
        self._require_session("idle").idle()

    def send_request(self, target_id: int) -> bool:
        return self._require_session("requests").send_request(target_id)

    def get_requests(self) -> List[Player]:
        return self._require_session("requests").get_requests()

    def send_message(self, text: str) -> None:
        self._require_session("messages").send_message(text)

    def get_messages(self) -> List[str]:
        return self._require_session("messages").get_messages()

    def end_game(self) -> None:
        self._require_session("end_game").end_game()

    # ── Resources ───────────────────────────────────────────────

    def close(self) -> None:
        """Close the transport if it supports closing."""
        close = getattr(self._transport, "close", None)
        if callable(close):
            close()

    def __enter__(self) -> "SessionClient":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
