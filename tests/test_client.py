# Area: Client Tests
"""Tests for SessionClient and RegisteredSession against a mock transport."""

from unittest.mock import MagicMock

import pytest

from lobby_client import (
    IDLE,
    PLAYING,
    REGISTRATION,
    SEARCHING,
    AlreadyRegisteredError,
    Identity,
    NotRegisteredError,
    Player,
    ProtocolError,
    ProtocolErrorKind,
    RegisteredSession,
    RemoteError,
    SessionClient,
    StateKind,
    TransportError,
)
from lobby_client.client import _BaseSession

BASE_URL = "http://lobby.test"
REGISTER_OK = {"success": {"player": {"nickname": "alice", "id": 7, "player_id": 42}}}
OK = {"success": None}


def ok(payload):
    return {"success": payload}


def remote_error(error_id=4, description="Not allowed", info="details"):
    return {"error": {"id": error_id, "description": description, "info": info}}


def make_client(*responses):
    """Client whose transport returns the given bodies in order."""
    transport = MagicMock()
    transport.call.side_effect = list(responses)
    return SessionClient(BASE_URL, transport=transport), transport


def registered_client(*responses):
    client, transport = make_client(REGISTER_OK, *responses)
    client.register("alice")
    return client, transport


class TestRegister:
    """Tests for register()."""

    def test_register_binds_identity_and_goes_idle(self):
        client, transport = make_client(REGISTER_OK)

        session = client.register("alice")

        assert isinstance(session, RegisteredSession)
        assert session.identity == Identity(nickname="alice", server_id=7, player_id=42)
        assert client.get_stored_state() == IDLE
        assert client.get_nickname() == "alice"
        transport.call.assert_called_once_with("POST", "register", [("name", "alice")], "")

    def test_register_uses_server_nickname(self):
        client, _ = make_client(
            ok({"player": {"nickname": "alice_2", "id": 8, "player_id": 1}})
        )
        client.register("alice")
        assert client.get_nickname() == "alice_2"

    def test_register_remote_error_leaves_client_unregistered(self):
        client, _ = make_client(remote_error(1, "Nickname taken", "alice"))

        with pytest.raises(RemoteError) as exc_info:
            client.register("alice")

        assert exc_info.value.description == "Nickname taken"
        assert client.session is None
        assert client.get_stored_state() == REGISTRATION

    def test_register_bad_payload_leaves_client_unregistered(self):
        client, _ = make_client(ok({"player": {"nickname": "alice", "id": 7}}))

        with pytest.raises(ProtocolError) as exc_info:
            client.register("alice")

        assert exc_info.value.kind == ProtocolErrorKind.MISSING_FIELD
        assert not client.is_registered
        assert client.get_stored_state() == REGISTRATION

    def test_register_transport_error_propagates(self):
        client, _ = make_client(TransportError("connection refused"))

        with pytest.raises(TransportError):
            client.register("alice")
        assert not client.is_registered

    def test_register_twice_rejected_without_call(self):
        client, transport = registered_client()

        with pytest.raises(AlreadyRegisteredError):
            client.register("bob")
        assert transport.call.call_count == 1


class TestPreconditions:
    """Scoped operations before register() fail without any I/O."""

    @pytest.mark.parametrize("operation, args", [
        ("get_state", ()),
        ("search", ()),
        ("idle", ()),
        ("send_request", (9,)),
        ("get_requests", ()),
        ("send_message", ("hi",)),
        ("get_messages", ()),
        ("end_game", ()),
        ("get_nickname", ()),
    ])
    def test_scoped_operation_requires_registration(self, operation, args):
        client, transport = make_client()

        with pytest.raises(NotRegisteredError):
            getattr(client, operation)(*args)

        transport.call.assert_not_called()
        assert client.get_stored_state() == REGISTRATION

    def test_stored_state_before_register(self):
        client, _ = make_client()
        assert client.get_stored_state() == REGISTRATION


class TestGetState:
    """Tests for get_state()."""

    def test_get_state_searching(self):
        client, transport = registered_client(ok({"state": 2}))

        assert client.get_state() == SEARCHING
        assert client.get_stored_state() == SEARCHING
        transport.call.assert_called_with("GET", "7/state", (), "")

    def test_unknown_code_disconnects_without_failing(self):
        client, _ = registered_client(ok({"state": 99}))

        state = client.get_state()

        assert state.kind == StateKind.DISCONNECTED
        assert state.reason
        assert client.get_stored_state() == state

    def test_state_code_zero_is_registration(self):
        """The server is authoritative even when it says Registration."""
        client, _ = registered_client(ok({"state": 0}))
        assert client.get_state() == REGISTRATION
        assert client.get_nickname() == "alice"

    def test_bad_state_payload_keeps_stored_state(self):
        client, _ = registered_client(ok({"state": "2"}))

        with pytest.raises(ProtocolError):
            client.get_state()
        assert client.get_stored_state() == IDLE

    def test_remote_error_keeps_stored_state(self):
        client, _ = registered_client(ok(None), remote_error())
        client.search()

        with pytest.raises(RemoteError):
            client.get_state()
        assert client.get_stored_state() == SEARCHING


class TestSearchAndIdle:
    """Tests for search() and idle()."""

    def test_search_goes_searching(self):
        client, transport = registered_client(ok({"queued": True}))

        client.search()

        assert client.get_stored_state() == SEARCHING
        transport.call.assert_called_with("POST", "7/search", (), "")

    def test_idle_twice_stays_idle(self):
        client, _ = registered_client(OK, OK, OK)
        client.search()

        client.idle()
        assert client.get_stored_state() == IDLE
        client.idle()
        assert client.get_stored_state() == IDLE

    def test_search_failure_keeps_state(self):
        client, _ = registered_client(remote_error(12, "Already searching", ""))

        with pytest.raises(RemoteError):
            client.search()
        assert client.get_stored_state() == IDLE

    def test_search_malformed_envelope(self):
        client, _ = registered_client({"status": "ok"})

        with pytest.raises(ProtocolError) as exc_info:
            client.search()
        assert exc_info.value.kind == ProtocolErrorKind.MALFORMED_ENVELOPE
        assert client.get_stored_state() == IDLE


class TestMatchRequests:
    """Tests for send_request() and get_requests()."""

    def test_accepted_request_goes_playing(self):
        client, transport = registered_client(ok({"in_game": True}))

        assert client.send_request(9) is True

        assert client.get_stored_state() == PLAYING
        transport.call.assert_called_with("POST", "7/requests", [("send_to", "9")], "")

    def test_pending_request_keeps_state(self):
        client, _ = registered_client(OK, ok({"in_game": False}))
        client.search()

        assert client.send_request(9) is False
        assert client.get_stored_state() == SEARCHING

    def test_missing_in_game_is_protocol_error(self):
        client, _ = registered_client(ok({}))

        with pytest.raises(ProtocolError) as exc_info:
            client.send_request(9)
        assert exc_info.value.kind == ProtocolErrorKind.MISSING_FIELD
        assert client.get_stored_state() == IDLE

    @pytest.mark.parametrize("target", [-1, True])
    def test_invalid_target_rejected_before_call(self, target):
        client, transport = registered_client()

        with pytest.raises(ValueError):
            client.send_request(target)
        assert transport.call.call_count == 1

    def test_get_requests_decodes_players(self):
        client, transport = registered_client(ok({"requests": ["3:bob", "17:carol:extra"]}))

        assert client.get_requests() == [
            Player(id=3, nickname="bob"),
            Player(id=17, nickname="carol:extra"),
        ]
        transport.call.assert_called_with("GET", "7/requests", (), "")

    def test_get_requests_malformed_entry(self):
        client, _ = registered_client(ok({"requests": ["notanid:x"]}))

        with pytest.raises(ProtocolError) as exc_info:
            client.get_requests()
        assert exc_info.value.kind == ProtocolErrorKind.MALFORMED_PLAYER_ENTRY


class TestMessages:
    """Tests for send_message(), get_messages() and end_game()."""

    def test_send_message_uses_raw_body(self):
        client, transport = registered_client(OK)

        client.send_message("good game: rematch?")

        transport.call.assert_called_with("POST", "7/messages", (), "good game: rematch?")

    def test_get_messages(self):
        client, _ = registered_client(ok({"messages": ["hi", "gg"]}))
        assert client.get_messages() == ["hi", "gg"]

    def test_get_messages_wrong_type(self):
        client, _ = registered_client(ok({"messages": "hi"}))

        with pytest.raises(ProtocolError) as exc_info:
            client.get_messages()
        assert exc_info.value.kind == ProtocolErrorKind.WRONG_TYPE

    def test_end_game_keeps_local_state(self):
        client, transport = registered_client(ok({"in_game": True}), OK)
        client.send_request(9)

        client.end_game()

        assert client.get_stored_state() == PLAYING
        transport.call.assert_called_with("POST", "7/end_game", (), "")


class TestUnscopedOperations:
    """Tests for get_players() and error lookups."""

    def test_get_players_before_register(self):
        client, transport = make_client(ok({"players": ["1:ann", "2:ben"]}))

        assert client.get_players() == [Player(1, "ann"), Player(2, "ben")]
        transport.call.assert_called_once_with("GET", "players", (), "")

    def test_get_players_after_register_stays_unscoped(self):
        client, transport = registered_client(ok({"players": []}))

        assert client.session.get_players() == []
        transport.call.assert_called_with("GET", "players", (), "")

    def test_get_error_description(self):
        client, transport = make_client(ok({"description": "Player not found"}))

        assert client.get_error_description(4) == "Player not found"
        transport.call.assert_called_once_with(
            "GET", "error_description", [("id", "4")], ""
        )

    def test_describe_error_uses_error_id(self):
        client, transport = make_client(ok({"description": "Player not found"}))
        error = RemoteError(id=4, description="NotFound", info="9")

        assert client.describe_error(error) == "Player not found"
        assert transport.call.call_args.args[2] == [("id", "4")]

    def test_get_error_description_missing_field(self):
        client, _ = make_client(ok({"text": "?"}))

        with pytest.raises(ProtocolError):
            client.get_error_description(4)


class TestRegisteredSession:
    """RegisteredSession can be used directly."""

    def test_base_session_is_abstract(self):
        with pytest.raises(TypeError):
            _BaseSession(MagicMock())

    def test_scoped_routes_use_server_id_not_player_id(self):
        transport = MagicMock()
        transport.call.return_value = OK
        session = RegisteredSession(transport, Identity("zed", server_id=11, player_id=99))

        session.search()
        session.idle()

        paths = [c.args[1] for c in transport.call.call_args_list]
        assert paths == ["11/search", "11/idle"]

    def test_new_session_starts_in_registration(self):
        session = RegisteredSession(MagicMock(), Identity("zed", 1, 2))
        assert session.get_stored_state() == REGISTRATION

    def test_client_and_session_share_state(self):
        client, _ = registered_client(OK)
        client.session.search()
        assert client.get_stored_state() == SEARCHING


class TestFromConfig:
    """Tests for SessionClient.from_config()."""

    def test_builds_http_transport(self):
        client = SessionClient.from_config({"base_url": BASE_URL, "timeout_seconds": 3.0})
        assert client.base_url == BASE_URL
        assert client._transport.timeout == 3.0
        client.close()

    def test_missing_base_url(self):
        with pytest.raises(ValueError):
            SessionClient.from_config({})

    def test_context_manager_closes_transport(self):
        transport = MagicMock()
        with SessionClient(BASE_URL, transport=transport):
            pass
        transport.close.assert_called_once()
