# Area: Shared
"""
lobby_client._shared.decoders — Typed payload decoders
=======================================================

One strict schema per success payload shape. Decoding never guesses:
a missing key or a value of the wrong JSON type raises ProtocolError
instead of falling back to a default. Extra keys are ignored.

Player lists arrive as strings of the form "<id>:<nickname>". The id
is everything before the FIRST colon; the nickname is the rest and
may itself contain colons.
"""

from __future__ import annotations
from typing import Annotated, Any, List, Optional, Type, TypeVar

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictBool,
    StrictInt,
    StrictStr,
    ValidationError,
)

from ..errors import ProtocolError, ProtocolErrorKind
from ..types import Identity, Player

UnsignedInt = Annotated[StrictInt, Field(ge=0)]

PayloadT = TypeVar("PayloadT", bound="Payload")


# ══════════════════════════════════════════════════════════════
# PAYLOAD SCHEMAS
# ══════════════════════════════════════════════════════════════

class Payload(BaseModel):
    """Base for all payload schemas."""
    model_config = ConfigDict(extra="ignore", frozen=True)


class ErrorBody(Payload):
    """Body of an {"error": ...} envelope."""
    id: StrictInt
    description: StrictStr
    info: StrictStr


class RegisteredPlayer(Payload):
    nickname: StrictStr
    id: UnsignedInt
    player_id: UnsignedInt

    def to_identity(self) -> Identity:
        # "id" is the session's server id; player_id is match-scoped
        return Identity(
            nickname=self.nickname,
            server_id=self.id,
            player_id=self.player_id,
        )


class RegisterPayload(Payload):
    """register -> {"player": {"nickname", "id", "player_id"}}"""
    player: RegisteredPlayer


class StatePayload(Payload):
    """state -> {"state": <code>}"""
    state: StrictInt


class SendRequestPayload(Payload):
    """requests (POST) -> {"in_game": <bool>}"""
    in_game: StrictBool


class RequestsPayload(Payload):
    """requests (GET) -> {"requests": ["id:nickname", ...]}"""
    requests: List[StrictStr]


class MessagesPayload(Payload):
    """messages (GET) -> {"messages": [str, ...]}"""
    messages: List[StrictStr]


class PlayersPayload(Payload):
    """players -> {"players": ["id:nickname", ...]}"""
    players: List[StrictStr]


class ErrorDescriptionPayload(Payload):
    """error_description -> {"description": str}"""
    description: StrictStr


# ══════════════════════════════════════════════════════════════
# DECODING
# ══════════════════════════════════════════════════════════════

def decode_payload(
    schema: Type[PayloadT],
    payload: Any,
    command: Optional[str] = None,
) -> PayloadT:
    """
    Validate a success payload against its schema.

    Raises:
        ProtocolError: MISSING_FIELD if a required key is absent,
            WRONG_TYPE for any other mismatch
    """
    try:
        return schema.model_validate(payload)
    except ValidationError as e:
        raise _to_protocol_error(e, schema, payload, command) from e


def _to_protocol_error(
    error: ValidationError,
    schema: Type[Payload],
    payload: Any,
    command: Optional[str],
) -> ProtocolError:
    problems = error.errors()
    kind = ProtocolErrorKind.WRONG_TYPE
    if problems and all(p["type"] == "missing" for p in problems):
        kind = ProtocolErrorKind.MISSING_FIELD

    details = "; ".join(
        f"{'.'.join(str(part) for part in p['loc']) or '<payload>'}: {p['msg']}"
        for p in problems
    )
    return ProtocolError(
        kind,
        f"{schema.__name__} mismatch ({details})",
        payload=payload,
        command=command,
    )


def decode_player_entry(entry: str, command: Optional[str] = None) -> Player:
    """
    Decode one "<id>:<nickname>" entry.

    Raises:
        ProtocolError: MALFORMED_PLAYER_ENTRY if there is no colon or the
            id prefix is not an unsigned integer
    """
    id_part, sep, nickname = entry.partition(":")
    if not sep:
        raise ProtocolError(
            ProtocolErrorKind.MALFORMED_PLAYER_ENTRY,
            f"Player entry has no ':' separator: {entry!r}",
            payload=entry,
            command=command,
        )
    if not (id_part.isascii() and id_part.isdigit()):
        raise ProtocolError(
            ProtocolErrorKind.MALFORMED_PLAYER_ENTRY,
            f"Player id is not an unsigned integer: {id_part!r}",
            payload=entry,
            command=command,
        )
    return Player(id=int(id_part), nickname=nickname)


def decode_player_list(entries: List[str], command: Optional[str] = None) -> List[Player]:
    """Decode a list of "<id>:<nickname>" entries, keeping server order."""
    return [decode_player_entry(entry, command) for entry in entries]
