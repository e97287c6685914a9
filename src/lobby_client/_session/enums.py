# Area: Session
"""
lobby_client._session.enums — Session State Machine Enums
=========================================================

Defines the coarse lifecycle states of a player session and the
events that move the session between them.
"""

from enum import Enum


class StateKind(Enum):
    """
    Lifecycle states of a player session.

    State transitions:
    REGISTRATION -> IDLE (on REGISTERED)
    Any state -> SEARCHING (on SEARCH_STARTED)
    Any state -> IDLE (on WENT_IDLE)
    Any state -> PLAYING (on REQUEST_ACCEPTED)
    Any state -> unchanged (on REQUEST_PENDING or GAME_ENDED)
    Any state -> reported state (on STATE_REPORTED)

    DISCONNECTED is never sent by the server. It is produced locally
    when the server reports a state code this client does not know.
    """
    DISCONNECTED = "DISCONNECTED"
    REGISTRATION = "REGISTRATION"
    IDLE = "IDLE"
    SEARCHING = "SEARCHING"
    PLAYING = "PLAYING"


# Numeric codes used by the `state` command
STATE_CODES = {
    0: StateKind.REGISTRATION,
    1: StateKind.IDLE,
    2: StateKind.SEARCHING,
    3: StateKind.PLAYING,
}


class SessionEvent(Enum):
    """
    Events that trigger state transitions.

    Events are triggered by:
    - REGISTERED: successful `register`
    - SEARCH_STARTED: successful `search`
    - WENT_IDLE: successful `idle`
    - REQUEST_ACCEPTED: `requests` POST answered with in_game=true
    - REQUEST_PENDING: `requests` POST answered with in_game=false
    - GAME_ENDED: successful `end_game`
    - STATE_REPORTED: successful `state` query (carries the numeric code)
    """
    REGISTERED = "REGISTERED"
    SEARCH_STARTED = "SEARCH_STARTED"
    WENT_IDLE = "WENT_IDLE"
    REQUEST_ACCEPTED = "REQUEST_ACCEPTED"
    REQUEST_PENDING = "REQUEST_PENDING"
    GAME_ENDED = "GAME_ENDED"
    STATE_REPORTED = "STATE_REPORTED"
