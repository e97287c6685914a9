# Area: Session
"""
lobby_client._session.state_machine — Session State Machine
===========================================================

Tracks the player's lifecycle as seen by this client. The server is
authoritative; this is bookkeeping derived from successful responses.
Every change of the stored state goes through `next_state()`.
"""

import logging
from typing import Optional

from ..types import IDLE, PLAYING, REGISTRATION, SEARCHING, SessionState
from .enums import SessionEvent

logger = logging.getLogger("lobby_client.session.state_machine")


# Events whose target does not depend on the current state: {event: next_state}
TRANSITIONS = {
    SessionEvent.REGISTERED: IDLE,
    SessionEvent.SEARCH_STARTED: SEARCHING,
    SessionEvent.WENT_IDLE: IDLE,
    SessionEvent.REQUEST_ACCEPTED: PLAYING,
}

# Events that leave the state as it is
UNCHANGED_EVENTS = {
    SessionEvent.REQUEST_PENDING,
    # end_game has no local transition; the next get_state() is authoritative
    SessionEvent.GAME_ENDED,
}


def next_state(
    current: SessionState,
    event: SessionEvent,
    code: Optional[int] = None,
) -> SessionState:
    """
    Compute the state that follows `current` after `event`.

    Args:
        current: The state before the event
        event: The event that occurred
        code: Server state code, required for STATE_REPORTED

    Returns:
        The new state

    Raises:
        ValueError: If STATE_REPORTED comes without a code
    """
    if event is SessionEvent.STATE_REPORTED:
        if code is None:
            raise ValueError("STATE_REPORTED requires a state code")
        return SessionState.from_code(code)
    if event in UNCHANGED_EVENTS:
        return current
    return TRANSITIONS[event]


class SessionStateMachine:
    """
    Holder for the locally tracked session state.

    Attributes:
        current_state: The last state derived from a successful response
    """

    def __init__(self, initial: SessionState = REGISTRATION):
        self.current_state = initial

    def apply(self, event: SessionEvent, code: Optional[int] = None) -> SessionState:
        """
        Apply an event and store the resulting state.

        Only call after the round trip that produced the event succeeded.
        """
        new_state = next_state(self.current_state, event, code)
        if new_state != self.current_state:
            if new_state.is_disconnected:
                logger.warning(
                    f"Session disconnected: {new_state.reason} "
                    f"(was {self.current_state.kind.value})"
                )
            else:
                logger.debug(
                    f"{event.value}: {self.current_state.kind.value} -> {new_state.kind.value}"
                )
        self.current_state = new_state
        return new_state
