# Area: Session
"""
Session lifecycle bookkeeping.

This package contains:
- State and event enums
- The transition table and the state machine that applies it

The state machine module is imported directly
(`lobby_client._session.state_machine`) because it depends on
`lobby_client.types`, which in turn depends on the enums here.
"""

from .enums import STATE_CODES, SessionEvent, StateKind

__all__ = [
    "STATE_CODES",
    "SessionEvent",
    "StateKind",
]
