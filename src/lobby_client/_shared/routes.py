# Area: Shared
"""
lobby_client._shared.routes — Command paths
============================================

Two addressing modes:
- Unscoped:  {base_url}/{command}
- Scoped:    {base_url}/{server_id}/{command}

Paths returned here are relative; the transport joins them onto the
base URL.
"""

from typing import Optional

from ..errors import NotRegisteredError

# Commands addressed without a session
UNSCOPED_COMMANDS = {
    "register",
    "players",
    "error_description",
}

# Commands prefixed with the session's server id
SCOPED_COMMANDS = {
    "state",
    "search",
    "idle",
    "requests",
    "messages",
    "end_game",
}


def unscoped_path(command: str) -> str:
    """Path for a command that needs no session."""
    if command not in UNSCOPED_COMMANDS:
        raise ValueError(f"Not an unscoped command: {command}")
    return command


def scoped_path(server_id: Optional[int], command: str) -> str:
    """
    Path for a session-scoped command.

    Args:
        server_id: The bound server id, or None when unregistered
        command: One of SCOPED_COMMANDS

    Raises:
        NotRegisteredError: If server_id is None
    """
    if command not in SCOPED_COMMANDS:
        raise ValueError(f"Not a session-scoped command: {command}")
    if server_id is None:
        raise NotRegisteredError(command)
    return f"{server_id}/{command}"


def join_url(base_url: str, path: str) -> str:
    """Join a relative command path onto the base URL."""
    return f"{base_url.rstrip('/')}/{path.lstrip('/')}"
