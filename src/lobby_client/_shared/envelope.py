# Area: Shared
"""
lobby_client._shared.envelope — Response envelope parsing
=========================================================

Every response body is a JSON object holding exactly one of:

    {"success": <payload>}
    {"error": {"id": <int>, "description": <str>, "info": <str>}}

`parse_envelope()` is pure: it returns the success payload unchanged or
a RemoteError built from the error body. `unwrap_envelope()` is what the
operations use; it raises the RemoteError instead of returning it.
"""

from __future__ import annotations
from typing import Any, Optional, Union

from pydantic import ValidationError

from ..errors import ProtocolError, ProtocolErrorKind, RemoteError
from .decoders import ErrorBody


def parse_envelope(response: Any, command: Optional[str] = None) -> Union[Any, RemoteError]:
    """
    Split a decoded response body into its payload or its remote error.

    Args:
        response: The decoded JSON body
        command: Command name, for error context

    Returns:
        The value under "success" as-is, or a RemoteError

    Raises:
        ProtocolError: MALFORMED_ENVELOPE if the body is not an object with
            "success" or "error"; MALFORMED_ERROR_ENVELOPE if the error body
            lacks a field or has one of the wrong type
    """
    if not isinstance(response, dict):
        raise ProtocolError(
            ProtocolErrorKind.MALFORMED_ENVELOPE,
            f"Response must be a JSON object, got {type(response).__name__}",
            payload=response,
            command=command,
        )

    if "success" in response:
        return response["success"]

    if "error" in response:
        try:
            body = ErrorBody.model_validate(response["error"])
        except ValidationError as e:
            raise ProtocolError(
                ProtocolErrorKind.MALFORMED_ERROR_ENVELOPE,
                f"Error envelope is incomplete: {e.error_count()} problem(s)",
                payload=response,
                command=command,
            ) from e
        return RemoteError(
            id=body.id,
            description=body.description,
            info=body.info,
            command=command,
        )

    raise ProtocolError(
        ProtocolErrorKind.MALFORMED_ENVELOPE,
        "Response has neither 'success' nor 'error'",
        payload=response,
        command=command,
    )


def unwrap_envelope(response: Any, command: Optional[str] = None) -> Any:
    """Return the success payload or raise the server's RemoteError."""
    result = parse_envelope(response, command)
    if isinstance(result, RemoteError):
        raise result
    return result
