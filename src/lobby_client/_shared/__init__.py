# Area: Shared
"""
Shared plumbing used by the session client.

This package contains:
- HTTP transport
- Route building, envelope parsing and payload decoding
- Logging configuration and the protocol trace
"""

from .transport import HttpTransport, Transport
from .routes import SCOPED_COMMANDS, UNSCOPED_COMMANDS, scoped_path, unscoped_path
from .envelope import parse_envelope, unwrap_envelope
from .logging_config import setup_logging, log_client_error
from .logging_formatters import (
    enable_protocol_mode,
    disable_protocol_mode,
    is_protocol_mode_enabled,
)
from .protocol_logger import get_protocol_logger, ProtocolLogger

__all__ = [
    "HttpTransport",
    "Transport",
    "SCOPED_COMMANDS",
    "UNSCOPED_COMMANDS",
    "scoped_path",
    "unscoped_path",
    "parse_envelope",
    "unwrap_envelope",
    "setup_logging",
    "log_client_error",
    "enable_protocol_mode",
    "disable_protocol_mode",
    "is_protocol_mode_enabled",
    "get_protocol_logger",
    "ProtocolLogger",
]
