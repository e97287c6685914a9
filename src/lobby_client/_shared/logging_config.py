# Area: Shared
"""
lobby_client._shared.logging_config — Structured logging setup
==============================================================

Configures dual logging: terminal (colored) + file (JSON).
Provides the structured error logging helper used by the CLI.
"""

from __future__ import annotations
import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING

from .logging_formatters import JSONFormatter, ProtocolFilter, TerminalFormatter

if TYPE_CHECKING:
    from ..errors import LobbyClientError

# Package logger
logger = logging.getLogger("lobby_client")


def setup_logging(
    log_file_path: str = "lobby_client.log",
    level: int = logging.INFO,
) -> None:
    """
    Configure logging for the package.

    Parameters
    ----------
    log_file_path : str
        Path to the log file. Defaults to 'lobby_client.log' in current dir.
        An empty string disables the file handler.
    level : int
        Logging level. Defaults to INFO.
    """
    pkg_logger = logging.getLogger("lobby_client")
    pkg_logger.setLevel(level)

    # Remove existing handlers
    pkg_logger.handlers.clear()

    # Terminal handler with colors
    terminal_handler = logging.StreamHandler(sys.stdout)
    terminal_handler.setLevel(level)
    terminal_handler.setFormatter(TerminalFormatter(
        fmt="%(asctime)s │ %(levelname)s │ %(name)s │ %(message)s",
        datefmt="%H:%M:%S",
    ))
    terminal_handler.addFilter(ProtocolFilter())
    pkg_logger.addHandler(terminal_handler)

    # File handler with JSON
    if log_file_path:
        try:
            log_path = Path(log_file_path)
            log_path.parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(log_path, encoding="utf-8")
            file_handler.setLevel(level)
            file_handler.setFormatter(JSONFormatter())
            pkg_logger.addHandler(file_handler)
        except OSError as e:
            pkg_logger.warning(f"Could not create log file: {e}")

    # Prevent propagation to root logger
    pkg_logger.propagate = False


def log_client_error(error: "LobbyClientError") -> None:
    """
    Log a client error in the structured format.

    Parameters
    ----------
    error : LobbyClientError
        The error to log (TransportError, RemoteError, ProtocolError
        or a SessionError).
    """
    # Print to terminal (bypassing logger for exact formatting)
    print(error.format_error_log(), file=sys.stderr)

    # Also log to file via logger
    logger.error(
        f"Client error: {error.__class__.__name__}: {error}",
        extra={
            "command": getattr(error, "command", None),
            "error_type": error.__class__.__name__,
        },
    )
