# Area: Shared
"""
lobby_client.cli — Command-line interface
==========================================

Interactive shell on top of SessionClient.

Usage:
    python -m lobby_client --base-url http://localhost:8000
    python -m lobby_client --config config.json --trace

The base URL can also come from the config file, a .env file or
the LOBBY_BASE_URL environment variable.
"""

from __future__ import annotations
import argparse
import logging
import sys
from typing import List, Optional

from ._client_config import load_config, resolve_log_level, validate_config
from ._shared.logging_config import log_client_error, setup_logging
from ._shared.logging_formatters import enable_protocol_mode
from .client import SessionClient
from .errors import LobbyClientError

logger = logging.getLogger("lobby_client.cli")

HELP_TEXT = """
Commands:
  register <nickname>      register and bind a session
  whoami                   print the registered nickname
  state                    ask the server for our state
  stored                   print the locally stored state
  search                   enter the matchmaking queue
  idle                     leave the queue / go idle
  request <player-id>      send a match request
  requests                 list players who sent us a request
  say <text>               send an in-game message
  messages                 read in-game messages
  end                      end the current game
  players                  list all players
  explain <error-id>       describe a server error id
  help
  quit / exit
""".strip()


class UsageError(ValueError):
    """Raised for a shell line that does not match any command."""


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Matchmaking lobby client shell",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m lobby_client --base-url http://localhost:8000
  python -m lobby_client --config config.json --trace
  LOBBY_BASE_URL=http://localhost:8000 python -m lobby_client
        """,
    )
    parser.add_argument("--config", type=str, help="Path to JSON config file")
    parser.add_argument("--base-url", type=str, help="Server base URL")
    parser.add_argument("--timeout", type=float, help="Request timeout in seconds")
    parser.add_argument("--log-file", type=str, help="Path of the JSON log file")
    parser.add_argument("--verbose", action="store_true", help="Log at DEBUG level")
    parser.add_argument(
        "--trace",
        action="store_true",
        help="Print one line per request/response instead of standard logs",
    )
    return parser.parse_args(argv)


def _format_players(players) -> str:
    if not players:
        return "(none)"
    return "\n".join(f"  {p.id:>6}  {p.nickname}" for p in players)


def _parse_id(text: str, signed: bool = False) -> int:
    """Parse a decimal id typed at the prompt, raising UsageError if it is not one."""
    digits = text[1:] if signed and text.startswith("-") else text
    if not (digits.isascii() and digits.isdigit()):
        raise UsageError(f"Expected a number, got {text!r}")
    return int(text)


def run_command(client: SessionClient, line: str) -> str:
    """
    Execute one shell line against the client.

    Returns:
        Text to print

    Raises:
        UsageError: Unknown command or wrong arguments
        LobbyClientError: Anything the client raised
    """
    cmd, _, rest = line.strip().partition(" ")
    rest = rest.strip()

    if cmd == "register" and rest:
        session = client.register(rest)
        identity = session.identity
        return (
            f"registered as {identity.nickname} "
            f"(server id {identity.server_id}, player id {identity.player_id})"
        )
    if cmd == "whoami" and not rest:
        return client.get_nickname()
    if cmd == "state" and not rest:
        return str(client.get_state())
    if cmd == "stored" and not rest:
        return str(client.get_stored_state())
    if cmd == "search" and not rest:
        client.search()
        return str(client.get_stored_state())
    if cmd == "idle" and not rest:
        client.idle()
        return str(client.get_stored_state())
    if cmd == "request" and rest:
        in_game = client.send_request(_parse_id(rest))
        return "match started" if in_game else "request sent"
    if cmd == "requests" and not rest:
        return _format_players(client.get_requests())
    if cmd == "say" and rest:
        client.send_message(rest)
        return "sent"
    if cmd == "messages" and not rest:
        messages = client.get_messages()
        return "\n".join(f"  {m}" for m in messages) if messages else "(none)"
    if cmd == "end" and not rest:
        client.end_game()
        return "game ended"
    if cmd == "players" and not rest:
        return _format_players(client.get_players())
    if cmd == "explain" and rest:
        return client.get_error_description(_parse_id(rest, signed=True))
    raise UsageError("Unknown command. Type 'help'.")


def repl(client: SessionClient) -> None:
    """Read-eval-print loop; errors are reported and the loop continues."""
    print(HELP_TEXT)
    while True:
        try:
            line = input("lobby> ").strip()
        except EOFError:
            print()
            break

        if not line:
            continue
        if line in {"quit", "exit"}:
            break
        if line == "help":
            print(HELP_TEXT)
            continue

        try:
            print(run_command(client, line))
        except UsageError as e:
            print(e)
        except LobbyClientError as e:
            log_client_error(e)


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    args = parse_args(argv)
    config = load_config(args.config)

    if args.base_url:
        config["base_url"] = args.base_url
    if args.timeout is not None:
        config["timeout_seconds"] = args.timeout
    if args.log_file is not None:
        config["log_file"] = args.log_file
    if args.verbose:
        config["log_level"] = "DEBUG"

    try:
        validate_config(config)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        print("Set via --base-url, config file or LOBBY_BASE_URL.", file=sys.stderr)
        return 1

    setup_logging(config["log_file"], resolve_log_level(config))
    if args.trace:
        enable_protocol_mode()

    with SessionClient.from_config(config) as client:
        logger.info(f"Connected to {config['base_url']}")
        nickname = config.get("nickname")
        if nickname:
            try:
                print(run_command(client, f"register {nickname}"))
            except LobbyClientError as e:
                log_client_error(e)
        repl(client)
    return 0
