# Area: Shared Tests
"""Tests for logging setup and formatters."""

import json
import logging

import pytest

from lobby_client._shared.logging_config import log_client_error, setup_logging
from lobby_client._shared.logging_formatters import (
    JSONFormatter,
    ProtocolFilter,
    TerminalFormatter,
    disable_protocol_mode,
    enable_protocol_mode,
)
from lobby_client.errors import RemoteError


@pytest.fixture
def restore_package_logger():
    pkg_logger = logging.getLogger("lobby_client")
    handlers = list(pkg_logger.handlers)
    level = pkg_logger.level
    propagate = pkg_logger.propagate
    yield pkg_logger
    for handler in pkg_logger.handlers:
        handler.close()
    pkg_logger.handlers[:] = handlers
    pkg_logger.setLevel(level)
    pkg_logger.propagate = propagate


def make_record(msg="hello", level=logging.INFO, **extra):
    record = logging.LogRecord("lobby_client.test", level, __file__, 1, msg, None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestFormatters:
    """Tests for JSON and terminal formatters."""

    def test_json_formatter_fields(self):
        data = json.loads(JSONFormatter().format(make_record(command="search")))
        assert data["level"] == "INFO"
        assert data["logger"] == "lobby_client.test"
        assert data["message"] == "hello"
        assert data["command"] == "search"
        assert "error_type" not in data

    def test_terminal_formatter_colors_level_only_in_output(self):
        record = make_record(level=logging.WARNING)
        out = TerminalFormatter(fmt="%(levelname)s %(message)s").format(record)
        assert "\033[33m" in out
        assert record.levelname == "WARNING"

    def test_protocol_filter(self):
        record = make_record()
        assert ProtocolFilter().filter(record) is True
        enable_protocol_mode()
        try:
            assert ProtocolFilter().filter(record) is False
        finally:
            disable_protocol_mode()


class TestSetupLogging:
    """Tests for setup_logging()."""

    def test_terminal_and_file_handlers(self, tmp_path, restore_package_logger):
        log_file = tmp_path / "logs" / "client.log"

        setup_logging(str(log_file), logging.DEBUG)

        pkg_logger = restore_package_logger
        assert pkg_logger.level == logging.DEBUG
        assert pkg_logger.propagate is False
        assert len(pkg_logger.handlers) == 2
        assert log_file.exists()

    def test_empty_path_skips_file_handler(self, restore_package_logger):
        setup_logging("", logging.INFO)
        assert len(restore_package_logger.handlers) == 1

    def test_log_client_error(self, tmp_path, capsys, restore_package_logger):
        log_file = tmp_path / "client.log"
        setup_logging(str(log_file), logging.INFO)

        log_client_error(RemoteError(3, "Nickname taken", "alice", command="register"))

        assert "REMOTE_ERROR" in capsys.readouterr().err
        for handler in restore_package_logger.handlers:
            handler.flush()
        line = json.loads(log_file.read_text(encoding="utf-8").strip().splitlines()[-1])
        assert line["level"] == "ERROR"
        assert line["command"] == "register"
        assert line["error_type"] == "RemoteError"
