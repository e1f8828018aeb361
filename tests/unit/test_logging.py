"""
Tests for logging setup
"""

import logging
import logging.handlers

import pytest

from minigames.core.logging import (
    MiniGamesLogger, initialize_logging, get_logger, get_structured_logger
)


def logging_config(**overrides):
    config = {
        'level': 'DEBUG',
        'file': None,
        'max_size': '1MB',
        'backup_count': 2,
        'console': False,
        'console_level': 'WARNING'
    }
    config.update(overrides)
    return {'logging': config}


class TestMiniGamesLogger:
    """Test logger configuration"""

    @pytest.mark.parametrize("size,expected", [
        ("512", 512), ("10KB", 10 * 1024), ("1MB", 1024 * 1024), ("2gb", 2 * 1024 ** 3),
    ])
    def test_parse_size(self, size, expected):
        assert MiniGamesLogger(logging_config())._parse_size(size) == expected

    def test_root_level(self):
        MiniGamesLogger(logging_config(level='ERROR'))
        assert logging.getLogger().level == logging.ERROR

    def test_console_handler_on_stderr(self):
        MiniGamesLogger(logging_config(console=True, console_level='INFO'))

        handlers = [h for h in logging.getLogger().handlers if type(h) is logging.StreamHandler]
        assert len(handlers) == 1
        assert handlers[0].level == logging.INFO

    def test_rotating_file_handler(self, temp_dir):
        log_file = temp_dir / "logs" / "games.log"
        MiniGamesLogger(logging_config(file=str(log_file)))

        handlers = [h for h in logging.getLogger().handlers
                    if isinstance(h, logging.handlers.RotatingFileHandler)]
        assert len(handlers) == 1
        assert handlers[0].maxBytes == 1024 * 1024
        assert handlers[0].backupCount == 2

        get_logger("tests").info("written to file")
        handlers[0].flush()
        assert "written to file" in log_file.read_text(encoding="utf-8")

    def test_logger_names(self):
        instance = initialize_logging(logging_config())

        assert instance.get_logger("games.cointoss").name == "minigames.games.cointoss"
        assert get_logger("main").name == "minigames.main"
        assert get_logger("minigames.core").name == "minigames.core"


class TestStructuredLogging:
    """Test structlog events"""

    def test_events_reach_stdlib_handlers(self, temp_dir):
        log_file = temp_dir / "events.log"
        initialize_logging(logging_config(file=str(log_file)))

        get_structured_logger("games.tictactoe").info("move_applied", mark="X", row=1, col=2)
        for handler in logging.getLogger().handlers:
            handler.flush()

        content = log_file.read_text(encoding="utf-8")
        assert '"event": "move_applied"' in content
        assert '"mark": "X"' in content

    def test_events_below_level_are_dropped(self, temp_dir):
        log_file = temp_dir / "events.log"
        initialize_logging(logging_config(level='WARNING', file=str(log_file)))

        get_structured_logger("games.cointoss").debug("toss")
        for handler in logging.getLogger().handlers:
            handler.flush()

        assert "toss" not in log_file.read_text(encoding="utf-8")
