"""
Global pytest configuration and fixtures for MiniGames testing.
"""
import io
import logging
import random
import pytest
from pathlib import Path

from rich.console import Console

import minigames.core.logging as minigames_logging
from minigames.core.config import ConfigurationManager
from minigames.core.render import Renderer, Theme


@pytest.fixture(autouse=True)
def restore_logging():
    """Undo root logger changes made by initialize_logging."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)
    minigames_logging._logger_instance = None


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Keep MINIGAMES_* variables from the developer's shell out of tests."""
    for name in [
        "MINIGAMES_LOG_LEVEL", "MINIGAMES_LOG_FILE", "MINIGAMES_NO_COLOR",
        "MINIGAMES_HIGHERLOWER_MIN", "MINIGAMES_HIGHERLOWER_MAX", "MINIGAMES_MEMORY_LIVES",
    ]:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def temp_dir(tmp_path):
    """Temporary directory for config and log files."""
    return Path(tmp_path)


@pytest.fixture
def rng():
    """Seeded random source so game outcomes are repeatable."""
    return random.Random(1234)


@pytest.fixture
def console():
    """Console writing plain text to an in-memory buffer."""
    return Console(file=io.StringIO(), color_system=None, width=120, highlight=False)


@pytest.fixture
def sleeps():
    """Records pause durations instead of sleeping."""
    return []


@pytest.fixture
def renderer(console, sleeps):
    """Renderer over the in-memory console with styles disabled."""
    return Renderer(console, Theme(enabled=False), sleep=sleeps.append)


@pytest.fixture
def output(console):
    """Callable returning everything printed so far."""
    return lambda: console.file.getvalue()


@pytest.fixture
def config_manager(temp_dir):
    """Configuration manager loaded from an empty config directory."""
    manager = ConfigurationManager(str(temp_dir / "config"))
    manager.load_config()
    return manager
