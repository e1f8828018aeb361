"""
Configuration Management System for MiniGames

Handles loading configuration from environment variables, config files,
and built-in defaults, and validates the per-game settings.
"""

import os
import json
import copy
import yaml
import logging
from typing import Any, Dict, List, Optional, Callable
from pathlib import Path
from dataclasses import dataclass


@dataclass
class ConfigSource:
    """Configuration source definition"""
    name: str
    priority: int
    loader: Callable
    path: Optional[str] = None


class ConfigurationError(Exception):
    """Configuration-related errors"""
    pass


DEFAULT_WORDS = [
    "github", "actions", "workflow", "repository", "branch",
    "commit", "merge", "issues", "pull", "request", "codespace",
    "copilot", "project", "discussion", "milestone", "release",
    "clone", "fork", "gist", "markdown", "license", "readme",
]


class ConfigurationManager:
    """
    Manages application configuration with support for multiple sources
    and validation of game settings.
    """

    VALID_LOG_LEVELS = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']

    def __init__(self, config_dir: str = "config"):
        self.config_dir = Path(config_dir)
        self.config: Dict[str, Any] = {}
        self.sources: List[ConfigSource] = []
        self.logger = logging.getLogger(__name__)

        # Default configuration values
        self.defaults = {
            "app": {
                "name": "MiniGames",
                "version": "1.0.0",
                "no_color": False
            },
            "logging": {
                "level": "WARNING",
                "file": None,
                "max_size": "1MB",
                "backup_count": 3,
                "console": True,
                "console_level": "WARNING"
            },
            "theme": {
                "x": "bold color(45)",
                "o": "bold color(226)",
                "title": "bold color(99)",
                "number": "bold color(39)",
                "correct": "color(10)",
                "incorrect": "color(9)",
                "streak": "bold color(208)",
                "instruction": "color(220)",
                "word": "bold color(39)",
                "remaining": "color(15)",
                "red": "bold color(9)",
                "yellow": "bold color(11)",
                "green": "bold color(10)",
                "blue": "bold color(12)"
            },
            "games": {
                "cointoss": {},
                "higherlower": {"min": 1, "max": 100},
                "memorygame": {
                    "lives": None,
                    "max_round": 100,
                    "display_seconds": 3.0,
                    "retry_pause_seconds": 2.0,
                    "round_pause_seconds": 1.0
                },
                "rockpaperscissors": {"best_of": None},
                "tictactoe": {"mode": None},
                "wordguess": {
                    "max_incorrect_guesses": 6,
                    "words": list(DEFAULT_WORDS)
                }
            }
        }

        self._setup_sources()

    def _setup_sources(self):
        """Set up configuration sources in priority order"""
        self.sources.append(ConfigSource(
            name="environment",
            priority=4,
            loader=self._load_from_env
        ))

        local_config_path = str(self.config_dir / "config.yaml")
        self.sources.append(ConfigSource(
            name="local_config",
            priority=3,
            loader=lambda: self._load_from_file(local_config_path),
            path=local_config_path
        ))

        default_config_path = str(self.config_dir / "default.yaml")
        self.sources.append(ConfigSource(
            name="default_config",
            priority=2,
            loader=lambda: self._load_from_file(default_config_path),
            path=default_config_path
        ))

        self.sources.append(ConfigSource(
            name="defaults",
            priority=1,
            loader=lambda: copy.deepcopy(self.defaults)
        ))

    def load_config(self) -> None:
        """Load configuration from all sources"""
        self.logger.debug("Loading configuration from all sources")

        merged_config = {}

        # Lowest priority first so later sources override
        for source in sorted(self.sources, key=lambda x: x.priority):
            source_config = source.loader()
            if source_config:
                merged_config = self._deep_merge(merged_config, source_config)
                self.logger.debug(f"Loaded configuration from {source.name}")

        self.config = merged_config
        self.validate()
        self.logger.debug("Configuration loaded successfully")

    def _load_from_env(self) -> Dict[str, Any]:
        """Load configuration from environment variables"""
        config = {}

        env_mappings = {
            "MINIGAMES_LOG_LEVEL": "logging.level",
            "MINIGAMES_LOG_FILE": "logging.file",
            "MINIGAMES_NO_COLOR": "app.no_color",
            "MINIGAMES_HIGHERLOWER_MIN": "games.higherlower.min",
            "MINIGAMES_HIGHERLOWER_MAX": "games.higherlower.max",
            "MINIGAMES_MEMORY_LIVES": "games.memorygame.lives"
        }

        for env_var, config_key in env_mappings.items():
            value = os.getenv(env_var)
            if value is None:
                continue

            if value.lower() in ('true', 'false'):
                value = value.lower() == 'true'
            elif value.lstrip('-').isdigit():
                value = int(value)

            self._set_nested_value(config, config_key, value)

        return config

    def _load_from_file(self, file_path: str) -> Dict[str, Any]:
        """Load configuration from YAML or JSON file"""
        path = Path(file_path)

        if not path.exists():
            return {}

        try:
            with open(path, 'r', encoding='utf-8') as f:
                if path.suffix.lower() in ['.yaml', '.yml']:
                    data = yaml.safe_load(f) or {}
                elif path.suffix.lower() == '.json':
                    data = json.load(f)
                else:
                    self.logger.warning(f"Unsupported config file format: {path}")
                    return {}
        except (OSError, yaml.YAMLError, json.JSONDecodeError) as e:
            raise ConfigurationError(f"Error loading config file {path}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigurationError(f"Config file {path} must contain a mapping")
        return data

    def _deep_merge(self, base: Dict, override: Dict) -> Dict:
        """Deep merge two dictionaries"""
        result = base.copy()

        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value

        return result

    def _set_nested_value(self, config: Dict, key_path: str, value: Any) -> None:
        """Set a nested configuration value using dot notation"""
        keys = key_path.split('.')
        current = config

        for key in keys[:-1]:
            if key not in current or not isinstance(current[key], dict):
                current[key] = {}
            current = current[key]

        current[keys[-1]] = value

    def validate(self) -> None:
        """Validate configuration values"""
        errors = []

        log_level = str(self.get('logging.level', 'WARNING'))
        if log_level.upper() not in self.VALID_LOG_LEVELS:
            errors.append(f"Invalid log level: {log_level}")

        low = self.get('games.higherlower.min', 1)
        high = self.get('games.higherlower.max', 100)
        if not isinstance(low, int) or not isinstance(high, int):
            errors.append(f"Higher or Lower range must be integers: {low}..{high}")
        elif low >= high:
            errors.append(f"Higher or Lower minimum ({low}) must be below maximum ({high})")

        lives = self.get('games.memorygame.lives')
        if lives is not None and (not isinstance(lives, int) or lives < 1):
            errors.append(f"Invalid number of lives: {lives}")

        max_round = self.get('games.memorygame.max_round', 100)
        if not isinstance(max_round, int) or max_round < 1:
            errors.append(f"Invalid memory game max round: {max_round}")

        best_of = self.get('games.rockpaperscissors.best_of')
        if best_of is not None and (not isinstance(best_of, int) or best_of < 1):
            errors.append(f"Invalid best-of value: {best_of}")

        mode = self.get('games.tictactoe.mode')
        if mode is not None and mode not in ('local', 'computer'):
            errors.append(f"Invalid tic-tac-toe mode: {mode}")

        max_incorrect = self.get('games.wordguess.max_incorrect_guesses', 6)
        if not isinstance(max_incorrect, int) or max_incorrect < 1:
            errors.append(f"Invalid max incorrect guesses: {max_incorrect}")

        words = self.get('games.wordguess.words', [])
        if not words:
            errors.append("Word list must not be empty")
        else:
            bad_words = [w for w in words if not (isinstance(w, str) and w.isascii() and w.isalpha())]
            if bad_words:
                errors.append(f"Word list contains invalid words: {', '.join(map(str, bad_words))}")

        if errors:
            raise ConfigurationError(f"Configuration validation failed: {'; '.join(errors)}")

    def get(self, key: str, default: Any = None) -> Any:
        """Get configuration value using dot notation"""
        keys = key.split('.')
        current = self.config

        try:
            for k in keys:
                current = current[k]
            return current
        except (KeyError, TypeError):
            return default

    def set(self, key: str, value: Any) -> None:
        """Set configuration value using dot notation"""
        self._set_nested_value(self.config, key, value)

    def get_section(self, section: str) -> Dict[str, Any]:
        """Get entire configuration section"""
        return self.get(section, {}) or {}

    def get_game_config(self, game_type: str) -> Dict[str, Any]:
        """Get the settings block for a single game"""
        return self.get_section(f'games.{game_type}')

    def is_color_enabled(self) -> bool:
        """Check whether styled output is enabled"""
        return not self.get('app.no_color', False)
