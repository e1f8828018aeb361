"""
Core module for MiniGames

Contains configuration management, logging setup, the prompt abstraction
and the terminal renderer shared by all games.
"""

from .config import ConfigurationManager, ConfigurationError
from .prompter import Prompter, ConsolePrompter, PromptError
from .render import Renderer, Theme

__all__ = [
    'ConfigurationManager',
    'ConfigurationError',
    'Prompter',
    'ConsolePrompter',
    'PromptError',
    'Renderer',
    'Theme'
]
