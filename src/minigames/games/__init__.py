"""
Terminal Games

Provides the game framework and the bundled games: coin toss, higher or
lower, memory, rock paper scissors, tic-tac-toe and word guess.
"""

import random
from typing import Optional

from .base_game import (
    BaseGame, GameSession, GameState, GameManager,
    GameError, InvalidGuessError, UnknownGameError
)
from .cointoss import CoinTossGame
from .higherlower import HigherLowerGame
from .memorygame import ColorMemoryGame
from .rockpaperscissors import RockPaperScissorsGame
from .tictactoe import TicTacToeGame
from .wordguess import WordGuessGame

GAME_CLASSES = {
    "cointoss": CoinTossGame,
    "higherlower": HigherLowerGame,
    "memorygame": ColorMemoryGame,
    "rockpaperscissors": RockPaperScissorsGame,
    "tictactoe": TicTacToeGame,
    "wordguess": WordGuessGame,
}


def create_default_manager(config_manager=None, rng: Optional[random.Random] = None) -> GameManager:
    """Build a GameManager with every bundled game registered"""
    manager = GameManager()
    for game_type, game_class in GAME_CLASSES.items():
        config = config_manager.get_game_config(game_type) if config_manager else None
        manager.register_game(game_class(config=config, rng=rng))
    return manager


__all__ = [
    'BaseGame', 'GameSession', 'GameState', 'GameManager',
    'GameError', 'InvalidGuessError', 'UnknownGameError',
    'CoinTossGame', 'HigherLowerGame', 'ColorMemoryGame',
    'RockPaperScissorsGame', 'TicTacToeGame', 'WordGuessGame',
    'create_default_manager'
]
