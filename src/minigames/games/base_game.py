"""
Base Game Framework

Provides base classes for implementing interactive terminal games.
Handles game session bookkeeping, game discovery and common game mechanics.
"""

import argparse
import random
from abc import ABC, abstractmethod
from datetime import datetime
from enum import Enum
from typing import Dict, List, Optional, Any
from dataclasses import dataclass, field

from ..core.logging import get_logger, get_structured_logger
from ..core.prompter import Prompter, PromptError
from ..core.render import Renderer


class GameError(Exception):
    """Base class for recoverable game errors"""
    pass


class InvalidGuessError(GameError):
    """Raised when a guess is not one of the accepted answers"""
    pass


class UnknownGameError(Exception):
    """Raised when a game type is not registered"""
    pass


class GameState(Enum):
    """Game session states"""
    ACTIVE = "active"
    COMPLETED = "completed"
    ABANDONED = "abandoned"


@dataclass
class GameSession:
    """Represents a single play-through of a game"""
    session_id: str
    game_type: str
    state: GameState
    created_at: datetime
    finished_at: Optional[datetime] = None
    result: Dict[str, Any] = field(default_factory=dict)

    def finish(self, state: GameState):
        """Mark the session as ended"""
        self.state = state
        self.finished_at = datetime.now()

    def duration_seconds(self) -> float:
        end = self.finished_at or datetime.now()
        return (end - self.created_at).total_seconds()

    def to_dict(self) -> Dict[str, Any]:
        """Convert session to dictionary for logging"""
        return {
            'session_id': self.session_id,
            'game_type': self.game_type,
            'state': self.state.value,
            'created_at': self.created_at.isoformat(),
            'finished_at': self.finished_at.isoformat() if self.finished_at else None,
            'result': self.result
        }


class BaseGame(ABC):
    """
    Abstract base class for all terminal games

    Subclasses implement play(), which runs the game's read-eval-print loop
    against a Prompter and a Renderer. run() wraps play() with session
    bookkeeping and logging.
    """

    summary = ""
    description = ""

    def __init__(self, game_type: str, config: Optional[Dict[str, Any]] = None,
                 rng: Optional[random.Random] = None):
        self.game_type = game_type
        self.config = dict(config or {})
        self.rng = rng or random.Random()
        self.logger = get_logger(f"games.{game_type}")
        self.events = get_structured_logger(f"games.{game_type}")

    def add_arguments(self, parser: argparse.ArgumentParser) -> None:
        """Add game-specific command-line arguments"""
        pass

    @abstractmethod
    def play(self, session: GameSession, prompter: Prompter, renderer: Renderer,
             args: argparse.Namespace) -> None:
        """
        Run the game loop until the game ends

        Args:
            session: Session to record the outcome in
            prompter: Source of user input
            renderer: Output sink
            args: Parsed command-line arguments for this game
        """
        pass

    def get_rules(self) -> str:
        """Get detailed rules for this game"""
        return self.description or self.summary

    def new_session(self) -> GameSession:
        return GameSession(
            session_id=self.generate_session_id(),
            game_type=self.game_type,
            state=GameState.ACTIVE,
            created_at=datetime.now()
        )

    def run(self, prompter: Prompter, renderer: Renderer,
            args: Optional[argparse.Namespace] = None,
            session: Optional[GameSession] = None) -> GameSession:
        """Play one session of the game"""
        session = session or self.new_session()
        self.events.info("game_started", session_id=session.session_id)

        try:
            self.play(session, prompter, renderer, args or argparse.Namespace())
        except (PromptError, GameError) as e:
            session.finish(GameState.ABANDONED)
            self.logger.warning(f"{self.game_type} abandoned: {e}")
            raise
        else:
            session.finish(GameState.COMPLETED)
        finally:
            self.events.info("game_finished", **session.to_dict())

        return session

    def generate_session_id(self) -> str:
        """Generate unique session ID"""
        timestamp = datetime.now().strftime("%Y%m%d%H%M%S%f")
        return f"{self.game_type}_{timestamp}"


class GameManager:
    """
    Manages the registered games and the history of played sessions
    """

    def __init__(self):
        self.logger = get_logger("games.manager")
        self.games: Dict[str, BaseGame] = {}
        self.sessions: List[GameSession] = []

    def register_game(self, game: BaseGame):
        """Register a game implementation"""
        self.games[game.game_type] = game
        self.logger.debug(f"Registered game: {game.game_type}")

    def unregister_game(self, game_type: str):
        """Unregister a game implementation"""
        if game_type in self.games:
            del self.games[game_type]
            self.logger.debug(f"Unregistered game: {game_type}")

    def get_available_games(self) -> List[str]:
        """Get list of available game types"""
        return list(self.games.keys())

    def get_game(self, game_type: str) -> Optional[BaseGame]:
        """Get game implementation by type"""
        return self.games.get(game_type)

    def start_game(self, game_type: str, prompter: Prompter, renderer: Renderer,
                   args: Optional[argparse.Namespace] = None) -> GameSession:
        """
        Play a session of the given game

        Raises:
            UnknownGameError: if no game of that type is registered
            PromptError: if input could not be obtained
        """
        game = self.games.get(game_type)
        if not game:
            raise UnknownGameError(f"Unknown game: {game_type}")

        session = game.new_session()
        self.sessions.append(session)
        return game.run(prompter, renderer, args, session=session)

    def get_game_list(self) -> str:
        """Get formatted list of available games"""
        if not self.games:
            return "No games available."

        width = max(len(game_type) for game_type in self.games)
        lines = [
            f"  {game_type.ljust(width)}  {game.summary}"
            for game_type, game in sorted(self.games.items())
        ]
        return "Available games:\n" + "\n".join(lines)

    def get_session_stats(self) -> Dict[str, Any]:
        """Get session statistics"""
        stats = {
            'total_games': len(self.games),
            'sessions_played': len(self.sessions),
            'games_by_type': {},
            'abandoned': 0
        }

        for session in self.sessions:
            stats['games_by_type'][session.game_type] = stats['games_by_type'].get(session.game_type, 0) + 1
            if session.state == GameState.ABANDONED:
                stats['abandoned'] += 1

        return stats
