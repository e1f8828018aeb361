"""
Memory Game Implementation

Remember and reproduce a growing sequence of colors. Each round adds one
color; a wrong pick costs a life and the round is replayed.
"""

import argparse
import random
from enum import Enum
from typing import List, Optional

from .base_game import BaseGame, GameSession
from ..core.prompter import Prompter
from ..core.render import Renderer


class Color(Enum):
    """A color in the sequence"""
    RED = "red"
    YELLOW = "yellow"
    GREEN = "green"
    BLUE = "blue"

    @property
    def label(self) -> str:
        return self.value.title()


AVAILABLE_COLORS = [Color.RED, Color.YELLOW, Color.GREEN, Color.BLUE]

DEFAULT_MAX_ROUND = 100

# Round 1 shows three colors
SEQUENCE_OFFSET = 2

LIFE_OPTIONS = ["1 life (hardcore mode)", "2 lives", "3 lives"]
LIFE_VALUES = [1, 2, 3]


class MemoryGame:
    """Memory game state"""

    def __init__(self, lives: int, max_round: int = DEFAULT_MAX_ROUND,
                 rng: Optional[random.Random] = None):
        self.lives = lives
        self.current_round = 1
        self.max_round = max_round
        self.sequence: List[Color] = []
        self.available_colors = list(AVAILABLE_COLORS)
        self.rng = rng or random.Random()

    def generate_sequence(self) -> List[Color]:
        """Create a fresh sequence for the current round"""
        length = self.current_round + SEQUENCE_OFFSET
        self.sequence = [self.rng.choice(self.available_colors) for _ in range(length)]
        return self.sequence

    def check_sequence(self, user_sequence: List[Color]) -> bool:
        if len(user_sequence) != len(self.sequence):
            return False
        return all(picked == expected for picked, expected in zip(user_sequence, self.sequence))

    def decrement_lives(self) -> None:
        self.lives -= 1

    def next_round(self) -> None:
        self.current_round += 1

    def is_game_over(self) -> bool:
        return self.lives <= 0 or self.current_round > self.max_round


class ColorMemoryGame(BaseGame):
    """Memory game implementation"""

    summary = "Test your memory by remembering sequences of colors"
    description = (
        "A memory game where you need to remember and reproduce sequences of colors.\n"
        "The sequence grows longer with each round. You can choose your number of lives."
    )

    COLOR_OPTIONS = [color.label for color in AVAILABLE_COLORS]

    def __init__(self, config=None, rng=None):
        super().__init__("memorygame", config, rng)
        self.display_seconds = float(self.config.get('display_seconds', 3.0))
        self.retry_pause_seconds = float(self.config.get('retry_pause_seconds', 2.0))
        self.round_pause_seconds = float(self.config.get('round_pause_seconds', 1.0))

    def add_arguments(self, parser: argparse.ArgumentParser) -> None:
        parser.add_argument(
            "--lives",
            type=int,
            choices=LIFE_VALUES,
            default=self.config.get('lives'),
            help="Number of lives (prompted when omitted)"
        )

    def play(self, session: GameSession, prompter: Prompter, renderer: Renderer,
             args: argparse.Namespace) -> None:
        lives = getattr(args, 'lives', None) or self.config.get('lives')
        if not lives:
            index = prompter.select("Choose number of lives:", LIFE_OPTIONS[1], LIFE_OPTIONS)
            lives = LIFE_VALUES[index] if 0 <= index < len(LIFE_VALUES) else LIFE_VALUES[1]

        game = MemoryGame(lives, max_round=self.config.get('max_round', DEFAULT_MAX_ROUND),
                          rng=self.rng)
        session.result['lives'] = lives

        while not game.is_game_over():
            game.generate_sequence()
            self.events.debug("sequence_generated", round=game.current_round,
                              length=len(game.sequence))
            self._show_sequence(renderer, game)

            # Replay the same sequence until it is entered correctly or lives run out
            while True:
                renderer.clear()
                self._header(renderer, game)
                renderer.text("Select the sequence in order using the menu.", "instruction")

                if self._read_sequence(prompter, game):
                    renderer.text("Correct! Next round...", "correct")
                    game.next_round()
                    renderer.pause(self.round_pause_seconds)
                    break

                game.decrement_lives()
                if game.is_game_over():
                    renderer.text(f"Game Over! You reached round {game.current_round}.", "incorrect")
                    session.result['round_reached'] = game.current_round
                    return

                renderer.text("Wrong color! Try again from the start of this round...", "incorrect")
                renderer.pause(self.retry_pause_seconds)
                self._show_sequence(renderer, game)

        session.result['round_reached'] = game.current_round
        renderer.text("Thanks for playing!", "title")

    def _read_sequence(self, prompter: Prompter, game: MemoryGame) -> bool:
        """Ask for each color in turn, stopping at the first wrong pick"""
        for i, expected in enumerate(game.sequence):
            index = prompter.select(f"Color {i + 1}:", self.COLOR_OPTIONS[0], self.COLOR_OPTIONS)
            if not 0 <= index < len(AVAILABLE_COLORS):
                return False
            if AVAILABLE_COLORS[index] != expected:
                return False
        return True

    def _header(self, renderer: Renderer, game: MemoryGame) -> None:
        renderer.line(f"Round {game.current_round} - Lives: {game.lives}")
        renderer.blank()

    def _show_sequence(self, renderer: Renderer, game: MemoryGame) -> None:
        renderer.clear()
        self._header(renderer, game)
        renderer.text("Remember this sequence:", "title")

        pieces = []
        for color in game.sequence:
            pieces.append(renderer.styled(color.label, color.value))
            pieces.append(" ")
        renderer.line(*pieces)

        renderer.blank()
        seconds = self.display_seconds
        shown = int(seconds) if seconds == int(seconds) else seconds
        renderer.line(f"Memorize it! It will disappear in {shown} seconds...")
        renderer.pause(seconds)
