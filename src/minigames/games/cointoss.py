"""
Coin Toss Game Implementation

Guess heads or tails; every correct call extends the streak and the first
wrong call ends the game.
"""

import argparse
import random
from dataclasses import dataclass
from typing import Optional, Tuple

from .base_game import BaseGame, GameSession, InvalidGuessError
from ..core.prompter import Prompter, PromptError
from ..core.render import Renderer
from ..core.logging import get_logger


logger = get_logger("games.cointoss")

SIDES = ("heads", "tails")


def toss_coin(rng: Optional[random.Random] = None) -> str:
    """Toss a fair coin"""
    rng = rng or random.Random()
    return "heads" if rng.random() < 0.5 else "tails"


def validate_guess(guess: str) -> str:
    """Normalise a guess, raising InvalidGuessError unless heads or tails"""
    normalised = guess.strip().lower()
    if normalised not in SIDES:
        raise InvalidGuessError("guess must be either 'heads' or 'tails'")
    return normalised


def get_player_guess(prompter: Prompter) -> Tuple[str, bool]:
    """
    Ask for the next guess.

    Returns:
        (guess, keep_playing); quitting or a prompt failure gives ("", False)
    """
    options = ["Heads", "Tails", "Quit"]
    try:
        index = prompter.select("What's your next guess? Heads, Tails or Quit?", "Heads", options)
    except PromptError as e:
        logger.warning(f"Error reading input: {e}")
        return "", False

    if not 0 <= index < len(options):
        return "", False

    answer = options[index].strip().lower()
    if answer == "quit":
        return "", False
    return answer, True


@dataclass
class CoinToss:
    """A single toss"""
    player_guess: str = ""
    result: str = ""
    is_over: bool = False

    def play(self, guess: str, rng: Optional[random.Random] = None) -> None:
        self.player_guess = validate_guess(guess)
        self.result = toss_coin(rng)
        self.is_over = True

    def is_win(self) -> bool:
        return self.is_over and self.player_guess == self.result

    def get_result(self) -> str:
        outcome = "You win!" if self.is_win() else "You lose!"
        return f"The coin shows: {self.result.title()}! {outcome}"


class CoinTossGame(BaseGame):
    """Coin toss game implementation"""

    summary = "Toss a coin"
    description = "Toss a virtual coin and get heads or tails as the result."

    def __init__(self, config=None, rng=None):
        super().__init__("cointoss", config, rng)

    def add_arguments(self, parser: argparse.ArgumentParser) -> None:
        parser.add_argument(
            "guess",
            nargs="?",
            type=self._guess_type,
            help="Your first guess: heads or tails (prompted when omitted)"
        )

    @staticmethod
    def _guess_type(value: str) -> str:
        try:
            return validate_guess(value)
        except InvalidGuessError as e:
            raise argparse.ArgumentTypeError(str(e)) from e

    def play(self, session: GameSession, prompter: Prompter, renderer: Renderer,
             args: argparse.Namespace) -> None:
        guess = getattr(args, 'guess', None)
        keep_playing = True
        if not guess:
            guess, keep_playing = get_player_guess(prompter)

        streak = 0
        while keep_playing:
            toss = CoinToss()
            toss.play(guess, self.rng)
            renderer.text(toss.get_result(), "correct" if toss.is_win() else "incorrect")

            if not toss.is_win():
                renderer.line(
                    renderer.styled("Game Over!", "incorrect"), " ",
                    renderer.styled(f"Final streak: {streak}", "streak")
                )
                break

            streak += 1
            renderer.line(renderer.styled("Correct!", "correct"), " ",
                          renderer.styled(f"Streak: {streak}", "streak"))
            guess, keep_playing = get_player_guess(prompter)

        session.result['streak'] = streak
