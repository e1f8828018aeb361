"""
Higher or Lower Game Implementation

A number is shown and the player guesses whether the next one will be
higher or lower. The game continues until a wrong guess; equal numbers
count as wrong.
"""

import argparse
import random
from typing import Optional, Tuple

from .base_game import BaseGame, GameError, GameSession, InvalidGuessError
from ..core.prompter import Prompter, PromptError
from ..core.render import Renderer
from ..core.logging import get_logger


logger = get_logger("games.higherlower")

DIRECTIONS = ("higher", "lower")


class InvalidRangeError(GameError):
    """Raised when the minimum is not below the maximum"""
    pass


def validate_guess(guess: str) -> str:
    """Normalise a guess, raising InvalidGuessError unless higher or lower"""
    normalised = guess.strip().lower()
    if normalised not in DIRECTIONS:
        raise InvalidGuessError("guess must be either 'higher' or 'lower'")
    return normalised


def get_player_guess(prompter: Prompter, current_number: int) -> Tuple[str, bool]:
    """
    Ask whether the next number is higher or lower.

    Returns:
        (guess, keep_playing); quitting or a prompt failure gives ("", False)
    """
    options = ["Higher", "Lower", "Quit"]
    prompt = f"Current number is {current_number}. Will the next number be Higher or Lower?"
    try:
        index = prompter.select(prompt, "Higher", options)
    except PromptError as e:
        logger.warning(f"Error reading input: {e}")
        return "", False

    if not 0 <= index < len(options):
        return "", False

    answer = options[index].strip().lower()
    if answer == "quit":
        return "", False
    return answer, True


class HigherLower:
    """State of a Higher or Lower game"""

    def __init__(self, min_number: int = 1, max_number: int = 100,
                 rng: Optional[random.Random] = None):
        if min_number >= max_number:
            raise InvalidRangeError(f"minimum ({min_number}) must be below maximum ({max_number})")
        self.min_number = min_number
        self.max_number = max_number
        self.rng = rng or random.Random()
        self.current_number = self.generate_number()
        self.next_number = 0
        self.player_guess = ""
        self.is_correct = False
        self.is_over = False

    def generate_number(self) -> int:
        return self.rng.randint(self.min_number, self.max_number)

    def generate_next_number(self) -> None:
        self.next_number = self.generate_number()

    def play(self, guess: str) -> None:
        """Draw the next number and score the guess"""
        self.player_guess = validate_guess(guess)
        self.generate_next_number()

        if self.next_number == self.current_number:
            self.is_correct = False
        elif self.player_guess == "higher":
            self.is_correct = self.next_number > self.current_number
        else:
            self.is_correct = self.next_number < self.current_number

        self.is_over = not self.is_correct

    def is_same_number(self) -> bool:
        return self.next_number == self.current_number

    def get_result(self) -> str:
        numbers = f"Current number: {self.current_number}, Next number: {self.next_number}"
        if self.is_same_number():
            return f"{numbers}\nThe numbers are the same! Game over!"

        outcome = "Correct" if self.is_correct else "Incorrect"
        return f"{numbers}\nYou guessed the next number would be {self.player_guess}: {outcome}!"

    def update_for_next_round(self) -> None:
        self.current_number = self.next_number


class HigherLowerGame(BaseGame):
    """Higher or Lower game implementation"""

    summary = "Play Higher or Lower"
    description = (
        "Play a Higher or Lower number guessing game.\n\n"
        "A number will be shown and you need to guess whether the next number "
        "will be higher or lower than the current number.\n\n"
        "The game continues until you make an incorrect guess. "
        "How long of a streak can you get?"
    )

    RULES = [
        "Rules:",
        "1. You'll be shown a random number",
        "2. Guess if the next number will be HIGHER or LOWER",
        "3. If you guess correctly, you continue and build your streak",
        "4. If you guess incorrectly, the game ends",
        "5. If the numbers are the same, the game ends",
    ]

    def __init__(self, config=None, rng=None):
        super().__init__("higherlower", config, rng)

    def add_arguments(self, parser: argparse.ArgumentParser) -> None:
        parser.add_argument("-m", "--min", dest="min_number", type=int,
                            default=self.config.get('min', 1),
                            help="Minimum possible number")
        parser.add_argument("-M", "--max", dest="max_number", type=int,
                            default=self.config.get('max', 100),
                            help="Maximum possible number")

    def get_rules(self) -> str:
        return "\n".join(self.RULES)

    def play(self, session: GameSession, prompter: Prompter, renderer: Renderer,
             args: argparse.Namespace) -> None:
        min_number = getattr(args, 'min_number', None)
        if min_number is None:
            min_number = self.config.get('min', 1)
        max_number = getattr(args, 'max_number', None)
        if max_number is None:
            max_number = self.config.get('max', 100)
        game = HigherLower(min_number, max_number, rng=self.rng)

        renderer.line(
            renderer.styled("Welcome to Higher or Lower!", "title"),
            " Numbers range from ", renderer.styled(str(min_number), "number"),
            " to ", renderer.styled(str(max_number), "number")
        )
        renderer.blank()
        for rule in self.RULES:
            renderer.line(rule)
        renderer.blank()
        renderer.line("Starting number: ", renderer.styled(str(game.current_number), "number"))

        streak = 0
        guess, keep_playing = get_player_guess(prompter, game.current_number)
        while keep_playing:
            game.play(guess)
            renderer.text(game.get_result(), "correct" if game.is_correct else "incorrect")

            if not game.is_correct:
                renderer.line(
                    renderer.styled("Game Over!", "incorrect"), " ",
                    renderer.styled(f"Final streak: {streak}", "streak")
                )
                break

            streak += 1
            renderer.text(f"Streak: {streak}", "streak")
            game.update_for_next_round()
            guess, keep_playing = get_player_guess(prompter, game.current_number)

        session.result['streak'] = streak
