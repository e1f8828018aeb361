"""
Word Guess Game Implementation

Guess a GitHub-related term one letter at a time before running out of
incorrect guesses.
"""

import argparse
import random
import string
from typing import List, Optional, Sequence

from rich.text import Text

from .base_game import BaseGame, GameSession, InvalidGuessError
from ..core.config import DEFAULT_WORDS
from ..core.prompter import Prompter
from ..core.render import Renderer, Theme


MAX_INCORRECT_GUESSES = 6
HIDDEN = "_"

WORD_LIST = list(DEFAULT_WORDS)


class AlreadyGuessedError(InvalidGuessError):
    """Raised when a letter is guessed a second time"""
    pass


class WordGuess:
    """State of a word guess game"""

    def __init__(self, word: Optional[str] = None, words: Sequence[str] = WORD_LIST,
                 max_incorrect_guesses: int = MAX_INCORRECT_GUESSES,
                 rng: Optional[random.Random] = None):
        rng = rng or random.Random()
        self.word = (word or rng.choice(list(words))).lower()
        self.revealed = [HIDDEN] * len(self.word)
        self.guessed_letters: List[str] = []
        self.incorrect_guesses = 0
        self.max_incorrect_guesses = max_incorrect_guesses
        self.is_over = False
        self.has_won = False

    @property
    def revealed_word(self) -> str:
        return "".join(self.revealed)

    def guess_letter(self, letter: str) -> bool:
        """
        Apply a guess.

        Returns:
            True if the letter is in the word

        Raises:
            InvalidGuessError: not a single letter
            AlreadyGuessedError: the letter was guessed before
        """
        letter = letter.lower()
        if len(letter) != 1 or letter not in string.ascii_lowercase:
            raise InvalidGuessError("please enter a single letter")
        if letter in self.guessed_letters:
            raise AlreadyGuessedError(f"you've already guessed '{letter}'")

        self.guessed_letters.append(letter)

        if letter in self.word:
            for i, char in enumerate(self.word):
                if char == letter:
                    self.revealed[i] = char
            if HIDDEN not in self.revealed:
                self.is_over = True
                self.has_won = True
            return True

        self.incorrect_guesses += 1
        if self.incorrect_guesses >= self.max_incorrect_guesses:
            self.is_over = True
        return False

    def get_remaining_letters(self) -> str:
        return "".join(c for c in string.ascii_lowercase if c not in self.guessed_letters)

    def guesses_remaining(self) -> int:
        return self.max_incorrect_guesses - self.incorrect_guesses

    def to_text(self, theme: Theme) -> Text:
        """Full game display: title, guesses left, word, guessed and available letters, status"""
        text = Text()
        text.append("W O R D  G U E S S", style=theme.style_for("title"))
        text.append("\n\n")

        left = self.guesses_remaining()
        if left > 3:
            role = "correct"
        elif left > 1:
            role = "instruction"
        else:
            role = "incorrect"
        text.append(f"Guesses Remaining: {left}/{self.max_incorrect_guesses}",
                    style=theme.style_for(role))
        text.append("\n\n")

        text.append("".join(f"{char} " for char in self.revealed), style=theme.style_for("word"))
        text.append("\n\n")

        text.append("Guessed: ")
        for letter in self.guessed_letters:
            role = "correct" if letter in self.word else "incorrect"
            text.append(f"{letter} ", style=theme.style_for(role))
        text.append("\n\n")

        text.append("Available: ")
        text.append(" ".join(self.get_remaining_letters()), style=theme.style_for("remaining"))
        text.append("\n\n")

        if self.is_over:
            if self.has_won:
                text.append("Congratulations! You guessed the word!", style=theme.style_for("correct"))
            else:
                text.append("Game over! The word was: ", style=theme.style_for("incorrect"))
                text.append(self.word, style=theme.style_for("word"))
        else:
            text.append("Guess a letter to continue.", style=theme.style_for("instruction"))
        return text

    def __str__(self) -> str:
        return self.to_text(Theme(enabled=False)).plain


class WordGuessGame(BaseGame):
    """Word guess game implementation"""

    summary = "Play Word Guess"
    description = (
        "Start a game of Word Guess where you guess a GitHub-related term one letter at a time."
    )

    RULES = [
        "The rules are simple:",
        "1. A random word will be selected",
        "2. Guess one letter at a time",
        "3. If the letter is in the word, it will be revealed",
        "4. If not, you lose one of your available guesses",
        "5. You win by guessing the word before running out of guesses",
        "6. You lose if you make {max_incorrect} incorrect guesses",
    ]

    def __init__(self, config=None, rng=None):
        super().__init__("wordguess", config, rng)
        self.words = list(self.config.get('words') or WORD_LIST)
        self.max_incorrect_guesses = int(
            self.config.get('max_incorrect_guesses', MAX_INCORRECT_GUESSES)
        )

    def add_arguments(self, parser: argparse.ArgumentParser) -> None:
        parser.add_argument(
            "--word",
            help=argparse.SUPPRESS
        )

    def get_rules(self) -> str:
        rules = [rule.format(max_incorrect=self.max_incorrect_guesses) for rule in self.RULES]
        return "\n".join([self.description, ""] + rules)

    def new_game(self, word: Optional[str] = None) -> WordGuess:
        return WordGuess(word=word, words=self.words,
                         max_incorrect_guesses=self.max_incorrect_guesses, rng=self.rng)

    def play(self, session: GameSession, prompter: Prompter, renderer: Renderer,
             args: argparse.Namespace) -> None:
        word = getattr(args, 'word', None)
        games_played = 0
        games_won = 0

        while True:
            game = self.new_game(word)
            word = None
            games_played += 1

            renderer.blank()
            renderer.text("Welcome to Word Guess!", "title")
            renderer.text("Guess the GitHub-related term one letter at a time.", "instruction")
            renderer.blank()

            while not game.is_over:
                renderer.line(game.to_text(renderer.theme))
                guess = prompter.input("Enter a letter: ")
                try:
                    game.guess_letter(guess)
                except InvalidGuessError as e:
                    renderer.text(str(e), "incorrect")

            renderer.line(game.to_text(renderer.theme))
            if game.has_won:
                games_won += 1
            self.events.debug("word_finished", won=game.has_won,
                              incorrect_guesses=game.incorrect_guesses)

            if not prompter.confirm("Play again?", True):
                break

        renderer.text("Thanks for playing Word Guess!", "title")
        session.result.update({'games_played': games_played, 'games_won': games_won})
