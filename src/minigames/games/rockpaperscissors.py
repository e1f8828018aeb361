"""
Rock Paper Scissors Game Implementation

A best-of-N series against the computer. The --spock flag switches to the
rock/paper/scissors/lizard/spock variant.
"""

import argparse
import random
from typing import Dict, List, Optional, Tuple

from .base_game import BaseGame, GameSession, InvalidGuessError
from ..core.prompter import Prompter
from ..core.render import Renderer


EXIT = "exit"
DEFAULT_BEST_OF = 3

CLASSIC_CHOICES = ["rock", "paper", "scissors"]
SPOCK_CHOICES = ["rock", "paper", "scissors", "lizard", "spock"]

# winner -> {loser: verb}
BEATS: Dict[str, Dict[str, str]] = {
    "rock": {"scissors": "crushes", "lizard": "crushes"},
    "paper": {"rock": "covers", "spock": "disproves"},
    "scissors": {"paper": "cuts", "lizard": "decapitates"},
    "lizard": {"spock": "poisons", "paper": "eats"},
    "spock": {"scissors": "smashes", "rock": "vaporizes"},
}

ROUND_OPTIONS = ["3", "5", "7", "9"]


def parse_best_of(text: str) -> int:
    """Parse a series length; unparsable or non-positive gives 3, even is bumped to odd"""
    try:
        value = int(str(text).strip())
    except ValueError:
        return DEFAULT_BEST_OF
    if value <= 0:
        return DEFAULT_BEST_OF
    if value % 2 == 0:
        value += 1
    return value


def beats(choice: str, other: str) -> bool:
    return other in BEATS.get(choice, {})


class RockPaperScissors:
    """State of a best-of series"""

    def __init__(self, best_of: int = DEFAULT_BEST_OF, spock: bool = False,
                 rng: Optional[random.Random] = None):
        if best_of % 2 == 0:
            best_of += 1
        self.best_of = best_of
        self.spock = spock
        self.rng = rng or random.Random()
        self.choices = list(SPOCK_CHOICES if spock else CLASSIC_CHOICES)

        self.player_choice = ""
        self.computer_choice = ""
        self.winner = ""
        self.player_score = 0
        self.computer_score = 0
        self.games_played = 0
        self.game_over = False
        self.game_over_message = ""

    @property
    def options(self) -> List[str]:
        """Menu options, including exit"""
        return self.choices + [EXIT]

    @property
    def wins_needed(self) -> int:
        return self.best_of // 2 + 1

    def play(self, player_choice: str) -> None:
        """Play one round, or end the series on 'exit'"""
        player_choice = player_choice.strip().lower()
        if player_choice == EXIT:
            self.game_over = True
            self.game_over_message = "Game ended by player"
            return

        if player_choice not in self.choices:
            raise InvalidGuessError(f"choice must be one of: {', '.join(self.choices)}")

        self.player_choice = player_choice
        self.computer_choice = self.get_computer_choice()
        self.winner = self.get_winner()
        self._update_score()
        self.games_played += 1
        self.game_over = self._is_game_over()
        if self.game_over:
            self.game_over_message = self.get_game_over_message()

    def get_computer_choice(self) -> str:
        return self.rng.choice(self.choices)

    def get_winner(self) -> str:
        """Winner of the last round: player, computer or draw"""
        if self.player_choice == self.computer_choice:
            return "draw"
        if beats(self.player_choice, self.computer_choice):
            return "player"
        return "computer"

    def _update_score(self) -> None:
        if self.winner == "player":
            self.player_score += 1
        elif self.winner == "computer":
            self.computer_score += 1

    def _is_game_over(self) -> bool:
        return (self.player_score >= self.wins_needed
                or self.computer_score >= self.wins_needed
                or self.games_played >= self.best_of)

    def get_game_over_message(self) -> str:
        score = f"({self.player_score} - {self.computer_score})"
        if self.player_score > self.computer_score:
            return f"GAME OVER: Player WINS {score}"
        if self.computer_score > self.player_score:
            return f"GAME OVER: Player LOSES {score}"
        return f"GAME OVER: DRAW {score}"

    def get_round_result_message(self) -> str:
        player = self.player_choice.title()
        computer = self.computer_choice.title()

        if self.winner == "draw":
            return f"Draw! Player ({player}) - CPU ({computer})"
        if self.winner == "player":
            return f"Player ({player}) beats CPU ({computer})"
        return f"Player ({player}) loses to CPU ({computer})"

    def get_round_verb(self) -> Tuple[str, str, str]:
        """(winner choice, verb, loser choice) for the last decided round"""
        if self.winner == "player":
            return self.player_choice, BEATS[self.player_choice][self.computer_choice], self.computer_choice
        if self.winner == "computer":
            return self.computer_choice, BEATS[self.computer_choice][self.player_choice], self.player_choice
        return "", "", ""


class RockPaperScissorsGame(BaseGame):
    """Rock Paper Scissors game implementation"""

    summary = "A simple Rock Paper Scissors game"
    description = (
        "A simple Rock Paper Scissors game that allows you to play against the computer.\n"
        "You can choose from rock, paper, or scissors. The computer will randomly choose "
        "its move and the winner will be determined based on the rules of the game."
    )

    def __init__(self, config=None, rng=None):
        super().__init__("rockpaperscissors", config, rng)

    def add_arguments(self, parser: argparse.ArgumentParser) -> None:
        parser.add_argument(
            "--best-of",
            dest="best_of",
            type=parse_best_of,
            default=self.config.get('best_of'),
            help="Length of the series (prompted when omitted)"
        )
        parser.add_argument(
            "--spock",
            action="store_true",
            default=False,
            help="Enable secret game mode"
        )

    def get_rules(self) -> str:
        rules = [self.description, "", "With --spock:"]
        for winner, losers in BEATS.items():
            for loser, verb in losers.items():
                rules.append(f"  {winner.title()} {verb} {loser.title()}")
        return "\n".join(rules)

    def play(self, session: GameSession, prompter: Prompter, renderer: Renderer,
             args: argparse.Namespace) -> None:
        spock = bool(getattr(args, 'spock', False))
        best_of = getattr(args, 'best_of', None) or self.config.get('best_of')
        if best_of:
            best_of = parse_best_of(best_of)
        else:
            index = prompter.select("How many rounds would you like to play (best of)?",
                                    ROUND_OPTIONS[0], ROUND_OPTIONS)
            best_of = DEFAULT_BEST_OF
            if 0 <= index < len(ROUND_OPTIONS):
                best_of = parse_best_of(ROUND_OPTIONS[index])

        game = RockPaperScissors(best_of, spock=spock, rng=self.rng)
        renderer.line("Playing best of ", renderer.styled(str(game.best_of), "number"), " games")

        options = game.options
        while not game.game_over:
            renderer.blank()
            renderer.line(
                "Current score - Player: ", renderer.styled(str(game.player_score), "number"),
                ", Computer: ", renderer.styled(str(game.computer_score), "number")
            )

            index = prompter.select("Choose your move", options[0], options)
            if not 0 <= index < len(options):
                continue
            choice = options[index]

            game.play(choice)
            if choice == EXIT:
                break

            self.events.debug("round_played", player=game.player_choice,
                              computer=game.computer_choice, winner=game.winner)
            if spock and game.winner != "draw":
                winner, verb, loser = game.get_round_verb()
                renderer.line(f"{winner.title()} {verb} {loser.title()}")
            role = {"player": "correct", "computer": "incorrect"}.get(game.winner)
            renderer.text(game.get_round_result_message(), role)

        renderer.text(game.game_over_message, "title")
        session.result.update({
            'best_of': game.best_of,
            'player_score': game.player_score,
            'computer_score': game.computer_score,
            'games_played': game.games_played,
        })
