"""
Tic-Tac-Toe Game Implementation

A classic 3x3 grid game where players try to get three in a row.
Supports local two-player games and games against a simple computer
opponent (win, block, center, random corner, first free cell).
"""

import argparse
import random
from enum import Enum
from typing import Iterator, List, Optional, Tuple

from rich.text import Text

from .base_game import BaseGame, GameError, GameSession
from ..core.prompter import Prompter
from ..core.render import Renderer, Theme


class Mark(Enum):
    """A player's symbol on the board"""
    X = "X"
    O = "O"


class GameMode(Enum):
    """Who plays the O seat"""
    LOCAL = "local"
    COMPUTER = "computer"


class InvalidPositionError(GameError):
    """Row, column or position label outside the board"""
    pass


class PositionTakenError(GameError):
    """Target cell is already occupied"""
    pass


class NoAvailableMovesError(GameError):
    """Move requested on a full board"""
    pass


class InvalidSelectionError(GameError):
    """Prompt returned an index outside the offered options"""
    pass


BOARD_SIZE = 3
INVALID_CELL = (-1, -1)
CENTER = (1, 1)
CORNERS = [(0, 0), (0, 2), (2, 0), (2, 2)]

# Scan order matters: rows, columns, main diagonal, anti-diagonal
WINNING_LINES = [
    [(0, 0), (0, 1), (0, 2)],
    [(1, 0), (1, 1), (1, 2)],
    [(2, 0), (2, 1), (2, 2)],
    [(0, 0), (1, 0), (2, 0)],
    [(0, 1), (1, 1), (2, 1)],
    [(0, 2), (1, 2), (2, 2)],
    [(0, 0), (1, 1), (2, 2)],
    [(0, 2), (1, 1), (2, 0)],
]


def switch_player(current: Optional[Mark]) -> Mark:
    """X is followed by O; anything else is followed by X"""
    if current == Mark.X:
        return Mark.O
    return Mark.X


def position_to_row_col(position: int) -> Tuple[int, int]:
    """
    Convert a one-based position label to zero-based row and column.

        1 2 3
        4 5 6
        7 8 9

    Returns (-1, -1) for positions outside 1-9.
    """
    if position < 1 or position > 9:
        return INVALID_CELL
    position -= 1
    return position // BOARD_SIZE, position % BOARD_SIZE


def row_col_to_position(row: int, col: int) -> int:
    """Inverse of position_to_row_col"""
    return row * BOARD_SIZE + col + 1


class TicTacToe:
    """
    Tic-tac-toe board and rules.

    Cells hold None (empty) or a Mark. X always moves first. In computer
    mode the computer plays O and the human plays X.
    """

    def __init__(self, mode: GameMode = GameMode.LOCAL, rng: Optional[random.Random] = None):
        self.board: List[List[Optional[Mark]]] = [
            [None for _ in range(BOARD_SIZE)] for _ in range(BOARD_SIZE)
        ]
        self.current_player: Mark = Mark.X
        self.mode = mode
        self.computer_mark: Optional[Mark] = Mark.O if mode == GameMode.COMPUTER else None
        self.rng = rng or random.Random()

    def make_move(self, row: int, col: int) -> None:
        """
        Place the current player's mark and pass the turn.

        Raises:
            InvalidPositionError: row or col outside 0-2
            PositionTakenError: the cell is occupied
        """
        if not (0 <= row < BOARD_SIZE and 0 <= col < BOARD_SIZE):
            raise InvalidPositionError("invalid position: must be between 0 and 2")
        if self.board[row][col] is not None:
            raise PositionTakenError("position already taken")

        self.board[row][col] = self.current_player
        self.current_player = switch_player(self.current_player)

    def get_winner(self) -> Optional[Mark]:
        """Return the mark holding a complete line, or None"""
        for line in WINNING_LINES:
            first = self.board[line[0][0]][line[0][1]]
            if first is None:
                continue
            if all(self.board[r][c] == first for r, c in line[1:]):
                return first
        return None

    def is_board_full(self) -> bool:
        return all(cell is not None for row in self.board for cell in row)

    def get_available_positions(self) -> List[str]:
        """One-based labels of the empty cells, ascending"""
        available = []
        for position in range(1, BOARD_SIZE * BOARD_SIZE + 1):
            row, col = position_to_row_col(position)
            if self.board[row][col] is None:
                available.append(str(position))
        return available

    def is_computer_turn(self) -> bool:
        return self.mode == GameMode.COMPUTER and self.current_player == self.computer_mark

    def get_computer_move(self) -> Tuple[int, int]:
        """
        Choose the computer's move:

        1. Win if possible
        2. Block the human's winning move
        3. Take the center
        4. Take a random free corner
        5. Take the first free cell

        Returns (-1, -1) when the board is full.
        """
        move = self._find_winning_move(self.computer_mark or Mark.O)
        if move is not None:
            return move

        # Human always plays X
        move = self._find_winning_move(Mark.X)
        if move is not None:
            return move

        if self.board[CENTER[0]][CENTER[1]] is None:
            return CENTER

        corners = list(CORNERS)
        self.rng.shuffle(corners)
        for row, col in corners:
            if self.board[row][col] is None:
                return row, col

        for row, col in self._empty_cells():
            return row, col

        return INVALID_CELL

    def _find_winning_move(self, mark: Mark) -> Optional[Tuple[int, int]]:
        """First empty cell (row-major) where placing mark wins"""
        for row, col in self._empty_cells():
            self.board[row][col] = mark
            try:
                if self.get_winner() == mark:
                    return row, col
            finally:
                self.board[row][col] = None
        return None

    def _empty_cells(self) -> Iterator[Tuple[int, int]]:
        for row in range(BOARD_SIZE):
            for col in range(BOARD_SIZE):
                if self.board[row][col] is None:
                    yield row, col

    def _board_pieces(self) -> Iterator[Tuple[str, Optional[Mark]]]:
        """Board layout as (text, mark) chunks; mark is None for plain text"""
        yield "\n", None
        for row in range(BOARD_SIZE):
            yield " ", None
            for col in range(BOARD_SIZE):
                mark = self.board[row][col]
                if mark is None:
                    yield str(row_col_to_position(row, col)), None
                else:
                    yield mark.value, mark
                if col < BOARD_SIZE - 1:
                    yield " | ", None
            yield "\n", None
            if row < BOARD_SIZE - 1:
                yield "---+---+---\n", None

    def to_text(self, theme: Theme) -> Text:
        """Board with marks colored by the theme's x/o styles"""
        text = Text()
        for chunk, mark in self._board_pieces():
            style = theme.style_for(mark.value.lower()) if mark else ""
            text.append(chunk, style=style)
        return text

    def __str__(self) -> str:
        return "".join(chunk for chunk, _ in self._board_pieces())


def get_player_move(prompter: Prompter, game: TicTacToe) -> Tuple[int, int]:
    """
    Ask the player to choose one of the free positions.

    Raises:
        NoAvailableMovesError: the board is full
        InvalidSelectionError: the prompter returned an out-of-range index
        InvalidPositionError: the chosen label is not a position 1-9
        PromptError: input could not be read
    """
    available = game.get_available_positions()
    if not available:
        raise NoAvailableMovesError("no available moves")

    index = prompter.select("Select position (1-9):", "1", available)
    if index < 0 or index >= len(available):
        raise InvalidSelectionError(f"invalid position selection: {index}")

    try:
        position = int(available[index])
    except ValueError as e:
        raise InvalidPositionError(f"invalid position value: {available[index]}") from e

    row, col = position_to_row_col(position)
    if (row, col) == INVALID_CELL:
        raise InvalidPositionError(f"invalid position value: {position}")
    return row, col


class TicTacToeGame(BaseGame):
    """Tic-Tac-Toe game implementation"""

    summary = "Play Tic-tac-toe"
    description = (
        "Start a game of Tic-tac-toe where you can play against another player "
        "locally or against the computer.\n"
        "Choose between two game modes:\n"
        "- Local Multiplayer: Play against another player on the same computer\n"
        "- Play Against Computer: Play against an AI opponent that uses basic strategy"
    )

    MODE_OPTIONS = ["Local Multiplayer", "Play Against Computer"]

    def __init__(self, config=None, rng=None):
        super().__init__("tictactoe", config, rng)

    def add_arguments(self, parser: argparse.ArgumentParser) -> None:
        parser.add_argument(
            "--mode",
            choices=[mode.value for mode in GameMode],
            default=self.config.get('mode'),
            help="Game mode (prompted when omitted)"
        )

    def play(self, session: GameSession, prompter: Prompter, renderer: Renderer,
             args: argparse.Namespace) -> None:
        mode_value = getattr(args, 'mode', None) or self.config.get('mode')
        if mode_value:
            mode = GameMode(mode_value)
        else:
            index = prompter.select("Select game mode:", self.MODE_OPTIONS[0], self.MODE_OPTIONS)
            mode = GameMode.COMPUTER if index == 1 else GameMode.LOCAL

        game = TicTacToe(mode, rng=self.rng)
        session.result['mode'] = mode.value

        while True:
            renderer.line(game.to_text(renderer.theme))
            current = game.current_player
            renderer.line("Player ", self._mark(renderer, current), "'s turn")

            if game.is_computer_turn():
                row, col = game.get_computer_move()
                self.events.debug("computer_move", row=row, col=col)
                renderer.line(
                    "Computer places ", self._mark(renderer, current),
                    f" at position {row_col_to_position(row, col)}"
                )
            else:
                try:
                    row, col = get_player_move(prompter, game)
                except GameError as e:
                    renderer.text(f"Invalid move: {e}", "incorrect")
                    continue

            try:
                game.make_move(row, col)
            except GameError as e:
                renderer.text(f"Invalid move: {e}", "incorrect")
                continue
            self.events.debug("move_applied", mark=current.value, row=row, col=col)

            winner = game.get_winner()
            if winner is not None:
                renderer.line(game.to_text(renderer.theme))
                if game.mode == GameMode.COMPUTER and winner == game.computer_mark:
                    renderer.line("Computer (", self._mark(renderer, winner), ") wins!")
                else:
                    renderer.line("Player ", self._mark(renderer, winner), " wins!")
                session.result['winner'] = winner.value
                return

            if game.is_board_full():
                renderer.line(game.to_text(renderer.theme))
                renderer.line("It's a draw!")
                session.result['winner'] = None
                return

    def _mark(self, renderer: Renderer, mark: Mark) -> Text:
        return renderer.styled(mark.value, mark.value.lower())
