"""
Tests for the color memory game
"""

import argparse
import random
from unittest.mock import Mock

import pytest

from minigames.core.prompter import PromptError
from minigames.games.base_game import GameState
from minigames.games.memorygame import (
    Color, MemoryGame, ColorMemoryGame, AVAILABLE_COLORS, LIFE_OPTIONS
)
from tests.mocks.prompter_mocks import ScriptedPrompter


def color_rng(*colors):
    """Random source whose choice() returns the given colors in order"""
    rng = Mock(spec=random.Random)
    rng.choice.side_effect = list(colors)
    return rng


class TestMemoryGame:
    """Test memory game state"""

    def test_new_game(self):
        game = MemoryGame(3)

        assert game.lives == 3
        assert game.current_round == 1
        assert game.max_round == 100
        assert game.available_colors == [Color.RED, Color.YELLOW, Color.GREEN, Color.BLUE]
        assert not game.is_game_over()

    def test_sequence_length_grows_with_round(self):
        game = MemoryGame(3, rng=random.Random(8))

        assert len(game.generate_sequence()) == 3
        game.next_round()
        assert len(game.generate_sequence()) == 4
        for _ in range(5):
            game.next_round()
        assert len(game.generate_sequence()) == 9
        assert all(color in AVAILABLE_COLORS for color in game.sequence)

    def test_check_sequence(self):
        game = MemoryGame(3, rng=color_rng(Color.RED, Color.BLUE, Color.RED))
        game.generate_sequence()

        assert game.check_sequence([Color.RED, Color.BLUE, Color.RED])
        assert not game.check_sequence([Color.RED, Color.BLUE, Color.GREEN])
        assert not game.check_sequence([Color.RED, Color.BLUE])
        assert not game.check_sequence([Color.RED, Color.BLUE, Color.RED, Color.RED])

    def test_losing_all_lives_ends_game(self):
        game = MemoryGame(2)
        game.decrement_lives()
        assert not game.is_game_over()
        game.decrement_lives()
        assert game.lives == 0
        assert game.is_game_over()

    def test_passing_max_round_ends_game(self):
        game = MemoryGame(1, max_round=2)
        game.next_round()
        assert not game.is_game_over()
        game.next_round()
        assert game.current_round == 3
        assert game.is_game_over()

    def test_color_labels(self):
        assert [c.label for c in AVAILABLE_COLORS] == ["Red", "Yellow", "Green", "Blue"]


class TestColorMemoryGame:
    """Test the round loop"""

    @pytest.fixture
    def config(self):
        return {'max_round': 1, 'display_seconds': 3.0,
                'retry_pause_seconds': 2.0, 'round_pause_seconds': 1.0}

    def test_retry_after_wrong_pick(self, config, renderer, output, sleeps):
        game = ColorMemoryGame(config=config, rng=color_rng(Color.RED, Color.GREEN, Color.BLUE))
        prompter = ScriptedPrompter(["Red", "Yellow", "Red", "Green", "Blue"])

        session = game.run(prompter, renderer, argparse.Namespace(lives=2))

        text = output()
        assert "Round 1 - Lives: 2" in text
        assert "Round 1 - Lives: 1" in text
        assert "Red Green Blue" in text
        assert "Memorize it! It will disappear in 3 seconds..." in text
        assert "Wrong color! Try again from the start of this round..." in text
        assert "Correct! Next round..." in text
        assert "Thanks for playing!" in text
        assert sleeps == [3.0, 2.0, 3.0, 1.0]
        assert session.state == GameState.COMPLETED
        assert session.result == {'lives': 2, 'round_reached': 2}

    def test_wrong_pick_stops_asking(self, config, renderer):
        game = ColorMemoryGame(config=config, rng=color_rng(Color.RED, Color.GREEN, Color.BLUE))
        prompter = ScriptedPrompter(["Blue"])

        game.run(prompter, renderer, argparse.Namespace(lives=1))

        assert prompter.prompts_of("select") == ["Color 1:"]

    def test_game_over(self, config, renderer, output):
        game = ColorMemoryGame(config=config, rng=color_rng(Color.RED, Color.GREEN, Color.BLUE))
        session = game.run(ScriptedPrompter(["Red", "Green", "Red"]), renderer,
                           argparse.Namespace(lives=1))

        assert "Game Over! You reached round 1." in output()
        assert "Thanks for playing!" not in output()
        assert session.result['round_reached'] == 1

    def test_lives_prompt(self, config, renderer, output):
        game = ColorMemoryGame(config=config, rng=color_rng(Color.BLUE, Color.BLUE, Color.BLUE))
        prompter = ScriptedPrompter(["3 lives", "Red", "Red", "Red"])

        session = game.run(prompter, renderer, argparse.Namespace(lives=None))

        assert prompter.prompts[0] == ("select", "Choose number of lives:", LIFE_OPTIONS)
        assert "Round 1 - Lives: 2" in output()
        assert session.result['lives'] == 3

    def test_prompt_failure_abandons(self, config, renderer):
        game = ColorMemoryGame(config=config, rng=color_rng(Color.RED, Color.GREEN, Color.BLUE))
        session = game.new_session()

        with pytest.raises(PromptError):
            game.run(ScriptedPrompter(["Red"]), renderer, argparse.Namespace(lives=2),
                     session=session)
        assert session.state == GameState.ABANDONED

    def test_lives_flag(self):
        parser = argparse.ArgumentParser()
        ColorMemoryGame().add_arguments(parser)

        assert parser.parse_args(["--lives", "1"]).lives == 1
        assert parser.parse_args([]).lives is None
        with pytest.raises(SystemExit):
            parser.parse_args(["--lives", "5"])
