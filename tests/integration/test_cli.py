"""
Integration tests driving the minigames command line entry point.
"""
import io
import random

import pytest
import yaml

from minigames import __version__
from minigames.core.prompter import ConsolePrompter
from minigames.main import main, EXIT_OK, EXIT_ABANDONED, EXIT_USAGE_ERROR, EXIT_INTERRUPTED
from tests.mocks.prompter_mocks import ScriptedPrompter, FailingPrompter


class InterruptingPrompter(ScriptedPrompter):
    """Prompter that behaves like Ctrl+C outside of a prompt"""

    def select(self, prompt, default, options):
        raise KeyboardInterrupt


@pytest.mark.integration
class TestCommandLine:
    """Test the minigames command"""

    @pytest.fixture
    def config_dir(self, temp_dir):
        path = temp_dir / "config"
        path.mkdir()
        return path

    def run(self, config_dir, renderer, *argv, prompter=None, rng=None):
        return main(["--config-dir", str(config_dir), *argv],
                    prompter=prompter or ScriptedPrompter(), renderer=renderer,
                    rng=rng or random.Random(0))

    def test_list(self, config_dir, renderer, output):
        assert self.run(config_dir, renderer, "list") == EXIT_OK

        text = output()
        assert "Available games:" in text
        for game_type in ("cointoss", "higherlower", "memorygame",
                          "rockpaperscissors", "tictactoe", "wordguess"):
            assert game_type in text

    def test_rules(self, config_dir, renderer, output):
        assert self.run(config_dir, renderer, "rules", "wordguess") == EXIT_OK
        assert "You lose if you make 6 incorrect guesses" in output()

    def test_no_command_prints_help(self, config_dir, renderer, capsys):
        assert self.run(config_dir, renderer) == EXIT_OK
        assert "usage: minigames" in capsys.readouterr().out

    def test_version(self, config_dir, renderer, capsys):
        with pytest.raises(SystemExit) as exc_info:
            self.run(config_dir, renderer, "--version")
        assert exc_info.value.code == 0
        assert __version__ in capsys.readouterr().out

    def test_tictactoe_local_game(self, config_dir, renderer, output):
        prompter = ScriptedPrompter(["1", "4", "2", "5", "3"])

        assert self.run(config_dir, renderer, "tictactoe", "--mode", "local",
                        prompter=prompter) == EXIT_OK
        assert "Player X wins!" in output()

    def test_rockpaperscissors_flags(self, config_dir, renderer, output):
        prompter = ScriptedPrompter(["exit"])

        assert self.run(config_dir, renderer, "rockpaperscissors", "--best-of", "6", "--spock",
                        prompter=prompter) == EXIT_OK
        assert "Playing best of 7 games" in output()
        assert "spock" in prompter.prompts[0][2]

    def test_invalid_game_argument(self, config_dir, renderer, capsys):
        with pytest.raises(SystemExit) as exc_info:
            self.run(config_dir, renderer, "cointoss", "edge")
        assert exc_info.value.code == 2
        assert "heads' or 'tails" in capsys.readouterr().err

    def test_invalid_range(self, config_dir, renderer, capsys):
        code = self.run(config_dir, renderer, "higherlower", "-m", "9", "-M", "3")

        assert code == EXIT_USAGE_ERROR
        assert "must be below maximum" in capsys.readouterr().err

    def test_configuration_error(self, config_dir, renderer, capsys):
        (config_dir / "config.yaml").write_text(
            yaml.safe_dump({'games': {'tictactoe': {'mode': 'online'}}}), encoding="utf-8"
        )

        assert self.run(config_dir, renderer, "list") == EXIT_USAGE_ERROR
        assert "Configuration error" in capsys.readouterr().err

    def test_config_file_sets_game_defaults(self, config_dir, renderer, output):
        (config_dir / "config.yaml").write_text(
            yaml.safe_dump({'games': {'higherlower': {'min': 3, 'max': 4}}}), encoding="utf-8"
        )

        assert self.run(config_dir, renderer, "higherlower",
                        prompter=ScriptedPrompter(["Quit"])) == EXIT_OK
        assert "Numbers range from 3 to 4" in output()

    def test_prompt_failure(self, config_dir, renderer, capsys):
        code = self.run(config_dir, renderer, "memorygame", prompter=FailingPrompter())

        assert code == EXIT_ABANDONED
        assert "Error reading input" in capsys.readouterr().err

    def test_keyboard_interrupt(self, config_dir, renderer):
        code = self.run(config_dir, renderer, "tictactoe", prompter=InterruptingPrompter())
        assert code == EXIT_INTERRUPTED

    def test_log_level_flag_and_log_file(self, config_dir, renderer, temp_dir, monkeypatch):
        log_file = temp_dir / "logs" / "minigames.log"
        monkeypatch.setenv("MINIGAMES_LOG_FILE", str(log_file))

        code = self.run(config_dir, renderer, "--log-level", "debug", "cointoss", "heads",
                        prompter=ScriptedPrompter(["Quit"]), rng=random.Random(1))

        assert code == EXIT_OK
        content = log_file.read_text(encoding="utf-8")
        assert "game_started" in content
        assert "game_finished" in content

    def test_global_flags_after_subcommand(self, config_dir, renderer, temp_dir, monkeypatch, output):
        log_file = temp_dir / "logs" / "minigames.log"
        monkeypatch.setenv("MINIGAMES_LOG_FILE", str(log_file))
        prompter = ScriptedPrompter(["1", "4", "2", "5", "3"])

        code = main(["tictactoe", "--mode", "local", "--no-color", "--log-level", "debug",
                     "--config-dir", str(config_dir)],
                    prompter=prompter, renderer=renderer, rng=random.Random(0))

        assert code == EXIT_OK
        assert "Player X wins!" in output()
        assert "Registered game: tictactoe" in log_file.read_text(encoding="utf-8")

    def test_global_flags_before_subcommand_survive(self, config_dir, renderer, temp_dir, monkeypatch):
        log_file = temp_dir / "logs" / "minigames.log"
        monkeypatch.setenv("MINIGAMES_LOG_FILE", str(log_file))

        assert self.run(config_dir, renderer, "--no-color", "--log-level", "debug", "list") == EXIT_OK
        assert "Registered game: tictactoe" in log_file.read_text(encoding="utf-8")

    def test_global_flags_listed_in_game_help(self, config_dir, renderer, capsys):
        with pytest.raises(SystemExit) as exc_info:
            self.run(config_dir, renderer, "cointoss", "--help")
        assert exc_info.value.code == 0
        assert "--no-color" in capsys.readouterr().out

    def test_console_prompter_end_to_end(self, config_dir, renderer, output):
        prompter = ConsolePrompter(renderer.console, stream=io.StringIO("g\ni\ns\nt\nn\n"))

        code = self.run(config_dir, renderer, "wordguess", "--word", "gist", prompter=prompter)

        assert code == EXIT_OK
        assert "Congratulations! You guessed the word!" in output()
        assert "Thanks for playing Word Guess!" in output()
