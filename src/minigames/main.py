"""
MiniGames Main Application Entry Point

Parses the command line, loads configuration, initializes logging and
dispatches to the selected game.
"""

import argparse
import random
import sys
from typing import List, Optional

from rich.console import Console

from . import __version__
from .core.config import ConfigurationManager, ConfigurationError
from .core.logging import initialize_logging, get_logger
from .core.prompter import ConsolePrompter, Prompter, PromptError
from .core.render import Renderer, Theme
from .games import GameError, GameManager, create_default_manager


EXIT_OK = 0
EXIT_ABANDONED = 1
EXIT_USAGE_ERROR = 2
EXIT_INTERRUPTED = 130

DEFAULT_CONFIG_DIR = "config"


def build_global_parser(argument_default=None) -> argparse.ArgumentParser:
    """
    Flags shared by every subcommand

    Subcommands add these with argument_default=argparse.SUPPRESS so a flag
    given before the subcommand is not reset by the subcommand's defaults.
    """
    parser = argparse.ArgumentParser(add_help=False, argument_default=argument_default)
    parser.add_argument("--config-dir",
                        help=f"Directory holding default.yaml and config.yaml (default: {DEFAULT_CONFIG_DIR})")
    parser.add_argument("--log-level", type=str.upper,
                        choices=ConfigurationManager.VALID_LOG_LEVELS,
                        help="Override the configured log level")
    parser.add_argument("--no-color", action="store_true",
                        help="Disable colored output")
    return parser


def build_parser(manager: GameManager) -> argparse.ArgumentParser:
    """Full parser with one subcommand per registered game"""
    parser = argparse.ArgumentParser(
        prog="minigames",
        description="A collection of mini-games to play in the terminal.",
        parents=[build_global_parser()]
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    shared = [build_global_parser(argument_default=argparse.SUPPRESS)]
    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")
    subparsers.add_parser("list", help="List the available games", parents=shared)

    rules_parser = subparsers.add_parser("rules", help="Show the rules of a game", parents=shared)
    rules_parser.add_argument("game", choices=sorted(manager.get_available_games()))

    for game_type in sorted(manager.get_available_games()):
        game = manager.get_game(game_type)
        game_parser = subparsers.add_parser(
            game_type,
            help=game.summary,
            description=game.description,
            formatter_class=argparse.RawDescriptionHelpFormatter,
            parents=shared
        )
        game.add_arguments(game_parser)

    return parser


def load_configuration(options: argparse.Namespace) -> ConfigurationManager:
    """Load configuration and apply command-line overrides"""
    config_manager = ConfigurationManager(options.config_dir or DEFAULT_CONFIG_DIR)
    config_manager.load_config()

    if options.log_level:
        config_manager.set('logging.level', options.log_level)
    if options.no_color:
        config_manager.set('app.no_color', True)
    config_manager.validate()
    return config_manager


def main(argv: Optional[List[str]] = None,
         prompter: Optional[Prompter] = None,
         renderer: Optional[Renderer] = None,
         rng: Optional[random.Random] = None) -> int:
    """Run the command line interface and return the process exit code"""
    argv = list(sys.argv[1:] if argv is None else argv)
    error_console = Console(stderr=True, highlight=False)

    global_options, _ = build_global_parser().parse_known_args(argv)
    try:
        config_manager = load_configuration(global_options)
    except ConfigurationError as e:
        error_console.print(f"Configuration error: {e}", markup=False)
        return EXIT_USAGE_ERROR

    initialize_logging(config_manager.config)
    logger = get_logger('main')
    logger.debug(f"MiniGames {__version__} starting")

    manager = create_default_manager(config_manager, rng=rng)
    parser = build_parser(manager)
    args = parser.parse_args(argv)

    if renderer is None:
        console = Console(highlight=False, no_color=not config_manager.is_color_enabled())
        renderer = Renderer(console, Theme.from_config(config_manager))
    prompter = prompter or ConsolePrompter(renderer.console)

    if args.command is None:
        parser.print_help()
        return EXIT_OK

    if args.command == "list":
        renderer.line(manager.get_game_list())
        return EXIT_OK

    if args.command == "rules":
        renderer.line(manager.get_game(args.game).get_rules())
        return EXIT_OK

    try:
        session = manager.start_game(args.command, prompter, renderer, args)
    except PromptError as e:
        error_console.print(f"Error reading input: {e}", markup=False)
        return EXIT_ABANDONED
    except GameError as e:
        error_console.print(f"Error: {e}", markup=False)
        return EXIT_USAGE_ERROR
    except KeyboardInterrupt:
        error_console.print("\nGame interrupted")
        return EXIT_INTERRUPTED

    logger.info(f"Finished {session.game_type} in {session.duration_seconds():.1f}s")
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
