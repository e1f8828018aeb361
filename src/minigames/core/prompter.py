"""
Prompt abstraction for interactive games.

Games never read stdin directly; they ask a Prompter, which keeps the game
loops testable with scripted answers.
"""

from abc import ABC, abstractmethod
from typing import List, Optional, TextIO

from rich.console import Console
from rich.markup import escape


class PromptError(Exception):
    """Raised when input cannot be obtained (closed stream, cancellation)"""
    pass


class Prompter(ABC):
    """Single-capability interface for obtaining user input"""

    @abstractmethod
    def select(self, prompt: str, default: str, options: List[str]) -> int:
        """
        Ask the user to pick one of the options

        Args:
            prompt: Question shown to the user
            default: Option label chosen on empty input
            options: Ordered option labels

        Returns:
            Zero-based index of the chosen option
        """
        pass

    @abstractmethod
    def input(self, prompt: str, default: str = "") -> str:
        """Ask for a free-form line of text"""
        pass

    @abstractmethod
    def confirm(self, prompt: str, default: bool = True) -> bool:
        """Ask a yes/no question"""
        pass


class ConsolePrompter(Prompter):
    """
    Prompter backed by a rich console.

    Options are shown as a numbered menu; the user may answer with the
    number or the option label. Invalid answers are reported and asked
    again.
    """

    YES = ('y', 'yes')
    NO = ('n', 'no')

    def __init__(self, console: Optional[Console] = None, stream: Optional[TextIO] = None):
        self.console = console or Console()
        self.stream = stream

    def _read(self, prompt: str) -> str:
        try:
            line = self.console.input(prompt, stream=self.stream)
        except (EOFError, KeyboardInterrupt) as e:
            raise PromptError("input cancelled") from e

        # A stream returns "" only at end of file
        if self.stream is not None and line == "":
            raise PromptError("input stream closed")
        return line.strip()

    def select(self, prompt: str, default: str, options: List[str]) -> int:
        if not options:
            raise PromptError("no options to select from")

        # Numeric labels (board positions, round counts) are answered by label only
        numbered = not any(option.isdigit() for option in options)

        self.console.print(f"[bold]?[/] {escape(prompt)}")
        if numbered:
            for number, option in enumerate(options, start=1):
                self.console.print(f"  {number}. {escape(option)}")
        else:
            self.console.print(f"  {escape(', '.join(options))}")

        lowered = [option.lower() for option in options]
        while True:
            answer = self._read(f"Choice \\[{escape(default)}]: ")
            if not answer:
                answer = default

            if answer.lower() in lowered:
                return lowered.index(answer.lower())
            if numbered and answer.isdigit() and 1 <= int(answer) <= len(options):
                return int(answer) - 1

            if numbered:
                self.console.print(f"[red]Please choose 1-{len(options)} or an option name.[/]")
            else:
                self.console.print("[red]Please choose one of the listed options.[/]")

    def input(self, prompt: str, default: str = "") -> str:
        suffix = f" \\[{escape(default)}]" if default else ""
        answer = self._read(f"[bold]?[/] {escape(prompt)}{suffix} ")
        return answer or default

    def confirm(self, prompt: str, default: bool = True) -> bool:
        hint = "Y/n" if default else "y/N"
        while True:
            answer = self._read(f"[bold]?[/] {escape(prompt)} ({hint}) ").lower()
            if not answer:
                return default
            if answer in self.YES:
                return True
            if answer in self.NO:
                return False
            self.console.print("[red]Please answer yes or no.[/]")
