"""
Mock prompters for driving game loops with scripted answers.
"""
from typing import Any, List, Optional, Tuple

from minigames.core.prompter import Prompter, PromptError


class ScriptedPrompter(Prompter):
    """
    Prompter that replays a fixed list of answers.

    select() answers may be an option index or an option label; input()
    answers are strings; confirm() answers are booleans. Running out of
    answers raises PromptError, which ends the game the same way a closed
    terminal would.
    """

    def __init__(self, answers: Optional[List[Any]] = None):
        self.answers = list(answers or [])
        self.prompts: List[Tuple[str, str, Any]] = []

    def _next(self, kind: str, prompt: str, extra: Any = None) -> Any:
        self.prompts.append((kind, prompt, extra))
        if not self.answers:
            raise PromptError("no scripted answers left")
        return self.answers.pop(0)

    def select(self, prompt: str, default: str, options: List[str]) -> int:
        answer = self._next("select", prompt, list(options))
        if isinstance(answer, str):
            return options.index(answer)
        return answer

    def input(self, prompt: str, default: str = "") -> str:
        return self._next("input", prompt, default)

    def confirm(self, prompt: str, default: bool = True) -> bool:
        return self._next("confirm", prompt, default)

    def prompts_of(self, kind: str) -> List[str]:
        """Prompt texts asked with the given method"""
        return [prompt for k, prompt, _ in self.prompts if k == kind]


class FailingPrompter(Prompter):
    """Prompter whose every call fails as if input were closed"""

    def __init__(self, message: str = "input stream closed"):
        self.message = message
        self.calls = 0

    def select(self, prompt: str, default: str, options: List[str]) -> int:
        self.calls += 1
        raise PromptError(self.message)

    def input(self, prompt: str, default: str = "") -> str:
        self.calls += 1
        raise PromptError(self.message)

    def confirm(self, prompt: str, default: bool = True) -> bool:
        self.calls += 1
        raise PromptError(self.message)
