"""
Terminal rendering for MiniGames.

Styling lives in a Theme built from configuration and handed to the
Renderer, so games never hold global style state.
"""

import time
from typing import Callable, Dict, Optional, Union

from rich.console import Console
from rich.text import Text


Piece = Union[str, Text]


class Theme:
    """Maps display roles (x, o, title, correct, ...) to rich style strings"""

    def __init__(self, styles: Optional[Dict[str, str]] = None, enabled: bool = True):
        self.styles = dict(styles or {})
        self.enabled = enabled

    @classmethod
    def from_config(cls, config_manager) -> "Theme":
        """Build a theme from the 'theme' config section"""
        return cls(
            styles=config_manager.get_section('theme'),
            enabled=config_manager.is_color_enabled()
        )

    def style_for(self, role: Optional[str]) -> str:
        if not self.enabled or role is None:
            return ""
        return self.styles.get(role, "")

    def apply(self, text: str, role: Optional[str]) -> Text:
        """Wrap text in the style of a role"""
        return Text(text, style=self.style_for(role))


class Renderer:
    """Writes game output to a rich console"""

    def __init__(
        self,
        console: Optional[Console] = None,
        theme: Optional[Theme] = None,
        sleep: Callable[[float], None] = time.sleep
    ):
        self.console = console or Console(highlight=False)
        self.theme = theme or Theme(enabled=False)
        self._sleep = sleep

    def styled(self, text: str, role: Optional[str]) -> Text:
        return self.theme.apply(text, role)

    def line(self, *pieces: Piece) -> None:
        """Print one line assembled from plain strings and styled Text"""
        out = Text()
        for piece in pieces:
            out.append(piece if isinstance(piece, Text) else Text(piece))
        self.console.print(out)

    def text(self, message: str, role: Optional[str] = None) -> None:
        """Print a single message in one style"""
        self.console.print(self.styled(message, role))

    def blank(self) -> None:
        self.console.print()

    def clear(self) -> None:
        """Clear the terminal (no-op when output is not a terminal)"""
        self.console.clear()

    def pause(self, seconds: float) -> None:
        if seconds > 0:
            self._sleep(seconds)
