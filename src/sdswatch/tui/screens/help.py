"""
Help Screen

Displays keybinding help and usage information.
"""

from __future__ import annotations

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Container, VerticalScroll
from textual.screen import ModalScreen
from textual.widgets import Static

HELP_TEXT = """\
[bold]SDS Watch - Keyboard Shortcuts[/bold]

[bold underline]Global[/bold underline]
  [cyan]q[/]           Quit application
  [cyan]?[/]           Show this help
  [cyan]Esc[/]         Close modal

[bold underline]Streams[/bold underline]
  [cyan]/[/]           Focus stream search
  [cyan]Enter[/]       Pick highlighted stream
  [cyan]a[/]           Add selected stream to the chart
  [cyan]d[/]           Remove highlighted stream from the chart
  [cyan]r[/]           Refresh all streams now

[bold underline]Controls[/bold underline]
  Namespace     Choose the namespace to browse
  Search        Prefix of the stream id (debounced)
  Events        Number of recent events per stream
  Refresh (ms)  Refresh period, applied when typing stops

Press [cyan]Esc[/] or [cyan]?[/] to close this help.
"""


class HelpScreen(ModalScreen[None]):
    """Modal screen displaying help information."""

    BINDINGS = [
        Binding("escape", "dismiss", "Close", show=True),
        Binding("question_mark", "dismiss", "Close", show=False),
    ]

    DEFAULT_CSS = """
    HelpScreen {
        align: center middle;
    }

    HelpScreen > Container {
        width: 60;
        height: auto;
        max-height: 80%;
        background: $surface;
        border: solid $primary;
        padding: 1 2;
    }

    HelpScreen Static {
        width: 100%;
    }
    """

    def compose(self) -> ComposeResult:
        """Compose the help screen."""
        yield Container(
            VerticalScroll(
                Static(HELP_TEXT),
            ),
        )

    async def action_dismiss(self, result: None = None) -> None:
        """Dismiss the help screen."""
        self.dismiss(result)
