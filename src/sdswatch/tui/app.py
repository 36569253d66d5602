"""
SDS Watch TUI Application

Main application class for the terminal stream chart.
"""

from __future__ import annotations

from textual.app import App
from textual.binding import Binding
from textual.theme import Theme

from sdswatch.access import DataAccess
from sdswatch.config import Settings, get_settings

SDSWATCH_THEME = Theme(
    name="sdswatch",
    primary="#1F3A4D",
    secondary="#6C7A89",
    accent="#E07A2F",
    foreground="#1F2A33",
    background="#F4F6F8",
    surface="#FFFFFF",
    panel="#E3E8ED",
    success="#3E8E5E",
    error="#C0392B",
    warning="#D68910",
)


class SdsWatchApp(App[None]):
    """SDS Watch Terminal UI Application.

    Hosts the home screen, which owns the selection pipeline.
    """

    TITLE = "SDS Watch"
    CSS_PATH = "styles/app.tcss"

    BINDINGS = [
        Binding("q", "quit", "Quit", show=True, priority=True),
        Binding("question_mark", "help", "Help", show=True),
    ]

    def __init__(self, settings: Settings | None = None, access: DataAccess | None = None) -> None:
        """Initialize the TUI application.

        Args:
            settings: Connection settings. Defaults to settings from the environment.
            access: Data store client. Defaults to an HTTP client built from settings.
        """
        super().__init__()
        self._settings = settings or get_settings()
        self._access = access

        self.register_theme(SDSWATCH_THEME)
        self.theme = "sdswatch"

    @property
    def settings(self) -> Settings:
        return self._settings

    @property
    def access(self) -> DataAccess:
        """Get or create the data store client."""
        if self._access is None:
            from sdswatch.client import SdsClient

            self._access = SdsClient(self._settings)
        return self._access

    def on_mount(self) -> None:
        """Handle mount event - push the home screen."""
        from sdswatch.tui.screens import HomeScreen

        self.push_screen(HomeScreen())

    async def action_quit(self) -> None:
        """Quit the application."""
        self.exit()

    def action_help(self) -> None:
        """Show help screen."""
        from sdswatch.tui.screens import HelpScreen

        self.push_screen(HelpScreen())

    def on_unmount(self) -> None:
        """Release the data store client."""
        if self._access is not None:
            self._access.close()
