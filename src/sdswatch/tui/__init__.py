"""
SDS Watch Terminal UI

A terminal dashboard using the Textual framework for charting live
stream data.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from sdswatch.config import Settings


def run_tui(settings: Settings | None = None) -> None:
    """Run the SDS Watch TUI application.

    Log output is routed to Textual's log while the app owns the terminal.

    Args:
        settings: Connection settings. Defaults to settings from the environment.
    """
    from textual.logging import TextualHandler

    from sdswatch.logger import logger
    from sdswatch.tui.app import SdsWatchApp

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.addHandler(TextualHandler())

    app = SdsWatchApp(settings=settings)
    app.run()


__all__ = ["run_tui"]
