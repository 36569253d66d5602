"""
SDS Watch TUI Screens

Screen classes for different views in the TUI application.
"""

from .help import HelpScreen
from .home import HomeScreen

__all__ = [
    "HelpScreen",
    "HomeScreen",
]
