"""
SDS Watch TUI Widgets

Custom widget classes for the TUI application.
"""

from .stream_chart import StreamChart, series_xy

__all__ = ["StreamChart", "series_xy"]
