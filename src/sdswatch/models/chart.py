"""
Chart data models.

The chart holds one series per (stream config, value field) pair. Rendering
is left to the UI layer; these models only describe what to draw.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class AxisMode(Enum):
    """Index axis mode of a chart."""

    TIME = "time"
    LINEAR = "linear"


@dataclass
class ChartSeries:
    """A labelled sequence of points drawn in a single color."""

    label: str
    color: str
    points: list[tuple[Any, float | None]] = field(default_factory=list)

    @property
    def rgb(self) -> tuple[int, int, int]:
        """Series color as an (r, g, b) tuple."""
        value = self.color.lstrip("#")
        return (int(value[0:2], 16), int(value[2:4], 16), int(value[4:6], 16))


@dataclass
class ChartModel:
    """Series list and axis mode of the shared chart."""

    axis_mode: AxisMode
    series: list[ChartSeries] = field(default_factory=list)

    @property
    def is_time(self) -> bool:
        return self.axis_mode is AxisMode.TIME

    def get_series(self, label: str) -> ChartSeries | None:
        """Find a series by label."""
        for series in self.series:
            if series.label == label:
                return series
        return None
