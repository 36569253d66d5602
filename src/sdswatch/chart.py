"""
ChartDatasetSync - keeps the chart series in step with refreshed windows.

Every refresh delivers the full recent window of a stream, so series points
are replaced, never appended.
"""

from __future__ import annotations

import logging
import random
from collections.abc import Callable

from sdswatch.models import AxisMode, ChartModel, ChartSeries, SampleBatch

logger = logging.getLogger(__name__)


def random_color(rng: random.Random | None = None) -> str:
    """Get a random hex color.

    Args:
        rng: Random generator to draw from. Defaults to the module generator.

    Returns:
        Color as '#rrggbb'
    """
    value = (rng or random).randrange(0x1000000)
    return f"#{value:06x}"


class ChartDatasetSync:
    """Owns the chart model and applies sample batches to it."""

    def __init__(
        self,
        on_render: Callable[[ChartModel], None] | None = None,
        rng: random.Random | None = None,
    ) -> None:
        """Initialize without a chart.

        Args:
            on_render: Called with the chart after its series change
            rng: Random generator for series colors
        """
        self._on_render = on_render
        self._rng = rng
        self.chart: ChartModel | None = None

    def create_chart(self, time_axis: bool) -> ChartModel:
        """Create the chart with a fixed axis mode.

        The axis mode is kept for the lifetime of the chart. Calling this when
        a chart already exists returns the existing chart unchanged.

        Args:
            time_axis: Use a time axis instead of a linear one
        """
        if self.chart is None:
            mode = AxisMode.TIME if time_axis else AxisMode.LINEAR
            self.chart = ChartModel(axis_mode=mode)
            logger.debug("Created chart with %s axis", mode.value)
        return self.chart

    def ensure_series(self, label: str) -> ChartSeries:
        """Get a series by label, creating it with a new color if missing.

        Raises:
            RuntimeError: If no chart has been created
        """
        chart = self._require_chart()
        series = chart.get_series(label)
        if series is None:
            series = ChartSeries(label=label, color=random_color(self._rng))
            chart.series.append(series)
        return series

    def remove_series(self, label: str) -> bool:
        """Remove a series by label.

        Returns:
            True if a series was removed
        """
        if self.chart is None:
            return False
        series = self.chart.get_series(label)
        if series is None:
            return False
        self.chart.series.remove(series)
        return True

    def apply(self, batch: SampleBatch) -> None:
        """Replace the points of each series of a stream with a new window.

        Args:
            batch: Refreshed window of one stream config
        """
        if self.chart is None:
            self.create_chart(batch.config.is_time_indexed)

        config = batch.config
        for field_name in config.value_field_names:
            series = self.ensure_series(config.series_label(field_name))
            series.points = [(sample.index_value, sample.fields.get(field_name)) for sample in batch.samples]
        self.render()

    def render(self) -> None:
        """Ask the UI to redraw the chart."""
        if self.chart is not None and self._on_render is not None:
            self._on_render(self.chart)

    def _require_chart(self) -> ChartModel:
        if self.chart is None:
            raise RuntimeError("Chart has not been created")
        return self.chart
