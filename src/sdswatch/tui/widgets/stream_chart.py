"""
Stream Chart Widget

Draws the chart model with textual-plotext.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from textual_plotext import PlotextPlot

from sdswatch.models import AxisMode, ChartModel, ChartSeries

# plotext date format used for time axes, and the matching strftime format
PLOTEXT_DATE_FORM = "Y-m-d H:M:S"
_STRFTIME_FORM = "%Y-%m-%d %H:%M:%S"


def series_xy(series: ChartSeries, axis_mode: AxisMode) -> tuple[list[Any], list[float]]:
    """Get the plottable points of a series.

    Points without a value, and points whose index does not fit the axis
    (non-date on a time axis, non-numeric on a linear axis), are dropped.

    Args:
        series: Series to plot
        axis_mode: Axis mode of the chart

    Returns:
        Tuple of (x values, y values). Time axes get formatted date strings.
    """
    xs: list[Any] = []
    ys: list[float] = []
    for x, y in series.points:
        if y is None:
            continue
        if axis_mode is AxisMode.TIME:
            if not isinstance(x, datetime):
                continue
            xs.append(x.strftime(_STRFTIME_FORM))
        else:
            try:
                xs.append(float(x))
            except (TypeError, ValueError):
                continue
        ys.append(y)
    return xs, ys


class StreamChart(PlotextPlot):
    """Chart of all series added to the home screen."""

    def update_chart(self, chart: ChartModel | None) -> None:
        """Redraw from a chart model.

        Args:
            chart: Chart to draw. None draws an empty placeholder.
        """
        plt = self.plt
        plt.clear_figure()

        if chart is None or not chart.series:
            plt.title("No streams added")
            self.refresh()
            return

        if chart.is_time:
            plt.date_form(PLOTEXT_DATE_FORM)
            plt.xlabel("time")
        else:
            plt.xlabel("index")

        for series in chart.series:
            xs, ys = series_xy(series, chart.axis_mode)
            if xs:
                plt.plot(xs, ys, color=series.rgb, label=series.label)
        self.refresh()
