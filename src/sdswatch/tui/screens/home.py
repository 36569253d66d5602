"""
Home Screen

Namespace and stream selection, the live chart and the list of charted
streams. All state lives in the SelectionPipeline; the screen forwards
control changes to it and redraws from its callbacks.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from textual import on
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Container, Horizontal
from textual.screen import Screen
from textual.widgets import Button, DataTable, Footer, Header, Input, OptionList, Select
from textual.widgets.option_list import Option

from sdswatch.models import ChartModel, StreamRef
from sdswatch.pipeline import SelectionPipeline
from sdswatch.tui.widgets import StreamChart

if TYPE_CHECKING:
    from sdswatch.tui.app import SdsWatchApp

logger = logging.getLogger(__name__)


class HomeScreen(Screen[None]):
    """Screen for picking streams and watching them on a shared chart."""

    BINDINGS = [
        Binding("slash", "focus_search", "Search", show=True),
        Binding("a", "add_stream", "Add", show=True),
        Binding("d", "remove_stream", "Remove", show=True),
        Binding("r", "refresh", "Refresh", show=True),
    ]

    def __init__(self) -> None:
        super().__init__()
        self._pipeline: SelectionPipeline | None = None

    @property
    def tui_app(self) -> SdsWatchApp:
        """Get the typed app instance."""
        from sdswatch.tui.app import SdsWatchApp

        assert isinstance(self.app, SdsWatchApp)
        return self.app

    @property
    def pipeline(self) -> SelectionPipeline:
        """Get the selection pipeline (created on mount)."""
        assert self._pipeline is not None
        return self._pipeline

    def compose(self) -> ComposeResult:
        """Compose the screen layout."""
        settings = self.tui_app.settings
        yield Header()
        yield Container(
            Horizontal(
                Select[str]([], prompt="Namespace", id="namespace-select"),
                Input(placeholder="Search streams...", id="stream-input"),
                Input(value=str(settings.event_count), placeholder="Events", id="events-input"),
                Input(value=str(settings.refresh_ms), placeholder="Refresh (ms)", id="refresh-input"),
                Button("Add", id="add-button", variant="primary", disabled=True),
                classes="controls",
            ),
            OptionList(id="stream-list"),
            StreamChart(id="chart"),
            DataTable(id="configs-table", cursor_type="row"),
            classes="main-container",
        )
        yield Footer()

    def on_mount(self) -> None:
        """Handle mount event - create the pipeline and load namespaces."""
        table = self.query_one("#configs-table", DataTable)
        table.add_columns("Namespace", "Stream", "Key", "Fields", "Events", "Last Update")

        self._pipeline = SelectionPipeline(
            self.tui_app.access,
            self.tui_app.settings,
            on_error=self._show_error,
            on_render=self._draw_chart,
            on_streams_changed=self._show_streams,
            on_configs_changed=self._update_table,
            on_clear_search=self._clear_search,
        )
        self.query_one("#chart", StreamChart).update_chart(None)
        self.run_worker(self._start_pipeline(), exclusive=True)

    async def _start_pipeline(self) -> None:
        await self.pipeline.start()
        select = self.query_one("#namespace-select", Select)
        select.set_options([(ns.id, ns.id) for ns in self.pipeline.namespaces.values()])

    async def on_unmount(self) -> None:
        """Handle unmount - stop refreshing."""
        if self._pipeline is not None:
            await self._pipeline.close()

    @on(Select.Changed, "#namespace-select")
    def on_namespace_changed(self, event: Select.Changed) -> None:
        """Handle namespace selection."""
        if isinstance(event.value, str):
            self.pipeline.on_namespace_changed(event.value)
        self._update_add_button()

    @on(Input.Changed, "#stream-input")
    def on_search_changed(self, event: Input.Changed) -> None:
        """Handle stream search typing."""
        self.pipeline.on_search_changed(event.value)
        self._update_add_button()

    @on(Input.Submitted, "#stream-input")
    def on_search_submitted(self, event: Input.Submitted) -> None:
        """Add the stream when Enter is pressed on an exact match."""
        if self.pipeline.can_add:
            self.action_add_stream()

    @on(Input.Changed, "#events-input")
    def on_event_count_changed(self, event: Input.Changed) -> None:
        """Handle event count typing."""
        self.pipeline.on_event_count_changed(event.value)

    @on(Input.Changed, "#refresh-input")
    def on_refresh_changed(self, event: Input.Changed) -> None:
        """Handle refresh period typing."""
        self.pipeline.on_refresh_changed(event.value)

    @on(OptionList.OptionSelected, "#stream-list")
    def on_stream_picked(self, event: OptionList.OptionSelected) -> None:
        """Put the picked stream id in the search control."""
        if event.option.id is not None:
            self.query_one("#stream-input", Input).value = event.option.id

    @on(Button.Pressed, "#add-button")
    def on_add_pressed(self, event: Button.Pressed) -> None:
        """Handle the add button."""
        self.action_add_stream()

    def action_add_stream(self) -> None:
        """Add the selected stream to the chart."""
        chart = self.pipeline.chart_sync.chart
        if chart is not None and self.pipeline.axis_mismatch:
            axis = "time" if chart.is_time else "numeric"
            self.notify(f"Stream index kind does not match the chart's {axis} axis", severity="warning")
            return
        if not self.pipeline.can_add:
            self.notify("Select a namespace and a chartable stream first", severity="warning")
            return
        config = self.pipeline.add_stream()
        self.notify(f"Added {config.namespace.id}/{config.stream_id}")
        self._update_add_button()

    def action_remove_stream(self) -> None:
        """Remove the highlighted stream from the chart."""
        table = self.query_one("#configs-table", DataTable)
        configs = self.pipeline.registry.all()
        row = table.cursor_row
        if 0 <= row < len(configs):
            self.pipeline.remove_stream(configs[row])

    def action_refresh(self) -> None:
        """Refresh all streams now."""
        self.pipeline.update_data()

    def action_focus_search(self) -> None:
        """Focus the stream search input."""
        self.query_one("#stream-input", Input).focus()

    def _update_add_button(self) -> None:
        self.query_one("#add-button", Button).disabled = not self.pipeline.can_add

    def _show_error(self, message: str) -> None:
        self.notify(message, severity="error")

    def _draw_chart(self, chart: ChartModel) -> None:
        self.query_one("#chart", StreamChart).update_chart(chart)

    def _show_streams(self, streams: list[StreamRef]) -> None:
        option_list = self.query_one("#stream-list", OptionList)
        option_list.clear_options()
        option_list.add_options([Option(stream.id, id=stream.id) for stream in streams])
        self._update_add_button()

    def _clear_search(self) -> None:
        self.query_one("#stream-input", Input).value = ""

    def _update_table(self) -> None:
        table = self.query_one("#configs-table", DataTable)
        table.clear()
        for i, config in enumerate(self.pipeline.registry.all()):
            last_update = config.last_update_timestamp.strftime("%H:%M:%S") if config.last_update_timestamp else "-"
            table.add_row(
                config.namespace.id,
                config.stream_id,
                config.index_key_name,
                ", ".join(config.value_field_names),
                str(config.last_sample_count),
                last_update,
                key=str(i),
            )
