"""Tests for TUI screens."""

from __future__ import annotations

import pytest
from textual.widgets import Button, DataTable, Input, OptionList, Select

from sdswatch.exceptions import TransportError
from sdswatch.tui.app import SdsWatchApp
from sdswatch.tui.screens import HelpScreen, HomeScreen


@pytest.fixture
def app(settings, fake_access):
    """Create app over the in-memory store."""
    return SdsWatchApp(settings=settings, access=fake_access)


async def pick_stream(app: SdsWatchApp, pilot) -> HomeScreen:
    """Select the namespace and type the stream id."""
    screen = app.screen
    assert isinstance(screen, HomeScreen)
    screen.query_one("#namespace-select", Select).value = "Id"
    await pilot.pause(0.1)
    screen.query_one("#stream-input", Input).value = "StreamId"
    await pilot.pause(0.1)
    return screen


class TestHomeScreen:
    """Tests for HomeScreen."""

    @pytest.mark.asyncio
    async def test_home_screen_displays(self, app: SdsWatchApp) -> None:
        """Test that home screen displays its controls."""
        async with app.run_test() as pilot:
            await pilot.pause()
            assert isinstance(app.screen, HomeScreen)
            for selector in ("#namespace-select", "#stream-input", "#stream-list", "#chart", "#configs-table"):
                assert app.screen.query_one(selector) is not None
            assert app.screen.query_one("#add-button", Button).disabled

    @pytest.mark.asyncio
    async def test_controls_start_with_settings(self, app: SdsWatchApp, settings) -> None:
        """Test that event count and refresh inputs show the settings."""
        async with app.run_test() as pilot:
            await pilot.pause()
            assert app.screen.query_one("#events-input", Input).value == str(settings.event_count)
            assert app.screen.query_one("#refresh-input", Input).value == str(settings.refresh_ms)

    @pytest.mark.asyncio
    async def test_loads_namespaces(self, app: SdsWatchApp, fake_access) -> None:
        """Test that namespaces are loaded on mount."""
        async with app.run_test() as pilot:
            await pilot.pause(0.1)
            assert isinstance(app.screen, HomeScreen)
            assert list(app.screen.pipeline.namespaces) == ["Id"]
            assert len(fake_access.calls_to("list_namespaces")) == 1

    @pytest.mark.asyncio
    async def test_namespace_selection_lists_streams(self, app: SdsWatchApp) -> None:
        """Test that selecting a namespace fills the stream list."""
        async with app.run_test() as pilot:
            await pilot.pause(0.1)
            app.screen.query_one("#namespace-select", Select).value = "Id"
            await pilot.pause(0.1)
            assert app.screen.query_one("#stream-list", OptionList).option_count == 1

    @pytest.mark.asyncio
    async def test_exact_stream_enables_add(self, app: SdsWatchApp) -> None:
        """Test that typing a listed stream id enables the add button."""
        async with app.run_test() as pilot:
            await pilot.pause(0.1)
            screen = await pick_stream(app, pilot)
            assert not screen.query_one("#add-button", Button).disabled

    @pytest.mark.asyncio
    async def test_add_stream(self, app: SdsWatchApp) -> None:
        """Test that adding a stream charts it and lists it in the table."""
        async with app.run_test() as pilot:
            await pilot.pause(0.1)
            screen = await pick_stream(app, pilot)

            screen.action_add_stream()
            await pilot.pause(0.1)

            assert len(screen.pipeline.registry) == 1
            assert screen.query_one("#stream-input", Input).value == ""
            assert screen.query_one("#add-button", Button).disabled
            table = screen.query_one("#configs-table", DataTable)
            assert table.row_count == 1
            assert screen.pipeline.chart_sync.chart.series[0].label == "Id:StreamId:Value"

    @pytest.mark.asyncio
    async def test_add_without_selection_is_rejected(self, app: SdsWatchApp) -> None:
        """Test that add does nothing without a resolved selection."""
        async with app.run_test() as pilot:
            await pilot.pause(0.1)
            assert isinstance(app.screen, HomeScreen)
            app.screen.action_add_stream()
            await pilot.pause()
            assert len(app.screen.pipeline.registry) == 0

    @pytest.mark.asyncio
    async def test_add_with_mismatched_axis_explains_why(self, app: SdsWatchApp) -> None:
        """Test that a time stream on a numeric chart is rejected with an axis message."""
        async with app.run_test() as pilot:
            await pilot.pause(0.1)
            screen = await pick_stream(app, pilot)
            screen.pipeline.chart_sync.create_chart(time_axis=False)

            screen.action_add_stream()
            await pilot.pause()

            messages = [n.message for n in app._notifications]
            assert "Stream index kind does not match the chart's numeric axis" in messages
            assert len(screen.pipeline.registry) == 0

    @pytest.mark.asyncio
    async def test_remove_stream(self, app: SdsWatchApp) -> None:
        """Test that the highlighted stream is removed."""
        async with app.run_test() as pilot:
            await pilot.pause(0.1)
            screen = await pick_stream(app, pilot)
            screen.action_add_stream()
            await pilot.pause(0.1)

            screen.action_remove_stream()
            await pilot.pause()

            assert len(screen.pipeline.registry) == 0
            assert screen.query_one("#configs-table", DataTable).row_count == 0

    @pytest.mark.asyncio
    async def test_errors_are_notified(self, settings, fake_access) -> None:
        """Test that failed queries surface as notifications."""
        fake_access.errors["list_namespaces"] = TransportError("Error getting namespaces")
        app = SdsWatchApp(settings=settings, access=fake_access)
        async with app.run_test() as pilot:
            await pilot.pause(0.1)
            messages = [n.message for n in app._notifications]
            assert "Error getting namespaces" in messages

    @pytest.mark.asyncio
    async def test_focus_search_with_slash(self, app: SdsWatchApp) -> None:
        """Test that slash key focuses stream search."""
        async with app.run_test() as pilot:
            await pilot.pause()
            await pilot.press("slash")
            await pilot.pause()
            assert app.focused is app.screen.query_one("#stream-input", Input)

    @pytest.mark.asyncio
    async def test_help_screen_opens(self, app: SdsWatchApp) -> None:
        """Test that help screen opens with action_help."""
        async with app.run_test() as pilot:
            await pilot.pause()
            app.action_help()
            await pilot.pause()
            assert isinstance(app.screen, HelpScreen)

    @pytest.mark.asyncio
    async def test_quit_action(self, app: SdsWatchApp) -> None:
        """Test that q quits the app."""
        async with app.run_test() as pilot:
            await pilot.pause()
            await pilot.press("q")
