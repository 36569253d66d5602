"""
SelectionPipeline - wires user input to queries, the registry and the refresh loop.

Four input channels feed the pipeline:

- namespace selection, acted on immediately
- stream search text, debounced
- event count text, debounced
- refresh period text, debounced

Each channel ignores values equal to its current value, so initializing a
control with its default never triggers work.
"""

from __future__ import annotations

import asyncio
import logging
import random
from collections.abc import Callable, Coroutine
from typing import Any, NamedTuple

from sdswatch.access import DataAccess
from sdswatch.chart import ChartDatasetSync
from sdswatch.config import Settings, get_settings
from sdswatch.exceptions import ResolutionError, TransportError
from sdswatch.matching import find_index_key, is_chartable_type, is_time_code, value_field_names
from sdswatch.models import ChartModel, NamespaceRef, StreamConfig, StreamRef, TypeSchema
from sdswatch.registry import StreamConfigRegistry
from sdswatch.scheduler import Debouncer, PollingScheduler
from sdswatch.sync import DataSyncEngine
from sdswatch.utils.validators import parse_positive_int

logger = logging.getLogger(__name__)


class _Selection(NamedTuple):
    """A fully resolved selection."""

    namespace: NamespaceRef
    stream: StreamRef
    type_schema: TypeSchema
    index_key_name: str
    index_type_code: int


class SelectionPipeline:
    """Selection state and orchestration behind the home screen.

    Attributes:
        namespaces: Known namespaces keyed by id, in listing order.
        types: Chartable types of the current namespace.
        streams: Streams of the current namespace whose type is chartable.
        registry: Streams added to the chart.
        chart_sync: Owner of the chart model.
        engine: Refreshes the registered streams.
        scheduler: Drives periodic refreshes.
    """

    def __init__(
        self,
        access: DataAccess,
        settings: Settings | None = None,
        *,
        on_error: Callable[[str], None] | None = None,
        on_render: Callable[[ChartModel], None] | None = None,
        on_streams_changed: Callable[[list[StreamRef]], None] | None = None,
        on_configs_changed: Callable[[], None] | None = None,
        on_clear_search: Callable[[], None] | None = None,
        rng: random.Random | None = None,
    ) -> None:
        """Initialize the pipeline.

        Args:
            access: Data store to query
            settings: Debounce, refresh and window settings
            on_error: Receives user-facing messages of failed operations
            on_render: Called with the chart whenever its series change
            on_streams_changed: Called with the new list of selectable streams
            on_configs_changed: Called when a config is added, removed or refreshed
            on_clear_search: Called when the stream search control must be cleared
            rng: Random generator for series colors
        """
        self.access = access
        self.settings = settings or get_settings()
        self._on_error = on_error
        self._on_render = on_render
        self._on_streams_changed = on_streams_changed
        self._on_configs_changed = on_configs_changed
        self._on_clear_search = on_clear_search

        self.namespaces: dict[str, NamespaceRef] = {}
        self.types: list[TypeSchema] = []
        self.streams: list[StreamRef] = []

        self.registry = StreamConfigRegistry()
        self.chart_sync = ChartDatasetSync(on_render=self._render, rng=rng)
        self.engine = DataSyncEngine(
            access,
            self.registry,
            on_batch=self.chart_sync.apply,
            on_error=self.report_error,
            page_size=self.settings.event_count,
            on_pass_complete=self._configs_changed,
        )
        self.scheduler = PollingScheduler(self.engine.request_sync)

        # Current control values
        self.namespace_text = ""
        self.search_text = ""
        self.event_count_text = str(self.settings.event_count)
        self.refresh_text = str(self.settings.refresh_ms)

        debounce = self.settings.debounce_ms
        self._search_debouncer: Debouncer[str] = Debouncer(debounce, self._search_settled)
        self._event_count_debouncer: Debouncer[str] = Debouncer(debounce, self.event_count_changes)
        self._refresh_debouncer: Debouncer[str] = Debouncer(debounce, self.refresh_changes)

        self._namespace_task: asyncio.Task[None] | None = None
        self._streams_task: asyncio.Task[None] | None = None
        self._streams_query_seq = 0
        self._tasks: set[asyncio.Task[Any]] = set()

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def start(self) -> None:
        """Load namespaces and start the refresh loop with the default period."""
        await self.load_namespaces()
        self.scheduler.configure(self.settings.refresh_ms)

    async def load_namespaces(self) -> None:
        """Replace the known namespaces with a fresh listing.

        On failure the error is reported and the previous namespaces are kept.
        """
        try:
            namespaces = await self.access.list_namespaces()
        except TransportError as e:
            self.report_error(e.message)
            return
        self.namespaces = {ns.id: ns for ns in namespaces}
        logger.debug("Loaded %d namespaces", len(self.namespaces))

    async def close(self) -> None:
        """Stop refreshing and cancel pending work."""
        self.scheduler.stop()
        for debouncer in (self._search_debouncer, self._event_count_debouncer, self._refresh_debouncer):
            debouncer.cancel()
        tasks = list(self._tasks)
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        await self.engine.close()

    # ------------------------------------------------------------------
    # Input channels
    # ------------------------------------------------------------------

    def on_namespace_changed(self, value: str) -> None:
        """Handle a namespace selection."""
        if value == self.namespace_text:
            return
        self.namespace_text = value
        if self._namespace_task is not None:
            self._namespace_task.cancel()
        self._namespace_task = self._spawn(self.namespace_changes(value))

    def on_search_changed(self, value: str) -> None:
        """Handle typing in the stream search control."""
        if value == self.search_text:
            return
        self.search_text = value
        self._search_debouncer.push(value)

    def on_event_count_changed(self, value: str) -> None:
        """Handle typing in the event count control."""
        if value == self.event_count_text:
            return
        self.event_count_text = value
        self._event_count_debouncer.push(value)

    def on_refresh_changed(self, value: str) -> None:
        """Handle typing in the refresh period control."""
        if value == self.refresh_text:
            return
        self.refresh_text = value
        self._refresh_debouncer.push(value)

    # ------------------------------------------------------------------
    # Channel effects
    # ------------------------------------------------------------------

    async def namespace_changes(self, namespace_id: str) -> None:
        """Load the chartable types and the streams of a namespace.

        Nothing is queried if the id does not match a known namespace.
        """
        namespace = self.namespaces.get(namespace_id)
        if namespace is None:
            logger.debug("Namespace %r is not known, skipping query", namespace_id)
            return

        try:
            types = await self.access.list_types(namespace)
        except TransportError as e:
            self.report_error(e.message)
            return
        self.types = [t for t in types if is_chartable_type(t)]
        logger.debug("Namespace %s has %d chartable types of %d", namespace_id, len(self.types), len(types))

        await self.query_streams(namespace_id, "")

    async def query_streams(self, namespace_id: str, query: str | None) -> None:
        """Load the chartable streams of a namespace matching a search prefix.

        Results of a query are dropped if a newer query was issued meanwhile.
        """
        namespace = self.namespaces.get(namespace_id)
        if namespace is None:
            return

        self._streams_query_seq += 1
        seq = self._streams_query_seq
        try:
            streams = await self.access.list_streams(namespace, query)
        except TransportError as e:
            self.report_error(e.message)
            return
        if seq != self._streams_query_seq:
            return

        type_ids = {t.id for t in self.types}
        self.streams = [s for s in streams if s.type_id in type_ids]
        if self._on_streams_changed is not None:
            self._on_streams_changed(self.streams)

    def event_count_changes(self, value: str) -> None:
        """Apply a new window size and refresh right away."""
        count = parse_positive_int(value)
        if count is None:
            logger.debug("Ignoring invalid event count: %r", value)
            return
        self.engine.page_size = count
        self.update_data()

    def refresh_changes(self, value: str) -> None:
        """Apply a new refresh period. Invalid periods are ignored."""
        self.scheduler.configure(value)

    def _search_settled(self, value: str) -> None:
        if self._streams_task is not None:
            self._streams_task.cancel()
        self._streams_task = self._spawn(self.query_streams(self.namespace_text, value))

    # ------------------------------------------------------------------
    # Selection
    # ------------------------------------------------------------------

    @property
    def selected_namespace(self) -> NamespaceRef | None:
        return self.namespaces.get(self.namespace_text)

    @property
    def selected_stream(self) -> StreamRef | None:
        """The stream whose id equals the search text, if listed."""
        for stream in self.streams:
            if stream.id == self.search_text:
                return stream
        return None

    @property
    def selected_type(self) -> TypeSchema | None:
        stream = self.selected_stream
        if stream is None:
            return None
        for type_schema in self.types:
            if type_schema.id == stream.type_id:
                return type_schema
        return None

    def _resolve_selection(self) -> _Selection | None:
        """Resolve the namespace, stream and index key of the current selection."""
        namespace = self.selected_namespace
        stream = self.selected_stream
        type_schema = self.selected_type
        if namespace is None or stream is None or type_schema is None:
            return None
        key = find_index_key(type_schema)
        if key is None or key.type is None:
            return None
        return _Selection(namespace, stream, type_schema, key.id, key.type.type_code)

    @property
    def axis_mismatch(self) -> bool:
        """Whether the selected stream resolves but its index kind differs from the chart axis."""
        selection = self._resolve_selection()
        chart = self.chart_sync.chart
        if selection is None or chart is None:
            return False
        return chart.is_time != is_time_code(selection.index_type_code)

    @property
    def can_add(self) -> bool:
        """Whether the current selection can be added to the chart.

        Namespace, stream and type must all resolve, the type must be
        chartable and, once a chart exists, its index must match the chart
        axis (time or linear).
        """
        return self._resolve_selection() is not None and not self.axis_mismatch

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------

    def add_stream(self) -> StreamConfig:
        """Add the selected stream to the chart.

        Returns:
            The registered config

        Raises:
            ResolutionError: If the selection cannot be added
        """
        selection = self._resolve_selection()
        if selection is None:
            raise ResolutionError("Select a namespace and a chartable stream first")
        if self.axis_mismatch:
            raise ResolutionError("Stream index kind does not match the chart axis")

        config = StreamConfig(
            namespace=selection.namespace,
            stream_id=selection.stream.id,
            index_key_name=selection.index_key_name,
            value_field_names=value_field_names(selection.type_schema),
            index_type_code=selection.index_type_code,
        )
        self.registry.add(config)
        logger.info("Added stream %s/%s", config.namespace.id, config.stream_id)

        self.chart_sync.create_chart(config.is_time_indexed)
        for field_name in config.value_field_names:
            self.chart_sync.ensure_series(config.series_label(field_name))
        self.chart_sync.render()

        self.on_search_changed("")
        if self._on_clear_search is not None:
            self._on_clear_search()
        self._configs_changed()

        self.update_data()
        return config

    def remove_stream(self, config: StreamConfig) -> None:
        """Remove a config and its series from the chart.

        Series still produced by another registered config are kept, so
        duplicates of a stream keep their color.

        Raises:
            KeyError: If the config is not registered
        """
        self.registry.remove(config)
        in_use = {other.series_label(name) for other in self.registry for name in other.value_field_names}
        for field_name in config.value_field_names:
            label = config.series_label(field_name)
            if label not in in_use:
                self.chart_sync.remove_series(label)
        self.chart_sync.render()
        self._configs_changed()

    def update_data(self) -> None:
        """Refresh all registered streams now."""
        if len(self.registry):
            self.engine.request_sync()

    def report_error(self, message: str) -> None:
        """Surface a failed operation to the user."""
        logger.debug("Reporting error: %s", message)
        if self._on_error is not None:
            self._on_error(message)

    def _render(self, chart: ChartModel) -> None:
        if self._on_render is not None:
            self._on_render(chart)

    def _configs_changed(self) -> None:
        if self._on_configs_changed is not None:
            self._on_configs_changed()

    def _spawn(self, coro: Coroutine[Any, Any, None]) -> asyncio.Task[None]:
        task = asyncio.get_running_loop().create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task
