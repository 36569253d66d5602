"""
DataSyncEngine - refreshes every registered stream on each tick.

Each refresh reads the last event of a stream, then pages backward from its
index to get the most recent window of events. No cursor is kept between
refreshes, so late or missing events never leave the chart out of step with
the store.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Mapping
from datetime import datetime, timezone
from typing import Any

from sdswatch.access import DataAccess
from sdswatch.exceptions import TransportError
from sdswatch.models import DataSample, SampleBatch, StreamConfig
from sdswatch.registry import StreamConfigRegistry
from sdswatch.utils.timestamp import parse_to_datetime
from sdswatch.utils.validators import parse_positive_int

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 100


class DataSyncEngine:
    """Fetches the latest window of events for every registered stream.

    Streams are refreshed concurrently. A stream whose previous refresh is
    still in flight is skipped, so refreshes of one stream never overlap and
    its last known index never moves backward.
    """

    def __init__(
        self,
        access: DataAccess,
        registry: StreamConfigRegistry,
        on_batch: Callable[[SampleBatch], None],
        on_error: Callable[[str], None] | None = None,
        page_size: int = DEFAULT_PAGE_SIZE,
        on_pass_complete: Callable[[], None] | None = None,
    ) -> None:
        """Initialize the engine.

        Args:
            access: Data store to read from
            registry: Streams to refresh
            on_batch: Receives the refreshed window of each stream that has data
            on_error: Receives a user-facing message when a read fails
            page_size: Number of events per window
            on_pass_complete: Called after every refresh pass, with or without data
        """
        self.access = access
        self.registry = registry
        self._on_batch = on_batch
        self._on_error = on_error
        self._page_size = page_size
        self._on_pass_complete = on_pass_complete
        self._in_flight: set[StreamConfig] = set()
        self._tasks: set[asyncio.Task[list[SampleBatch]]] = set()

    @property
    def page_size(self) -> int:
        return self._page_size

    @page_size.setter
    def page_size(self, value: int) -> None:
        parsed = parse_positive_int(value)
        if parsed is None:
            raise ValueError(f"Page size must be a positive integer, got {value!r}")
        self._page_size = parsed

    def is_in_flight(self, config: StreamConfig) -> bool:
        """Check whether a refresh of this config is running."""
        return config in self._in_flight

    def request_sync(self) -> asyncio.Task[list[SampleBatch]]:
        """Start a refresh pass in the background.

        Returns:
            The task running the pass
        """
        task = asyncio.get_running_loop().create_task(self.sync())
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def sync(self) -> list[SampleBatch]:
        """Refresh every registered stream once.

        Returns:
            The batches emitted during this pass
        """
        configs = self.registry.all()
        if not configs:
            return []
        results = await asyncio.gather(*(self.sync_config(config) for config in configs))
        if self._on_pass_complete is not None:
            self._on_pass_complete()
        return [batch for batch in results if batch is not None]

    async def sync_config(self, config: StreamConfig) -> SampleBatch | None:
        """Refresh a single stream.

        Args:
            config: A registered config

        Returns:
            The emitted batch, or None if nothing was emitted
        """
        if config in self._in_flight:
            logger.debug("Skipping %s, previous refresh still running", config)
            return None

        self._in_flight.add(config)
        try:
            return await self._refresh(config)
        finally:
            self._in_flight.discard(config)

    async def close(self) -> None:
        """Cancel refresh passes still running."""
        tasks = list(self._tasks)
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)

    async def _refresh(self, config: StreamConfig) -> SampleBatch | None:
        try:
            last = await self.access.get_latest_index_value(config.namespace, config.stream_id)
            last_index = _extract_index(last, config.index_key_name)
            data = None
            if last_index is not None:
                data = await self.access.get_range_ending_at(
                    config.namespace,
                    config.stream_id,
                    last_index,
                    self._page_size,
                    reverse=True,
                )
        except TransportError as e:
            logger.warning("Refresh of %s/%s failed: %s", config.namespace.id, config.stream_id, e.message)
            if self._on_error is not None:
                self._on_error(e.message)
            return None

        if config not in self.registry:
            logger.debug("%s was removed during refresh", config)
            return None

        now = datetime.now(timezone.utc)
        if not data:
            self.registry.record_fetch_result(config, count=0, timestamp=now)
            return None

        # Reversed reads come back newest first; charts want ascending order
        samples = [self._to_sample(config, row) for row in reversed(data)]
        self.registry.record_fetch_result(config, last_index, len(data), now)

        batch = SampleBatch(config=config, samples=samples)
        self._on_batch(batch)
        return batch

    def _to_sample(self, config: StreamConfig, row: Any) -> DataSample:
        if not isinstance(row, Mapping):
            row = {}
        index_value = row.get(config.index_key_name)
        if config.is_time_indexed and index_value is not None:
            try:
                index_value = parse_to_datetime(index_value)
            except ValueError:
                logger.debug("Keeping unparseable time index %r of %s", index_value, config.stream_id)
        fields = {name: _to_number(row.get(name)) for name in config.value_field_names}
        return DataSample(index_value=index_value, fields=fields)


def _extract_index(last: Any, key: str) -> Any:
    """Get the index value from a last-value read."""
    if last is None:
        return None
    if isinstance(last, Mapping):
        return last.get(key)
    return last


def _to_number(value: Any) -> float | None:
    if value is None:
        return None
    if isinstance(value, bool):
        return float(value)
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            return None
    return None
