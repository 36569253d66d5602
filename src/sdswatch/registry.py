"""
StreamConfigRegistry - ordered collection of charted streams.

Insertion order is the chart series order. Entries are matched by identity,
so the same stream may be registered more than once.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from datetime import datetime
from typing import Any

from sdswatch.models import StreamConfig

logger = logging.getLogger(__name__)

_UNSET: Any = object()


class StreamConfigRegistry:
    """In-memory registry of active stream configs."""

    def __init__(self) -> None:
        self._configs: list[StreamConfig] = []

    def add(self, config: StreamConfig) -> None:
        """Append a config. Duplicates are not rejected."""
        self._configs.append(config)
        logger.debug("Registered %s", config)

    def remove(self, config: StreamConfig) -> None:
        """Remove a config.

        Args:
            config: The registered config object

        Raises:
            KeyError: If the object is not registered
        """
        self._configs.pop(self._index_of(config))
        logger.debug("Removed %s", config)

    def all(self) -> tuple[StreamConfig, ...]:
        """Get all configs in insertion order."""
        return tuple(self._configs)

    def record_fetch_result(
        self,
        config: StreamConfig,
        index_value: Any = _UNSET,
        count: int = 0,
        timestamp: datetime | None = None,
    ) -> None:
        """Store the outcome of a refresh on a registered config.

        Args:
            config: The registered config object
            index_value: Latest index value seen. Omit to keep the previous value.
            count: Number of samples in the refreshed window
            timestamp: Time of the refresh

        Raises:
            KeyError: If the object is not registered
        """
        entry = self._configs[self._index_of(config)]
        if index_value is not _UNSET:
            entry.last_known_index_value = index_value
        entry.last_sample_count = count
        entry.last_update_timestamp = timestamp

    def _index_of(self, config: StreamConfig) -> int:
        for i, entry in enumerate(self._configs):
            if entry is config:
                return i
        raise KeyError(f"Stream config is not registered: {config}")

    def __contains__(self, config: object) -> bool:
        return any(entry is config for entry in self._configs)

    def __iter__(self) -> Iterator[StreamConfig]:
        return iter(tuple(self._configs))

    def __len__(self) -> int:
        return len(self._configs)
