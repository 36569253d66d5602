"""
Runtime models for active stream feeds.

A StreamConfig is created when the user adds a stream to the chart and is
updated after every refresh. DataSample and SampleBatch carry the refreshed
window of events from the sync engine to the chart.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from sdswatch.models.sds import TIME_TYPE_CODES, NamespaceRef, SdsTypeCode


@dataclass(eq=False)
class StreamConfig:
    """Configuration and refresh state of one charted stream.

    Instances are compared by identity: two configs for the same stream with
    different value fields are distinct entries.
    """

    namespace: NamespaceRef
    stream_id: str
    index_key_name: str
    value_field_names: list[str]
    index_type_code: int = SdsTypeCode.DOUBLE
    last_known_index_value: Any = None
    last_sample_count: int = 0
    last_update_timestamp: datetime | None = None

    @property
    def is_time_indexed(self) -> bool:
        """Whether the stream index is a date/time value."""
        return self.index_type_code in TIME_TYPE_CODES

    def series_label(self, field_name: str) -> str:
        """Build the chart series label for one value field."""
        return f"{self.namespace.id}:{self.stream_id}:{field_name}"

    def __str__(self) -> str:
        return f"StreamConfig({self.namespace.id}/{self.stream_id}, key={self.index_key_name}, fields={self.value_field_names})"


@dataclass
class DataSample:
    """One event of a stream reduced to its index and numeric value fields."""

    index_value: Any
    fields: dict[str, float | None] = field(default_factory=dict)


@dataclass
class SampleBatch:
    """The refreshed window of samples for one stream config."""

    config: StreamConfig
    samples: list[DataSample] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.samples)
