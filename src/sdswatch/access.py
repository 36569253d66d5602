"""
DataAccess - Abstract base class for reading from a Sequential Data Store.

The selection pipeline and the sync engine only talk to the store through
this interface. Every method raises TransportError when the store cannot be
reached or answers with an error.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from sdswatch.models import NamespaceRef, StreamRef, TypeSchema


class DataAccess(ABC):
    """Asynchronous read interface to the data store."""

    @abstractmethod
    async def list_namespaces(self) -> list[NamespaceRef]:  # pragma: no cover - interface only
        """List the namespaces visible to the caller."""
        raise NotImplementedError

    @abstractmethod
    async def list_types(self, namespace: NamespaceRef) -> list[TypeSchema]:  # pragma: no cover - interface only
        """List the types defined in a namespace."""
        raise NotImplementedError

    @abstractmethod
    async def list_streams(self, namespace: NamespaceRef, search_prefix: str | None) -> list[StreamRef]:  # pragma: no cover - interface only
        """List the streams of a namespace whose id or name starts with search_prefix.

        Args:
            namespace: Namespace to search
            search_prefix: Prefix filter. None or empty matches all streams.
        """
        raise NotImplementedError

    @abstractmethod
    async def get_latest_index_value(self, namespace: NamespaceRef, stream_id: str) -> Any:  # pragma: no cover - interface only
        """Read the last event of a stream.

        Returns:
            The last event (a mapping holding the index key), a bare index
            value, or None for an empty stream.
        """
        raise NotImplementedError

    @abstractmethod
    async def get_range_ending_at(
        self,
        namespace: NamespaceRef,
        stream_id: str,
        end_index: Any,
        count: int,
        reverse: bool = True,
    ) -> list[dict[str, Any]] | None:  # pragma: no cover - interface only
        """Read up to count events starting at end_index.

        Args:
            namespace: Namespace of the stream
            stream_id: Stream id
            end_index: Index to start reading from (inclusive)
            count: Maximum number of events
            reverse: Walk backward from end_index

        Returns:
            Events as mappings, or None when the store returned no content
        """
        raise NotImplementedError

    def close(self) -> None:  # noqa: B027
        """Release any resources held by the implementation.

        Default implementation does nothing. Override if cleanup is needed.
        """
