"""SdsClient - DataAccess implementation over the SDS REST API."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, TypeVar
from urllib.parse import quote

import requests
from pydantic import BaseModel, ValidationError

from sdswatch.access import DataAccess
from sdswatch.config import Settings, get_settings
from sdswatch.exceptions import TransportError
from sdswatch.models import NamespaceRef, StreamRef, TypeSchema

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)

# Pseudo-namespaces served by Edge Data Store
EDS_DEFAULT = "default"
EDS_DIAGNOSTICS = "diagnostics"

# Range reads ask for verbose output so that default-valued fields are kept
_RANGE_HEADERS = {
    "Accept": "application/json",
    "Accept-Verbosity": "verbose",
}


class SdsClient(DataAccess):
    """HTTP client for a Sequential Data Store (cloud tenant or Edge Data Store).

    Requests are blocking and are run in a worker thread so that the event
    loop stays responsive.
    """

    def __init__(self, settings: Settings | None = None, session: requests.Session | None = None) -> None:
        """Initialize the client.

        Args:
            settings: Connection settings. Defaults to settings from the environment.
            session: HTTP session to use. A new session is created if None.
        """
        self.settings = settings or get_settings()
        self.session = session or requests.Session()

    @property
    def base_url(self) -> str:
        """The base URL for namespaces in the SDS instance and tenant."""
        resource = self.settings.resource.rstrip("/")
        return f"{resource}/api/{self.settings.api_version}/Tenants/{self.settings.tenant_id}/Namespaces"

    def eds_namespace(self, namespace_id: str) -> NamespaceRef:
        """Build the namespace reference of an Edge Data Store namespace.

        Args:
            namespace_id: 'default' or 'diagnostics'
        """
        return NamespaceRef(
            id=namespace_id,
            self_url=f"{self.base_url}/{namespace_id}",
            region="",
            instance_id="",
            description="",
        )

    async def list_namespaces(self) -> list[NamespaceRef]:
        """Get the namespaces of the tenant.

        Edge Data Store has no namespace listing; its two fixed namespaces are
        returned without a request.
        """
        if self.settings.is_edge:
            return [self.eds_namespace(EDS_DEFAULT), self.eds_namespace(EDS_DIAGNOSTICS)]
        data = await self._get(self.base_url, "Error getting namespaces")
        return _parse_items(NamespaceRef, data)

    async def list_types(self, namespace: NamespaceRef) -> list[TypeSchema]:
        data = await self._get(f"{namespace.self_url}/Types", "Error getting types")
        return _parse_items(TypeSchema, data)

    async def list_streams(self, namespace: NamespaceRef, search_prefix: str | None) -> list[StreamRef]:
        data = await self._get(
            f"{namespace.self_url}/Streams",
            "Error getting streams",
            params={"query": f"{search_prefix or ''}*"},
        )
        return _parse_items(StreamRef, data)

    async def get_latest_index_value(self, namespace: NamespaceRef, stream_id: str) -> Any:
        return await self._get(
            f"{namespace.self_url}/Streams/{quote(stream_id, safe='')}/Data/Last",
            "Error getting last value",
        )

    async def get_range_ending_at(
        self,
        namespace: NamespaceRef,
        stream_id: str,
        end_index: Any,
        count: int,
        reverse: bool = True,
    ) -> list[dict[str, Any]] | None:
        params: dict[str, Any] = {"startIndex": str(end_index), "count": count}
        if reverse:
            params["reversed"] = "true"
        return await self._get(
            f"{namespace.self_url}/Streams/{quote(stream_id, safe='')}/Data",
            "Error getting range values",
            params=params,
            headers=_RANGE_HEADERS,
        )

    def close(self) -> None:
        self.session.close()

    async def _get(
        self,
        url: str,
        error_message: str,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> Any:
        return await asyncio.to_thread(self._get_sync, url, error_message, params, headers)

    def _get_sync(
        self,
        url: str,
        error_message: str,
        params: dict[str, Any] | None,
        headers: dict[str, str] | None,
    ) -> Any:
        """Perform a GET request and decode the JSON body.

        Args:
            url: Absolute URL
            error_message: User-facing message of the TransportError raised on failure
            params: Query parameters
            headers: Extra request headers

        Returns:
            Decoded JSON body, or None for an empty response

        Raises:
            TransportError: If the request fails or the body is not valid JSON
        """
        try:
            response = self.session.get(url, params=params, headers=headers, timeout=self.settings.request_timeout)
        except requests.RequestException as e:
            # A client-side or network error occurred
            logger.error("An error occurred: %s", e)
            raise TransportError(error_message) from e

        if not response.ok:
            # The SDS backend returned an unsuccessful response code
            logger.error("SDS backend returned code %s, body was: %s", response.status_code, response.text)
            raise TransportError(error_message, status_code=response.status_code)

        if response.status_code == 204 or not response.content:
            return None

        try:
            return response.json()
        except ValueError as e:
            logger.error("SDS backend returned invalid JSON from %s: %s", url, e)
            raise TransportError(error_message, status_code=response.status_code) from e


def _parse_items(model: type[M], data: Any) -> list[M]:
    """Validate the entries of a listing response.

    Null entries are dropped. Entries that do not match the model are logged
    and dropped, so one bad entry does not hide the rest of the listing.
    """
    items: list[M] = []
    for item in data or []:
        if item is None:
            continue
        try:
            items.append(model.model_validate(item))
        except ValidationError as e:
            logger.warning("Skipping invalid %s entry: %s", model.__name__, e)
    return items
