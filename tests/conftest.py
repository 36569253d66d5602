"""
Pytest configuration and shared fixtures.
"""

from __future__ import annotations

import asyncio
from typing import Any

import pytest

from sdswatch.access import DataAccess
from sdswatch.config import Settings, reset_settings
from sdswatch.exceptions import TransportError
from sdswatch.models import NamespaceRef, SdsTypeCode, StreamRef, TypeSchema


@pytest.fixture(autouse=True)
def clean_env_for_tests(monkeypatch):
    """Clean environment variables for test isolation.

    Ensures tests don't pick up connection settings of the developer machine.
    This fixture is applied automatically to all tests (autouse=True).
    """
    for name in (
        "SDSWATCH_RESOURCE",
        "SDSWATCH_API_VERSION",
        "SDSWATCH_TENANT_ID",
        "SDSWATCH_DEBOUNCE_MS",
        "SDSWATCH_REFRESH_MS",
        "SDSWATCH_EVENT_COUNT",
        "SDSWATCH_REQUEST_TIMEOUT",
    ):
        monkeypatch.delenv(name, raising=False)
    reset_settings()
    yield
    reset_settings()


class FakeDataAccess(DataAccess):
    """In-memory DataAccess recording every call.

    Attributes:
        errors: Method name -> TransportError raised by that method.
        gate: When set, last value reads wait for the event before answering.
    """

    def __init__(
        self,
        namespaces: list[NamespaceRef] | None = None,
        types: list[TypeSchema] | None = None,
        streams: list[StreamRef] | None = None,
        last: Any = None,
        range_data: list[dict[str, Any]] | None = None,
    ) -> None:
        self.namespaces = namespaces or []
        self.types = types or []
        self.streams = streams or []
        self.last = last
        self.range_data = range_data
        self.errors: dict[str, TransportError] = {}
        self.calls: list[tuple[str, tuple[Any, ...]]] = []
        self.gate: asyncio.Event | None = None
        self.closed = False

    def _record(self, name: str, *args: Any) -> None:
        self.calls.append((name, args))
        if name in self.errors:
            raise self.errors[name]

    def calls_to(self, name: str) -> list[tuple[Any, ...]]:
        return [args for call, args in self.calls if call == name]

    async def list_namespaces(self) -> list[NamespaceRef]:
        self._record("list_namespaces")
        return list(self.namespaces)

    async def list_types(self, namespace: NamespaceRef) -> list[TypeSchema]:
        self._record("list_types", namespace)
        return list(self.types)

    async def list_streams(self, namespace: NamespaceRef, search_prefix: str | None) -> list[StreamRef]:
        self._record("list_streams", namespace, search_prefix)
        return list(self.streams)

    async def get_latest_index_value(self, namespace: NamespaceRef, stream_id: str) -> Any:
        self._record("get_latest_index_value", namespace, stream_id)
        if self.gate is not None:
            await self.gate.wait()
        return self.last

    async def get_range_ending_at(
        self,
        namespace: NamespaceRef,
        stream_id: str,
        end_index: Any,
        count: int,
        reverse: bool = True,
    ) -> list[dict[str, Any]] | None:
        self._record("get_range_ending_at", namespace, stream_id, end_index, count, reverse)
        return self.range_data

    def close(self) -> None:
        self.closed = True


def make_type(
    type_id: str = "TypeId",
    key_code: int = SdsTypeCode.DATE_TIME,
    key_order: int | None = 0,
    value_names: tuple[str, ...] = ("Value",),
) -> TypeSchema:
    """Build an object type with one index key and double value properties."""
    properties = [
        {
            "Id": "Timestamp",
            "Order": key_order,
            "IsKey": True,
            "SdsType": {"Id": "", "SdsTypeCode": key_code, "Properties": None},
        }
    ]
    for name in value_names:
        properties.append(
            {
                "Id": name,
                "Order": None,
                "IsKey": False,
                "SdsType": {"Id": "", "SdsTypeCode": SdsTypeCode.DOUBLE, "Properties": None},
            }
        )
    return TypeSchema.model_validate({"Id": type_id, "SdsTypeCode": SdsTypeCode.OBJECT, "Properties": properties})


@pytest.fixture
def namespace() -> NamespaceRef:
    return NamespaceRef(
        id="Id",
        self_url="Self",
        region="Region",
        instance_id="InstanceId",
        description="Description",
    )


@pytest.fixture
def stream() -> StreamRef:
    return StreamRef(id="StreamId", name="", description="", type_id="TypeId")


@pytest.fixture
def supported_type() -> TypeSchema:
    """Object type indexed by a DateTime 'Timestamp' with a double 'Value'."""
    return make_type()


@pytest.fixture
def unsupported_type() -> TypeSchema:
    return TypeSchema(id="TypeId", type_code=SdsTypeCode.DOUBLE, properties=None)


@pytest.fixture
def empty_type() -> TypeSchema:
    return TypeSchema(id="TypeId", type_code=SdsTypeCode.OBJECT, properties=None)


@pytest.fixture
def settings() -> Settings:
    """Settings with no debounce so channel effects run on the next loop turn."""
    return Settings(debounce_ms=0, refresh_ms=60_000, event_count=100)


@pytest.fixture
def fake_access(namespace, stream, supported_type) -> FakeDataAccess:
    return FakeDataAccess(
        namespaces=[namespace],
        types=[supported_type],
        streams=[stream],
        last={"Timestamp": "last"},
        range_data=[{"Timestamp": "last", "Value": 1.5}],
    )


@pytest.fixture
def type_factory():
    """Factory for chartable object types."""
    return make_type


@pytest.fixture
def access_factory():
    """Factory for FakeDataAccess instances."""
    return FakeDataAccess
