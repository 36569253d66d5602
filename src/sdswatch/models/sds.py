"""
SDS wire models.

Namespaces, types and streams as returned by the Sequential Data Store REST
API. Field aliases match the PascalCase names used on the wire; models are
frozen since they are never modified once fetched.
"""

from __future__ import annotations

from enum import IntEnum

from pydantic import BaseModel, ConfigDict, Field


class SdsTypeCode(IntEnum):
    """SDS type codes.

    Only the scalar codes are enumerated. Nullable (1xx), array (2xx) and
    other composite codes are kept as plain integers on the models.
    """

    EMPTY = 0
    OBJECT = 1
    DB_NULL = 2
    BOOLEAN = 3
    CHAR = 4
    SBYTE = 5
    BYTE = 6
    INT16 = 7
    UINT16 = 8
    INT32 = 9
    UINT32 = 10
    INT64 = 11
    UINT64 = 12
    SINGLE = 13
    DOUBLE = 14
    DECIMAL = 15
    DATE_TIME = 16
    STRING = 18
    GUID = 19
    DATE_TIME_OFFSET = 20
    TIME_SPAN = 21
    VERSION = 22


# Scalar codes that can serve as a chart index (no nested properties)
PRIMITIVE_TYPE_CODES = frozenset(
    {
        SdsTypeCode.BOOLEAN,
        SdsTypeCode.CHAR,
        SdsTypeCode.SBYTE,
        SdsTypeCode.BYTE,
        SdsTypeCode.INT16,
        SdsTypeCode.UINT16,
        SdsTypeCode.INT32,
        SdsTypeCode.UINT32,
        SdsTypeCode.INT64,
        SdsTypeCode.UINT64,
        SdsTypeCode.SINGLE,
        SdsTypeCode.DOUBLE,
        SdsTypeCode.DECIMAL,
        SdsTypeCode.DATE_TIME,
        SdsTypeCode.STRING,
        SdsTypeCode.GUID,
        SdsTypeCode.DATE_TIME_OFFSET,
        SdsTypeCode.TIME_SPAN,
        SdsTypeCode.VERSION,
    }
)

TIME_TYPE_CODES = frozenset({SdsTypeCode.DATE_TIME, SdsTypeCode.DATE_TIME_OFFSET})


class _SdsModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)


class NamespaceRef(_SdsModel):
    """A queryable scope containing types and streams."""

    id: str = Field(..., alias="Id")
    self_url: str = Field(..., alias="Self", description="Absolute URL of the namespace resource")
    region: str = Field(default="", alias="Region")
    instance_id: str = Field(default="", alias="InstanceId")
    description: str | None = Field(default="", alias="Description")


class TypeSchema(_SdsModel):
    """Recursive description of the shape of each event in a stream."""

    id: str = Field(default="", alias="Id")
    name: str | None = Field(default="", alias="Name")
    description: str | None = Field(default="", alias="Description")
    type_code: int = Field(..., alias="SdsTypeCode")
    properties: list[PropertySchema | None] | None = Field(default=None, alias="Properties")


class PropertySchema(_SdsModel):
    """A named member of a TypeSchema."""

    id: str = Field(default="", alias="Id")
    name: str | None = Field(default="", alias="Name")
    description: str | None = Field(default="", alias="Description")
    order: int | None = Field(default=None, alias="Order")
    is_key: bool = Field(default=False, alias="IsKey")
    type: TypeSchema | None = Field(default=None, alias="SdsType")


class StreamRef(_SdsModel):
    """A named, typed sequence of indexed events."""

    id: str = Field(..., alias="Id")
    name: str | None = Field(default="", alias="Name")
    description: str | None = Field(default="", alias="Description")
    type_id: str = Field(..., alias="TypeId")


TypeSchema.model_rebuild()
PropertySchema.model_rebuild()
