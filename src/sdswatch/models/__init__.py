"""
SDS Watch data models package.

This package contains the wire models of the data store and the runtime
models shared by the registry, sync engine and chart.
"""

from sdswatch.models.chart import AxisMode, ChartModel, ChartSeries
from sdswatch.models.sds import NamespaceRef, PropertySchema, SdsTypeCode, StreamRef, TypeSchema
from sdswatch.models.stream import DataSample, SampleBatch, StreamConfig

__all__ = [
    "AxisMode",
    "ChartModel",
    "ChartSeries",
    "DataSample",
    "NamespaceRef",
    "PropertySchema",
    "SampleBatch",
    "SdsTypeCode",
    "StreamConfig",
    "StreamRef",
    "TypeSchema",
]
