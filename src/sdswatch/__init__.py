"""
SDS Watch - Live charts of Sequential Data Store streams.

This package lets a user browse the namespaces of an SDS instance, pick
streams whose type has a single scalar index and watch their most recent
values on a shared terminal chart.

Examples:
    >>> from sdswatch import SdsClient, SelectionPipeline
    >>> pipeline = SelectionPipeline(SdsClient())
    >>> await pipeline.start()
    >>> pipeline.on_namespace_changed("default")
"""

from sdswatch.client import SdsClient
from sdswatch.matching import find_index_key, is_chartable_type, is_index_key_property
from sdswatch.pipeline import SelectionPipeline

__version__ = "0.1.0"
__all__ = [
    "SdsClient",
    "SelectionPipeline",
    "find_index_key",
    "is_chartable_type",
    "is_index_key_property",
]
