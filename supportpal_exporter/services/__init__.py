"""
Exporter services
"""
from .supportpal import SupportPalClient
from .cache import ReferenceCache
from .labels import LabelSchemaBuilder, BASE_LABELS
from .metrics import TicketMetrics
from .sync import MetricsSynchronizer, SyncScheduler

__all__ = [
    "SupportPalClient",
    "ReferenceCache",
    "LabelSchemaBuilder",
    "BASE_LABELS",
    "TicketMetrics",
    "MetricsSynchronizer",
    "SyncScheduler",
]
