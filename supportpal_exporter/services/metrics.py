"""
Ticket gauge registry

Holds one gauge vector per ticket timestamp kind, all registered with the
same frozen label set on a dedicated registry.
"""
from typing import Dict, Mapping, Sequence, Tuple

from prometheus_client import CollectorRegistry, Gauge, generate_latest

from supportpal_exporter.models.schemas import TimestampKind

METRIC_PREFIX = "supportpal_ticket"

GAUGE_HELP: Dict[TimestampKind, str] = {
    "created": "Last time a ticket was created",
    "updated": "Last time a ticket was updated",
    "deleted": "Last time a ticket was deleted",
    "resolved": "Last time a ticket was resolved",
}


class TicketMetrics:
    """Gauges for ticket created/updated/deleted/resolved timestamps"""

    def __init__(self, label_names: Sequence[str], registry: CollectorRegistry | None = None):
        self.label_names: Tuple[str, ...] = tuple(label_names)
        self.registry = registry or CollectorRegistry()
        self.gauges: Dict[TimestampKind, Gauge] = {
            kind: Gauge(
                f"{METRIC_PREFIX}_{kind}",
                help_text,
                self.label_names,
                registry=self.registry,
            )
            for kind, help_text in GAUGE_HELP.items()
        }

    def reset(self) -> None:
        """Drop every published series"""
        for gauge in self.gauges.values():
            gauge.clear()

    def observe(self, kind: TimestampKind, labels: Mapping[str, str], value: float) -> None:
        """Set one series; labels must cover the full label set"""
        self.gauges[kind].labels(**labels).set(value)

    def render(self) -> bytes:
        """Current state in Prometheus text exposition format"""
        return generate_latest(self.registry)
