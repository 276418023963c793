"""
Label schema discovery

Prometheus gauge vectors cannot gain labels after registration, so the
complete label set is derived once, before the registry is built, from the
custom fields used by the current tickets.
"""
from typing import List, Tuple

from supportpal_exporter.services.errors import StartupError, SupportPalError
from supportpal_exporter.services.supportpal import SupportPalClient
from supportpal_exporter.utils.logger import get_logger
from supportpal_exporter.utils.slug import label_name

logger = get_logger(__name__)

BASE_LABELS: Tuple[str, ...] = (
    "client",
    "status",
    "priority",
    "user",
    "subject",
    "ticket_url",
    "frontend_url",
)


class LabelSchemaBuilder:
    """Builds the frozen, ordered label set for the ticket gauges"""

    def __init__(self, client: SupportPalClient):
        self.client = client

    async def build(self) -> Tuple[str, ...]:
        """
        Scan all tickets' custom fields and merge their names into the base labels

        Returns:
            Base labels followed by custom field labels in first-seen order

        Raises:
            StartupError: Tickets could not be fetched
        """
        logger.info("Discovering label schema...")

        try:
            tickets = await self.client.fetch_all_tickets()
        except SupportPalError as e:
            raise StartupError(f"Cannot discover label schema: {e}") from e

        labels: List[str] = list(BASE_LABELS)
        for ticket in tickets:
            for field_value in ticket.customfields:
                try:
                    definition = await self.client.get_custom_field(field_value.field_id)
                except SupportPalError as e:
                    logger.warning(
                        f"Skipping custom field {field_value.field_id} "
                        f"of ticket {ticket.id}: {e}"
                    )
                    continue

                name = label_name(definition.name)
                if not name:
                    logger.warning(f"Custom field {definition.id} has no usable name: {definition.name!r}")
                    continue
                if name not in labels:
                    labels.append(name)

        logger.info(
            f"Label schema ready: {len(labels)} labels "
            f"({len(labels) - len(BASE_LABELS)} from custom fields)"
        )
        return tuple(labels)
