"""
Ticket metrics synchronization

One cycle fetches every ticket, clears the published series and rebuilds
them from the fresh snapshot, so tickets that were deleted or aged out
disappear from the exposition. The scheduler repeats cycles with a fixed
delay between them and backs off while the API keeps failing.
"""
import asyncio
import contextlib
import time
from datetime import datetime, timedelta, timezone
from typing import Dict, Optional

from supportpal_exporter.models.schemas import Ticket
from supportpal_exporter.services.errors import SupportPalError
from supportpal_exporter.services.metrics import TicketMetrics
from supportpal_exporter.services.supportpal import SupportPalClient
from supportpal_exporter.utils.logger import get_logger
from supportpal_exporter.utils.slug import label_name, slugify

logger = get_logger(__name__)


class MetricsSynchronizer:
    """Fetch, transform and publish ticket gauges"""

    def __init__(
        self,
        client: SupportPalClient,
        metrics: TicketMetrics,
        max_ticket_age: timedelta = timedelta(days=365),
        missing_organization_label: str = "",
    ):
        self.client = client
        self.metrics = metrics
        self.max_ticket_age = max_ticket_age
        self.missing_organization_label = missing_organization_label

        self.last_success: Optional[datetime] = None
        self.last_cycle_ok: Optional[bool] = None
        self.consecutive_failures = 0

    async def run_cycle(self, now: Optional[datetime] = None) -> bool:
        """
        Run one fetch/transform/publish pass

        Args:
            now: Reference time for the age filter (defaults to current UTC time)

        Returns:
            True when the metrics were republished, False when the fetch failed
            and the previous series were left untouched
        """
        now = now or datetime.now(timezone.utc)
        started = time.monotonic()
        logger.info("Collecting metrics...")

        try:
            tickets = await self.client.fetch_all_tickets()
        except SupportPalError as e:
            logger.error(f"Ticket fetch failed, keeping previous metrics: {e}")
            self.record_result(ok=False)
            return False

        # Labels need lookups, so they are resolved before the series are
        # touched. Reset and publish then run without yielding to a scrape.
        snapshot = []
        for ticket in tickets:
            if self.is_expired(ticket, now):
                continue
            snapshot.append((await self.build_labels(ticket), ticket.timestamps()))

        self.metrics.reset()
        for labels, timestamps in snapshot:
            for kind, value in timestamps.items():
                self.metrics.observe(kind, labels, float(value))

        logger.info(
            f"Published {len(snapshot)}/{len(tickets)} tickets "
            f"in {time.monotonic() - started:.2f}s"
        )
        for cache in (self.client.organizations, self.client.custom_fields):
            logger.debug(
                f"{cache.name} cache: {len(cache)} entries, "
                f"{cache.hits} hits, {cache.misses} misses"
            )
        self.last_success = now
        self.record_result(ok=True)
        return True

    def record_result(self, ok: bool) -> None:
        self.last_cycle_ok = ok
        self.consecutive_failures = 0 if ok else self.consecutive_failures + 1

    def is_expired(self, ticket: Ticket, now: datetime) -> bool:
        """Whether the ticket was created longer ago than the maximum age"""
        return now.timestamp() - ticket.created_at > self.max_ticket_age.total_seconds()

    async def build_labels(self, ticket: Ticket) -> Dict[str, str]:
        """
        Compute the label values of a ticket

        Every label of the registered set gets a value, "" when the ticket
        does not provide one. Custom fields whose definition cannot be
        loaded, or whose name is not part of the label set, are dropped.
        """
        labels: Dict[str, str] = {
            "client": self.missing_organization_label,
            "status": ticket.status.name.lower(),
            "priority": ticket.priority.name.lower(),
            "user": ticket.user.formatted_name.lower(),
            "subject": ticket.subject,
            "ticket_url": ticket.operator_url,
            "frontend_url": ticket.frontend_url,
        }

        organization_id = ticket.user.organisation_id
        if organization_id:
            try:
                organization = await self.client.get_organization(organization_id)
                labels["client"] = organization.name.replace(" ", "").lower()
            except SupportPalError as e:
                logger.warning(f"Organisation {organization_id} of ticket {ticket.id} unavailable: {e}")

        for field_value in ticket.customfields:
            try:
                definition = await self.client.get_custom_field(field_value.field_id)
            except SupportPalError as e:
                logger.warning(
                    f"Skipping custom field {field_value.field_id} of ticket {ticket.id}: {e}"
                )
                continue

            name = label_name(definition.name)
            if name not in self.metrics.label_names:
                logger.warning(
                    f"Custom field {name!r} of ticket {ticket.id} was not present at startup, dropped"
                )
                continue

            value = field_value.value
            if definition.is_single_select:
                option = definition.option_value(value)
                if option is not None:
                    # Keep the raw id when the option text has no usable slug
                    value = slugify(option) or value

            labels[name] = value

        for name in self.metrics.label_names:
            labels.setdefault(name, "")

        return labels


class SyncScheduler:
    """
    Runs synchronization cycles on a background task

    Fixed delay: the interval starts when a cycle ends. Failed cycles are
    retried after an exponential back-off instead.
    """

    def __init__(
        self,
        synchronizer: MetricsSynchronizer,
        interval: float = 60.0,
        retry_base_delay: float = 5.0,
        retry_max_delay: float = 300.0,
    ):
        self.synchronizer = synchronizer
        self.interval = interval
        self.retry_base_delay = retry_base_delay
        self.retry_max_delay = retry_max_delay
        self._task: Optional[asyncio.Task] = None
        self._stopping = asyncio.Event()

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def next_delay(self) -> float:
        """Seconds to wait before the next cycle"""
        failures = self.synchronizer.consecutive_failures
        if failures == 0:
            return self.interval
        return min(self.retry_base_delay * 2 ** (failures - 1), self.retry_max_delay)

    def start(self) -> None:
        """Start the loop; a second call while running is a no-op"""
        if self.running:
            return
        self._stopping = asyncio.Event()
        self._task = asyncio.create_task(self._run(), name="supportpal-sync")
        logger.info("Metrics synchronization started")

    async def stop(self) -> None:
        """Stop the loop, interrupting a pending wait or an in-flight cycle"""
        if self._task is None:
            return
        self._stopping.set()
        self._task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await self._task
        self._task = None
        logger.info("Metrics synchronization stopped")

    async def _run(self) -> None:
        while not self._stopping.is_set():
            try:
                await self.synchronizer.run_cycle()
            except Exception:
                logger.exception("Unexpected error during metrics synchronization")
                self.synchronizer.record_result(ok=False)

            delay = self.next_delay()
            if self.synchronizer.consecutive_failures:
                logger.info(f"Retrying in {delay:.0f}s")

            with contextlib.suppress(asyncio.TimeoutError):
                await asyncio.wait_for(self._stopping.wait(), timeout=delay)
