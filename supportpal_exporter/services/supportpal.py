"""
SupportPal API Client

Provides the SupportPal API access the exporter needs:
- Authenticated raw requests against the configured base path
- Paginated ticket listing
- Organisation and custom field lookups through memoizing caches
"""
import httpx
from typing import Any, Dict, List, Optional, Type, TypeVar
from pydantic import ValidationError

from supportpal_exporter.config import get_settings
from supportpal_exporter.models.schemas import (
    ApiEnvelope,
    CustomFieldDefinition,
    CustomFieldResponse,
    Organization,
    OrganizationResponse,
    Ticket,
    TicketListResponse,
)
from supportpal_exporter.services.cache import ReferenceCache
from supportpal_exporter.services.errors import ApiError, DecodeError, TransportError
from supportpal_exporter.utils.logger import get_logger

logger = get_logger(__name__)

TICKETS_PATH = "/api/ticket/ticket"
ORGANISATION_PATH = "/api/user/organisation/{id}"
CUSTOM_FIELD_PATH = "/api/ticket/customfield/{id}"

# SupportPal ignores the token password, any placeholder is accepted
AUTH_PASSWORD = "X"

E = TypeVar("E", bound=ApiEnvelope)


class SupportPalClient:
    """
    SupportPal API integration

    Requests are not retried here; callers decide how to recover.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        api_token: Optional[str] = None,
        timeout: Optional[float] = None,
        page_size: Optional[int] = None,
        organizations: Optional[ReferenceCache[Organization]] = None,
        custom_fields: Optional[ReferenceCache[CustomFieldDefinition]] = None,
    ):
        settings = get_settings()
        self.base_url = base_url.rstrip("/") if base_url is not None else settings.API_BASE_URL
        self.api_token = api_token if api_token is not None else settings.api_token
        self.timeout = timeout if timeout is not None else settings.request_timeout
        self.page_size = page_size if page_size is not None else settings.page_size
        self.headers = {
            "Content-Type": "application/json"
        }
        self.organizations = organizations or ReferenceCache[Organization]("organisation")
        self.custom_fields = custom_fields or ReferenceCache[CustomFieldDefinition]("customfield")

    async def request(
        self,
        method: str,
        path: str,
        body: Optional[bytes] = None,
        params: Optional[Dict[str, Any]] = None
    ) -> bytes:
        """
        Make an authenticated HTTP request

        Args:
            method: HTTP method (GET, POST, ...)
            path: API path appended to the base URL
            body: Raw request body
            params: Query string parameters

        Returns:
            Raw response body

        Raises:
            TransportError: Connection failure, timeout or non-2xx status
        """
        url = f"{self.base_url}{path}"

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.request(
                    method=method,
                    url=url,
                    auth=(self.api_token, AUTH_PASSWORD),
                    headers=self.headers,
                    content=body,
                    params=params
                )
                response.raise_for_status()
                return response.content

        except httpx.HTTPStatusError as e:
            raise TransportError(
                f"{method} {path} returned HTTP {e.response.status_code}",
                details={"status_code": e.response.status_code}
            ) from e
        except httpx.HTTPError as e:
            raise TransportError(f"{method} {path} failed: {e!r}") from e

    @staticmethod
    def _decode(body: bytes, model: Type[E], path: str) -> E:
        """Parse a response body into its envelope model"""
        try:
            envelope = model.model_validate_json(body)
        except ValidationError as e:
            raise DecodeError(
                f"Malformed response from {path}",
                details={"errors": e.errors(include_url=False)}
            ) from e

        if envelope.status == "error":
            raise ApiError(f"{path}: {envelope.message or 'error status'}")
        return envelope

    async def list_tickets(self, start: int, limit: int) -> TicketListResponse:
        """
        Fetch one page of tickets, newest first

        Args:
            start: Offset of the first ticket
            limit: Page size

        Returns:
            Envelope with the page data and the total ticket count
        """
        params = {
            "order_direction": "desc",
            "start": start,
            "limit": limit
        }
        body = await self.request("GET", TICKETS_PATH, params=params)
        return self._decode(body, TicketListResponse, TICKETS_PATH)

    async def fetch_all_tickets(self) -> List[Ticket]:
        """
        Fetch every ticket, following pagination until the reported count

        The count of each page replaces the previous one, so tickets created
        or removed while paginating do not stall the loop.

        Returns:
            List of all tickets
        """
        tickets: List[Ticket] = []
        start = 0

        while True:
            page = await self.list_tickets(start, self.page_size)
            tickets.extend(page.data)
            logger.debug(
                f"Fetched tickets start={start}: {len(page.data)} "
                f"(total: {len(tickets)}/{page.count})"
            )

            if len(tickets) >= page.count or not page.data:
                break

            start += self.page_size

        logger.info(f"Fetched {len(tickets)} tickets")
        return tickets

    async def _fetch_organization(self, organization_id: int) -> Organization:
        path = ORGANISATION_PATH.format(id=organization_id)
        body = await self.request("GET", path)
        envelope = self._decode(body, OrganizationResponse, path)
        if envelope.data is None:
            raise ApiError(f"{path}: response without data")
        return envelope.data

    async def get_organization(self, organization_id: int) -> Organization:
        """
        Get an organisation by ID (cached)

        Args:
            organization_id: Non-zero organisation ID

        Returns:
            Organisation
        """
        return await self.organizations.get_or_fetch(organization_id, self._fetch_organization)

    async def _fetch_custom_field(self, field_id: int) -> CustomFieldDefinition:
        path = CUSTOM_FIELD_PATH.format(id=field_id)
        body = await self.request("GET", path)
        envelope = self._decode(body, CustomFieldResponse, path)
        if envelope.data is None:
            raise ApiError(f"{path}: response without data")
        return envelope.data

    async def get_custom_field(self, field_id: int) -> CustomFieldDefinition:
        """
        Get a ticket custom field definition by ID (cached)

        Args:
            field_id: Custom field ID

        Returns:
            Custom field definition
        """
        return await self.custom_fields.get_or_fetch(field_id, self._fetch_custom_field)
