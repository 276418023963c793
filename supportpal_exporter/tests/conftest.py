"""
pytest configuration and shared fixtures
"""
import json
import os
from typing import Any, Dict
from unittest.mock import AsyncMock, MagicMock

import pytest

# Settings are read on first import of the application modules
os.environ.setdefault("API_BASE_PATH", "https://support.example.com/")
os.environ.setdefault("API_TOKEN", "test-token")

from supportpal_exporter.models.schemas import CustomFieldDefinition, Organization, Ticket  # noqa: E402
from supportpal_exporter.services.errors import ApiError  # noqa: E402

SAMPLE_EPOCH = 1653431774


def envelope(data: Any, count: int | None = None, status: str = "success") -> bytes:
    """Encode a SupportPal response body"""
    body: Dict[str, Any] = {"status": status, "message": "", "data": data}
    if count is not None:
        body["count"] = count
    return json.dumps(body).encode()


@pytest.fixture
def sample_ticket_data() -> Dict[str, Any]:
    """Raw ticket as returned by the ticket listing"""
    return {
        "id": 1,
        "subject": "One Subject",
        "status": {"id": 1, "name": "Open"},
        "priority": {"id": 1, "name": "Low"},
        "user": {"formatted_name": "One-User", "organisation_id": 5},
        "created_at": SAMPLE_EPOCH,
        "updated_at": SAMPLE_EPOCH,
        "deleted_at": 0,
        "resolved_time": None,
        "operator_url": "https://support.example.com/admin/ticket/view/1",
        "frontend_url": "https://support.example.com/en/tickets/view/1",
        "customfields": [],
    }


@pytest.fixture
def sample_ticket(sample_ticket_data) -> Ticket:
    return Ticket.model_validate(sample_ticket_data)


@pytest.fixture
def color_field() -> CustomFieldDefinition:
    """Single-select custom field"""
    return CustomFieldDefinition(
        id=10,
        name="Favourite Colour",
        type=7,
        options=[{"id": 1, "value": "Red"}, {"id": 2, "value": "Blue"}],
    )


@pytest.fixture
def fake_client():
    """
    SupportPal client double

    Tickets, organisations and custom fields are served from in-memory
    tables; set `client.tickets` to change the next listing.
    """
    client = MagicMock()
    client.tickets = []
    client.organization_table = {5: Organization(id=5, name="One Org")}
    client.field_table = {}

    async def fetch_all_tickets():
        return list(client.tickets)

    async def get_organization(organization_id):
        if organization_id not in client.organization_table:
            raise ApiError(f"organisation {organization_id} not found")
        return client.organization_table[organization_id]

    async def get_custom_field(field_id):
        if field_id not in client.field_table:
            raise ApiError(f"custom field {field_id} not found")
        return client.field_table[field_id]

    client.fetch_all_tickets = AsyncMock(side_effect=fetch_all_tickets)
    client.get_organization = AsyncMock(side_effect=get_organization)
    client.get_custom_field = AsyncMock(side_effect=get_custom_field)
    return client


@pytest.fixture
def make_envelope():
    """Factory for encoded SupportPal response bodies"""
    return envelope
