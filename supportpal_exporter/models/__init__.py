"""
Pydantic models for the SupportPal exporter
"""

from supportpal_exporter.models.schemas import (
    # Constants
    SINGLE_SELECT_FIELD_TYPE,
    TimestampKind,

    # Reference data
    Organization,
    CustomFieldOption,
    CustomFieldDefinition,

    # Tickets
    Ticket,
    TicketStatus,
    TicketPriority,
    TicketUser,
    CustomFieldValue,

    # Envelopes
    ApiEnvelope,
    TicketListResponse,
    OrganizationResponse,
    CustomFieldResponse,
)

__all__ = [
    # Constants
    "SINGLE_SELECT_FIELD_TYPE",
    "TimestampKind",

    # Reference data
    "Organization",
    "CustomFieldOption",
    "CustomFieldDefinition",

    # Tickets
    "Ticket",
    "TicketStatus",
    "TicketPriority",
    "TicketUser",
    "CustomFieldValue",

    # Envelopes
    "ApiEnvelope",
    "TicketListResponse",
    "OrganizationResponse",
    "CustomFieldResponse",
]
