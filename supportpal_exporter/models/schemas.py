"""
Pydantic models for the SupportPal REST API

Mirrors the subset of the SupportPal JSON payloads the exporter reads.
Missing or null fields decode to their zero value (0, "", []), matching
how the API omits fields that are not applicable to a ticket.
"""
from typing import Any, List, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


SINGLE_SELECT_FIELD_TYPE = 7

TimestampKind = Literal["created", "updated", "deleted", "resolved"]


class ApiModel(BaseModel):
    """Base model: ignore unknown keys, treat null as absent"""
    model_config = ConfigDict(extra="ignore", frozen=True)

    @model_validator(mode="before")
    @classmethod
    def drop_nulls(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return {key: value for key, value in data.items() if value is not None}
        return data


# ============================================================================
# Reference data
# ============================================================================

class Organization(ApiModel):
    """User organisation"""
    id: int = 0
    name: str = ""


class CustomFieldOption(ApiModel):
    """Option of a single-select custom field"""
    id: int = 0
    value: str = ""


class CustomFieldDefinition(ApiModel):
    """
    Ticket custom field definition

    Attributes:
        id: Field identifier
        name: Display name, normalized into a label name
        type: Field type code (7 = single-select option list)
        options: Ordered options for option-list types
    """
    id: int = 0
    name: str = ""
    type: int = 0
    options: List[CustomFieldOption] = Field(default_factory=list)

    @property
    def is_single_select(self) -> bool:
        return self.type == SINGLE_SELECT_FIELD_TYPE

    def option_value(self, raw: str) -> str | None:
        """Display value of the option whose id matches a raw stored value"""
        try:
            option_id = int(raw)
        except ValueError:
            return None

        for option in self.options:
            if option.id == option_id:
                return option.value
        return None


# ============================================================================
# Tickets
# ============================================================================

class TicketStatus(ApiModel):
    id: int = 0
    name: str = ""


class TicketPriority(ApiModel):
    id: int = 0
    name: str = ""


class TicketUser(ApiModel):
    formatted_name: str = ""
    organisation_id: int = 0


class CustomFieldValue(ApiModel):
    """Value of a custom field stored on a ticket"""
    id: int = 0
    field_id: int = 0
    value: str = ""

    @field_validator("value", mode="before")
    @classmethod
    def coerce_value(cls, value: Any) -> str:
        return value if isinstance(value, str) else str(value)


class Ticket(ApiModel):
    """
    Snapshot of a SupportPal ticket

    Timestamps are Unix epoch seconds; 0 means "not set".
    """
    id: int = 0
    subject: str = ""
    status: TicketStatus = Field(default_factory=TicketStatus)
    priority: TicketPriority = Field(default_factory=TicketPriority)
    user: TicketUser = Field(default_factory=TicketUser)
    created_at: int = 0
    updated_at: int = 0
    deleted_at: int = 0
    resolved_time: int = 0
    operator_url: str = ""
    frontend_url: str = ""
    customfields: List[CustomFieldValue] = Field(default_factory=list)

    def timestamps(self) -> dict[TimestampKind, int]:
        """Gauge values to publish for this ticket, keyed by timestamp kind"""
        values: dict[TimestampKind, int] = {}
        if self.deleted_at:
            values["deleted"] = self.deleted_at
        if self.created_at:
            values["created"] = self.created_at
        values["updated"] = self.updated_at or self.created_at
        if self.resolved_time:
            values["resolved"] = self.resolved_time
        return values


# ============================================================================
# Response envelopes
# ============================================================================

class ApiEnvelope(ApiModel):
    """Common SupportPal response wrapper"""
    status: str = ""
    message: str = ""


class TicketListResponse(ApiEnvelope):
    """Paginated ticket listing"""
    count: int = 0
    data: List[Ticket] = Field(default_factory=list)


class OrganizationResponse(ApiEnvelope):
    data: Organization | None = None


class CustomFieldResponse(ApiEnvelope):
    data: CustomFieldDefinition | None = None
