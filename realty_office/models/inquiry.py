"""Customer inquiry models."""

from enum import Enum
from pydantic import BaseModel, Field


class InquirySource(str, Enum):
    """Channel the inquiry came through."""
    WEBSITE = "website"
    REFERRAL = "referral"
    WALK_IN = "walkIn"
    PHONE = "phone"
    SOCIAL_MEDIA = "socialMedia"


class InquiryStatus(str, Enum):
    """Follow-up state of an inquiry."""
    NEW = "new"
    IN_PROGRESS = "inProgress"
    CLOSED = "closed"
    FOLLOW_UP = "followUp"


class InquiryDraft(BaseModel):
    """Caller-supplied fields for a new inquiry."""
    property_id: str = Field(..., description="Property the customer asked about")
    customer_name: str = Field(..., description="Customer name")
    contact_info: str = Field(..., description="Customer phone or email")
    source: InquirySource
    assigned_agent: str = Field(..., description="Principal of the responsible agent")
    notes: str = Field(default="", description="Free-form notes")


class InquiryUpdate(BaseModel):
    """Replacement fields for an existing inquiry (property is fixed)."""
    customer_name: str
    contact_info: str
    source: InquirySource
    status: InquiryStatus
    assigned_agent: str
    notes: str = ""


class Inquiry(InquiryDraft):
    """Customer inquiry about a property."""
    id: str = Field(..., description="Derived from property, customer and creation time")
    status: InquiryStatus = Field(default=InquiryStatus.NEW, description="Follow-up state")
    created_at: int = Field(..., description="Creation time (ns since epoch)")
    updated_at: int = Field(..., description="Last update time (ns since epoch)")
