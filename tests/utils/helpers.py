"""Test helper functions."""

from typing import Any

from realty_office.models.agent import Role
from realty_office.models.inquiry import InquiryDraft, InquirySource, InquiryStatus, InquiryUpdate
from realty_office.models.property import (
    Category,
    Configuration,
    Coordinates,
    Furnishing,
    Location,
    Property,
    PropertyDraft,
    PropertyStatus,
    PropertyType,
    PropertyUpdate,
)
from realty_office.services.office_service import RealtyOffice


ADMIN = "admin-principal"
AGENT_ALICE = "agent-alice"
AGENT_BOB = "agent-bob"
JUNIOR_JAY = "junior-jay"
ASSISTANT_ANN = "assistant-ann"
OUTSIDER = "outsider-principal"

STAFF = {
    AGENT_ALICE: ("Alice Rao", Role.AGENT),
    AGENT_BOB: ("Bob Shah", Role.AGENT),
    JUNIOR_JAY: ("Jay Mehta", Role.JUNIOR_AGENT),
    ASSISTANT_ANN: ("Ann Dsouza", Role.ASSISTANT),
}


def make_location(
    city: str = "Mumbai",
    suburb: str = "Andheri",
    area: str = "Lokhandwala",
    road_name: str = "Link Road",
) -> Location:
    return Location(city=city, suburb=suburb, area=area, road_name=road_name)


def make_property_draft(**overrides: Any) -> PropertyDraft:
    """Deterministic draft with sensible defaults."""
    fields = {
        "title": "2BHK near station",
        "description": "Sea-facing flat",
        "location": make_location(),
        "coordinates": Coordinates(lat=19.1, lng=72.8),
        "price": 10_000_000,
        "category": Category.RESALE,
        "property_type": PropertyType.RESIDENTIAL,
        "configuration": Configuration.BHK2,
        "furnishing": Furnishing.SEMI_FURNISHED,
        "images": ["blob://photos/front.jpg"],
    }
    fields.update(overrides)
    return PropertyDraft(**fields)


def make_property_update(draft: PropertyDraft, status: PropertyStatus = PropertyStatus.AVAILABLE, **overrides: Any) -> PropertyUpdate:
    fields = draft.model_dump()
    fields["status"] = status
    fields.update(overrides)
    return PropertyUpdate(**fields)


def make_property(property_id: str, created_at: int, listed_by: str = AGENT_ALICE, **overrides: Any) -> Property:
    """Stored property for pure search/analytics tests."""
    status = overrides.pop("status", PropertyStatus.AVAILABLE)
    draft = make_property_draft(**overrides)
    return Property(
        **draft.model_dump(),
        id=property_id,
        listed_by=listed_by,
        status=status,
        created_at=created_at,
        updated_at=created_at,
    )


def make_inquiry_draft(property_id: str, assigned_agent: str, **overrides: Any) -> InquiryDraft:
    fields = {
        "property_id": property_id,
        "customer_name": "Priya Nair",
        "contact_info": "priya@example.com",
        "source": InquirySource.WEBSITE,
        "assigned_agent": assigned_agent,
        "notes": "Wants a site visit on Saturday",
    }
    fields.update(overrides)
    return InquiryDraft(**fields)


def make_inquiry_update(assigned_agent: str, status: InquiryStatus = InquiryStatus.IN_PROGRESS, **overrides: Any) -> InquiryUpdate:
    fields = {
        "customer_name": "Priya Nair",
        "contact_info": "priya@example.com",
        "source": InquirySource.WEBSITE,
        "status": status,
        "assigned_agent": assigned_agent,
        "notes": "Visit booked",
    }
    fields.update(overrides)
    return InquiryUpdate(**fields)


def staff_office(office: RealtyOffice) -> RealtyOffice:
    """Register the admin and the standard staff roster."""
    office.initialize_access_control(ADMIN)
    for principal, (name, role) in STAFF.items():
        office.initialize_access_control(principal)
        office.add_agent(ADMIN, principal, name, f"{principal}@office.test", role)
    return office
