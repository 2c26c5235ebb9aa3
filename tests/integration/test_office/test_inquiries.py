"""Inquiry handling and scoping through the office service."""

import pytest

from realty_office.models.inquiry import InquiryStatus
from realty_office.utils.errors import ErrorKind
from tests.utils.assertions import assert_enumeration_order, assert_rejected
from tests.utils.factories import create_inquiry_draft
from tests.utils.helpers import (
    ADMIN,
    AGENT_ALICE,
    AGENT_BOB,
    ASSISTANT_ANN,
    JUNIOR_JAY,
    make_inquiry_draft,
    make_inquiry_update,
    make_property_draft,
)


@pytest.fixture
def property_id(staffed_office):
    return staffed_office.add_property(AGENT_ALICE, make_property_draft())


@pytest.fixture
def inquiry_office(staffed_office, property_id):
    """Inquiries assigned to Alice, Ann, Jay and Ann again, in that order."""
    staffed_office.add_inquiry(AGENT_ALICE, make_inquiry_draft(property_id, AGENT_ALICE, customer_name="C1"))
    staffed_office.add_inquiry(ASSISTANT_ANN, make_inquiry_draft(property_id, ASSISTANT_ANN, customer_name="C2"))
    staffed_office.add_inquiry(JUNIOR_JAY, make_inquiry_draft(property_id, JUNIOR_JAY, customer_name="C3"))
    staffed_office.add_inquiry(AGENT_BOB, make_inquiry_draft(property_id, ASSISTANT_ANN, customer_name="C4"))
    return staffed_office


@pytest.mark.integration
def test_add_inquiry_defaults(staffed_office, property_id):
    draft = create_inquiry_draft(property_id, AGENT_BOB)

    inquiry_id = staffed_office.add_inquiry(AGENT_BOB, draft)
    inquiry = staffed_office.get_inquiry(AGENT_BOB, inquiry_id)

    assert inquiry.status == InquiryStatus.NEW
    assert inquiry.customer_name == draft.customer_name
    assert inquiry.assigned_agent == AGENT_BOB
    assert inquiry_id == f"{property_id}-{draft.customer_name}-{inquiry.created_at}"


@pytest.mark.integration
def test_add_inquiry_unknown_property(staffed_office):
    assert_rejected(
        ErrorKind.NOT_FOUND,
        staffed_office.add_inquiry, AGENT_ALICE, make_inquiry_draft("missing", AGENT_ALICE),
    )


@pytest.mark.integration
def test_add_inquiry_unknown_agent(staffed_office, property_id):
    assert_rejected(
        ErrorKind.INVALID_REFERENCE,
        staffed_office.add_inquiry, AGENT_ALICE, make_inquiry_draft(property_id, "nobody"),
    )


@pytest.mark.integration
@pytest.mark.parametrize("caller", [ADMIN, AGENT_ALICE, JUNIOR_JAY, ASSISTANT_ANN])
def test_assigning_to_deactivated_agent_is_invalid(staffed_office, property_id, caller):
    staffed_office.deactivate_agent(ADMIN, AGENT_BOB)

    assert_rejected(
        ErrorKind.INVALID_REFERENCE,
        staffed_office.add_inquiry, caller, make_inquiry_draft(property_id, AGENT_BOB),
    )


@pytest.mark.integration
def test_assistant_can_only_self_assign(staffed_office, property_id):
    assert_rejected(
        ErrorKind.UNAUTHORIZED,
        staffed_office.add_inquiry, ASSISTANT_ANN, make_inquiry_draft(property_id, AGENT_ALICE),
    )
    assert staffed_office.get_all_inquiries(ADMIN) == []


@pytest.mark.integration
def test_junior_can_assign_to_others(staffed_office, property_id):
    inquiry_id = staffed_office.add_inquiry(JUNIOR_JAY, make_inquiry_draft(property_id, AGENT_ALICE))

    assert staffed_office.get_inquiry(AGENT_ALICE, inquiry_id).assigned_agent == AGENT_ALICE


@pytest.mark.integration
def test_assistant_sees_only_own_inquiries(inquiry_office):
    inquiries = inquiry_office.get_all_inquiries(ASSISTANT_ANN)

    assert [inquiry.customer_name for inquiry in inquiries] == ["C2", "C4"]
    assert all(inquiry.assigned_agent == ASSISTANT_ANN for inquiry in inquiries)
    assert_enumeration_order(inquiries)


@pytest.mark.integration
def test_junior_sees_only_own_inquiries(inquiry_office):
    assert [i.customer_name for i in inquiry_office.get_all_inquiries(JUNIOR_JAY)] == ["C3"]


@pytest.mark.integration
@pytest.mark.parametrize("caller", [ADMIN, AGENT_BOB])
def test_managers_see_all_inquiries(inquiry_office, caller):
    inquiries = inquiry_office.get_all_inquiries(caller)

    assert [inquiry.customer_name for inquiry in inquiries] == ["C1", "C2", "C3", "C4"]


@pytest.mark.integration
def test_get_inquiry_scoping(inquiry_office):
    alice_inquiry = inquiry_office.get_all_inquiries(AGENT_ALICE)[0]

    assert_rejected(ErrorKind.UNAUTHORIZED, inquiry_office.get_inquiry, ASSISTANT_ANN, alice_inquiry.id)
    assert inquiry_office.get_inquiry(AGENT_BOB, alice_inquiry.id).customer_name == "C1"
    assert_rejected(ErrorKind.NOT_FOUND, inquiry_office.get_inquiry, AGENT_BOB, "missing")


@pytest.mark.integration
def test_get_inquiries_by_agent(inquiry_office):
    assert [i.customer_name for i in inquiry_office.get_inquiries_by_agent(AGENT_BOB, ASSISTANT_ANN)] == ["C2", "C4"]
    assert [i.customer_name for i in inquiry_office.get_inquiries_by_agent(ASSISTANT_ANN, ASSISTANT_ANN)] == ["C2", "C4"]
    assert_rejected(ErrorKind.UNAUTHORIZED, inquiry_office.get_inquiries_by_agent, JUNIOR_JAY, AGENT_ALICE)


@pytest.mark.integration
def test_get_inquiries_by_property(inquiry_office, property_id):
    assert len(inquiry_office.get_inquiries_by_property(ADMIN, property_id)) == 4
    assert [i.customer_name for i in inquiry_office.get_inquiries_by_property(JUNIOR_JAY, property_id)] == ["C3"]
    assert inquiry_office.get_inquiries_by_property(ADMIN, "missing") == []


@pytest.mark.integration
def test_update_own_inquiry(inquiry_office):
    [own] = [i for i in inquiry_office.get_all_inquiries(ASSISTANT_ANN) if i.customer_name == "C2"]

    inquiry_office.update_inquiry(
        ASSISTANT_ANN, own.id,
        make_inquiry_update(ASSISTANT_ANN, InquiryStatus.FOLLOW_UP, customer_name="C2"),
    )

    updated = inquiry_office.get_inquiry(ASSISTANT_ANN, own.id)
    assert updated.status == InquiryStatus.FOLLOW_UP
    assert updated.property_id == own.property_id
    assert updated.created_at == own.created_at
    assert updated.updated_at > own.updated_at


@pytest.mark.integration
def test_assistant_cannot_reassign(inquiry_office):
    own = inquiry_office.get_all_inquiries(ASSISTANT_ANN)[0]

    assert_rejected(
        ErrorKind.UNAUTHORIZED,
        inquiry_office.update_inquiry, ASSISTANT_ANN, own.id, make_inquiry_update(AGENT_ALICE),
    )
    assert inquiry_office.get_inquiry(ASSISTANT_ANN, own.id).status == InquiryStatus.NEW


@pytest.mark.integration
def test_junior_cannot_update_others_inquiry(inquiry_office):
    alice_inquiry = inquiry_office.get_all_inquiries(AGENT_ALICE)[0]

    assert_rejected(
        ErrorKind.UNAUTHORIZED,
        inquiry_office.update_inquiry, JUNIOR_JAY, alice_inquiry.id, make_inquiry_update(JUNIOR_JAY),
    )


@pytest.mark.integration
def test_agent_reassigns_any_inquiry(inquiry_office):
    jay_inquiry = inquiry_office.get_all_inquiries(JUNIOR_JAY)[0]

    inquiry_office.update_inquiry(AGENT_BOB, jay_inquiry.id, make_inquiry_update(AGENT_ALICE))

    assert inquiry_office.get_all_inquiries(JUNIOR_JAY) == []
    assert inquiry_office.get_inquiry(AGENT_ALICE, jay_inquiry.id).assigned_agent == AGENT_ALICE


@pytest.mark.integration
def test_update_to_inactive_agent_invalid(inquiry_office):
    alice_inquiry = inquiry_office.get_all_inquiries(AGENT_ALICE)[0]
    inquiry_office.deactivate_agent(ADMIN, JUNIOR_JAY)

    assert_rejected(
        ErrorKind.INVALID_REFERENCE,
        inquiry_office.update_inquiry, AGENT_BOB, alice_inquiry.id, make_inquiry_update(JUNIOR_JAY),
    )


@pytest.mark.integration
def test_update_missing_inquiry(inquiry_office):
    assert_rejected(
        ErrorKind.NOT_FOUND,
        inquiry_office.update_inquiry, AGENT_BOB, "missing", make_inquiry_update(AGENT_BOB),
    )


@pytest.mark.integration
def test_deactivation_keeps_existing_assignments(inquiry_office):
    inquiry_office.deactivate_agent(ADMIN, ASSISTANT_ANN)

    by_agent = inquiry_office.get_inquiries_by_agent(ADMIN, ASSISTANT_ANN)

    assert [i.customer_name for i in by_agent] == ["C2", "C4"]


@pytest.mark.integration
def test_update_with_fetched_inquiry(inquiry_office):
    inquiry = inquiry_office.get_all_inquiries(AGENT_ALICE)[0]
    inquiry.status = InquiryStatus.CLOSED
    inquiry.property_id = "elsewhere"

    inquiry_office.update_inquiry(AGENT_ALICE, inquiry.id, inquiry)

    updated = inquiry_office.get_inquiry(AGENT_ALICE, inquiry.id)
    assert updated.status == InquiryStatus.CLOSED
    assert updated.property_id != "elsewhere"
    assert updated.created_at == inquiry.created_at
