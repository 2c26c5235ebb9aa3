"""Role policy - capability matrix for office roles.

Pure lookups only: the caller's effective role is resolved elsewhere and
passed in, with None standing for "no usable role" (no agent record, or
an inactive one).
"""

from enum import Enum
from typing import Optional

from realty_office.models.agent import Role


class Capability(str, Enum):
    """Actions gated by role."""
    MANAGE_PROPERTIES = "manage_properties"
    VIEW_PROPERTIES = "view_properties"
    ACCESS_ANALYTICS = "access_analytics"
    MANAGE_INQUIRIES = "manage_inquiries"
    MANAGE_ALL_INQUIRIES = "manage_all_inquiries"
    ASSIGN_TO_OTHER_AGENTS = "assign_to_other_agents"
    MANAGE_AGENTS = "manage_agents"
    RESET_DATA = "reset_data"


CAPABILITY_MATRIX: dict[Role, frozenset[Capability]] = {
    Role.ADMIN: frozenset(Capability),
    Role.AGENT: frozenset({
        Capability.MANAGE_PROPERTIES,
        Capability.VIEW_PROPERTIES,
        Capability.ACCESS_ANALYTICS,
        Capability.MANAGE_INQUIRIES,
        Capability.MANAGE_ALL_INQUIRIES,
        Capability.ASSIGN_TO_OTHER_AGENTS,
    }),
    Role.JUNIOR_AGENT: frozenset({
        Capability.MANAGE_PROPERTIES,
        Capability.VIEW_PROPERTIES,
        Capability.ACCESS_ANALYTICS,
        Capability.MANAGE_INQUIRIES,
        Capability.ASSIGN_TO_OTHER_AGENTS,
    }),
    # Assistants only ever see inquiries assigned to themselves
    Role.ASSISTANT: frozenset({
        Capability.VIEW_PROPERTIES,
        Capability.MANAGE_INQUIRIES,
    }),
}


def is_allowed(role: Optional[Role], capability: Capability) -> bool:
    """Check whether a role holds a capability."""
    if role is None:
        return False
    return capability in CAPABILITY_MATRIX[role]


def has_agent_role(role: Optional[Role]) -> bool:
    """Any usable role at all; enough to read the agent roster."""
    return role is not None


def can_manage_properties(role: Optional[Role]) -> bool:
    return is_allowed(role, Capability.MANAGE_PROPERTIES)


def can_view_properties(role: Optional[Role]) -> bool:
    return is_allowed(role, Capability.VIEW_PROPERTIES)


def can_access_analytics(role: Optional[Role]) -> bool:
    return is_allowed(role, Capability.ACCESS_ANALYTICS)


def can_manage_inquiries(role: Optional[Role]) -> bool:
    return is_allowed(role, Capability.MANAGE_INQUIRIES)


def can_manage_all_inquiries(role: Optional[Role]) -> bool:
    return is_allowed(role, Capability.MANAGE_ALL_INQUIRIES)


def can_assign_to_other_agents(role: Optional[Role]) -> bool:
    return is_allowed(role, Capability.ASSIGN_TO_OTHER_AGENTS)


def can_manage_agents(role: Optional[Role]) -> bool:
    return is_allowed(role, Capability.MANAGE_AGENTS)


def can_reset_data(role: Optional[Role]) -> bool:
    return is_allowed(role, Capability.RESET_DATA)
