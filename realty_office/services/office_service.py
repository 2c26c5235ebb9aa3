"""Office service - authorization-gated operations over the entity store.

Every public method takes the caller principal first, resolves the caller's
effective role from the current agent record, and runs as one serialized
transaction under the service lock. Callers only ever receive copies.
"""

import threading
from functools import wraps
from typing import Callable, Optional

from realty_office.models.agent import Agent, Role
from realty_office.models.analytics import (
    CombinedAnalytics,
    ConfigurationDistribution,
    FurnishingDistribution,
)
from realty_office.models.inquiry import Inquiry, InquiryDraft, InquiryStatus, InquiryUpdate
from realty_office.models.profile import UserProfile
from realty_office.models.property import (
    Category,
    Configuration,
    Property,
    PropertyDraft,
    PropertyStatus,
    PropertyType,
    PropertyUpdate,
)
from realty_office.models.search import AdvancedFilter, SearchCriteria
from realty_office.services import analytics, property_search, role_policy
from realty_office.services.access_control import AccessControl, UserRole
from realty_office.services.entity_store import (
    EntityStore,
    copy_record,
    generate_inquiry_id,
    generate_property_id,
)
from realty_office.utils.errors import (
    InvalidReferenceError,
    NotFoundError,
    RealtyOfficeError,
    UnauthorizedError,
)
from realty_office.utils.logging import (
    correlation_context,
    get_structured_logger,
    log_timing,
    mask_principal,
    sanitize_text,
)

logger = get_structured_logger(__name__)


def operation(func: Callable) -> Callable:
    """Run a public operation as one serialized, logged transaction."""
    op_name = func.__name__

    @wraps(func)
    def wrapper(self, caller: str, *args, **kwargs):
        with self._lock, correlation_context():
            with log_timing(op_name, logger=logger, caller=mask_principal(caller)):
                try:
                    return func(self, caller, *args, **kwargs)
                except RealtyOfficeError as e:
                    logger.warning(
                        "Operation rejected",
                        operation=op_name,
                        caller=mask_principal(caller),
                        error_kind=e.kind.value,
                        error=e.message
                    )
                    raise

    return wrapper


class RealtyOffice:
    """Agents, listings and inquiries of one office, behind the role policy."""

    def __init__(
        self,
        access_control: Optional[AccessControl] = None,
        store: Optional[EntityStore] = None,
    ):
        self.access_control = access_control or AccessControl()
        self.store = store or EntityStore()
        self._lock = threading.RLock()

    # Authorization helpers

    def _effective_role(self, caller: str) -> Optional[Role]:
        """Role derived from the current records; never cached."""
        if self.access_control.is_admin(caller):
            return Role.ADMIN
        agent = self.store.get_agent(caller)
        if agent is None or not agent.active:
            return None
        return agent.role

    def _is_administrator(self, caller: str) -> bool:
        return self._effective_role(caller) == Role.ADMIN

    def _require(self, caller: str, check: Callable[[Optional[Role]], bool], action: str) -> Optional[Role]:
        if not self.access_control.has_base_access(caller):
            raise UnauthorizedError(f"Unauthorized: caller has no access (attempted to {action})")
        role = self._effective_role(caller)
        if not check(role):
            raise UnauthorizedError(f"Unauthorized: role does not permit this action ({action})")
        return role

    def _require_admin(self, caller: str, action: str) -> None:
        if not self.access_control.has_base_access(caller):
            raise UnauthorizedError(f"Unauthorized: caller has no access (attempted to {action})")
        if not self._is_administrator(caller):
            raise UnauthorizedError(f"Unauthorized: only administrators can {action}")

    def _require_valid_active_agent(self, agent_id: str) -> None:
        if not self.store.is_valid_active_agent(agent_id):
            raise InvalidReferenceError(f"Agent '{agent_id}' does not exist or is not active")

    def _visible_inquiries(self, caller: str, role: Optional[Role]) -> list[Inquiry]:
        inquiries = self.store.inquiries.values()
        if role_policy.can_manage_all_inquiries(role):
            return inquiries
        return [inquiry for inquiry in inquiries if inquiry.assigned_agent == caller]

    # Identity gate

    @operation
    def initialize_access_control(self, caller: str) -> UserRole:
        return self.access_control.initialize(caller)

    @operation
    def assign_caller_user_role(self, caller: str, user: str, role: UserRole) -> None:
        self.access_control.assign_role(caller, user, role)

    @operation
    def get_caller_user_role(self, caller: str) -> UserRole:
        return self.access_control.get_user_role(caller)

    @operation
    def is_caller_admin(self, caller: str) -> bool:
        return self.access_control.is_admin(caller)

    # Profiles

    @operation
    def get_caller_user_profile(self, caller: str) -> Optional[UserProfile]:
        self._require(caller, lambda role: True, "view own profile")
        profile = self.store.get_profile(caller)
        return copy_record(profile) if profile else None

    @operation
    def get_user_profile(self, caller: str, user: str) -> Optional[UserProfile]:
        self._require(caller, lambda role: True, "view profiles")
        if caller != user and not self._is_administrator(caller):
            raise UnauthorizedError("Unauthorized: can only view your own profile")
        profile = self.store.get_profile(user)
        return copy_record(profile) if profile else None

    @operation
    def save_caller_user_profile(self, caller: str, profile: UserProfile) -> None:
        self._require(caller, lambda role: True, "save profile")
        self.store.save_profile(caller, copy_record(profile))
        logger.info("Profile saved", caller=mask_principal(caller))

    @operation
    def get_all_user_profiles(self, caller: str) -> list[UserProfile]:
        self._require_admin(caller, "list all profiles")
        return [copy_record(profile) for profile in self.store.profiles.values()]

    # Agents

    @operation
    def add_agent(self, caller: str, agent_id: str, name: str, contact_info: str, role: Role) -> None:
        self._require(caller, role_policy.can_manage_agents, "add agents")
        now = self.store.now()
        agent = Agent(
            id=agent_id,
            name=name,
            contact_info=contact_info,
            role=role,
            active=True,
            created_at=now,
            updated_at=now,
        )
        self.store.agents.insert(agent_id, agent)
        logger.info(
            "Agent added",
            agent_id=mask_principal(agent_id),
            agent_role=role.value
        )

    @operation
    def update_agent(self, caller: str, agent_id: str, name: str, contact_info: str, role: Role) -> None:
        self._require(caller, role_policy.can_manage_agents, "update agents")
        existing = self.store.get_agent(agent_id)
        if existing is None:
            raise NotFoundError("Agent", agent_id)
        updated = existing.model_copy(update={
            "name": name,
            "contact_info": contact_info,
            "role": role,
            "updated_at": self.store.now(),
        })
        self.store.agents.replace(agent_id, updated)
        logger.info(
            "Agent updated",
            agent_id=mask_principal(agent_id),
            agent_role=role.value,
            previous_role=existing.role.value
        )

    @operation
    def deactivate_agent(self, caller: str, agent_id: str) -> None:
        self._require(caller, role_policy.can_manage_agents, "deactivate agents")
        existing = self.store.get_agent(agent_id)
        if existing is None:
            raise NotFoundError("Agent", agent_id)
        self.store.agents.replace(
            agent_id,
            existing.model_copy(update={"active": False, "updated_at": self.store.now()}),
        )
        logger.info("Agent deactivated", agent_id=mask_principal(agent_id))

    @operation
    def get_agent(self, caller: str, agent_id: str) -> Agent:
        self._require(caller, role_policy.has_agent_role, "view agents")
        agent = self.store.get_agent(agent_id)
        if agent is None:
            raise NotFoundError("Agent", agent_id)
        return copy_record(agent)

    @operation
    def get_all_agents(self, caller: str) -> list[Agent]:
        self._require(caller, role_policy.has_agent_role, "view agents")
        return [copy_record(agent) for agent in self.store.agents.values()]

    # Properties

    @operation
    def add_property(self, caller: str, draft: PropertyDraft) -> str:
        self._require(caller, role_policy.can_manage_properties, "add properties")
        if self.store.get_agent(caller) is None:
            raise InvalidReferenceError("Properties must be listed by an existing agent")

        now = self.store.now()
        property_id = generate_property_id(draft.location, draft.price, now)
        prop = Property(
            **draft.model_dump(include=set(PropertyDraft.model_fields)),
            id=property_id,
            listed_by=caller,
            status=PropertyStatus.AVAILABLE,
            created_at=now,
            updated_at=now,
        )
        self.store.properties.insert(property_id, prop)
        logger.info(
            "Property added",
            property_id=property_id,
            listed_by=mask_principal(caller),
            category=draft.category.value,
            price=draft.price
        )
        return property_id

    @operation
    def update_property(self, caller: str, property_id: str, update: PropertyUpdate) -> None:
        self._require(caller, role_policy.can_manage_properties, "update properties")
        existing = self.store.get_property(property_id)
        if existing is None:
            raise NotFoundError("Property", property_id)
        if existing.listed_by != caller and not self._is_administrator(caller):
            raise UnauthorizedError("Unauthorized: can only update properties you listed")

        updated = Property(
            **update.model_dump(include=set(PropertyUpdate.model_fields)),
            id=existing.id,
            listed_by=existing.listed_by,
            created_at=existing.created_at,
            updated_at=self.store.now(),
        )
        self.store.properties.replace(property_id, updated)
        logger.info(
            "Property updated",
            property_id=property_id,
            status=update.status.value,
            previous_status=existing.status.value
        )

    def _viewable_properties(self, caller: str) -> list[Property]:
        self._require(caller, role_policy.can_view_properties, "view properties")
        return self.store.properties.values()

    @staticmethod
    def _copies(properties: list[Property]) -> list[Property]:
        return [copy_record(prop) for prop in properties]

    @operation
    def get_property(self, caller: str, property_id: str) -> Property:
        self._require(caller, role_policy.can_view_properties, "view properties")
        prop = self.store.get_property(property_id)
        if prop is None:
            raise NotFoundError("Property", property_id)
        return copy_record(prop)

    @operation
    def get_all_properties(self, caller: str) -> list[Property]:
        return self._copies(self._viewable_properties(caller))

    @operation
    def get_properties_by_category(self, caller: str, category: Category) -> list[Property]:
        return self._copies(
            [prop for prop in self._viewable_properties(caller) if prop.category == category]
        )

    @operation
    def get_properties_by_property_type(self, caller: str, property_type: PropertyType) -> list[Property]:
        return self._copies(
            [prop for prop in self._viewable_properties(caller) if prop.property_type == property_type]
        )

    @operation
    def get_properties_by_category_and_type(
        self, caller: str, category: Category, property_type: PropertyType
    ) -> list[Property]:
        return self._copies([
            prop for prop in self._viewable_properties(caller)
            if prop.category == category and prop.property_type == property_type
        ])

    @operation
    def filter_properties_by_configuration(self, caller: str, configuration: Configuration) -> list[Property]:
        return self._copies(
            [prop for prop in self._viewable_properties(caller) if prop.configuration == configuration]
        )

    @operation
    def filter_properties_by_category_and_config(
        self, caller: str, category: Category, configuration: Configuration
    ) -> list[Property]:
        return self._copies([
            prop for prop in self._viewable_properties(caller)
            if prop.category == category and prop.configuration == configuration
        ])

    @operation
    def search_and_filter_properties(self, caller: str, criteria: SearchCriteria) -> list[Property]:
        matches = property_search.search_properties(self._viewable_properties(caller), criteria)
        logger.debug("Simple search evaluated", matches=len(matches))
        return self._copies(matches)

    @operation
    def advanced_filter_properties(self, caller: str, advanced_filter: AdvancedFilter) -> list[Property]:
        matches = property_search.advanced_filter(self._viewable_properties(caller), advanced_filter)
        logger.debug("Advanced filter evaluated", matches=len(matches))
        return self._copies(matches)

    @operation
    def get_all_cities(self, caller: str) -> list[str]:
        return property_search.cities(self._viewable_properties(caller))

    @operation
    def get_suburbs_for_city(self, caller: str, city: str) -> list[str]:
        return property_search.suburbs_for_city(self._viewable_properties(caller), city)

    @operation
    def get_areas_for_suburb(self, caller: str, city: str, suburb: str) -> list[str]:
        return property_search.areas_for_suburb(self._viewable_properties(caller), city, suburb)

    # Inquiries

    @operation
    def add_inquiry(self, caller: str, draft: InquiryDraft) -> str:
        role = self._require(caller, role_policy.can_manage_inquiries, "add inquiries")
        if self.store.get_property(draft.property_id) is None:
            raise NotFoundError("Property", draft.property_id)
        self._require_valid_active_agent(draft.assigned_agent)
        if draft.assigned_agent != caller and not role_policy.can_assign_to_other_agents(role):
            raise UnauthorizedError("Unauthorized: can only assign inquiries to yourself")

        now = self.store.now()
        inquiry_id = generate_inquiry_id(draft.property_id, draft.customer_name, now)
        inquiry = Inquiry(
            **draft.model_dump(include=set(InquiryDraft.model_fields)),
            id=inquiry_id,
            status=InquiryStatus.NEW,
            created_at=now,
            updated_at=now,
        )
        self.store.inquiries.insert(inquiry_id, inquiry)
        logger.info(
            "Inquiry added",
            inquiry_id=inquiry_id,
            property_id=draft.property_id,
            assigned_agent=mask_principal(draft.assigned_agent),
            source=draft.source.value,
            notes_preview=sanitize_text(draft.notes, max_length=100)
        )
        return inquiry_id

    @operation
    def update_inquiry(self, caller: str, inquiry_id: str, update: InquiryUpdate) -> None:
        role = self._require(caller, role_policy.can_manage_inquiries, "update inquiries")
        existing = self.store.get_inquiry(inquiry_id)
        if existing is None:
            raise NotFoundError("Inquiry", inquiry_id)
        if existing.assigned_agent != caller and not role_policy.can_manage_all_inquiries(role):
            raise UnauthorizedError("Unauthorized: can only update inquiries assigned to you")
        self._require_valid_active_agent(update.assigned_agent)
        if update.assigned_agent != caller and not role_policy.can_assign_to_other_agents(role):
            raise UnauthorizedError("Unauthorized: can only assign inquiries to yourself")

        updated = Inquiry(
            **update.model_dump(include=set(InquiryUpdate.model_fields)),
            id=existing.id,
            property_id=existing.property_id,
            created_at=existing.created_at,
            updated_at=self.store.now(),
        )
        self.store.inquiries.replace(inquiry_id, updated)
        logger.info(
            "Inquiry updated",
            inquiry_id=inquiry_id,
            status=update.status.value,
            assigned_agent=mask_principal(update.assigned_agent),
            reassigned=update.assigned_agent != existing.assigned_agent
        )

    @operation
    def get_inquiry(self, caller: str, inquiry_id: str) -> Inquiry:
        role = self._require(caller, role_policy.can_manage_inquiries, "view inquiries")
        inquiry = self.store.get_inquiry(inquiry_id)
        if inquiry is None:
            raise NotFoundError("Inquiry", inquiry_id)
        if inquiry.assigned_agent != caller and not role_policy.can_manage_all_inquiries(role):
            raise UnauthorizedError("Unauthorized: can only view inquiries assigned to you")
        return copy_record(inquiry)

    @operation
    def get_all_inquiries(self, caller: str) -> list[Inquiry]:
        role = self._require(caller, role_policy.can_manage_inquiries, "view inquiries")
        return [copy_record(inquiry) for inquiry in self._visible_inquiries(caller, role)]

    @operation
    def get_inquiries_by_agent(self, caller: str, agent_id: str) -> list[Inquiry]:
        role = self._require(caller, role_policy.can_manage_inquiries, "view inquiries")
        if agent_id != caller and not role_policy.can_manage_all_inquiries(role):
            raise UnauthorizedError("Unauthorized: can only view inquiries assigned to you")
        return [
            copy_record(inquiry)
            for inquiry in self.store.inquiries.values()
            if inquiry.assigned_agent == agent_id
        ]

    @operation
    def get_inquiries_by_property(self, caller: str, property_id: str) -> list[Inquiry]:
        role = self._require(caller, role_policy.can_manage_inquiries, "view inquiries")
        return [
            copy_record(inquiry)
            for inquiry in self._visible_inquiries(caller, role)
            if inquiry.property_id == property_id
        ]

    # Analytics

    def _analytics_scope(self, caller: str) -> list[Property]:
        """All properties for administrators, otherwise the caller's own listings."""
        self._require(caller, role_policy.can_access_analytics, "access analytics")
        properties = self.store.properties.values()
        if self._is_administrator(caller):
            return properties
        return [prop for prop in properties if prop.listed_by == caller]

    @operation
    def get_configuration_distribution(self, caller: str) -> list[ConfigurationDistribution]:
        return analytics.configuration_distribution(self._analytics_scope(caller))

    @operation
    def get_furnishing_distribution(self, caller: str) -> list[FurnishingDistribution]:
        return analytics.furnishing_distribution(self._analytics_scope(caller))

    @operation
    def get_combined_analytics(self, caller: str) -> CombinedAnalytics:
        scope = self._analytics_scope(caller)
        logger.debug("Aggregating analytics", properties_in_scope=len(scope))
        return analytics.combined_analytics(scope)

    # Reset

    @operation
    def reset_to_fresh_draft(self, caller: str) -> None:
        self._require(caller, role_policy.can_reset_data, "reset application data")
        self.store.clear()
        logger.warning("Application data reset", caller=mask_principal(caller))
