"""Entity store - keyed collections for agents, properties, inquiries and profiles."""

import itertools
import time
from typing import Optional, TypeVar

from pydantic import BaseModel

from realty_office.models.agent import Agent
from realty_office.models.inquiry import Inquiry
from realty_office.models.profile import UserProfile
from realty_office.models.property import Location, Property
from realty_office.utils.errors import DuplicateEntityError
from realty_office.utils.logging import get_structured_logger

logger = get_structured_logger(__name__)

RecordT = TypeVar("RecordT", bound=BaseModel)


class StrictClock:
    """Nanosecond wall clock that never returns the same value twice."""
    
    def __init__(self):
        self._last = 0
    
    def now(self) -> int:
        current = time.time_ns()
        if current <= self._last:
            current = self._last + 1
        self._last = current
        return current


def generate_property_id(location: Location, price: int, created_at: int) -> str:
    """Derive a property ID from its location, price and creation time."""
    return "-".join([
        location.city,
        location.suburb,
        location.area,
        location.road_name,
        str(price),
        str(created_at),
    ])


def generate_inquiry_id(property_id: str, customer_name: str, created_at: int) -> str:
    """Derive an inquiry ID from its property, customer and creation time."""
    return f"{property_id}-{customer_name}-{created_at}"


class Collection:
    """
    Records keyed by ID with a stable enumeration order.
    
    Enumeration sorts by created_at, breaking ties by insertion sequence,
    so the order never depends on dict iteration.
    """
    
    def __init__(self, kind: str):
        self.kind = kind
        self._records: dict[str, BaseModel] = {}
        self._sequence: dict[str, int] = {}
        self._counter = itertools.count()
    
    def __contains__(self, record_id: str) -> bool:
        return record_id in self._records
    
    def __len__(self) -> int:
        return len(self._records)
    
    def insert(self, record_id: str, record: BaseModel) -> None:
        if record_id in self._records:
            raise DuplicateEntityError(f"{self.kind} '{record_id}' already exists")
        self._records[record_id] = record
        self._sequence[record_id] = next(self._counter)
    
    def replace(self, record_id: str, record: BaseModel) -> None:
        """Swap in a new version of an existing record, keeping its position."""
        if record_id not in self._records:
            raise KeyError(record_id)
        self._records[record_id] = record
    
    def get(self, record_id: str) -> Optional[BaseModel]:
        return self._records.get(record_id)
    
    def values(self) -> list:
        """Records in stable enumeration order."""
        # Profiles carry no created_at and fall back to save order
        ordered = sorted(
            self._records.items(),
            key=lambda item: (getattr(item[1], "created_at", 0), self._sequence[item[0]]),
        )
        return [record for _, record in ordered]
    
    def clear(self) -> None:
        self._records = {}
        self._sequence = {}
        self._counter = itertools.count()


class EntityStore:
    """Single owner of the four entity collections."""
    
    def __init__(self, clock: Optional[StrictClock] = None):
        self.clock = clock or StrictClock()
        self.agents = Collection("Agent")
        self.properties = Collection("Property")
        self.inquiries = Collection("Inquiry")
        self.profiles = Collection("UserProfile")
    
    def now(self) -> int:
        return self.clock.now()
    
    # Agents
    
    def get_agent(self, agent_id: str) -> Optional[Agent]:
        return self.agents.get(agent_id)
    
    def is_valid_active_agent(self, agent_id: str) -> bool:
        agent = self.agents.get(agent_id)
        return agent is not None and agent.active
    
    # Properties
    
    def get_property(self, property_id: str) -> Optional[Property]:
        return self.properties.get(property_id)
    
    # Inquiries
    
    def get_inquiry(self, inquiry_id: str) -> Optional[Inquiry]:
        return self.inquiries.get(inquiry_id)
    
    # Profiles
    
    def get_profile(self, principal: str) -> Optional[UserProfile]:
        return self.profiles.get(principal)
    
    def save_profile(self, principal: str, profile: UserProfile) -> None:
        if principal in self.profiles:
            self.profiles.replace(principal, profile)
        else:
            self.profiles.insert(principal, profile)
    
    def clear(self) -> None:
        """Empty all four collections at once."""
        counts = {
            "agents": len(self.agents),
            "properties": len(self.properties),
            "inquiries": len(self.inquiries),
            "profiles": len(self.profiles),
        }
        self.agents.clear()
        self.properties.clear()
        self.inquiries.clear()
        self.profiles.clear()
        logger.info("Entity store cleared", **{f"{kind}_removed": count for kind, count in counts.items()})


def copy_record(record: RecordT) -> RecordT:
    """Detached copy handed to callers."""
    return record.model_copy(deep=True)
