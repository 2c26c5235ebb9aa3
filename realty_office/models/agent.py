"""Agent model - office staff identified by their principal."""

from enum import Enum
from pydantic import BaseModel, Field


class Role(str, Enum):
    """Office roles (flat set, not a hierarchy)."""
    ADMIN = "admin"
    AGENT = "agent"
    JUNIOR_AGENT = "juniorAgent"
    ASSISTANT = "assistant"


class Agent(BaseModel):
    """Agent record keyed by the agent's principal."""
    id: str = Field(..., description="Agent principal")
    name: str = Field(..., description="Full name")
    contact_info: str = Field(..., description="Phone or email")
    role: Role = Field(..., description="Office role")
    active: bool = Field(default=True, description="Inactive agents hold no capabilities")
    created_at: int = Field(..., description="Creation time (ns since epoch)")
    updated_at: int = Field(..., description="Last update time (ns since epoch)")
