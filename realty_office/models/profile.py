"""User profile model."""

from pydantic import BaseModel, Field


class UserProfile(BaseModel):
    """Self-managed profile, one per caller identity."""
    name: str = Field(..., description="Display name")
    contact_info: str = Field(..., description="Phone or email")
