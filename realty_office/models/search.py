"""Property search and filter models."""

from typing import Optional
from pydantic import BaseModel, Field

from realty_office.models.property import (
    Category,
    Configuration,
    Furnishing,
    Location,
    PropertyStatus,
    PropertyType,
)


class SearchCriteria(BaseModel):
    """Simple search: every field is optional, absent fields always match."""
    city: Optional[str] = None
    suburb: Optional[str] = None
    area: Optional[str] = None
    road_name: Optional[str] = None
    category: Optional[Category] = None
    property_type: Optional[PropertyType] = None
    configuration: Optional[Configuration] = None
    furnishing: Optional[Furnishing] = None
    min_price: Optional[int] = Field(None, description="Inclusive lower price bound")
    max_price: Optional[int] = Field(None, description="Inclusive upper price bound")
    status: Optional[PropertyStatus] = None
    lat: Optional[float] = None
    lng: Optional[float] = None
    radius: Optional[float] = Field(None, description="Applied only together with lat and lng")


class CoordinateFilter(BaseModel):
    """Circle around a map point."""
    lat: float
    lng: float
    radius: float


class AdvancedFilter(BaseModel):
    """Multi-value filter: OR inside a dimension, AND across non-empty dimensions.

    An empty list places no constraint on its dimension.
    """
    locations: list[Location] = Field(default_factory=list)
    categories: list[Category] = Field(default_factory=list)
    property_types: list[PropertyType] = Field(default_factory=list)
    configurations: list[Configuration] = Field(default_factory=list)
    furnishings: list[Furnishing] = Field(default_factory=list)
    price_ranges: list[tuple[Optional[int], Optional[int]]] = Field(
        default_factory=list,
        description="(min, max) pairs, inclusive; None leaves that side open"
    )
    statuses: list[PropertyStatus] = Field(default_factory=list)
    coordinate_filters: list[CoordinateFilter] = Field(default_factory=list)
