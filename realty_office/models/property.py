"""Property listing models."""

from enum import Enum
from pydantic import BaseModel, Field


class Category(str, Enum):
    """Listing category."""
    RESALE = "resale"
    RENTAL = "rental"
    UNDER_CONSTRUCTION = "underConstruction"


class PropertyType(str, Enum):
    """Property usage type."""
    RESIDENTIAL = "residential"
    COMMERCIAL = "commercial"
    INDUSTRIAL = "industrial"


class Configuration(str, Enum):
    """Unit layout."""
    RK1 = "rk1"
    BHK1 = "bhk1"
    BHK1_5 = "bhk1_5"
    BHK2 = "bhk2"
    BHK2_5 = "bhk2_5"
    BHK3 = "bhk3"
    BHK3_5 = "bhk3_5"
    BHK4 = "bhk4"
    BHK5 = "bhk5"
    PENTHOUSE = "penthouse"
    JODI_FLAT = "jodiFlat"
    BUNGALOW = "bungalow"
    INDEPENDENT_HOUSE = "independentHouse"
    DUPLEX = "duplex"


class Furnishing(str, Enum):
    """Furnishing level."""
    UNFURNISHED = "unfurnished"
    SEMI_FURNISHED = "semiFurnished"
    FURNISHED = "furnished"


class PropertyStatus(str, Enum):
    """Listing status."""
    AVAILABLE = "available"
    SOLD = "sold"
    RENTED = "rented"
    UNDER_CONTRACT = "underContract"


class Location(BaseModel):
    """Postal location of a property."""
    city: str
    suburb: str
    area: str
    road_name: str


class Coordinates(BaseModel):
    """Map position in degrees."""
    lat: float
    lng: float


class PropertyDraft(BaseModel):
    """Caller-supplied fields for a new listing."""
    title: str = Field(..., description="Listing title")
    description: str = Field(default="", description="Listing description")
    location: Location
    coordinates: Coordinates
    price: int = Field(..., ge=0, description="Asking price or monthly rent")
    category: Category
    property_type: PropertyType
    configuration: Configuration
    furnishing: Furnishing
    images: list[str] = Field(default_factory=list, description="Opaque blob references, in display order")


class PropertyUpdate(PropertyDraft):
    """Replacement fields for an existing listing."""
    status: PropertyStatus


class Property(PropertyUpdate):
    """Real estate listing."""
    id: str = Field(..., description="Derived from location, price and creation time")
    listed_by: str = Field(..., description="Principal of the listing agent")
    status: PropertyStatus = Field(default=PropertyStatus.AVAILABLE, description="Listing status")
    created_at: int = Field(..., description="Creation time (ns since epoch)")
    updated_at: int = Field(..., description="Last update time (ns since epoch)")
