"""Analytics report models."""

from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field

from realty_office.models.property import Category, Configuration, Furnishing, PropertyType


class RegionType(str, Enum):
    """Granularity of a reporting region."""
    CITY = "city"
    SUBURB = "suburb"
    AREA = "area"
    NEIGHBORHOOD = "neighborhood"
    ZONE = "zone"


class RegionReport(BaseModel):
    """Common header of every per-region report."""
    region: str
    region_type: RegionType


class PriceRange(BaseModel):
    """Observed price bounds; both absent when there are no properties."""
    min_price: Optional[int] = None
    max_price: Optional[int] = None


class CategoryDistribution(RegionReport):
    resale_count: int = 0
    rental_count: int = 0
    under_construction_count: int = 0


class PropertyTypeDistribution(RegionReport):
    residential_count: int = 0
    commercial_count: int = 0
    industrial_count: int = 0


class ConfigurationDistribution(RegionReport):
    rk1_count: int = 0
    bhk1_count: int = 0
    bhk1_5_count: int = 0
    bhk2_count: int = 0
    bhk2_5_count: int = 0
    bhk3_count: int = 0
    bhk3_5_count: int = 0
    bhk4_count: int = 0
    bhk5_count: int = 0
    penthouse_count: int = 0
    jodi_flat_count: int = 0
    bungalow_count: int = 0
    independent_house_count: int = 0
    duplex_count: int = 0


class FurnishingDistribution(RegionReport):
    unfurnished_count: int = 0
    semi_furnished_count: int = 0
    furnished_count: int = 0


class PropertyDensity(RegionReport):
    property_count: int = 0


class PricingHeatmap(RegionReport):
    average_price: Optional[int] = Field(None, description="Integer mean; absent for an empty region")
    price_range: PriceRange = Field(default_factory=PriceRange)


class RegionalDistribution(RegionReport):
    """Full aggregate for one region."""
    property_count: int = 0
    average_price: Optional[int] = None
    price_range: PriceRange = Field(default_factory=PriceRange)
    category_distribution: dict[Category, int] = Field(default_factory=dict)
    property_type_distribution: dict[PropertyType, int] = Field(default_factory=dict)
    configuration_distribution: dict[Configuration, int] = Field(default_factory=dict)
    furnishing_distribution: dict[Furnishing, int] = Field(default_factory=dict)


class CombinedAnalytics(BaseModel):
    """All analytics views, one entry per region."""
    property_density: list[PropertyDensity]
    category_distribution: list[CategoryDistribution]
    property_type_distribution: list[PropertyTypeDistribution]
    configuration_distribution: list[ConfigurationDistribution]
    furnishing_distribution: list[FurnishingDistribution]
    pricing_heatmap: list[PricingHeatmap]
    regional_distribution: list[RegionalDistribution]
