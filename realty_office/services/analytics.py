"""Analytics aggregator - count, price and distribution reports over a set of properties."""

from typing import Optional, Sequence

from realty_office.models.analytics import (
    CategoryDistribution,
    CombinedAnalytics,
    ConfigurationDistribution,
    FurnishingDistribution,
    PriceRange,
    PricingHeatmap,
    PropertyDensity,
    PropertyTypeDistribution,
    RegionalDistribution,
    RegionType,
)
from realty_office.models.property import (
    Category,
    Configuration,
    Furnishing,
    Property,
    PropertyType,
)
from realty_office.utils.logging_config import OfficeConfig


# Report field names per configuration layout
CONFIGURATION_FIELDS = {
    Configuration.RK1: "rk1_count",
    Configuration.BHK1: "bhk1_count",
    Configuration.BHK1_5: "bhk1_5_count",
    Configuration.BHK2: "bhk2_count",
    Configuration.BHK2_5: "bhk2_5_count",
    Configuration.BHK3: "bhk3_count",
    Configuration.BHK3_5: "bhk3_5_count",
    Configuration.BHK4: "bhk4_count",
    Configuration.BHK5: "bhk5_count",
    Configuration.PENTHOUSE: "penthouse_count",
    Configuration.JODI_FLAT: "jodi_flat_count",
    Configuration.BUNGALOW: "bungalow_count",
    Configuration.INDEPENDENT_HOUSE: "independent_house_count",
    Configuration.DUPLEX: "duplex_count",
}

CATEGORY_FIELDS = {
    Category.RESALE: "resale_count",
    Category.RENTAL: "rental_count",
    Category.UNDER_CONSTRUCTION: "under_construction_count",
}

PROPERTY_TYPE_FIELDS = {
    PropertyType.RESIDENTIAL: "residential_count",
    PropertyType.COMMERCIAL: "commercial_count",
    PropertyType.INDUSTRIAL: "industrial_count",
}

FURNISHING_FIELDS = {
    Furnishing.UNFURNISHED: "unfurnished_count",
    Furnishing.SEMI_FURNISHED: "semi_furnished_count",
    Furnishing.FURNISHED: "furnished_count",
}


def configured_region() -> tuple[str, RegionType]:
    """The single region every report is labelled with."""
    return OfficeConfig.ANALYTICS_REGION, RegionType(OfficeConfig.ANALYTICS_REGION_TYPE)


def _count_by(properties: Sequence[Property], attribute: str, members) -> dict:
    counts = {member: 0 for member in members}
    for prop in properties:
        counts[getattr(prop, attribute)] += 1
    return counts


def average_price(properties: Sequence[Property]) -> Optional[int]:
    """Integer mean price, None for an empty set."""
    if not properties:
        return None
    return sum(prop.price for prop in properties) // len(properties)


def price_range(properties: Sequence[Property]) -> PriceRange:
    if not properties:
        return PriceRange()
    prices = [prop.price for prop in properties]
    return PriceRange(min_price=min(prices), max_price=max(prices))


def aggregate(properties: Sequence[Property]) -> RegionalDistribution:
    """Full aggregate of one region."""
    region, region_type = configured_region()
    return RegionalDistribution(
        region=region,
        region_type=region_type,
        property_count=len(properties),
        average_price=average_price(properties),
        price_range=price_range(properties),
        category_distribution=_count_by(properties, "category", Category),
        property_type_distribution=_count_by(properties, "property_type", PropertyType),
        configuration_distribution=_count_by(properties, "configuration", Configuration),
        furnishing_distribution=_count_by(properties, "furnishing", Furnishing),
    )


def _flatten(counts: dict, field_names: dict) -> dict:
    return {field_names[member]: count for member, count in counts.items()}


def category_report(regional: RegionalDistribution) -> CategoryDistribution:
    return CategoryDistribution(
        region=regional.region,
        region_type=regional.region_type,
        **_flatten(regional.category_distribution, CATEGORY_FIELDS),
    )


def property_type_report(regional: RegionalDistribution) -> PropertyTypeDistribution:
    return PropertyTypeDistribution(
        region=regional.region,
        region_type=regional.region_type,
        **_flatten(regional.property_type_distribution, PROPERTY_TYPE_FIELDS),
    )


def configuration_report(regional: RegionalDistribution) -> ConfigurationDistribution:
    return ConfigurationDistribution(
        region=regional.region,
        region_type=regional.region_type,
        **_flatten(regional.configuration_distribution, CONFIGURATION_FIELDS),
    )


def furnishing_report(regional: RegionalDistribution) -> FurnishingDistribution:
    return FurnishingDistribution(
        region=regional.region,
        region_type=regional.region_type,
        **_flatten(regional.furnishing_distribution, FURNISHING_FIELDS),
    )


def configuration_distribution(properties: Sequence[Property]) -> list[ConfigurationDistribution]:
    return [configuration_report(aggregate(properties))]


def furnishing_distribution(properties: Sequence[Property]) -> list[FurnishingDistribution]:
    return [furnishing_report(aggregate(properties))]


def combined_analytics(properties: Sequence[Property]) -> CombinedAnalytics:
    """Every view over the same aggregate (one configured region)."""
    regional = aggregate(properties)
    return CombinedAnalytics(
        property_density=[
            PropertyDensity(
                region=regional.region,
                region_type=regional.region_type,
                property_count=regional.property_count,
            )
        ],
        category_distribution=[category_report(regional)],
        property_type_distribution=[property_type_report(regional)],
        configuration_distribution=[configuration_report(regional)],
        furnishing_distribution=[furnishing_report(regional)],
        pricing_heatmap=[
            PricingHeatmap(
                region=regional.region,
                region_type=regional.region_type,
                average_price=regional.average_price,
                price_range=regional.price_range,
            )
        ],
        regional_distribution=[regional],
    )
