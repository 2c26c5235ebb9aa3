"""Property search - simple criteria matching and advanced multi-value filtering.

All functions are pure: they take a sequence of properties in enumeration
order and return the matching subset in the same order.
"""

from typing import Callable, Iterable, Optional, Sequence

from realty_office.models.property import Coordinates, Location, Property
from realty_office.models.search import AdvancedFilter, SearchCriteria


def within_radius(center_lat: float, center_lng: float, radius: float, coordinates: Coordinates) -> bool:
    """
    Planar radius check in coordinate-degree space.

    Compares squared degree differences against radius squared, the same
    approximation the map filters have always used (not geodesic distance).
    """
    d_lat = center_lat - coordinates.lat
    d_lng = center_lng - coordinates.lng
    return d_lat * d_lat + d_lng * d_lng <= radius * radius


def within_price_bounds(price: int, min_price: Optional[int], max_price: Optional[int]) -> bool:
    """Inclusive bounds; None leaves a side open."""
    if min_price is not None and price < min_price:
        return False
    if max_price is not None and price > max_price:
        return False
    return True


def _optional_equals(expected, actual) -> bool:
    return expected is None or expected == actual


def matches_criteria(prop: Property, criteria: SearchCriteria) -> bool:
    """AND of every present criteria field."""
    location = prop.location
    if not (
        _optional_equals(criteria.city, location.city)
        and _optional_equals(criteria.suburb, location.suburb)
        and _optional_equals(criteria.area, location.area)
        and _optional_equals(criteria.road_name, location.road_name)
    ):
        return False

    if not (
        _optional_equals(criteria.category, prop.category)
        and _optional_equals(criteria.property_type, prop.property_type)
        and _optional_equals(criteria.configuration, prop.configuration)
        and _optional_equals(criteria.furnishing, prop.furnishing)
        and _optional_equals(criteria.status, prop.status)
    ):
        return False

    if not within_price_bounds(prop.price, criteria.min_price, criteria.max_price):
        return False

    # Radius only applies once the full circle is given
    if criteria.lat is not None and criteria.lng is not None and criteria.radius is not None:
        return within_radius(criteria.lat, criteria.lng, criteria.radius, prop.coordinates)

    return True


def search_properties(properties: Sequence[Property], criteria: SearchCriteria) -> list[Property]:
    return [prop for prop in properties if matches_criteria(prop, criteria)]


def _location_matches(prop: Property, location: Location) -> bool:
    return prop.location == location


def _matching_ids(
    properties: Iterable[Property],
    values: Sequence,
    predicate: Callable[[Property, object], bool],
) -> set[str]:
    """IDs of properties satisfying any value of one dimension."""
    return {
        prop.id
        for prop in properties
        if any(predicate(prop, value) for value in values)
    }


def advanced_filter(properties: Sequence[Property], flt: AdvancedFilter) -> list[Property]:
    """
    Intersect per-dimension matches by property ID.

    Within a dimension a property needs to satisfy any listed value; it must
    satisfy every non-empty dimension. Empty dimensions pass everything.
    """
    dimensions: list[tuple[Sequence, Callable[[Property, object], bool]]] = [
        (flt.locations, _location_matches),
        (flt.categories, lambda prop, value: prop.category == value),
        (flt.property_types, lambda prop, value: prop.property_type == value),
        (flt.configurations, lambda prop, value: prop.configuration == value),
        (flt.furnishings, lambda prop, value: prop.furnishing == value),
        (flt.price_ranges, lambda prop, bounds: within_price_bounds(prop.price, bounds[0], bounds[1])),
        (flt.statuses, lambda prop, value: prop.status == value),
        (
            flt.coordinate_filters,
            lambda prop, circle: within_radius(circle.lat, circle.lng, circle.radius, prop.coordinates),
        ),
    ]

    selected = {prop.id for prop in properties}
    for values, predicate in dimensions:
        if not values:
            continue
        selected &= _matching_ids(properties, values, predicate)
        if not selected:
            break

    return [prop for prop in properties if prop.id in selected]


def distinct_sorted(values: Iterable[str]) -> list[str]:
    """Unique non-empty values in alphabetical order."""
    return sorted({value for value in values if value})


def cities(properties: Sequence[Property]) -> list[str]:
    return distinct_sorted(prop.location.city for prop in properties)


def suburbs_for_city(properties: Sequence[Property], city: str) -> list[str]:
    return distinct_sorted(
        prop.location.suburb for prop in properties if prop.location.city == city
    )


def areas_for_suburb(properties: Sequence[Property], city: str, suburb: str) -> list[str]:
    return distinct_sorted(
        prop.location.area
        for prop in properties
        if prop.location.city == city and prop.location.suburb == suburb
    )
