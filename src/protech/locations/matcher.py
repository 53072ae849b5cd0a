"""Resolve a location hint to a catalog ServiceLocation.

A hint may be a catalog id, a free-form "City, ST" string, a zip code,
a (lat, lng) pair or nothing at all. Resolution always produces a
location: anything ambiguous or unknown lands on the default market.
"""

import logging
import math
import re
from collections.abc import Mapping
from urllib.parse import unquote

from protech.config import settings
from protech.core.types import Coordinates, ServiceLocation
from protech.locations.catalog import CATALOG, LocationCatalog
from protech.locations.zipcodes import is_county_placeholder, lookup_zip, normalize_zip

logger = logging.getLogger(__name__)

EARTH_RADIUS_KM = 6371.0

LocationHint = str | Coordinates | tuple[float, float] | None

# Platform geolocation headers (Vercel edge network)
GEO_CITY_HEADER = "x-vercel-ip-city"
GEO_REGION_HEADER = "x-vercel-ip-country-region"
GEO_COUNTRY_HEADER = "x-vercel-ip-country"
GEO_LAT_HEADER = "x-vercel-ip-latitude"
GEO_LNG_HEADER = "x-vercel-ip-longitude"
USER_LOCATION_ID_HEADER = "x-user-location-id"
USER_LOCATION_HEADER = "x-user-location"

# Neighbouring towns grouped under the flagship market they belong to
SERVICE_AREA_KEYWORDS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("Akron, OH", ("akron", "medina", "stow")),
    ("Cleveland, OH", ("cleveland", "strongsville", "parma")),
    ("Canton, OH", ("canton", "massillon")),
)

_WHITESPACE = re.compile(r"\s+")


def haversine_km(a: Coordinates, b: Coordinates) -> float:
    """Great-circle distance in kilometres."""
    lat1, lat2 = math.radians(a.lat), math.radians(b.lat)
    dlat = lat2 - lat1
    dlng = math.radians(b.lng - a.lng)
    h = math.sin(dlat / 2) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin(dlng / 2) ** 2
    return 2 * EARTH_RADIUS_KM * math.asin(min(1.0, math.sqrt(h)))


def find_nearest_location(
    lat: float, lng: float, catalog: LocationCatalog = CATALOG,
) -> ServiceLocation:
    """Closest catalog entry; ties go to the earlier entry."""
    try:
        point = Coordinates(float(lat), float(lng))
    except (TypeError, ValueError):
        return catalog.default_location()
    if not (math.isfinite(point.lat) and math.isfinite(point.lng)):
        return catalog.default_location()

    nearest: ServiceLocation | None = None
    best = math.inf
    for location in catalog:
        distance = haversine_km(point, location.coordinates)
        if distance < best:
            nearest, best = location, distance
    return nearest or catalog.default_location()


def resolve_by_name(text: str, catalog: LocationCatalog = CATALOG) -> ServiceLocation:
    """Exact city (or "City, ST") match, then containment, then default."""
    needle = _WHITESPACE.sub(" ", text).strip().lower()
    if not needle:
        return catalog.default_location()
    city_part = needle.split(",")[0].strip()

    for location in catalog:
        name = location.name.lower()
        if name == city_part or location.label.lower() == needle:
            return location
    for location in catalog:
        if location.name.lower() in needle:
            return location

    logger.debug("No catalog match for %r, using default", text)
    return catalog.default_location()


def resolve_by_zip(zip_code: str, catalog: LocationCatalog = CATALOG) -> ServiceLocation:
    """Zip table town first, then the catalog's own zip lists, then the prefix table."""
    record = lookup_zip(zip_code)
    if record is not None and not is_county_placeholder(record):
        return resolve_by_name(record.city, catalog)
    zip5 = normalize_zip(zip_code)
    if zip5 is not None:
        for location in catalog:
            if zip5 in location.zip_codes:
                return location
    if record is not None:
        return resolve_by_name(record.city, catalog)
    return catalog.default_location()


def resolve(hint: LocationHint = None, catalog: LocationCatalog = CATALOG) -> ServiceLocation:
    """Resolve any kind of hint. Never raises, never returns None."""
    if isinstance(hint, Coordinates):
        return find_nearest_location(hint.lat, hint.lng, catalog)
    if isinstance(hint, tuple) and len(hint) == 2:
        return find_nearest_location(hint[0], hint[1], catalog)
    if not isinstance(hint, str):
        return catalog.default_location()

    text = hint.strip()
    if not text:
        return catalog.default_location()
    if normalize_zip(text):
        return resolve_by_zip(text, catalog)
    by_id = catalog.get(text)
    if by_id is not None:
        return by_id
    return resolve_by_name(text, catalog)


def map_to_service_area(location_text: str | None) -> str:
    """Collapse a detected "City, ST" onto the nearest flagship market label."""
    lowered = (location_text or "").lower()
    for label, keywords in SERVICE_AREA_KEYWORDS:
        if any(keyword in lowered for keyword in keywords):
            return label
    return settings.fallback_location_name


def geolocation_from_headers(headers: Mapping[str, str]) -> dict[str, str | None]:
    city = headers.get(GEO_CITY_HEADER)
    return {
        "city": unquote(city) if city else None,
        "country": headers.get(GEO_COUNTRY_HEADER),
        "countryRegion": headers.get(GEO_REGION_HEADER),
    }


def resolve_from_headers(
    headers: Mapping[str, str], catalog: LocationCatalog = CATALOG,
) -> ServiceLocation:
    """Pick the visitor's location from request headers.

    Precedence: explicit location id, then the "City, ST" header set by
    the edge middleware, then raw platform geolocation, then default.
    """
    location_id = headers.get(USER_LOCATION_ID_HEADER)
    if location_id:
        location = catalog.get(location_id)
        if location is not None:
            return location

    user_location = headers.get(USER_LOCATION_HEADER)
    if user_location and user_location.strip().lower() != settings.fallback_location_name.lower():
        return resolve_by_name(unquote(user_location), catalog)

    geo = geolocation_from_headers(headers)
    if geo["city"] and geo["countryRegion"]:
        detected = f"{geo['city']}, {geo['countryRegion']}"
        mapped = map_to_service_area(detected)
        if mapped != settings.fallback_location_name:
            return resolve_by_name(mapped, catalog)
        if geo["countryRegion"].upper() == settings.served_state_code:
            return resolve_by_name(detected, catalog)
        return catalog.default_location()

    lat, lng = headers.get(GEO_LAT_HEADER), headers.get(GEO_LNG_HEADER)
    if lat and lng:
        return find_nearest_location(lat, lng, catalog)

    return catalog.default_location()
