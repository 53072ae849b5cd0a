"""Parse page URLs into structured facets.

Service-detail pages live at
``/services/{category}/{system}/{service_type}/{item}/{location}`` and
location pages at ``/services/locations/{location}``.
"""

import re
from enum import Enum
from urllib.parse import unquote, urlparse

from protech.core.types import UrlFacets

SERVICE_DETAIL_PATTERN = re.compile(r"/services/[^/]+/[^/]+/[^/]+/[^/]+/[^/]+/?$")
LOCATION_MARKER = "/locations/"


class SitemapFilter(str, Enum):
    ALL = "all"
    LOCATIONS = "locations"
    SERVICE_DETAILS = "service-details"


def filter_mode_from_flags(locations: bool = False, service_details: bool = False) -> SitemapFilter:
    if locations and service_details:
        raise ValueError("Choose either locations or service-details filtering, not both")
    if locations:
        return SitemapFilter.LOCATIONS
    if service_details:
        return SitemapFilter.SERVICE_DETAILS
    return SitemapFilter.ALL


def _segments(url: str) -> list[str]:
    path = urlparse(url).path
    return [unquote(s) for s in path.split("/") if s]


def is_service_detail_url(url: str) -> bool:
    return bool(SERVICE_DETAIL_PATTERN.search(urlparse(url).path))


def is_location_url(url: str) -> bool:
    return LOCATION_MARKER in url


def parse_facets(url: str, mode: SitemapFilter = SitemapFilter.ALL) -> UrlFacets:
    """Facets for ``url``; empty facets when the mode doesn't use them."""
    if mode is SitemapFilter.ALL:
        return UrlFacets()

    parts = _segments(url)
    if mode is SitemapFilter.LOCATIONS:
        if "locations" in parts:
            idx = parts.index("locations")
            if idx + 1 < len(parts):
                return UrlFacets(location=parts[idx + 1])
        return UrlFacets()

    if "services" in parts:
        tail = parts[parts.index("services") + 1:]
        if len(tail) == 5:
            category, system, service_type, item, location = tail
            return UrlFacets(
                category=category,
                system=system,
                service_type=service_type,
                item=item,
                location=location,
            )
    return UrlFacets()
