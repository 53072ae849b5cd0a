"""Service location catalog and slug helpers.

The catalog has two tiers: a handful of core markets with curated data,
and an expanded set generated from the zip table so every served town
gets its own page. Both are built once at import and never mutated.
"""

import logging
import re
from urllib.parse import unquote

from protech.config import settings
from protech.core.types import Coordinates, ServiceLocation
from protech.locations.zipcodes import ZIP_TO_LOCATION, is_county_placeholder

logger = logging.getLogger(__name__)

_NON_SLUG = re.compile(r"[^a-z0-9]+")

STATE_NAMES = {"OH": "Ohio"}

REGION_CENTER = Coordinates(lat=41.0, lng=-81.5)

CITY_COORDINATES: dict[str, Coordinates] = {
    "Akron": Coordinates(41.0814, -81.5190),
    "Cleveland": Coordinates(41.4993, -81.6944),
    "Canton": Coordinates(40.7989, -81.3784),
    "Wooster": Coordinates(40.8051, -81.9351),
    "Medina": Coordinates(41.1434, -81.8548),
    "Wadsworth": Coordinates(41.0258, -81.7298),
    "Barberton": Coordinates(41.0134, -81.6051),
    "Cuyahoga Falls": Coordinates(41.1339, -81.4845),
    "Stow": Coordinates(41.1595, -81.4401),
    "Tallmadge": Coordinates(41.1014, -81.4415),
    "Hudson": Coordinates(41.2400, -81.4404),
    "Seville": Coordinates(41.0128, -81.8615),
    "Brunswick": Coordinates(41.2381, -81.8348),
    "Lodi": Coordinates(41.0328, -82.0070),
    "Rittman": Coordinates(40.9784, -81.7804),
    "Orrville": Coordinates(40.8364, -81.7648),
    "Smithville": Coordinates(40.8678, -81.8576),
    "Fredericksburg": Coordinates(40.6792, -81.8829),
    "Doylestown": Coordinates(40.9717, -81.6954),
    "Massillon": Coordinates(40.7967, -81.5215),
    "Norton": Coordinates(41.0292, -81.6380),
}


# ---------------------------------------------------------------------------
# Slugs
# ---------------------------------------------------------------------------

def slugify(name: str | None, state_code: str | None = None) -> str:
    """Convert a place name (optionally with a state code) to a URL slug.

    Percent-encoded input is decoded first. Empty input maps to the
    regional fallback slug.

    >>> slugify("Cuyahoga Falls", "OH")
    'cuyahoga-falls-oh'
    >>> slugify("Lewis%20Center, OH")
    'lewis-center-oh'
    """
    raw = name if isinstance(name, str) else ""
    if state_code:
        raw = f"{raw} {state_code}" if raw.strip() else ""
    return slug_text(raw) or settings.fallback_location_slug


def slug_text(raw: str | None) -> str:
    """Decoded, lower-cased, hyphenated form of ``raw``; empty when nothing survives."""
    if not isinstance(raw, str):
        return ""
    try:
        decoded = unquote(raw, errors="strict")
    except UnicodeDecodeError:
        decoded = raw
    return _NON_SLUG.sub("-", decoded.strip().lower()).strip("-")


def format_slug_to_name(slug: str | None) -> str:
    """``akron-oh`` -> ``Akron, OH``; the fallback slug -> ``Northeast Ohio``."""
    if not slug or slug.strip().lower() == settings.fallback_location_slug:
        return settings.fallback_location_name
    parts = [p for p in slug.strip().lower().split("-") if p]
    state = None
    if len(parts) > 1 and len(parts[-1]) == 2:
        state = parts.pop().upper()
    city = " ".join(p.capitalize() for p in parts)
    return f"{city}, {state}" if state else city


def to_county_name(county: str) -> str:
    return county if county.endswith("County") else f"{county} County"


# ---------------------------------------------------------------------------
# Catalog
# ---------------------------------------------------------------------------

def _core_location(
    name: str, county: str, zips: range, *, primary: bool = False,
) -> ServiceLocation:
    return ServiceLocation(
        id=slugify(name, "OH"),
        name=name,
        state="Ohio",
        state_code="OH",
        coordinates=CITY_COORDINATES[name],
        zip_codes=tuple(str(z) for z in zips),
        service_area=True,
        primary_area=primary,
        county=county,
    )


CORE_LOCATIONS: tuple[ServiceLocation, ...] = (
    _core_location("Akron", "Summit County", range(44301, 44311), primary=True),
    _core_location("Cleveland", "Cuyahoga County", range(44101, 44111)),
    _core_location("Canton", "Stark County", range(44701, 44711)),
)


def build_expanded_locations(core: tuple[ServiceLocation, ...] = CORE_LOCATIONS) -> tuple[ServiceLocation, ...]:
    """One location per distinct town in the zip table, skipping core towns."""
    core_names = {loc.name for loc in core}
    seen: dict[str, ServiceLocation] = {}
    for record in ZIP_TO_LOCATION.values():
        city = record.city
        if not city or is_county_placeholder(record) or city in core_names or city in seen:
            continue
        seen[city] = ServiceLocation(
            id=slugify(city, "OH"),
            name=city,
            state="Ohio",
            state_code="OH",
            coordinates=CITY_COORDINATES.get(city, REGION_CENTER),
            county=to_county_name(record.county),
        )
    return tuple(seen.values())


class LocationCatalog:
    """Immutable, id-indexed view over core and expanded locations."""

    def __init__(
        self,
        core: tuple[ServiceLocation, ...] | list[ServiceLocation],
        expanded: tuple[ServiceLocation, ...] | list[ServiceLocation] = (),
    ) -> None:
        self.core = tuple(core)
        self.expanded = tuple(expanded)
        self._by_id: dict[str, ServiceLocation] = {}
        for location in self.core + self.expanded:
            key = location.id.lower()
            if key in self._by_id:
                raise ValueError(f"Duplicate location id in catalog: {location.id}")
            self._by_id[key] = location
        self._core_ids = {loc.id.lower() for loc in self.core}

    @classmethod
    def build(cls) -> "LocationCatalog":
        catalog = cls(CORE_LOCATIONS, build_expanded_locations(CORE_LOCATIONS))
        logger.debug(
            "Location catalog built: %d core, %d expanded",
            len(catalog.core), len(catalog.expanded),
        )
        return catalog

    def __len__(self) -> int:
        return len(self._by_id)

    def __contains__(self, location_id: object) -> bool:
        return isinstance(location_id, str) and location_id.strip().lower() in self._by_id

    def __iter__(self):
        return iter(self.core + self.expanded)

    def all(self) -> tuple[ServiceLocation, ...]:
        return self.core + self.expanded

    def get(self, location_id: str | None) -> ServiceLocation | None:
        """Case-insensitive id lookup across both tiers."""
        if not isinstance(location_id, str):
            return None
        return self._by_id.get(location_id.strip().lower())

    def get_core(self, location_id: str | None) -> ServiceLocation | None:
        location = self.get(location_id)
        if location is not None and location.id.lower() in self._core_ids:
            return location
        return None

    def by_county(self, county: str) -> list[ServiceLocation]:
        wanted = to_county_name(county.strip()).lower()
        return [loc for loc in self if (loc.county or "").lower() == wanted]

    def default_location(self, location_id: str | None = None) -> ServiceLocation:
        """The market used when a hint can't be resolved.

        Configured id first, then the first primary-area entry, then the
        first entry.
        """
        preferred = self.get(location_id or settings.default_location_id)
        if preferred is not None:
            return preferred
        for location in self:
            if location.primary_area:
                return location
        if not self._by_id:
            raise ValueError("Location catalog is empty")
        return self.all()[0]


CATALOG = LocationCatalog.build()


def region_location() -> ServiceLocation:
    """The whole service region as a pseudo-location (not a catalog entry)."""
    return ServiceLocation(
        id=settings.fallback_location_slug,
        name=settings.fallback_location_name,
        state=STATE_NAMES.get(settings.served_state_code, settings.served_state_code),
        state_code=settings.served_state_code,
        coordinates=REGION_CENTER,
        county=settings.fallback_location_name,
        display_name=settings.fallback_location_name,
    )


def get_county_from_slug(slug: str | None, catalog: LocationCatalog = CATALOG) -> str:
    """County for a location slug, falling back to the region name."""
    location = catalog.get(slug)
    if location is not None and location.county:
        return location.county
    if slug:
        city = format_slug_to_name(slug).split(",")[0]
        for record in ZIP_TO_LOCATION.values():
            if record.city == city:
                return to_county_name(record.county)
    return settings.fallback_location_name
