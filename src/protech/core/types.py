"""Domain types for the ProTech service-area and content audit tooling.

All shared dataclasses and enums live here to prevent circular imports
and establish a single source of truth for the domain model. Every
other module imports from here.
"""

from dataclasses import dataclass, field
from enum import Enum


# ---------------------------------------------------------------------------
# Location types
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Coordinates:
    """A WGS84 point in decimal degrees."""

    lat: float
    lng: float


@dataclass(frozen=True)
class ZipRecord:
    """County and city for a zip code or 3-digit zip prefix."""

    county: str
    city: str


@dataclass(frozen=True)
class ServiceLocation:
    """A city or town the business serves.

    ``id`` is the URL slug (``akron-oh``) and is unique across the
    catalog. ``zip_codes`` may be empty for expanded locations.
    """

    id: str
    name: str
    state: str
    state_code: str
    coordinates: Coordinates
    zip_codes: tuple[str, ...] = ()
    service_area: bool = True
    primary_area: bool = False
    county: str | None = None
    display_name: str | None = None

    @property
    def label(self) -> str:
        """Human-readable ``City, ST`` form."""
        return self.display_name or f"{self.name}, {self.state_code}"


@dataclass(frozen=True)
class BuildingProfile:
    common_architectures: tuple[str, ...]
    typical_age: str
    common_issues: tuple[str, ...]
    energy_profile: str


@dataclass(frozen=True)
class ClimateProfile:
    annual_temperature_range: str
    avg_humidity: str
    heating_days: str
    cooling_days: str
    weather_challenges: tuple[str, ...]


@dataclass(frozen=True)
class RegulatoryProfile:
    permit_requirements: str
    local_codes: tuple[str, ...]
    energy_rebates: tuple[str, ...]
    utility_programs: tuple[str, ...]


@dataclass(frozen=True)
class LocationSpecificData:
    """Per-location enrichment used to differentiate templated pages."""

    location_id: str
    county: str
    building: BuildingProfile
    climate: ClimateProfile
    regulatory: RegulatoryProfile


class GateDecision(str, Enum):
    RENDER = "render"
    REDIRECT = "redirect"
    NOT_FOUND = "not_found"


@dataclass
class GateResult:
    """Outcome of checking a location slug from a page URL."""

    decision: GateDecision
    slug: str
    canonical_slug: str
    location: ServiceLocation | None = None


# ---------------------------------------------------------------------------
# Page content types
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class WeatherSnapshot:
    """Current conditions for a location. Temperatures in °F, humidity in %."""

    temperature: int
    humidity: int
    condition: str
    wind_speed: int
    feels_like: int
    pressure: int
    icon: str


@dataclass(frozen=True)
class ServiceRecommendation:
    message: str
    tip: str


# ---------------------------------------------------------------------------
# Content audit types
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class UrlFacets:
    """Structured pieces of a page URL, parsed once when the URL is fetched.

    Service-detail URLs fill every field; location pages fill only
    ``location``.
    """

    category: str | None = None
    system: str | None = None
    service_type: str | None = None
    item: str | None = None
    location: str | None = None


@dataclass
class SimilarPage:
    url: str
    similarity: float


@dataclass
class PageRecord:
    """A fetched page plus the fields the comparison pass fills in."""

    url: str
    content: str
    word_count: int
    title: str = ""
    meta_description: str = ""
    facets: UrlFacets = field(default_factory=UrlFacets)
    similar_pages: list[SimilarPage] = field(default_factory=list)
    uniqueness_score: float | None = None
    fetch_error: str | None = None


@dataclass
class SimilarityRecord:
    """Weighted similarity of one unordered pair of pages."""

    page_a: str
    page_b: str
    similarity: float
    content_similarity: float
    title_similarity: float
    meta_similarity: float
    is_suspicious: bool


@dataclass
class ComparisonResult:
    page_analysis: list[PageRecord]
    similarities: list[SimilarityRecord]
