"""Core domain types shared across all protech modules."""

from protech.core.types import (
    ComparisonResult,
    Coordinates,
    GateDecision,
    GateResult,
    LocationSpecificData,
    PageRecord,
    ServiceLocation,
    ServiceRecommendation,
    SimilarityRecord,
    UrlFacets,
    WeatherSnapshot,
    ZipRecord,
)

__all__ = [
    "ComparisonResult",
    "Coordinates",
    "GateDecision",
    "GateResult",
    "LocationSpecificData",
    "PageRecord",
    "ServiceLocation",
    "ServiceRecommendation",
    "SimilarityRecord",
    "UrlFacets",
    "WeatherSnapshot",
    "ZipRecord",
]
