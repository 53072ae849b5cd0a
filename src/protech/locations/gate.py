"""Service-area gate for location slugs taken from page URLs.

Three outcomes: render the page, redirect an unknown slug to the
regional fallback page, or 404 a known location outside the served
state. Visitors never see an error for a bad slug.
"""

import logging

from protech.config import settings
from protech.core.types import GateDecision, GateResult, ServiceLocation
from protech.locations.catalog import CATALOG, LocationCatalog, slug_text

logger = logging.getLogger(__name__)


def is_in_service_state(location: ServiceLocation) -> bool:
    return location.state_code.strip().upper() == settings.served_state_code


def normalize_slug(raw_slug: str | None) -> str:
    """Decode and canonicalize a URL path segment; empty when nothing usable remains."""
    return slug_text(raw_slug)


def is_served(
    location: ServiceLocation | None,
    raw_slug: str | None,
    catalog: LocationCatalog = CATALOG,
) -> bool:
    """Whether a location page for ``raw_slug`` may be rendered.

    The fallback region slug is always served. A slug (or location) known
    to the catalog is served when it lies in the served state. Anything
    else must at least carry the state suffix.
    """
    slug = normalize_slug(raw_slug)
    if slug == settings.fallback_location_slug:
        return True

    entry = catalog.get(slug)
    if entry is None and location is not None:
        entry = catalog.get(location.id)
    if entry is not None:
        return is_in_service_state(entry)

    # Heuristic backstop for slugs the catalog doesn't know
    return slug.endswith(f"-{settings.served_state_code.lower()}")


def evaluate(raw_slug: str | None, catalog: LocationCatalog = CATALOG) -> GateResult:
    """Decide render / redirect / not-found for a location slug."""
    slug = normalize_slug(raw_slug)
    fallback = settings.fallback_location_slug

    if slug == fallback:
        return GateResult(GateDecision.RENDER, slug=slug, canonical_slug=fallback)

    location = catalog.get(slug)
    if location is None:
        logger.info("Unknown location slug %r, redirecting to %s", raw_slug, fallback, extra={"slug": raw_slug})
        return GateResult(GateDecision.REDIRECT, slug=slug, canonical_slug=fallback)

    state_suffix = f"-{settings.served_state_code.lower()}"
    if not is_served(location, slug, catalog) or not slug.endswith(state_suffix):
        logger.info("Location %s is outside the service area", location.id, extra={"location_id": location.id})
        return GateResult(GateDecision.NOT_FOUND, slug=slug, canonical_slug=location.id, location=location)

    return GateResult(GateDecision.RENDER, slug=slug, canonical_slug=location.id, location=location)
