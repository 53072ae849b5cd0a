"""API route handlers for location pages.

GET /services/locations/{location} — location landing page data
GET /services/{category}/{system}/{service_type}/{item}/{location} — service page data
GET /api/geolocation — visitor's detected market
GET /api/locations/resolve — resolve a zip, name, slug or coordinates
"""

import logging

from fastapi import APIRouter, HTTPException, Query, Request
from fastapi.responses import RedirectResponse

from protech.api.schemas import (
    FaqItem,
    GeolocationResponse,
    LocalDataResponse,
    LocationPageResponse,
    LocationResolveResponse,
    RecommendationResponse,
    ServiceLocationResponse,
    ServicePageResponse,
)
from protech.content.generators import (
    build_local_business_schema,
    generate_location_faqs,
    generate_localized_faqs,
    generate_location_intro,
    generate_meta_description,
    generate_service_faqs,
    page_url,
)
from protech.content.recommendations import SYSTEM_ALIASES, fallback_weather, service_recommendation
from protech.core.types import Coordinates, GateDecision, ServiceLocation
from protech.locations.catalog import CATALOG, get_county_from_slug, region_location
from protech.locations.gate import evaluate, is_served
from protech.locations.local_data import get_location_specific_data, has_specific_data
from protech.locations.matcher import (
    geolocation_from_headers,
    map_to_service_area,
    resolve,
    resolve_from_headers,
)
from protech.locations.zipcodes import normalize_zip, zip_coverage

logger = logging.getLogger(__name__)

router = APIRouter(tags=["locations"])


def _humanize(slug: str) -> str:
    return " ".join(word.capitalize() for word in slug.replace("_", "-").split("-") if word)


def _visitor_location(request: Request) -> ServiceLocation:
    location = getattr(request.state, "service_location", None)
    return location or resolve_from_headers(request.headers)


@router.get("/services/locations/{location}", response_model=LocationPageResponse)
async def location_page(location: str):
    entry = CATALOG.get(location)
    if entry is None or not is_served(entry, location):
        raise HTTPException(status_code=404, detail=f"Unknown service location: {location}")

    data = get_location_specific_data(entry.id)
    county = entry.county or get_county_from_slug(entry.id)
    return LocationPageResponse(
        slug=entry.id,
        canonical_url=page_url("services", "locations", entry.id),
        title=f"HVAC Services in {entry.label}",
        location_name=entry.label,
        county=county,
        location=ServiceLocationResponse.from_location(entry),
        local_data=LocalDataResponse.from_data(data),
        has_local_data=has_specific_data(entry.id),
        tier="core" if CATALOG.get_core(entry.id) else "expanded",
        nearby=[loc.label for loc in CATALOG.by_county(county) if loc.id != entry.id],
        faqs=[FaqItem(**faq) for faq in generate_location_faqs(entry)],
    )


@router.get(
    "/services/{category}/{system}/{service_type}/{item}/{location}",
    response_model=ServicePageResponse,
    responses={308: {"description": "Unknown location, redirected to the regional page"}},
)
async def service_page(
    request: Request, category: str, system: str, service_type: str, item: str, location: str,
):
    result = evaluate(location)
    if result.decision is GateDecision.REDIRECT:
        target = f"/services/{category}/{system}/{service_type}/{item}/{result.canonical_slug}"
        return RedirectResponse(url=target, status_code=308)
    if result.decision is GateDecision.NOT_FOUND:
        raise HTTPException(status_code=404, detail=f"{location} is outside our service area")

    place = result.location or region_location()
    service_name = _humanize(item)
    canonical = page_url("services", category, system, service_type, item, result.canonical_slug)
    system_kind = SYSTEM_ALIASES.get(category.lower(), category.lower())
    faqs = generate_localized_faqs(
        generate_service_faqs(system_kind, service_type, service_name, place),
        generate_location_faqs(place),
    )
    weather = fallback_weather(place.coordinates)
    advice = service_recommendation(weather, category, service_type)
    return ServicePageResponse(
        category=category,
        system=system,
        service_type=service_type,
        item=item,
        slug=result.canonical_slug,
        canonical_url=canonical,
        title=f"{service_name} in {place.label}",
        location_name=place.label,
        intro=generate_location_intro(place, f"{category}/{system}/{service_type}", service_name),
        meta_description=generate_meta_description(place, service_name),
        location=ServiceLocationResponse.from_location(result.location) if result.location else None,
        local_data=LocalDataResponse.from_data(get_location_specific_data(place.id)),
        faqs=[FaqItem(**faq) for faq in faqs],
        recommendation=RecommendationResponse.from_recommendation(advice, weather),
        visitor_location=ServiceLocationResponse.from_location(_visitor_location(request)),
        schema_org=build_local_business_schema(place, service_name, canonical),
    )


@router.get("/api/geolocation", response_model=GeolocationResponse)
async def geolocation(request: Request):
    raw = geolocation_from_headers(request.headers)
    detected = ""
    if raw["city"] and raw["countryRegion"]:
        detected = f"{raw['city']}, {raw['countryRegion']}"
    return GeolocationResponse(location=map_to_service_area(detected), rawLocation=raw)


@router.get("/api/locations/resolve", response_model=LocationResolveResponse)
async def resolve_location(
    q: str | None = Query(default=None, description="Zip code, city name or location slug"),
    lat: float | None = None,
    lng: float | None = None,
):
    if lat is not None and lng is not None:
        location = resolve(Coordinates(lat, lng))
    else:
        location = resolve(q)
    logger.info("Resolved %r to %s", q or (lat, lng), location.id, extra={"location_id": location.id})
    in_area, near_area = zip_coverage(q) or (None, None)
    return LocationResolveResponse(
        location=ServiceLocationResponse.from_location(location),
        zip_code=normalize_zip(q),
        in_service_area=in_area,
        near_service_area=near_area,
    )
