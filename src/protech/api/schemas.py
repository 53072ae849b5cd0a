"""Pydantic response models for the location endpoints."""

from pydantic import BaseModel, Field

from protech.core.types import LocationSpecificData, ServiceLocation, ServiceRecommendation, WeatherSnapshot


class CoordinatesResponse(BaseModel):
    lat: float
    lng: float


class ServiceLocationResponse(BaseModel):
    id: str
    name: str
    label: str
    state: str
    state_code: str
    county: str | None = None
    coordinates: CoordinatesResponse
    zip_codes: list[str] = Field(default_factory=list)
    primary_area: bool = False

    @classmethod
    def from_location(cls, location: ServiceLocation) -> "ServiceLocationResponse":
        return cls(
            id=location.id,
            name=location.name,
            label=location.label,
            state=location.state,
            state_code=location.state_code,
            county=location.county,
            coordinates=CoordinatesResponse(lat=location.coordinates.lat, lng=location.coordinates.lng),
            zip_codes=list(location.zip_codes),
            primary_area=location.primary_area,
        )


class LocalDataResponse(BaseModel):
    location_id: str
    county: str
    common_architectures: list[str]
    typical_age: str
    common_issues: list[str]
    annual_temperature_range: str
    avg_humidity: str
    weather_challenges: list[str]
    permit_requirements: str
    energy_rebates: list[str]

    @classmethod
    def from_data(cls, data: LocationSpecificData) -> "LocalDataResponse":
        return cls(
            location_id=data.location_id,
            county=data.county,
            common_architectures=list(data.building.common_architectures),
            typical_age=data.building.typical_age,
            common_issues=list(data.building.common_issues),
            annual_temperature_range=data.climate.annual_temperature_range,
            avg_humidity=data.climate.avg_humidity,
            weather_challenges=list(data.climate.weather_challenges),
            permit_requirements=data.regulatory.permit_requirements,
            energy_rebates=list(data.regulatory.energy_rebates),
        )


class FaqItem(BaseModel):
    question: str
    answer: str


class RecommendationResponse(BaseModel):
    """Seasonal advice for a service page, with the conditions it was based on."""

    message: str
    tip: str
    temperature: int
    humidity: int
    condition: str
    icon: str

    @classmethod
    def from_recommendation(
        cls, advice: ServiceRecommendation, weather: WeatherSnapshot,
    ) -> "RecommendationResponse":
        return cls(
            message=advice.message,
            tip=advice.tip,
            temperature=weather.temperature,
            humidity=weather.humidity,
            condition=weather.condition,
            icon=weather.icon,
        )


class LocationPageResponse(BaseModel):
    """Data for a /services/locations/{slug} page."""

    slug: str
    canonical_url: str
    title: str
    location_name: str
    county: str
    location: ServiceLocationResponse | None = None
    local_data: LocalDataResponse
    has_local_data: bool = False
    tier: str
    nearby: list[str] = Field(default_factory=list)
    faqs: list[FaqItem] = Field(default_factory=list)


class ServicePageResponse(BaseModel):
    """Data for a service-detail page in one location."""

    category: str
    system: str
    service_type: str
    item: str
    slug: str
    canonical_url: str
    title: str
    location_name: str
    intro: str
    meta_description: str
    location: ServiceLocationResponse | None = None
    local_data: LocalDataResponse
    faqs: list[FaqItem] = Field(default_factory=list)
    recommendation: RecommendationResponse
    visitor_location: ServiceLocationResponse
    schema_org: dict = Field(default_factory=dict)


class LocationResolveResponse(BaseModel):
    """A resolved location plus zip coverage when the hint was a zip code."""

    location: ServiceLocationResponse
    zip_code: str | None = None
    in_service_area: bool | None = None
    near_service_area: bool | None = None


class GeolocationResponse(BaseModel):
    location: str
    rawLocation: dict[str, str | None]


class HealthResponse(BaseModel):
    status: str
    core_locations: int
    expanded_locations: int
