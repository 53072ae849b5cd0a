"""Location-aware copy for service pages.

Templates are blended with per-location climate, housing and regulatory
data so that the same service page reads differently in each town.
"""

from protech.config import settings
from protech.core.types import ServiceLocation
from protech.locations.local_data import get_location_specific_data

BUSINESS_NAME = "ProTech Heating & Cooling"
BUSINESS_PHONE = "+1-330-555-1234"
HEADQUARTERS = {"locality": "Wadsworth", "region": "OH", "postal_code": "44281", "lat": 41.15744, "lng": -81.66589}
AREA_RADIUS_M = 45000
SERVICE_RADIUS_M = 72000

Faq = dict[str, str]


def _county(location: ServiceLocation) -> str:
    return location.county or get_location_specific_data(location.id).county


def generate_location_intro(location: ServiceLocation, service_id: str, service_name: str) -> str:
    data = get_location_specific_data(location.id)
    climate = data.climate
    humidity = climate.avg_humidity

    if "air-conditioning" in service_id:
        lead = (
            f"In {location.name}, where summer humidity averages {humidity}, "
            "reliable air conditioning is essential for comfort."
        )
    elif "heating" in service_id:
        lead = (
            f"{location.name} winters bring {climate.heating_days.split(' annually')[0]}, "
            "which demands heating systems that are both efficient and dependable."
        )
    elif "indoor-air-quality" in service_id:
        lead = (
            f"An average humidity of {humidity} and sharp seasonal changes in {location.name} "
            "create unique indoor air quality challenges for homeowners."
        )
    else:
        lead = (
            f"{location.name} homes face unique HVAC requirements due to our region's "
            "temperature extremes and variable weather patterns."
        )

    return (
        f"{lead} {data.building.typical_age}. Our {service_name} in {location.name} "
        f"are tailored to the challenges common in {_county(location)}, "
        "keeping your home comfortable all year."
    )


def generate_meta_description(location: ServiceLocation, service_name: str) -> str:
    data = get_location_specific_data(location.id)
    challenge = data.climate.weather_challenges[0] if data.climate.weather_challenges else ""
    description = (
        f"Professional {service_name} in {location.label}, tailored to the climate of "
        f"{_county(location)}."
    )
    if challenge:
        description += f" Prepared for {challenge[0].lower()}{challenge[1:]}."
    return description


def generate_location_faqs(location: ServiceLocation) -> list[Faq]:
    """Three FAQs answered from the location's own data."""
    data = get_location_specific_data(location.id)
    issues = ", ".join(issue.lower() for issue in data.building.common_issues[:2])
    return [
        {
            "question": f"Do I need a permit to replace my HVAC system in {location.name}?",
            "answer": f"{data.regulatory.permit_requirements}. We handle the permit process for you.",
        },
        {
            "question": f"What HVAC problems are common in {location.name} homes?",
            "answer": f"We most often see {issues}. {data.building.energy_profile}",
        },
        {
            "question": f"Are there energy rebates available in {location.name}?",
            "answer": "Homeowners may qualify for " + "; ".join(data.regulatory.energy_rebates) + ".",
        },
    ]


def _system_faqs(system: str, service_type: str, item: str, place: str) -> list[Faq]:
    if system == "cooling":
        return [
            {
                "question": f"What's the best time of year for cooling system {service_type} in {place}?",
                "answer": (
                    f"For cooling systems in {place}, we recommend scheduling {service_type} in early "
                    "spring (March-April), before the hot summer season begins. This ensures your "
                    "system is operating efficiently when you need it most."
                ),
            },
            {
                "question": f"How often should I have my {item} serviced in {place}?",
                "answer": (
                    f"In {place}'s climate, we recommend having your {item} professionally serviced at "
                    "least once per year, ideally before the cooling season starts."
                ),
            },
        ]
    if system == "heating":
        return [
            {
                "question": f"When should I schedule heating system {service_type} in {place}?",
                "answer": (
                    f"The ideal time for heating system {service_type} in {place} is early fall "
                    "(September-October), before the heating season begins and emergency calls pick up."
                ),
            },
            {
                "question": f"How can I tell if my {item} needs repair or replacement?",
                "answer": (
                    f"Rising energy bills, uneven heating, unusual noises, frequent cycling, or an {item} "
                    "more than 15 years old are common signs. Our technicians can assess it for you."
                ),
            },
        ]
    if system == "indoor-air":
        return [
            {
                "question": f"How can {item} improve my home's air quality in {place}?",
                "answer": (
                    f"{item} removes airborne particles, allergens and pollutants from homes in {place}, "
                    "which matters most during pollen season or for household members with allergies."
                ),
            },
            {
                "question": "How often should indoor air quality equipment be maintained?",
                "answer": (
                    "Most indoor air quality equipment should be checked every 6-12 months. Filters may "
                    f"need more frequent replacement depending on conditions in {place}."
                ),
            },
        ]
    return []


def _service_type_faqs(service_type: str, item: str, place: str) -> list[Faq]:
    questions = {
        "maintenance": [
            (f"What's included in your {item} maintenance service?",
             f"Our {item} maintenance covers inspection and cleaning of key components, lubrication of "
             "moving parts, electrical checks and thermostat calibration, with a written report."),
            (f"Do you offer maintenance plans for {item} systems?",
             f"Yes. Our {item} maintenance plans include scheduled visits, priority booking and "
             "discounts on repairs."),
        ],
        "repairs": [
            (f"Do you offer emergency repair services for {item} in {place}?",
             f"Yes, we provide 24/7 emergency {item} repair in {place} and surrounding areas."),
            (f"What warranties do you offer on {item} repairs?",
             f"All {item} repairs carry a 90-day labor warranty plus the manufacturer's warranty "
             "on replaced parts."),
        ],
        "installations": [
            (f"What brands of {item} do you install?",
             f"We install and service all major brands of {item}, including Carrier, Trane, Lennox, "
             "Rheem and American Standard."),
            (f"Do you offer financing for new {item} installations?",
             f"Yes, flexible financing is available for new {item} installations with approved credit, "
             "and we help you claim manufacturer rebates and utility incentives."),
        ],
        "inspections": [
            (f"How often should I have my {item} professionally inspected?",
             f"We recommend an annual {item} inspection. In {place}, seasonal temperature swings make "
             "early detection especially valuable."),
            (f"What does a professional {item} inspection include?",
             "A full examination of every component, performance and efficiency testing, and safety "
             "checks, followed by a report with our recommendations."),
        ],
        "solutions": [
            (f"How do I know which {item} solution is right for my home in {place}?",
             f"It depends on your air quality concerns, home size, existing HVAC system and budget. "
             f"We assess homes in {place} and recommend the best fit."),
            (f"Will a {item} help with allergies and asthma?",
             f"A properly selected and maintained {item} filters pollen, dust mites, pet dander and "
             "mold spores, which can bring real relief to allergy and asthma sufferers."),
        ],
    }
    return [{"question": q, "answer": a} for q, a in questions.get(service_type, [])]


def generate_service_faqs(system: str, service_type: str, item_name: str, location: ServiceLocation) -> list[Faq]:
    """Standard FAQs for a service page: cost and timing, then system and service-type questions.

    ``system`` is a system name (``cooling``, ``heating``, ``indoor-air``);
    unknown systems or service types contribute no extra questions.
    """
    service_type = service_type.lower()
    readable_type = service_type.replace("-", " ")
    place = location.label
    faqs: list[Faq] = [
        {
            "question": f"How much does {item_name} {readable_type} cost in {place}?",
            "answer": (
                f"The cost of {item_name} {readable_type} in {place} depends on the scope of work, "
                "equipment specifications and any additional requirements. We provide free, detailed quotes."
            ),
        },
        {
            "question": f"How long does a typical {item_name} {readable_type} take to complete?",
            "answer": (
                f"Most {item_name} {readable_type} visits take 1-4 hours. Installations or major repairs "
                "may take 1-2 days, and we always give a time estimate before starting."
            ),
        },
    ]
    faqs += _system_faqs(system, readable_type, item_name, place)
    faqs += _service_type_faqs(service_type, item_name, place)
    return faqs


def generate_localized_faqs(standard_faqs: list[Faq], location_faqs: list[Faq]) -> list[Faq]:
    """Merge local FAQs into a page's standard FAQs.

    With more than three standard FAQs, the local ones replace the middle
    of the list; otherwise they are appended.
    """
    if len(standard_faqs) > 3 and location_faqs:
        return [standard_faqs[0], *location_faqs, standard_faqs[-1]]
    return [*standard_faqs, *location_faqs]


def build_local_business_schema(
    location: ServiceLocation, service_name: str, service_url: str,
) -> dict:
    """schema.org LocalBusiness markup for a service/location page."""
    return {
        "@context": "https://schema.org",
        "@type": "LocalBusiness",
        "name": BUSINESS_NAME,
        "description": f"Professional {service_name} in {location.label}",
        "url": service_url,
        "telephone": BUSINESS_PHONE,
        "address": {
            "@type": "PostalAddress",
            "addressLocality": HEADQUARTERS["locality"],
            "addressRegion": HEADQUARTERS["region"],
            "postalCode": HEADQUARTERS["postal_code"],
            "addressCountry": "US",
        },
        "geo": {"@type": "GeoCoordinates", "latitude": HEADQUARTERS["lat"], "longitude": HEADQUARTERS["lng"]},
        "areaServed": {
            "@type": "GeoCircle",
            "geoMidpoint": {
                "@type": "GeoCoordinates",
                "latitude": location.coordinates.lat,
                "longitude": location.coordinates.lng,
            },
            "geoRadius": str(AREA_RADIUS_M),
        },
        "serviceArea": {
            "@type": "GeoCircle",
            "geoMidpoint": {
                "@type": "GeoCoordinates",
                "latitude": HEADQUARTERS["lat"],
                "longitude": HEADQUARTERS["lng"],
            },
            "geoRadius": str(SERVICE_RADIUS_M),
        },
        "priceRange": "$$",
    }


def page_url(*segments: str) -> str:
    path = "/".join(s.strip("/") for s in segments if s)
    return f"{settings.site_base_url.rstrip('/')}/{path}"
