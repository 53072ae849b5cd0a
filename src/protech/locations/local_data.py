"""Per-location HVAC context: housing stock, climate and local regulations.

Templated service pages pull from here so that two towns' pages say
different things. Every lookup succeeds: unknown ids get the DEFAULT
record.
"""

from protech.core.types import (
    BuildingProfile,
    ClimateProfile,
    LocationSpecificData,
    RegulatoryProfile,
)

DEFAULT_ID = "DEFAULT"


LOCATION_SPECIFIC_DATA: tuple[LocationSpecificData, ...] = (
    # --- Summit County ---
    LocationSpecificData(
        location_id="akron-oh",
        county="Summit County",
        building=BuildingProfile(
            common_architectures=("Colonial", "Craftsman", "Ranch", "Tudor"),
            typical_age="Average home age of 63 years with many built in the 1950s-1970s",
            common_issues=(
                "Older ductwork systems that need modernization",
                "Insufficient insulation in older neighborhoods",
                "Multi-level homes with temperature balancing challenges",
            ),
            energy_profile="Higher energy usage due to aging housing stock, with many homes needing HVAC upgrades.",
        ),
        climate=ClimateProfile(
            annual_temperature_range="18°F to 83°F",
            avg_humidity="73%",
            heating_days="5,700 heating degree days annually",
            cooling_days="950 cooling degree days annually",
            weather_challenges=(
                "Significant lake effect snow from Lake Erie",
                "Cold air pockets in valley areas",
                "Summer humidity requiring effective dehumidification",
            ),
        ),
        regulatory=RegulatoryProfile(
            permit_requirements="Permits required for new HVAC installations and major replacements "
            "through the Summit County Building Department",
            local_codes=(
                "Must comply with Ohio Mechanical Code",
                "Summit County Energy Conservation Code",
                "HVAC equipment must meet minimum 14 SEER rating",
            ),
            energy_rebates=(
                "FirstEnergy Ohio energy efficiency rebates up to $500",
                "Home weatherization assistance for income-qualified residents",
                "Ohio Home Energy Assistance Program (HEAP)",
            ),
            utility_programs=(
                "Dominion Energy home energy assessment program",
                "FirstEnergy residential energy audit incentives",
                "Summit County energy efficiency financing options",
            ),
        ),
    ),
    LocationSpecificData(
        location_id="cuyahoga-falls-oh",
        county="Summit County",
        building=BuildingProfile(
            common_architectures=("Colonial", "Bungalow", "Ranch", "Split-Level"),
            typical_age="Average home age of 60 years, with significant development in the 1960s",
            common_issues=(
                "Older homes near the river with moisture and ventilation challenges",
                "Hillside homes requiring specialized HVAC configurations",
                "Energy inefficiency in pre-1980s construction",
            ),
            energy_profile="Mixed housing stock; newer developments are efficient while older riverside "
            "areas often need modernization.",
        ),
        climate=ClimateProfile(
            annual_temperature_range="18°F to 83°F",
            avg_humidity="74%",
            heating_days="5,650 heating degree days annually",
            cooling_days="930 cooling degree days annually",
            weather_challenges=(
                "Micro-climate effects near the Cuyahoga River",
                "Increased humidity in valley areas requiring enhanced dehumidification",
                "Cold air pooling in lower elevations during winter",
            ),
        ),
        regulatory=RegulatoryProfile(
            permit_requirements="City of Cuyahoga Falls Building Department requires permits for HVAC "
            "replacements and new installations",
            local_codes=(
                "Compliance with Cuyahoga Falls Building Code Chapter 1335",
                "Energy conservation standards for new equipment",
                "Noise ordinances affecting outdoor HVAC equipment placement",
            ),
            energy_rebates=(
                "FirstEnergy Ohio energy efficiency rebates",
                "Ohio Home Energy Assistance Program (HEAP)",
            ),
            utility_programs=(
                "Cuyahoga Falls Electric energy conservation programs",
                "Dominion Energy home energy assessment program",
            ),
        ),
    ),
    # --- Stark County ---
    LocationSpecificData(
        location_id="canton-oh",
        county="Stark County",
        building=BuildingProfile(
            common_architectures=("Craftsman", "Colonial", "Tudor", "Victorian"),
            typical_age="Average home age of 70 years with many historic neighborhoods",
            common_issues=(
                "Historic district homes requiring specialized HVAC solutions",
                "Former industrial properties converted to residential use",
                "Older neighborhood homes with insulation challenges",
            ),
            energy_profile="Generally older housing stock with lower energy efficiency; historic homes "
            "need care when modernizing HVAC.",
        ),
        climate=ClimateProfile(
            annual_temperature_range="19°F to 83°F",
            avg_humidity="73%",
            heating_days="5,700 heating degree days annually",
            cooling_days="920 cooling degree days annually",
            weather_challenges=(
                "Urban heat island effect in downtown areas",
                "River valley fog affecting humidity levels",
                "Industrial areas with air quality considerations",
            ),
        ),
        regulatory=RegulatoryProfile(
            permit_requirements="Canton Building Department requires permits for HVAC installation and "
            "substantial repairs",
            local_codes=(
                "Canton Codified Ordinances Chapter 1303 compliance",
                "Historic preservation district guidelines for exterior equipment",
                "Rental property HVAC certification requirements",
            ),
            energy_rebates=(
                "AEP Ohio energy efficiency rebates up to $500",
                "Stark County weatherization assistance programs",
                "Ohio Home Energy Assistance Program (HEAP)",
            ),
            utility_programs=(
                "Dominion Energy home assessment program",
                "AEP Ohio Community Assistance program",
                "Stark Metropolitan Housing Authority energy initiatives",
            ),
        ),
    ),
    # --- Wayne County ---
    LocationSpecificData(
        location_id="wooster-oh",
        county="Wayne County",
        building=BuildingProfile(
            common_architectures=("Farmhouse", "Colonial", "Ranch", "Victorian"),
            typical_age="Mix of century-old farmhouses and post-1970 subdivisions",
            common_issues=(
                "Rural homes on propane or oil heat",
                "Well-water homes needing humidity control",
                "Additions with undersized duct runs",
            ),
            energy_profile="Rural properties rely on heat pumps and propane; efficiency upgrades pay off quickly.",
        ),
        climate=ClimateProfile(
            annual_temperature_range="18°F to 84°F",
            avg_humidity="75%",
            heating_days="5,750 heating degree days annually",
            cooling_days="900 cooling degree days annually",
            weather_challenges=(
                "Open farmland exposure to winter wind",
                "Humid summers in agricultural areas",
            ),
        ),
        regulatory=RegulatoryProfile(
            permit_requirements="Wayne County Building Department issues mechanical permits for replacements",
            local_codes=(
                "Ohio Mechanical Code compliance required",
                "Setback rules for outdoor units on rural lots",
            ),
            energy_rebates=(
                "AEP Ohio energy efficiency rebates",
                "Ohio Home Energy Assistance Program (HEAP)",
            ),
            utility_programs=(
                "Rural electric cooperative heat pump incentives",
            ),
        ),
    ),
    # --- Medina County ---
    LocationSpecificData(
        location_id="medina-oh",
        county="Medina County",
        building=BuildingProfile(
            common_architectures=("Victorian", "Colonial", "Contemporary", "Ranch"),
            typical_age="Historic square homes alongside subdivisions built after 1990",
            common_issues=(
                "Historic homes without existing ductwork",
                "Large newer homes needing zoned systems",
            ),
            energy_profile="Newer construction is efficient; the historic district benefits from ductless systems.",
        ),
        climate=ClimateProfile(
            annual_temperature_range="18°F to 83°F",
            avg_humidity="73%",
            heating_days="5,800 heating degree days annually",
            cooling_days="880 cooling degree days annually",
            weather_challenges=(
                "Lake effect snow bands reaching the northern townships",
                "Rapid spring and fall temperature swings",
            ),
        ),
        regulatory=RegulatoryProfile(
            permit_requirements="City of Medina Building Department requires permits for HVAC replacement",
            local_codes=(
                "Historic district review for exterior equipment",
                "Ohio Mechanical Code compliance required",
            ),
            energy_rebates=(
                "FirstEnergy Ohio energy efficiency rebates",
                "Federal tax credits for qualified heat pumps",
            ),
            utility_programs=(
                "Dominion Energy home energy assessment program",
            ),
        ),
    ),
    # --- Cuyahoga County ---
    LocationSpecificData(
        location_id="cleveland-oh",
        county="Cuyahoga County",
        building=BuildingProfile(
            common_architectures=("Colonial", "Victorian", "Craftsman", "Tudor", "Industrial Conversion"),
            typical_age="Average home age of 75+ years with many historic districts",
            common_issues=(
                "Historic district homes requiring specialized HVAC solutions",
                "Urban brownstone and row house configurations",
                "Industrial building conversions with unique HVAC requirements",
                "Lake effect moisture management challenges",
            ),
            energy_profile="Primarily older housing stock; lakefront properties face unique heating and "
            "cooling challenges.",
        ),
        climate=ClimateProfile(
            annual_temperature_range="20°F to 81°F",
            avg_humidity="73%",
            heating_days="5,900 heating degree days annually",
            cooling_days="800 cooling degree days annually",
            weather_challenges=(
                "Significant lake effect snow and temperature moderation",
                "Urban heat island effect in downtown areas",
                "Lakefront properties with higher wind exposure",
            ),
        ),
        regulatory=RegulatoryProfile(
            permit_requirements="Cleveland Building Department requires permits for HVAC installation, "
            "replacement, and major repairs",
            local_codes=(
                "Cleveland Codified Ordinances Chapters 3101-3127",
                "Historic district specific guidelines for equipment placement",
                "Energy conservation requirements for rental properties",
            ),
            energy_rebates=(
                "Cleveland Public Power energy efficiency programs",
                "Dominion Energy conservation programs with rebates up to $1,500",
                "Cuyahoga County home weatherization assistance",
            ),
            utility_programs=(
                "Dominion East Ohio Home Performance with ENERGY STAR",
                "Cleveland Electric Illuminating Company rebates",
            ),
        ),
    ),
    # Fallback for every location without its own entry
    LocationSpecificData(
        location_id=DEFAULT_ID,
        county="Ohio",
        building=BuildingProfile(
            common_architectures=("Colonial", "Ranch", "Craftsman", "Contemporary"),
            typical_age="Average home age varies by neighborhood, with many homes built between 1950-1990",
            common_issues=(
                "Aging HVAC systems in older neighborhoods",
                "Varying insulation quality based on construction era",
                "Temperature balancing in multi-level homes",
            ),
            energy_profile="Energy efficiency varies widely with home age; most homes benefit from "
            "HVAC upgrades and weatherization.",
        ),
        climate=ClimateProfile(
            annual_temperature_range="18°F to 83°F",
            avg_humidity="73%",
            heating_days="5,800 heating degree days annually",
            cooling_days="900 cooling degree days annually",
            weather_challenges=(
                "Cold winters requiring reliable heating systems",
                "Summer humidity requiring effective cooling and dehumidification",
                "Seasonal transitions with varying HVAC demands",
            ),
        ),
        regulatory=RegulatoryProfile(
            permit_requirements="Local building departments typically require permits for HVAC "
            "installation and replacement",
            local_codes=(
                "Ohio Mechanical Code compliance required",
                "Local municipal ordinances for equipment placement and noise",
                "Energy conservation requirements for new installations",
            ),
            energy_rebates=(
                "Utility company rebates for energy-efficient equipment",
                "Ohio Home Energy Assistance Program (HEAP)",
                "Federal tax credits for qualified energy improvements",
            ),
            utility_programs=(
                "Local utility energy assessment programs",
                "Ohio Development Services Agency assistance programs",
                "Weatherization assistance for income-qualified homeowners",
            ),
        ),
    ),
)

_BY_ID = {entry.location_id.lower(): entry for entry in LOCATION_SPECIFIC_DATA}
DEFAULT_LOCATION_DATA = _BY_ID[DEFAULT_ID.lower()]


def get_location_specific_data(location_id: str | None) -> LocationSpecificData:
    """Case-insensitive lookup; DEFAULT when nothing matches."""
    if not isinstance(location_id, str):
        return DEFAULT_LOCATION_DATA
    return _BY_ID.get(location_id.strip().lower(), DEFAULT_LOCATION_DATA)


def has_specific_data(location_id: str | None) -> bool:
    return get_location_specific_data(location_id) is not DEFAULT_LOCATION_DATA
