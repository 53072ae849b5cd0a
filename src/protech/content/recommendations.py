"""Weather-driven service recommendations for service pages.

There is no live weather feed. ``fallback_weather`` derives plausible
conditions from a location's coordinates and the date, so each town's
page changes day to day while staying reproducible for a given day.
"""

import math
from datetime import date

from protech.core.types import Coordinates, ServiceRecommendation, WeatherSnapshot

# URL categories and the system each one's advice is written for
SYSTEM_ALIASES = {
    "air-conditioning": "cooling",
    "cooling": "cooling",
    "heating": "heating",
    "indoor-air-quality": "indoor-air",
    "indoor-air": "indoor-air",
}

DEFAULT_TIP = "Regular maintenance helps your system run efficiently and extends its lifespan."


def _weather_icon(condition: str) -> str:
    if "rain" in condition:
        return "🌧️"
    if "cloud" in condition:
        return "☁️"
    if "snow" in condition:
        return "❄️"
    if "clear" in condition:
        return "☀️"
    return "🌤️"


def fallback_weather(coordinates: Coordinates, on: date | None = None) -> WeatherSnapshot:
    """Deterministic conditions for a point on a given day.

    Seasonal baselines (35°F winter, 80°F summer, 60°F otherwise) shifted
    by up to ±5°F from the coordinates and ±2°F from the day of month.
    """
    on = on or date.today()
    month, day = on.month, on.day
    # fmod keeps the sign of the dividend, so western longitudes shift down
    temp_seed = math.fmod(coordinates.lat * 10 + coordinates.lng, 10)
    humidity_seed = math.fmod(coordinates.lng * 10 + coordinates.lat, 10)

    if month <= 3 or month == 12:
        temperature = 35.0
    elif 6 <= month <= 9:
        temperature = 80.0
    else:
        temperature = 60.0
    temperature += temp_seed - 5
    temperature += (day % 5) - 2

    humidity = (65.0 if 6 <= month <= 9 else 45.0) + humidity_seed - 5

    if humidity > 75:
        condition = "rain"
    elif humidity > 60:
        condition = "cloudy"
    elif temperature < 32 and humidity > 50:
        condition = "snow"
    elif humidity > 50:
        condition = "partly cloudy"
    else:
        condition = "clear sky"

    wind_speed = 5 + math.fmod(temp_seed, 10)
    feels_like = temperature - (5 if wind_speed > 10 else 0)
    return WeatherSnapshot(
        temperature=round(temperature),
        humidity=round(humidity),
        condition=condition,
        wind_speed=round(wind_speed),
        feels_like=round(feels_like),
        pressure=1010 + day % 20,
        icon=_weather_icon(condition),
    )


def _cooling(t: int, service_type: str) -> ServiceRecommendation | None:
    if service_type == "maintenance":
        if t > 80:
            return ServiceRecommendation(
                f"At {t}°F, your cooling system is likely running constantly. A maintenance check now "
                "can help prevent breakdowns during this hot weather.",
                "Set your thermostat a few degrees higher during peak heat to reduce strain on your system.",
            )
        if t < 60:
            return ServiceRecommendation(
                f"With cooler {t}°F temperatures, this is an ideal time for AC maintenance to prepare "
                "for upcoming warmer weather.",
                "Off-season maintenance often means shorter wait times and can identify issues "
                "before hot weather arrives.",
            )
    elif service_type == "repairs" and t > 85:
        return ServiceRecommendation(
            f"During this {t}°F heat wave, prompt repair of your cooling system is critical to "
            "restore comfort quickly.",
            "While waiting for repairs, use fans and close blinds to help keep your home cooler.",
        )
    elif service_type == "installations" and t < 70:
        return ServiceRecommendation(
            f"Current {t}°F temperatures make this a perfect time to install a new cooling system "
            "before hot weather arrives.",
            "Ask about high-efficiency models that can save you money during the upcoming cooling season.",
        )
    return None


def _heating(t: int, service_type: str) -> ServiceRecommendation | None:
    if service_type == "maintenance":
        if t < 40:
            return ServiceRecommendation(
                f"At {t}°F, your heating system is working hard. A maintenance check now can ensure "
                "it continues to operate reliably.",
                "Consider a programmable thermostat to reduce energy usage while you're away or sleeping.",
            )
        if t > 60:
            return ServiceRecommendation(
                f"With milder {t}°F temperatures, this is the perfect time for heating system "
                "maintenance to prepare for the next cold season.",
                "Off-season maintenance can identify issues while they're less likely to leave you without heat.",
            )
    elif service_type == "repairs" and t < 32:
        return ServiceRecommendation(
            f"With freezing {t}°F temperatures, prompt repair of your heating system is essential "
            "for your comfort and safety.",
            "While waiting for repairs, use space heaters safely and consider staying with family "
            "or friends if needed.",
        )
    elif service_type == "installations" and t > 50:
        return ServiceRecommendation(
            f"Current {t}°F temperatures make this a good time to install a new heating system "
            "before cold weather arrives.",
            "Ask about high-efficiency models that can save you money during the upcoming heating season.",
        )
    return None


def _indoor_air(weather: WeatherSnapshot) -> ServiceRecommendation | None:
    h = weather.humidity
    if h > 60:
        return ServiceRecommendation(
            f"With {h}% humidity, improving your indoor air quality can make your home feel more "
            "comfortable and prevent moisture-related issues.",
            "Consider a whole-home dehumidifier to work with your HVAC system for better comfort.",
        )
    if h < 30:
        return ServiceRecommendation(
            f"With low {h}% humidity, improving indoor air moisture can help with dry skin, "
            "static electricity, and respiratory comfort.",
            "A whole-home humidifier can maintain optimal humidity levels throughout your house.",
        )
    condition = weather.condition.lower()
    if "pollen" in condition or "allergen" in condition:
        return ServiceRecommendation(
            "During high pollen and allergen seasons, improving your indoor air quality can "
            "provide relief from outdoor irritants.",
            "High-MERV filters and air purification systems can significantly reduce indoor allergens.",
        )
    return None


def service_recommendation(
    weather: WeatherSnapshot, system: str, service_type: str,
) -> ServiceRecommendation:
    """Advice for a system/service-type pair under the given conditions.

    ``system`` may be a URL category (``air-conditioning``) or a system
    name (``cooling``). Unmatched combinations get a generic message.
    """
    kind = SYSTEM_ALIASES.get(system.lower())
    service_type = service_type.lower()
    advice = None
    if kind == "cooling":
        advice = _cooling(weather.temperature, service_type)
    elif kind == "heating":
        advice = _heating(weather.temperature, service_type)
    elif kind == "indoor-air":
        advice = _indoor_air(weather)
    if advice is not None:
        return advice

    readable = f"{system} {service_type}".replace("-", " ")
    return ServiceRecommendation(
        f"With current temperatures at {weather.temperature}°F and {weather.condition.lower()} "
        f"conditions, this is a good time for {readable}.",
        DEFAULT_TIP,
    )
