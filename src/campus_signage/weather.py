"""
Campus weather for the signage header.

Uses the OpenWeatherMap current weather API (free tier).
"""
import logging
from typing import Any, Dict, Optional

import requests

logger = logging.getLogger(__name__)

OPENWEATHER_URL = "https://api.openweathermap.org/data/2.5/weather"


def classify_weather(weather_id: Optional[int]) -> str:
    """Maps an OpenWeatherMap condition id to the header icon name."""
    if weather_id is None:
        return "unknown"
    if 800 <= weather_id <= 802:
        return "clear"
    if 803 <= weather_id <= 804:
        return "clouds"
    # Rain, drizzle, thunderstorm
    if 200 <= weather_id <= 531:
        return "rain"
    return "unknown"


def format_temperature(temperature: Optional[float]) -> str:
    if temperature is None:
        return "--"
    return str(round(temperature))


class CampusWeather:
    def __init__(self, api_key: str, city: str = "Chengdu,cn", units: str = "metric", timeout: int = 10):
        self.api_key = api_key
        self.city = city
        self.units = units
        self.timeout = timeout

    def get_current_weather(self) -> Dict[str, Any]:
        """Current conditions, or the fallback payload if the lookup fails."""
        if not self.api_key:
            logger.warning("OPENWEATHER_API_KEY not configured; showing placeholder weather")
            return self.get_fallback_weather()

        params = {
            'q': self.city,
            'units': self.units,
            'appid': self.api_key,
        }
        try:
            response = requests.get(OPENWEATHER_URL, params=params, timeout=self.timeout)
            response.raise_for_status()
            data = response.json()
            conditions = data.get('weather') or [{}]
            temperature = (data.get('main') or {}).get('temp')
            weather_id = conditions[0].get('id')
            return {
                'temperature': temperature,
                'temperature_display': format_temperature(temperature),
                'condition': classify_weather(weather_id),
                'description': (conditions[0].get('description') or '').title(),
            }
        except (requests.RequestException, ValueError, AttributeError, IndexError) as e:
            logger.error(f"Weather API error: {e}")
            return self.get_fallback_weather()

    def get_fallback_weather(self) -> Dict[str, Any]:
        return {
            'temperature': None,
            'temperature_display': "--",
            'condition': "unknown",
            'description': "",
        }
