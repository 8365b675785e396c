"""Open-Meteo weather data source.

Fetches hourly archive weather for the target day (free, no API key).

Public API:
  - hourly: fetch_weather_snapshot, fetch_hourly_archive, parse_weather_snapshot
  - models: WeatherSnapshot
  - client: API URL, hourly variables
"""

from weather_scrubber.datasources.weather.client import (
    HOURLY_VARS,
    OPEN_METEO_HISTORICAL,
    TARGET_DATE,
)
from weather_scrubber.datasources.weather.hourly import (
    fetch_hourly_archive,
    fetch_weather_snapshot,
    format_hour,
    parse_weather_snapshot,
)
from weather_scrubber.datasources.weather.models import WeatherSnapshot

__all__ = [
    "HOURLY_VARS",
    "OPEN_METEO_HISTORICAL",
    "TARGET_DATE",
    "WeatherSnapshot",
    "fetch_hourly_archive",
    "fetch_weather_snapshot",
    "format_hour",
    "parse_weather_snapshot",
]
