"""Hourly readings for the target day from the Open-Meteo archive API."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from datetime import datetime, timedelta
from typing import Any

import requests

from weather_scrubber.datasources.weather.client import (
    HOURLY_VARS,
    HOURS_PER_DAY,
    OPEN_METEO_HISTORICAL,
    TARGET_DATE,
)
from weather_scrubber.datasources.weather.models import WeatherSnapshot
from weather_scrubber.errors import DataShapeError, NetworkError
from weather_scrubber.services.http import session

logger = logging.getLogger(__name__)

SOURCE = "weather"


def fetch_hourly_archive(
    start_date: str,
    end_date: str,
    lat: float = 35.6895,
    lon: float = 139.6917,
    timezone: str = "UTC",
) -> dict[str, Any]:
    """
    Fetch hourly temperature, precipitation and cloud cover from the archive API.

    Args:
        start_date: ISO date string (YYYY-MM-DD).
        end_date: ISO date string (YYYY-MM-DD), inclusive on the API side.
        lat: Latitude (default: Tokyo).
        lon: Longitude.
        timezone: Timezone the returned ``hourly.time`` values are expressed in.

    Returns:
        Raw API response dict with ``hourly`` key containing parallel arrays.

    Raises:
        NetworkError: the request failed or the body was not JSON.
    """
    params: dict[str, Any] = {
        "latitude": lat,
        "longitude": lon,
        "start_date": start_date,
        "end_date": end_date,
        "hourly": ",".join(HOURLY_VARS),
        "timezone": timezone,
    }
    try:
        resp = session.get(OPEN_METEO_HISTORICAL, params=params)
        resp.raise_for_status()
        result: dict[str, Any] = resp.json()
    except (requests.RequestException, ValueError) as exc:
        raise NetworkError(SOURCE, f"archive request failed: {exc}", cause=exc) from exc
    return result


def format_hour(time_str: str) -> str:
    """Format an Open-Meteo local ISO timestamp (``2024-07-01T05:00``) as ``05:00``."""
    return datetime.fromisoformat(time_str).strftime("%H:%M")


def parse_weather_snapshot(data: Any, hour: int) -> WeatherSnapshot:
    """
    Pick the readings at offset ``hour`` out of an archive response.

    Raises:
        DataShapeError: ``hourly`` or one of its series is missing, or too short.
    """
    hourly = data.get("hourly") if isinstance(data, Mapping) else None
    if not isinstance(hourly, Mapping):
        raise DataShapeError(SOURCE, "Hourly data not found in the API response")

    series: dict[str, list[Any]] = {}
    for key in ("time", *HOURLY_VARS):
        values = hourly.get(key)
        if not isinstance(values, list):
            raise DataShapeError(SOURCE, f"hourly.{key} missing from the API response")
        if hour >= len(values):
            raise DataShapeError(
                SOURCE, f"hourly.{key} has {len(values)} entries, need index {hour}"
            )
        series[key] = values

    try:
        time = format_hour(series["time"][hour])
    except (TypeError, ValueError) as exc:
        raise DataShapeError(SOURCE, f"bad timestamp {series['time'][hour]!r}", cause=exc) from exc

    return WeatherSnapshot(
        time=time,
        temperature_c=series["temperature_2m"][hour],
        precipitation_mm=series["precipitation"][hour],
        cloud_cover_pct=series["cloud_cover"][hour],
    )


def fetch_weather_snapshot(
    hour: int,
    *,
    lat: float = 35.6895,
    lon: float = 139.6917,
    timezone: str = "UTC",
) -> WeatherSnapshot:
    """
    Fetch the target day and return the readings for ``hour``.

    Args:
        hour: Hour offset into the day, 0-23.
        lat: Latitude (default: Tokyo).
        lon: Longitude.
        timezone: Display timezone for the hour label.

    Raises:
        ValueError: ``hour`` is outside 0-23.
        NetworkError: the request failed.
        DataShapeError: the response lacks the expected series.
    """
    if not 0 <= hour < HOURS_PER_DAY:
        raise ValueError(f"hour must be in [0, {HOURS_PER_DAY - 1}], got {hour}")

    data = fetch_hourly_archive(
        TARGET_DATE.isoformat(),
        (TARGET_DATE + timedelta(days=1)).isoformat(),
        lat,
        lon,
        timezone,
    )
    snapshot = parse_weather_snapshot(data, hour)
    logger.debug("Fetched weather for hour %d: %s", hour, snapshot)
    return snapshot
