"""Past radar frames from the RainViewer weather-maps feed."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from datetime import datetime
from typing import Any
from zoneinfo import ZoneInfo

import requests

from weather_scrubber.datasources.radar.client import RAINVIEWER_MAPS_API, TILE_SUFFIX
from weather_scrubber.datasources.radar.models import RadarFrame
from weather_scrubber.errors import DataShapeError, NetworkError
from weather_scrubber.services.http import session

logger = logging.getLogger(__name__)

SOURCE = "radar"


def fetch_weather_maps() -> dict[str, Any]:
    """
    Fetch the RainViewer weather-maps index.

    Returns:
        Raw API response dict with ``host`` and ``radar.past`` frames.

    Raises:
        NetworkError: the request failed or the body was not JSON.
    """
    try:
        resp = session.get(RAINVIEWER_MAPS_API)
        resp.raise_for_status()
        result: dict[str, Any] = resp.json()
    except (requests.RequestException, ValueError) as exc:
        raise NetworkError(SOURCE, f"weather-maps request failed: {exc}", cause=exc) from exc
    return result


def build_tile_url(host: str, path: str) -> str:
    """Absolute URL of the single world tile for a frame."""
    return f"{host}{path}{TILE_SUFFIX}"


def format_timestamp(timestamp: int, timezone: str = "UTC") -> str:
    """Format unix seconds as local ``HH:MM``."""
    return datetime.fromtimestamp(timestamp, tz=ZoneInfo(timezone)).strftime("%H:%M")


def parse_radar_frames(data: Any, timezone: str = "UTC") -> list[RadarFrame]:
    """
    Turn a weather-maps response into displayable frames.

    Raises:
        DataShapeError: ``host`` or ``radar.past`` is missing, or a frame lacks
            ``time``/``path``.
    """
    radar = data.get("radar") if isinstance(data, Mapping) else None
    past = radar.get("past") if isinstance(radar, Mapping) else None
    if not isinstance(past, list):
        raise DataShapeError(SOURCE, "Radar data not found in the API response")

    host = data.get("host")
    if not isinstance(host, str):
        raise DataShapeError(SOURCE, "host missing from the API response")
    frames = []
    for entry in past:
        try:
            timestamp = int(entry["time"])
            path = entry["path"]
        except (KeyError, TypeError, ValueError) as exc:
            raise DataShapeError(SOURCE, f"malformed radar frame {entry!r}", cause=exc) from exc
        frames.append(
            RadarFrame(
                time=format_timestamp(timestamp, timezone),
                tile_url=build_tile_url(host, path),
                timestamp=timestamp,
            )
        )
    return frames


def fetch_radar_frames(*, timezone: str = "UTC") -> list[RadarFrame]:
    """
    Fetch every available past radar frame.

    Not tied to the selected hour: callers filter with
    ``analysis.alignment.align_frames``.
    """
    frames = parse_radar_frames(fetch_weather_maps(), timezone)
    logger.debug("Fetched %d radar frames", len(frames))
    return frames
