"""RainViewer radar data source.

Fetches the list of past radar frames (free, no API key) and maps each to a
tile URL plus local display time.

Public API:
  - frames: fetch_radar_frames, fetch_weather_maps, parse_radar_frames, build_tile_url
  - models: RadarFrame
"""

from weather_scrubber.datasources.radar.client import RAINVIEWER_MAPS_API, TILE_SUFFIX
from weather_scrubber.datasources.radar.frames import (
    build_tile_url,
    fetch_radar_frames,
    fetch_weather_maps,
    format_timestamp,
    parse_radar_frames,
)
from weather_scrubber.datasources.radar.models import RadarFrame

__all__ = [
    "RAINVIEWER_MAPS_API",
    "TILE_SUFFIX",
    "RadarFrame",
    "build_tile_url",
    "fetch_radar_frames",
    "fetch_weather_maps",
    "format_timestamp",
    "parse_radar_frames",
]
