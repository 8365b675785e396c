"""Shared payload builders for Open-Meteo and RainViewer stubs."""

from __future__ import annotations

from typing import Any

import pytest

# 2024-07-01T00:00:00Z
JULY_1_MIDNIGHT = 1719792000


def make_archive_payload(
    temperatures: list[float] | None = None,
    precipitation: list[float] | None = None,
    cloud_cover: list[float] | None = None,
) -> dict[str, Any]:
    """Archive response for 2024-07-01 with 24 hourly entries."""
    return {
        "latitude": 35.7,
        "longitude": 139.6875,
        "hourly": {
            "time": [f"2024-07-01T{h:02d}:00" for h in range(24)],
            "temperature_2m": temperatures or [20.0 + h / 10 for h in range(24)],
            "precipitation": precipitation or [0.1 * h for h in range(24)],
            "cloud_cover": cloud_cover or [h * 4 for h in range(24)],
        },
    }


def make_maps_payload(*timestamps: int) -> dict[str, Any]:
    """RainViewer weather-maps response with one past frame per timestamp."""
    return {
        "version": "2.0",
        "generated": JULY_1_MIDNIGHT,
        "host": "https://tilecache.rainviewer.com",
        "radar": {
            "past": [{"time": ts, "path": f"/v2/radar/{ts}"} for ts in timestamps],
            "nowcast": [],
        },
    }


@pytest.fixture
def archive_payload() -> dict[str, Any]:
    return make_archive_payload()


@pytest.fixture
def maps_payload() -> dict[str, Any]:
    return make_maps_payload(JULY_1_MIDNIGHT, JULY_1_MIDNIGHT + 600)
