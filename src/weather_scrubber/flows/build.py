"""
Prefect flow that builds a static snapshot page for one hour.

Fetches weather and radar concurrently, merges them the same way the
interactive controller does, and writes ``<site_dir>/index.html``.

Run locally:
    python -m weather_scrubber.flows.build 13
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Any

from prefect import flow, task

from weather_scrubber.config import get_settings
from weather_scrubber.controller import (
    FetchOutcome,
    collect_radar,
    collect_weather,
    default_fetchers,
    merge_snapshot,
    settled_state,
)
from weather_scrubber.datasources.radar import RadarFrame  # noqa: TC001
from weather_scrubber.datasources.weather import WeatherSnapshot  # noqa: TC001
from weather_scrubber.renderers.snapshot import build_page_html


@task(name="fetch-weather")
def fetch_weather(hour: int) -> FetchOutcome[WeatherSnapshot]:
    """Fetch the archive readings for ``hour``."""
    fetch, _ = default_fetchers(get_settings())
    return collect_weather(fetch, hour)


@task(name="fetch-radar")
def fetch_radar() -> FetchOutcome[list[RadarFrame]]:
    """Fetch every past radar frame."""
    _, fetch = default_fetchers(get_settings())
    return collect_radar(fetch)


@task(name="write-site")
def write_site(html: str, site_dir: Path) -> Path:
    """Write HTML to site directory."""
    site_dir.mkdir(parents=True, exist_ok=True)
    output_path = site_dir / "index.html"
    with output_path.open("w") as f:
        f.write(html)
    return output_path


@flow(name="build-snapshot-page", log_prints=True)
def build_snapshot_page(hour: int = 0, site_dir: Path | None = None) -> dict[str, Any]:
    """
    Build a static page showing the snapshot for ``hour``.

    Returns:
        Summary dict with the hour, output path, and any user-facing errors.
    """
    if not 0 <= hour <= 23:
        raise ValueError(f"hour must be in [0, 23], got {hour}")
    settings = get_settings()
    site_dir = site_dir or Path(settings.site_dir)

    print(f"Fetching weather and radar for hour {hour}...")
    weather_future = fetch_weather.submit(hour)
    radar_future = fetch_radar.submit()
    snapshot, errors = merge_snapshot(hour, weather_future.result(), radar_future.result())

    for error in errors:
        print(f"Warning: {error.user_message} ({error})")

    state = settled_state(snapshot, errors)

    print("Building HTML...")
    html = build_page_html(state, hour, interactive=False)

    print("Writing site...")
    output_path = write_site(html, site_dir)

    print(f"Site built: {output_path}")
    return {
        "hour": hour,
        "output": str(output_path),
        "errors": list(state.errors),
        "aligned_frames": len(snapshot.aligned_frames),
    }


if __name__ == "__main__":
    result = build_snapshot_page(int(sys.argv[1]) if len(sys.argv) > 1 else 0)
    print(f"Flow complete: {result}")
