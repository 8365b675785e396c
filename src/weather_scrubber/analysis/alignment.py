"""Match radar frames to the selected weather hour.

Both sides carry only a local ``HH:MM`` label, so they are compared as
times of day anchored to the same calendar day.
"""

from __future__ import annotations

from datetime import date, datetime, time, timedelta
from typing import TYPE_CHECKING

from weather_scrubber.datasources.weather.client import TARGET_DATE

if TYPE_CHECKING:
    from weather_scrubber.datasources.radar import RadarFrame

DEFAULT_TOLERANCE = timedelta(minutes=10)


def anchor_time(label: str, day: date = TARGET_DATE) -> datetime:
    """Parse an ``HH:MM`` label into a datetime on ``day``."""
    return datetime.combine(day, time.fromisoformat(label))


def align_frames(
    weather_time: str,
    frames: list[RadarFrame],
    tolerance: timedelta = DEFAULT_TOLERANCE,
) -> list[RadarFrame]:
    """
    Keep frames strictly within ``tolerance`` of the weather hour.

    A frame exactly ``tolerance`` away is dropped.  Frames whose time label
    cannot be parsed are dropped as well.

    Args:
        weather_time: Selected hour as ``HH:MM``.
        frames: Candidate radar frames, in feed order.
        tolerance: Half-width of the exclusive window.

    Returns:
        Matching frames, order preserved.
    """
    selected = anchor_time(weather_time)
    aligned = []
    for frame in frames:
        try:
            frame_time = anchor_time(frame.time)
        except ValueError:
            continue
        if abs(frame_time - selected) < tolerance:
            aligned.append(frame)
    return aligned
