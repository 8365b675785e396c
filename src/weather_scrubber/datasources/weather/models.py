"""Weather data models."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class WeatherSnapshot:
    """Weather readings for one hour of the target day.

    Open-Meteo reports a missing sample as ``null``, so any reading may be None.
    """

    time: str  # local "HH:MM"
    temperature_c: float | None
    precipitation_mm: float | None
    cloud_cover_pct: float | None

    @property
    def is_wet(self) -> bool:
        """Whether any precipitation fell in the hour."""
        return self.precipitation_mm is not None and self.precipitation_mm > 0
