"""
View models for the scrubber.

Pydantic models the controller publishes and the renderers consume.
Every record is frozen: a state change replaces the whole record.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field, computed_field

from weather_scrubber.datasources.radar import RadarFrame  # noqa: TC001 (pydantic needs it at runtime)
from weather_scrubber.datasources.weather import WeatherSnapshot  # noqa: TC001


class LoadState(StrEnum):
    """Where the view is in its fetch cycle."""

    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"
    ERROR = "error"


class Snapshot(BaseModel):
    """Weather for one hour merged with the radar frames fetched alongside it."""

    model_config = ConfigDict(frozen=True)

    hour: int = Field(..., ge=0, le=23)
    weather: WeatherSnapshot | None = None
    radar_frames: tuple[RadarFrame, ...] = ()
    aligned_frames: tuple[RadarFrame, ...] = ()

    @computed_field  # type: ignore[prop-decorator]
    @property
    def time(self) -> str | None:
        """Local ``HH:MM`` of the weather hour."""
        return self.weather.time if self.weather else None

    @computed_field  # type: ignore[prop-decorator]
    @property
    def temperature_c(self) -> float | None:
        return self.weather.temperature_c if self.weather else None

    @computed_field  # type: ignore[prop-decorator]
    @property
    def precipitation_mm(self) -> float | None:
        return self.weather.precipitation_mm if self.weather else None

    @computed_field  # type: ignore[prop-decorator]
    @property
    def cloud_cover_pct(self) -> float | None:
        return self.weather.cloud_cover_pct if self.weather else None


class ViewState(BaseModel):
    """Everything the page needs to draw itself."""

    model_config = ConfigDict(frozen=True)

    status: LoadState = LoadState.IDLE
    token: int = 0
    hour: int | None = None
    snapshot: Snapshot | None = None
    errors: tuple[str, ...] = ()

    @property
    def loading(self) -> bool:
        return self.status is LoadState.LOADING

    @property
    def error(self) -> str | None:
        """All error messages as one banner line, or None."""
        return " ".join(self.errors) if self.errors else None
