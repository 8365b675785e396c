"""
Structured fetch errors.

Fetchers raise these instead of writing user-facing state. The controller
turns them into messages via ``user_message`` and keeps ``cause`` around
for logging and tests.
"""

from __future__ import annotations

from enum import StrEnum

WEATHER_ERROR_MESSAGE = "Failed to fetch weather data. Please try again later."
RADAR_ERROR_MESSAGE = "Failed to fetch radar data. Please try again later."
BUILD_ERROR_MESSAGE = "Failed to build the snapshot. Please try again later."

_USER_MESSAGES = {
    "weather": WEATHER_ERROR_MESSAGE,
    "radar": RADAR_ERROR_MESSAGE,
}


class ErrorKind(StrEnum):
    """What went wrong while fetching."""

    NETWORK = "network"
    DATA_SHAPE = "data_shape"


class FetchError(Exception):
    """A fetch from one upstream API failed."""

    kind: ErrorKind = ErrorKind.NETWORK

    def __init__(self, source: str, detail: str, cause: BaseException | None = None) -> None:
        super().__init__(f"{source}: {detail}")
        self.source = source
        self.detail = detail
        self.cause = cause

    @property
    def user_message(self) -> str:
        """Fixed human-readable message for the failing source."""
        return _USER_MESSAGES.get(self.source, "Failed to fetch data. Please try again later.")


class NetworkError(FetchError):
    """The request could not be completed (transport, HTTP status, or undecodable body)."""

    kind = ErrorKind.NETWORK


class DataShapeError(FetchError):
    """The response parsed but is missing the expected container."""

    kind = ErrorKind.DATA_SHAPE
