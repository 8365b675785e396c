"""
Snapshot builder: turns a selected hour into a published view state.

State machine::

    IDLE/READY/ERROR --begin(hour)--> LOADING --apply(token)--> READY | ERROR

``begin`` publishes LOADING synchronously and hands out a request token.
Weather and radar are then fetched concurrently; each fetcher reports back a
``FetchOutcome`` instead of touching state.  The merged result is applied only
if its token is still the newest one issued, so a slow response for an old
slider position can never overwrite a newer one.  A build that raises
instead of returning still settles its token to ERROR before the exception
propagates.

Usage::

    controller = SnapshotController()
    state = controller.select_hour(5)
    if state.error:
        print(state.error)
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Generic, TypeVar

from weather_scrubber.analysis import align_frames
from weather_scrubber.config import Settings, get_settings
from weather_scrubber.datasources import radar, weather
from weather_scrubber.datasources.radar import RadarFrame
from weather_scrubber.datasources.weather import WeatherSnapshot
from weather_scrubber.errors import BUILD_ERROR_MESSAGE, FetchError
from weather_scrubber.schemas import LoadState, Snapshot, ViewState

logger = logging.getLogger(__name__)

T = TypeVar("T")

WeatherFetcher = Callable[[int], WeatherSnapshot]
RadarFetcher = Callable[[], list[RadarFrame]]


@dataclass(frozen=True)
class FetchOutcome(Generic[T]):
    """Value or error from one fetcher."""

    value: T | None = None
    error: FetchError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def _collect(source: str, fetch: Callable[[], T]) -> FetchOutcome[T]:
    try:
        return FetchOutcome(value=fetch())
    except FetchError as exc:
        logger.warning("Error fetching %s data: %s", source, exc, exc_info=exc.cause)
        return FetchOutcome(error=exc)


def collect_weather(fetch: WeatherFetcher, hour: int) -> FetchOutcome[WeatherSnapshot]:
    """Run the weather fetcher, capturing its failure as a value."""
    return _collect("weather", lambda: fetch(hour))


def collect_radar(fetch: RadarFetcher) -> FetchOutcome[list[RadarFrame]]:
    """Run the radar fetcher, capturing its failure as a value."""
    return _collect("radar", fetch)


def merge_snapshot(
    hour: int,
    weather_outcome: FetchOutcome[WeatherSnapshot],
    radar_outcome: FetchOutcome[list[RadarFrame]],
) -> tuple[Snapshot, list[FetchError]]:
    """
    Merge both outcomes into one snapshot.

    Whatever succeeded is kept; radar alignment needs a weather time, so
    ``aligned_frames`` stays empty when weather failed.

    Returns:
        The snapshot and the errors, weather first.
    """
    frames = tuple(radar_outcome.value or ())
    aligned: tuple[RadarFrame, ...] = ()
    if weather_outcome.value is not None:
        aligned = tuple(align_frames(weather_outcome.value.time, list(frames)))

    snapshot = Snapshot(
        hour=hour,
        weather=weather_outcome.value,
        radar_frames=frames,
        aligned_frames=aligned,
    )
    errors = [o.error for o in (weather_outcome, radar_outcome) if o.error is not None]
    return snapshot, errors


def settled_state(snapshot: Snapshot, errors: list[FetchError], token: int = 0) -> ViewState:
    """View state once a build has finished: ERROR if anything failed, else READY."""
    return ViewState(
        status=LoadState.ERROR if errors else LoadState.READY,
        token=token,
        hour=snapshot.hour,
        snapshot=snapshot,
        errors=tuple(e.user_message for e in errors),
    )


def failed_state(hour: int, token: int = 0) -> ViewState:
    """View state for a build that raised instead of returning a snapshot."""
    return ViewState(
        status=LoadState.ERROR, token=token, hour=hour, errors=(BUILD_ERROR_MESSAGE,)
    )


def default_fetchers(settings: Settings) -> tuple[WeatherFetcher, RadarFetcher]:
    """Fetchers bound to the configured location and timezone."""

    def fetch_weather(hour: int) -> WeatherSnapshot:
        return weather.fetch_weather_snapshot(
            hour,
            lat=settings.lat,
            lon=settings.lon,
            timezone=settings.timezone,
        )

    def fetch_radar() -> list[RadarFrame]:
        return radar.fetch_radar_frames(timezone=settings.timezone)

    return fetch_weather, fetch_radar


class SnapshotController:
    """Owns the single view state and the request-token counter."""

    def __init__(
        self,
        weather_fetcher: WeatherFetcher | None = None,
        radar_fetcher: RadarFetcher | None = None,
        *,
        settings: Settings | None = None,
    ) -> None:
        default_weather, default_radar = default_fetchers(settings or get_settings())
        self._fetch_weather = weather_fetcher or default_weather
        self._fetch_radar = radar_fetcher or default_radar
        self._lock = threading.Lock()
        self._latest_token = 0
        self._state = ViewState()

    @property
    def state(self) -> ViewState:
        with self._lock:
            return self._state

    def begin(self, hour: int) -> int:
        """Publish LOADING for ``hour`` and return its request token."""
        _check_hour(hour)
        with self._lock:
            self._latest_token += 1
            token = self._latest_token
            self._state = self._state.model_copy(
                update={"status": LoadState.LOADING, "token": token, "hour": hour, "errors": ()}
            )
        return token

    def build(self, hour: int) -> tuple[Snapshot, list[FetchError]]:
        """Fetch weather and radar concurrently and merge them; no state is touched."""
        _check_hour(hour)
        with ThreadPoolExecutor(max_workers=2, thread_name_prefix="snapshot") as pool:
            weather_future = pool.submit(collect_weather, self._fetch_weather, hour)
            radar_future = pool.submit(collect_radar, self._fetch_radar)
            weather_outcome = weather_future.result()
            radar_outcome = radar_future.result()
        return merge_snapshot(hour, weather_outcome, radar_outcome)

    def apply(self, token: int, snapshot: Snapshot, errors: list[FetchError]) -> bool:
        """
        Publish a finished build if ``token`` is still the newest.

        Returns:
            True if the state was replaced, False if the result was stale.
        """
        return self._publish(settled_state(snapshot, errors, token))

    def run(self, hour: int) -> ViewState:
        """
        Build ``hour`` under a fresh token and return the state this build produced.

        The returned state belongs to this request even when a newer one has
        since taken over the published state.  If the build raises, ERROR is
        published for the token before the exception propagates, so the
        published state never stays LOADING.
        """
        token = self.begin(hour)
        try:
            snapshot, errors = self.build(hour)
        except Exception:
            self._publish(failed_state(hour, token))
            raise
        state = settled_state(snapshot, errors, token)
        self._publish(state)
        return state

    def select_hour(self, hour: int) -> ViewState:
        """Handle a slider change end to end and return the published state afterwards."""
        self.run(hour)
        return self.state

    def _publish(self, state: ViewState) -> bool:
        with self._lock:
            if state.token != self._latest_token:
                logger.debug(
                    "Discarding stale snapshot (token %d, latest %d)",
                    state.token,
                    self._latest_token,
                )
                return False
            self._state = state
            return True


def _check_hour(hour: int) -> None:
    if not 0 <= hour <= 23:
        raise ValueError(f"hour must be in [0, 23], got {hour}")
