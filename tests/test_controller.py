"""Tests for the snapshot controller (builder + view state)."""

from __future__ import annotations

import threading
from typing import Any
from unittest.mock import Mock, patch

import pytest

from conftest import JULY_1_MIDNIGHT, make_archive_payload, make_maps_payload
from weather_scrubber.config import Settings
from weather_scrubber.controller import (
    FetchOutcome,
    SnapshotController,
    collect_radar,
    collect_weather,
    default_fetchers,
    merge_snapshot,
)
from weather_scrubber.datasources.radar import RadarFrame, parse_radar_frames
from weather_scrubber.datasources.weather import WeatherSnapshot, parse_weather_snapshot
from weather_scrubber.errors import (
    BUILD_ERROR_MESSAGE,
    RADAR_ERROR_MESSAGE,
    WEATHER_ERROR_MESSAGE,
    DataShapeError,
    NetworkError,
)
from weather_scrubber.renderers.snapshot import build_page_html
from weather_scrubber.schemas import LoadState


def stub_weather(payload: dict[str, Any]) -> Mock:
    """Weather fetcher that parses a canned archive payload."""
    return Mock(side_effect=lambda hour: parse_weather_snapshot(payload, hour))


def stub_radar(payload: dict[str, Any]) -> Mock:
    """Radar fetcher that parses a canned weather-maps payload."""
    return Mock(side_effect=lambda: parse_radar_frames(payload))


class TestCollect:
    """Fetch failures come back as values."""

    def test_weather_success(self) -> None:
        snap = WeatherSnapshot("00:00", 18.4, 0, 55)
        outcome = collect_weather(lambda hour: snap, 0)
        assert outcome.ok
        assert outcome.value is snap

    def test_weather_failure_captured(self) -> None:
        error = NetworkError("weather", "boom")

        def fail(hour: int) -> WeatherSnapshot:
            raise error

        outcome = collect_weather(fail, 0)
        assert not outcome.ok
        assert outcome.error is error
        assert outcome.value is None

    def test_radar_failure_captured(self) -> None:
        outcome = collect_radar(stub_radar({"host": "x"}))
        assert isinstance(outcome.error, DataShapeError)

    def test_unexpected_exception_propagates(self) -> None:
        def broken() -> list[RadarFrame]:
            raise RuntimeError("bug")

        with pytest.raises(RuntimeError):
            collect_radar(broken)


class TestMergeSnapshot:
    def test_aligns_frames_to_weather_time(self) -> None:
        frames = [
            RadarFrame("00:00", "https://a", JULY_1_MIDNIGHT),
            RadarFrame("00:30", "https://b", JULY_1_MIDNIGHT + 1800),
        ]
        snapshot, errors = merge_snapshot(
            0,
            FetchOutcome(value=WeatherSnapshot("00:00", 18.4, 0, 55)),
            FetchOutcome(value=frames),
        )
        assert errors == []
        assert snapshot.radar_frames == tuple(frames)
        assert snapshot.aligned_frames == (frames[0],)

    def test_weather_failure_keeps_radar(self) -> None:
        frames = [RadarFrame("00:00", "https://a", JULY_1_MIDNIGHT)]
        error = DataShapeError("weather", "no hourly")
        snapshot, errors = merge_snapshot(0, FetchOutcome(error=error), FetchOutcome(value=frames))
        assert errors == [error]
        assert snapshot.weather is None
        assert snapshot.time is None
        assert snapshot.radar_frames == tuple(frames)
        assert snapshot.aligned_frames == ()

    def test_errors_weather_first(self) -> None:
        weather_error = NetworkError("weather", "down")
        radar_error = NetworkError("radar", "down")
        _, errors = merge_snapshot(
            3, FetchOutcome(error=weather_error), FetchOutcome(error=radar_error)
        )
        assert errors == [weather_error, radar_error]


class TestSelectHour:
    """Behaviour of a full slider change."""

    @pytest.mark.parametrize("hour", [0, 1, 12, 23])
    def test_selects_index(self, hour: int) -> None:
        controller = SnapshotController(
            stub_weather(make_archive_payload()), stub_radar(make_maps_payload())
        )

        state = controller.select_hour(hour)

        assert state.status is LoadState.READY
        assert state.hour == hour
        assert state.snapshot is not None
        assert state.snapshot.time == f"{hour:02d}:00"
        assert state.snapshot.temperature_c == 20.0 + hour / 10

    def test_end_to_end_hour_zero(self) -> None:
        payload = make_archive_payload(
            temperatures=[18.4] + [25.0] * 23,
            precipitation=[0.0] * 24,
            cloud_cover=[55.0] + [10.0] * 23,
        )
        controller = SnapshotController(
            stub_weather(payload), stub_radar(make_maps_payload(JULY_1_MIDNIGHT))
        )

        state = controller.select_hour(0)

        assert state.errors == ()
        snapshot = state.snapshot
        assert snapshot is not None
        assert snapshot.temperature_c == 18.4
        assert snapshot.precipitation_mm == 0
        assert snapshot.cloud_cover_pct == 55
        assert len(snapshot.aligned_frames) == 1
        assert snapshot.aligned_frames[0].time == "00:00"

    def test_missing_hourly_surfaces_weather_error(self) -> None:
        controller = SnapshotController(
            stub_weather({"latitude": 35.7}), stub_radar(make_maps_payload(JULY_1_MIDNIGHT))
        )

        state = controller.select_hour(0)

        assert state.status is LoadState.ERROR
        assert state.errors == (WEATHER_ERROR_MESSAGE,)
        assert state.error == WEATHER_ERROR_MESSAGE
        assert not state.loading

    @pytest.mark.parametrize(
        "weather_payload",
        [make_archive_payload(), {"latitude": 35.7}],
        ids=["weather-ok", "weather-broken"],
    )
    def test_missing_radar_past_surfaces_radar_error(self, weather_payload: dict[str, Any]) -> None:
        controller = SnapshotController(
            stub_weather(weather_payload), stub_radar({"host": "x", "radar": {}})
        )

        state = controller.select_hour(5)

        assert state.status is LoadState.ERROR
        assert RADAR_ERROR_MESSAGE in state.errors

    def test_idempotent(self) -> None:
        controller = SnapshotController(
            stub_weather(make_archive_payload()), stub_radar(make_maps_payload(JULY_1_MIDNIGHT))
        )

        first = controller.select_hour(7).snapshot
        second = controller.select_hour(7).snapshot

        assert first == second
        assert first is not second

    def test_fetches_again_each_time(self) -> None:
        weather = stub_weather(make_archive_payload())
        radar = stub_radar(make_maps_payload())
        controller = SnapshotController(weather, radar)

        controller.select_hour(2)
        controller.select_hour(2)

        assert weather.call_count == 2
        assert radar.call_count == 2

    def test_error_cleared_by_next_success(self) -> None:
        payloads = [{"latitude": 35.7}, make_archive_payload()]
        weather = Mock(side_effect=lambda hour: parse_weather_snapshot(payloads.pop(0), hour))
        controller = SnapshotController(weather, stub_radar(make_maps_payload()))

        assert controller.select_hour(1).errors == (WEATHER_ERROR_MESSAGE,)
        state = controller.select_hour(1)
        assert state.errors == ()
        assert state.status is LoadState.READY

    def test_missing_readings_render(self) -> None:
        """Null Open-Meteo samples settle READY and the page still renders."""
        payload = make_archive_payload()
        payload["hourly"]["precipitation"][3] = None
        payload["hourly"]["temperature_2m"][3] = None
        controller = SnapshotController(stub_weather(payload), stub_radar(make_maps_payload()))

        state = controller.select_hour(3)

        assert state.status is LoadState.READY
        html = build_page_html(state, 3)
        assert "Temperature: -&deg;C" in html
        assert "Precipitation: - mm" in html

    @pytest.mark.parametrize("hour", [-1, 24])
    def test_out_of_range_hour(self, hour: int) -> None:
        controller = SnapshotController(Mock(), Mock())
        with pytest.raises(ValueError):
            controller.select_hour(hour)


class TestRun:
    """A build's own result, and builds that raise."""

    def test_returns_own_state_when_superseded(self) -> None:
        payload = make_archive_payload()
        controller = SnapshotController(Mock(), stub_radar(make_maps_payload()))

        def weather_then_newer_request(hour: int) -> WeatherSnapshot:
            controller.begin(9)
            return parse_weather_snapshot(payload, hour)

        controller._fetch_weather = weather_then_newer_request

        state = controller.run(3)

        assert state.status is LoadState.READY
        assert state.hour == 3
        assert state.snapshot is not None
        assert state.snapshot.time == "03:00"
        # The newer request still owns the published state
        assert controller.state.loading
        assert controller.state.hour == 9

    def test_unexpected_error_settles_to_error(self) -> None:
        def broken(hour: int) -> WeatherSnapshot:
            raise KeyError("temperature_2m")

        controller = SnapshotController(broken, stub_radar(make_maps_payload()))

        with pytest.raises(KeyError):
            controller.select_hour(2)

        state = controller.state
        assert state.status is LoadState.ERROR
        assert not state.loading
        assert state.hour == 2
        assert state.errors == (BUILD_ERROR_MESSAGE,)

    def test_failure_cleared_by_next_success(self) -> None:
        weather = Mock(side_effect=[KeyError("time"), WeatherSnapshot("05:00", 20.0, 0, 10)])
        controller = SnapshotController(weather, stub_radar(make_maps_payload()))

        with pytest.raises(KeyError):
            controller.run(5)
        state = controller.run(5)

        assert state.status is LoadState.READY
        assert controller.state == state

    def test_stale_failure_discarded(self) -> None:
        controller = SnapshotController(Mock(), stub_radar(make_maps_payload()))

        def newer_request_then_fail(hour: int) -> WeatherSnapshot:
            controller.begin(9)
            raise KeyError("hourly")

        controller._fetch_weather = newer_request_then_fail

        with pytest.raises(KeyError):
            controller.run(3)

        assert controller.state.loading
        assert controller.state.hour == 9


class TestLoadingAndTokens:
    """State transitions and stale-result handling."""

    def test_initial_state_idle(self) -> None:
        controller = SnapshotController(Mock(), Mock())
        assert controller.state.status is LoadState.IDLE
        assert controller.state.snapshot is None

    def test_begin_publishes_loading_and_clears_errors(self) -> None:
        controller = SnapshotController(stub_weather({}), stub_radar(make_maps_payload()))
        controller.select_hour(0)
        assert controller.state.errors

        token = controller.begin(4)

        state = controller.state
        assert state.loading
        assert state.errors == ()
        assert state.hour == 4
        assert state.token == token

    def test_tokens_increase(self) -> None:
        controller = SnapshotController(Mock(), Mock())
        assert controller.begin(0) < controller.begin(1) < controller.begin(2)

    def test_stale_result_discarded(self) -> None:
        controller = SnapshotController(
            stub_weather(make_archive_payload()), stub_radar(make_maps_payload())
        )
        old_token = controller.begin(3)
        new_token = controller.begin(9)

        new_snapshot, new_errors = controller.build(9)
        assert controller.apply(new_token, new_snapshot, new_errors)
        old_snapshot, old_errors = controller.build(3)
        assert not controller.apply(old_token, old_snapshot, old_errors)

        assert controller.state.hour == 9
        assert controller.state.snapshot == new_snapshot

    def test_loading_visible_while_fetching(self) -> None:
        started = threading.Event()
        release = threading.Event()
        payload = make_archive_payload()

        def slow_weather(hour: int) -> WeatherSnapshot:
            started.set()
            release.wait(timeout=5)
            return parse_weather_snapshot(payload, hour)

        controller = SnapshotController(slow_weather, stub_radar(make_maps_payload()))
        worker = threading.Thread(target=controller.select_hour, args=(6,))
        worker.start()
        assert started.wait(timeout=5)

        assert controller.state.loading

        release.set()
        worker.join(timeout=5)
        assert controller.state.status is LoadState.READY

    def test_fetches_run_concurrently(self) -> None:
        radar_started = threading.Event()
        payload = make_archive_payload()

        def weather_waits_for_radar(hour: int) -> WeatherSnapshot:
            # Only completes if radar is already running alongside
            assert radar_started.wait(timeout=5)
            return parse_weather_snapshot(payload, hour)

        def radar() -> list[RadarFrame]:
            radar_started.set()
            return []

        controller = SnapshotController(weather_waits_for_radar, radar)
        assert controller.select_hour(0).status is LoadState.READY


class TestDefaultFetchers:
    """Settings are threaded into the datasource calls."""

    def test_weather_uses_settings(self) -> None:
        settings = Settings(lat=1.5, lon=2.5, timezone="Asia/Tokyo")
        fetch_weather, _ = default_fetchers(settings)

        with patch("weather_scrubber.controller.weather.fetch_weather_snapshot") as mock_fetch:
            fetch_weather(4)

        mock_fetch.assert_called_once_with(4, lat=1.5, lon=2.5, timezone="Asia/Tokyo")

    def test_radar_uses_timezone(self) -> None:
        _, fetch_radar = default_fetchers(Settings(timezone="Europe/Oslo"))

        with patch("weather_scrubber.controller.radar.fetch_radar_frames") as mock_fetch:
            fetch_radar()

        mock_fetch.assert_called_once_with(timezone="Europe/Oslo")
