"""
Interactive slider server.

Serves the slider page over ``http.server``.  Every request for
``/?hour=N`` runs one snapshot build through the shared controller;
``/api/state`` returns the current view state as JSON.
"""

from __future__ import annotations

import http.server
import logging
from http import HTTPStatus
from typing import Any
from urllib.parse import parse_qs, urlsplit

from weather_scrubber.controller import SnapshotController, failed_state
from weather_scrubber.renderers.snapshot import build_page_html

logger = logging.getLogger(__name__)


def parse_hour(query: str, default: int = 0) -> int:
    """Read ``hour`` from a query string; raises ValueError if it is not 0-23."""
    values = parse_qs(query).get("hour")
    if not values:
        return default
    hour = int(values[0])
    if not 0 <= hour <= 23:
        raise ValueError(f"hour must be in [0, 23], got {hour}")
    return hour


class SliderHandler(http.server.BaseHTTPRequestHandler):
    """Request handler bound to one ``SnapshotController``."""

    controller: SnapshotController

    def do_GET(self) -> None:  # noqa: N802
        url = urlsplit(self.path)
        if url.path == "/api/state":
            self._send(HTTPStatus.OK, self.controller.state.model_dump_json(), "application/json")
            return
        if url.path != "/":
            self._send(HTTPStatus.NOT_FOUND, "Not found", "text/plain")
            return

        try:
            hour = parse_hour(url.query)
        except ValueError as exc:
            self._send(HTTPStatus.BAD_REQUEST, str(exc), "text/plain")
            return

        try:
            state = self.controller.run(hour)
        except Exception:
            logger.exception("Snapshot build for hour %d failed", hour)
            page = build_page_html(failed_state(hour), hour)
            self._send(HTTPStatus.INTERNAL_SERVER_ERROR, page, "text/html")
            return
        # The page shows this request's own build, even if a newer one is now published.
        self._send(HTTPStatus.OK, build_page_html(state, hour), "text/html")

    def log_message(self, format: str, *args: Any) -> None:  # noqa: A002
        logger.info("%s - %s", self.address_string(), format % args)

    def _send(self, status: HTTPStatus, body: str, content_type: str) -> None:
        payload = body.encode("utf-8")
        self.send_response(status)
        self.send_header("Content-Type", f"{content_type}; charset=utf-8")
        self.send_header("Content-Length", str(len(payload)))
        self.end_headers()
        self.wfile.write(payload)


def create_server(
    port: int, controller: SnapshotController | None = None, host: str = ""
) -> http.server.ThreadingHTTPServer:
    """Build a threaded server whose handler shares one controller."""
    handler = type(
        "BoundSliderHandler", (SliderHandler,), {"controller": controller or SnapshotController()}
    )
    return http.server.ThreadingHTTPServer((host, port), handler)
