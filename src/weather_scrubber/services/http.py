"""
HTTP session shared by the Open-Meteo and RainViewer clients.

A slider user is waiting on every request, so retries are few and short:
idempotent requests that hit a rate limit or a gateway error are repeated
at most twice, and every request carries a timeout even when the caller
did not pass one.

Usage::

    from weather_scrubber.services.http import session

    resp = session.get("https://api.rainviewer.com/public/weather-maps.json")
    resp.raise_for_status()
"""

from __future__ import annotations

from typing import Any

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from weather_scrubber.config import get_settings

#: Two quick retries on 429 and gateway failures; other statuses go to raise_for_status().
DEFAULT_RETRY = Retry(
    total=2,
    backoff_factor=0.5,
    status_forcelist=[429, 502, 503, 504],
    allowed_methods=["GET", "HEAD"],
    raise_on_status=False,
)

DEFAULT_TIMEOUT = 30  # seconds

USER_AGENT = "weather-scrubber/0.1"


class TimeoutSession(requests.Session):
    """A ``requests.Session`` that fills in ``timeout`` when a request has none."""

    def __init__(self, timeout: float = DEFAULT_TIMEOUT) -> None:
        super().__init__()
        self.timeout = timeout

    def send(self, request: requests.PreparedRequest, **kwargs: Any) -> requests.Response:
        # Session.request always forwards timeout, as None when unset
        if kwargs.get("timeout") is None:
            kwargs["timeout"] = self.timeout
        return super().send(request, **kwargs)


def create_session(
    retry: Retry | None = None,
    timeout: float = DEFAULT_TIMEOUT,
) -> requests.Session:
    """
    Return a session for both upstream APIs.

    Args:
        retry: Retry policy for the mounted adapter; ``DEFAULT_RETRY`` if omitted.
        timeout: Seconds to wait when a request does not set its own timeout.
    """
    s = TimeoutSession(timeout)
    adapter = HTTPAdapter(max_retries=retry or DEFAULT_RETRY)
    for prefix in ("https://", "http://"):
        s.mount(prefix, adapter)
    s.headers["User-Agent"] = USER_AGENT
    return s


#: Process-wide session, timeout taken from settings.
session: requests.Session = create_session(timeout=get_settings().http_timeout)
