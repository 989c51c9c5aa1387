from __future__ import annotations

import json
import logging
import socket
import urllib.error
import urllib.parse
import urllib.request
from typing import Any, Dict, Mapping

from minefield.constants import REQUEST_TIMEOUT
from minefield.leaderboard.errors import TransportError

logger = logging.getLogger(__name__)


def build_url(endpoint: str, params: Mapping[str, str] | None = None) -> str:
    if not params:
        return endpoint
    separator = "&" if "?" in endpoint else "?"
    return endpoint + separator + urllib.parse.urlencode(params)


class HttpTransport:
    """Blocking JSON-over-HTTP calls; run them off the UI thread."""

    def __init__(self, timeout: float = REQUEST_TIMEOUT):
        self.timeout = timeout

    def post_json(self, url: str, payload: Mapping[str, Any]) -> None:
        """Send ``payload`` and discard the response.

        The endpoint's reply is opaque to the game, so only transport level
        failures are reported.
        """
        body = json.dumps(payload).encode("utf-8")
        request = urllib.request.Request(
            url,
            data=body,
            method="POST",
            headers={"Content-Type": "application/json"},
        )
        try:
            with urllib.request.urlopen(request, timeout=self.timeout) as response:
                response.read()
        except (urllib.error.URLError, socket.timeout, OSError) as exc:
            raise TransportError(f"Could not reach leaderboard: {_describe(exc)}") from exc

    def get_json(self, url: str) -> Dict[str, Any]:
        request = urllib.request.Request(url, method="GET", headers={"Accept": "application/json"})
        try:
            with urllib.request.urlopen(request, timeout=self.timeout) as response:
                raw = response.read()
        except (urllib.error.URLError, socket.timeout, OSError) as exc:
            raise TransportError(f"Could not reach leaderboard: {_describe(exc)}") from exc
        try:
            data = json.loads(raw.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as exc:
            raise TransportError("Leaderboard sent an unreadable response") from exc
        if not isinstance(data, dict):
            raise TransportError("Leaderboard sent an unexpected response")
        return data


def _describe(exc: BaseException) -> str:
    if isinstance(exc, urllib.error.HTTPError):
        return f"HTTP {exc.code}"
    if isinstance(exc, urllib.error.URLError):
        return str(exc.reason)
    return str(exc) or exc.__class__.__name__
