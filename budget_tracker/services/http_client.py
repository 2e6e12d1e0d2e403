from __future__ import annotations

"""Lightweight HTTP client util.

Uses stdlib urllib; the only outbound call is a read-only GET of the exchange
rate endpoint, so no session handling or retry policy lives here. Callers
schedule the next attempt themselves.
"""
import http.client
import json
import urllib.error
import urllib.request
from typing import Any, Dict


class HttpError(Exception):
    pass


def get_json(url: str, *, timeout: float = 5.0) -> Dict[str, Any]:
    try:
        with urllib.request.urlopen(url, timeout=timeout) as resp:  # nosec B310
            if resp.status >= 400:
                raise HttpError(f"HTTP {resp.status} for {url}")
            data = resp.read()
            payload = json.loads(data.decode("utf-8"))
    except (OSError, http.client.HTTPException, ValueError) as e:  # ValueError for JSON decode
        raise HttpError(f"Failed to fetch JSON from {url}: {e}") from e
    if not isinstance(payload, dict):
        raise HttpError(f"Unexpected JSON payload from {url}")
    return payload
