from __future__ import annotations

"""Lightweight HTTP client util.

Uses stdlib urllib; the only outbound call is a GET for a JSON rate table,
so a client library would add nothing. One attempt per call: the periodic
refresh is the only retry.
"""
import http.client
import json
import urllib.request
from typing import Any, Dict


class HttpError(Exception):
    pass


def get_json(url: str, *, timeout: float = 5.0) -> Dict[str, Any]:
    try:
        req = urllib.request.Request(url, headers={"Accept": "application/json"})
        with urllib.request.urlopen(req, timeout=timeout) as resp:  # nosec B310
            if resp.status >= 400:
                raise HttpError(f"HTTP {resp.status} for {url}")
            data = resp.read()
            payload = json.loads(data.decode("utf-8"))
    except (
        OSError,  # URLError, HTTPError, timeouts, connection resets
        http.client.HTTPException,
        ValueError,
    ) as e:  # ValueError for JSON / UTF-8 decode
        raise HttpError(f"Failed to fetch JSON from {url}: {e}") from e
    if not isinstance(payload, dict):
        raise HttpError(f"Expected a JSON object from {url}")
    return payload
