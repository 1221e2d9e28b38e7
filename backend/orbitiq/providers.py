"""Upstream HTTP providers: N2YO (keyed), CelesTrak and Open Notify (keyless).

Each client wraps a shared ``httpx.AsyncClient``. Transport problems surface
as ``httpx.HTTPError`` (``UpstreamUnavailable`` for N2YO, whose URLs carry
the API key); payloads that arrive but cannot be trusted (empty,
malformed, or carrying a provider-level error such as a quota message in a
200 body) raise ``ProviderError``. Callers treat both the same way.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, NamedTuple

import httpx

from orbitiq.config import Settings
from orbitiq.tle import extract_tle, find_in_bulk

logger = logging.getLogger(__name__)

USER_AGENT = "orbitiq/1.0"

# Constellations with dedicated CelesTrak group files, scanned in this order.
BULK_GROUPS = ("STARLINK", "ONEWEB")


class ProviderError(Exception):
    """Upstream answered, but the payload is unusable."""


class UpstreamUnavailable(ProviderError):
    """Upstream unreachable or answered with an HTTP error status.

    Raised by the N2YO client in place of the httpx exception so that the
    message never carries the keyed request URL.
    """


class NoPositionData(ProviderError):
    """N2YO answered without any position fix."""


def build_http_client() -> httpx.AsyncClient:
    return httpx.AsyncClient(
        follow_redirects=True,
        headers={"User-Agent": USER_AGENT},
    )


class Observer(NamedTuple):
    """Ground observer for N2YO queries (degrees, degrees, metres)."""

    latitude: float = 0.0
    longitude: float = 0.0
    altitude: float = 0.0


@dataclass
class LivePosition:
    name: str | None
    intl_des: str | None
    latitude: float
    longitude: float
    altitude: float
    velocity_kms: float | None
    timestamp: datetime


def _to_float(value: Any, field_name: str) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        raise ProviderError(f"non-numeric {field_name}: {value!r}") from None


def _epoch(value: Any) -> datetime:
    try:
        return datetime.fromtimestamp(float(value), tz=timezone.utc)
    except (TypeError, ValueError, OverflowError, OSError):
        return datetime.now(timezone.utc)


def parse_n2yo_positions(payload: Any) -> LivePosition:
    """Validate an N2YO /positions body and pull out the first fix."""
    if not isinstance(payload, dict):
        raise ProviderError("positions payload is not an object")
    if payload.get("error"):
        raise ProviderError(str(payload["error"]))
    positions = payload.get("positions")
    if not isinstance(positions, list) or not positions or not isinstance(positions[0], dict):
        raise NoPositionData("No position data available")

    fix = positions[0]
    info = payload.get("info") if isinstance(payload.get("info"), dict) else {}
    velocity = fix.get("velocity")

    return LivePosition(
        name=(info.get("satname") or "").strip() or None,
        intl_des=(info.get("intldes") or "").strip() or None,
        latitude=_to_float(fix.get("satlatitude"), "satlatitude"),
        longitude=_to_float(fix.get("satlongitude"), "satlongitude"),
        altitude=_to_float(fix.get("sataltitude"), "sataltitude"),
        velocity_kms=_to_float(velocity, "velocity") if velocity else None,
        timestamp=_epoch(fix.get("timestamp")),
    )


class N2YOClient:
    """N2YO REST client. Every call needs the API key."""

    def __init__(self, http: httpx.AsyncClient, settings: Settings):
        self._http = http
        self.settings = settings

    @property
    def enabled(self) -> bool:
        return self.settings.has_n2yo_key

    def _redact(self, text: str) -> str:
        key = self.settings.n2yo_api_key
        return text.replace(key, "HIDDEN") if key else text

    async def _get_json(self, url: str, timeout: float, params: dict | None = None) -> Any:
        try:
            resp = await self._http.get(url, params=params, timeout=timeout)
            resp.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise UpstreamUnavailable(
                f"HTTP {exc.response.status_code} from {self._redact(str(exc.request.url))}"
            ) from None
        except httpx.HTTPError as exc:
            raise UpstreamUnavailable(self._redact(str(exc) or type(exc).__name__)) from None
        try:
            return resp.json()
        except ValueError:
            raise ProviderError(f"non-JSON body from {self._redact(str(resp.url))}") from None

    def _positions_url(self, norad_id: int, observer: Observer | None = None) -> str:
        # N2YO takes the key as a trailing path segment on these endpoints.
        lat, lng, alt = observer or Observer()
        return (
            f"{self.settings.n2yo_base_url}/positions/{norad_id}/{lat:g}/{lng:g}/{alt:g}/1/"
            f"&apiKey={self.settings.n2yo_api_key}"
        )

    async def fetch_position(
        self,
        norad_id: int,
        timeout: float | None = None,
        observer: Observer | None = None,
    ) -> LivePosition:
        if not self.enabled:
            raise ProviderError("No API key configured")
        payload = await self._get_json(
            self._positions_url(norad_id, observer),
            timeout if timeout is not None else self.settings.position_timeout,
        )
        return parse_n2yo_positions(payload)

    async def fetch_above(
        self,
        observer: Observer,
        radius: float,
        timeout: float | None = None,
    ) -> dict[str, Any]:
        """Objects currently above an observer, within ``radius`` degrees."""
        if not self.enabled:
            raise ProviderError("No API key configured")
        url = (
            f"{self.settings.n2yo_base_url}/above/"
            f"{observer.latitude:g}/{observer.longitude:g}/{observer.altitude:g}/{radius:g}/0/"
            f"&apiKey={self.settings.n2yo_api_key}"
        )
        payload = await self._get_json(
            url, timeout if timeout is not None else self.settings.position_timeout
        )
        if not isinstance(payload, dict):
            raise ProviderError("above payload is not an object")
        if payload.get("error"):
            raise ProviderError(str(payload["error"]))
        if not isinstance(payload.get("above"), list):
            payload["above"] = []
        return payload

    async def fetch_tle(self, norad_id: int, timeout: float | None = None) -> str | None:
        """Raw TLE text for one satellite, or None when the body has no 'tle'."""
        if not self.enabled:
            raise ProviderError("No API key configured")
        payload = await self._get_json(
            f"{self.settings.n2yo_base_url}/tle/{norad_id}",
            timeout if timeout is not None else self.settings.tle_timeout,
            params={"apiKey": self.settings.n2yo_api_key},
        )
        if not isinstance(payload, dict):
            raise ProviderError("TLE payload is not an object")
        if payload.get("error"):
            raise ProviderError(str(payload["error"]))
        tle = payload.get("tle")
        return tle if isinstance(tle, str) and tle.strip() else None

    async def probe(self) -> dict[str, Any]:
        """Connectivity check against the ISS positions endpoint."""
        url = self._positions_url(25544)
        logger.info("Testing N2YO connectivity: %s", self._redact(url))
        try:
            resp = await self._http.get(url, timeout=self.settings.probe_timeout)
        except httpx.HTTPError as exc:
            reason = self._redact(str(exc) or type(exc).__name__)
            logger.warning("N2YO connectivity test failed: %s", reason)
            return {"success": False, "status": None, "error": reason}

        try:
            data = resp.json()
        except ValueError:
            data = None
        data = data if isinstance(data, dict) else {}
        positions = data.get("positions")
        has_positions = isinstance(positions, list) and len(positions) > 0
        error = data.get("error")
        return {
            "success": has_positions and not error and resp.is_success,
            "status": resp.status_code,
            "dataKeys": sorted(data.keys()),
            "hasPositions": has_positions,
            "error": error or None,
            "message": (
                "N2YO API is working correctly"
                if has_positions
                else "N2YO API reachable but returned no positions (possibly rate limit/quota)"
            ),
        }


class CelestrakClient:
    """Keyless CelesTrak GP queries in TLE format."""

    def __init__(self, http: httpx.AsyncClient, settings: Settings):
        self._http = http
        self.settings = settings

    async def _get_text(self, params: dict[str, str], timeout: float) -> str:
        resp = await self._http.get(self.settings.celestrak_base_url, params=params, timeout=timeout)
        resp.raise_for_status()
        return resp.text

    async def fetch_tle(self, norad_id: int) -> tuple[str, str] | None:
        text = await self._get_text(
            {"CATNR": str(norad_id), "FORMAT": "TLE"},
            self.settings.celestrak_timeout,
        )
        pair = extract_tle(text)
        if pair is None:
            logger.info("CelesTrak returned no/invalid TLE for %d", norad_id)
        return pair

    async def find_in_group(self, group: str, norad_id: int) -> tuple[str, str] | None:
        text = await self._get_text(
            {"GROUP": group, "FORMAT": "TLE"},
            self.settings.group_timeout,
        )
        return find_in_bulk(text, norad_id)


class OpenNotifyClient:
    """ISS-only live position feed."""

    def __init__(self, http: httpx.AsyncClient, settings: Settings):
        self._http = http
        self.settings = settings

    async def iss_now(self) -> tuple[float, float, datetime]:
        resp = await self._http.get(
            self.settings.open_notify_url, timeout=self.settings.position_timeout
        )
        resp.raise_for_status()
        try:
            data = resp.json()
        except ValueError:
            raise ProviderError("non-JSON body from Open Notify") from None
        pos = data.get("iss_position") if isinstance(data, dict) else None
        if not isinstance(pos, dict):
            raise ProviderError("iss_position missing")
        return (
            _to_float(pos.get("latitude"), "latitude"),
            _to_float(pos.get("longitude"), "longitude"),
            _epoch(data.get("timestamp")),
        )
