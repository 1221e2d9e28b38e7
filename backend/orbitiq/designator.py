"""International designator recovery from two-line element sets.

Tier order: cache, N2YO /tle (with one slower retry), CelesTrak by catalog
number, then the CelesTrak STARLINK and ONEWEB group files. The first
structurally valid element set wins; its line 1 is parsed and the result
cached. ``resolve`` never raises.
"""

from __future__ import annotations

import logging

from orbitiq.designator_cache import DesignatorCache
from orbitiq.fallback import first_success
from orbitiq.providers import BULK_GROUPS, CelestrakClient, N2YOClient, UpstreamUnavailable
from orbitiq.tle import extract_tle, parse_designator

logger = logging.getLogger(__name__)


class DesignatorResolver:
    def __init__(
        self,
        n2yo: N2YOClient,
        celestrak: CelestrakClient,
        cache: DesignatorCache,
        groups: tuple[str, ...] = BULK_GROUPS,
    ):
        self.n2yo = n2yo
        self.celestrak = celestrak
        self.cache = cache
        self.groups = groups

    async def _n2yo_tle(self, norad_id: int) -> tuple[str, str] | None:
        if not self.n2yo.enabled:
            return None
        settings = self.n2yo.settings
        try:
            raw = await self.n2yo.fetch_tle(norad_id, timeout=settings.tle_timeout)
        except UpstreamUnavailable as exc:
            logger.info("[intlDes] First attempt failed for %d: %s. Retrying...", norad_id, exc)
            raw = await self.n2yo.fetch_tle(norad_id, timeout=settings.tle_retry_timeout)
        pair = extract_tle(raw)
        if raw and pair is None:
            logger.info("[intlDes] Invalid TLE payload from N2YO for %d", norad_id)
        return pair

    def _tiers(self, norad_id: int):
        tiers = [
            ("n2yo", lambda: self._n2yo_tle(norad_id)),
            ("celestrak", lambda: self.celestrak.fetch_tle(norad_id)),
        ]
        for group in self.groups:
            tiers.append(
                (f"celestrak-{group.lower()}", lambda g=group: self.celestrak.find_in_group(g, norad_id))
            )
        return tiers

    async def resolve(self, norad_id: int) -> str | None:
        cached = self.cache.get(norad_id)
        if cached is not None:
            logger.debug("[intlDes] Cache hit for %d", norad_id)
            return cached

        try:
            chain = await first_success(self._tiers(norad_id), label=f"[intlDes] {norad_id}")
            if not chain.ok:
                logger.info("[intlDes] No TLE available for %d from N2YO or CelesTrak", norad_id)
                return None
            line1, _ = chain.value
            value = parse_designator(line1)
        except Exception:
            logger.exception("[intlDes] Failed to resolve designator for %d", norad_id)
            return None

        if value is None:
            logger.info("[intlDes] Unparseable designator field for %d", norad_id)
            return None
        logger.info("[intlDes] Parsed %d -> %s (via %s)", norad_id, value, chain.tier)
        self.cache.put(norad_id, value)
        return value
