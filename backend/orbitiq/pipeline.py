"""Position resolution: live N2YO fix first, simulated record as last resort.

``resolve_one`` always returns a SatelliteRecord whose ``data_source`` says
honestly where the position came from; ``resolve_batch`` fans a page of
requests out in parallel and keeps input order.
"""

from __future__ import annotations

import asyncio
import logging
import random
from collections import Counter
from typing import Iterable

import httpx

from orbitiq.catalog import ISS_NORAD_ID, known_designator, known_launch_date
from orbitiq.classifier import classify_category, classify_country
from orbitiq.config import Settings
from orbitiq.designator import DesignatorResolver
from orbitiq.designator_cache import DesignatorCache
from orbitiq.fallback import first_success
from orbitiq.models import (
    UNKNOWN_DESIGNATOR,
    BatchResult,
    Category,
    DataSource,
    DiscoveredSatellite,
    ISSPosition,
    Position,
    SatellitePosition,
    SatelliteRecord,
    SatelliteRequest,
    TrendingSatellite,
    VelocitySource,
    utcnow,
)
from orbitiq.orbital_math import estimate_velocity_kmh
from orbitiq.providers import (
    CelestrakClient,
    LivePosition,
    N2YOClient,
    Observer,
    OpenNotifyClient,
    ProviderError,
)
from orbitiq.simulation import estimate_orbital, simulate_position

logger = logging.getLogger(__name__)

ISS_NAME = "International Space Station"
ISS_ALTITUDE_KM = 408.0
ISS_VELOCITY_KMH = 27576.0  # 7.66 km/s

MISSING_KEY_MESSAGE = "No API key configured"

# Recent catalog numbers sampled for the trending list.
TRENDING_CANDIDATES = tuple(range(50000, 55001, 100))[:10]
TRENDING_LIMIT = 5

DISCOVERY_SITES = (
    ("Equator", Observer(0.0, 0.0)),
    ("New York", Observer(40.0, -74.0)),
    ("London", Observer(51.0, 0.0)),
    ("Tokyo", Observer(35.0, 139.0)),
)
DISCOVERY_RADIUS_DEG = 90.0

BatchItem = SatelliteRequest | tuple


def _as_request(item: BatchItem) -> SatelliteRequest:
    if isinstance(item, SatelliteRequest):
        return item
    norad_id, *rest = item
    category = Category.parse(rest[0]) if rest else Category.OTHER
    name = rest[1] if len(rest) > 1 else None
    return SatelliteRequest(norad_id=int(norad_id), category=category, name=name)


class PositionPipeline:
    def __init__(
        self,
        settings: Settings,
        n2yo: N2YOClient,
        resolver: DesignatorResolver,
        open_notify: OpenNotifyClient | None = None,
        rng: random.Random | None = None,
    ):
        self.settings = settings
        self.n2yo = n2yo
        self.resolver = resolver
        self.open_notify = open_notify
        self.rng = rng or random.Random()

    @classmethod
    def create(
        cls,
        settings: Settings,
        http: httpx.AsyncClient,
        cache: DesignatorCache | None = None,
        rng: random.Random | None = None,
    ) -> PositionPipeline:
        """Wire providers, resolver and cache around one shared HTTP client."""
        n2yo = N2YOClient(http, settings)
        resolver = DesignatorResolver(
            n2yo,
            CelestrakClient(http, settings),
            cache or DesignatorCache(ttl=settings.designator_ttl),
        )
        return cls(settings, n2yo, resolver, OpenNotifyClient(http, settings), rng)

    @property
    def cache(self) -> DesignatorCache:
        return self.resolver.cache

    # --- Designators ---

    async def resolve_designator(self, norad_id: int) -> str | None:
        return await self.resolver.resolve(norad_id)

    async def _designator_for(self, norad_id: int, observed: str | None = None) -> str:
        # A designator reported alongside a live fix replaces whatever is cached.
        if observed:
            self.cache.put(norad_id, observed)
            return observed
        known = known_designator(norad_id)
        if known:
            return known
        limit = self.settings.designator_timeout
        try:
            resolved = await asyncio.wait_for(self.resolver.resolve(norad_id), timeout=limit)
        except asyncio.TimeoutError:
            logger.warning("[intlDes] Lookup for %d gave up after %.1fs", norad_id, limit)
            return UNKNOWN_DESIGNATOR
        return resolved or UNKNOWN_DESIGNATOR

    # --- Record builders ---

    @staticmethod
    def _live_position(live: LivePosition) -> Position:
        if live.velocity_kms:
            velocity, velocity_source = live.velocity_kms * 3600, VelocitySource.API
        else:
            velocity, velocity_source = estimate_velocity_kmh(live.altitude), VelocitySource.CALCULATED
        return Position(
            latitude=live.latitude,
            longitude=live.longitude,
            altitude=live.altitude,
            velocity=velocity,
            velocity_source=velocity_source,
            timestamp=live.timestamp,
        )

    async def _live_record(
        self, norad_id: int, category: Category | None, name: str, live: LivePosition
    ) -> SatelliteRecord:
        name = live.name or name
        category = category or classify_category(name)

        logger.info(
            "Live position for %s (%d): %.2f, %.2f at %.1f km",
            name, norad_id, live.latitude, live.longitude, live.altitude,
        )
        return SatelliteRecord(
            norad_id=norad_id,
            name=name,
            intl_des=await self._designator_for(norad_id, live.intl_des),
            launch_date=known_launch_date(norad_id),
            country=classify_country(name),
            category=category,
            position=self._live_position(live),
            orbital=estimate_orbital(live.altitude, category, self.rng),
            data_source=DataSource.LIVE,
        )

    def _simulated_record(
        self,
        norad_id: int,
        category: Category | None,
        name: str,
        source: DataSource,
        intl_des: str = UNKNOWN_DESIGNATOR,
    ) -> SatelliteRecord:
        category = category or classify_category(name)
        position = simulate_position(category, self.rng)
        return SatelliteRecord(
            norad_id=norad_id,
            name=name,
            intl_des=intl_des,
            launch_date=known_launch_date(norad_id),
            country=classify_country(name),
            category=category,
            position=position,
            orbital=estimate_orbital(position.altitude, category, self.rng),
            data_source=source,
        )

    # --- Public operations ---

    async def resolve_one(
        self,
        norad_id: int,
        category: Category | str | None = None,
        name_hint: str | None = None,
    ) -> SatelliteRecord:
        """Best-effort record for one satellite. Never raises.

        With ``category=None`` the category is inferred from the resolved name.
        """
        if category is not None:
            category = Category.parse(category)
        name = name_hint or f"Satellite {norad_id}"

        if self.n2yo.enabled:
            source = DataSource.SIMULATED
            attempts = [("n2yo", lambda: self._fetch_live(norad_id, category, name))]
        else:
            source = DataSource.STATIC_FALLBACK
            attempts = []

        async def simulated() -> SatelliteRecord:
            intl_des = await self._designator_for(norad_id)
            return self._simulated_record(norad_id, category, name, source, intl_des)

        attempts.append(("simulation", simulated))

        try:
            chain = await first_success(attempts, label=f"[position] {norad_id}")
        except Exception:
            logger.exception("Position resolution failed for %d", norad_id)
            chain = None

        if chain is None or chain.value is None:
            record = self._simulated_record(norad_id, category, name, source)
            record.error = (chain.last_error if chain else None) or "resolution failed"
            return record

        record = chain.value
        if chain.tier == "simulation":
            record.error = chain.last_error if self.n2yo.enabled else MISSING_KEY_MESSAGE
        return record

    async def _fetch_live(
        self, norad_id: int, category: Category | None, name: str
    ) -> SatelliteRecord:
        live = await self.n2yo.fetch_position(norad_id)
        return await self._live_record(norad_id, category, name, live)

    async def resolve_batch(self, requests: Iterable[BatchItem]) -> BatchResult:
        """Resolve every request concurrently; output order matches input order."""
        items = [_as_request(r) for r in requests]
        if not self.n2yo.enabled:
            logger.info("No valid N2YO API key found, serving %d satellites from static fallback", len(items))

        records = await asyncio.gather(
            *(self.resolve_one(r.norad_id, r.category, r.name) for r in items)
        )
        tally = Counter(r.data_source for r in records)
        counts = {source: tally.get(source, 0) for source in DataSource}
        logger.info(
            "Resolved %d satellites: %d live, %d simulated, %d static",
            len(records),
            counts[DataSource.LIVE],
            counts[DataSource.SIMULATED],
            counts[DataSource.STATIC_FALLBACK],
        )
        return BatchResult(satellites=list(records), counts=counts)

    async def iss_position(self) -> ISSPosition:
        """ISS sub-point: Open Notify, then N2YO, then a simulated fix."""

        async def open_notify() -> ISSPosition | None:
            if self.open_notify is None:
                return None
            lat, lon, ts = await self.open_notify.iss_now()
            return ISSPosition(
                name=ISS_NAME,
                position=Position(
                    latitude=lat,
                    longitude=lon,
                    altitude=ISS_ALTITUDE_KM,
                    velocity=ISS_VELOCITY_KMH,
                    velocity_source=VelocitySource.API,
                    timestamp=ts,
                ),
            )

        async def n2yo() -> ISSPosition | None:
            if not self.n2yo.enabled:
                return None
            record = await self._fetch_live(ISS_NORAD_ID, Category.ISS, ISS_NAME)
            return ISSPosition(name=record.name, position=record.position)

        async def simulated() -> ISSPosition:
            return ISSPosition(
                name=ISS_NAME,
                position=Position(
                    latitude=(self.rng.random() - 0.5) * 180,
                    longitude=(self.rng.random() - 0.5) * 360,
                    altitude=ISS_ALTITUDE_KM,
                    velocity=ISS_VELOCITY_KMH,
                    velocity_source=VelocitySource.SIMULATED,
                    timestamp=utcnow(),
                ),
            )

        chain = await first_success(
            [("open-notify", open_notify), ("n2yo", n2yo), ("simulation", simulated)],
            label="[iss]",
        )
        return chain.value

    async def observed_position(self, norad_id: int, observer: Observer) -> SatellitePosition:
        """Live fix as seen from ``observer``. Raises ProviderError when unavailable."""
        live = await self.n2yo.fetch_position(norad_id, observer=observer)
        return SatellitePosition(
            norad_id=norad_id,
            name=live.name or f"Satellite {norad_id}",
            position=self._live_position(live),
        )

    async def trending(self, limit: int = TRENDING_LIMIT) -> list[TrendingSatellite]:
        """Recently catalogued objects that N2YO currently has a fix for."""
        if not self.n2yo.enabled:
            return []
        found = await asyncio.gather(*(self._trending_one(i) for i in TRENDING_CANDIDATES))
        return [s for s in found if s is not None][:limit]

    async def _trending_one(self, norad_id: int) -> TrendingSatellite | None:
        try:
            live = await self.n2yo.fetch_position(norad_id, timeout=self.settings.trending_timeout)
        except ProviderError as exc:
            logger.debug("[trending] %d skipped: %s", norad_id, exc)
            return None
        name = live.name or f"Satellite {norad_id}"
        return TrendingSatellite(
            norad_id=norad_id,
            name=name,
            category=classify_category(name),
            country=classify_country(name),
            intl_des=await self._designator_for(norad_id, live.intl_des),
        )

    async def discover(self, limit: int = 20) -> list[DiscoveredSatellite]:
        """Objects above a handful of observer sites, first sighting wins."""
        if not self.n2yo.enabled:
            return []

        async def scan(site: str, observer: Observer) -> tuple[str, list]:
            try:
                payload = await self.n2yo.fetch_above(observer, DISCOVERY_RADIUS_DEG)
            except ProviderError as exc:
                logger.warning("Failed to fetch satellites above %s: %s", site, exc)
                return site, []
            return site, payload["above"]

        sightings = await asyncio.gather(*(scan(site, obs) for site, obs in DISCOVERY_SITES))
        found: dict[int, DiscoveredSatellite] = {}
        for site, above in sightings:
            for sat in above:
                sat_id = sat.get("satid") if isinstance(sat, dict) else None
                if not isinstance(sat_id, int) or sat_id in found:
                    continue
                name = str(sat.get("satname") or f"Satellite {sat_id}").strip()
                found[sat_id] = DiscoveredSatellite(
                    norad_id=sat_id,
                    name=name,
                    category=classify_category(name),
                    country=classify_country(name),
                    location=site,
                )
        logger.info("Discovered %d satellites above %d sites", len(found), len(DISCOVERY_SITES))
        return list(found.values())[:limit]
