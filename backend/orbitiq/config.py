"""Runtime settings read from the environment (.env is loaded by main)."""

from __future__ import annotations

import os
from dataclasses import dataclass, field

N2YO_KEY_PLACEHOLDER = "your_n2yo_api_key_here"

DEFAULT_CORS_ORIGINS = (
    "http://localhost:3000",
    "http://127.0.0.1:3000",
    "http://localhost:5173",
)


def _float_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return float(raw)


@dataclass(frozen=True)
class Settings:
    n2yo_api_key: str = ""
    n2yo_base_url: str = "https://api.n2yo.com/rest/v1/satellite"
    celestrak_base_url: str = "https://celestrak.org/NORAD/elements/gp.php"
    open_notify_url: str = "http://api.open-notify.org/iss-now.json"

    # Per-call upstream timeouts (seconds). A page of satellites is resolved
    # in parallel, so the slowest call bounds the page.
    position_timeout: float = 5.0
    tle_timeout: float = 7.0
    tle_retry_timeout: float = 12.0
    celestrak_timeout: float = 8.0
    group_timeout: float = 10.0
    probe_timeout: float = 10.0
    trending_timeout: float = 3.0
    # Upper bound on the whole designator chain inside one record resolution.
    designator_timeout: float = 3.0

    designator_ttl: float = 24 * 60 * 60
    cors_origins: tuple[str, ...] = field(default=DEFAULT_CORS_ORIGINS)

    @property
    def has_n2yo_key(self) -> bool:
        """True when a real-looking N2YO key is configured."""
        key = self.n2yo_api_key
        return bool(key) and key != N2YO_KEY_PLACEHOLDER and len(key) > 10

    @classmethod
    def from_env(cls) -> Settings:
        origins = os.getenv("CORS_ORIGINS")
        return cls(
            n2yo_api_key=os.getenv("N2YO_API_KEY", "").strip(),
            n2yo_base_url=os.getenv("N2YO_BASE_URL", cls.n2yo_base_url),
            celestrak_base_url=os.getenv("CELESTRAK_BASE_URL", cls.celestrak_base_url),
            open_notify_url=os.getenv("OPEN_NOTIFY_URL", cls.open_notify_url),
            position_timeout=_float_env("POSITION_TIMEOUT", cls.position_timeout),
            tle_timeout=_float_env("TLE_TIMEOUT", cls.tle_timeout),
            tle_retry_timeout=_float_env("TLE_RETRY_TIMEOUT", cls.tle_retry_timeout),
            celestrak_timeout=_float_env("CELESTRAK_TIMEOUT", cls.celestrak_timeout),
            group_timeout=_float_env("GROUP_TIMEOUT", cls.group_timeout),
            probe_timeout=_float_env("PROBE_TIMEOUT", cls.probe_timeout),
            trending_timeout=_float_env("TRENDING_TIMEOUT", cls.trending_timeout),
            designator_timeout=_float_env("DESIGNATOR_TIMEOUT", cls.designator_timeout),
            designator_ttl=_float_env("DESIGNATOR_TTL", cls.designator_ttl),
            cors_origins=(
                tuple(o.strip() for o in origins.split(",") if o.strip())
                if origins
                else DEFAULT_CORS_ORIGINS
            ),
        )
