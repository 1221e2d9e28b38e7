from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

UNKNOWN_DESIGNATOR = "N/A"


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class CamelModel(BaseModel):
    """Serialises with camelCase keys to match the browser client."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# --- Enumerations ---

class Category(str, Enum):
    ISS = "ISS"
    COMMUNICATION = "Communication"
    WEATHER = "Weather"
    NAVIGATION = "Navigation"
    SCIENTIFIC = "Scientific"
    MILITARY = "Military"
    OTHER = "Other"

    @classmethod
    def match(cls, value: str | Category | None) -> Category | None:
        """Case-insensitive lookup by value, None when nothing matches."""
        if isinstance(value, Category):
            return value
        for member in cls:
            if value and member.value.lower() == value.strip().lower():
                return member
        return None

    @classmethod
    def parse(cls, value: str | Category | None) -> Category:
        """Lenient lookup; unknown or empty values become OTHER."""
        return cls.match(value) or cls.OTHER


class DataSource(str, Enum):
    LIVE = "LIVE"
    SIMULATED = "SIMULATED"
    STATIC_FALLBACK = "STATIC_FALLBACK"


class VelocitySource(str, Enum):
    API = "API"
    CALCULATED = "CALCULATED"
    SIMULATED = "SIMULATED"


# --- Satellite record ---

class Position(CamelModel):
    latitude: float
    longitude: float
    altitude: float = Field(description="Altitude above mean Earth radius (km)")
    velocity: float = Field(description="Orbital speed (km/h)")
    velocity_source: VelocitySource
    timestamp: datetime = Field(default_factory=utcnow)


class OrbitalParams(CamelModel):
    period: float = Field(description="Estimated orbital period (minutes)")
    inclination: float = Field(description="Category-typical inclination (degrees)")
    apogee: float = Field(description="Estimated apogee altitude (km)")
    perigee: float = Field(description="Estimated perigee altitude (km)")


class SatelliteRecord(CamelModel):
    norad_id: int
    name: str
    intl_des: str = UNKNOWN_DESIGNATOR
    launch_date: str | None = None
    country: str = "Unknown"
    category: Category = Category.OTHER
    status: str = "Active"
    position: Position
    orbital: OrbitalParams
    data_source: DataSource
    last_updated: datetime = Field(default_factory=utcnow)
    error: str | None = None


class SatelliteRequest(CamelModel):
    """One entry of a batch resolution: catalog id plus local hints."""

    norad_id: int
    category: Category = Category.OTHER
    name: str | None = None


class BatchResult(CamelModel):
    satellites: list[SatelliteRecord]
    counts: dict[DataSource, int]

    @property
    def live_count(self) -> int:
        return self.counts.get(DataSource.LIVE, 0)

    @property
    def simulated_count(self) -> int:
        return self.counts.get(DataSource.SIMULATED, 0)

    @property
    def static_count(self) -> int:
        return self.counts.get(DataSource.STATIC_FALLBACK, 0)


# --- API responses ---

class SatellitePosition(CamelModel):
    norad_id: int
    name: str
    position: Position


class ISSPosition(SatellitePosition):
    norad_id: int = 25544


class TrendingSatellite(CamelModel):
    norad_id: int
    name: str
    category: Category
    country: str
    intl_des: str = UNKNOWN_DESIGNATOR
    status: str = "Active"


class DiscoveredSatellite(CamelModel):
    norad_id: int
    name: str
    category: Category
    country: str
    location: str = Field(description="Observer site the object was seen above")
    discovered_at: datetime = Field(default_factory=utcnow)


class DesignatorResponse(CamelModel):
    norad_id: int
    intl_des: str | None


class HealthResponse(BaseModel):
    status: str = "ok"
