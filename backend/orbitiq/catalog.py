"""Tracked satellite catalog & verified reference data.

TRACKED_SATELLITES is the curated list resolved live when an N2YO key is
configured. STATIC_SATELLITES is the smaller set served when it is not.
The designator and launch-date tables cover well-known objects so records
stay useful even when every upstream source is down.
"""

from __future__ import annotations

from orbitiq.classifier import classify_country
from orbitiq.models import Category, SatelliteRequest

ISS_NORAD_ID = 25544

STATIC_SATELLITES: list[SatelliteRequest] = [
    SatelliteRequest(norad_id=25544, category=Category.ISS, name="International Space Station"),
    SatelliteRequest(norad_id=20580, category=Category.SCIENTIFIC, name="Hubble Space Telescope"),
    SatelliteRequest(norad_id=33591, category=Category.WEATHER, name="NOAA-19"),
    SatelliteRequest(norad_id=38771, category=Category.WEATHER, name="GOES-14"),
    SatelliteRequest(norad_id=41866, category=Category.WEATHER, name="GOES-16"),
    SatelliteRequest(norad_id=28474, category=Category.NAVIGATION, name="GPS BIIR-13"),
    SatelliteRequest(norad_id=32711, category=Category.NAVIGATION, name="GPS BIIR-10"),
    SatelliteRequest(norad_id=41783, category=Category.SCIENTIFIC, name="Sentinel-3A"),
    SatelliteRequest(norad_id=44714, category=Category.COMMUNICATION, name="Starlink-1008"),
    SatelliteRequest(norad_id=43013, category=Category.WEATHER, name="GOES-17"),
]

TRACKED_SATELLITES: list[SatelliteRequest] = [
    *STATIC_SATELLITES,
    SatelliteRequest(norad_id=37849, category=Category.WEATHER, name="SUOMI NPP"),
    SatelliteRequest(norad_id=40069, category=Category.WEATHER, name="NOAA-20"),
    SatelliteRequest(norad_id=29601, category=Category.NAVIGATION, name="GPS BIIR-14"),
    SatelliteRequest(norad_id=32260, category=Category.NAVIGATION, name="GPS BIIR-15"),
    SatelliteRequest(norad_id=36411, category=Category.NAVIGATION, name="GPS BIIR-16"),
    SatelliteRequest(norad_id=39166, category=Category.SCIENTIFIC, name="WorldView-4"),
    SatelliteRequest(norad_id=25994, category=Category.SCIENTIFIC, name="Terra"),
]

KNOWN_DESIGNATORS: dict[int, str] = {
    25544: "1998-067A",  # ISS
    20580: "1990-037B",  # Hubble
    48274: "2021-130A",
    43241: "2018-032A",  # GSAT-6A
    33591: "2009-005A",  # NOAA-19
    38771: "2012-041A",  # GOES-14
    41866: "2016-071A",  # GOES-16
    28474: "2004-045A",  # GPS BIIR-13
    32711: "2008-012A",  # GPS BIIR-10
    41783: "2016-011A",  # Sentinel-3A
    44506: "2019-034A",  # RISAT-2B
}

KNOWN_LAUNCH_DATES: dict[int, str] = {
    25544: "1998-11-20",
    20580: "1990-04-24",
    48274: "2021-12-25",
    43241: "2018-03-29",
    33591: "2009-02-06",
    38771: "2012-06-29",
    41866: "2016-11-19",
    28474: "2004-03-20",
    32711: "2008-03-15",
    41783: "2016-02-16",
    44506: "2019-05-22",
    # Starlink / OneWeb (approximate)
    44713: "2019-05-24",
    44714: "2019-05-24",
    44715: "2019-05-24",
    47926: "2021-01-24",
    47927: "2021-01-24",
    47420: "2021-02-15",
    47421: "2021-02-15",
}


def known_designator(norad_id: int) -> str | None:
    return KNOWN_DESIGNATORS.get(norad_id)


def known_launch_date(norad_id: int) -> str | None:
    return KNOWN_LAUNCH_DATES.get(norad_id)


def search_catalog(
    satellites: list[SatelliteRequest],
    category: Category | None = None,
    query: str | None = None,
) -> list[SatelliteRequest]:
    """Filter by exact category and by name/country substring."""
    results = satellites
    if category is not None:
        results = [s for s in results if s.category == category]
    if query:
        q = query.lower()
        results = [
            s for s in results
            if q in (s.name or "").lower() or q in classify_country(s.name or "").lower()
        ]
    return results


def paginate(items: list, page: int, limit: int) -> list:
    start = (page - 1) * limit
    return items[start:start + limit]
