"""Orbital estimates from altitude: circular-orbit approximations only.

Nothing here propagates an orbit. Period and speed come from Kepler's third
law and vis-viva for a circular orbit at the given altitude; inclination and
altitude tables hold category-typical values used when nothing was observed.
"""

from __future__ import annotations

import math

from orbitiq.models import Category

EARTH_RADIUS_KM = 6371.0  # mean radius
MU = 398600.4418  # km^3/s^2

TYPICAL_ALTITUDE_KM: dict[Category, float] = {
    Category.ISS: 408,
    Category.COMMUNICATION: 550,
    Category.WEATHER: 35786,
    Category.NAVIGATION: 20200,
    Category.SCIENTIFIC: 600,
    Category.MILITARY: 800,
    Category.OTHER: 500,
}

TYPICAL_INCLINATION_DEG: dict[Category, float] = {
    Category.ISS: 51.64,
    Category.COMMUNICATION: 53.0,
    Category.WEATHER: 0.3,
    Category.NAVIGATION: 55.4,
    Category.SCIENTIFIC: 98.0,
    Category.MILITARY: 99.0,
    Category.OTHER: 50.0,
}


def estimate_period_minutes(altitude_km: float) -> float:
    """Circular-orbit period in minutes, rounded to 2 decimals."""
    r = EARTH_RADIUS_KM + altitude_km
    period_sec = 2 * math.pi * math.sqrt(r ** 3 / MU)
    return round(period_sec / 60, 2)


def estimate_velocity_kmh(altitude_km: float) -> float:
    """Circular-orbit speed (vis-viva with a = r) in km/h."""
    r = EARTH_RADIUS_KM + altitude_km
    return math.sqrt(MU / r) * 3600


def typical_altitude_km(category: Category) -> float:
    return TYPICAL_ALTITUDE_KM.get(category, TYPICAL_ALTITUDE_KM[Category.OTHER])


def typical_inclination_deg(category: Category) -> float:
    return TYPICAL_INCLINATION_DEG.get(category, TYPICAL_INCLINATION_DEG[Category.OTHER])
