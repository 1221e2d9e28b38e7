"""Plausible, non-propagated positions for when no live fix is available."""

from __future__ import annotations

import random

from orbitiq.models import Category, OrbitalParams, Position, VelocitySource, utcnow
from orbitiq.orbital_math import (
    estimate_period_minutes,
    estimate_velocity_kmh,
    typical_altitude_km,
    typical_inclination_deg,
)

APSIS_JITTER_KM = 100.0


def simulate_position(category: Category, rng: random.Random | None = None) -> Position:
    """Random sub-point at the category-typical altitude and circular speed."""
    rng = rng or random.Random()
    altitude = typical_altitude_km(category)
    return Position(
        latitude=(rng.random() - 0.5) * 180,
        longitude=(rng.random() - 0.5) * 360,
        altitude=altitude,
        velocity=estimate_velocity_kmh(altitude),
        velocity_source=VelocitySource.SIMULATED,
        timestamp=utcnow(),
    )


def estimate_orbital(
    altitude_km: float,
    category: Category,
    rng: random.Random | None = None,
) -> OrbitalParams:
    """Orbital block derived from one altitude sample.

    Apogee and perigee are the altitude jittered by up to APSIS_JITTER_KM
    either way; the inclination is the category default.
    """
    rng = rng or random.Random()
    return OrbitalParams(
        period=estimate_period_minutes(altitude_km),
        inclination=typical_inclination_deg(category),
        apogee=altitude_km + rng.random() * APSIS_JITTER_KM,
        perigee=max(0.0, altitude_km - rng.random() * APSIS_JITTER_KM),
    )
