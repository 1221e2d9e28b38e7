"""Name-based category and country inference.

Both classifiers are ordered rule tables of (patterns, result); the first
rule with a pattern found in the lower-cased name wins. Add a constellation
or operator by adding a row.
"""

from __future__ import annotations

from typing import Sequence, TypeVar

from orbitiq.models import Category

R = TypeVar("R")

Rule = tuple[tuple[str, ...], R]

CATEGORY_RULES: list[Rule[Category]] = [
    (("iss", "international space station"), Category.ISS),
    (("starlink", "oneweb", "communication", "gsat", "intelsat", "ses-"), Category.COMMUNICATION),
    (("noaa", "goes", "weather", "meteosat", "himawari"), Category.WEATHER),
    (("gps", "navigation", "navstar", "galileo", "glonass", "beidou"), Category.NAVIGATION),
    (
        ("hubble", "sentinel", "risat", "scientific", "jwst", "webb", "kepler", "tess"),
        Category.SCIENTIFIC,
    ),
    (("military", "defense", "nrol", "usa-"), Category.MILITARY),
]

COUNTRY_RULES: list[Rule[str]] = [
    (("starlink", "usa", "noaa", "gps", "goes", "navstar", "suomi"), "USA"),
    (
        ("iss", "international", "space station", "hubble", "hst", "jwst", "webb"),
        "International",
    ),
    (("sentinel", "esa", "metop"), "ESA"),
    (("gsat", "risat", "insat", "pratham"), "India"),
    (("russia", "cosmos", "meteor"), "Russia"),
    (("oneweb",), "UK"),
    (("china", "cz-"), "China"),
]


def first_match(text: str, rules: Sequence[Rule[R]], default: R) -> R:
    """Return the result of the first rule with a pattern contained in text."""
    lowered = (text or "").lower()
    for patterns, result in rules:
        if any(p in lowered for p in patterns):
            return result
    return default


def classify_category(name: str) -> Category:
    return first_match(name, CATEGORY_RULES, Category.OTHER)


def classify_country(name: str) -> str:
    return first_match(name, COUNTRY_RULES, "Unknown")
