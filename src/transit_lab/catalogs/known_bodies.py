"""Embedded reference catalog of well-known exoplanets.

Values are representative published parameters in canonical units (days,
hours, Earth radii, Kelvin). The catalog is read-only and ordered; the
per-field cross-reference returns the first qualifying body in this order.
"""

from __future__ import annotations

from transit_lab.domain.records import KnownBody, ParameterRecord


def _body(
    name: str,
    *,
    period: float,
    duration: float,
    radius: float,
    teff: float,
    year: int,
    fact: str,
) -> KnownBody:
    return KnownBody(
        name=name,
        parameters=ParameterRecord(
            name=name,
            orbital_period=period,
            transit_duration=duration,
            planetary_radius=radius,
            stellar_temperature=teff,
        ),
        fact=fact,
        discovery_year=year,
    )


KNOWN_BODIES: tuple[KnownBody, ...] = (
    _body(
        "Kepler-186f",
        period=129.9,
        duration=5.2,
        radius=1.17,
        teff=3788.0,
        year=2014,
        fact=(
            "Kepler-186f was the first Earth-sized planet found in the habitable zone "
            "of another star. Its red dwarf host would make midday look like dusk."
        ),
    ),
    _body(
        "TOI 700 d",
        period=37.4,
        duration=2.1,
        radius=1.19,
        teff=3480.0,
        year=2020,
        fact=(
            "TOI 700 d was TESS's first Earth-sized habitable-zone discovery; it "
            "receives about 86% of the energy Earth gets from the Sun."
        ),
    ),
    _body(
        "Proxima Centauri b",
        period=11.2,
        duration=0.9,
        radius=1.07,
        teff=3042.0,
        year=2016,
        fact=(
            "Proxima Centauri b orbits the closest star to the Sun, just 4.2 light-years "
            "away, completing a full year in about 11 days."
        ),
    ),
    _body(
        "LP 890-9 c",
        period=8.46,
        duration=1.5,
        radius=1.37,
        teff=2850.0,
        year=2022,
        fact=(
            "LP 890-9 c orbits one of the coolest stars known to host planets, which "
            "makes it a prime target for atmospheric study with JWST."
        ),
    ),
    _body(
        "TRAPPIST-1 e",
        period=6.10,
        duration=0.93,
        radius=0.92,
        teff=2566.0,
        year=2017,
        fact=(
            "TRAPPIST-1 e shares its system with six other rocky worlds, all of which "
            "would fit inside the orbit of Mercury."
        ),
    ),
    _body(
        "Kepler-452 b",
        period=384.8,
        duration=10.6,
        radius=1.63,
        teff=5757.0,
        year=2015,
        fact=(
            "Kepler-452 b is often called Earth's older cousin: its Sun-like star is "
            "about 1.5 billion years older than ours."
        ),
    ),
    _body(
        "Kepler-22 b",
        period=289.9,
        duration=7.4,
        radius=2.38,
        teff=5518.0,
        year=2011,
        fact=(
            "Kepler-22 b was the first Kepler planet confirmed in a habitable zone, "
            "and may be a water world more than twice Earth's size."
        ),
    ),
    _body(
        "HD 209458 b",
        period=3.52,
        duration=3.07,
        radius=15.2,
        teff=6065.0,
        year=1999,
        fact=(
            "HD 209458 b was the first exoplanet seen to transit its star, and is "
            "losing its atmosphere in a comet-like tail of hydrogen."
        ),
    ),
)


def find_body(name: str, catalog: tuple[KnownBody, ...] = KNOWN_BODIES) -> KnownBody | None:
    """Return the catalog body named ``name`` (case-insensitive), if any."""
    wanted = name.strip().casefold()
    for body in catalog:
        if body.name.casefold() == wanted:
            return body
    return None


__all__ = ["KNOWN_BODIES", "find_body"]
