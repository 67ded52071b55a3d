"""Conversion between canonical units and user-facing display units.

Canonical units are days (orbital period), hours (transit duration), Earth
radii (planetary radius) and Kelvin (stellar temperature). Every conversion is
a closed-form linear or affine transform. Unknown unit tags pass values through
unchanged so that older stored display preferences keep working.

Example:
    >>> to_display(365.25, "years")
    1.0
    >>> from_display(1.0, "jupiter")
    11.209
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict

from transit_lab.domain.records import ParameterRecord

DAYS_PER_YEAR = 365.25
EARTH_RADII_PER_JUPITER_RADIUS = 11.209
KELVIN_CELSIUS_OFFSET = 273.15


class DisplayUnit(str, Enum):
    DAYS = "days"
    YEARS = "years"
    EARTH = "earth"
    JUPITER = "jupiter"
    KELVIN = "kelvin"
    CELSIUS = "celsius"


def _unit_tag(unit: DisplayUnit | str) -> str:
    return unit.value if isinstance(unit, DisplayUnit) else str(unit)


def to_display(value: float, unit: DisplayUnit | str) -> float:
    """Convert a canonical value into ``unit``.

    Args:
        value: Value in canonical units.
        unit: Display unit tag. Unrecognized tags return ``value`` unchanged.

    Returns:
        Value expressed in the display unit.
    """
    tag = _unit_tag(unit)
    if tag == "years":
        return value / DAYS_PER_YEAR
    if tag == "jupiter":
        return value / EARTH_RADII_PER_JUPITER_RADIUS
    if tag == "celsius":
        return value - KELVIN_CELSIUS_OFFSET
    return value


def from_display(value: float, unit: DisplayUnit | str) -> float:
    """Convert a value in ``unit`` back to canonical units.

    Args:
        value: Value in the display unit.
        unit: Display unit tag. Unrecognized tags return ``value`` unchanged.

    Returns:
        Value expressed in canonical units.
    """
    tag = _unit_tag(unit)
    if tag == "years":
        return value * DAYS_PER_YEAR
    if tag == "jupiter":
        return value * EARTH_RADII_PER_JUPITER_RADIUS
    if tag == "celsius":
        return value + KELVIN_CELSIUS_OFFSET
    return value


# =============================================================================
# Preferences
# =============================================================================


class UnitPreferences(BaseModel):
    """Per-field display unit choices.

    Tags are plain strings so that unknown values stored by older clients
    still load (and convert as identity).
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    orbital_period: str = DisplayUnit.DAYS.value
    planetary_radius: str = DisplayUnit.EARTH.value
    stellar_temperature: str = DisplayUnit.KELVIN.value


def record_to_display(record: ParameterRecord, preferences: UnitPreferences) -> dict[str, Any]:
    """Express a record's values in the user's display units.

    Transit duration is always shown in hours.
    """
    return {
        "name": record.name,
        "orbital_period": to_display(record.orbital_period, preferences.orbital_period),
        "transit_duration": record.transit_duration,
        "planetary_radius": to_display(record.planetary_radius, preferences.planetary_radius),
        "stellar_temperature": to_display(
            record.stellar_temperature, preferences.stellar_temperature
        ),
    }


def record_from_display(values: dict[str, Any], preferences: UnitPreferences) -> ParameterRecord:
    """Build a canonical record from values entered in display units."""
    payload: dict[str, Any] = {
        "orbital_period": from_display(float(values["orbital_period"]), preferences.orbital_period),
        "transit_duration": float(values["transit_duration"]),
        "planetary_radius": from_display(
            float(values["planetary_radius"]), preferences.planetary_radius
        ),
        "stellar_temperature": from_display(
            float(values["stellar_temperature"]), preferences.stellar_temperature
        ),
    }
    if values.get("name"):
        payload["name"] = str(values["name"])
    return ParameterRecord.model_validate(payload)


def display_ranges(preferences: UnitPreferences) -> dict[str, dict[str, Any]]:
    """Input-control label, bounds and step per field, in display units."""
    period_unit = preferences.orbital_period
    radius_unit = preferences.planetary_radius
    temp_unit = preferences.stellar_temperature
    return {
        "orbital_period": {
            "label": "days" if period_unit == "days" else "years",
            "min": to_display(0.1, period_unit),
            "max": to_display(10000.0, period_unit),
            "step": 0.1 if period_unit == "days" else 0.01,
        },
        "transit_duration": {
            "label": "hours",
            "min": 0.1,
            "max": 24.0,
            "step": 0.1,
        },
        "planetary_radius": {
            "label": "Earth radii" if radius_unit == "earth" else "Jupiter radii",
            "min": to_display(0.1, radius_unit),
            "max": to_display(20.0, radius_unit),
            "step": 0.01 if radius_unit == "earth" else 0.001,
        },
        "stellar_temperature": {
            "label": "K" if temp_unit == "kelvin" else "°C",
            "min": to_display(2000.0, temp_unit),
            "max": to_display(10000.0, temp_unit),
            "step": 10 if temp_unit == "kelvin" else 1,
        },
    }


__all__ = [
    "DAYS_PER_YEAR",
    "DisplayUnit",
    "EARTH_RADII_PER_JUPITER_RADIUS",
    "KELVIN_CELSIUS_OFFSET",
    "UnitPreferences",
    "display_ranges",
    "from_display",
    "record_from_display",
    "record_to_display",
    "to_display",
]
