from __future__ import annotations

import math

import pytest
from pydantic import ValidationError

from transit_lab.domain.records import DEFAULT_RECORD, DEFAULT_RECORD_NAME, ParameterRecord


def _record(**overrides: object) -> ParameterRecord:
    values: dict[str, object] = {
        "orbital_period": 10.0,
        "transit_duration": 3.0,
        "planetary_radius": 2.0,
        "stellar_temperature": 5000.0,
    }
    values.update(overrides)
    return ParameterRecord.model_validate(values)


class TestParameterRecord:
    def test_default_name(self) -> None:
        assert _record().name == DEFAULT_RECORD_NAME

    @pytest.mark.parametrize(
        "field",
        ["orbital_period", "transit_duration", "planetary_radius", "stellar_temperature"],
    )
    @pytest.mark.parametrize("bad", [0.0, -1.0, math.inf, math.nan])
    def test_rejects_non_positive_or_non_finite(self, field: str, bad: float) -> None:
        with pytest.raises(ValidationError):
            _record(**{field: bad})

    def test_is_frozen(self) -> None:
        record = _record()
        with pytest.raises(ValidationError):
            record.orbital_period = 2.0  # type: ignore[misc]

    def test_replace_returns_new_validated_record(self) -> None:
        record = _record()
        edited = record.replace(planetary_radius=4.0)
        assert edited.planetary_radius == 4.0
        assert record.planetary_radius == 2.0
        with pytest.raises(ValidationError):
            record.replace(planetary_radius=-1.0)

    def test_duration_exceeding_period_is_tolerated(self) -> None:
        record = _record(orbital_period=0.1, transit_duration=5.0)
        assert record.duration_exceeds_period is True
        assert _record().duration_exceeds_period is False

    def test_canonical_dict_uses_column_names(self) -> None:
        assert _record(name="X").to_canonical_dict() == {
            "name": "X",
            "orbitalPeriod": 10.0,
            "transitDuration": 3.0,
            "planetaryRadius": 2.0,
            "stellarTemperature": 5000.0,
        }


def test_default_record_is_earth_analog() -> None:
    assert DEFAULT_RECORD.name == "Kepler-186 f (Default)"
    assert DEFAULT_RECORD.orbital_period == 365.25
    assert DEFAULT_RECORD.transit_duration == 4.0
    assert DEFAULT_RECORD.planetary_radius == 1.0
    assert DEFAULT_RECORD.stellar_temperature == 5778.0
