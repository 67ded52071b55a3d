from __future__ import annotations

import logging
from pathlib import Path

import pytest

from transit_lab.config import ParserConfig
from transit_lab.domain.records import ParameterRecord
from transit_lab.errors import EmptyInputError, NoValidRowsError, SchemaError
from transit_lab.ingest.parsing import (
    detect_header,
    parse_first_record,
    parse_record_file,
    parse_records,
    preview_records,
)

HEADER = "name,orbitalPeriod,transitDuration,planetaryRadius,stellarTemperature"


class TestHeaderDetection:
    def test_text_field_marks_header(self) -> None:
        assert detect_header(HEADER) is True

    def test_all_numeric_is_data(self) -> None:
        assert detect_header("1, 2.5, 3e2, .4") is False

    def test_numeric_looking_header_is_read_as_data(self) -> None:
        result = parse_records("1,2,3,4\n5,6,7,8\n")
        assert result.has_header is False
        assert [r.orbital_period for r in result.records] == [1.0, 5.0]

    def test_nan_and_inf_tokens_are_text(self) -> None:
        assert detect_header("nan,1,2,3") is True
        assert detect_header("1,inf,2,3") is True


class TestHeaderMode:
    def test_parses_named_rows(self) -> None:
        text = f"{HEADER}\nKepler-186f,129.9,5.2,1.17,3788\nTOI 700 d,37.4,2.1,1.19,3480\n"
        result = parse_records(text)
        assert result.has_header is True
        assert [r.name for r in result.records] == ["Kepler-186f", "TOI 700 d"]
        assert result.records[0].stellar_temperature == 3788.0
        assert result.skipped == ()

    def test_columns_in_any_order_without_name(self) -> None:
        text = "stellarTemperature,planetaryRadius,transitDuration,orbitalPeriod\n5000,2,3,10\n"
        (record,) = parse_records(text).records
        assert record.orbital_period == 10.0
        assert record.transit_duration == 3.0
        assert record.planetary_radius == 2.0
        assert record.stellar_temperature == 5000.0
        assert record.name == "CSV Candidate #1"

    def test_permuted_header_yields_equal_records(self) -> None:
        canonical = "orbitalPeriod,transitDuration,planetaryRadius,stellarTemperature\n10,3,2,5000\n20,4,1,6000\n"
        permuted = "planetaryRadius,stellarTemperature,orbitalPeriod,transitDuration\n2,5000,10,3\n1,6000,20,4\n"
        assert parse_records(permuted).records == parse_records(canonical).records

    def test_one_invalid_row_of_three_yields_two_records(self) -> None:
        text = f"{HEADER}\nA,1,2,3,4\nB,oops,2,3,4\nC,5,6,7,8\n"
        result = parse_records(text)
        assert [r.name for r in result.records] == ["A", "C"]
        assert len(result.skipped) == 1

    def test_empty_name_is_synthesized_from_row_index(self) -> None:
        text = f"{HEADER}\nA,1,2,3,4\n,10,3,2,5000\n"
        result = parse_records(text)
        assert [r.name for r in result.records] == ["A", "CSV Candidate #2"]

    def test_missing_required_field_raises_schema_error(self) -> None:
        with pytest.raises(SchemaError) as exc_info:
            parse_records("name,orbitalPeriod,transitDuration\nX,1,2\n")
        assert exc_info.value.missing_fields == ("planetaryRadius", "stellarTemperature")

    def test_short_row_is_skipped(self) -> None:
        text = f"{HEADER}\nA,1,2\nB,10,3,2,5000\n"
        result = parse_records(text)
        assert [r.name for r in result.records] == ["B"]
        (skip,) = result.skipped
        assert skip.reason == "short_row"
        assert skip.line_number == 2
        assert skip.raw == "A,1,2"

    def test_non_numeric_row_is_skipped_with_warning(self, caplog: pytest.LogCaptureFixture) -> None:
        text = f"{HEADER}\nA,abc,2,3,4\nB,10,3,2,5000\n"
        with caplog.at_level(logging.WARNING, logger="transit_lab.ingest.parsing"):
            result = parse_records(text)
        assert [r.name for r in result.records] == ["B"]
        (skip,) = result.skipped
        assert skip.reason == "non_numeric"
        assert skip.failed_fields == ("orbitalPeriod",)
        assert any("non-numeric" in message for message in caplog.messages)

    def test_non_positive_row_is_skipped(self) -> None:
        result = parse_records(f"{HEADER}\nA,0,2,3,4\nB,1,2,-3,4\n")
        assert result.is_empty
        assert [s.reason for s in result.skipped] == ["non_positive", "non_positive"]
        assert result.skipped[1].failed_fields == ("planetaryRadius",)


class TestHeaderlessMode:
    def test_single_line_equals_hand_built_record(self) -> None:
        (record,) = parse_records("365.25,4,1.0,5778").records
        assert record == ParameterRecord(
            name="CSV Candidate #1",
            orbital_period=365.25,
            transit_duration=4.0,
            planetary_radius=1.0,
            stellar_temperature=5778.0,
        )

    def test_synthesizes_names(self) -> None:
        result = parse_records("10,3,2,5000\n20,4,1,6000\n")
        assert [r.name for r in result.records] == ["CSV Candidate #1", "CSV Candidate #2"]

    def test_custom_name_prefix(self) -> None:
        result = parse_records("10,3,2,5000\n", config=ParserConfig(name_prefix="Row"))
        assert result.records[0].name == "Row #1"

    def test_wrong_width_first_row_raises_schema_error(self) -> None:
        with pytest.raises(SchemaError) as exc_info:
            parse_records("10,3,2\n")
        assert exc_info.value.found_columns == 3
        assert exc_info.value.expected_columns == (
            "orbitalPeriod",
            "transitDuration",
            "planetaryRadius",
            "stellarTemperature",
        )

    def test_wrong_width_later_row_is_skipped(self) -> None:
        result = parse_records("10,3,2,5000\n20,4,1,6000,7\n")
        assert len(result.records) == 1
        assert result.skipped[0].reason == "wrong_width"
        assert result.skipped[0].line_number == 2

    def test_semicolon_delimiter(self) -> None:
        result = parse_records("10;3;2;5000\n", config=ParserConfig(delimiter=";"))
        assert result.records[0].planetary_radius == 2.0


class TestDocumentLevel:
    @pytest.mark.parametrize("text", ["", "   \n\n  \n"])
    def test_empty_input(self, text: str) -> None:
        with pytest.raises(EmptyInputError):
            parse_records(text)

    def test_byte_order_mark_is_ignored(self) -> None:
        result = parse_records("\ufeff" + HEADER + "\nA,1,2,3,4\n")
        assert result.has_header is True
        assert result.records[0].name == "A"

    def test_blank_lines_and_crlf_are_ignored(self) -> None:
        result = parse_records("10,3,2,5000\r\n\r\n20,4,1,6000\r\n")
        assert len(result.records) == 2

    def test_max_rows_caps_data_lines(self) -> None:
        text = "\n".join(["1,2,3,4"] * 10)
        result = parse_records(text, max_rows=3)
        assert result.rows_examined == 3
        assert len(result.records) == 3

    def test_records_preserve_input_order(self) -> None:
        text = "3,1,1,1\n1,1,1,1\n2,1,1,1\n"
        assert [r.orbital_period for r in parse_records(text).records] == [3.0, 1.0, 2.0]

    def test_preview_defaults_to_five_rows(self) -> None:
        text = "\n".join(f"{i},1,1,1" for i in range(1, 20))
        assert len(preview_records(text).records) == 5


class TestFirstRecord:
    def test_returns_first_data_row(self) -> None:
        record = parse_first_record(f"{HEADER}\nA,1,2,3,4\nB,5,6,7,8\n")
        assert record.name == "A"

    def test_invalid_first_row_raises_no_valid_rows(self) -> None:
        with pytest.raises(NoValidRowsError) as exc_info:
            parse_first_record(f"{HEADER}\nA,x,2,3,4\nB,5,6,7,8\n")
        assert exc_info.value.skipped == 1

    def test_header_only_raises_no_valid_rows(self) -> None:
        with pytest.raises(NoValidRowsError):
            parse_first_record(HEADER + "\n")


def test_parse_record_file(tmp_path: Path) -> None:
    path = tmp_path / "candidates.csv"
    path.write_text(f"{HEADER}\nA,1,2,3,4\n", encoding="utf-8")
    result = parse_record_file(path)
    assert result.records[0].name == "A"
