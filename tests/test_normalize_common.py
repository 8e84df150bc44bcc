"""Tests for common normalization utilities."""

from datetime import UTC, date, datetime, timedelta, timezone
from types import SimpleNamespace

import pytest

from church_finance.normalize.common import (
    as_records,
    filter_by_date_range,
    get_field,
    member_display_name,
    month_key,
    normalize_date,
    parse_amount,
    parse_week_number,
    submission_total,
)


class Wrapper:
    """Timestamp wrapper with a JS-style accessor."""

    def __init__(self, value: object) -> None:
        self._value = value

    def toDate(self) -> object:  # noqa: N802
        return self._value


class BrokenWrapper:
    """Timestamp wrapper whose accessor raises."""

    def to_datetime(self) -> datetime:
        raise RuntimeError("corrupt timestamp")


class TestNormalizeDate:
    """Tests for normalize_date function."""

    def test_returns_none_for_missing(self) -> None:
        """Test that None and empty strings normalize to None."""
        assert normalize_date(None) is None
        assert normalize_date("") is None
        assert normalize_date("   ") is None

    def test_naive_datetime_assumed_utc(self) -> None:
        """Test that naive datetimes are tagged as UTC."""
        result = normalize_date(datetime(2024, 3, 10, 9, 30))
        assert result == datetime(2024, 3, 10, 9, 30, tzinfo=UTC)

    def test_aware_datetime_converted_to_utc(self) -> None:
        """Test that aware datetimes are converted to UTC."""
        cat = timezone(timedelta(hours=2))
        result = normalize_date(datetime(2024, 3, 10, 1, 0, tzinfo=cat))
        assert result == datetime(2024, 3, 9, 23, 0, tzinfo=UTC)
        assert result is not None
        assert result.tzinfo == UTC

    def test_plain_date(self) -> None:
        """Test that date objects become midnight UTC."""
        assert normalize_date(date(2024, 5, 1)) == datetime(2024, 5, 1, tzinfo=UTC)

    def test_iso_string_with_z_suffix(self) -> None:
        """Test parsing ISO 8601 timestamps with Z suffix."""
        result = normalize_date("2024-01-15T10:30:00Z")
        assert result == datetime(2024, 1, 15, 10, 30, tzinfo=UTC)

    def test_iso_date_only(self) -> None:
        """Test parsing a bare ISO date."""
        assert normalize_date("2024-01-15") == datetime(2024, 1, 15, tzinfo=UTC)

    def test_alternative_string_formats(self) -> None:
        """Test parsing common non-ISO formats."""
        assert normalize_date("01/15/2024") == datetime(2024, 1, 15, tzinfo=UTC)
        assert normalize_date("15 January 2024") == datetime(2024, 1, 15, tzinfo=UTC)
        assert normalize_date("January 15, 2024") == datetime(2024, 1, 15, tzinfo=UTC)

    def test_unparseable_string(self) -> None:
        """Test that garbage strings normalize to None."""
        assert normalize_date("not a date") is None
        assert normalize_date("2024-13-45") is None

    def test_timestamp_wrapper(self) -> None:
        """Test objects exposing a conversion accessor."""
        wrapped = Wrapper(datetime(2024, 2, 4, 9, 0, tzinfo=UTC))
        assert normalize_date(wrapped) == datetime(2024, 2, 4, 9, 0, tzinfo=UTC)

    def test_timestamp_wrapper_returning_garbage(self) -> None:
        """Test that a wrapper returning a non-date yields None."""
        assert normalize_date(Wrapper("2024-02-04")) is None

    def test_timestamp_wrapper_that_raises(self) -> None:
        """Test that a failing accessor yields None instead of raising."""
        assert normalize_date(BrokenWrapper()) is None

    def test_epoch_milliseconds(self) -> None:
        """Test numeric values are read as epoch milliseconds."""
        assert normalize_date(1704067200000) == datetime(2024, 1, 1, tzinfo=UTC)

    def test_out_of_range_epoch(self) -> None:
        """Test that absurd epoch values yield None."""
        assert normalize_date(10**20) is None

    def test_booleans_and_other_types(self) -> None:
        """Test that unsupported types yield None."""
        assert normalize_date(True) is None
        assert normalize_date(["2024-01-01"]) is None
        assert normalize_date({"seconds": 1}) is None


class TestParseAmount:
    """Tests for parse_amount function."""

    def test_missing_defaults_to_zero(self) -> None:
        """Test that None parses to 0."""
        assert parse_amount(None) == 0

    def test_numeric_string(self) -> None:
        """Test parsing decimal strings."""
        assert parse_amount("12.50") == 12.5
        assert parse_amount("  7 ") == 7.0

    def test_non_numeric_string(self) -> None:
        """Test that non-numeric strings parse to 0."""
        assert parse_amount("abc") == 0
        assert parse_amount("") == 0

    def test_numbers_pass_through(self) -> None:
        """Test ints and floats."""
        assert parse_amount(100) == 100.0
        assert parse_amount(0.25) == 0.25

    def test_formatted_currency_string(self) -> None:
        """Test stripping currency symbol and thousands separators."""
        assert parse_amount("K1,250.75") == 1250.75
        assert parse_amount("$ 40") == 40.0

    def test_leading_numeric_prefix(self) -> None:
        """Test that trailing garbage is ignored."""
        assert parse_amount("12.5abc") == 12.5

    def test_non_finite_values(self) -> None:
        """Test that NaN and infinities parse to 0."""
        assert parse_amount(float("nan")) == 0
        assert parse_amount(float("inf")) == 0
        assert parse_amount("1e999") == 0

    def test_negative_values_pass_through(self) -> None:
        """Test that negative amounts are not clamped by the parser."""
        assert parse_amount("-5") == -5.0
        assert parse_amount(-3) == -3.0

    def test_booleans_and_other_types(self) -> None:
        """Test that unsupported types parse to 0."""
        assert parse_amount(True) == 0
        assert parse_amount([1, 2]) == 0


class TestParseWeekNumber:
    """Tests for parse_week_number function."""

    def test_valid_values(self) -> None:
        """Test ints and numeric strings within range."""
        assert parse_week_number(3) == 3
        assert parse_week_number("5") == 5

    def test_defaults_to_one(self) -> None:
        """Test missing, invalid and out-of-range values."""
        assert parse_week_number(None) == 1
        assert parse_week_number("abc") == 1
        assert parse_week_number(0) == 1
        assert parse_week_number(6) == 1
        assert parse_week_number(True) == 1


class TestMemberDisplayName:
    """Tests for member_display_name function."""

    def test_full_name(self) -> None:
        """Test joining first and last name."""
        assert member_display_name({"firstName": "Grace", "lastName": "Banda"}) == "Grace Banda"

    def test_missing_name_parts(self) -> None:
        """Test fallback label when a name is missing."""
        assert member_display_name({"firstName": "Ruth"}) == "Unknown Member"
        assert member_display_name({}) == "Unknown Member"
        assert member_display_name(None) == "Unknown Member"

    def test_custom_label(self) -> None:
        """Test overriding the fallback label."""
        assert member_display_name({}, unknown_label="Visitor") == "Visitor"


class TestRecordHelpers:
    """Tests for get_field, month_key, submission_total and as_records."""

    def test_get_field_from_mapping_and_object(self) -> None:
        """Test reading fields from dicts and attribute objects."""
        assert get_field({"tithe": 5}, "tithe") == 5
        assert get_field(SimpleNamespace(tithe=7), "tithe") == 7
        assert get_field({}, "tithe", 0) == 0
        assert get_field(None, "tithe") is None

    def test_month_key_is_zero_padded(self) -> None:
        """Test month keys sort chronologically."""
        assert month_key(date(2024, 3, 1)) == "2024-03"
        assert month_key(datetime(2024, 11, 30)) == "2024-11"

    def test_submission_total(self) -> None:
        """Test summing tithe and offering with defaults."""
        assert submission_total({"tithe": "10", "offering": 5}) == 15.0
        assert submission_total({"tithe": None}) == 0.0

    def test_as_records(self) -> None:
        """Test list coercion of top-level inputs."""
        assert as_records(None) == []
        assert as_records("abc") == []
        assert as_records({"a": 1}) == []
        assert as_records([{"a": 1}, None]) == [{"a": 1}]
        assert as_records(({"a": 1},)) == [{"a": 1}]


class TestFilterByDateRange:
    """Tests for filter_by_date_range function."""

    def test_inclusive_bounds(self) -> None:
        """Test that both range ends are included and undated records dropped."""
        records = [
            {"id": 1, "date": "2024-01-01T00:00:00Z"},
            {"id": 2, "date": "2024-01-31T23:00:00Z"},
            {"id": 3, "date": "2024-02-01T00:00:00Z"},
            {"id": 4, "date": None},
        ]
        kept = filter_by_date_range(records, date(2024, 1, 1), date(2024, 1, 31))
        assert [r["id"] for r in kept] == [1, 2]

    @pytest.mark.parametrize("records", [None, "x", 42])
    def test_invalid_input(self, records: object) -> None:
        """Test non-list input yields an empty list."""
        assert filter_by_date_range(records, date(2024, 1, 1), date(2024, 12, 31)) == []
