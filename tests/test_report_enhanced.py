"""Tests for enhanced report assembly."""

from datetime import UTC, datetime

import pytest

from church_finance.report.enhanced import empty_report, generate_enhanced_report

JANUARY = {"start": "2024-01-01", "end": "2024-01-31"}


class TestGenerateEnhancedReport:
    """Tests for generate_enhanced_report function."""

    def test_null_data(self) -> None:
        """Test that null data yields an empty report."""
        report = generate_enhanced_report(None, JANUARY)

        assert report["summary"]["numberOfContributions"] == 0
        assert report["summary"]["averageContribution"] == 0
        assert report["details"] == []
        assert report["dateRange"] == JANUARY

    @pytest.mark.parametrize("data", ["abc", 42, {"tithe": 10}])
    def test_non_list_data(self, data: object, caplog: pytest.LogCaptureFixture) -> None:
        """Test that non-list data is logged and treated as empty."""
        report = generate_enhanced_report(data, JANUARY)

        assert report == empty_report(JANUARY)
        assert "Invalid data provided" in caplog.text

    def test_summary_and_details(self, sample_submissions: list) -> None:
        """Test totals, average and detail rows over the sample snapshot."""
        report = generate_enhanced_report(sample_submissions, {"start": "a", "end": "b"})
        summary = report["summary"]

        assert summary["numberOfContributions"] == 5
        assert summary["totalTithes"] == pytest.approx(380.5)
        assert summary["totalOfferings"] == pytest.approx(70.0)
        assert summary["totalContributions"] == pytest.approx(450.5)
        assert summary["averageContribution"] == pytest.approx(90.1)

        first = report["details"][0]
        assert first == {
            "date": datetime(2024, 2, 4, 9, 0, tzinfo=UTC),
            "memberName": "Grace Banda",
            "tithe": 100.0,
            "offering": 20.0,
            "weekNumber": 1,
        }

    def test_detail_defaults(self, sample_submissions: list) -> None:
        """Test fallbacks for missing member names, week numbers and dates."""
        details = generate_enhanced_report(sample_submissions, JANUARY)["details"]
        by_tithe = {d["tithe"]: d for d in details}

        assert by_tithe[0.0]["memberName"] == "Unknown Member"
        assert by_tithe[30.0]["date"] is None
        assert by_tithe[30.0]["weekNumber"] == 1
        assert by_tithe[50.5]["weekNumber"] == 2

    def test_entries_without_amounts_excluded(self) -> None:
        """Test that entries lacking both tithe and offering are dropped."""
        data = [
            {"tithe": 0, "offering": 0},
            {"tithe": None},
            {},
            None,
            {"tithe": 25},
        ]
        report = generate_enhanced_report(data, JANUARY)

        assert report["summary"]["numberOfContributions"] == 1
        assert report["summary"]["averageContribution"] == 25.0
        assert len(report["details"]) == 1

    def test_custom_unknown_label(self) -> None:
        """Test overriding the member fallback name."""
        report = generate_enhanced_report([{"offering": 5}], JANUARY, unknown_label="Guest")
        assert report["details"][0]["memberName"] == "Guest"

    def test_missing_date_range(self) -> None:
        """Test the default date-range descriptor."""
        assert generate_enhanced_report([], None)["dateRange"] == {"start": "", "end": ""}
