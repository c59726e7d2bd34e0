"""Tests for dashboard assembly from definition and value rows."""

import pytest

from clinical_ranges.schemas.ranges import Gender, SegmentStatus
from clinical_ranges.services.dashboard import (
    build_dashboard_items,
    extract_value_from_name,
    load_dashboard,
    normalize_value_row_name,
    to_camel_case,
)


class TestHelpers:
    @pytest.mark.parametrize(
        "text, expected",
        [
            ("Metabolic Health Score", "metabolicHealthScore"),
            ("Creatinine", "creatinine"),
            ("HbA1c", "hbA1c"),
            ("Vitamin B12", "vitaminB12"),
        ],
    )
    def test_to_camel_case(self, text, expected):
        assert to_camel_case(text) == expected

    def test_extract_value(self):
        assert extract_value_from_name("Creatinine Graph Value: 0.65") == 0.65
        assert extract_value_from_name("Metabolic Health Score Graph Value:78") == 78

    def test_extract_value_missing(self):
        assert extract_value_from_name("Creatinine Graph Value") is None

    def test_normalize_value_row_name(self):
        assert normalize_value_row_name("Creatinine Graph Value: 0.65") == "Creatinine"


class TestBuildDashboardItems:
    def test_value_row_merged(self, creatinine_row):
        value_row = {"Biomarker_Name": "Creatinine Graph Value: 0.65"}
        items = build_dashboard_items([("Biomarkers", [creatinine_row, value_row])], 40, Gender.MALE)

        assert len(items) == 1
        item = items[0]
        assert item.name == "Creatinine"
        assert item.id == "Creatinine"
        assert item.value == 0.65
        assert item.original_value == 0.65
        assert item.category == "Kidney"
        assert item.status == SegmentStatus.IN_RANGE
        assert (item.display_range.optimal_start, item.display_range.optimal_end) == (0.7, 1.3)

    def test_value_row_in_another_table(self, creatinine_row):
        tables = [
            ("Biomarkers", [creatinine_row]),
            ("Metrics", [{"Biomarker_Name": "Creatinine Graph Value: 0.9"}]),
        ]
        items = build_dashboard_items(tables, 40, Gender.MALE)
        assert items[0].value == 0.9
        assert items[0].status == SegmentStatus.OPTIMAL

    def test_override_by_camel_case_name(self, creatinine_row):
        value_row = {"Biomarker_Name": "Creatinine Graph Value: 0.65"}
        items = build_dashboard_items(
            [("Biomarkers", [creatinine_row, value_row])],
            40,
            Gender.MALE,
            overrides={"creatinine": "1.0"},
        )
        assert items[0].value == 1.0
        assert items[0].original_value == 0.65

    def test_override_by_id(self, creatinine_row):
        creatinine_row["id"] = "crt"
        items = build_dashboard_items(
            [("Biomarkers", [creatinine_row])], 40, Gender.MALE, overrides={"crt": "2"}
        )
        assert items[0].id == "crt"
        assert items[0].value == 2
        assert items[0].status == SegmentStatus.OUT_OF_RANGE

    def test_non_numeric_override_ignored(self, creatinine_row):
        items = build_dashboard_items(
            [("Biomarkers", [creatinine_row])], 40, Gender.MALE, overrides={"Creatinine": "abc"}
        )
        assert items[0].value == 0

    def test_defaults_and_zero(self, creatinine_row):
        score = {"Biomarker_Name": "Metabolic Health Score"}
        items = build_dashboard_items(
            [("Metrics", [creatinine_row, score])],
            40,
            Gender.MALE,
            defaults={"Creatinine": 0.63},
        )
        assert items[0].value == 0.63
        assert items[1].value == 0
        assert items[1].category == "Metrics"
        assert items[1].data.segments == []
        assert items[1].status == SegmentStatus.OUT_OF_RANGE

    def test_rows_without_name_skipped(self, creatinine_row):
        items = build_dashboard_items(
            [("Biomarkers", [{"Biomarker_Name": "  "}, creatinine_row])], 40, Gender.MALE
        )
        assert [i.name for i in items] == ["Creatinine"]


class TestLoadDashboard:
    def test_from_csv(self, sample_csv):
        items = load_dashboard([("Biomarkers", sample_csv), ("Metrics", "")], 40, Gender.MALE)
        assert [i.name for i in items] == ["Creatinine", "Metabolic Health Score"]
        creatinine, score = items
        assert creatinine.value == 0.65
        assert creatinine.category == "Kidney"
        assert creatinine.display_range.max == 2
        assert score.category == "Biomarkers"
        assert [s.status for s in score.data.segments] == [
            SegmentStatus.OUT_OF_RANGE,
            SegmentStatus.IN_RANGE,
            SegmentStatus.OPTIMAL,
        ]
