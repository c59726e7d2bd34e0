"""Tests for unit/standard reference lookup and range string selection."""

from clinical_ranges.schemas.ranges import Gender
from clinical_ranges.services.reference_resolver import (
    RangeStrings,
    determine_range_strings,
    extract_biomarker_info,
    find_standard_reference,
)


class TestFindStandardReference:
    def test_normalized_gendered_key(self):
        row = {"Standard_Reference_Range_Male": "1-2"}
        assert find_standard_reference(row, Gender.MALE) == "1-2"

    def test_spaced_gendered_key(self):
        row = {"Standard Reference Range Female": "3-4"}
        assert find_standard_reference(row, Gender.FEMALE) == "3-4"

    def test_empty_normalized_key_falls_through(self):
        row = {
            "Standard_Reference_Range_Male": "",
            "Standard Reference Range Male": "5-6",
        }
        assert find_standard_reference(row, Gender.MALE) == "5-6"

    def test_fuzzy_key_scan(self):
        row = {"STANDARD_reference  range_male": "7-8"}
        assert find_standard_reference(row, Gender.MALE) == "7-8"

    def test_generic_key(self):
        assert find_standard_reference({"Standard_Reference_Range": "9-10"}, Gender.MALE) == "9-10"
        assert find_standard_reference({"Standard Reference Range": "9-11"}, Gender.FEMALE) == "9-11"

    def test_gendered_key_beats_generic(self):
        row = {
            "Standard_Reference_Range": "generic",
            "Standard_Reference_Range_Female": "female",
        }
        assert find_standard_reference(row, Gender.FEMALE) == "female"
        assert find_standard_reference(row, Gender.MALE) == "generic"

    def test_not_available(self):
        assert find_standard_reference({"Unit": "mg/dL"}, Gender.MALE) == "N/A"


class TestExtractBiomarkerInfo:
    def test_full_row(self, creatinine_row):
        info = extract_biomarker_info(creatinine_row, Gender.MALE)
        assert info.unit == "mg/dL"
        assert info.standard_reference == "0.74 - 1.35"
        assert info.reference_label == "Standard Reference Range Male"

    def test_unit_defaults_to_empty(self):
        info = extract_biomarker_info({"Biomarker_Name": "HOMA-IR"}, Gender.FEMALE)
        assert info.unit == ""
        assert info.standard_reference == "N/A"
        assert info.reference_label == "Standard Reference Range Female"


class TestDetermineRangeStrings:
    def test_bracket_strings(self, creatinine_row):
        strings = determine_range_strings(creatinine_row, 40, Gender.MALE, "0.74 - 1.35")
        assert strings == RangeStrings(optimal="0.7-1.3", in_range="0.6-1.4", out_of_range=None)

    def test_missing_optimal_uses_standard_reference(self):
        row = {"Male_18-65_In range": "1-10"}
        strings = determine_range_strings(row, 30, Gender.MALE, "2-8")
        assert strings.optimal == "2-8"
        assert strings.in_range == "1-10"

    def test_missing_optimal_without_standard_reference(self):
        row = {"Male_18-65_In range": "1-10"}
        strings = determine_range_strings(row, 30, Gender.MALE, "N/A")
        assert strings.optimal is None
        assert strings.in_range == "1-10"

    def test_no_bracket_degrades_to_standard_reference(self, creatinine_row):
        strings = determine_range_strings(creatinine_row, 10, Gender.FEMALE, "0.59 - 1.04")
        assert strings == RangeStrings(optimal="0.59 - 1.04")

    def test_no_bracket_and_no_standard_reference(self):
        strings = determine_range_strings({"Male_18-65_Optimal": "1-2"}, 5, Gender.MALE, "N/A")
        assert strings == RangeStrings()

    def test_open_ended_bracket_matches_very_old_age(self, creatinine_row):
        strings = determine_range_strings(creatinine_row, 120, Gender.MALE, "N/A")
        assert strings.optimal == "0.8-1.4"

    def test_uses_queried_gender_branch(self, creatinine_row):
        strings = determine_range_strings(creatinine_row, 40, Gender.FEMALE, "N/A")
        assert strings.optimal == "0.6-1.0"
        assert strings.out_of_range == "<0.5"
        assert strings.in_range is None
