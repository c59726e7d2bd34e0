"""Per-biomarker orchestration of the segment engine.

Pipeline for one (row, age, gender) query:
  1. resolve unit and standard reference (reference_resolver)
  2. select the raw range strings for the age bracket (reference_resolver)
  3. infer boundaries and the graph domain (boundaries)
  4. build segments (segment_builder)

The engine is pure: no I/O, no caching, nothing shared between calls.
"""

import logging
from collections.abc import Iterable, Mapping

from clinical_ranges.schemas.ranges import BiomarkerResult, Gender
from clinical_ranges.services.boundaries import compute_boundaries
from clinical_ranges.services.headers import NAME_COLUMN, NOT_AVAILABLE
from clinical_ranges.services.reference_resolver import (
    RangeStrings,
    determine_range_strings,
    extract_biomarker_info,
)
from clinical_ranges.services.segment_builder import build_segments

logger = logging.getLogger(__name__)


def _display_reference(standard_reference: str, strings: RangeStrings) -> str:
    """Reference text shown next to the chart."""
    if standard_reference and standard_reference != NOT_AVAILABLE:
        return standard_reference
    return strings.optimal or strings.in_range or NOT_AVAILABLE


def find_biomarker_row(
    rows: Iterable[Mapping[str, str]],
    biomarker_name: str,
) -> Mapping[str, str] | None:
    """First row whose trimmed ``Biomarker_Name`` equals ``biomarker_name``."""
    return next(
        (r for r in rows if (r.get(NAME_COLUMN) or "").strip() == biomarker_name),
        None,
    )


def resolve_biomarker(row: Mapping[str, str], age: int, gender: Gender) -> BiomarkerResult:
    """Resolve the reference model of a single row."""
    info = extract_biomarker_info(row, gender)
    strings = determine_range_strings(row, age, gender, info.standard_reference)
    boundaries = compute_boundaries(
        strings.optimal,
        strings.in_range,
        strings.out_of_range,
        row,
        gender,
    )
    return BiomarkerResult(
        segments=build_segments(boundaries),
        standard_reference=_display_reference(info.standard_reference, strings),
        reference_label=info.reference_label,
        unit=info.unit,
        corrections=boundaries.corrections,
    )


def get_segments_for_biomarker(
    rows: Iterable[Mapping[str, str]],
    biomarker_name: str,
    age: int,
    gender: Gender,
) -> BiomarkerResult:
    """Resolve the reference model for the row named ``biomarker_name``.

    Returns:
        BiomarkerResult; empty segments with a "N/A" reference when no row
        carries that name.
    """
    row = find_biomarker_row(rows, biomarker_name)
    if row is None:
        logger.warning("Biomarker not found: %s", biomarker_name)
        return BiomarkerResult()
    return resolve_biomarker(row, age, gender)
