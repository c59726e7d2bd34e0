"""Selection of reference strings for a (row, age, gender) query.

Resolves the unit and the textual "standard reference" of a row, and picks
the raw Optimal / In range / Out of range strings from the age bracket that
contains the queried age.
"""

import re
from collections.abc import Mapping
from dataclasses import dataclass

from clinical_ranges.schemas.ranges import Gender, RangeKind
from clinical_ranges.services.brackets import extract_biomarker_config
from clinical_ranges.services.headers import (
    NOT_AVAILABLE,
    STD_REF_PREFIX,
    UNIT_COLUMN,
    column_variants,
    lookup,
    normalize_header,
)

_KEY_SEPARATORS_RE = re.compile(r"[\s_]+")


@dataclass(frozen=True)
class BiomarkerInfo:
    """Unit and standard reference resolved for one gender."""

    unit: str
    standard_reference: str
    reference_label: str


@dataclass(frozen=True)
class RangeStrings:
    """Raw range strings selected for one age/gender; None when absent."""

    optimal: str | None = None
    in_range: str | None = None
    out_of_range: str | None = None


def _fold_key(key: str) -> str:
    return _KEY_SEPARATORS_RE.sub("", key.lower())


def find_standard_reference(row: Mapping[str, str], gender: Gender) -> str:
    """Look up the standard reference string for ``gender``.

    Fallback chain:
      1. ``Standard_Reference_Range_<Gender>``
      2. ``Standard Reference Range <Gender>``
      3. any key equal to the above ignoring case, spaces and underscores
      4. the ungendered ``Standard_Reference_Range`` / ``Standard Reference Range``
      5. ``"N/A"``
    """
    spaced_key = f"{STD_REF_PREFIX} {gender.value}"
    value = lookup(row, normalize_header(spaced_key), spaced_key)
    if value:
        return value

    target = _fold_key(spaced_key)
    for key in row:
        if _fold_key(key) == target and row[key]:
            return row[key]

    return lookup(row, *column_variants(STD_REF_PREFIX)) or NOT_AVAILABLE


def extract_biomarker_info(row: Mapping[str, str], gender: Gender) -> BiomarkerInfo:
    """Resolve unit, standard reference and its display label for a row."""
    return BiomarkerInfo(
        unit=row.get(UNIT_COLUMN) or "",
        standard_reference=find_standard_reference(row, gender),
        reference_label=f"{STD_REF_PREFIX} {gender.value}",
    )


def determine_range_strings(
    row: Mapping[str, str],
    age: int,
    gender: Gender,
    standard_reference: str,
) -> RangeStrings:
    """Select the raw range strings that apply to ``age`` and ``gender``.

    When a bracket contains the age, its strings are returned and a missing
    Optimal string falls back to the standard reference. When no bracket
    matches, only the standard reference is returned (as Optimal), and
    In range / Out of range stay absent.

    Args:
        row: Header-normalized biomarker row.
        age: Query age in years. Not clamped.
        gender: Query gender.
        standard_reference: Result of ``find_standard_reference``.
    """
    fallback = standard_reference if standard_reference != NOT_AVAILABLE else None

    bracket = extract_biomarker_config(row)[gender].find_bracket(age)
    if bracket is None:
        return RangeStrings(optimal=fallback)

    return RangeStrings(
        optimal=bracket.ranges.get(RangeKind.OPTIMAL) or fallback,
        in_range=bracket.ranges.get(RangeKind.IN_RANGE),
        out_of_range=bracket.ranges.get(RangeKind.OUT_OF_RANGE),
    )
