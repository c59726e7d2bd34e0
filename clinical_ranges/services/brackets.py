"""Decomposition of a row's dynamic columns into a Gender -> AgeBracket tree.

Dynamic column headers follow ``<Gender>_<MinAge>[-<MaxAge>|+]_<Kind>``:

    Male_18-35_Optimal
    Female_50+_In range
    Male_65_Out_of_range      (single-year bracket)

Headers that do not match, carry an unknown kind, or hold an empty value are
ignored; the rest of a row's column space is unconstrained.
"""

import logging
import re
import sys
from collections.abc import Mapping
from dataclasses import dataclass, field

from clinical_ranges.schemas.ranges import Gender, RangeKind

logger = logging.getLogger(__name__)

# Upper age of open-ended brackets such as "60+"
UNBOUNDED_AGE = sys.maxsize

# Groups: 1=gender, 2=min age, 3=max age (opt), 4=plus (opt), 5=kind
_HEADER_RE = re.compile(r"^(Male|Female)_(\d+)(?:-(\d+))?(\+)?_(.+)$", re.IGNORECASE)

_KIND_SEPARATORS_RE = re.compile(r"[\s_]+")

_KINDS: dict[str, RangeKind] = {
    "optimal": RangeKind.OPTIMAL,
    "inrange": RangeKind.IN_RANGE,
    "outofrange": RangeKind.OUT_OF_RANGE,
}


@dataclass
class AgeBracket:
    """Raw range strings for one gender within an inclusive age window."""

    min_age: int
    max_age: int
    ranges: dict[RangeKind, str] = field(default_factory=dict)

    def contains(self, age: int) -> bool:
        return self.min_age <= age <= self.max_age


@dataclass
class GenderConfig:
    """Age brackets for one gender, sorted by ``min_age``."""

    brackets: list[AgeBracket] = field(default_factory=list)

    def find_bracket(self, age: int) -> AgeBracket | None:
        """Return the first bracket whose window contains ``age``.

        Brackets may overlap, so every bracket is checked in order.
        """
        for bracket in self.brackets:
            if bracket.contains(age):
                return bracket
        return None


BiomarkerConfig = dict[Gender, GenderConfig]


def normalize_range_kind(suffix: str) -> RangeKind | None:
    """Map header kind text to a RangeKind ("In range" -> IN_RANGE)."""
    return _KINDS.get(_KIND_SEPARATORS_RE.sub("", suffix.lower()))


def parse_bracket_header(key: str) -> tuple[Gender, int, int, RangeKind] | None:
    """Decompose a dynamic column header.

    Returns:
        (gender, min_age, max_age, kind), or None if the header is not a
        bracket column.
    """
    match = _HEADER_RE.match(key)
    if not match:
        return None

    kind = normalize_range_kind(match.group(5))
    if kind is None:
        logger.debug("Ignoring column %r: unknown range kind", key)
        return None

    gender = Gender.MALE if match.group(1).lower() == "male" else Gender.FEMALE
    min_age = int(match.group(2))
    if match.group(3):
        max_age = int(match.group(3))
    elif match.group(4):
        max_age = UNBOUNDED_AGE
    else:
        max_age = min_age

    if max_age < min_age:
        logger.debug("Ignoring column %r: inverted age window", key)
        return None

    return gender, min_age, max_age, kind


def extract_biomarker_config(row: Mapping[str, str]) -> BiomarkerConfig:
    """Build the Gender -> AgeBracket -> RangeKind tree for one row.

    Columns sharing a (gender, min_age, max_age) window are merged into a
    single bracket, so Optimal and In range can come from different columns.
    """
    config: BiomarkerConfig = {Gender.MALE: GenderConfig(), Gender.FEMALE: GenderConfig()}
    index: dict[tuple[Gender, int, int], AgeBracket] = {}

    for key, value in row.items():
        if not value:
            continue
        parsed = parse_bracket_header(key)
        if parsed is None:
            continue

        gender, min_age, max_age, kind = parsed
        bracket = index.get((gender, min_age, max_age))
        if bracket is None:
            bracket = AgeBracket(min_age=min_age, max_age=max_age)
            index[(gender, min_age, max_age)] = bracket
            config[gender].brackets.append(bracket)
        bracket.ranges[kind] = value

    for gender_config in config.values():
        gender_config.brackets.sort(key=lambda b: b.min_age)

    return config
