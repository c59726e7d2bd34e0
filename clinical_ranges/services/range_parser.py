"""Free-text range expression parsing.

Turns human-authored strings such as ``"0.75-1.0"``, ``"<0.6"``, ``"> 1.2"``,
``"-5.2 – -1.0"`` into a nullable numeric interval. Unicode comparators such as
``"≥ 1.3"`` are stripped during cleaning and read as a point value. Parsing
never raises: unrecognized or non-finite text degrades to ``None`` on the
affected side(s).
"""

import math
import re

from clinical_ranges.schemas.ranges import NumericRange

# En dash and em dash are both read as a hyphen
_DASHES_RE = re.compile("[–—]")
_DISALLOWED_RE = re.compile(r"[^\d.\-<>=]")
_LESS_THAN_RE = re.compile(r"[<=]")
_GREATER_THAN_RE = re.compile(r"[>=]")

# "min - max", each side may carry its own leading minus sign:
#   "10-20", "-5.2 - -1.0", "-5 - 0"
_RANGE_RE = re.compile(r"^(-?[\d.]+)\s*-\s*(-?[\d.]+)$")

# Longest leading numeric prefix, e.g. "1.2.3" reads as 1.2
_LEADING_NUMBER_RE = re.compile(r"^\s*([-+]?(?:\d+\.?\d*|\.\d+))")


def parse_number(text: str | None) -> float | None:
    """Read the leading number of ``text``, or None if there is none.

    Digit strings too long for a float overflow to infinity and are treated
    as unreadable.
    """
    if not text:
        return None
    match = _LEADING_NUMBER_RE.match(text)
    if match is None:
        return None
    value = float(match.group(1))
    return value if math.isfinite(value) else None


def clean_range_text(text: str) -> str:
    """Normalize dashes and strip every character a range cannot contain."""
    return _DISALLOWED_RE.sub("", _DASHES_RE.sub("-", text))


def parse_range_string(text: str | None) -> NumericRange:
    """Parse a range expression into numeric bounds.

    Grammar, in priority order:
      ``<X`` / ``<=X``     -> (None, X)
      ``>X`` / ``>=X``     -> (X, None)
      ``A - B``            -> (A, B)
      ``X``                -> (X, X)

    Args:
        text: Raw cell text; None or blank means no information.

    Returns:
        NumericRange with None on any side that could not be read.
    """
    if text is None or not text.strip():
        return NumericRange()

    cleaned = clean_range_text(text)

    if "<" in cleaned:
        return NumericRange(max=parse_number(_LESS_THAN_RE.sub("", cleaned)))
    if ">" in cleaned:
        return NumericRange(min=parse_number(_GREATER_THAN_RE.sub("", cleaned)))

    match = _RANGE_RE.match(cleaned)
    if match:
        return NumericRange(
            min=parse_number(match.group(1)),
            max=parse_number(match.group(2)),
        )

    # No separator: a single value is a point range
    value = parse_number(cleaned)
    return NumericRange(min=value, max=value)
