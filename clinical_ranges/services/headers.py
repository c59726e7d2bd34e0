"""Column header normalization and the fixed column names of a biomarker row."""

import re

# Fixed columns (normalized form)
NAME_COLUMN = "Biomarker_Name"
UNIT_COLUMN = "Unit"
CATEGORY_COLUMN = "Category"
ID_COLUMN = "id"

STD_REF_PREFIX = "Standard Reference Range"
GRAPH_RANGE = "Graph Range"

NOT_AVAILABLE = "N/A"

_WHITESPACE_RE = re.compile(r"\s+")


def normalize_header(header: str) -> str:
    """Normalize a raw column header to the engine's key space.

    Leading/trailing whitespace is trimmed and every run of inner whitespace
    becomes a single underscore. Case is preserved.

        >>> normalize_header("  Male 18-35   Optimal ")
        'Male_18-35_Optimal'
    """
    trimmed = (header or "").strip()
    if not trimmed:
        return ""
    return _WHITESPACE_RE.sub("_", trimmed)


def lookup(row, *keys: str) -> str | None:
    """Return the first non-empty value among ``keys`` in ``row``."""
    for key in keys:
        value = row.get(key)
        if value:
            return value
    return None


def column_variants(label: str) -> tuple[str, str]:
    """Return the (normalized, spaced) spellings of a column label."""
    return normalize_header(label), label
