"""Dashboard assembly from biomarker tables.

A table mixes two kinds of rows:
  - definition rows, one per biomarker, carrying the reference columns
  - value rows named "<Biomarker> Graph Value: <number>", carrying the
    current measurement for a biomarker defined elsewhere

Definitions are merged with their values and resolved through the segment
engine. Value priority: caller override -> value row -> caller default -> 0.
"""

import logging
import re
from collections.abc import Iterable, Mapping

from clinical_ranges.schemas.biomarkers import DashboardItem
from clinical_ranges.schemas.ranges import Gender
from clinical_ranges.services.csv_loader import RawRow, parse_biomarker_data
from clinical_ranges.services.headers import CATEGORY_COLUMN, ID_COLUMN, NAME_COLUMN
from clinical_ranges.services.range_parser import parse_number
from clinical_ranges.services.segment_logic import resolve_biomarker
from clinical_ranges.services.status import derive_display_range, get_biomarker_status

logger = logging.getLogger(__name__)

VALUE_ROW_MARKER = "Graph Value"

_VALUE_RE = re.compile(r":\s*([\d.]+)")
_CAMEL_RE = re.compile(r"(?:^\w|[A-Z]|\b\w)")
_WHITESPACE_RE = re.compile(r"\s+")


def to_camel_case(text: str) -> str:
    """Convert a display name to camelCase ("Metabolic Health Score" -> "metabolicHealthScore")."""
    cased = _CAMEL_RE.sub(
        lambda m: m.group(0).lower() if m.start() == 0 else m.group(0).upper(),
        text,
    )
    return _WHITESPACE_RE.sub("", cased)


def extract_value_from_name(name: str) -> float | None:
    """Read the number after the colon of a value row name."""
    match = _VALUE_RE.search(name)
    if match is None:
        return None
    return parse_number(match.group(1))


def normalize_value_row_name(name: str) -> str:
    """Strip the value suffix ("Creatinine Graph Value: 0.65" -> "Creatinine")."""
    return name.split(VALUE_ROW_MARKER)[0].strip()


def _override_value(overrides: Mapping[str, str], name: str, item_id: str) -> float | None:
    raw = overrides.get(to_camel_case(name)) or overrides.get(name) or overrides.get(item_id)
    if not raw:
        return None
    value = parse_number(raw)
    if value is None:
        logger.warning("Ignoring non-numeric override %r for %s", raw, name)
    return value


def build_dashboard_items(
    tables: Iterable[tuple[str, list[RawRow]]],
    age: int,
    gender: Gender,
    overrides: Mapping[str, str] | None = None,
    defaults: Mapping[str, float] | None = None,
) -> list[DashboardItem]:
    """Merge definition and value rows and resolve every biomarker.

    Args:
        tables: (table name, rows) pairs; the table name is the fallback
            category for rows without one.
        age: Query age in years.
        gender: Query gender.
        overrides: Values keyed by camelCase name, name, or row id.
        defaults: Values used when no value row exists for a biomarker.

    Returns:
        One DashboardItem per definition row, in table order.
    """
    overrides = overrides or {}
    defaults = defaults or {}

    definitions: list[tuple[RawRow, str]] = []
    values: dict[str, float] = {}

    for table_name, rows in tables:
        for row in rows:
            name = (row.get(NAME_COLUMN) or "").strip()
            if not name:
                continue
            if VALUE_ROW_MARKER in name:
                value_name = normalize_value_row_name(name)
                value = extract_value_from_name(name)
                if value_name and value is not None:
                    values[value_name] = value
            else:
                definitions.append((row, table_name))

    items: list[DashboardItem] = []
    for row, table_name in definitions:
        name = row[NAME_COLUMN].strip()
        item_id = row.get(ID_COLUMN) or name

        base_value = values.get(name, defaults.get(name, 0.0))
        override = _override_value(overrides, name, item_id)
        value = override if override is not None else base_value

        data = resolve_biomarker(row, age, gender)
        items.append(
            DashboardItem(
                id=item_id,
                name=name,
                value=value,
                original_value=base_value,
                category=row.get(CATEGORY_COLUMN) or table_name,
                status=get_biomarker_status(value, data.segments),
                display_range=derive_display_range(data.segments),
                data=data,
            )
        )

    logger.info("Built %d dashboard items (%d values)", len(items), len(values))
    return items


def load_dashboard(
    csv_tables: Iterable[tuple[str, str]],
    age: int,
    gender: Gender,
    overrides: Mapping[str, str] | None = None,
    defaults: Mapping[str, float] | None = None,
) -> list[DashboardItem]:
    """Parse (table name, CSV text) pairs and build the dashboard.

    Empty tables are skipped, matching a source that failed to deliver.
    """
    tables = [(name, parse_biomarker_data(text)) for name, text in csv_tables if text]
    return build_dashboard_items(tables, age, gender, overrides=overrides, defaults=defaults)
