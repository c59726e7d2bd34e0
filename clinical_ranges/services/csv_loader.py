"""Parsing of already-fetched CSV text into header-normalized biomarker rows.

Headers are normalized ("Biomarker Name" -> "Biomarker_Name",
"Male 18-35 Optimal" -> "Male_18-35_Optimal") and each line is validated
against ``BiomarkerRow``. Invalid lines are logged and skipped.
"""

import csv
import io
import logging
from collections.abc import Iterable

from pydantic import ValidationError

from clinical_ranges.schemas.biomarkers import BiomarkerRow
from clinical_ranges.services.headers import NAME_COLUMN, normalize_header

logger = logging.getLogger(__name__)

RawRow = dict[str, str]


def parse_biomarker_data(csv_content: str) -> list[RawRow]:
    """Parse header-row CSV text into validated biomarker rows.

    Args:
        csv_content: Full CSV document, first line is the header.

    Returns:
        Rows keyed by normalized header. Cells beyond the header width are
        dropped; missing trailing cells are absent from the row.
    """
    reader = csv.reader(io.StringIO(csv_content))
    header = next(reader, None)
    if not header:
        return []

    header[0] = header[0].lstrip("\ufeff")
    keys = [normalize_header(h) for h in header]

    rows: list[RawRow] = []
    for index, values in enumerate(reader):
        if not values:
            continue
        raw = {key: value for key, value in zip(keys, values) if key}
        try:
            validated = BiomarkerRow.model_validate(raw)
        except ValidationError as e:
            logger.warning("Row %d invalid: %s", index, e)
            continue
        rows.append(validated.model_dump(exclude_none=True))

    return rows


def create_biomarker_map(rows: Iterable[RawRow]) -> dict[str, RawRow]:
    """Index rows by trimmed biomarker name; later rows win on duplicates."""
    biomarkers: dict[str, RawRow] = {}
    for row in rows:
        name = (row.get(NAME_COLUMN) or "").strip()
        if name:
            biomarkers[name] = row
    return biomarkers
