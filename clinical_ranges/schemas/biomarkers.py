"""Pydantic schemas for biomarker rows, dashboard items and the HTTP API.

``BiomarkerRow`` validates one CSV line after header normalization. Dynamic
columns such as ``Male_18-39_Optimal`` are kept as extra string fields.
"""

from pydantic import BaseModel, ConfigDict, Field

from clinical_ranges.schemas.ranges import (
    BiomarkerResult,
    Gender,
    RangeSegment,
    SegmentStatus,
)


class BiomarkerRow(BaseModel):
    """One biomarker definition row from a tabular source."""

    model_config = ConfigDict(extra="allow")

    Biomarker_Name: str
    Unit: str = ""
    Category: str | None = None
    id: str | None = None


class DisplayRange(BaseModel):
    """Overall range and optimal window used for compact charts."""

    min: float = 0
    max: float = 100
    optimal_start: float | None = None
    optimal_end: float | None = None


class DashboardItem(BaseModel):
    """A biomarker definition merged with its current value."""

    id: str
    name: str
    value: float
    original_value: float = Field(
        default=0,
        description="Value from the sheet or defaults, ignoring overrides",
    )
    category: str
    status: SegmentStatus
    display_range: DisplayRange
    data: BiomarkerResult


# === API request / response ===


class SegmentsRequest(BaseModel):
    """Resolve segments for one biomarker out of a set of rows."""

    rows: list[dict[str, str]] = Field(description="Header-normalized biomarker rows")
    biomarker_name: str = Field(min_length=1)
    age: int
    gender: Gender


class ClassifyRequest(BaseModel):
    """Classify a value against an already-built segment sequence."""

    value: float
    segments: list[RangeSegment]


class ClassifyResponse(BaseModel):
    status: SegmentStatus


class CsvTable(BaseModel):
    """An already-fetched CSV table and its fallback category name."""

    name: str = Field(min_length=1)
    csv: str


class DashboardRequest(BaseModel):
    tables: list[CsvTable]
    age: int
    gender: Gender
    overrides: dict[str, str] = Field(
        default_factory=dict,
        description="Value overrides keyed by camelCase name, name, or id",
    )
    defaults: dict[str, float] = Field(
        default_factory=dict,
        description="Fallback values keyed by biomarker name, used when no value row exists",
    )


class DashboardResponse(BaseModel):
    items: list[DashboardItem]
    total: int
