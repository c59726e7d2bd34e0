"""Pydantic schemas."""

from clinical_ranges.schemas.biomarkers import (
    BiomarkerRow,
    ClassifyRequest,
    ClassifyResponse,
    CsvTable,
    DashboardItem,
    DashboardRequest,
    DashboardResponse,
    DisplayRange,
    SegmentsRequest,
)
from clinical_ranges.schemas.ranges import (
    BiomarkerResult,
    BoundarySet,
    Gender,
    GraphBounds,
    InRangeBoundaries,
    NumericRange,
    RangeCorrection,
    RangeKind,
    RangeSegment,
    SegmentStatus,
)

__all__ = [
    "BiomarkerResult",
    "BiomarkerRow",
    "BoundarySet",
    "ClassifyRequest",
    "ClassifyResponse",
    "CsvTable",
    "DashboardItem",
    "DashboardRequest",
    "DashboardResponse",
    "DisplayRange",
    "Gender",
    "GraphBounds",
    "InRangeBoundaries",
    "NumericRange",
    "RangeCorrection",
    "RangeKind",
    "RangeSegment",
    "SegmentStatus",
    "SegmentsRequest",
]
