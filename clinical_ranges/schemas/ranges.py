"""Pydantic schemas for reference-range resolution results.

These schemas define the values produced by the segment engine: parsed numeric
ranges, inferred boundaries, the ordered display segments, and the final
per-biomarker result handed to the output consumer.

Boundary semantics: ``None`` on a side of a range means "unbounded on this
side". Both sides ``None`` together means "no information".
"""

from enum import Enum

from pydantic import BaseModel, Field


# === Enums ===


class Gender(str, Enum):
    """Query gender. Values match the gender prefix used in column headers."""

    MALE = "Male"
    FEMALE = "Female"


class SegmentStatus(str, Enum):
    """Clinical zone of a segment, ordered by desirability."""

    OPTIMAL = "Optimal"
    IN_RANGE = "In range"
    OUT_OF_RANGE = "Out of range"


class RangeKind(str, Enum):
    """Kind of raw range string stored on an age bracket."""

    OPTIMAL = "optimal"
    IN_RANGE = "in_range"
    OUT_OF_RANGE = "out_of_range"


# === Range values ===


class NumericRange(BaseModel):
    """A nullable numeric interval parsed from free text."""

    min: float | None = None
    max: float | None = None

    def is_empty(self) -> bool:
        """True when neither side carries information."""
        return self.min is None and self.max is None


class RangeCorrection(BaseModel):
    """A correction applied to inconsistent authored range data."""

    field: str = Field(description="Boundary that was corrected (e.g. 'in_min')")
    original: float = Field(description="Value before correction")
    corrected: float = Field(description="Value after correction")
    reason: str = Field(description="Human-readable reason for the correction")


class InRangeBoundaries(BaseModel):
    """In-range and optimal bounds after inference and clamping."""

    in_min: float | None = None
    in_max: float | None = None
    opt_min: float | None = None
    opt_max: float | None = None
    corrections: list[RangeCorrection] = Field(default_factory=list)


class GraphBounds(BaseModel):
    """Finite display domain for a biomarker chart."""

    graph_min: float
    graph_max: float


class BoundarySet(InRangeBoundaries):
    """All boundaries needed to lay out segments over the graph domain."""

    graph_min: float
    graph_max: float


# === Results ===


class RangeSegment(BaseModel):
    """One contiguous labelled zone of the graph domain."""

    min: float
    max: float
    label: str
    status: SegmentStatus


class BiomarkerResult(BaseModel):
    """Resolved reference model for one (row, age, gender) query."""

    segments: list[RangeSegment] = Field(default_factory=list)
    standard_reference: str = Field(default="N/A", description="Display reference string")
    reference_label: str = Field(default="", description="Label for the reference string")
    unit: str = Field(default="", description="Measurement unit")
    corrections: list[RangeCorrection] = Field(
        default_factory=list,
        description="Clamp corrections applied while inferring boundaries",
    )
