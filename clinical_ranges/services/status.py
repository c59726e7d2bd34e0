"""Value-to-status classification against a segment sequence."""

from clinical_ranges.schemas.biomarkers import DisplayRange
from clinical_ranges.schemas.ranges import RangeSegment, SegmentStatus

# Highest priority first; breaks ties at shared segment boundaries
_STATUS_PRIORITY: tuple[SegmentStatus, ...] = (
    SegmentStatus.OPTIMAL,
    SegmentStatus.IN_RANGE,
    SegmentStatus.OUT_OF_RANGE,
)


def get_biomarker_status(value: float, segments: list[RangeSegment]) -> SegmentStatus:
    """Classify ``value`` against ``segments``.

    Matching is inclusive on both ends, so a value on a shared boundary
    matches two segments; the more desirable status wins
    (Optimal > In range > Out of range). A value outside every segment,
    or an empty sequence, is Out of range.
    """
    matched = {s.status for s in segments if s.min <= value <= s.max}
    for status in _STATUS_PRIORITY:
        if status in matched:
            return status
    return SegmentStatus.OUT_OF_RANGE


def derive_display_range(segments: list[RangeSegment]) -> DisplayRange:
    """Overall bounds and optimal window of a segment sequence.

    Falls back to 0..100 when there are no segments.
    """
    if not segments:
        return DisplayRange()

    ordered = sorted(segments, key=lambda s: s.min)
    optimal = next((s for s in ordered if s.status == SegmentStatus.OPTIMAL), None)
    return DisplayRange(
        min=ordered[0].min,
        max=ordered[-1].max,
        optimal_start=optimal.min if optimal else None,
        optimal_end=optimal.max if optimal else None,
    )
