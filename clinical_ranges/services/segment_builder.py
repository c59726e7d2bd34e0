"""Construction of ordered display segments from a boundary set.

Layouts:
  - no in-range bounds:   no segments (blank chart)
  - optimal known:        Out -> In -> Optimal -> In -> Out
  - optimal not known:    [Out] -> In -> [Out], edge zones only on known sides

Zero-width zones are dropped. Cut points are kept inside the graph domain and
non-decreasing, so the result is always contiguous from graph_min to
graph_max.
"""

from clinical_ranges.schemas.ranges import BoundarySet, RangeSegment, SegmentStatus


def _layout(
    graph_min: float,
    in_min: float | None,
    opt_min: float | None,
    opt_max: float | None,
    in_max: float | None,
    graph_max: float,
) -> tuple[list[float], list[SegmentStatus]]:
    """Return cut points and the status of each zone between them."""
    eff_in_min = in_min if in_min is not None else graph_min
    eff_in_max = in_max if in_max is not None else graph_max

    if opt_min is None or opt_max is None:
        points = [graph_min]
        statuses: list[SegmentStatus] = []
        if in_min is not None:
            points.append(eff_in_min)
            statuses.append(SegmentStatus.OUT_OF_RANGE)
        points.append(eff_in_max)
        statuses.append(SegmentStatus.IN_RANGE)
        if in_max is not None:
            points.append(graph_max)
            statuses.append(SegmentStatus.OUT_OF_RANGE)
        return points, statuses

    points = [graph_min, eff_in_min, opt_min, opt_max, eff_in_max, graph_max]
    statuses = [
        SegmentStatus.OUT_OF_RANGE,
        SegmentStatus.IN_RANGE,
        SegmentStatus.OPTIMAL,
        SegmentStatus.IN_RANGE,
        SegmentStatus.OUT_OF_RANGE,
    ]
    return points, statuses


def build_segments_from_boundaries(
    graph_min: float,
    in_min: float | None,
    opt_min: float | None,
    opt_max: float | None,
    in_max: float | None,
    graph_max: float,
) -> list[RangeSegment]:
    """Build the ordered, non-overlapping segments for one biomarker.

    Returns:
        Segments sorted by ``min``; empty when both in-range bounds are None.
    """
    if in_min is None and in_max is None:
        return []

    points, statuses = _layout(graph_min, in_min, opt_min, opt_max, in_max, graph_max)

    segments: list[RangeSegment] = []
    previous = graph_min
    for point, status in zip(points[1:], statuses):
        current = min(max(point, previous), graph_max)
        if current > previous:
            segments.append(
                RangeSegment(min=previous, max=current, label=status.value, status=status)
            )
        previous = current
    return segments


def build_segments(boundaries: BoundarySet) -> list[RangeSegment]:
    """Build segments from an inferred and domain-resolved boundary set."""
    return build_segments_from_boundaries(
        boundaries.graph_min,
        boundaries.in_min,
        boundaries.opt_min,
        boundaries.opt_max,
        boundaries.in_max,
        boundaries.graph_max,
    )
