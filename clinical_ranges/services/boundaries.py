"""Boundary inference and graph domain resolution.

Merges the Optimal, In range and Out of range strings of a bracket into one
consistent set of bounds, then sizes the display domain around them. Authored
data that contradicts itself is clamped rather than rejected; each clamp is
logged and returned as a ``RangeCorrection``.
"""

import logging
from collections.abc import Mapping

from clinical_ranges.config import settings
from clinical_ranges.schemas.ranges import (
    BoundarySet,
    Gender,
    GraphBounds,
    InRangeBoundaries,
    NumericRange,
    RangeCorrection,
)
from clinical_ranges.services.headers import GRAPH_RANGE, column_variants, lookup
from clinical_ranges.services.range_parser import parse_range_string

logger = logging.getLogger(__name__)


def infer_in_range(
    optimal: NumericRange,
    in_range_raw: NumericRange,
    out_of_range_raw: NumericRange,
) -> InRangeBoundaries:
    """Infer in-range bounds that enclose the optimal range.

    Rules, in order:
      1. In range defaults to its explicit bounds, else the Optimal bounds.
      2. If In range is entirely absent, Out of range edges define it:
         "<60" means the in-range zone starts at 60, ">100" means it ends
         at 100.
      3. If Optimal is known, in_min is clamped down to opt_min and in_max
         up to opt_max.
    """
    opt_min = optimal.min
    opt_max = optimal.max
    corrections: list[RangeCorrection] = []

    in_min = in_range_raw.min if in_range_raw.min is not None else opt_min
    in_max = in_range_raw.max if in_range_raw.max is not None else opt_max

    if in_range_raw.is_empty():
        if out_of_range_raw.max is not None:
            in_min = out_of_range_raw.max
        if out_of_range_raw.min is not None:
            in_max = out_of_range_raw.min

    if opt_min is not None and in_min is not None and in_min > opt_min:
        logger.warning(
            "In range min (%s) is greater than Optimal min (%s). Clamping to Optimal.",
            in_min,
            opt_min,
        )
        corrections.append(
            RangeCorrection(
                field="in_min",
                original=in_min,
                corrected=opt_min,
                reason="In range min above Optimal min",
            )
        )
        in_min = opt_min
    if opt_max is not None and in_max is not None and in_max < opt_max:
        logger.warning(
            "In range max (%s) is less than Optimal max (%s). Clamping to Optimal.",
            in_max,
            opt_max,
        )
        corrections.append(
            RangeCorrection(
                field="in_max",
                original=in_max,
                corrected=opt_max,
                reason="In range max below Optimal max",
            )
        )
        in_max = opt_max

    # In range must enclose Optimal
    if opt_min is not None and in_min is not None:
        in_min = min(in_min, opt_min)
    if opt_max is not None and in_max is not None:
        in_max = max(in_max, opt_max)

    return InRangeBoundaries(
        in_min=in_min,
        in_max=in_max,
        opt_min=opt_min,
        opt_max=opt_max,
        corrections=corrections,
    )


def _graph_range_text(row: Mapping[str, str], gender: Gender) -> str | None:
    """Gender-specific graph range column first, then the generic one."""
    gendered = lookup(row, *column_variants(f"{GRAPH_RANGE} {gender.value}"))
    return gendered or lookup(row, *column_variants(GRAPH_RANGE))


def _range_span(
    in_min: float | None,
    in_max: float | None,
    opt_min: float | None,
    opt_max: float | None,
) -> float:
    """Width of the in-range zone, else the optimal zone, else the fallback."""
    for low, high in ((in_min, in_max), (opt_min, opt_max)):
        if low is not None and high is not None and high > low:
            return high - low
    return settings.graph_fallback_span


def resolve_graph_bounds(
    row: Mapping[str, str],
    gender: Gender,
    in_min: float | None,
    in_max: float | None,
    opt_min: float | None,
    opt_max: float | None,
) -> GraphBounds:
    """Resolve the display domain for a biomarker.

    An explicit ``Graph Range`` column (gender-specific variant first) wins.
    Missing sides are synthesized: the minimum defaults to 0 and the maximum
    to the upper in-range (or optimal) bound plus padding proportional to the
    range span.

    Returns:
        GraphBounds with finite graph_min < graph_max.
    """
    explicit = parse_range_string(_graph_range_text(row, gender))
    graph_min = explicit.min
    graph_max = explicit.max

    if graph_min is not None and graph_max is not None and graph_min > graph_max:
        graph_min, graph_max = graph_max, graph_min

    padding = _range_span(in_min, in_max, opt_min, opt_max) * settings.graph_padding_ratio
    known = [b for b in (in_min, in_max, opt_min, opt_max) if b is not None]

    if graph_min is None:
        graph_min = 0.0
        # Allow the graph to go negative only when the values dictate it
        if known and min(known) < 0:
            graph_min = min(known) - padding

    if graph_max is None:
        # No upper bound known: anchor on a lower bound, not a fixed ceiling
        anchor = next((b for b in (in_max, opt_max, in_min, opt_min) if b is not None), graph_min)
        graph_max = anchor + padding

    if graph_max <= graph_min:
        graph_max = graph_min + padding

    return GraphBounds(graph_min=graph_min, graph_max=graph_max)


def compute_boundaries(
    optimal_str: str | None,
    in_range_str: str | None,
    out_of_range_str: str | None,
    row: Mapping[str, str],
    gender: Gender,
) -> BoundarySet:
    """Parse the three range strings and resolve every boundary."""
    inferred = infer_in_range(
        parse_range_string(optimal_str),
        parse_range_string(in_range_str),
        parse_range_string(out_of_range_str),
    )
    graph = resolve_graph_bounds(
        row,
        gender,
        inferred.in_min,
        inferred.in_max,
        inferred.opt_min,
        inferred.opt_max,
    )
    return BoundarySet(
        **inferred.model_dump(),
        graph_min=graph.graph_min,
        graph_max=graph.graph_max,
    )
