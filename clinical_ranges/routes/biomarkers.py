"""Biomarker segment API routes.

Thin HTTP surface over the segment engine. Rows and CSV text are supplied by
the caller; nothing is fetched or persisted here.
"""

from fastapi import APIRouter, HTTPException, status

from clinical_ranges.schemas.biomarkers import (
    ClassifyRequest,
    ClassifyResponse,
    DashboardRequest,
    DashboardResponse,
    SegmentsRequest,
)
from clinical_ranges.schemas.ranges import BiomarkerResult
from clinical_ranges.services.dashboard import load_dashboard
from clinical_ranges.services.segment_logic import find_biomarker_row, resolve_biomarker
from clinical_ranges.services.status import get_biomarker_status

router = APIRouter(prefix="/biomarkers", tags=["biomarkers"])


@router.post("/segments", response_model=BiomarkerResult)
async def get_biomarker_segments(request: SegmentsRequest) -> BiomarkerResult:
    """Resolve the segments of one biomarker for an age and gender.

    Raises:
        HTTPException: 404 when no row carries the requested name.
    """
    row = find_biomarker_row(request.rows, request.biomarker_name)
    if row is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Biomarker not found",
        )
    return resolve_biomarker(row, request.age, request.gender)


@router.post("/classify", response_model=ClassifyResponse)
async def classify_value(request: ClassifyRequest) -> ClassifyResponse:
    """Classify a value against a segment sequence."""
    return ClassifyResponse(status=get_biomarker_status(request.value, request.segments))


@router.post("/dashboard", response_model=DashboardResponse)
async def build_dashboard(request: DashboardRequest) -> DashboardResponse:
    """Build dashboard items from inline CSV tables."""
    items = load_dashboard(
        [(table.name, table.csv) for table in request.tables],
        request.age,
        request.gender,
        overrides=request.overrides,
        defaults=request.defaults,
    )
    return DashboardResponse(items=items, total=len(items))
