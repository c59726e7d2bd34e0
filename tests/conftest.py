"""Pytest configuration and shared fixtures.

This module provides centralized test fixtures for:
- HTTP client for API testing
- Common biomarker rows and CSV documents
"""

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from clinical_ranges.main import app


# =============================================================================
# HTTP Client Fixtures
# =============================================================================


@pytest_asyncio.fixture
async def client():
    """Async test client for the FastAPI app."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac


# =============================================================================
# Biomarker Data Fixtures
# =============================================================================


@pytest.fixture
def creatinine_row() -> dict[str, str]:
    """Creatinine definition with male and female age brackets."""
    return {
        "Biomarker_Name": "Creatinine",
        "Unit": "mg/dL",
        "Category": "Kidney",
        "Standard_Reference_Range_Male": "0.74 - 1.35",
        "Standard_Reference_Range_Female": "0.59 - 1.04",
        "Male_18-65_Optimal": "0.7-1.3",
        "Male_18-65_In_range": "0.6-1.4",
        "Male_66+_Optimal": "0.8-1.4",
        "Female_18-65_Optimal": "0.6-1.0",
        "Female_18-65_Out of range": "<0.5",
    }


@pytest.fixture
def sample_csv() -> str:
    """Two definitions and a value row, headers in their raw spaced form."""
    return (
        "Biomarker Name,Unit,Category,Male 18-65 Optimal,Male 18-65 In range,"
        "Female 18-65 Optimal,Graph Range\n"
        "Creatinine,mg/dL,Kidney,0.7-1.3,0.6-1.4,0.6-1.0,0-2\n"
        "Metabolic Health Score,,,70-100,50-100,70-100,0-100\n"
        "\n"
        "Creatinine Graph Value: 0.65,,,,,,\n"
    )
