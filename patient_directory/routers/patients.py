"""
Patients Router

GET /api/patients        - Search, filter, sort and paginate the directory
GET /api/patients/facets - Distinct medical issues across all records
"""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Query

from patient_directory.core import patient_store, query_processor
from patient_directory.core.query_builder import build_query
from patient_directory.models.schemas import FacetsResponse, PatientPage

logger = logging.getLogger(__name__)

router = APIRouter()


# ── GET /api/patients ────────────────────────────────────────────────────────

@router.get("", response_model=PatientPage)
async def list_patients(
    page: Optional[str] = Query(None),
    limit: Optional[str] = Query(None),
    search: Optional[str] = Query(None),
    sort: Optional[str] = Query(None),
    order: Optional[str] = Query(None),
    medical_issue: Optional[str] = Query(None),
    age: Optional[str] = Query(None),
) -> PatientPage:
    """Return one page of patients matching the search and filters.

    Parameters arrive as raw strings so that malformed numbers are handled
    by the query builder (clamped, or rejected in strict mode) instead of
    failing FastAPI's own validation.
    """
    query = build_query(
        page=page,
        limit=limit,
        search=search,
        sort=sort,
        order=order,
        medical_issue=medical_issue,
        age=age,
    )
    records = patient_store.load()
    data, total = query_processor.process(records, query)

    logger.info(
        "list_patients: search=%r medical_issue=%r age=%s -> %d of %d",
        query.search, query.medical_issue, query.age, len(data), total,
    )
    return PatientPage(data=data, total=total, page=query.page, limit=query.limit)


# ── GET /api/patients/facets ─────────────────────────────────────────────────

@router.get("/facets", response_model=FacetsResponse)
async def list_facets() -> FacetsResponse:
    """Return every distinct medical issue with its record count."""
    counts = patient_store.list_medical_issues(patient_store.load())
    return FacetsResponse(medical_issues=list(counts), counts=counts)
