"""
Query Processor

Applies a PatientQuery to a full record sequence in a fixed order:
  1. search   - case-insensitive substring on name, issue, first email
  2. filters  - exact medical_issue and age equality
  3. sort     - stable sort on the requested key
  4. paginate - half-open slice for the requested page

``total`` is taken after step 2, so sorting and paging never change it.
"""

from __future__ import annotations

from typing import Any, Callable

from patient_directory.models.schemas import Patient, PatientQuery, SortKey, SortOrder


# ---------------------------------------------------------------------------
# Stage 1: search
# ---------------------------------------------------------------------------

def _matches(patient: Patient, needle: str) -> bool:
    if needle in patient.patient_name.lower():
        return True
    if needle in patient.medical_issue.lower():
        return True
    email = patient.primary_email
    return email is not None and needle in email.lower()


def apply_search(records: list[Patient], search: str) -> list[Patient]:
    """Keep records whose name, medical issue or first contact email
    contains *search*, ignoring case. An empty term keeps everything."""
    if not search:
        return list(records)
    needle = search.lower()
    return [p for p in records if _matches(p, needle)]


# ---------------------------------------------------------------------------
# Stage 2: equality filters
# ---------------------------------------------------------------------------

def apply_filters(
    records: list[Patient],
    medical_issue: str = "",
    age: int | None = None,
) -> list[Patient]:
    """Apply the exact-match filters. Unset filters are skipped."""
    if medical_issue:
        records = [p for p in records if p.medical_issue == medical_issue]
    if age is not None:
        records = [p for p in records if p.age == age]
    return list(records)


# ---------------------------------------------------------------------------
# Stage 3: sort
# ---------------------------------------------------------------------------

_SORT_KEYS: dict[SortKey, Callable[[Patient], Any]] = {
    SortKey.patient_name: lambda p: p.patient_name,
    SortKey.age: lambda p: p.age,
    SortKey.medical_issue: lambda p: p.medical_issue,
    SortKey.patient_id: lambda p: p.patient_id,
}


def apply_sort(
    records: list[Patient],
    sort: SortKey | None,
    order: SortOrder = SortOrder.asc,
) -> list[Patient]:
    """Stable sort by *sort*. ``reverse=True`` flips the comparison rather
    than the result, so tied records keep their incoming order for desc too."""
    if sort is None:
        return list(records)
    return sorted(records, key=_SORT_KEYS[sort], reverse=order == SortOrder.desc)


# ---------------------------------------------------------------------------
# Stage 4: paginate
# ---------------------------------------------------------------------------

def paginate(records: list[Patient], page: int, limit: int) -> list[Patient]:
    """Return the 1-indexed *page* of size *limit*; empty past the end."""
    start = (page - 1) * limit
    return records[start : start + limit]


def process(records: list[Patient], query: PatientQuery) -> tuple[list[Patient], int]:
    """Run the full search -> filter -> sort -> paginate pipeline.

    Args:
        records: Full record sequence as loaded from the store.
        query: Normalized query descriptor.

    Returns:
        Tuple of (records on the requested page, total matching records).
    """
    matched = apply_search(records, query.search)
    matched = apply_filters(matched, query.medical_issue, query.age)
    total = len(matched)
    ordered = apply_sort(matched, query.sort, query.order)
    return paginate(ordered, query.page, query.limit), total
