"""
Query Builder for the patient listing

Turns raw URL parameters into a PatientQuery. Two modes:
  permissive (default) - bad numbers fall back to defaults, page/limit are
                         clamped to >= 1, unknown sort keys are ignored.
  strict               - any of the above raises InvalidQuery instead.
"""

from __future__ import annotations

import logging
from typing import Optional

from patient_directory.config import settings
from patient_directory.core.errors import InvalidQuery
from patient_directory.models.schemas import PatientQuery, SortKey, SortOrder

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Parameter parsing
# ---------------------------------------------------------------------------

def _parse_int(name: str, raw: Optional[str], strict: bool) -> Optional[int]:
    """Parse *raw* as an integer; ``None`` means missing or unparseable."""
    if raw is None or raw.strip() == "":
        return None
    try:
        return int(raw.strip())
    except ValueError:
        if strict:
            raise InvalidQuery(f"{name} must be an integer, got {raw!r}")
        logger.debug("Ignoring non-numeric %s=%r", name, raw)
        return None


def _at_least_one(name: str, value: Optional[int], default: int, strict: bool) -> int:
    if value is None:
        return default
    if value < 1:
        if strict:
            raise InvalidQuery(f"{name} must be >= 1, got {value}")
        logger.debug("Clamping %s=%d to 1", name, value)
        return 1
    return value


def _parse_sort(raw: Optional[str], strict: bool) -> Optional[SortKey]:
    if not raw:
        return None
    try:
        return SortKey(raw)
    except ValueError:
        if strict:
            valid = ", ".join(k.value for k in SortKey)
            raise InvalidQuery(f"sort must be one of {valid}, got {raw!r}")
        logger.debug("Ignoring unrecognized sort=%r", raw)
        return None


def _parse_order(raw: Optional[str], strict: bool) -> SortOrder:
    if not raw:
        return SortOrder.asc
    try:
        return SortOrder(raw.lower())
    except ValueError:
        if strict:
            raise InvalidQuery(f"order must be asc or desc, got {raw!r}")
        logger.debug("Treating unrecognized order=%r as asc", raw)
        return SortOrder.asc


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------

def build_query(
    page: Optional[str] = None,
    limit: Optional[str] = None,
    search: Optional[str] = None,
    sort: Optional[str] = None,
    order: Optional[str] = None,
    medical_issue: Optional[str] = None,
    age: Optional[str] = None,
    strict: Optional[bool] = None,
) -> PatientQuery:
    """Build a normalized query descriptor from raw request parameters.

    Args:
        page, limit, age: Raw integer strings as they appear in the URL.
        search: Free-text term; an empty string disables search.
        sort: One of the SortKey values; empty disables sorting.
        order: ``asc`` or ``desc``.
        medical_issue: Exact-match filter; empty disables it.
        strict: Reject bad input instead of clamping. Defaults to
            ``settings.STRICT_QUERY_VALIDATION``.

    Raises:
        InvalidQuery: Only in strict mode, for any parameter that the
            permissive mode would have clamped or ignored.
    """
    if strict is None:
        strict = settings.STRICT_QUERY_VALIDATION

    page_num = _at_least_one("page", _parse_int("page", page, strict), 1, strict)
    page_size = _at_least_one(
        "limit", _parse_int("limit", limit, strict), settings.DEFAULT_PAGE_SIZE, strict
    )

    age_filter = _parse_int("age", age, strict)
    if age_filter is not None and age_filter < 0 and strict:
        raise InvalidQuery(f"age must be >= 0, got {age_filter}")

    return PatientQuery(
        page=page_num,
        limit=page_size,
        search=search or "",
        sort=_parse_sort(sort, strict),
        order=_parse_order(order, strict),
        medical_issue=medical_issue or "",
        age=age_filter,
    )
