"""Tests for turning raw URL parameters into a PatientQuery.

Run with:  python -m pytest tests/test_query_builder.py -v
"""

import pytest

from patient_directory.config import settings
from patient_directory.core.errors import InvalidQuery
from patient_directory.core.query_builder import build_query
from patient_directory.models.schemas import SortKey, SortOrder


def test_defaults():
    query = build_query()
    assert query.page == 1
    assert query.limit == settings.DEFAULT_PAGE_SIZE
    assert query.search == ""
    assert query.sort is None
    assert query.order == SortOrder.asc
    assert query.medical_issue == ""
    assert query.age is None


def test_parses_all_parameters():
    query = build_query(
        page="3", limit="15", search="Ava", sort="age",
        order="desc", medical_issue="fever", age="42",
    )
    assert (query.page, query.limit) == (3, 15)
    assert query.search == "Ava"
    assert query.sort == SortKey.age
    assert query.order == SortOrder.desc
    assert query.medical_issue == "fever"
    assert query.age == 42


def test_default_page_size_follows_settings(monkeypatch):
    monkeypatch.setattr(settings, "DEFAULT_PAGE_SIZE", 7)
    assert build_query().limit == 7


# ── Permissive mode ──────────────────────────────────────────────────────

@pytest.mark.parametrize("raw, expected", [
    ("0", 1),
    ("-4", 1),
    ("abc", 1),
    ("", 1),
    (" 2 ", 2),
])
def test_page_is_clamped(raw: str, expected: int):
    assert build_query(page=raw, strict=False).page == expected


@pytest.mark.parametrize("raw, expected", [
    ("0", 1),
    ("-10", 1),
    ("abc", 20),
    ("5", 5),
])
def test_limit_is_clamped(raw: str, expected: int):
    assert build_query(limit=raw, strict=False).limit == expected


@pytest.mark.parametrize("raw", ["", "abc", "30abc", "4.5"])
def test_bad_age_means_no_filter(raw: str):
    assert build_query(age=raw, strict=False).age is None


def test_unknown_sort_is_ignored():
    assert build_query(sort="height", strict=False).sort is None


@pytest.mark.parametrize("raw, expected", [
    ("DESC", SortOrder.desc),
    ("Asc", SortOrder.asc),
    ("sideways", SortOrder.asc),
])
def test_order_normalization(raw: str, expected: SortOrder):
    assert build_query(order=raw, strict=False).order == expected


# ── Strict mode ──────────────────────────────────────────────────────────

@pytest.mark.parametrize("params", [
    {"page": "0"},
    {"page": "two"},
    {"limit": "-1"},
    {"limit": "abc"},
    {"age": "x"},
    {"age": "-2"},
    {"sort": "height"},
    {"order": "sideways"},
])
def test_strict_rejects_bad_input(params: dict):
    with pytest.raises(InvalidQuery) as exc_info:
        build_query(strict=True, **params)
    assert exc_info.value.status_code == 400


def test_strict_follows_settings(monkeypatch):
    monkeypatch.setattr(settings, "STRICT_QUERY_VALIDATION", True)
    with pytest.raises(InvalidQuery):
        build_query(page="0")


def test_strict_accepts_valid_input():
    query = build_query(page="2", limit="10", sort="patient_id", order="desc", age="0", strict=True)
    assert query.page == 2
    assert query.sort == SortKey.patient_id
    assert query.age == 0
