"""Shared fixtures: a deterministic 50-record directory and a JSON file for it."""

import json

import pytest

from patient_directory.config import settings
from patient_directory.models.schemas import Patient

FIRST_NAMES = ["Ava", "Liam", "Noah", "Emma", "Olivia", "Mason", "Sophia", "Lucas", "Mia", "Ethan"]
LAST_NAMES = ["Thompson", "Carter", "Bennett", "Diaz", "Park", "Reed", "Nguyen"]
ISSUES = ["fever", "headache", "sore throat", "rash", "sinusitis"]


def make_patient_dict(i: int) -> dict:
    """Record *i* (1-based). Ages repeat every 7 so sorts have ties."""
    first = FIRST_NAMES[i % len(FIRST_NAMES)]
    last = LAST_NAMES[i % len(LAST_NAMES)]
    if i % 11 == 0:
        contact = []
    else:
        contact = [{
            "address": None if i % 4 == 0 else f"{100 + i} Maple St",
            "number": f"555-01{i:02d}",
            "email": None if i % 6 == 0 else f"{first.lower()}.{i}@clinic.org",
        }]
    return {
        "patient_id": i,
        "patient_name": f"{first} {last}",
        "age": 20 + i % 7,
        "photo_url": None,
        "contact": contact,
        "medical_issue": ISSUES[i % len(ISSUES)],
    }


@pytest.fixture
def patient_dicts() -> list[dict]:
    return [make_patient_dict(i) for i in range(1, 51)]


@pytest.fixture
def patients(patient_dicts) -> list[Patient]:
    return [Patient.model_validate(d) for d in patient_dicts]


@pytest.fixture
def patients_file(tmp_path, monkeypatch, patient_dicts):
    """Write the records to a temp file and point settings at it."""
    path = tmp_path / "patients.json"
    path.write_text(json.dumps(patient_dicts), encoding="utf-8")
    monkeypatch.setattr(settings, "PATIENTS_PATH", str(path))
    return path
