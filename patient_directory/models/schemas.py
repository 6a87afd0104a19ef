"""
Pydantic Schemas

Defines the patient record shape and the listing contract:
- Contact, Patient for records read from the fixture
- SortKey, SortOrder, PatientQuery for the query descriptor
- PatientPage, FacetsResponse, ErrorResponse for API responses
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class Contact(BaseModel):
    """One contact entry. Every field may be null in the fixture."""

    address: Optional[str] = Field(None, strict=True)
    number: Optional[str] = Field(None, strict=True)
    email: Optional[str] = Field(None, strict=True)


class Patient(BaseModel):
    """A single patient directory record.

    Scalar fields are strict so the fixture is served as written: a
    quoted id or a boolean age is a corrupt record, not a coerced one.
    Keys outside this shape are dropped.
    """

    patient_id: int = Field(strict=True)
    patient_name: str = Field(strict=True)
    age: int = Field(ge=0, strict=True)
    photo_url: Optional[str] = Field(None, strict=True)
    contact: list[Contact] = []
    medical_issue: str = Field(strict=True)

    @property
    def primary_email(self) -> Optional[str]:
        """Email of the first contact entry, if any."""
        if not self.contact:
            return None
        return self.contact[0].email


class SortKey(str, Enum):
    """Fields the listing can be sorted by."""

    patient_name = "patient_name"
    age = "age"
    medical_issue = "medical_issue"
    patient_id = "patient_id"


class SortOrder(str, Enum):
    asc = "asc"
    desc = "desc"


class PatientQuery(BaseModel):
    """Normalized search/filter/sort/pagination parameters for one request."""

    page: int = Field(1, ge=1)
    limit: int = Field(20, ge=1)
    search: str = ""
    sort: Optional[SortKey] = None
    order: SortOrder = SortOrder.asc
    medical_issue: str = ""
    age: Optional[int] = None


class PatientPage(BaseModel):
    """Response for GET /api/patients."""

    data: list[Patient]
    total: int
    page: int
    limit: int


class FacetsResponse(BaseModel):
    """Distinct medical issues across the full record set."""

    medical_issues: list[str]
    counts: dict[str, int]


class ErrorResponse(BaseModel):
    """Body returned for any DirectoryError."""

    error: str
    detail: str
