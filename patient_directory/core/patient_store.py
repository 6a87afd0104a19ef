"""
Patient Store

Loads patient records from the JSON fixture at settings.PATIENTS_PATH.
The file is re-read on every call; nothing is cached between requests.
Can be run standalone: python -m patient_directory.core.patient_store
"""

import json
import logging
from collections import Counter
from pathlib import Path
from typing import Optional

from pydantic import TypeAdapter, ValidationError

from patient_directory.config import PROJECT_ROOT, settings
from patient_directory.core.errors import StoreCorrupt, StoreUnavailable
from patient_directory.models.schemas import Patient

logger = logging.getLogger(__name__)

_PATIENT_LIST = TypeAdapter(list[Patient])


def _resolve_path(path: Optional[str]) -> Path:
    resolved = Path(path or settings.PATIENTS_PATH)
    if not resolved.is_absolute() and not resolved.exists():
        # Relative paths missing from cwd resolve against the project root
        resolved = PROJECT_ROOT / resolved
    return resolved


def load(path: Optional[str] = None) -> list[Patient]:
    """Read and parse the full patient document.

    Args:
        path: Optional override for the fixture location. Defaults to
            ``settings.PATIENTS_PATH``.

    Returns:
        All patient records in source order.

    Raises:
        StoreUnavailable: The file is missing or cannot be read.
        StoreCorrupt: The content is not a JSON array of patient objects.
    """
    source = _resolve_path(path)
    try:
        with open(source, "rb") as f:
            raw = f.read()
    except OSError as exc:
        raise StoreUnavailable(f"Patient store {source} is unavailable: {exc}") from exc

    try:
        records = json.loads(raw.decode("utf-8"))
    except UnicodeDecodeError as exc:
        raise StoreCorrupt(f"Patient store {source} is not valid UTF-8: {exc}") from exc
    except (json.JSONDecodeError, RecursionError) as exc:
        raise StoreCorrupt(f"Patient store {source} is not valid JSON: {exc}") from exc

    if not isinstance(records, list):
        raise StoreCorrupt(
            f"Patient store {source} must contain a JSON array, "
            f"got {type(records).__name__}"
        )

    try:
        patients = _PATIENT_LIST.validate_python(records)
    except ValidationError as exc:
        raise StoreCorrupt(
            f"Patient store {source} has {exc.error_count()} invalid field(s): "
            f"{exc.errors()[0]['loc']} {exc.errors()[0]['msg']}"
        ) from exc

    logger.debug("Loaded %d patients from %s", len(patients), source)
    return patients


def list_medical_issues(records: list[Patient]) -> dict[str, int]:
    """Count records per medical issue, keyed in sorted order.

    Args:
        records: The full record sequence (not a paginated slice).

    Returns:
        Mapping of medical_issue -> number of records, sorted by issue.
    """
    counter: Counter[str] = Counter(p.medical_issue for p in records if p.medical_issue)
    return dict(sorted(counter.items()))


if __name__ == "__main__":
    patients = load()
    print(f"Loaded {len(patients)} patients from {_resolve_path(None)}:")
    for issue, count in list_medical_issues(patients).items():
        print(f"  {issue}: {count}")
