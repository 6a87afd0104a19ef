"""
Directory Errors

Exception taxonomy for the listing pipeline. Each error carries a
machine-readable ``code`` and the HTTP status it maps to, so the app-level
handler in ``main.py`` can translate it without knowing the concrete type.
"""


class DirectoryError(Exception):
    """Base class for all patient directory failures."""

    code = "directory_error"
    status_code = 500

    def __init__(self, detail: str) -> None:
        super().__init__(detail)
        self.detail = detail


class StoreError(DirectoryError):
    """The backing patient document could not be used."""


class StoreUnavailable(StoreError):
    """Backing file is missing or unreadable."""

    code = "store_unavailable"
    status_code = 503


class StoreCorrupt(StoreError):
    """Backing file content does not parse into a list of patients."""

    code = "store_corrupt"
    status_code = 500


class InvalidQuery(DirectoryError):
    """A list request carried a parameter that strict validation rejects."""

    code = "invalid_query"
    status_code = 400
