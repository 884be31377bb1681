"""Record source interface."""

from typing import Protocol

from taskmatrix.core.records import RawRecord


class AcquisitionError(Exception):
    """Raised when a strategy cannot produce records (missing file, credentials, ...)."""

    pass


class AuthenticationError(AcquisitionError):
    """Raised when authentication with an external service fails."""

    pass


class RecordSource(Protocol):
    """One acquisition strategy for a logical source."""

    name: str

    def fetch(self) -> list[RawRecord]:
        """Fetch raw records. May raise; an empty list means no data."""
        ...
