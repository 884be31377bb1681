"""Ports - interfaces/protocols for external dependencies."""

from .record_source import AcquisitionError, AuthenticationError, RecordSource

__all__ = [
    "AcquisitionError",
    "AuthenticationError",
    "RecordSource",
]
