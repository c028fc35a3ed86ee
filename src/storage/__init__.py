"""
Storage configuration and state-file version records.

Both models are plain immutable data; `validate()` checks them and raises a
`StorageValidationError` subclass describing everything that is wrong.
"""

from .errors import (
    InvalidTimestampFormatError,
    MissingFieldsError,
    StorageValidationError,
    UnknownDriverError,
)
from .models import KNOWN_DRIVERS, Driver, StorageConfig, VersionRecord
from .timestamps import TIME_FORMAT, format_timestamp, parse_timestamp

__all__ = [
    "Driver",
    "InvalidTimestampFormatError",
    "KNOWN_DRIVERS",
    "MissingFieldsError",
    "StorageConfig",
    "StorageValidationError",
    "TIME_FORMAT",
    "UnknownDriverError",
    "VersionRecord",
    "format_timestamp",
    "parse_timestamp",
]
