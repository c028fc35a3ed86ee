from __future__ import annotations

import logging
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Mapping, Sequence

from pydantic import BaseModel, ConfigDict, Field

from .errors import InvalidTimestampFormatError, MissingFieldsError, UnknownDriverError
from .timestamps import format_timestamp, parse_timestamp


logger = logging.getLogger(__name__)


class Driver(str, Enum):
    """Supported storage drivers, in the order they are reported to users."""

    DEFAULT = ""
    S3 = "s3"


KNOWN_DRIVERS = tuple(d.value for d in Driver)

# Drivers that talk to an S3-compatible endpoint ("" means S3 as well)
S3_DRIVERS = frozenset({Driver.DEFAULT.value, Driver.S3.value})

# Checked and reported in this order
S3_REQUIRED_FIELDS = ("bucket", "bucket_path", "access_key_id", "secret_access_key")

# Left out of the payload when empty
OPTIONAL_FIELDS = ("region_name", "state_file")

VERSION_REQUIRED_FIELDS = ("last_modified", "state_file_key")


def _missing(model: BaseModel, prefix: str, names: Sequence[str]) -> List[str]:
    return [f"{prefix}.{name}" for name in names if getattr(model, name) == ""]


class StorageConfig(BaseModel):
    """
    Where the state file lives and how to reach it.

    Fields
    - driver: one of `Driver` values; "" is treated the same as "s3".
    - bucket, bucket_path, access_key_id, secret_access_key: required for S3.
    - region_name, state_file: optional; omitted from the payload when empty.

    Construction never validates. Call `validate()` to check the whole
    configuration; it raises on the first rule that fails, but reports every
    missing field at once.
    """

    model_config = ConfigDict(frozen=True)

    driver: str = Field(default="", description="Storage driver name")
    bucket: str = Field(default="", description="S3 bucket name")
    bucket_path: str = Field(default="", description="Key prefix inside the bucket")
    access_key_id: str = Field(default="", description="S3 access key id")
    secret_access_key: str = Field(default="", repr=False, description="S3 secret access key")
    region_name: str = Field(default="", description="S3 region (optional)")
    state_file: str = Field(default="", description="State file name (optional)")

    @property
    def uses_s3(self) -> bool:
        return self.driver in S3_DRIVERS

    # Replaces pydantic's deprecated `BaseModel.validate(value)` classmethod; build
    # instances with `from_payload()` or `model_validate()` instead.
    def validate(self) -> None:  # type: ignore[override]
        """Raise UnknownDriverError or MissingFieldsError if the config is unusable."""
        if self.driver not in KNOWN_DRIVERS:
            logger.debug("rejecting storage config: unknown driver %r", self.driver)
            raise UnknownDriverError(self.driver, KNOWN_DRIVERS)

        missing: List[str] = []
        if self.uses_s3:
            missing = _missing(self, "storage", S3_REQUIRED_FIELDS)

        if missing:
            logger.debug("rejecting storage config: missing %s", ", ".join(missing))
            raise MissingFieldsError(missing)

    def to_payload(self) -> Dict[str, str]:
        data = self.model_dump()
        for name in OPTIONAL_FIELDS:
            if not data[name]:
                del data[name]
        return data

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "StorageConfig":
        return cls.model_validate(dict(payload))


class VersionRecord(BaseModel):
    """
    Version of the remote state file: when it last changed and under which key.

    The default value (both fields empty) means "no version yet"; see `is_zero()`.
    """

    model_config = ConfigDict(frozen=True)

    last_modified: str = Field(default="", description="Timestamp laid out as TIME_FORMAT")
    state_file_key: str = Field(default="", description="Object key of the state file")

    def validate(self) -> None:  # type: ignore[override]
        """Raise MissingFieldsError or InvalidTimestampFormatError if the record is unusable.

        Missing fields are reported without attempting to parse the timestamp.
        """
        missing = _missing(self, "version", VERSION_REQUIRED_FIELDS)
        if missing:
            logger.debug("rejecting version record: missing %s", ", ".join(missing))
            raise MissingFieldsError(missing)

        try:
            self.last_modified_time()
        except InvalidTimestampFormatError as ex:
            logger.debug("rejecting version record: %s", ex.reason)
            raise

    def is_zero(self) -> bool:
        return self == type(self)()

    def last_modified_time(self) -> datetime:
        """Parsed `last_modified` as an aware datetime.

        Raises InvalidTimestampFormatError when the field does not parse, so an
        unvalidated record never yields a bogus instant.
        """
        try:
            return parse_timestamp(self.last_modified)
        except ValueError as ex:
            raise InvalidTimestampFormatError(str(ex)) from ex

    def to_payload(self) -> Dict[str, str]:
        return self.model_dump()

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "VersionRecord":
        return cls.model_validate(dict(payload))

    @classmethod
    def from_time(cls, last_modified: datetime, state_file_key: str) -> "VersionRecord":
        return cls(last_modified=format_timestamp(last_modified), state_file_key=state_file_key)
