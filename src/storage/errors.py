from __future__ import annotations

from typing import Iterable, Sequence, Tuple


def _quote_all(values: Iterable[str]) -> str:
    return ", ".join(f"'{v}'" for v in values)


class StorageValidationError(ValueError):
    """Base error for invalid storage configuration or version records."""

    def render(self) -> str:
        raise NotImplementedError

    def __str__(self) -> str:
        return self.render()


class UnknownDriverError(StorageValidationError):
    """`storage.driver` is not one of the supported drivers."""

    def __init__(self, value: str, known: Sequence[str]) -> None:
        self.value = value
        self.known: Tuple[str, ...] = tuple(known)
        super().__init__(value, self.known)

    def render(self) -> str:
        return (
            f"Unknown value for `storage.driver`: '{self.value}', "
            f"Supported driver values: {_quote_all(self.known)}"
        )


class MissingFieldsError(StorageValidationError):
    """One or more required fields are empty. Lists all of them, in check order."""

    def __init__(self, fields: Sequence[str]) -> None:
        if not fields:
            raise ValueError("fields must not be empty")
        self.fields: Tuple[str, ...] = tuple(fields)
        super().__init__(self.fields)

    def render(self) -> str:
        return f"Missing fields: {_quote_all(self.fields)}"


class InvalidTimestampFormatError(StorageValidationError):
    """`last_modified` is present but does not match the timestamp layout."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(reason)

    def render(self) -> str:
        return f"LastModified field is in invalid format: {self.reason}"
