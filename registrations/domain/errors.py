"""Domain error codes for the registrations module."""

from dataclasses import dataclass
from enum import Enum


class ErrorCode(Enum):
    """Domain error codes."""

    STORE_UNAVAILABLE = "STORE_UNAVAILABLE"
    INVALID_PAGE = "INVALID_PAGE"
    INVALID_FIELD = "INVALID_FIELD"
    INVALID_SELECTION = "INVALID_SELECTION"
    SLOT_NOT_EDITABLE = "SLOT_NOT_EDITABLE"
    RECORD_NOT_LOADED = "RECORD_NOT_LOADED"


@dataclass
class DomainError(Exception):
    """Base domain error with code and user-safe message."""

    code: ErrorCode
    message: str

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"


class RecordStoreError(DomainError):
    """Raised when the record store is unreachable or rejects a query."""

    def __init__(self, operation: str) -> None:
        super().__init__(
            code=ErrorCode.STORE_UNAVAILABLE,
            message=f"Record store {operation} failed",
        )
        self.operation = operation


class InvalidPageError(DomainError):
    """Raised when a page index is negative."""

    def __init__(self, page: int) -> None:
        super().__init__(
            code=ErrorCode.INVALID_PAGE,
            message="Page index cannot be negative",
        )
        self.page = page


class InvalidFieldError(DomainError):
    """Raised when a field name does not name an editable field."""

    def __init__(self, field: str) -> None:
        super().__init__(
            code=ErrorCode.INVALID_FIELD,
            message="Unknown field",
        )
        self.field = field


class InvalidSelectionError(DomainError):
    """Raised when a value is not one of the options offered for a field."""

    def __init__(self, field: str, value: str) -> None:
        super().__init__(
            code=ErrorCode.INVALID_SELECTION,
            message=f"Value is not a valid option for {field}",
        )
        self.field = field
        self.value = value


class SlotNotEditableError(DomainError):
    """Raised when an event slot is edited for a pass without event choices."""

    def __init__(self, record_id: int) -> None:
        super().__init__(
            code=ErrorCode.SLOT_NOT_EDITABLE,
            message="Event slots require a General or Signature pass",
        )
        self.record_id = record_id


class RecordNotLoadedError(DomainError):
    """Raised when an action targets a record that is not on the loaded page."""

    def __init__(self, record_id: int) -> None:
        super().__init__(
            code=ErrorCode.RECORD_NOT_LOADED,
            message="Record not found on the current page",
        )
        self.record_id = record_id
