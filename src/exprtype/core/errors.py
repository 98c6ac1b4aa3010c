"""exprtype error types with typed error codes.

Error code ranges:
- 1xxx: Input (caller contract)
- 2xxx: Config
- 3xxx: Index
- 9xxx: Internal

Deduction itself never raises for an unknown type; it returns None.
These errors cover the layers around it.
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any


class ErrorCode(IntEnum):
    """Typed error codes for programmatic handling."""

    # Input (1xxx)
    INPUT_MISSING_SOURCE = 1001
    INPUT_MISSING_OFFSET = 1002
    INPUT_MISSING_PARTS = 1003
    INPUT_INVALID_OFFSET = 1004
    INPUT_SOURCE_NOT_FOUND = 1005

    # Config (2xxx)
    CONFIG_PARSE_ERROR = 2001
    CONFIG_INVALID_VALUE = 2002

    # Index (3xxx)
    INDEX_FILE_NOT_FOUND = 3001
    INDEX_PARSE_ERROR = 3002
    INDEX_INVALID_SCHEMA = 3003

    # Internal (9xxx)
    INTERNAL_ERROR = 9001


@dataclass(frozen=True, slots=True)
class ExprTypeError(Exception):
    """Base error with structured context for JSON responses."""

    code: ErrorCode
    message: str
    retryable: bool = False
    details: dict[str, Any] = field(default_factory=dict)

    @property
    def error_name(self) -> str:
        """String identifier for logging (e.g., 'INDEX_PARSE_ERROR')."""
        return self.code.name

    def to_dict(self) -> dict[str, Any]:
        """Serialize for JSON responses."""
        return {
            "code": self.code.value,
            "error": self.error_name,
            "message": self.message,
            "retryable": self.retryable,
            "details": self.details,
        }

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.error_name}: {self.message}"


class InputError(ExprTypeError):
    """Caller contract violations, raised before deduction runs."""

    @classmethod
    def missing_source(cls) -> "InputError":
        return cls(
            code=ErrorCode.INPUT_MISSING_SOURCE,
            message="Either a --file must be supplied or --stdin must be passed",
        )

    @classmethod
    def missing_offset(cls) -> "InputError":
        return cls(
            code=ErrorCode.INPUT_MISSING_OFFSET,
            message="An --offset must be supplied into the source code",
        )

    @classmethod
    def missing_parts(cls) -> "InputError":
        return cls(
            code=ErrorCode.INPUT_MISSING_PARTS,
            message="At least one expression part must be specified using --part",
        )

    @classmethod
    def invalid_offset(cls, offset: int, length: int) -> "InputError":
        return cls(
            code=ErrorCode.INPUT_INVALID_OFFSET,
            message=f"Offset {offset} is outside the source (length {length})",
            details={"offset": offset, "length": length},
        )

    @classmethod
    def source_not_found(cls, path: str) -> "InputError":
        return cls(
            code=ErrorCode.INPUT_SOURCE_NOT_FOUND,
            message=f"Source file not found: {path}",
            details={"path": path},
        )


class ConfigError(ExprTypeError):
    """Configuration-related errors."""

    @classmethod
    def parse_error(cls, path: str, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_PARSE_ERROR,
            message=f"Failed to parse config at {path}: {reason}",
            details={"path": path, "reason": reason},
        )

    @classmethod
    def invalid_value(cls, field: str, value: Any, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_INVALID_VALUE,
            message=f"Invalid value for '{field}': {reason}",
            details={"field": field, "value": str(value), "reason": reason},
        )


class IndexLoadError(ExprTypeError):
    """Symbol index could not be loaded."""

    @classmethod
    def file_not_found(cls, path: str) -> "IndexLoadError":
        return cls(
            code=ErrorCode.INDEX_FILE_NOT_FOUND,
            message=f"Index file not found: {path}",
            details={"path": path},
        )

    @classmethod
    def parse_error(cls, path: str, reason: str) -> "IndexLoadError":
        return cls(
            code=ErrorCode.INDEX_PARSE_ERROR,
            message=f"Failed to parse index at {path}: {reason}",
            details={"path": path, "reason": reason},
        )

    @classmethod
    def invalid_schema(cls, path: str, field: str, reason: str) -> "IndexLoadError":
        return cls(
            code=ErrorCode.INDEX_INVALID_SCHEMA,
            message=f"Invalid index entry '{field}' in {path}: {reason}",
            details={"path": path, "field": field, "reason": reason},
        )


class InternalError(ExprTypeError):
    """Internal/unexpected errors."""

    @classmethod
    def unexpected(cls, reason: str, **details: Any) -> "InternalError":
        return cls(
            code=ErrorCode.INTERNAL_ERROR,
            message=f"Internal error: {reason}",
            details=details,
        )
