"""
Module 01 - Schemas & Errors
File: errors.py

Purpose: Error taxonomy for hash tree construction.
Defines both Pydantic models for structured error reporting
and Python exceptions for control flow.

Only two failure families exist:
- Configuration errors (bad block size, unknown algorithm), raised before
  any byte is read
- Stream read errors, fatal to the in-progress build
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# Error Codes (Machine-Readable Constants)
# =============================================================================

class ErrorCodes:
    """Stable machine-readable error codes."""

    # Configuration Errors
    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"
    UNSUPPORTED_ALGORITHM = "UNSUPPORTED_ALGORITHM"

    # Input Errors
    STREAM_READ_ERROR = "STREAM_READ_ERROR"


# =============================================================================
# Pydantic Error Models (Structured Communication)
# =============================================================================

class HashTreeError(BaseModel):
    """
    Base error model for structured error reporting.

    Useful for callers that want to log or serialize a failed build
    without holding on to the exception object.
    """

    model_config = ConfigDict(
        extra="forbid",
        frozen=False,
        validate_assignment=True,
    )

    code: str = Field(
        ...,
        description="Stable machine-readable error code",
        examples=[ErrorCodes.STREAM_READ_ERROR],
    )
    message: str = Field(
        ...,
        description="Human-readable error message",
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional structured details about the error",
    )
    retryable: bool = Field(
        default=False,
        description="Whether the operation can be retried",
    )

    def to_exception(self) -> "HashTreeException":
        """Convert this error model to a raisable exception."""
        cls = _EXCEPTIONS_BY_CODE.get(self.code, HashTreeException)
        if cls is HashTreeException:
            return HashTreeException(
                message=self.message,
                code=self.code,
                details=dict(self.details),
                retryable=self.retryable,
            )
        exc = cls(message=self.message, details=dict(self.details))
        exc.code = self.code
        exc.retryable = self.retryable
        return exc


# =============================================================================
# Python Exceptions (Control Flow)
# =============================================================================

class HashTreeException(Exception):
    """
    Base exception for all hash tree errors.

    Carries structured error information and can be converted
    to a HashTreeError model.
    """

    def __init__(
        self,
        message: str,
        code: str = "HASHTREE_ERROR",
        details: dict[str, Any] | None = None,
        retryable: bool = False,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}
        self.retryable = retryable

    def to_error_model(self) -> HashTreeError:
        """Convert this exception to a HashTreeError model."""
        return HashTreeError(
            code=self.code,
            message=self.message,
            details=self.details,
            retryable=self.retryable,
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r})"


class ConfigurationException(HashTreeException):
    """Exception raised for invalid tree configuration (block size, algorithm)."""

    def __init__(
        self,
        message: str,
        field_name: str | None = None,
        code: str = ErrorCodes.CONFIGURATION_ERROR,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = dict(details or {})
        if field_name:
            full_details["field"] = field_name
        super().__init__(
            message=message,
            code=code,
            details=full_details,
            retryable=False,
        )


class StreamReadException(HashTreeException):
    """
    Exception raised when the input stream cannot be read.

    The original I/O error is chained as ``__cause__``. No retry is
    attempted internally; a caller may re-invoke the build.
    """

    def __init__(
        self,
        message: str,
        block_index: int | None = None,
        bytes_read: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = dict(details or {})
        if block_index is not None:
            full_details["block_index"] = block_index
        if bytes_read is not None:
            full_details["bytes_read"] = bytes_read
        super().__init__(
            message=message,
            code=ErrorCodes.STREAM_READ_ERROR,
            details=full_details,
            retryable=False,
        )


_EXCEPTIONS_BY_CODE: dict[str, type[HashTreeException]] = {
    ErrorCodes.CONFIGURATION_ERROR: ConfigurationException,
    ErrorCodes.UNSUPPORTED_ALGORITHM: ConfigurationException,
    ErrorCodes.STREAM_READ_ERROR: StreamReadException,
}
