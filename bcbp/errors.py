"""Errors raised while decoding a boarding pass."""

# Standard imports
from enum import Enum

class ErrorKind(Enum):
    """Failure kinds of a decode call."""
    INVALID_FORMAT_CODE = "invalid_format_code"
    INSUFFICIENT_DATA = "insufficient_data"
    EXCESS_DATA = "excess_data"
    FIELD_VALIDATION_FAILED = "field_validation_failed"
    STRUCTURAL_MISMATCH = "structural_mismatch"


class DecodeError(ValueError):
    """
    Base class for boarding pass decode failures.

    Carries the field where decoding stopped, the character offset of
    that field in the BCBP text, and a human-readable reason.
    """
    kind: ErrorKind | None = None

    def __init__(self, field: str | None, offset: int, reason: str):
        self.field = field
        self.offset = offset
        self.reason = reason
        super().__init__(f"{reason} (field: {field}, offset: {offset})")


class InvalidFormatCode(DecodeError):
    """The first character is not the BCBP format code."""
    kind = ErrorKind.INVALID_FORMAT_CODE


class InsufficientData(DecodeError):
    """The data ended in the middle of a field or block."""
    kind = ErrorKind.INSUFFICIENT_DATA


class ExcessData(DecodeError):
    """Characters remain after the boarding pass was fully decoded."""
    kind = ErrorKind.EXCESS_DATA


class FieldValidationFailed(DecodeError):
    """A field has the wrong length or content."""
    kind = ErrorKind.FIELD_VALIDATION_FAILED


class StructuralMismatch(DecodeError):
    """Declared leg counts or block sizes disagree with the data."""
    kind = ErrorKind.STRUCTURAL_MISMATCH
