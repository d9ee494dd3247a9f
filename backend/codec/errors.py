"""
Conversion error types.

Two failure kinds, both recoverable by the caller:

INVALID_SEQUENCE:
    The input does not conform to its claimed encoding
    (unpaired surrogate, malformed / overlong / surrogate-encoding /
    truncated UTF-8). Detected while measuring.

PLATFORM_FAILURE:
    The encoding primitive failed for a reason other than input validity
    while materializing the output. Carries a diagnostic code.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional


class ErrorCause(str, Enum):
    """Machine-readable failure cause."""
    INVALID_SEQUENCE = "INVALID_SEQUENCE"
    PLATFORM_FAILURE = "PLATFORM_FAILURE"


# -------------------------
# Primitive-level failure
# -------------------------

class PrimitiveError(Exception):
    """
    Raised by the encoding primitives in place of a zero-length sentinel.

    code:
        Diagnostic code (see constants.ERROR_*).
    offset:
        Index into the source sequence (code units or bytes) where the
        failure was detected, if known.
    """

    def __init__(self, code: int, reason: str, offset: Optional[int] = None) -> None:
        super().__init__(reason)
        self.code = code
        self.reason = reason
        self.offset = offset


# -------------------------
# Converter-level failures
# -------------------------

class ConversionError(Exception):
    """Base class for conversion errors."""

    cause: ErrorCause

    def __init__(
        self,
        code: int,
        reason: str,
        *,
        offset: Optional[int] = None,
    ) -> None:
        self.code = code
        self.reason = reason
        self.offset = offset
        super().__init__(self._format())

    def _format(self) -> str:
        where = "" if self.offset is None else f" at offset {self.offset}"
        return f"{self.cause.value}{where}: {self.reason} (code={self.code})"

    @classmethod
    def from_primitive(cls, err: PrimitiveError) -> "ConversionError":
        return cls(err.code, err.reason, offset=err.offset)

    def as_event(self) -> dict[str, object]:
        """Flat mapping suitable for a JSONL log line."""
        return {
            "cause": self.cause.value,
            "code": self.code,
            "offset": self.offset,
            "reason": self.reason,
        }


class InvalidSequence(ConversionError):
    """
    Raised when the input is not well-formed in its claimed encoding.

    No output is produced; the caller holds only the original input.
    """
    cause = ErrorCause.INVALID_SEQUENCE


class PlatformFailure(ConversionError):
    """
    Raised when the primitive fails while writing an already-measured output.

    Unexpected once measurement succeeded, but never ignored.
    """
    cause = ErrorCause.PLATFORM_FAILURE
