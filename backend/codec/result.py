"""
Result-union wrapper for callers that prefer values over exceptions.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, Optional, TypeVar

from codec.errors import ConversionError

T = TypeVar("T")


@dataclass(frozen=True)
class ConversionResult(Generic[T]):
    """
    Outcome of a conversion: exactly one of `value` / `error` is set.
    """
    value: Optional[T] = None
    error: Optional[ConversionError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> T:
        """Return the value, or raise the stored error."""
        if self.error is not None:
            raise self.error
        return self.value  # type: ignore[return-value]
