"""
UTF-8 bytes → UTF-16 code units.

Mirror of codec.utf16_to_utf8. The destination is sized from the
*measured* code-unit count, never from the source byte length.
"""

from __future__ import annotations

import numpy as np

from codec.errors import (
    ConversionError,
    InvalidSequence,
    PlatformFailure,
    PrimitiveError,
)
from codec.primitives import (
    BytesLike,
    as_bytes,
    encode_utf8_to_utf16,
    frozen_units,
    measure_utf8_to_utf16,
)
from codec.result import ConversionResult
from constants import ERROR_INVALID_DATA, ERROR_NO_UNICODE_TRANSLATION


def utf8_to_utf16(data: BytesLike) -> np.ndarray:
    """
    Convert a UTF-8 byte sequence to UTF-16 code units.

    Returns:
        Read-only 1-D uint16 array of exactly the measured length.

    Raises:
        InvalidSequence for malformed, overlong, surrogate-encoding,
        out-of-range or truncated UTF-8.
        PlatformFailure if writing the measured output fails.
    """
    source = as_bytes(data)

    # Fast-path: empty input, nothing to validate
    if not source:
        return frozen_units(np.empty(0, dtype=np.uint16))

    try:
        utf16_length = measure_utf8_to_utf16(source)
    except PrimitiveError as err:
        raise InvalidSequence.from_primitive(err) from err

    if utf16_length == 0:
        raise InvalidSequence(
            ERROR_NO_UNICODE_TRANSLATION,
            "measured zero code units for non-empty input",
        )

    buffer = np.empty(utf16_length, dtype=np.uint16)
    try:
        written = encode_utf8_to_utf16(source, buffer)
    except PrimitiveError as err:
        raise PlatformFailure.from_primitive(err) from err

    if written != utf16_length:
        raise PlatformFailure(
            ERROR_INVALID_DATA,
            f"wrote {written} code units, measured {utf16_length}",
        )

    return frozen_units(buffer)


def try_utf8_to_utf16(data: BytesLike) -> ConversionResult[np.ndarray]:
    """Result-returning variant of utf8_to_utf16."""
    try:
        return ConversionResult(value=utf8_to_utf16(data))
    except ConversionError as err:
        return ConversionResult(error=err)
