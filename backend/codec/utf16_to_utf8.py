"""
UTF-16 code units → UTF-8 bytes.

Two-phase protocol:
    1. measure:     exact byte count, strict validation
    2. materialize: allocate exactly that many bytes, fill, freeze

Usage example:

    utf8 = utf16_to_utf8([0x5B66])      # b"\\xe5\\xad\\xa6"

    result = try_utf16_to_utf8([0xD800])
    if not result.ok:
        log_event({"event_type": "CONVERSION_FAILED", **result.error.as_event()})
"""

from __future__ import annotations

from codec.errors import (
    ConversionError,
    InvalidSequence,
    PlatformFailure,
    PrimitiveError,
)
from codec.primitives import (
    CodeUnits,
    as_code_units,
    encode_utf16_to_utf8,
    measure_utf16_to_utf8,
)
from codec.result import ConversionResult
from constants import ERROR_INVALID_DATA, ERROR_NO_UNICODE_TRANSLATION


def utf16_to_utf8(units: CodeUnits) -> bytes:
    """
    Convert a UTF-16 code-unit sequence to UTF-8.

    Returns:
        Newly allocated bytes of exactly the measured length.

    Raises:
        InvalidSequence if `units` contains an unpaired surrogate.
        PlatformFailure if writing the measured output fails.
    """
    source = as_code_units(units)

    # Fast-path: empty input, nothing to validate
    if source.size == 0:
        return b""

    try:
        utf8_length = measure_utf16_to_utf8(source)
    except PrimitiveError as err:
        raise InvalidSequence.from_primitive(err) from err

    if utf8_length == 0:
        raise InvalidSequence(
            ERROR_NO_UNICODE_TRANSLATION,
            "measured zero bytes for non-empty input",
        )

    buffer = bytearray(utf8_length)
    try:
        written = encode_utf16_to_utf8(source, buffer)
    except PrimitiveError as err:
        raise PlatformFailure.from_primitive(err) from err

    if written != utf8_length:
        raise PlatformFailure(
            ERROR_INVALID_DATA,
            f"wrote {written} bytes, measured {utf8_length}",
        )

    return bytes(buffer)


def try_utf16_to_utf8(units: CodeUnits) -> ConversionResult[bytes]:
    """
    Same as utf16_to_utf8, but conversion failures come back as a value.

    Argument errors (TypeError / ValueError) still raise.
    """
    try:
        return ConversionResult(value=utf16_to_utf8(units))
    except ConversionError as err:
        return ConversionResult(error=err)
