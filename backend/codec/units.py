"""
str-level helpers around the two converters.

Python strings are sequences of code points, not UTF-16 code units;
these helpers bridge the two so callers can work with text directly.
"""

from __future__ import annotations

import numpy as np

from codec.errors import InvalidSequence, PrimitiveError
from codec.primitives import BytesLike, CodeUnits, as_code_units, decode_code_units, frozen_units
from codec.utf16_to_utf8 import utf16_to_utf8
from codec.utf8_to_utf16 import utf8_to_utf16


def units_from_str(text: str) -> np.ndarray:
    """
    Encode `text` as UTF-16 code units (read-only uint16 array).

    Lone surrogates in `text` are kept as-is, so malformed UTF-16
    can be built from a str for testing and round-tripping.
    """
    raw = text.encode("utf-16-le", "surrogatepass")
    return frozen_units(np.frombuffer(raw, dtype="<u2").astype(np.uint16))


def str_from_units(units: CodeUnits) -> str:
    """Strictly decode UTF-16 code units into a str."""
    try:
        return decode_code_units(as_code_units(units))
    except PrimitiveError as err:
        raise InvalidSequence.from_primitive(err) from err


def to_utf8(text: str) -> bytes:
    """str → UTF-8 bytes via the strict UTF-16 → UTF-8 converter."""
    return utf16_to_utf8(units_from_str(text))


def to_utf16(data: BytesLike) -> str:
    """UTF-8 bytes → str via the strict UTF-8 → UTF-16 converter."""
    return str_from_units(utf8_to_utf16(data))
