"""
Strict encoding primitives.

Four operations, mirrored per direction:
- measure_*: exact destination length, no output written
- encode_*:  fill a caller-provided destination, return elements written

All four reject malformed input instead of substituting U+FFFD.
Failure is signalled with PrimitiveError (never a zero-length sentinel).

Design:
- UTF-16 → UTF-8 measurement is a single vectorized numpy pass.
- Decoding/encoding is delegated to Python's strict built-in codecs.
- No module state; safe for concurrent use with independent buffers.
"""

from __future__ import annotations

from typing import Any, Sequence, Union

import numpy as np

from codec.errors import PrimitiveError
from constants import (
    ERROR_INSUFFICIENT_BUFFER,
    ERROR_INVALID_PARAMETER,
    ERROR_NO_UNICODE_TRANSLATION,
    HIGH_SURROGATE_END,
    HIGH_SURROGATE_START,
    LOW_SURROGATE_END,
    LOW_SURROGATE_START,
    MAX_CODE_UNIT,
    UTF8_BYTES_PER_BMP_MAX,
    UTF8_BYTES_PER_SURROGATE_PAIR,
    UTF8_CONTINUATION_MASK,
    UTF8_CONTINUATION_TAG,
    UTF8_FOUR_BYTE_LEAD_MIN,
    UTF8_ONE_BYTE_MAX,
    UTF8_TWO_BYTE_MAX,
)

CodeUnits = Union[Sequence[int], np.ndarray]
BytesLike = Union[bytes, bytearray, memoryview, Sequence[int], np.ndarray]


# -------------------------
# Input normalization
# -------------------------

def as_code_units(units: CodeUnits) -> np.ndarray:
    """
    Normalize a code-unit sequence to a 1-D uint16 array.

    Raises:
        TypeError for str / non-integer input.
        ValueError for values that are not 16-bit code units.
    """
    if isinstance(units, (str, bytes, bytearray)):
        raise TypeError(
            f"expected a sequence of UTF-16 code units, got {type(units).__name__}"
        )

    arr = np.asarray(units)
    if arr.ndim != 1:
        raise ValueError(f"code units must be one-dimensional, got ndim={arr.ndim}")
    if arr.size == 0:
        return np.empty(0, dtype=np.uint16)
    if arr.dtype == np.uint16:
        return arr
    if arr.dtype.kind not in "iu":
        raise TypeError(f"code units must be integers, got dtype={arr.dtype}")

    lo, hi = int(arr.min()), int(arr.max())
    if lo < 0 or hi > MAX_CODE_UNIT:
        raise ValueError(
            f"code unit out of range 0..0x{MAX_CODE_UNIT:04X} (min={lo}, max={hi})"
        )
    return arr.astype(np.uint16)


def as_bytes(data: BytesLike) -> bytes:
    """Normalize a bytes-like input to immutable bytes."""
    if isinstance(data, bytes):
        return data
    if isinstance(data, (str, int)):
        raise TypeError(f"expected a bytes-like object, got {type(data).__name__}")
    if isinstance(data, np.ndarray):
        if data.dtype != np.uint8 or data.ndim != 1:
            raise ValueError(
                f"byte arrays must be 1-D uint8, got dtype={data.dtype} ndim={data.ndim}"
            )
        return data.tobytes()
    return bytes(data)


def frozen_units(arr: np.ndarray) -> np.ndarray:
    """Clear the write flag so the returned array behaves as an immutable value."""
    arr.setflags(write=False)
    return arr


def _describe(err: UnicodeError) -> str:
    return f"{err.encoding}: {err.reason}"


def decode_code_units(units: np.ndarray) -> str:
    """
    Strictly decode uint16 code units into a str.

    Unpaired surrogates raise PrimitiveError with the unit offset.
    """
    raw = units.astype("<u2", copy=False).tobytes()
    try:
        return raw.decode("utf-16-le")
    except UnicodeDecodeError as e:
        raise PrimitiveError(
            ERROR_NO_UNICODE_TRANSLATION,
            _describe(e),
            offset=e.start // 2,
        ) from e


def decode_utf8(raw: bytes) -> str:
    """Strictly decode UTF-8; the offset reported is a byte offset."""
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError as e:
        raise PrimitiveError(
            ERROR_NO_UNICODE_TRANSLATION,
            _describe(e),
            offset=e.start,
        ) from e


# -------------------------
# UTF-16 → UTF-8
# -------------------------

def measure_utf16_to_utf8(units: CodeUnits) -> int:
    """
    Return the exact number of UTF-8 bytes needed for `units`.

    Raises:
        PrimitiveError(ERROR_NO_UNICODE_TRANSLATION) on the first
        unpaired surrogate.
    """
    u = as_code_units(units)
    n = u.size
    if n == 0:
        return 0

    is_high = (u >= HIGH_SURROGATE_START) & (u <= HIGH_SURROGATE_END)
    is_low = (u >= LOW_SURROGATE_START) & (u <= LOW_SURROGATE_END)

    # A high surrogate pairs only with an immediately following low surrogate
    paired_high = np.zeros(n, dtype=bool)
    paired_high[:-1] = is_high[:-1] & is_low[1:]
    paired_low = np.zeros(n, dtype=bool)
    paired_low[1:] = paired_high[:-1]

    unpaired = (is_high & ~paired_high) | (is_low & ~paired_low)
    if unpaired.any():
        offset = int(np.argmax(unpaired))
        kind = "high" if is_high[offset] else "low"
        raise PrimitiveError(
            ERROR_NO_UNICODE_TRANSLATION,
            f"unpaired {kind} surrogate 0x{int(u[offset]):04X}",
            offset=offset,
        )

    widths = np.select(
        [u <= UTF8_ONE_BYTE_MAX, u <= UTF8_TWO_BYTE_MAX, is_high | is_low],
        [1, 2, UTF8_BYTES_PER_SURROGATE_PAIR // 2],
        default=UTF8_BYTES_PER_BMP_MAX,
    )
    return int(widths.sum(dtype=np.int64))


def encode_utf16_to_utf8(units: CodeUnits, dest: bytearray) -> int:
    """
    Write the UTF-8 encoding of `units` into `dest`.

    len(dest) is the destination capacity. Returns bytes written.
    """
    if not isinstance(dest, bytearray):
        raise PrimitiveError(
            ERROR_INVALID_PARAMETER,
            f"destination must be a bytearray, got {type(dest).__name__}",
        )

    encoded = decode_code_units(as_code_units(units)).encode("utf-8")

    written = len(encoded)
    if written > len(dest):
        raise PrimitiveError(
            ERROR_INSUFFICIENT_BUFFER,
            f"need {written} bytes, destination holds {len(dest)}",
        )
    dest[:written] = encoded
    return written


# -------------------------
# UTF-8 → UTF-16
# -------------------------

def measure_utf8_to_utf16(data: BytesLike) -> int:
    """
    Return the exact number of UTF-16 code units needed for `data`.

    Raises:
        PrimitiveError(ERROR_NO_UNICODE_TRANSLATION) for overlong forms,
        encoded surrogates, code points above U+10FFFF, stray continuation
        bytes and sequences truncated at end of input.
    """
    raw = as_bytes(data)
    if not raw:
        return 0

    decode_utf8(raw)

    # Valid UTF-8: one unit per lead byte, plus one more for each 4-byte lead
    b = np.frombuffer(raw, dtype=np.uint8)
    leads = np.count_nonzero((b & UTF8_CONTINUATION_MASK) != UTF8_CONTINUATION_TAG)
    four_byte_leads = np.count_nonzero(b >= UTF8_FOUR_BYTE_LEAD_MIN)
    return int(leads + four_byte_leads)


def encode_utf8_to_utf16(data: BytesLike, dest: Any) -> int:
    """
    Write the UTF-16 code units of `data` into `dest` (1-D writable uint16 array).

    Returns code units written.
    """
    if (
        not isinstance(dest, np.ndarray)
        or dest.dtype != np.uint16
        or dest.ndim != 1
        or not dest.flags.writeable
    ):
        raise PrimitiveError(
            ERROR_INVALID_PARAMETER,
            "destination must be a writable 1-D uint16 array",
        )

    text = decode_utf8(as_bytes(data))
    encoded = np.frombuffer(text.encode("utf-16-le"), dtype="<u2")

    written = int(encoded.size)
    if written > dest.size:
        raise PrimitiveError(
            ERROR_INSUFFICIENT_BUFFER,
            f"need {written} code units, destination holds {dest.size}",
        )
    dest[:written] = encoded
    return written
