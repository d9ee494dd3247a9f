"""
ENCODING-RULES-AS-CONSTANTS
---------------------------
Single source of truth for every numeric rule the converters rely on.

Rules:
- If changing a value changes conversion behavior, it belongs here.
- No magic numbers elsewhere in the codebase.
"""

from __future__ import annotations

from typing import Final

# =============================================================================
# Unicode scalar space
# =============================================================================

MAX_CODE_UNIT: Final[int] = 0xFFFF

# =============================================================================
# UTF-16 surrogates
# =============================================================================

HIGH_SURROGATE_START: Final[int] = 0xD800
HIGH_SURROGATE_END: Final[int] = 0xDBFF
LOW_SURROGATE_START: Final[int] = 0xDC00
LOW_SURROGATE_END: Final[int] = 0xDFFF

# =============================================================================
# UTF-8 length boundaries (largest code point per encoded length)
# =============================================================================

UTF8_ONE_BYTE_MAX: Final[int] = 0x7F
UTF8_TWO_BYTE_MAX: Final[int] = 0x7FF

# Encoded length of one surrogate pair (one supplementary code point)
UTF8_BYTES_PER_SURROGATE_PAIR: Final[int] = 4
UTF8_BYTES_PER_BMP_MAX: Final[int] = 3

# Byte classification: (b & MASK) == TAG marks a continuation byte
UTF8_CONTINUATION_MASK: Final[int] = 0xC0
UTF8_CONTINUATION_TAG: Final[int] = 0x80
UTF8_FOUR_BYTE_LEAD_MIN: Final[int] = 0xF0

# =============================================================================
# Byte order marks
# =============================================================================

UTF8_BOM: Final[bytes] = b"\xef\xbb\xbf"
UTF16_LE_BOM: Final[bytes] = b"\xff\xfe"
UTF16_BE_BOM: Final[bytes] = b"\xfe\xff"

UTF16_BYTE_ORDERS: Final[tuple[str, ...]] = ("little", "big")

# =============================================================================
# Diagnostic codes (Win32 numbering of the native conversion routines)
# =============================================================================

ERROR_INVALID_DATA: Final[int] = 13
ERROR_INVALID_PARAMETER: Final[int] = 87
ERROR_INSUFFICIENT_BUFFER: Final[int] = 122
ERROR_NO_UNICODE_TRANSLATION: Final[int] = 1113
