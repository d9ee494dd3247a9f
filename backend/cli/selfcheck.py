"""
Self-check harness: runs the converters on known samples and prints
one PASSED/FAILED line per check.
"""

from __future__ import annotations

from typing import Callable

import numpy as np

from codec.errors import InvalidSequence
from codec.units import to_utf8, to_utf16, units_from_str
from codec.utf16_to_utf8 import utf16_to_utf8
from codec.utf8_to_utf16 import utf8_to_utf16

# U+5B66 (Japanese kanji "learn, study"): UTF-16 0x5B66, UTF-8 E5 AD A6
KANJI_UNIT = 0x5B66
KANJI_UTF8 = b"\xe5\xad\xa6"

# U+1F60E (smiling face with sunglasses): D83D DE0E / F0 9F 98 8E
EMOJI_UNITS = [0xD83D, 0xDE0E]
EMOJI_UTF8 = b"\xf0\x9f\x98\x8e"


def check(condition: bool, description: str, *, out: Callable[[str], None] = print) -> bool:
    """Print `[description]: PASSED|FAILED` and return the condition."""
    out(f"[{description}]: {'PASSED' if condition else 'FAILED'}")
    return condition


def _raises_invalid(fn: Callable[[], object]) -> bool:
    try:
        fn()
    except InvalidSequence:
        return True
    return False


def run_checks(*, out: Callable[[str], None] = print) -> bool:
    """
    Run every check. Returns True only if all passed.
    """
    text = "Japanese kanji \u5b66"
    kanji_utf8 = utf16_to_utf8([KANJI_UNIT])

    results = [
        check(
            len(utf16_to_utf8([])) == 0 and utf8_to_utf16(b"").size == 0,
            "Empty strings",
            out=out,
        ),
        check(to_utf16(to_utf8(text)) == text, "String with Japanese kanji", out=out),
        check(len(kanji_utf8) == 3, "UTF-8 length", out=out),
        check(kanji_utf8 == KANJI_UTF8, "UTF-8 encoding", out=out),
        check(
            utf16_to_utf8(EMOJI_UNITS) == EMOJI_UTF8
            and np.array_equal(utf8_to_utf16(EMOJI_UTF8), EMOJI_UNITS),
            "Surrogate pair",
            out=out,
        ),
        check(
            _raises_invalid(lambda: utf16_to_utf8(units_from_str("\ud800"))),
            "Unpaired surrogate rejected",
            out=out,
        ),
        check(
            _raises_invalid(lambda: utf8_to_utf16(b"\xc0\xaf"))
            and _raises_invalid(lambda: utf8_to_utf16(b"abc\xe5\xad")),
            "Overlong and truncated UTF-8 rejected",
            out=out,
        ),
    ]
    return all(results)
