# pylint: disable=missing-module-docstring,missing-function-docstring

import numpy as np
import pytest

from codec.units import units_from_str
from codec.utf16_to_utf8 import try_utf16_to_utf8, utf16_to_utf8
from codec.utf8_to_utf16 import try_utf8_to_utf16, utf8_to_utf16

SAMPLES = [
    "a",
    "Japanese kanji 学",
    "café über naïve",
    "\U0001F60E sunglasses",
    "\U00010000\U0010FFFF",
    "mixed Ж € \U0001D11E end",
]


# ---------------------------------------------------------------------
# Round trip
# ---------------------------------------------------------------------

@pytest.mark.parametrize("text", SAMPLES)
def test_well_formed_utf16_round_trips(text: str):
    units = units_from_str(text)

    again = utf8_to_utf16(utf16_to_utf8(units))

    assert np.array_equal(again, units)


def test_supplementary_plane_round_trip():
    units = units_from_str("\U0001F60E")
    assert units.tolist() == [0xD83D, 0xDE0E]

    utf8 = utf16_to_utf8(units)
    assert len(utf8) == 4

    assert utf8_to_utf16(utf8).tolist() == [0xD83D, 0xDE0E]


# ---------------------------------------------------------------------
# Empty identity
# ---------------------------------------------------------------------

def test_empty_identity_both_directions():
    assert utf16_to_utf8([]) == b""
    assert utf8_to_utf16(b"").size == 0


# ---------------------------------------------------------------------
# ASCII
# ---------------------------------------------------------------------

def test_ascii_counts_match_and_values_carry_over():
    text = "The quick brown fox 0123456789 ~!@#"
    units = units_from_str(text)

    utf8 = utf16_to_utf8(units)

    assert len(utf8) == units.size
    assert list(utf8) == units.tolist()


def test_ascii_conversion_is_idempotent():
    data = b"plain ascii"

    once = utf8_to_utf16(data)
    twice = utf8_to_utf16(utf16_to_utf8(once))

    assert np.array_equal(once, twice)
    assert utf16_to_utf8(utf8_to_utf16(utf16_to_utf8(once))) == data


# ---------------------------------------------------------------------
# No output on failure
# ---------------------------------------------------------------------

def test_failures_expose_no_partial_output():
    bad16 = try_utf16_to_utf8([0x41, 0x42, 0xD800])
    bad8 = try_utf8_to_utf16(b"AB\xe5\xad")

    assert bad16.value is None and bad16.error is not None
    assert bad8.value is None and bad8.error is not None
