"""
Command-line entry point.

Subcommands:
    to-utf8  SRC DST   UTF-16 file → UTF-8 file
    to-utf16 SRC DST   UTF-8 file  → UTF-16 file
    selfcheck          run the PASSED/FAILED harness

Exit codes:
    0 success
    1 selfcheck failure
    2 conversion failure (malformed input, primitive failure, unreadable or
      unwritable file) or invalid arguments / configuration
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

import numpy as np

from cli.selfcheck import run_checks
from codec.errors import ConversionError
from codec.utf16_to_utf8 import utf16_to_utf8
from codec.utf8_to_utf16 import utf8_to_utf16
from config import AppConfig
from constants import UTF16_BE_BOM, UTF16_LE_BOM, UTF8_BOM
from observability import logger
from observability.logger import log_event
from observability.metrics import timed

EXIT_OK = 0
EXIT_SELFCHECK_FAILED = 1
EXIT_CONVERSION_FAILED = 2

_UNIT_DTYPES = {"little": "<u2", "big": ">u2"}
_BOMS = {"little": UTF16_LE_BOM, "big": UTF16_BE_BOM}


# ------------------------------------------------------------------
# UTF-16 file framing
# ------------------------------------------------------------------

def read_utf16_units(raw: bytes, default_byte_order: str) -> np.ndarray:
    """
    Split raw UTF-16 file bytes into code units.

    A leading BOM selects the byte order and is dropped; otherwise
    `default_byte_order` applies.

    Raises:
        ValueError if the byte count is odd.
    """
    byte_order = default_byte_order
    if raw.startswith(UTF16_LE_BOM):
        byte_order, raw = "little", raw[len(UTF16_LE_BOM):]
    elif raw.startswith(UTF16_BE_BOM):
        byte_order, raw = "big", raw[len(UTF16_BE_BOM):]

    if len(raw) % 2 != 0:
        raise ValueError(f"UTF-16 data has odd byte count {len(raw)}")

    return np.frombuffer(raw, dtype=_UNIT_DTYPES[byte_order]).astype(np.uint16)


def write_utf16_units(units: np.ndarray, byte_order: str, *, bom: bool) -> bytes:
    payload = units.astype(_UNIT_DTYPES[byte_order]).tobytes()
    return (_BOMS[byte_order] + payload) if bom else payload


# ------------------------------------------------------------------
# Subcommands
# ------------------------------------------------------------------

def _report_failure(command: str, src: str, err: Exception) -> int:
    event = {"event_type": "CONVERSION_FAILED", "command": command, "src": src}
    if isinstance(err, ConversionError):
        event.update(err.as_event())
    else:
        event["reason"] = str(err)
    log_event(event, level="ERROR")
    print(f"error: {src}: {err}", file=sys.stderr)
    return EXIT_CONVERSION_FAILED


def cmd_to_utf8(args: argparse.Namespace, config: AppConfig) -> int:
    src, dst = Path(args.src), Path(args.dst)
    try:
        with timed("utf16_to_utf8", details={"src": str(src)}) as details:
            units = read_utf16_units(src.read_bytes(), config.utf16_byte_order)
            utf8 = utf16_to_utf8(units)
            details["in_units"] = int(units.size)
            details["out_bytes"] = len(utf8)
        dst.write_bytes(UTF8_BOM + utf8 if args.bom else utf8)
    except (ConversionError, ValueError, OSError) as err:
        return _report_failure("to-utf8", str(src), err)

    log_event({
        "event_type": "CONVERSION_OK",
        "command": "to-utf8",
        "src": str(src),
        "dst": str(dst),
        "in_units": int(units.size),
        "out_bytes": len(utf8),
    })
    return EXIT_OK


def cmd_to_utf16(args: argparse.Namespace, config: AppConfig) -> int:
    src, dst = Path(args.src), Path(args.dst)
    try:
        raw = src.read_bytes()
        if raw.startswith(UTF8_BOM):
            raw = raw[len(UTF8_BOM):]

        with timed("utf8_to_utf16", details={"src": str(src)}) as details:
            units = utf8_to_utf16(raw)
            details["in_bytes"] = len(raw)
            details["out_units"] = int(units.size)
        dst.write_bytes(write_utf16_units(units, config.utf16_byte_order, bom=args.bom))
    except (ConversionError, OSError) as err:
        return _report_failure("to-utf16", str(src), err)

    log_event({
        "event_type": "CONVERSION_OK",
        "command": "to-utf16",
        "src": str(src),
        "dst": str(dst),
        "in_bytes": len(raw),
        "out_units": int(units.size),
    })
    return EXIT_OK


def cmd_selfcheck(args: argparse.Namespace, config: AppConfig) -> int:
    print("*** UTF-16/UTF-8 conversion self-check ***\n")
    passed = run_checks()
    log_event({"event_type": "SELFCHECK_DONE", "passed": passed})
    return EXIT_OK if passed else EXIT_SELFCHECK_FAILED


# ------------------------------------------------------------------
# Entry point
# ------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="unicodeconv",
        description="Strict UTF-16 <-> UTF-8 conversion.",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("to-utf8", help="convert a UTF-16 file to UTF-8")
    p.add_argument("src")
    p.add_argument("dst")
    p.add_argument("--bom", action="store_true", help="prefix output with a UTF-8 BOM")
    p.set_defaults(handler=cmd_to_utf8)

    p = sub.add_parser("to-utf16", help="convert a UTF-8 file to UTF-16")
    p.add_argument("src")
    p.add_argument("dst")
    p.add_argument("--bom", action="store_true", help="prefix output with a UTF-16 BOM")
    p.set_defaults(handler=cmd_to_utf16)

    p = sub.add_parser("selfcheck", help="run built-in PASSED/FAILED checks")
    p.set_defaults(handler=cmd_selfcheck)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = AppConfig.load_from_env()
    except ValueError as err:
        parser.error(f"invalid configuration: {err}")

    logger.configure(enabled=config.enable_json_logs, level=config.log_level)
    return args.handler(args, config)


if __name__ == "__main__":
    sys.exit(main())
