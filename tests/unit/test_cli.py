# pylint: disable=missing-module-docstring,missing-function-docstring

import json
from pathlib import Path

import pytest

from cli.main import EXIT_CONVERSION_FAILED, EXIT_OK, main
from cli.selfcheck import check, run_checks
from observability import logger

TEXT = "héllo 学 \U0001F60E"


@pytest.fixture
def events(monkeypatch: pytest.MonkeyPatch) -> list[str]:
    lines: list[str] = []
    monkeypatch.setattr(logger, "_print", lines.append)
    # main() reconfigures the logger; monkeypatch restores these afterwards
    monkeypatch.setattr(logger, "_enabled", True)
    monkeypatch.setattr(logger, "_threshold", 20)
    monkeypatch.setenv("ENABLE_JSON_LOGS", "1")
    monkeypatch.setenv("LOG_LEVEL", "INFO")
    monkeypatch.delenv("UTF16_BYTE_ORDER", raising=False)

    return lines


def of_type(lines: list[str], event_type: str) -> list[dict]:
    decoded = [json.loads(line) for line in lines]
    return [e for e in decoded if e["event_type"] == event_type]


# ---------------------------------------------------------------------
# to-utf8
# ---------------------------------------------------------------------

def test_to_utf8_with_bom(tmp_path: Path, events):
    src, dst = tmp_path / "in.txt", tmp_path / "out.txt"
    src.write_bytes(b"\xff\xfe" + TEXT.encode("utf-16-le"))

    assert main(["to-utf8", str(src), str(dst)]) == EXIT_OK

    assert dst.read_bytes() == TEXT.encode("utf-8")
    ok = of_type(events, "CONVERSION_OK")
    assert ok[0]["out_bytes"] == len(TEXT.encode("utf-8"))


def test_to_utf8_big_endian_from_config(tmp_path: Path, events, monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("UTF16_BYTE_ORDER", "big")
    src, dst = tmp_path / "in.txt", tmp_path / "out.txt"
    src.write_bytes(TEXT.encode("utf-16-be"))

    assert main(["to-utf8", str(src), str(dst)]) == EXIT_OK
    assert dst.read_bytes() == TEXT.encode("utf-8")


def test_to_utf8_lone_surrogate_fails(tmp_path: Path, events, capsys):
    src, dst = tmp_path / "in.txt", tmp_path / "out.txt"
    src.write_bytes(b"A\x00\x00\xd8")

    assert main(["to-utf8", str(src), str(dst)]) == EXIT_CONVERSION_FAILED

    assert not dst.exists()
    failed = of_type(events, "CONVERSION_FAILED")
    assert failed[0]["cause"] == "INVALID_SEQUENCE"
    assert failed[0]["offset"] == 1
    assert "INVALID_SEQUENCE" in capsys.readouterr().err


def test_to_utf8_odd_byte_count_fails(tmp_path: Path, events):
    src, dst = tmp_path / "in.txt", tmp_path / "out.txt"
    src.write_bytes(b"A\x00B")

    assert main(["to-utf8", str(src), str(dst)]) == EXIT_CONVERSION_FAILED
    assert not dst.exists()


# ---------------------------------------------------------------------
# to-utf16
# ---------------------------------------------------------------------

def test_to_utf16_with_bom(tmp_path: Path, events):
    src, dst = tmp_path / "in.txt", tmp_path / "out.txt"
    src.write_bytes(TEXT.encode("utf-8"))

    assert main(["to-utf16", "--bom", str(src), str(dst)]) == EXIT_OK
    assert dst.read_bytes() == b"\xff\xfe" + TEXT.encode("utf-16-le")


def test_to_utf16_strips_utf8_bom(tmp_path: Path, events):
    src, dst = tmp_path / "in.txt", tmp_path / "out.txt"
    src.write_bytes(b"\xef\xbb\xbfabc")

    assert main(["to-utf16", str(src), str(dst)]) == EXIT_OK
    assert dst.read_bytes() == "abc".encode("utf-16-le")


def test_to_utf16_truncated_input_fails(tmp_path: Path, events):
    src, dst = tmp_path / "in.txt", tmp_path / "out.txt"
    src.write_bytes(b"abc\xe5\xad")

    assert main(["to-utf16", str(src), str(dst)]) == EXIT_CONVERSION_FAILED
    failed = of_type(events, "CONVERSION_FAILED")
    assert failed[0]["offset"] == 3


# ---------------------------------------------------------------------
# selfcheck
# ---------------------------------------------------------------------

def test_selfcheck_command_passes(events, capsys):
    assert main(["selfcheck"]) == EXIT_OK

    out = capsys.readouterr().out
    assert "[UTF-8 encoding]: PASSED" in out
    assert "FAILED" not in out


def test_run_checks_reports_every_line():
    lines: list[str] = []

    assert run_checks(out=lines.append) is True
    assert len(lines) == 7
    assert all(line.endswith(": PASSED") for line in lines)


def test_check_formats_failure():
    lines: list[str] = []

    assert check(False, "Something", out=lines.append) is False
    assert lines == ["[Something]: FAILED"]


# ---------------------------------------------------------------------
# I/O and configuration failures
# ---------------------------------------------------------------------

@pytest.mark.parametrize("command", ["to-utf8", "to-utf16"])
def test_missing_source_reports_failure(tmp_path: Path, events, capsys, command: str):
    src, dst = tmp_path / "missing.txt", tmp_path / "out.txt"

    assert main([command, str(src), str(dst)]) == EXIT_CONVERSION_FAILED

    assert not dst.exists()
    failed = of_type(events, "CONVERSION_FAILED")
    assert failed[0]["command"] == command
    assert "No such file" in failed[0]["reason"]
    assert "error:" in capsys.readouterr().err


@pytest.mark.parametrize(
    "command, payload",
    [
        ("to-utf8", "abc".encode("utf-16-le")),
        ("to-utf16", b"abc"),
    ],
)
def test_unwritable_destination_reports_failure(
    tmp_path: Path, events, command: str, payload: bytes
):
    src = tmp_path / "in.txt"
    src.write_bytes(payload)
    dst = tmp_path / "no_such_dir" / "out.txt"

    assert main([command, str(src), str(dst)]) == EXIT_CONVERSION_FAILED

    assert of_type(events, "CONVERSION_FAILED")
    assert not of_type(events, "CONVERSION_OK")


def test_invalid_byte_order_config_exits_cleanly(
    tmp_path: Path, events, capsys, monkeypatch: pytest.MonkeyPatch
):
    monkeypatch.setenv("UTF16_BYTE_ORDER", "middle")
    src = tmp_path / "in.txt"
    src.write_bytes(b"abc")

    with pytest.raises(SystemExit) as exc_info:
        main(["to-utf16", str(src), str(tmp_path / "out.txt")])

    assert exc_info.value.code == 2
    assert "invalid configuration" in capsys.readouterr().err


def test_successful_conversion_emits_timer_metric(tmp_path: Path, events):
    src, dst = tmp_path / "in.txt", tmp_path / "out.txt"
    src.write_bytes(b"abc")

    assert main(["to-utf16", str(src), str(dst)]) == EXIT_OK

    timers = of_type(events, "METRIC_TIMER")
    assert len(timers) == 1
    assert timers[0]["metric"] == "utf8_to_utf16"
    assert timers[0]["details"]["out_units"] == 3
