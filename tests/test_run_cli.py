from pathlib import Path

import pytest

import run


def test_parser_defaults(tmp_path: Path):
    program = tmp_path / "pong.ch8"
    args = run.build_arg_parser().parse_args(["--program", str(program)])

    assert args.program == program
    assert args.scale == 10
    assert args.speed == 10
    assert args.seed is None
    assert not args.shift_quirk


def test_missing_program_is_rejected(tmp_path: Path):
    with pytest.raises(SystemExit):
        run.main(["--program", str(tmp_path / "missing.ch8")])


def test_non_positive_speed_is_rejected(tmp_path: Path):
    program = tmp_path / "pong.ch8"
    program.write_bytes(b"\x12\x00")

    with pytest.raises(SystemExit):
        run.main(["--program", str(program), "--speed", "0"])
