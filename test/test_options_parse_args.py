# discord-lite options parsing tests
import sys
from pathlib import Path

# Ensure project root is importable when running tests without installation.
PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

import pytest

from discord_lite.options import parse_args


def test_parse_args_defaults():
    args = parse_args("1.0.0", argv=[])
    assert args.token is None
    assert args.log_level == "INFO"
    assert args.json is False
    assert args.max_retries == 5
    assert args.retry_time_buffer == [1, 2]
    assert args.message_limit == 50
    assert args.workers == 4


def test_parse_args_short_flags():
    args = parse_args("1.0.0", argv=["-t", "abc", "-l", "DEBUG", "-m", "20", "-w", "2", "-b", "3"])
    assert args.token == "abc"
    assert args.log_level == "DEBUG"
    assert args.message_limit == 20
    assert args.workers == 2
    assert args.retry_time_buffer == ["3"]


def test_parse_args_json_flag():
    args = parse_args("1.0.0", argv=["--json"])
    assert args.json is True


def test_parse_args_json_error_output(capsys):
    with pytest.raises(SystemExit) as exc:
        parse_args("1.0.0", argv=["--json", "--nope"])
    assert exc.value.code == 2
    out = capsys.readouterr().out.strip()
    assert '"type": "argument_error"' in out


def test_parse_args_non_json_error_output(capsys):
    with pytest.raises(SystemExit) as exc:
        parse_args("1.0.0", argv=["--nope"])
    assert exc.value.code == 2
    err = capsys.readouterr().err
    assert "unrecognized arguments" in err
