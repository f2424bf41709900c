"""Tests for the elapsed-time command line entry point."""

import logging
import signal
import sys
from unittest.mock import patch

import pytest

from elapsed_time import main


def test_no_command_prints_usage(capsys) -> None:
    with pytest.raises(SystemExit) as exc:
        main([])
    assert exc.value.code == 1
    assert "Usage" in capsys.readouterr().out


def test_reports_elapsed_time(capsys) -> None:
    with pytest.raises(SystemExit) as exc:
        main([sys.executable, "-c", "pass"])
    assert exc.value.code == 0
    assert "Elapsed time: " in capsys.readouterr().err


def test_exit_code_is_passed_through(capsys) -> None:
    with pytest.raises(SystemExit) as exc:
        main([sys.executable, "-c", "import sys; sys.exit(3)"])
    assert exc.value.code == 3
    assert "Elapsed time: " in capsys.readouterr().err


def test_missing_command(capsys) -> None:
    with pytest.raises(SystemExit) as exc:
        main(["elapsed-time-no-such-command"])
    assert exc.value.code == 1
    err = capsys.readouterr().err
    assert "Error: could not run elapsed-time-no-such-command" in err
    assert "Elapsed time" not in err


@pytest.mark.skipif(sys.platform == "win32", reason="POSIX signals")
def test_killed_command_exits_128_plus_signal(capsys) -> None:
    with pytest.raises(SystemExit) as exc:
        main([sys.executable, "-c", "import os, signal; os.kill(os.getpid(), signal.SIGTERM)"])
    assert exc.value.code == 128 + signal.SIGTERM
    assert "Elapsed time: " in capsys.readouterr().err


def test_verbose_flag_enables_debug_logging(capsys) -> None:
    with patch("elapsed_time.logging.basicConfig") as basic_config:
        with pytest.raises(SystemExit) as exc:
            main(["-v", sys.executable, "-c", "pass"])
    assert exc.value.code == 0
    assert basic_config.call_args.kwargs["level"] == logging.DEBUG


def test_default_log_level_is_warning(capsys) -> None:
    with patch("elapsed_time.logging.basicConfig") as basic_config:
        with pytest.raises(SystemExit):
            main([sys.executable, "-c", "pass"])
    assert basic_config.call_args.kwargs["level"] == logging.WARNING


def test_verbose_flag_without_command_prints_usage(capsys) -> None:
    with pytest.raises(SystemExit) as exc:
        main(["-v"])
    assert exc.value.code == 1
    assert "Usage" in capsys.readouterr().out
