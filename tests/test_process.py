"""Unit tests for the subprocess runner."""

import subprocess
import sys

import pytest

from gencli.exceptions import CommandNotFoundError, ProcessFailureError
from gencli.process import ProcessRunner


def test_run_returns_stdout(mocker):
    mock_run = mocker.patch("gencli.process.subprocess.run")
    mock_run.return_value = subprocess.CompletedProcess(
        args=["gh", "--version"], returncode=0, stdout="gh version 2.40.1\n"
    )

    output = ProcessRunner().run(("gh", "--version"), timeout=5)

    assert output == "gh version 2.40.1\n"
    args, kwargs = mock_run.call_args
    assert args[0] == ["gh", "--version"]
    assert kwargs["timeout"] == 5
    assert kwargs["shell"] is False
    assert kwargs["stderr"] == subprocess.DEVNULL


def test_run_passes_stdin(mocker):
    mock_run = mocker.patch("gencli.process.subprocess.run")
    mock_run.return_value = subprocess.CompletedProcess(args=[], returncode=0, stdout="")

    ProcessRunner().run(["gh", "copilot"], timeout=30, input_text="exit\n")

    assert mock_run.call_args.kwargs["input"] == "exit\n"


def test_missing_executable(mocker):
    mocker.patch("gencli.process.subprocess.run", side_effect=FileNotFoundError())

    with pytest.raises(CommandNotFoundError) as exc_info:
        ProcessRunner().run(["gemini", "--version"], timeout=5)

    assert exc_info.value.returncode == 127
    assert "command not found" in str(exc_info.value)


def test_non_zero_exit(mocker):
    mock_run = mocker.patch("gencli.process.subprocess.run")
    mock_run.return_value = subprocess.CompletedProcess(args=[], returncode=2, stdout="")

    with pytest.raises(ProcessFailureError) as exc_info:
        ProcessRunner().run(["claude", "-p", "hi"], timeout=10)

    assert exc_info.value.returncode == 2
    assert "exit code 2" in str(exc_info.value)


def test_timeout(mocker):
    mocker.patch(
        "gencli.process.subprocess.run",
        side_effect=subprocess.TimeoutExpired(cmd="gemini", timeout=30),
    )

    with pytest.raises(ProcessFailureError) as exc_info:
        ProcessRunner().run(["gemini", "-p", "hi"], timeout=30)

    assert exc_info.value.returncode is None
    assert "timed out" in str(exc_info.value)


def test_undecodable_output_is_replaced():
    script = "import sys; sys.stdout.buffer.write(b'ls \\xff\\xfe')"

    output = ProcessRunner().run([sys.executable, "-c", script], timeout=30)

    assert output.startswith("ls ")
    assert "\ufffd" in output


def test_output_decoded_as_utf8(mocker):
    mock_run = mocker.patch("gencli.process.subprocess.run")
    mock_run.return_value = subprocess.CompletedProcess(args=[], returncode=0, stdout="")

    ProcessRunner().run(["copilot", "-p", "hi"], timeout=10)

    assert mock_run.call_args.kwargs["encoding"] == "utf-8"
    assert mock_run.call_args.kwargs["errors"] == "replace"
