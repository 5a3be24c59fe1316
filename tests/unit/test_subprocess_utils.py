"""Tests for subprocess_utils module."""

import subprocess
import sys
from unittest.mock import patch

import pytest

from ndibuild.subprocess_utils import get_subprocess_creation_flags, safe_run

windows_only = pytest.mark.skipif(sys.platform != "win32", reason="CREATE_NO_WINDOW only exists on Windows")


@windows_only
def test_get_subprocess_creation_flags_windows():
    with patch("sys.platform", "win32"):
        assert get_subprocess_creation_flags() == subprocess.CREATE_NO_WINDOW


def test_get_subprocess_creation_flags_linux():
    with patch("sys.platform", "linux"):
        assert get_subprocess_creation_flags() == 0


@windows_only
@patch("subprocess.run")
def test_safe_run_applies_flags_on_windows(mock_run):
    with patch("sys.platform", "win32"):
        safe_run(["bindgen", "--version"], capture_output=True)

        call_kwargs = mock_run.call_args[1]
        assert call_kwargs["creationflags"] == subprocess.CREATE_NO_WINDOW


@patch("subprocess.run")
def test_safe_run_no_flags_on_linux(mock_run):
    with patch("sys.platform", "linux"):
        safe_run(["bindgen", "--version"], capture_output=True)

        call_kwargs = mock_run.call_args[1]
        assert "creationflags" not in call_kwargs
        assert call_kwargs["capture_output"] is True


@windows_only
@patch("subprocess.run")
def test_safe_run_merges_custom_creationflags(mock_run):
    with patch("sys.platform", "win32"):
        custom_flag = 0x00000200
        safe_run(["bindgen"], creationflags=custom_flag)

        assert mock_run.call_args[1]["creationflags"] == custom_flag | subprocess.CREATE_NO_WINDOW


@patch("subprocess.run")
def test_safe_run_redirects_stdin(mock_run):
    with patch("sys.platform", "linux"):
        safe_run(["bindgen"])
        assert mock_run.call_args[1]["stdin"] == subprocess.DEVNULL


@patch("subprocess.run")
def test_safe_run_keeps_explicit_stdin(mock_run):
    with patch("sys.platform", "linux"):
        safe_run(["bindgen"], stdin=subprocess.PIPE)
        assert mock_run.call_args[1]["stdin"] == subprocess.PIPE
