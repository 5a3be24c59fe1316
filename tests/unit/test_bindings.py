"""Tests for the bindgen trigger."""

import subprocess
import sys
from unittest.mock import patch

import pytest

from ndibuild.bindings import CLANG_ARGS, bindings_command, generate_bindings, resolve_header
from ndibuild.errors import BindingsError, SdkNotFoundError


@pytest.fixture
def sdk_root(tmp_path):
    root = tmp_path / "NDI SDK for Linux 6"
    (root / "include").mkdir(parents=True)
    (root / "include" / "Processing.NDI.Lib.h").write_text("#pragma once\n")
    return root


def _completed(returncode=0, stdout="", stderr=""):
    return subprocess.CompletedProcess(args=["bindgen"], returncode=returncode, stdout=stdout, stderr=stderr)


def test_bindings_command(tmp_path):
    cmd = bindings_command(tmp_path / "a.h", tmp_path / "sdk.rs")
    assert cmd == ["bindgen", str(tmp_path / "a.h"), "-o", str(tmp_path / "sdk.rs"), "--", *CLANG_ARGS]
    assert "-fdeclspec" in cmd


def test_resolve_header(make_config, sdk_root):
    config = make_config("linux", NDI_SDK_DIR=str(sdk_root))
    assert resolve_header(config) == sdk_root / "include" / "Processing.NDI.Lib.h"


def test_generate_bindings_runs_bindgen(make_config, sdk_root, project_dir):
    config = make_config("linux", NDI_SDK_DIR=str(sdk_root))

    with patch("ndibuild.bindings.safe_run", return_value=_completed()) as mock_run:
        output = generate_bindings(config)

    assert output == project_dir / "src" / "sdk.rs"
    assert output.parent.is_dir()
    cmd = mock_run.call_args[0][0]
    assert cmd[0] == "bindgen"
    assert cmd[1] == str(sdk_root / "include" / "Processing.NDI.Lib.h")
    assert cmd[2:4] == ["-o", str(output)]


def test_bindgen_override(make_config, sdk_root):
    config = make_config("linux", NDI_SDK_DIR=str(sdk_root), NDI_BINDGEN="/opt/bin/bindgen")

    with patch("ndibuild.bindings.safe_run", return_value=_completed()) as mock_run:
        generate_bindings(config)

    assert mock_run.call_args[0][0][0] == "/opt/bin/bindgen"


def test_missing_sdk_is_fatal(make_config):
    with patch("ndibuild.bindings.safe_run") as mock_run:
        with pytest.raises(SdkNotFoundError, match="NDI_SDK_DIR"):
            generate_bindings(make_config("linux"))
    mock_run.assert_not_called()


def test_missing_header_is_fatal_and_named(make_config, tmp_path):
    bare_sdk = tmp_path / "bare-sdk"
    bare_sdk.mkdir()
    config = make_config("windows", NDI_SDK_DIR=str(bare_sdk))

    with patch("ndibuild.bindings.safe_run") as mock_run:
        with pytest.raises(BindingsError, match="Processing.NDI.Lib.h"):
            generate_bindings(config)
    mock_run.assert_not_called()


def test_bindgen_not_installed(make_config, sdk_root):
    config = make_config("linux", NDI_SDK_DIR=str(sdk_root))

    with patch("ndibuild.bindings.safe_run", side_effect=FileNotFoundError("bindgen")):
        with pytest.raises(BindingsError, match="bindgen not found"):
            generate_bindings(config)


def test_bindgen_failure_reports_output(make_config, sdk_root):
    config = make_config("linux", NDI_SDK_DIR=str(sdk_root))
    failed = _completed(returncode=1, stderr="fatal error: 'stddef.h' file not found")

    with patch("ndibuild.bindings.safe_run", return_value=failed):
        with pytest.raises(BindingsError, match="stddef.h"):
            generate_bindings(config)


def test_bindgen_permission_denied(make_config, sdk_root):
    config = make_config("linux", NDI_SDK_DIR=str(sdk_root))

    with patch("ndibuild.bindings.safe_run", side_effect=PermissionError(13, "Permission denied")):
        with pytest.raises(BindingsError, match="cannot run bindgen"):
            generate_bindings(config)


@pytest.mark.skipif(sys.platform == "win32", reason="exec permission bits are POSIX only")
def test_non_executable_bindgen_is_reported(make_config, sdk_root, tmp_path):
    tool = tmp_path / "bindgen"
    tool.write_text("#!/bin/sh\nexit 0\n")
    tool.chmod(0o644)
    config = make_config("linux", NDI_SDK_DIR=str(sdk_root), NDI_BINDGEN=str(tool))

    with pytest.raises(BindingsError, match="cannot run") as exc_info:
        generate_bindings(config)
    assert str(tool) in str(exc_info.value)


def test_unwritable_bindings_directory(make_config, sdk_root, project_dir):
    (project_dir / "src").write_text("not a directory")
    config = make_config("linux", NDI_SDK_DIR=str(sdk_root))

    with patch("ndibuild.bindings.safe_run") as mock_run:
        with pytest.raises(BindingsError, match="Cannot create bindings directory"):
            generate_bindings(config)
    mock_run.assert_not_called()
