"""Pytest configuration and fixtures for ndibuild tests.

Every test runs with the NDI/Cargo environment variables cleared and the
platform default install locations pointed at paths that do not exist, so a
real NDI install on the test machine can never leak into a result.
"""

from pathlib import Path

import pytest

from ndibuild import locators, output
from ndibuild.cli import setup_logging
from ndibuild.config import (
    BINDGEN_VAR,
    BINDINGS_FEATURE_VAR,
    DYNAMIC_LINK_FEATURE_VAR,
    MANIFEST_DIR_VAR,
    OUT_DIR_VAR,
    RUNTIME_DIR_VAR,
    SDK_DIR_VAR,
    TARGET_OS_VAR,
    BuildConfig,
    PlatformTarget,
)

BUILD_VARS = (
    TARGET_OS_VAR,
    OUT_DIR_VAR,
    MANIFEST_DIR_VAR,
    BINDINGS_FEATURE_VAR,
    DYNAMIC_LINK_FEATURE_VAR,
    SDK_DIR_VAR,
    RUNTIME_DIR_VAR,
    BINDGEN_VAR,
)



@pytest.fixture(autouse=True)
def _isolated_environment(monkeypatch, tmp_path):
    """Clear build variables and redirect default install locations."""
    for name in BUILD_VARS:
        monkeypatch.delenv(name, raising=False)

    missing = tmp_path / "not-installed"
    for platform in PlatformTarget:
        monkeypatch.setitem(locators.SDK_DEFAULT_DIRS, platform, str(missing / "sdk" / platform.value))
        monkeypatch.setitem(locators.RUNTIME_DEFAULT_DIRS, platform, str(missing / "runtime" / platform.value))
    yield


@pytest.fixture(autouse=True)
def _reset_output():
    """Restore output and logging state after each test."""
    yield
    output.init_timer()
    output.set_verbose(True)
    setup_logging(False)


@pytest.fixture
def project_dir(tmp_path) -> Path:
    path = tmp_path / "project"
    path.mkdir()
    return path


@pytest.fixture
def out_dir(tmp_path) -> Path:
    path = tmp_path / "target" / "debug" / "build" / "ndi-0123abcd" / "out"
    path.mkdir(parents=True)
    return path


@pytest.fixture
def deps_dir(tmp_path) -> Path:
    """Where OUT_DIR/../../../deps lands for the out_dir fixture."""
    return tmp_path / "target" / "debug" / "deps"


@pytest.fixture
def build_env(project_dir, out_dir) -> dict[str, str]:
    return {MANIFEST_DIR_VAR: str(project_dir), OUT_DIR_VAR: str(out_dir)}


@pytest.fixture
def make_config(build_env):
    """Factory for BuildConfig with the test project and output dirs."""

    def _make(target_os: str = "linux", **extra_env: str) -> BuildConfig:
        environ = {**build_env, TARGET_OS_VAR: target_os, **extra_env}
        return BuildConfig.from_env(environ)

    return _make


@pytest.fixture
def linux_runtime(tmp_path) -> Path:
    """A runtime directory with a Linux shared object."""
    runtime = tmp_path / "opt" / "sdk" / "lib"
    runtime.mkdir(parents=True)
    (runtime / "libndi.so.6").write_bytes(b"\x7fELF linux ndi runtime")
    return runtime


@pytest.fixture
def macos_runtime(tmp_path) -> Path:
    runtime = tmp_path / "Library" / "NDI SDK for macOS 6" / "lib" / "macOS"
    runtime.mkdir(parents=True)
    (runtime / "libndi.dylib").write_bytes(b"\xcf\xfa\xed\xfe macos ndi runtime")
    return runtime


@pytest.fixture
def windows_runtime(tmp_path) -> Path:
    """A Windows runtime dir laid out next to the SDK's import library."""
    ndi_root = tmp_path / "NDI"
    runtime = ndi_root / "NDI 6 Runtime" / "v6"
    runtime.mkdir(parents=True)
    (runtime / "Processing.NDI.Lib.x64.dll").write_bytes(b"MZ windows ndi runtime")
    lib_dir = ndi_root / "NDI 6 SDK" / "Lib" / "x64"
    lib_dir.mkdir(parents=True)
    (lib_dir / "Processing.NDI.Lib.x64.lib").write_bytes(b"!<arch> import library")
    return runtime
