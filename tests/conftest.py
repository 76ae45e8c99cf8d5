"""Shared test fixtures."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

from fxbuild.config import DEFAULT_RUNTIME_FOLDER
from fxbuild.resolver import ArtifactResolver


@pytest.fixture
def module_dir(tmp_path: Path) -> Path:
    """Directory of the FaceFXLib module, without a bundled runtime."""
    path = tmp_path / "FaceFXLib"
    path.mkdir()
    return path


@pytest.fixture
def runtime_root(module_dir: Path) -> Path:
    root = module_dir / DEFAULT_RUNTIME_FOLDER
    root.mkdir(parents=True)
    return root


@pytest.fixture
def make_lib_dir(runtime_root: Path) -> Callable[..., Path]:
    """Create ``<runtime>/bin/<parts...>`` holding an optional library file."""

    def _make(*parts: str, library: str | None = None) -> Path:
        path = runtime_root.joinpath("bin", *parts)
        path.mkdir(parents=True, exist_ok=True)
        if library is not None:
            (path / library).write_bytes(b"!<arch>\n")
        return path

    return _make


@pytest.fixture
def resolver(module_dir: Path, runtime_root: Path) -> ArtifactResolver:
    return ArtifactResolver(module_dir=module_dir)
