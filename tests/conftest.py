"""Shared pytest fixtures and test helpers for catalyst tests."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

import pytest
from click.testing import CliRunner


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def home_dir(tmp_path: Path) -> Path:
    """Stand-in for the user's home directory (holds the user-wide config)."""
    home = tmp_path / "home"
    home.mkdir()
    return home


@pytest.fixture
def project(tmp_path: Path, home_dir: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Isolated project directory wired into CatalystSettings via env vars.

    CLI invocations inside a test read ``.catalyst.yml`` from *home_dir*
    and the returned directory, never from the real home or CWD.
    """
    root = tmp_path / "project"
    root.mkdir()
    monkeypatch.setenv("CATALYST_HOME_DIR", str(home_dir))
    monkeypatch.setenv("CATALYST_PROJECT_DIR", str(root))
    return root.resolve()


def create_package(
    root: Path,
    relative: str,
    *,
    name: str | None = None,
    products: Sequence[str] = (),
) -> Path:
    """Write a minimal ``Package.swift`` declaring *products* as libraries."""
    directory = root / relative
    directory.mkdir(parents=True, exist_ok=True)
    package_name = name or directory.name
    libraries = "".join(
        f'        .library(name: "{product}", targets: ["{product}"]),\n' for product in products
    )
    manifest = (
        "// swift-tools-version: 5.9\n"
        "import PackageDescription\n\n"
        "let package = Package(\n"
        f'    name: "{package_name}",\n'
        "    products: [\n"
        f"{libraries}"
        "    ]\n"
        ")\n"
    )
    (directory / "Package.swift").write_text(manifest, encoding="utf-8")
    return directory.resolve()


def write_workspace(directory: Path, body: str = "", *, name: str = "App") -> Path:
    """Create ``<name>.xcworkspace`` in *directory* with raw XML *body* inside ``<Workspace>``."""
    container = directory / f"{name}.xcworkspace"
    container.mkdir(parents=True, exist_ok=True)
    (container / "contents.xcworkspacedata").write_text(
        '<?xml version="1.0" encoding="UTF-8"?>\n'
        f'<Workspace version="1.0">\n{body}</Workspace>\n',
        encoding="utf-8",
    )
    return container
