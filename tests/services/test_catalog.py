"""Tests for PackageCatalog."""

from __future__ import annotations

from pathlib import Path

import pytest
from conftest import create_package, write_workspace

from catalyst.services.catalog import PackageCatalog


@pytest.fixture
def root(tmp_path: Path) -> Path:
    root = tmp_path.resolve()
    create_package(root, "Modules/Core/Networking", products=["Networking", "NetworkingInterface"])
    create_package(root, "Modules/Features/Profile", products=["Profile"])
    create_package(root, ".build/checkouts/Vendored", products=["Vendored"])
    return root


class TestListLocal:
    def test_relative_paths_and_products(self, root: Path) -> None:
        result = PackageCatalog(root).list_local()
        assert result.ok
        items = {item["name"]: item for item in result.data["items"]}
        assert set(items) == {"Networking", "Profile"}
        assert items["Networking"]["path"] == "Modules/Core/Networking"
        assert items["Networking"]["products"] == ["Networking", "NetworkingInterface"]
        assert "in_workspace" not in items["Profile"]
        assert result.data["workspace"] is None
        assert result.data["count"] == 2

    def test_full_paths(self, root: Path) -> None:
        result = PackageCatalog(root).list_local(full_paths=True)
        paths = sorted(item["path"] for item in result.data["items"])
        assert paths == [
            str(root / "Modules/Core/Networking"),
            str(root / "Modules/Features/Profile"),
        ]

    def test_workspace_membership(self, root: Path) -> None:
        container = write_workspace(
            root, '   <FileRef location="group:Modules/Features/Profile"></FileRef>\n'
        )
        result = PackageCatalog(root).list_local(container)
        membership = {item["name"]: item["in_workspace"] for item in result.data["items"]}
        assert membership == {"Networking": False, "Profile": True}
        assert result.data["workspace"] == str(container)

    def test_corrupt_workspace_fails(self, root: Path) -> None:
        container = write_workspace(root, "   <FileRef></FileRef>\n")
        result = PackageCatalog(root).list_local(container)
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "WORKSPACE_CORRUPT"

    def test_empty_directory(self, tmp_path: Path) -> None:
        result = PackageCatalog(tmp_path / "empty").list_local()
        assert result.ok
        assert result.data["items"] == []
