"""Tests for atomic writes and package/workspace discovery."""

from __future__ import annotations

import os
import stat
from pathlib import Path

import pytest
from conftest import create_package, write_workspace

from catalyst.infrastructure.filesystem import (
    atomic_write_text,
    find_package_dirs,
    find_workspace,
)


class TestAtomicWrite:
    def test_creates_parents(self, tmp_path: Path) -> None:
        target = tmp_path / "a" / "b" / "file.yml"
        atomic_write_text(target, "key: value\n")
        assert target.read_text(encoding="utf-8") == "key: value\n"

    def test_replaces_existing(self, tmp_path: Path) -> None:
        target = tmp_path / "file.txt"
        target.write_text("old", encoding="utf-8")
        atomic_write_text(target, "new")
        assert target.read_text(encoding="utf-8") == "new"

    @pytest.mark.parametrize("mode", [0o644, 0o664, 0o755])
    def test_replace_keeps_permission_bits(self, tmp_path: Path, mode: int) -> None:
        target = tmp_path / "contents.xcworkspacedata"
        target.write_text("old", encoding="utf-8")
        target.chmod(mode)
        atomic_write_text(target, "new")
        assert stat.S_IMODE(target.stat().st_mode) == mode
        assert target.read_text(encoding="utf-8") == "new"

    def test_failed_replace_keeps_original(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        target = tmp_path / "file.txt"
        target.write_text("old", encoding="utf-8")

        def broken_replace(src: object, dst: object) -> None:
            raise OSError("disk full")

        monkeypatch.setattr(os, "replace", broken_replace)
        with pytest.raises(OSError, match="disk full"):
            atomic_write_text(target, "new")
        monkeypatch.undo()

        assert target.read_text(encoding="utf-8") == "old"
        assert [p.name for p in tmp_path.iterdir()] == ["file.txt"]


class TestFindWorkspace:
    def test_first_by_name(self, tmp_path: Path) -> None:
        write_workspace(tmp_path, name="Zed")
        first = write_workspace(tmp_path, name="Alpha")
        assert find_workspace(tmp_path) == first

    def test_ignores_plain_files(self, tmp_path: Path) -> None:
        (tmp_path / "Fake.xcworkspace").write_text("", encoding="utf-8")
        assert find_workspace(tmp_path) is None

    def test_missing_directory(self, tmp_path: Path) -> None:
        assert find_workspace(tmp_path / "nope") is None


class TestFindPackageDirs:
    def test_includes_root_and_skips_build_output(self, tmp_path: Path) -> None:
        root = create_package(tmp_path, ".")
        core = create_package(tmp_path, "Modules/Core")
        feature = create_package(tmp_path, "Modules/Feature")
        create_package(tmp_path, ".build/checkouts/Dep")
        create_package(tmp_path, "DerivedData/Thing")
        create_package(tmp_path, "App.xcworkspace/Inner")
        assert find_package_dirs(tmp_path.resolve()) == [root, core, feature]

    def test_not_a_directory(self, tmp_path: Path) -> None:
        assert find_package_dirs(tmp_path / "missing") == []
